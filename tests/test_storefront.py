import pytest
import requests

from storefront import app, format_ts
from models import parse_timestamp

from conftest import SHIPPED_BODY, make_response


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as c:
        yield c


def test_tracking_form_renders_idle(client, session):
    resp = client.get("/tracking")

    assert resp.status_code == 200
    assert b"Track Your Order" in resp.data
    assert b"tracking-banner" not in resp.data
    session.get.assert_not_called()


def test_tracking_post_renders_timeline(client, session):
    session.get.return_value = make_response(200, SHIPPED_BODY)

    resp = client.post("/tracking", data={"order_code": " S6MIU9FCVA "})
    html = resp.get_data(as_text=True)

    assert resp.status_code == 200
    assert "On the way" in html
    assert "Order #S6MIU9FCVA" in html
    assert 'class="timeline-step current" data-step="shipped"' in html
    assert html.count("timeline-step current") == 1
    assert "bg-blue-100 text-blue-800" in html


def test_tracking_post_blank_code_does_not_call_api(client, session):
    resp = client.post("/tracking", data={"order_code": "   "})

    assert resp.status_code == 200
    session.get.assert_not_called()
    assert b"tracking-error" not in resp.data


def test_tracking_post_404_shows_error(client, session):
    session.get.return_value = make_response(404, {"success": False})

    html = client.post("/tracking", data={"order_code": "MISSING"}).get_data(as_text=True)

    assert "Order not found (404)" in html
    assert "tracking-banner" not in html


def test_tracking_post_cancelled(client, session):
    body = {"success": True, "data": dict(SHIPPED_BODY["data"], status="cancelled", status_message="Cancelled")}
    session.get.return_value = make_response(200, body)

    html = client.post("/tracking", data={"order_code": "S6MIU9FCVA"}).get_data(as_text=True)

    assert "This order has been cancelled." in html
    assert "timeline-step current" not in html


def test_tracking_json_success(client, session):
    session.get.return_value = make_response(200, SHIPPED_BODY)

    resp = client.get("/api/orders/S6MIU9FCVA/track")

    assert resp.status_code == 200
    assert resp.json["success"] is True
    assert resp.json["data"]["status_message"] == "On the way"


@pytest.mark.parametrize("upstream, expected", [
    (lambda s: setattr(s.get, "return_value", make_response(404, {"success": False})), 404),
    (lambda s: setattr(s.get, "return_value", make_response(200, {"success": False})), 200),
    (lambda s: setattr(s.get, "side_effect", requests.ConnectionError("down")), 502),
])
def test_tracking_json_failures(client, session, upstream, expected):
    upstream(session)

    resp = client.get("/api/orders/S6MIU9FCVA/track")

    assert resp.status_code == expected
    assert resp.json["success"] is False
    assert resp.json["error"]


def test_about_renders_blocks(client, session):
    session.get.return_value = make_response(200, {"about_us": [
        {"_id": "1", "title": "Our story", "block_type": "Text", "value": "We sell things."},
        {"_id": "2", "title": "Tour", "block_type": "Media", "value": "https://storage.entsuki.com/tour.mp4"},
        {"_id": "3", "title": "Elsewhere", "block_type": "Media", "value": "https://other.example.com/v.mp4"},
    ]})

    html = client.get("/about").get_data(as_text=True)

    assert "We sell things." in html
    assert '<video src="https://storage.entsuki.com/tour.mp4"' in html
    assert '<a href="https://other.example.com/v.mp4"' in html
    assert "No about us content found" not in html


def test_about_placeholder_on_malformed(client, session):
    session.get.return_value = make_response(200, {"unexpected": True})

    html = client.get("/about").get_data(as_text=True)

    assert "No about us content found" in html


def test_format_ts():
    assert format_ts(parse_timestamp("2024-01-01T13:05:00Z")) == "Jan 01, 2024 · 01:05 PM"
    assert format_ts(None) == ""


def test_format_ts_out_of_range_is_blank(monkeypatch):
    import storefront
    from datetime import datetime, timedelta, timezone

    monkeypatch.setattr(storefront, "TZ", timezone(timedelta(hours=9)))

    assert format_ts(datetime(9999, 12, 31, 23, 0, tzinfo=timezone.utc)) == ""


def test_tracking_post_out_of_range_timestamp_renders(client, session):
    body = {"success": True, "data": dict(SHIPPED_BODY["data"], last_updated="9999-12-31T23:00:00-05:00")}
    session.get.return_value = make_response(200, body)

    resp = client.post("/tracking", data={"order_code": "S6MIU9FCVA"})
    html = resp.get_data(as_text=True)

    assert resp.status_code == 200
    assert "On the way" in html
    assert "Last updated" not in html
    assert "tracking-error" not in html


def test_tracking_post_unknown_status(client, session):
    body = {"success": True, "data": dict(SHIPPED_BODY["data"], status="foo", status_message="Somewhere")}
    session.get.return_value = make_response(200, body)

    html = client.post("/tracking", data={"order_code": "S6MIU9FCVA"}).get_data(as_text=True)

    assert "We could not determine where this order is in its journey." in html
    assert "tracking-banner p-6 bg-yellow-100 text-yellow-800" in html
    assert 'data-status="unknown"' in html
    assert "timeline-step current" not in html
    assert html.count('class="timeline-step"') == 4


def test_serve_runs_waitress(monkeypatch):
    import storefront
    from unittest.mock import MagicMock

    fake = MagicMock()
    monkeypatch.setattr(storefront, "waitress_serve", fake)

    storefront.serve()

    fake.assert_called_once_with(storefront.app, host=storefront.HOST, port=storefront.PORT)
