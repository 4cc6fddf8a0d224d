import json
import os
import tempfile

# Must be in place before config is imported by anything under test.
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="storefront-logs-"))
os.environ["TRACKING_API_URL"] = "https://track.example.test"
os.environ["STORE_API_URL"] = "https://store.example.test"
os.environ["DISPLAY_TZ"] = "UTC"

from unittest.mock import MagicMock

import pytest
import requests

import api


def make_response(status=200, body=None, json_error=False):
    resp = MagicMock()
    resp.status_code = status
    resp.ok = 200 <= status < 300
    resp.text = json.dumps(body) if body is not None else ""
    if json_error:
        resp.json.side_effect = ValueError("Expecting value: line 1 column 1 (char 0)")
    else:
        resp.json.return_value = body
    if status >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status} Error", response=resp)
    return resp


SHIPPED_BODY = {
    "success": True,
    "data": {
        "order_code": "S6MIU9FCVA",
        "status": "shipped",
        "status_message": "On the way",
        "last_updated": "2024-01-01T00:00:00Z",
    },
}


@pytest.fixture
def session(monkeypatch):
    mock = MagicMock()
    monkeypatch.setattr(api, "SESSION", mock)
    return mock
