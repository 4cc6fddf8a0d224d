#api.py
from typing import Any, List
from urllib.parse import quote

import requests

from config import STORE_API_URL, TRACKING_API_URL, HTTP_TIMEOUT, SESSION
from exceptions import TransportError, NotFoundOrHttpError, BusinessFailure
from models import ApiDecodeResult, TrackedOrder
from logger import get_logger

log = get_logger("api")

GENERIC_FAILURE = "Failed to fetch order details"
TRANSPORT_FAILURE = "Unable to reach the tracking service"

def tracking_url(order_code: str) -> str:
    return f"{TRACKING_API_URL}/api/orders/{quote(order_code, safe='')}/track"

def settings_url() -> str:
    return f"{STORE_API_URL}/api/store/settings"

def send_get_request(url: str, logger) -> requests.Response:
    logger.debug(f"GET {url}")
    resp = SESSION.get(url, timeout=HTTP_TIMEOUT)
    logger.debug(f"API Response: {resp.status_code} {resp.text}")
    return resp

def decode_envelope(resp: requests.Response) -> ApiDecodeResult:
    """
    Decode a {success, data} envelope.
    Transport success says nothing about business success, so both are kept.
    """
    success = False
    data = None
    raw_err = ""
    messages: List[str] = []

    try:
        body = resp.json()
        if isinstance(body, dict):
            success = bool(body.get("success"))
            data = body.get("data")
            raw_err = str(body.get("message") or body.get("error") or "")
        else:
            raw_err = f"Unexpected envelope type: {type(body).__name__}"
    except ValueError as e:
        raw_err = f"Exception parsing API response JSON: {e}"

    if raw_err:
        messages.append(raw_err)

    return ApiDecodeResult(resp.status_code, success, data, raw_err, messages)

def fetch_order_tracking(order_code: str) -> TrackedOrder:
    """
    One GET against the tracking endpoint, no retries.
    Raises TransportError, NotFoundOrHttpError or BusinessFailure.
    """
    url = tracking_url(order_code)

    try:
        resp = send_get_request(url, log)
    except requests.RequestException as e:
        log.warning(f"Tracking request failed for {order_code}: {e}")
        raise TransportError(TRANSPORT_FAILURE, api_url=url) from e

    if not resp.ok:
        log.warning(f"Tracking lookup for {order_code} returned HTTP {resp.status_code}")
        raise NotFoundOrHttpError(
            f"Order not found ({resp.status_code})",
            api_url=url,
            api_status=resp.status_code,
            raw_response_text=resp.text,
        )

    decoded = decode_envelope(resp)
    if not decoded.success or not isinstance(decoded.data, dict):
        log.warning(f"Tracking lookup for {order_code} was not successful: {decoded.messages}")
        raise BusinessFailure(
            GENERIC_FAILURE,
            api_url=url,
            api_status=resp.status_code,
            raw_response_text=resp.text,
        )

    order = TrackedOrder.from_payload(decoded.data)
    log.info(f"Tracked order {order.order_code or order_code}: {order.raw_status}")
    return order

def fetch_store_settings() -> Any:
    """Raw settings JSON. Raises requests.RequestException on transport or HTTP errors."""
    resp = send_get_request(settings_url(), log)
    resp.raise_for_status()
    return resp.json()
