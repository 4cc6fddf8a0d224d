# storefront/services/content.py
from dataclasses import dataclass, field
from typing import Any, List, Optional

import requests

from api import fetch_store_settings
from exceptions import MalformedContent
from models import BlockType, ContentBlock
from logger import get_logger

log = get_logger("content")


@dataclass
class AboutContent:
    blocks: List[ContentBlock] = field(default_factory=list)
    error: Optional[str] = None


def _about_us_list(payload: Any) -> list:
    """
    Settings come back either as {"about_us": [...]} or {"data": {"about_us": [...]}}.
    """
    if isinstance(payload, dict):
        top = payload.get("about_us")
        if isinstance(top, list):
            return top
        nested = payload.get("data")
        if isinstance(nested, dict) and isinstance(nested.get("about_us"), list):
            return nested["about_us"]
    raise MalformedContent("Settings payload has no about_us list", payload=payload)


def normalize_settings(payload: Any) -> List[ContentBlock]:
    blocks: List[ContentBlock] = []
    for raw in _about_us_list(payload):
        if not isinstance(raw, dict):
            log.debug(f"Skipping non-object content block: {raw!r}")
            continue
        try:
            block_type = BlockType(raw.get("block_type"))
        except ValueError:
            log.debug(f"Skipping block {raw.get('_id')} with block_type {raw.get('block_type')!r}")
            continue
        blocks.append(ContentBlock(
            id=str(raw.get("_id") or ""),
            title=str(raw.get("title") or ""),
            block_type=block_type,
            value=str(raw.get("value") or ""),
        ))
    return blocks


def fetch_about_us() -> AboutContent:
    try:
        payload = fetch_store_settings()
    except requests.HTTPError as e:
        status = e.response.status_code if e.response is not None else "?"
        log.warning(f"Settings request returned HTTP {status}")
        return AboutContent(error=f"HTTP error! status: {status}")
    except (requests.RequestException, ValueError) as e:
        log.warning(f"Settings request failed: {e}")
        return AboutContent(error="Unable to load content")

    try:
        blocks = normalize_settings(payload)
    except MalformedContent as e:
        log.warning(f"{e}; rendering empty About page")
        return AboutContent()

    log.info(f"Loaded {len(blocks)} about-us blocks")
    return AboutContent(blocks=blocks)
