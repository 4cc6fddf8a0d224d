# storefront/services/media.py
from typing import Iterable, List, Optional, Tuple
from urllib.parse import urlsplit

from config import MEDIA_HOSTS


def parse_hosts(entries: Iterable[str]) -> List[Tuple[str, str]]:
    """'https://host' entries -> (scheme, hostname) pairs; malformed entries are ignored."""
    out = []
    for entry in entries:
        parts = urlsplit(entry.strip())
        if parts.scheme and parts.hostname:
            out.append((parts.scheme.lower(), parts.hostname.lower()))
    return out


ALLOWED_MEDIA_HOSTS = parse_hosts(MEDIA_HOSTS)


def is_allowed_media_url(url: Optional[str], allowed: Optional[List[Tuple[str, str]]] = None) -> bool:
    if not url:
        return False
    try:
        parts = urlsplit(url.strip())
        host = parts.hostname
    except ValueError:
        return False
    if not parts.scheme or not host:
        return False
    pairs = ALLOWED_MEDIA_HOSTS if allowed is None else allowed
    return (parts.scheme.lower(), host.lower()) in pairs
