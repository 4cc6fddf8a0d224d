#models.py
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional, List

@dataclass
class ApiDecodeResult:
    status_code: Optional[int]
    success: bool
    data: Any = None
    raw_error: str = ""
    messages: List[str] = field(default_factory=list)


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    UNKNOWN = "unknown"     # anything the server sends outside the set above

    @classmethod
    def parse(cls, raw) -> "OrderStatus":
        if not isinstance(raw, str):
            return cls.UNKNOWN
        value = raw.strip().lower()
        for member in cls:
            if member is not cls.UNKNOWN and member.value == value:
                return member
        return cls.UNKNOWN


class TrackingState(Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    FAILURE = "failure"


class BlockType(Enum):
    TEXT = "Text"
    MEDIA = "Media"


def parse_timestamp(value) -> Optional[datetime]:
    """ISO-8601 string (with or without trailing Z) -> aware UTC datetime, else None."""
    if value is None:
        return None
    if isinstance(value, datetime):
        dt = value
    else:
        s = str(value).strip()
        if not s:
            return None
        try:
            dt = datetime.fromisoformat(s.replace("Z", "+00:00"))
        except ValueError:
            return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    try:
        return dt.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        # parses, but lands outside year 1..9999 once shifted to UTC
        return None


@dataclass(frozen=True)
class TrackedOrder:
    order_code: str
    status: OrderStatus
    raw_status: str
    status_message: str
    last_updated: Optional[datetime] = None

    @classmethod
    def from_payload(cls, data: dict) -> "TrackedOrder":
        raw_status = data.get("status")
        return cls(
            order_code=str(data.get("order_code") or ""),
            status=OrderStatus.parse(raw_status),
            raw_status="" if raw_status is None else str(raw_status),
            status_message=str(data.get("status_message") or ""),
            last_updated=parse_timestamp(data.get("last_updated")),
        )


@dataclass(frozen=True)
class TimelineStep:
    position: int           # 1-based, fixed order
    status: OrderStatus
    label: str
    is_current: bool


@dataclass(frozen=True)
class StatusPresentation:
    icon: str
    icon_color: str
    color_class: str


@dataclass(frozen=True)
class ContentBlock:
    id: str
    title: str
    block_type: BlockType
    value: str
