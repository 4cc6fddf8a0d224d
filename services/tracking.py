# storefront/services/tracking.py
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional, Tuple

from api import fetch_order_tracking, GENERIC_FAILURE
from exceptions import TrackingError
from models import OrderStatus, StatusPresentation, TimelineStep, TrackedOrder, TrackingState
from services.timeline import derive_timeline, presentation_for
from logger import get_logger

log = get_logger("tracking")


@dataclass(frozen=True)
class TrackingView:
    order_code: str
    status: OrderStatus
    status_message: str
    last_updated: Optional[datetime]
    presentation: StatusPresentation
    timeline: Tuple[TimelineStep, ...]
    is_cancelled: bool
    is_unknown: bool

    def as_dict(self) -> dict:
        return {
            "order_code": self.order_code,
            "status": self.status.value,
            "status_message": self.status_message,
            "last_updated": self.last_updated.isoformat() if self.last_updated else None,
            "presentation": {
                "icon": self.presentation.icon,
                "icon_color": self.presentation.icon_color,
                "color_class": self.presentation.color_class,
            },
            "timeline": [
                {"position": s.position, "status": s.status.value, "label": s.label, "current": s.is_current}
                for s in self.timeline
            ],
            "is_cancelled": self.is_cancelled,
            "is_unknown": self.is_unknown,
        }


def build_view(order: TrackedOrder) -> TrackingView:
    return TrackingView(
        order_code=order.order_code,
        status=order.status,
        status_message=order.status_message,
        last_updated=order.last_updated,
        presentation=presentation_for(order.status),
        timeline=derive_timeline(order),
        is_cancelled=order.status is OrderStatus.CANCELLED,
        is_unknown=order.status is OrderStatus.UNKNOWN,
    )


class OrderTrackingController:
    """
    Idle -> Loading -> Success | Failure, and back to Loading on resubmission.

    Each submission gets a sequence number; a response is applied only if no
    newer submission has been issued since, so an old lookup finishing late
    never overwrites a newer one.
    """

    def __init__(self, fetcher: Callable[[str], TrackedOrder] = fetch_order_tracking):
        self._fetch = fetcher
        self._lock = threading.Lock()
        self._seq = 0

        self.state = TrackingState.IDLE
        self.code = ""
        self.order: Optional[TrackedOrder] = None
        self.error: Optional[str] = None
        self.failure: Optional[TrackingError] = None

    @property
    def loading(self) -> bool:
        return self.state is TrackingState.LOADING

    def submit_query(self, code) -> bool:
        """Look up one order code. Returns False (and does nothing) for a blank code."""
        code = (code or "").strip()
        if not code:
            return False

        with self._lock:
            self._seq += 1
            seq = self._seq
            self.code = code
            self.state = TrackingState.LOADING
            self.error = None
            self.failure = None

        try:
            order = self._fetch(code)
        except TrackingError as e:
            self._complete(seq, code, None, e)
        except Exception as e:
            log.exception(f"Unexpected error tracking {code}: {e}")
            self._complete(seq, code, None, TrackingError(GENERIC_FAILURE))
        else:
            self._complete(seq, code, order, None)
        return True

    def _complete(self, seq: int, code: str, order: Optional[TrackedOrder], failure: Optional[TrackingError]) -> None:
        with self._lock:
            if seq != self._seq:
                log.info(f"Discarding stale response for {code} (request {seq}, latest {self._seq})")
                return

            if failure is None:
                self.order = order
                self.error = None
                self.failure = None
                self.state = TrackingState.SUCCESS
            else:
                self.order = None
                self.error = str(failure)
                self.failure = failure
                self.state = TrackingState.FAILURE
                log.warning(f"Tracking {code} failed: {failure}")

    def display_model(self) -> Optional[TrackingView]:
        order = self.order
        return build_view(order) if order is not None else None
