# storefront/services/timeline.py
from typing import Optional, Tuple, Union

from models import OrderStatus, TimelineStep, StatusPresentation, TrackedOrder

# Fixed progression; the server only tells us where the order is.
TIMELINE_STEPS = (
    OrderStatus.PENDING,
    OrderStatus.PROCESSING,
    OrderStatus.SHIPPED,
    OrderStatus.DELIVERED,
)

STATUS_PRESENTATION = {
    OrderStatus.PENDING:    StatusPresentation("clock", "text-yellow-500", "bg-yellow-100 text-yellow-800"),
    OrderStatus.PROCESSING: StatusPresentation("clock", "text-blue-500", "bg-blue-100 text-blue-800"),
    OrderStatus.SHIPPED:    StatusPresentation("truck", "text-blue-500", "bg-blue-100 text-blue-800"),
    OrderStatus.DELIVERED:  StatusPresentation("check-circle", "text-green-500", "bg-green-100 text-green-800"),
    OrderStatus.CANCELLED:  StatusPresentation("home", "text-red-500", "bg-red-100 text-red-800"),
}


def presentation_for(status: Union[OrderStatus, str, None]) -> StatusPresentation:
    """Icon/colour pair for a status; anything unrecognised looks like pending."""
    if not isinstance(status, OrderStatus):
        status = OrderStatus.parse(status)
    return STATUS_PRESENTATION.get(status, STATUS_PRESENTATION[OrderStatus.PENDING])


def derive_timeline(order: Optional[TrackedOrder]) -> Tuple[TimelineStep, ...]:
    """
    Four fixed steps, each flagged current when it equals the order's status.
    Cancelled, unknown and missing orders mark nothing current.
    """
    current = order.status if order is not None else None
    return tuple(
        TimelineStep(
            position=index,
            status=step,
            label=step.value.capitalize(),
            is_current=(step is current),
        )
        for index, step in enumerate(TIMELINE_STEPS, start=1)
    )


def current_step(order: Optional[TrackedOrder]) -> Optional[TimelineStep]:
    for step in derive_timeline(order):
        if step.is_current:
            return step
    return None
