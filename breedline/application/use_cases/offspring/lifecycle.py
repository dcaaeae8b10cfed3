"""Status transitions of an offspring tracking record and their registry mirror."""

from __future__ import annotations

import logging
from datetime import datetime

from breedline.application.errors import AlreadyTerminal, InvalidTransition
from breedline.application.interfaces.unit_of_work import UnitOfWork
from breedline.domain.models.offspring_tracking import (
    REGISTRY_STATUS,
    OffspringTracking,
    TrackingStatus,
    can_transition,
    is_terminal,
)

logger = logging.getLogger(__name__)


def ensure_transition(tracking: OffspringTracking, target: str) -> None:
    if target == TrackingStatus.DIED.value and is_terminal(tracking.status):
        raise AlreadyTerminal(
            f"Offspring is already marked as {tracking.status}",
            details={"status": tracking.status},
        )
    if not can_transition(tracking.status, target):
        raise InvalidTransition(
            f"Cannot move offspring from '{tracking.status}' to '{target}'",
            details={"status": tracking.status, "target": target},
        )


async def mirror_to_registry(
    uow: UnitOfWork, tracking: OffspringTracking, at: datetime
) -> None:
    status = REGISTRY_STATUS.get(tracking.status)
    if status is None:
        return
    animal = await uow.animals.get(tracking.offspring_id)
    if animal is None:
        logger.warning(
            "Tracking %s references missing animal %s", tracking.id, tracking.offspring_id
        )
        return
    animal.mark_status(status, at=at)
    await uow.animals.update(animal)


async def apply_transition(
    uow: UnitOfWork, tracking: OffspringTracking, target: str, at: datetime
) -> OffspringTracking:
    """Validate, apply and persist `target`, then mirror it onto the animal."""
    ensure_transition(tracking, target)
    if target == TrackingStatus.WEANED.value:
        tracking.wean(at)
    else:
        tracking.set_status(target, at)
    tracking = await uow.offspring_tracking.update(tracking)
    await mirror_to_registry(uow, tracking, at)
    return tracking
