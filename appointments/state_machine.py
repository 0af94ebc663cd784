"""
Appointment status transitions.

    pending -> confirmed -> completed
    pending | confirmed -> cancelled

completed and cancelled are terminal.
"""
import logging

from core.exceptions import InvalidStatusTransition

logger = logging.getLogger(__name__)


APPOINTMENT_STATUS_TRANSITIONS = {
    'pending': ['confirmed', 'cancelled'],
    'confirmed': ['completed', 'cancelled'],
    'completed': [],  # Terminal state
    'cancelled': [],  # Terminal state
}

INITIAL_STATUS = 'pending'
TERMINAL_STATUSES = frozenset(
    status for status, targets in APPOINTMENT_STATUS_TRANSITIONS.items() if not targets
)


def is_terminal(status: str) -> bool:
    return status in TERMINAL_STATUSES


def can_transition(current_status: str, new_status: str) -> bool:
    if current_status == new_status:
        return True
    return new_status in APPOINTMENT_STATUS_TRANSITIONS.get(current_status, [])


def validate_status_transition(current_status: str, new_status: str) -> bool:
    """
    Validate that an appointment status transition is allowed.

    Staying in the same status is always valid.

    Raises:
        InvalidStatusTransition if the edge is not in the table
    """
    if new_status not in APPOINTMENT_STATUS_TRANSITIONS:
        raise InvalidStatusTransition(f"Unknown appointment status: {new_status}")

    if not can_transition(current_status, new_status):
        valid = APPOINTMENT_STATUS_TRANSITIONS.get(current_status, [])
        logger.warning(f"Rejected appointment status transition {current_status} -> {new_status}")
        raise InvalidStatusTransition(
            f"Cannot change appointment status from '{current_status}' to '{new_status}'. "
            f"Valid transitions from '{current_status}': {valid}"
        )
    return True
