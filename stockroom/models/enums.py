"""
Model Enums
"""

from enum import Enum


class UserRole(Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    STAFF = "staff"
    EMPLOYEE = "employee"


class MovementType(Enum):
    STOCK_IN = "stock_in"
    STOCK_OUT = "stock_out"


class RequestStatus(Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    FULFILLED = "fulfilled"

    @property
    def is_terminal(self):
        return not ALLOWED_TRANSITIONS[self]

    def can_transition_to(self, target):
        """Check the lifecycle table for a move from this status to target"""
        return target in ALLOWED_TRANSITIONS[self]


ALLOWED_TRANSITIONS = {
    RequestStatus.PENDING: frozenset({RequestStatus.APPROVED, RequestStatus.REJECTED}),
    RequestStatus.APPROVED: frozenset({RequestStatus.FULFILLED}),
    RequestStatus.REJECTED: frozenset(),
    RequestStatus.FULFILLED: frozenset(),
}


def enum_values(enum_cls):
    """Persist enum values ('pending') rather than member names ('PENDING')"""
    return [member.value for member in enum_cls]
