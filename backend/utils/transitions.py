"""
Status transition tables.

Writing the current status again is accepted as a no-op; any other move must be
listed in the table for the field.
"""
from typing import Dict, Iterable, Set
from models import OrderStatus, PaymentStatus, VerificationStatus
from utils.errors import InvalidTransition


def _value(status) -> str:
    return status.value if hasattr(status, "value") else str(status)


def _table(moves: Dict[object, Iterable[object]]) -> Dict[str, Set[str]]:
    return {_value(current): {_value(nxt) for nxt in allowed} for current, allowed in moves.items()}


ORDER_TRANSITIONS = _table({
    OrderStatus.PENDING: [OrderStatus.PROCESSING, OrderStatus.CANCELLED],
    OrderStatus.PROCESSING: [OrderStatus.SHIPPED, OrderStatus.CANCELLED],
    OrderStatus.SHIPPED: [OrderStatus.DELIVERED],
    OrderStatus.DELIVERED: [],
    OrderStatus.CANCELLED: [],
})

PAYMENT_TRANSITIONS = _table({
    PaymentStatus.PENDING: [PaymentStatus.PAID, PaymentStatus.FAILED, PaymentStatus.PARTIAL],
    PaymentStatus.PARTIAL: [PaymentStatus.PAID, PaymentStatus.FAILED, PaymentStatus.REFUNDED],
    PaymentStatus.PAID: [PaymentStatus.REFUNDED],
    PaymentStatus.FAILED: [PaymentStatus.PENDING, PaymentStatus.PAID],
    PaymentStatus.REFUNDED: [],
})

VERIFICATION_TRANSITIONS = _table({
    VerificationStatus.PENDING: [VerificationStatus.VERIFIED, VerificationStatus.REJECTED],
    VerificationStatus.VERIFIED: [],
    VerificationStatus.REJECTED: [],
})

# Operators may reopen or reverse a review decision
VERIFICATION_REREVIEW_TRANSITIONS = _table({
    VerificationStatus.PENDING: [VerificationStatus.VERIFIED, VerificationStatus.REJECTED],
    VerificationStatus.VERIFIED: [VerificationStatus.PENDING, VerificationStatus.REJECTED],
    VerificationStatus.REJECTED: [VerificationStatus.PENDING, VerificationStatus.VERIFIED],
})


def can_transition(table: Dict[str, Set[str]], current, requested) -> bool:
    current, requested = _value(current), _value(requested)
    if current == requested:
        return True
    return requested in table.get(current, set())


def validate_transition(table: Dict[str, Set[str]], field: str, current, requested) -> None:
    """Raise InvalidTransition unless ``current -> requested`` is in ``table``"""
    if not can_transition(table, current, requested):
        allowed = sorted(table.get(_value(current), set()))
        raise InvalidTransition(field, _value(current), _value(requested), allowed)


def verification_table(allow_rereview: bool) -> Dict[str, Set[str]]:
    return VERIFICATION_REREVIEW_TRANSITIONS if allow_rereview else VERIFICATION_TRANSITIONS
