"""
Document lifecycle state machine.

PENDING → PROCESSING → INDEXED | FAILED, and INDEXED | FAILED → PROCESSING
for re-indexing. Any other move is a programming error.

Dependencies: None
System role: Single source of truth for legal status transitions
"""

from faq_rag.core.exceptions import InvalidStatusTransition

from .models import DocumentStatus

ALLOWED_TRANSITIONS: dict[DocumentStatus, frozenset[DocumentStatus]] = {
    DocumentStatus.PENDING: frozenset({DocumentStatus.PROCESSING}),
    DocumentStatus.PROCESSING: frozenset({DocumentStatus.INDEXED, DocumentStatus.FAILED}),
    DocumentStatus.INDEXED: frozenset({DocumentStatus.PROCESSING}),
    DocumentStatus.FAILED: frozenset({DocumentStatus.PROCESSING}),
}


def can_transition(current: DocumentStatus, target: DocumentStatus) -> bool:
    return target in ALLOWED_TRANSITIONS.get(current, frozenset())


def ensure_transition(current: DocumentStatus, target: DocumentStatus) -> None:
    """
    Validate a status change.

    Raises:
        InvalidStatusTransition: When the lifecycle forbids current → target
    """
    if not can_transition(current, target):
        raise InvalidStatusTransition(current.value, target.value)


def sources_for(target: DocumentStatus) -> list[DocumentStatus]:
    """
    States from which target can be entered, in declaration order.

    Used as the WHERE clause of compare-and-set status updates.
    """
    return [status for status, targets in ALLOWED_TRANSITIONS.items() if target in targets]
