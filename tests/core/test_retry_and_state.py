"""
Test suite for RetryPolicy and the document lifecycle state machine.

System role: Verification of transient failure handling and legal status moves
"""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from faq_rag.core.document_processing.document_state import (
    can_transition,
    ensure_transition,
    sources_for,
)
from faq_rag.core.document_processing.models import DocumentStatus
from faq_rag.core.document_processing.retry import RetryPolicy, is_transient_error
from faq_rag.core.exceptions import InvalidStatusTransition


@pytest.fixture
def no_delay_policy() -> RetryPolicy:
    """Provide three-attempt policy without backoff delay."""
    return RetryPolicy(max_attempts=3, base_delay=0.0, max_delay=0.0)


def _operational_error() -> OperationalError:
    return OperationalError("INSERT", {}, Exception("database is locked"))


class TestIsTransientError:
    """Test suite for is_transient_error()."""

    def test_operational_and_connection_errors_should_be_transient(self) -> None:
        assert is_transient_error(_operational_error())
        assert is_transient_error(ConnectionError("reset"))
        assert is_transient_error(TimeoutError())

    def test_integrity_and_domain_errors_should_not_be_transient(self) -> None:
        assert not is_transient_error(IntegrityError("INSERT", {}, Exception("duplicate")))
        assert not is_transient_error(ValueError("bad chunk"))


class TestRetryPolicy:
    """Test suite for RetryPolicy.run()."""

    @pytest.mark.asyncio
    async def test_run_should_retry_transient_errors_until_success(
        self, no_delay_policy: RetryPolicy
    ) -> None:
        """Test a transient failure followed by success returns the result."""
        # Arrange
        operation = AsyncMock(side_effect=[_operational_error(), "ok"])

        # Act
        result = await no_delay_policy.run(operation, description="insert")

        # Assert
        assert result == "ok"
        assert operation.await_count == 2

    @pytest.mark.asyncio
    async def test_run_should_raise_after_max_attempts(self, no_delay_policy: RetryPolicy) -> None:
        """Test the last error propagates once attempts are exhausted."""
        # Arrange
        operation = AsyncMock(side_effect=_operational_error())

        # Act & Assert
        with pytest.raises(OperationalError):
            await no_delay_policy.run(operation)

        assert operation.await_count == 3

    @pytest.mark.asyncio
    async def test_run_should_not_retry_permanent_errors(self, no_delay_policy: RetryPolicy) -> None:
        """Test non-retryable errors fail on the first attempt."""
        # Arrange
        operation = AsyncMock(side_effect=ValueError("bad input"))

        # Act & Assert
        with pytest.raises(ValueError):
            await no_delay_policy.run(operation)

        assert operation.await_count == 1

    def test_delay_for_should_grow_exponentially_up_to_max(self) -> None:
        """Test backoff doubles per attempt and is capped."""
        # Arrange
        policy = RetryPolicy(base_delay=0.5, max_delay=1.5, jitter=0.0)

        # Act & Assert
        assert policy.delay_for(1) == 0.5
        assert policy.delay_for(2) == 1.0
        assert policy.delay_for(3) == 1.5

    def test_delay_for_should_stay_within_jitter_bounds(self) -> None:
        """Test jitter randomizes within +/- the configured fraction."""
        policy = RetryPolicy(base_delay=1.0, max_delay=10.0, jitter=0.1)
        for _ in range(20):
            assert 0.9 <= policy.delay_for(1) <= 1.1

    def test_init_should_reject_zero_attempts(self) -> None:
        with pytest.raises(ValueError):
            RetryPolicy(max_attempts=0)


class TestDocumentStateMachine:
    """Test suite for document status transitions."""

    @pytest.mark.parametrize(
        "current, target",
        [
            (DocumentStatus.PENDING, DocumentStatus.PROCESSING),
            (DocumentStatus.PROCESSING, DocumentStatus.INDEXED),
            (DocumentStatus.PROCESSING, DocumentStatus.FAILED),
            (DocumentStatus.INDEXED, DocumentStatus.PROCESSING),
            (DocumentStatus.FAILED, DocumentStatus.PROCESSING),
        ],
    )
    def test_allowed_transitions_should_pass(
        self, current: DocumentStatus, target: DocumentStatus
    ) -> None:
        """Test lifecycle moves are accepted."""
        assert can_transition(current, target)
        ensure_transition(current, target)

    @pytest.mark.parametrize(
        "current, target",
        [
            (DocumentStatus.PENDING, DocumentStatus.INDEXED),
            (DocumentStatus.PENDING, DocumentStatus.FAILED),
            (DocumentStatus.INDEXED, DocumentStatus.FAILED),
            (DocumentStatus.FAILED, DocumentStatus.INDEXED),
            (DocumentStatus.PROCESSING, DocumentStatus.PROCESSING),
        ],
    )
    def test_forbidden_transitions_should_raise(
        self, current: DocumentStatus, target: DocumentStatus
    ) -> None:
        """Test illegal moves raise InvalidStatusTransition."""
        assert not can_transition(current, target)
        with pytest.raises(InvalidStatusTransition):
            ensure_transition(current, target)

    def test_sources_for_processing_should_exclude_processing(self) -> None:
        """Test a claim may start from every state except PROCESSING."""
        assert sources_for(DocumentStatus.PROCESSING) == [
            DocumentStatus.PENDING,
            DocumentStatus.INDEXED,
            DocumentStatus.FAILED,
        ]
