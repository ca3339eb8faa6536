"""
Tests for retry with exponential backoff.
"""

import pytest

from extraction.retry import (
    RETRY_PRESETS,
    RetryPolicy,
    RetryPreset,
    is_retryable_error,
    run_with_retry,
)
from promo_extractor.utils.errors import ApiError, ParsingError


class FakeSleep:
    """Records requested delays instead of waiting."""

    def __init__(self):
        self.delays = []

    async def __call__(self, delay):
        self.delays.append(delay)


class FlakyOperation:
    """Fails with the given errors, then returns a value."""

    def __init__(self, *errors, result="ok"):
        self.errors = list(errors)
        self.result = result
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        if self.errors:
            raise self.errors.pop(0)
        return self.result


class TestRetryClassification:
    """Test is_retryable_error."""

    @pytest.mark.parametrize("status", [0, 408, 429, 500, 502, 503, 599])
    def test_retryable_statuses(self, status):
        """Test timeouts, rate limits, server and network errors."""
        assert is_retryable_error(ApiError("failed", status))

    @pytest.mark.parametrize("status", [400, 401, 403, 404, 422])
    def test_client_errors_are_final(self, status):
        """Test other 4xx statuses."""
        assert not is_retryable_error(ApiError("failed", status))

    def test_other_errors_are_final(self):
        """Test parsing and unrelated errors."""
        assert not is_retryable_error(ParsingError("bad json"))
        assert not is_retryable_error(ValueError("boom"))


class TestRetryPolicy:
    """Test policy values and delay schedule."""

    def test_presets(self):
        """Test the named presets."""
        assert RETRY_PRESETS[RetryPreset.FAST] == RetryPolicy(3, 0.5, 5.0, 2.0)
        assert RETRY_PRESETS[RetryPreset.STANDARD] == RetryPolicy(3, 1.0, 10.0, 2.0)
        assert RETRY_PRESETS[RetryPreset.AGGRESSIVE] == RetryPolicy(5, 1.0, 16.0, 2.0)

    @pytest.mark.asyncio
    async def test_delay_schedule(self):
        """Test exponential growth capped at max_delay."""
        policy = RetryPolicy(max_attempts=7, initial_delay=1.0, max_delay=16.0, backoff_multiplier=2.0)
        operation = FlakyOperation(*[ApiError("down", 503) for _ in range(6)])
        sleep = FakeSleep()

        await run_with_retry(operation, policy, sleep=sleep)

        assert sleep.delays == [1.0, 2.0, 4.0, 8.0, 16.0, 16.0]

    def test_invalid_policy(self):
        """Test that zero attempts are rejected."""
        with pytest.raises(ValueError):
            RetryPolicy(max_attempts=0)


class TestRunWithRetry:
    """Test run_with_retry."""

    @pytest.mark.asyncio
    async def test_success_first_try(self):
        """Test that a successful operation runs once without delay."""
        operation = FlakyOperation()
        sleep = FakeSleep()

        result = await run_with_retry(operation, sleep=sleep)

        assert result == "ok"
        assert operation.calls == 1
        assert sleep.delays == []

    @pytest.mark.asyncio
    async def test_recovers_after_transient_errors(self):
        """Test that transient errors are retried with backoff."""
        operation = FlakyOperation(ApiError("busy", 503), ApiError("slow", 429))
        sleep = FakeSleep()

        result = await run_with_retry(operation, RETRY_PRESETS[RetryPreset.STANDARD], sleep=sleep)

        assert result == "ok"
        assert operation.calls == 3
        assert sleep.delays == [1.0, 2.0]

    @pytest.mark.asyncio
    async def test_exhausts_attempts(self):
        """Test that max_attempts failures re-raise the last error."""
        errors = [ApiError(f"down {i}", 500) for i in range(5)]
        operation = FlakyOperation(*errors)
        sleep = FakeSleep()
        policy = RETRY_PRESETS[RetryPreset.AGGRESSIVE]

        with pytest.raises(ApiError) as exc_info:
            await run_with_retry(operation, policy, sleep=sleep)

        assert operation.calls == policy.max_attempts
        assert exc_info.value is errors[-1]
        assert sleep.delays == [1.0, 2.0, 4.0, 8.0]

    @pytest.mark.asyncio
    async def test_non_retryable_runs_once(self):
        """Test that a terminal error is raised without retrying."""
        operation = FlakyOperation(ApiError("unauthorized", 401))
        sleep = FakeSleep()

        with pytest.raises(ApiError):
            await run_with_retry(operation, sleep=sleep)

        assert operation.calls == 1
        assert sleep.delays == []

    @pytest.mark.asyncio
    async def test_parsing_error_runs_once(self):
        """Test that parsing errors are never retried."""
        operation = FlakyOperation(ParsingError("bad json"))

        with pytest.raises(ParsingError):
            await run_with_retry(operation, sleep=FakeSleep())

        assert operation.calls == 1

    @pytest.mark.asyncio
    async def test_on_retry_callback(self):
        """Test that each retried attempt is reported."""
        error = ApiError("timeout", 408)
        operation = FlakyOperation(error)
        attempts = []

        await run_with_retry(
            operation,
            RETRY_PRESETS[RetryPreset.FAST],
            sleep=FakeSleep(),
            on_retry=attempts.append,
        )

        assert len(attempts) == 1
        assert attempts[0].attempt == 1
        assert attempts[0].delay == 0.5
        assert attempts[0].error is error

    @pytest.mark.asyncio
    async def test_custom_classifier(self):
        """Test that a custom classifier decides what is retried."""
        operation = FlakyOperation(ValueError("flaky"))

        result = await run_with_retry(
            operation,
            sleep=FakeSleep(),
            is_retryable=lambda e: isinstance(e, ValueError),
        )

        assert result == "ok"
        assert operation.calls == 2
