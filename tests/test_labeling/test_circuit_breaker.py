"""Tests for the synchronous CircuitBreaker."""

from unittest.mock import MagicMock, patch

import pytest

from topicscope.labeling import CircuitBreaker, CircuitOpenError, CircuitState


def _failing():
    raise RuntimeError("fail")


class TestCircuitBreaker:
    """State machine tests."""

    def test_starts_closed(self):
        assert CircuitBreaker().state == CircuitState.CLOSED

    def test_passes_result_through(self):
        breaker = CircuitBreaker()
        assert breaker.call(lambda x: x * 2, 21) == 42

    def test_opens_after_threshold(self):
        breaker = CircuitBreaker(failure_threshold=3)
        for _ in range(3):
            with pytest.raises(RuntimeError):
                breaker.call(_failing)

        assert breaker.state == CircuitState.OPEN
        assert breaker.consecutive_failures == 3

    def test_open_circuit_rejects_without_calling(self):
        breaker = CircuitBreaker(failure_threshold=1, recovery_timeout=60.0)
        with pytest.raises(RuntimeError):
            breaker.call(_failing)

        fn = MagicMock()
        with pytest.raises(CircuitOpenError):
            breaker.call(fn)
        fn.assert_not_called()

    def test_success_resets_failures(self):
        breaker = CircuitBreaker(failure_threshold=3)
        with pytest.raises(RuntimeError):
            breaker.call(_failing)
        breaker.call(lambda: None)
        assert breaker.consecutive_failures == 0

    def test_half_open_trial_success_closes(self):
        breaker = CircuitBreaker(failure_threshold=1, recovery_timeout=10.0)
        with patch("topicscope.labeling.circuit_breaker.time.monotonic", return_value=100.0):
            with pytest.raises(RuntimeError):
                breaker.call(_failing)
        with patch("topicscope.labeling.circuit_breaker.time.monotonic", return_value=111.0):
            assert breaker.call(lambda: "ok") == "ok"

        assert breaker.state == CircuitState.CLOSED

    def test_half_open_trial_failure_reopens(self):
        breaker = CircuitBreaker(failure_threshold=1, recovery_timeout=10.0)
        with patch("topicscope.labeling.circuit_breaker.time.monotonic", return_value=100.0):
            with pytest.raises(RuntimeError):
                breaker.call(_failing)
        with patch("topicscope.labeling.circuit_breaker.time.monotonic", return_value=111.0):
            with pytest.raises(RuntimeError):
                breaker.call(_failing)
            assert breaker.state == CircuitState.OPEN
            with pytest.raises(CircuitOpenError):
                breaker.call(lambda: "ok")

    def test_half_open_after_timeout(self):
        breaker = CircuitBreaker(failure_threshold=1, recovery_timeout=10.0)
        with patch("topicscope.labeling.circuit_breaker.time.monotonic", return_value=100.0):
            with pytest.raises(RuntimeError):
                breaker.call(_failing)
            assert breaker.state == CircuitState.OPEN
        with patch("topicscope.labeling.circuit_breaker.time.monotonic", return_value=110.0):
            assert breaker.state == CircuitState.HALF_OPEN

    def test_below_threshold_stays_closed(self):
        breaker = CircuitBreaker(failure_threshold=3)
        for _ in range(2):
            with pytest.raises(RuntimeError):
                breaker.call(_failing)
        assert breaker.state == CircuitState.CLOSED
