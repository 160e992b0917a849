"""Tests for the blocking waiter."""

from __future__ import annotations

import concurrent.futures
from concurrent.futures import Future
from datetime import timedelta

import pytest

from managed_loop.blocking.waiter import Await
from managed_loop.core.clock import SimulatedClock
from managed_loop.core.errors import AwaitTimeout, ExecutionError
from managed_loop.core.results import Failed, Ok, TimedOut
from managed_loop.loop import ManagedLoop
from managed_loop.testing import ManualHost, TimerAsserter


def _settle_later(loop: ManagedLoop, future: Future, value: object, delay_ms: float) -> None:
    loop.timers.set_timeout(lambda: future.set_result(value), delay_ms)


class TestResult:

    def test_settles_before_timeout(self, simulated_loop: ManagedLoop, future: Future):
        _settle_later(simulated_loop, future, 42, 50)
        assert Await(simulated_loop).result(future, 200) == 42
        TimerAsserter(simulated_loop).assert_idle()

    def test_times_out(self, simulated_loop: ManagedLoop, future: Future):
        _settle_later(simulated_loop, future, 42, 50)
        with pytest.raises(AwaitTimeout) as info:
            Await(simulated_loop).result(future, 10)
        assert info.value.elapsed_ms >= 10
        assert info.value.timeout_ms == 10
        assert not future.done()

        asserter = TimerAsserter(simulated_loop)
        asserter.assert_not_blocking()
        asserter.assert_pending(1)
        asserter.assert_hooked_once()

    @pytest.mark.parametrize("delay, timeout", [(0, 1), (5, 20), (99, 100)])
    def test_any_delay_shorter_than_timeout(
        self, simulated_loop: ManagedLoop, future: Future, delay: float, timeout: float
    ):
        _settle_later(simulated_loop, future, "done", delay)
        assert Await(simulated_loop).result(future, timeout) == "done"

    def test_already_settled_with_zero_timeout(self, simulated_loop: ManagedLoop, future: Future):
        future.set_result("now")
        assert Await(simulated_loop).result(future, 0) == "now"

    def test_timedelta_timeout(self, simulated_loop: ManagedLoop, future: Future):
        _settle_later(simulated_loop, future, 1, 30)
        assert Await(simulated_loop).result(future, timedelta(milliseconds=100)) == 1

    def test_default_timeout_from_loop(self, manual_host: ManualHost, future: Future):
        loop = ManagedLoop(host=manual_host, clock=SimulatedClock(), default_timeout_ms=5)
        with pytest.raises(AwaitTimeout):
            Await(loop).result(future)
        loop.close()

    def test_negative_timeout_rejected(self, simulated_loop: ManagedLoop, future: Future):
        with pytest.raises(ValueError):
            Await(simulated_loop).result(future, -1)
        assert simulated_loop.blocking_depth == 0

    def test_not_a_future(self, simulated_loop: ManagedLoop):
        with pytest.raises(TypeError):
            Await(simulated_loop).result(42, 10)

    def test_real_clock(self, manual_host: ManualHost, future: Future):
        with ManagedLoop(host=manual_host) as loop:
            with pytest.raises(AwaitTimeout) as info:
                Await(loop).result(future, 10)
            assert info.value.elapsed_ms >= 10

            _settle_later(loop, future, 42, 5)
            assert Await(loop).result(future, 500) == 42


class TestFailures:

    def test_raw_error_propagates(self, simulated_loop: ManagedLoop, future: Future):
        simulated_loop.timers.set_timeout(lambda: future.set_exception(KeyError("k")), 5)
        with pytest.raises(KeyError):
            Await(simulated_loop).result(future, 100)
        assert simulated_loop.blocking_depth == 0

    def test_execution_wrapper_unwrapped_once(self, simulated_loop: ManagedLoop, future: Future):
        future.set_exception(ExecutionError(ValueError("inner")))
        with pytest.raises(ValueError, match="inner"):
            Await(simulated_loop).result(future, 100)

    def test_only_one_layer_unwrapped(self, simulated_loop: ManagedLoop, future: Future):
        future.set_exception(ExecutionError(ExecutionError(ValueError("inner"))))
        with pytest.raises(ExecutionError):
            Await(simulated_loop).result(future, 100)

    def test_cancelled(self, simulated_loop: ManagedLoop, future: Future):
        future.cancel()
        with pytest.raises(concurrent.futures.CancelledError):
            Await(simulated_loop).result(future, 100)

    def test_strict_handler_error_restores_mode(self, manual_host: ManualHost, future: Future):
        loop = ManagedLoop(host=manual_host, clock=SimulatedClock(), strict_handlers=True)

        def broken():
            raise RuntimeError("boom")

        loop.timers.set_timeout(broken, 3)
        loop.timers.set_timeout(lambda: None, 100)
        with pytest.raises(RuntimeError):
            Await(loop).result(future, 50)
        TimerAsserter(loop).assert_not_blocking()
        TimerAsserter(loop).assert_hooked_once()
        loop.close()


class TestReady:

    def test_returns_same_value(self, simulated_loop: ManagedLoop, future: Future):
        _settle_later(simulated_loop, future, 1, 5)
        assert Await(simulated_loop).ready(future, 100) is future

    def test_does_not_raise_failure(self, simulated_loop: ManagedLoop, future: Future):
        future.set_exception(RuntimeError("boom"))
        assert Await(simulated_loop).ready(future, 100) is future

    def test_times_out(self, simulated_loop: ManagedLoop, future: Future):
        with pytest.raises(AwaitTimeout):
            Await(simulated_loop).ready(future, 10)
        assert simulated_loop.blocking_depth == 0


class TestOutcome:

    def test_variants(self, simulated_loop: ManagedLoop):
        waiter = Await(simulated_loop)
        ok, failed, pending = Future(), Future(), Future()
        ok.set_result(3)
        failed.set_exception(ExecutionError(KeyError("k")))

        assert waiter.outcome(ok, 10) == Ok(3)

        outcome = waiter.outcome(failed, 10)
        assert isinstance(outcome, Failed)
        assert isinstance(outcome.cause, KeyError)

        outcome = waiter.outcome(pending, 10)
        assert isinstance(outcome, TimedOut)
        assert outcome.elapsed_ms >= 10

    def test_pattern_match(self, simulated_loop: ManagedLoop, future: Future):
        _settle_later(simulated_loop, future, "v", 2)
        match Await(simulated_loop).outcome(future, 10):
            case Ok(value=value):
                assert value == "v"
            case _:
                pytest.fail("expected Ok")


class TestReentrancy:

    def test_nested_wait_inside_handler(self, simulated_loop: ManagedLoop):
        waiter = Await(simulated_loop)
        outer: Future[int] = Future()
        inner: Future[int] = Future()
        depths = []

        def outer_handler():
            _settle_later(simulated_loop, inner, 20, 10)
            depths.append(simulated_loop.blocking_depth)
            outer.set_result(waiter.result(inner, 100) + 1)

        simulated_loop.timers.set_timeout(outer_handler, 10)
        assert waiter.result(outer, 500) == 21
        assert depths == [1]
        TimerAsserter(simulated_loop).assert_idle()

    def test_nested_wait_does_not_double_fire(self, simulated_loop: ManagedLoop):
        waiter = Await(simulated_loop)
        fired = []
        done: Future[None] = Future()
        nested: Future[None] = Future()

        def first():
            waiter.ready(nested, 20)
            done.set_result(None)

        simulated_loop.timers.set_timeout(first, 5)
        simulated_loop.timers.set_timeout(lambda: fired.append("second"), 5)
        simulated_loop.timers.set_timeout(lambda: nested.set_result(None), 8)
        waiter.result(done, 100)
        assert fired == ["second"]
        assert simulated_loop.blocking_depth == 0
