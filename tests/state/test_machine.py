"""Tests for the trigger state machine."""

import random
import threading

import pytest

from trigger_app.data.models import Side
from trigger_app.errors import ConfigurationError
from trigger_app.state.machine import TriggerEngine, eval_trigger_tick
from trigger_app.state.models import SessionState, TriggerConfig, TriggerDecision


def run_prices(engine, prices):
    decisions = []
    for price in prices:
        decision = engine.evaluate(price)
        if decision is not None:
            decisions.append(decision)
    return decisions


class TestEvalTriggerTick:
    """Test the pure decision function."""

    def setup_method(self):
        self.cfg = TriggerConfig(trigger_price=100.0)

    def test_buy_below_trigger(self):
        assert eval_trigger_tick(SessionState(), 99.0, self.cfg) == TriggerDecision(Side.BUY, 99.0)

    def test_sell_above_trigger(self):
        assert eval_trigger_tick(SessionState(), 101.0, self.cfg) == TriggerDecision(Side.SELL, 101.0)

    def test_equal_price_prefers_buy(self):
        assert eval_trigger_tick(SessionState(), 100.0, self.cfg).side is Side.BUY

    def test_equal_price_sells_once_buy_fired(self):
        state = SessionState(buy_fired=True)

        assert eval_trigger_tick(state, 100.0, self.cfg) == TriggerDecision(Side.SELL, 100.0)

    def test_below_trigger_after_buy_fired(self):
        state = SessionState(buy_fired=True)

        assert eval_trigger_tick(state, 50.0, self.cfg) is None

    def test_nothing_after_exhausted(self):
        state = SessionState(buy_fired=True, sell_fired=True)

        for price in (1.0, 100.0, 1000.0):
            assert eval_trigger_tick(state, price, self.cfg) is None


class TestTriggerEngine:
    """Test TriggerEngine behaviour over price sequences."""

    def test_mixed_sequence(self):
        engine = TriggerEngine(100.0)

        decisions = run_prices(engine, [105, 100, 98, 120])

        assert decisions == [
            TriggerDecision(Side.SELL, 105),
            TriggerDecision(Side.BUY, 100),
        ]
        assert engine.is_exhausted

    def test_first_price_at_trigger_buys(self):
        engine = TriggerEngine(50.0)

        decision = engine.evaluate(50.0)

        assert decision == TriggerDecision(Side.BUY, 50.0)
        assert engine.state == SessionState(buy_fired=True, sell_fired=False)

    def test_repeated_qualifying_prices_fire_once(self):
        engine = TriggerEngine(100.0)

        decisions = run_prices(engine, [90, 80, 70, 60])

        assert decisions == [TriggerDecision(Side.BUY, 90)]
        assert not engine.is_exhausted

    def test_state_is_not_reset(self):
        engine = TriggerEngine(100.0)
        run_prices(engine, [90, 110])

        assert run_prices(engine, [90, 110, 100, 5, 500]) == []

    @pytest.mark.parametrize("seed", range(20))
    def test_at_most_one_intent_per_side(self, seed):
        rng = random.Random(seed)
        engine = TriggerEngine(100.0)
        prices = [rng.uniform(50, 150) for _ in range(200)]

        decisions = run_prices(engine, prices)
        sides = [d.side for d in decisions]

        assert sides.count(Side.BUY) <= 1
        assert sides.count(Side.SELL) <= 1

    def test_concurrent_evaluation_fires_each_side_once(self):
        engine = TriggerEngine(100.0)
        decisions = []
        decisions_lock = threading.Lock()
        barrier = threading.Barrier(8)

        def worker(prices):
            barrier.wait()
            for price in prices:
                decision = engine.evaluate(price)
                if decision is not None:
                    with decisions_lock:
                        decisions.append(decision)

        threads = [
            threading.Thread(target=worker, args=([90.0, 110.0] * 250,))
            for _ in range(8)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert sorted(d.side.value for d in decisions) == ["buy", "sell"]

    def test_trigger_price_property(self):
        assert TriggerEngine(250).trigger_price == 250.0

    @pytest.mark.parametrize("bad_price", [0, -1.5, float("nan"), float("inf"), True, "100"])
    def test_rejects_invalid_trigger_price(self, bad_price):
        with pytest.raises(ConfigurationError) as exc_info:
            TriggerEngine(bad_price)

        assert exc_info.value.field == "trigger_price"
        assert exc_info.value.recoverable is False
