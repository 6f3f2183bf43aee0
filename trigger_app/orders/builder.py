"""Construction of order intents from trigger decisions."""

from decimal import ROUND_HALF_UP, Decimal, localcontext

from ..data.models import Side
from ..state.models import TriggerDecision
from .models import OrderIntent

PRICE_QUANTUM = Decimal("0.01")


def round_price(price: float) -> Decimal:
    """
    Round a price to two decimals, half-up.

    The float's shortest decimal representation is rounded rather than its
    binary value, so 1.005 becomes 1.01 and 99.999 becomes 100.00. Any finite
    float is accepted, including prices too large for the default 28 digit
    decimal context.
    """
    value = Decimal(repr(float(price)))

    with localcontext() as ctx:
        # Integer digits, two decimals and one digit of carry
        ctx.prec = max(ctx.prec, value.adjusted() + 4)
        rounded = value.quantize(PRICE_QUANTUM, rounding=ROUND_HALF_UP)

    # -0.00 renders as 0.00
    return rounded.copy_abs() if rounded.is_zero() else rounded


class OrderIntentBuilder:
    """Renders a decided side and price into an OrderIntent."""

    def build(self, side: Side, price: float) -> OrderIntent:
        return OrderIntent(side=Side(side), price=round_price(price))

    def build_from_decision(self, decision: TriggerDecision) -> OrderIntent:
        return self.build(decision.side, decision.price)
