"""Slippage policy: pick a tolerance per token pair and derive the minimum output."""

from decimal import Decimal

from swaprelay.config import Settings


class SlippagePolicy:
    """Classifies a token pair into a slippage bound.

    Rules (case-insensitive):
      - wrapped-native -> stable alias:           base_slippage
      - wrapped-native on either side:            min(2 * base_slippage, max_slippage)
      - anything else:                            max_slippage

    The stable rule compares token_out with the literal alias string, which
    the resolver passes through unchanged. A request naming "usdt" gets the
    base bound; the USDT contract address never matches it.
    """

    def __init__(self, settings: Settings):
        self.settings = settings

    def _is_wrapped_native(self, token: str) -> bool:
        return token.lower() == self.settings.wrapped_native_address.lower()

    def classify(self, token_in: str, token_out: str) -> Decimal:
        base = self.settings.base_slippage
        ceiling = self.settings.max_slippage

        if self._is_wrapped_native(token_in) and token_out.lower() == self.settings.stable_asset_alias.lower():
            return base
        if self._is_wrapped_native(token_in) or self._is_wrapped_native(token_out):
            return min(base * 2, ceiling)
        return ceiling


def minimum_output(amount_out: int, bound: Decimal) -> int:
    """Scale amount_out down by (1 - bound), truncating toward zero.

    >>> minimum_output(1000000, Decimal("0.005"))
    995000
    """
    # str() keeps float inputs like 0.005 exact
    bound = Decimal(str(bound))
    if not (Decimal(0) <= bound < Decimal(1)):
        raise ValueError(f"slippage bound out of range: {bound}")
    numerator, denominator = (Decimal(1) - bound).as_integer_ratio()
    return int(amount_out) * numerator // denominator
