"""Fee-tier discovery against the on-chain V3 quoter."""

import logging

from swaprelay.chain import ChainClient
from swaprelay.config import Settings
from swaprelay.errors import NoLiquidity
from swaprelay.routing.base import Quote

logger = logging.getLogger(__name__)


class FeeTierQuoter:
    """Finds the first fee tier whose pool answers a quote simulation.

    Tiers are probed one at a time in configured order and the search stops at
    the first success. This is not a best-price search: a later tier is never
    asked once an earlier one has answered.
    """

    def __init__(self, settings: Settings, chain: ChainClient):
        self.settings = settings
        self.chain = chain

    async def get_best_quote(self, token_in: str, token_out: str, amount_in: int) -> Quote:
        """
        Get a quote for swapping amount_in of token_in into token_out.

        Args:
            token_in: Input token address
            token_out: Output token address
            amount_in: Input amount in base units

        Returns:
            Quote from the first fee tier that did not fail

        Raises:
            NoLiquidity: If every configured fee tier failed
        """
        for fee in self.settings.fee_tiers:
            try:
                amount_out = await self.chain.quote_exact_input_single(
                    token_in, token_out, fee, amount_in, 0
                )
            except Exception as e:
                logger.warning(f"Fee tier {fee} failed: {type(e).__name__}: {e}")
                continue

            logger.info(f"Fee tier {fee} => Output (raw): {amount_out}")
            return Quote(
                token_in=token_in,
                token_out=token_out,
                amount_in=amount_in,
                fee_tier=fee,
                amount_out=amount_out,
            )

        logger.error(
            f"No liquidity for {token_in} -> {token_out} "
            f"across fee tiers {list(self.settings.fee_tiers)}"
        )
        raise NoLiquidity("No valid liquidity pool found.")
