"""Quote service for fetching swap quotes.

This service reads the quoter contract but does NOT execute swaps. It needs no
signer.
"""

import logging

from swaprelay.chain import ChainClient
from swaprelay.config import Settings
from swaprelay.errors import DownstreamFailure, InvalidInput, SwapRelayError
from swaprelay.routing.quoter import FeeTierQuoter
from swaprelay.tokens import AmountNormalizer, TokenResolver, format_units
from swaprelay.web.contracts.quotes import QuoteRequest, QuoteResponse

logger = logging.getLogger(__name__)


class QuoteService:
    """Service for quoting swaps against the V3 quoter.

    This is a READ-ONLY service that does not execute any transactions.
    """

    def __init__(self, settings: Settings, chain: ChainClient):
        self.settings = settings
        self.resolver = TokenResolver(settings)
        self.normalizer = AmountNormalizer(settings, chain, self.resolver)
        self.quoter = FeeTierQuoter(settings, chain)

    async def get_quote(self, request: QuoteRequest) -> QuoteResponse:
        """Get a swap quote.

        Args:
            request: Quote request parameters

        Returns:
            QuoteResponse with fee tier and output amounts

        Raises:
            SwapRelayError: Subclass matching the failure; unexpected errors
                are wrapped in DownstreamFailure
        """
        if not request.amount_in or not request.token_in or not request.token_out:
            raise InvalidInput("Missing required parameters in request body")

        try:
            token_in = self.resolver.resolve(request.token_in)
            token_out = self.resolver.resolve(request.token_out)
            amount_in = await self.normalizer.to_base_units(request.amount_in, request.token_in)

            quote = await self.quoter.get_best_quote(token_in, token_out, amount_in)

            out_decimals = await self.normalizer.get_decimals(token_out)
            return QuoteResponse(
                fee_tier=quote.fee_tier,
                amount_out=format_units(quote.amount_out, out_decimals),
                amount_out_raw=str(quote.amount_out),
            )

        except SwapRelayError:
            raise
        except Exception as e:
            logger.exception(f"Error getting quote: {e}")
            raise DownstreamFailure.from_exception(e) from e
