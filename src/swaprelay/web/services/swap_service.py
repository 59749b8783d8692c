"""Swap service: runs the executor for one request and shapes the response."""

import logging
from typing import Optional

from swaprelay.chain import ChainClient
from swaprelay.config import Settings
from swaprelay.errors import DownstreamFailure, SwapRelayError
from swaprelay.swap.executor import SwapExecutor
from swaprelay.web.contracts.swaps import SwapRequest, SwapResponse

logger = logging.getLogger(__name__)


class SwapService:
    """Executes swaps signed with the caller's own key."""

    def __init__(self, settings: Settings, chain: ChainClient):
        self.executor = SwapExecutor(settings, chain)

    async def execute(self, request: SwapRequest, credential: Optional[str]) -> SwapResponse:
        try:
            result = await self.executor.execute_swap(
                credential=credential,
                amount_in=request.amount_in,
                token_in=request.token_in,
                token_out=request.token_out,
            )
        except SwapRelayError:
            raise
        except Exception as e:
            logger.exception(f"Error executing swap: {e}")
            raise DownstreamFailure.from_exception(e) from e

        return SwapResponse(transaction_hash=result.tx_hash)
