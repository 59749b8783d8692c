"""Quote API endpoint."""

from fastapi import APIRouter, Depends

from swaprelay.api.deps import get_app_settings, get_chain
from swaprelay.chain import ChainClient
from swaprelay.config import Settings
from swaprelay.web.contracts.quotes import ErrorResponse, QuoteRequest, QuoteResponse
from swaprelay.web.services.quote_service import QuoteService

router = APIRouter(tags=["quotes"])


@router.post(
    "/quote",
    response_model=QuoteResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def get_quote(
    request: QuoteRequest,
    settings: Settings = Depends(get_app_settings),
    chain: ChainClient = Depends(get_chain),
) -> QuoteResponse:
    """Get a swap quote.

    "eth" is quoted as WETH. Returns the first fee tier with liquidity.
    This is a READ-ONLY operation - no transactions are executed.

    Example:
        curl -X POST http://localhost:8000/quote \\
          -H "Content-Type: application/json" \\
          -d '{"amountIn":"10","tokenIn":"eth","tokenOut":"0xABC..."}'
    """
    return await QuoteService(settings, chain).get_quote(request)
