"""Swap API endpoint.

WARNING: the caller sends a private key in the Authorization header. It is used
to sign the approval and swap of this one request and then dropped. Run this
service only behind TLS on a trusted network.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Header

from swaprelay.api.deps import get_app_settings, get_chain
from swaprelay.chain import ChainClient
from swaprelay.config import Settings
from swaprelay.web.contracts.quotes import ErrorResponse
from swaprelay.web.contracts.swaps import SwapRequest, SwapResponse
from swaprelay.web.services.swap_service import SwapService

router = APIRouter(tags=["swaps"])


@router.post(
    "/swap",
    response_model=SwapResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def execute_swap(
    request: SwapRequest,
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_app_settings),
    chain: ChainClient = Depends(get_chain),
) -> SwapResponse:
    """Swap one token for another, always using ERC-20 logic.

    If tokenIn is "eth" the signer must already hold WETH. If tokenOut is
    "eth" the signer receives WETH (no unwrap).

    Example:
        curl -X POST http://localhost:8000/swap \\
          -H "Content-Type: application/json" \\
          -H "Authorization: 0xYOUR_PRIVATE_KEY" \\
          -d '{"amountIn":"10","tokenIn":"eth","tokenOut":"0xABC..."}'
    """
    return await SwapService(settings, chain).execute(request, authorization)
