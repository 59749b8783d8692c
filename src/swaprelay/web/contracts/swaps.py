"""Swap request and response contracts."""

from pydantic import BaseModel, ConfigDict, Field

from swaprelay.web.contracts.quotes import QuoteRequest


class SwapRequest(QuoteRequest):
    """Request to execute a swap.

    Same body as a quote; the signer's private key travels in the
    Authorization header, never in the body.
    """


class SwapResponse(BaseModel):
    """Hash of the mined swap transaction."""

    model_config = ConfigDict(populate_by_name=True)

    transaction_hash: str = Field(..., alias="transactionHash", description="Swap transaction hash")
