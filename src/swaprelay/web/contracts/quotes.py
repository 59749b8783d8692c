"""Quote request and response contracts."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class QuoteRequest(BaseModel):
    """Request for a swap quote.

    Fields are optional at the schema level so that a missing field becomes a
    400 with the service's own message instead of a 422.
    """

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    amount_in: Optional[str] = Field(None, alias="amountIn", description="Human decimal amount, e.g. \"1.5\"")
    token_in: Optional[str] = Field(None, alias="tokenIn", description="Token address or \"eth\" (WETH)")
    token_out: Optional[str] = Field(None, alias="tokenOut", description="Token address or \"eth\" (WETH)")


class QuoteResponse(BaseModel):
    """Quote for the first fee tier with liquidity."""

    model_config = ConfigDict(populate_by_name=True)

    fee_tier: int = Field(..., alias="feeTier", description="Fee tier the quote came from")
    amount_out: str = Field(..., alias="amountOut", description="Output amount in token decimals")
    amount_out_raw: str = Field(..., alias="amountOutRaw", description="Output amount in base units")


class ErrorResponse(BaseModel):
    """Error body shared by all endpoints."""

    error: str
