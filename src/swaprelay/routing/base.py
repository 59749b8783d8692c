"""Value types shared by the quoting and swap pipeline."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Quote:
    """Output of the first fee tier that answered a quote simulation."""

    token_in: str
    token_out: str
    amount_in: int  # base units
    fee_tier: int
    amount_out: int  # base units


@dataclass(frozen=True)
class SwapParams:
    """Arguments of SwapRouter.exactInputSingle, fixed once built."""

    token_in: str
    token_out: str
    fee_tier: int
    recipient: str
    deadline: int
    amount_in: int
    amount_out_minimum: int
    sqrt_price_limit_x96: int = 0

    def as_tuple(self) -> tuple:
        """Encode as the ABI tuple (field order matters)."""
        return (
            self.token_in,
            self.token_out,
            self.fee_tier,
            self.recipient,
            self.deadline,
            self.amount_in,
            self.amount_out_minimum,
            self.sqrt_price_limit_x96,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for logging."""
        return {
            "token_in": self.token_in,
            "token_out": self.token_out,
            "fee_tier": self.fee_tier,
            "recipient": self.recipient,
            "deadline": self.deadline,
            "amount_in": str(self.amount_in),
            "amount_out_minimum": str(self.amount_out_minimum),
        }
