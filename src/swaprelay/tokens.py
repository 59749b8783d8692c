"""Token identifier resolution and decimal/base-unit conversion."""

import logging
from decimal import Decimal, InvalidOperation, Overflow, Underflow, localcontext
from typing import Optional

from swaprelay.chain import ChainClient
from swaprelay.config import MAX_UINT256, Settings
from swaprelay.errors import InvalidInput

logger = logging.getLogger(__name__)

# Enough digits for any uint256 with 18+ decimals of fraction
_DECIMAL_PRECISION = 100


class TokenResolver:
    """Maps a user-supplied token identifier to a contract address.

    The native alias (e.g. "eth") resolves to the wrapped-native token. Anything
    else is assumed to already be a contract address and is returned as-is;
    malformed addresses fail later at the RPC layer.
    """

    def __init__(self, settings: Settings):
        self.settings = settings

    def is_native_alias(self, token_ref: str) -> bool:
        return token_ref.lower() == self.settings.native_alias.lower()

    def is_wrapped_native(self, address: str) -> bool:
        return address.lower() == self.settings.wrapped_native_address.lower()

    def resolve(self, token_ref: Optional[str]) -> str:
        if not token_ref:
            raise InvalidInput("Invalid token string")
        if self.is_native_alias(token_ref):
            return self.settings.wrapped_native_address
        return token_ref


class AmountNormalizer:
    """Converts human decimal amounts into integer base units."""

    def __init__(self, settings: Settings, chain: ChainClient, resolver: Optional[TokenResolver] = None):
        self.settings = settings
        self.chain = chain
        self.resolver = resolver or TokenResolver(settings)

    async def get_decimals(self, token_ref: str) -> int:
        """Decimal precision of a token.

        The wrapped-native token is known to have ``native_decimals``; any other
        token is asked on-chain. RPC failures propagate.
        """
        address = self.resolver.resolve(token_ref)
        if self.resolver.is_wrapped_native(address):
            return self.settings.native_decimals
        logger.debug(f"Fetching decimals for {address}")
        return await self.chain.get_decimals(address)

    async def to_base_units(self, amount: Optional[str], token_ref: str) -> int:
        if not amount:
            raise InvalidInput("Missing amountIn")
        decimals = await self.get_decimals(token_ref)
        return parse_units(amount, decimals)


def parse_units(amount: str, decimals: int) -> int:
    """Shift a decimal string right by `decimals` places.

    >>> parse_units("0.5", 6)
    500000

    Raises:
        InvalidInput: If the string is not a non-negative decimal, has
            more fractional digits than the token supports, or does not fit
            in a uint256
    """
    with localcontext() as ctx:
        ctx.prec = _DECIMAL_PRECISION
        ctx.traps[Underflow] = True
        try:
            value = Decimal(amount.strip())
        except (InvalidOperation, AttributeError):
            raise InvalidInput(f"Invalid amount: {amount}") from None

        if not value.is_finite() or value.is_signed():
            raise InvalidInput(f"Invalid amount: {amount}")

        try:
            scaled = value.scaleb(decimals)
        except (Overflow, Underflow):
            raise InvalidInput(f"Amount {amount} is out of range") from None
        if scaled > MAX_UINT256:
            raise InvalidInput(f"Amount {amount} is out of range")
        if scaled != scaled.to_integral_value():
            raise InvalidInput(f"Amount {amount} has more than {decimals} decimal places")
        return int(scaled)


def format_units(raw: int, decimals: int) -> str:
    """Render base units as the shortest exact decimal string.

    >>> format_units(5000000000, 8)
    '50'
    """
    whole, frac = divmod(int(raw), 10**decimals)
    frac_digits = str(frac).rjust(decimals, "0").rstrip("0") if decimals else ""
    if frac_digits:
        return f"{whole}.{frac_digits}"
    return str(whole)
