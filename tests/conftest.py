"""Pytest configuration and fixtures."""

import os
from typing import Optional

import pytest
import pytest_asyncio
from hexbytes import HexBytes
from httpx import ASGITransport, AsyncClient

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["RPC_URL"] = "http://localhost:8545"
os.environ["DEBUG"] = "true"

from swaprelay.api.app import create_app
from swaprelay.config import Settings

# Hardhat/Anvil default account #0 (public test key, never funded on mainnet)
TEST_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
TEST_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

WETH = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"
USDC = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"
TOKEN_8 = "0x2260FAC5E5542a773Aa44fBCfeDf7C193bc2C599"  # WBTC, 8 decimals


class FakeChain:
    """In-memory stand-in for ChainClient.

    Records every call so tests can assert which network steps ran.
    """

    def __init__(
        self,
        decimals: Optional[dict[str, int]] = None,
        balances: Optional[dict[str, int]] = None,
        allowances: Optional[dict[str, int]] = None,
        quotes: Optional[dict[int, int]] = None,
    ):
        self.decimals = {k.lower(): v for k, v in (decimals or {}).items()}
        self.balances = {k.lower(): v for k, v in (balances or {}).items()}
        self.allowances = {k.lower(): v for k, v in (allowances or {}).items()}
        # fee tier -> amount out; tiers missing here fail like a missing pool
        self.quotes = quotes or {}
        self.calls: list[tuple] = []
        self.closed = False
        self._tx_counter = 0

    def _next_hash(self) -> HexBytes:
        self._tx_counter += 1
        return HexBytes(self._tx_counter.to_bytes(32, "big"))

    async def get_decimals(self, token: str) -> int:
        self.calls.append(("decimals", token))
        if token.lower() not in self.decimals:
            raise ValueError(f"Could not call decimals() on {token}")
        return self.decimals[token.lower()]

    async def get_balance(self, token: str, owner: str) -> int:
        self.calls.append(("balanceOf", token, owner))
        return self.balances.get(token.lower(), 0)

    async def get_allowance(self, token: str, owner: str, spender: str) -> int:
        self.calls.append(("allowance", token, owner, spender))
        return self.allowances.get(token.lower(), 0)

    async def quote_exact_input_single(self, token_in, token_out, fee, amount_in, sqrt_price_limit_x96=0) -> int:
        self.calls.append(("quote", token_in, token_out, fee, amount_in, sqrt_price_limit_x96))
        if fee not in self.quotes:
            raise RuntimeError("execution reverted")
        return self.quotes[fee]

    async def approve(self, signer, token, spender, amount) -> dict:
        self.calls.append(("approve", token, spender, amount))
        self.allowances[token.lower()] = amount
        return {"transactionHash": self._next_hash(), "status": 1}

    async def exact_input_single(self, signer, params, gas_limit) -> dict:
        self.calls.append(("swap", params, gas_limit))
        return {"transactionHash": self._next_hash(), "status": 1}

    async def close(self) -> None:
        self.closed = True

    def call_names(self) -> list[str]:
        return [c[0] for c in self.calls]


@pytest.fixture
def settings() -> Settings:
    """Settings with mainnet defaults and no .env influence."""
    return Settings(_env_file=None, rpc_url="http://localhost:8545")


@pytest.fixture
def fake_chain() -> FakeChain:
    """Chain with WETH/USDC/WBTC known and every tier quoting."""
    return FakeChain(
        decimals={USDC: 6, TOKEN_8: 8},
        balances={WETH: 10**20, USDC: 10**12},
        allowances={},
        quotes={500: 1_000_000, 3000: 2_000_000, 10000: 3_000_000},
    )


@pytest_asyncio.fixture
async def client(settings, fake_chain):
    """Async test client over an app wired to the fake chain."""
    app = create_app(settings, chain=fake_chain)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
