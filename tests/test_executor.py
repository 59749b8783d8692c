"""Tests for the swap executor pipeline."""

import time
from decimal import Decimal

import pytest

from swaprelay.config import MAX_UINT256, Settings
from swaprelay.errors import (
    InsufficientBalance,
    InvalidInput,
    NoLiquidity,
    Unauthorized,
)
from swaprelay.swap.executor import SwapExecutor
from swaprelay.swap.signer import RequestSigner

from tests.conftest import TEST_ADDRESS, TEST_PRIVATE_KEY, USDC, WETH, FakeChain


class TestRequestSigner:
    """Tests for RequestSigner."""

    def test_from_credential(self):
        signer = RequestSigner.from_credential(TEST_PRIVATE_KEY)
        assert signer.address == TEST_ADDRESS

    def test_bearer_prefix_accepted(self):
        signer = RequestSigner.from_credential(f"Bearer {TEST_PRIVATE_KEY}")
        assert signer.address == TEST_ADDRESS

    def test_repr_hides_key(self):
        signer = RequestSigner.from_credential(TEST_PRIVATE_KEY)
        assert TEST_PRIVATE_KEY[2:] not in repr(signer)
        assert TEST_ADDRESS in repr(signer)

    @pytest.mark.parametrize("credential", [None, ""])
    def test_missing_credential(self, credential):
        with pytest.raises(Unauthorized):
            RequestSigner.from_credential(credential)

    def test_invalid_credential_not_echoed(self):
        with pytest.raises(Unauthorized) as exc_info:
            RequestSigner.from_credential("0xdeadbeef")
        assert "deadbeef" not in str(exc_info.value)


class TestSwapExecutor:
    """Tests for SwapExecutor.execute_swap."""

    @pytest.mark.asyncio
    async def test_missing_credential_makes_no_calls(self, settings, fake_chain):
        with pytest.raises(Unauthorized):
            await SwapExecutor(settings, fake_chain).execute_swap(None, "1", "eth", USDC)
        assert fake_chain.calls == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "amount_in,token_in,token_out",
        [(None, "eth", USDC), ("1", None, USDC), ("1", "eth", ""), ("", "", "")],
    )
    async def test_missing_fields_make_no_calls(self, settings, fake_chain, amount_in, token_in, token_out):
        with pytest.raises(InvalidInput):
            await SwapExecutor(settings, fake_chain).execute_swap(
                TEST_PRIVATE_KEY, amount_in, token_in, token_out
            )
        assert fake_chain.calls == []

    @pytest.mark.asyncio
    async def test_insufficient_balance_stops_pipeline(self, settings):
        """Allowance, quote and submit are never reached."""
        chain = FakeChain(balances={WETH: 10**17}, quotes={500: 1})

        with pytest.raises(InsufficientBalance, match="Insufficient token balance."):
            await SwapExecutor(settings, chain).execute_swap(TEST_PRIVATE_KEY, "1", "eth", USDC)

        assert chain.call_names() == ["balanceOf"]

    @pytest.mark.asyncio
    async def test_full_swap_with_approval(self, settings, fake_chain):
        """Approve max, quote first tier, submit with 1% slippage."""
        before = int(time.time())
        result = await SwapExecutor(settings, fake_chain).execute_swap(
            TEST_PRIVATE_KEY, "1", "eth", USDC
        )

        assert fake_chain.call_names() == ["balanceOf", "allowance", "approve", "quote", "swap"]

        approve = fake_chain.calls[2]
        assert approve == ("approve", WETH, settings.router_address, MAX_UINT256)

        _, params, gas_limit = fake_chain.calls[4]
        assert gas_limit == 300_000
        assert params.token_in == WETH
        assert params.token_out == USDC
        assert params.fee_tier == 500
        assert params.recipient == TEST_ADDRESS
        assert params.amount_in == 10**18
        assert params.amount_out_minimum == 990_000
        assert params.sqrt_price_limit_x96 == 0
        assert before + 300 <= params.deadline <= int(time.time()) + 300

        assert result.tx_hash == "0x" + "00" * 31 + "02"
        assert result.approval_tx_hash == "0x" + "00" * 31 + "01"
        assert result.quote.fee_tier == 500

    @pytest.mark.asyncio
    async def test_sufficient_allowance_skips_approval(self, settings):
        chain = FakeChain(
            decimals={USDC: 6},
            balances={USDC: 5_000_000},
            allowances={USDC: 5_000_000},
            quotes={500: 10**15},
        )
        result = await SwapExecutor(settings, chain).execute_swap(TEST_PRIVATE_KEY, "5", USDC, "eth")

        assert chain.call_names() == ["decimals", "balanceOf", "allowance", "quote", "swap"]
        assert result.approval_tx_hash is None
        assert result.params.token_out == WETH
        assert result.params.amount_in == 5_000_000

    @pytest.mark.asyncio
    async def test_exact_approval_policy(self):
        settings = Settings(_env_file=None, approval_policy="exact")
        chain = FakeChain(balances={WETH: 10**18}, quotes={500: 1})

        await SwapExecutor(settings, chain).execute_swap(TEST_PRIVATE_KEY, "0.5", "eth", USDC)

        approve = [c for c in chain.calls if c[0] == "approve"][0]
        assert approve[3] == 5 * 10**17

    @pytest.mark.asyncio
    async def test_non_weth_pair_uses_ceiling(self, settings):
        other = "0x0000000000000000000000000000000000000abc"
        chain = FakeChain(
            decimals={USDC: 6},
            balances={USDC: 10**6},
            allowances={USDC: MAX_UINT256},
            quotes={500: 1_000_000},
        )
        result = await SwapExecutor(settings, chain).execute_swap(TEST_PRIVATE_KEY, "1", USDC, other)

        assert result.params.amount_out_minimum == 970_000

    @pytest.mark.asyncio
    async def test_no_liquidity_leaves_approval_in_place(self, settings):
        """Approval is not rolled back when the quote step fails."""
        chain = FakeChain(balances={WETH: 10**18}, quotes={})

        with pytest.raises(NoLiquidity):
            await SwapExecutor(settings, chain).execute_swap(TEST_PRIVATE_KEY, "1", "eth", USDC)

        assert "approve" in chain.call_names()
        assert "swap" not in chain.call_names()
        assert chain.allowances[WETH.lower()] == MAX_UINT256

    @pytest.mark.asyncio
    async def test_invalid_amount(self, settings, fake_chain):
        with pytest.raises(InvalidInput):
            await SwapExecutor(settings, fake_chain).execute_swap(TEST_PRIVATE_KEY, "lots", "eth", USDC)
        assert fake_chain.calls == []

    @pytest.mark.asyncio
    async def test_slippage_bound_from_settings(self):
        settings = Settings(_env_file=None, base_slippage=Decimal("0.001"))
        chain = FakeChain(balances={WETH: 10**18}, allowances={WETH: 10**18}, quotes={500: 1_000_000})

        result = await SwapExecutor(settings, chain).execute_swap(TEST_PRIVATE_KEY, "1", "eth", USDC)

        assert result.params.amount_out_minimum == 998_000

    @pytest.mark.asyncio
    async def test_oversized_amount_rejected_before_rpc(self, settings, fake_chain):
        """An amount beyond uint256 is a 400, never a balance lookup."""
        with pytest.raises(InvalidInput, match="out of range"):
            await SwapExecutor(settings, fake_chain).execute_swap(TEST_PRIVATE_KEY, "1e5000", "eth", USDC)
        assert fake_chain.calls == []

    @pytest.mark.asyncio
    async def test_stable_alias_gets_base_slippage(self, settings):
        """tokenOut "usdt" reaches the 0.5% rule unchanged."""
        chain = FakeChain(balances={WETH: 10**18}, allowances={WETH: 10**18}, quotes={500: 1_000_000})

        result = await SwapExecutor(settings, chain).execute_swap(TEST_PRIVATE_KEY, "1", "eth", "usdt")

        assert result.params.token_out == "usdt"
        assert result.params.amount_out_minimum == 995_000
