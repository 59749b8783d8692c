"""Async JSON-RPC access to the token, quoter and router contracts.

All network I/O of the service goes through ``ChainClient``. Every method is a
suspension point; nothing here caches or retries.
"""

import logging
from dataclasses import replace
from typing import Any, Optional

from web3 import AsyncHTTPProvider, AsyncWeb3, Web3

from swaprelay.abi import ERC20_ABI, V3_QUOTER_ABI, V3_ROUTER_ABI
from swaprelay.config import Settings
from swaprelay.errors import TransactionReverted
from swaprelay.routing.base import SwapParams
from swaprelay.swap.signer import RequestSigner

logger = logging.getLogger(__name__)


class ChainClient:
    """Thin async wrapper around web3 for the calls the service needs."""

    def __init__(self, settings: Settings, w3: Optional[AsyncWeb3] = None):
        self.settings = settings
        self._w3 = w3

    @property
    def w3(self) -> AsyncWeb3:
        """Lazy load web3 instance."""
        if self._w3 is None:
            self._w3 = AsyncWeb3(AsyncHTTPProvider(self.settings.rpc_url))
        return self._w3

    async def close(self) -> None:
        """Release the HTTP session held by the provider."""
        if self._w3 is not None:
            await self._w3.provider.disconnect()

    def erc20(self, token: str):
        """ERC-20 contract handle for a token address."""
        return self.w3.eth.contract(address=Web3.to_checksum_address(token), abi=ERC20_ABI)

    def quoter(self):
        return self.w3.eth.contract(
            address=Web3.to_checksum_address(self.settings.quoter_address), abi=V3_QUOTER_ABI
        )

    def router(self):
        return self.w3.eth.contract(
            address=Web3.to_checksum_address(self.settings.router_address), abi=V3_ROUTER_ABI
        )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_decimals(self, token: str) -> int:
        return int(await self.erc20(token).functions.decimals().call())

    async def get_balance(self, token: str, owner: str) -> int:
        return int(await self.erc20(token).functions.balanceOf(
            Web3.to_checksum_address(owner)
        ).call())

    async def get_allowance(self, token: str, owner: str, spender: str) -> int:
        return int(await self.erc20(token).functions.allowance(
            Web3.to_checksum_address(owner),
            Web3.to_checksum_address(spender),
        ).call())

    async def quote_exact_input_single(
        self,
        token_in: str,
        token_out: str,
        fee: int,
        amount_in: int,
        sqrt_price_limit_x96: int = 0,
    ) -> int:
        """Simulate a single-hop exact-input swap via eth_call.

        Raises whatever web3 raises when the pool is missing or the call reverts.
        """
        amount_out = await self.quoter().functions.quoteExactInputSingle(
            Web3.to_checksum_address(token_in),
            Web3.to_checksum_address(token_out),
            int(fee),
            int(amount_in),
            int(sqrt_price_limit_x96),
        ).call()
        return int(amount_out)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def approve(self, signer: RequestSigner, token: str, spender: str, amount: int) -> dict:
        """Send approve(spender, amount) and wait until it is mined."""
        fn = self.erc20(token).functions.approve(Web3.to_checksum_address(spender), int(amount))
        return await self._send(signer, fn)

    async def exact_input_single(self, signer: RequestSigner, params: SwapParams, gas_limit: int) -> dict:
        """Send exactInputSingle(params) with no attached value and wait until mined."""
        params = replace(
            params,
            token_in=Web3.to_checksum_address(params.token_in),
            token_out=Web3.to_checksum_address(params.token_out),
            recipient=Web3.to_checksum_address(params.recipient),
        )
        fn = self.router().functions.exactInputSingle(params.as_tuple())
        return await self._send(signer, fn, gas_limit=gas_limit)

    async def _send(self, signer: RequestSigner, fn, gas_limit: Optional[int] = None) -> dict:
        """Sign, broadcast and wait for a contract call.

        Raises:
            TransactionReverted: If the transaction was mined with status 0
        """
        tx_params: dict[str, Any] = {
            "from": signer.address,
            "chainId": self.settings.chain_id,
            "nonce": await self.w3.eth.get_transaction_count(signer.address, "pending"),
            "value": 0,
        }
        if gas_limit is not None:
            tx_params["gas"] = gas_limit

        tx = await fn.build_transaction(tx_params)
        raw = signer.sign_transaction(tx)
        tx_hash = Web3.to_hex(await self.w3.eth.send_raw_transaction(raw))
        logger.info(f"Transaction broadcast: {tx_hash} from {signer.address}")

        receipt = await self.w3.eth.wait_for_transaction_receipt(
            tx_hash, timeout=self.settings.receipt_timeout_seconds
        )
        if receipt["status"] == 0:
            raise TransactionReverted(tx_hash, dict(receipt))

        logger.info(f"Transaction mined: {tx_hash} in block {receipt['blockNumber']}")
        return dict(receipt)
