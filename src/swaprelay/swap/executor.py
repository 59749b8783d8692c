"""On-chain swap execution.

Runs the whole swap pipeline for one request: validate, resolve tokens,
normalize the amount, check balance, top up allowance, quote, apply slippage,
submit and wait for the receipt. Each step is terminal on failure and nothing
is retried or rolled back. An approval that succeeded stays in place when the
swap after it fails, so calling again is safe.
"""

import logging
import time
from dataclasses import dataclass
from typing import Optional

from web3 import Web3

from swaprelay.chain import ChainClient
from swaprelay.config import Settings
from swaprelay.errors import InsufficientBalance, InvalidInput, Unauthorized
from swaprelay.routing.base import Quote, SwapParams
from swaprelay.routing.quoter import FeeTierQuoter
from swaprelay.routing.slippage import SlippagePolicy, minimum_output
from swaprelay.swap.signer import RequestSigner
from swaprelay.tokens import AmountNormalizer, TokenResolver

logger = logging.getLogger(__name__)


@dataclass
class SwapResult:
    """Result of a mined swap."""

    tx_hash: str
    params: SwapParams
    quote: Quote
    approval_tx_hash: Optional[str] = None


class SwapExecutor:
    """Executes exactInputSingle swaps on behalf of a per-request signer."""

    def __init__(self, settings: Settings, chain: ChainClient):
        self.settings = settings
        self.chain = chain
        self.resolver = TokenResolver(settings)
        self.normalizer = AmountNormalizer(settings, chain, self.resolver)
        self.quoter = FeeTierQuoter(settings, chain)
        self.slippage = SlippagePolicy(settings)

    async def execute_swap(
        self,
        credential: Optional[str],
        amount_in: Optional[str],
        token_in: Optional[str],
        token_out: Optional[str],
    ) -> SwapResult:
        """Swap amount_in of token_in for token_out.

        "eth" is treated as WETH on both sides. No native value is ever sent,
        so the signer must already hold WETH to sell it, and receives WETH
        (not ETH) when buying it.

        Raises:
            Unauthorized: Missing or invalid credential
            InvalidInput: Missing fields or unparseable amount
            InsufficientBalance: Signer balance below amount_in
            NoLiquidity: No fee tier could be quoted
            DownstreamFailure: Reverted transaction
        """
        # 1. Validate before touching the network
        if not credential:
            raise Unauthorized("Private key required in Authorization header")
        if not amount_in or not token_in or not token_out:
            raise InvalidInput("Missing required parameters in request body")
        signer = RequestSigner.from_credential(credential)

        # 2. Resolve and normalize
        token_in_address = self.resolver.resolve(token_in)
        token_out_address = self.resolver.resolve(token_out)
        amount_in_wei = await self.normalizer.to_base_units(amount_in, token_in)

        # 3. Balance
        balance = await self.chain.get_balance(token_in_address, signer.address)
        if balance < amount_in_wei:
            logger.info(
                f"Insufficient balance for {signer.address}: "
                f"has {balance}, needs {amount_in_wei} of {token_in_address}"
            )
            raise InsufficientBalance("Insufficient token balance.")

        # 4. Allowance
        approval_tx_hash = await self._ensure_allowance(signer, token_in_address, amount_in_wei)

        # 5. Quote
        quote = await self.quoter.get_best_quote(token_in_address, token_out_address, amount_in_wei)

        # 6. Slippage
        bound = self.slippage.classify(token_in_address, token_out_address)
        amount_out_minimum = minimum_output(quote.amount_out, bound)

        # 7. Submit
        params = SwapParams(
            token_in=token_in_address,
            token_out=token_out_address,
            fee_tier=quote.fee_tier,
            recipient=signer.address,
            deadline=int(time.time()) + self.settings.deadline_seconds,
            amount_in=amount_in_wei,
            amount_out_minimum=amount_out_minimum,
            sqrt_price_limit_x96=0,
        )
        logger.info(f"Submitting swap (slippage {bound * 100}%): {params.to_dict()}")
        receipt = await self.chain.exact_input_single(signer, params, self.settings.max_gas_limit)

        # 8. Return
        tx_hash = _tx_hash(receipt)
        logger.info(f"Swap complete: {tx_hash}")
        return SwapResult(
            tx_hash=tx_hash,
            params=params,
            quote=quote,
            approval_tx_hash=approval_tx_hash,
        )

    async def _ensure_allowance(self, signer: RequestSigner, token: str, amount: int) -> Optional[str]:
        """Approve the router if its allowance is below amount.

        Returns:
            Approval tx hash if an approval was sent, None otherwise
        """
        router = self.settings.router_address
        allowance = await self.chain.get_allowance(token, signer.address, router)
        if allowance >= amount:
            logger.debug(f"Token already approved: allowance={allowance}")
            return None

        approve_amount = self.settings.approval_amount(amount)
        logger.info(
            f"Approving {token} for {router} "
            f"({self.settings.approval_policy} policy, allowance={allowance})"
        )
        receipt = await self.chain.approve(signer, token, router, approve_amount)
        approval_tx_hash = _tx_hash(receipt)
        logger.info(f"Approval complete: {approval_tx_hash}")
        return approval_tx_hash


def _tx_hash(receipt: dict) -> str:
    value = receipt["transactionHash"]
    if isinstance(value, str):
        return value
    return Web3.to_hex(value)
