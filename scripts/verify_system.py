#!/usr/bin/env python3
"""Quick verification script: config, RPC connectivity and a live quote.

Usage:
    python scripts/verify_system.py [AMOUNT] [TOKEN_IN] [TOKEN_OUT]

Defaults to quoting 1 eth (WETH) into mainnet USDC.
"""

import asyncio
import sys

from dotenv import load_dotenv

load_dotenv()

# Colors for output
GREEN = "\033[92m"
RED = "\033[91m"
YELLOW = "\033[93m"
RESET = "\033[0m"
CHECK = "✓"
CROSS = "✗"

USDC_MAINNET = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"


def print_status(name: str, success: bool, message: str = ""):
    """Print status with color."""
    if success:
        print(f"  {GREEN}{CHECK}{RESET} {name}" + (f" - {message}" if message else ""))
    else:
        print(f"  {RED}{CROSS}{RESET} {name}" + (f" - {message}" if message else ""))


def test_config():
    """Test settings load and validate."""
    print("\n⚙️  Testing Configuration...")

    try:
        from swaprelay.config import get_settings

        settings = get_settings()
        safe = settings.get_safe_dict()
        print_status("Settings loaded", True, f"chain {safe['chain']['chain_id']} via {safe['chain']['rpc']}")
        print_status("Fee tiers", True, str(safe["swap"]["fee_tiers"]))
        return True
    except Exception as e:
        print_status("Configuration", False, str(e))
        return False


async def test_rpc():
    """Test the RPC endpoint answers."""
    print("\n🔗 Testing RPC...")

    from swaprelay.chain import ChainClient
    from swaprelay.config import get_settings

    chain = ChainClient(get_settings())
    try:
        block = await chain.w3.eth.block_number
        print_status("RPC reachable", True, f"block {block}")
        return True
    except Exception as e:
        print_status("RPC", False, str(e))
        return False
    finally:
        await chain.close()


async def test_quote(amount: str, token_in: str, token_out: str):
    """Quote a pair through the same service the API uses."""
    print(f"\n💱 Quoting {amount} {token_in} -> {token_out}...")

    from swaprelay.chain import ChainClient
    from swaprelay.config import get_settings
    from swaprelay.web.contracts.quotes import QuoteRequest
    from swaprelay.web.services.quote_service import QuoteService

    settings = get_settings()
    chain = ChainClient(settings)
    try:
        quote = await QuoteService(settings, chain).get_quote(
            QuoteRequest(amount_in=amount, token_in=token_in, token_out=token_out)
        )
        print_status("Quote", True, f"fee tier {quote.fee_tier}: {quote.amount_out} ({quote.amount_out_raw} raw)")
        return True
    except Exception as e:
        print_status("Quote", False, str(e))
        return False
    finally:
        await chain.close()


async def main():
    """Run all checks."""
    args = sys.argv[1:]
    amount = args[0] if len(args) > 0 else "1"
    token_in = args[1] if len(args) > 1 else "eth"
    token_out = args[2] if len(args) > 2 else USDC_MAINNET

    print("=" * 60)
    print("     SWAPRELAY SYSTEM VERIFICATION")
    print("=" * 60)

    results = {}
    results["config"] = test_config()
    results["rpc"] = await test_rpc() if results["config"] else False
    results["quote"] = await test_quote(amount, token_in, token_out) if results["rpc"] else False

    # Summary
    print("\n" + "=" * 60)
    print("     SUMMARY")
    print("=" * 60)

    passed = sum(1 for v in results.values() if v)
    total = len(results)

    for name, success in results.items():
        status = f"{GREEN}{CHECK}{RESET}" if success else f"{RED}{CROSS}{RESET}"
        print(f"  {status} {name.replace('_', ' ').title()}")

    print()
    if passed == total:
        print(f"  {GREEN}All {total} checks passed!{RESET}")
        return 0
    else:
        print(f"  {YELLOW}{passed}/{total} checks passed{RESET}")
        return 1


if __name__ == "__main__":
    exit_code = asyncio.run(main())
    sys.exit(exit_code)
