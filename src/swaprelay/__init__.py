"""SwapRelay - quote and execute Uniswap V3 single-hop swaps over HTTP."""

__version__ = "0.1.0"
