"""Fee-tier quoting, slippage policy and shared swap value types."""
