"""Signed swap execution for a single request."""
