"""Web boundary layer: request contracts, services and controllers."""

__all__ = [
    "contracts",
    "services",
    "controllers",
]
