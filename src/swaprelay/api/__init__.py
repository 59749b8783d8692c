"""HTTP application and shared routes."""
