"""HTTP service exposing the tradeview query endpoints."""
