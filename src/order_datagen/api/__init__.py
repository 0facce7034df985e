"""HTTP API models and routers for the orders dashboard."""
