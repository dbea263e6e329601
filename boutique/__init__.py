"""Boutique Chogan: catalogue, checkout Stripe et administration (FastAPI)."""

__version__ = "1.0.0"
