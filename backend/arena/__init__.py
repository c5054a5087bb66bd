"""Odyssey Arena backend package."""
