"""Fuzzy-find Canvas module items and open them in the browser."""
