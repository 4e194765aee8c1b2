"""Hybrid product retrieval for an appliance replacement-parts assistant."""
