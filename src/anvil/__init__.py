"""Anvil — a plugin-driven build orchestrator."""

__version__ = "0.1.0"
