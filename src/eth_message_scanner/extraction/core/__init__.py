"""Ledger access, payload normalization, and logging helpers."""
