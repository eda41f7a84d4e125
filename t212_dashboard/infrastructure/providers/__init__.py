"""Brokerage provider adapters."""
