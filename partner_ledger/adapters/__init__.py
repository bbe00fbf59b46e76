"""Adapters driving the ledger use cases (CLIs and dashboard)."""
