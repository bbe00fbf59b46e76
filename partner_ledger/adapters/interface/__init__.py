"""User interfaces for the partner ledger."""

__all__ = []
