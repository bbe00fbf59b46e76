"""Streamlit dashboard for the partner ledger."""

__all__ = []
