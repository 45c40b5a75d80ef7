"""Adapters: state storage for the compliance ledger.

Contains:
- ledger_state.py : In-memory ledger tables and the per-call transaction boundary
"""

__all__: list[str] = []
