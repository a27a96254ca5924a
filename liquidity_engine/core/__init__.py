"""
Core domain models, decimal math primitives, and contracts.

This module contains the building blocks that are independent of external
systems (ledger nodes, wallets, UI).
"""
