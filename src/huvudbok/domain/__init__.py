"""Domain layer for huvudbok: ledger entities, algorithms and services."""
