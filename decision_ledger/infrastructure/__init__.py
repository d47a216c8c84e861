"""Infrastructure Layer — database lifecycle and logging setup.

Invariants:
    - Infrastructure never contains ledger rules (those live in core/ and services/)
"""
