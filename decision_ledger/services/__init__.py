"""Services Layer — imperative shell around the pure core.

Invariants:
    - Store classes take an AsyncSession and never commit
    - DecisionRecorder owns the commit/rollback of a decision transaction
    - DecisionLedger is the only entry point the API layer uses
"""
