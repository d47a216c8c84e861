"""Decision Transitions — counter accounting for like/pass state changes.

Invariants:
    - counter_effect is PURE: returns the effect, the shell applies it
    - Only a change in the "liked" dimension moves the counter
    - Repeating an identical decision is a no-op on the counter

Transition table (previous → new : effect):
    none  → pass : NONE        none  → like : INCREMENT
    pass  → pass : NONE        pass  → like : INCREMENT
    like  → pass : DECREMENT   like  → like : NONE
"""

from decision_ledger.core.domain_types import CounterEffect


def counter_effect(previous: bool | None, liked: bool) -> CounterEffect:
    """Map (previous decision, new decision) to the like counter adjustment."""
    was_liked = previous is True
    if liked and not was_liked:
        return CounterEffect.INCREMENT
    if was_liked and not liked:
        return CounterEffect.DECREMENT
    return CounterEffect.NONE


def reports_mutual_like(liked: bool, reverse_liked: bool) -> bool:
    """A pass never reports a match, whatever the reverse decision is."""
    return liked and reverse_liked
