"""Decision Recorder — tests for transactional counter accounting and mutual likes.

Tests cover:
    - Counter effects for every transition, driven through the real stores
    - Repeat likes idempotent; like→pass round-trips the counter
    - Mutual like reported to the second liker only; a pass never reports one
    - A pass does not look up the reverse decision
    - Failure mid-transaction rolls back the decision write too
    - Lost insert race does not double count
"""

import pytest
from sqlalchemy.exc import OperationalError

from decision_ledger.core.errors import TransactionFailureError
from decision_ledger.services.decision_recorder import DecisionRecorder
from decision_ledger.services.decision_store import SqlDecisionStore
from decision_ledger.services.like_counter import SqlLikeCounter


async def _record(test_session_factory, actor, recipient, liked, **overrides):
    async with test_session_factory() as session:
        recorder = DecisionRecorder(session, **overrides)
        return await recorder.record_decision(actor, recipient, liked)


# ─── counter accounting ──────────────────────────────────────────

async def test_first_like_increments(test_session_factory, count_of):
    await _record(test_session_factory, "a", "b", True)
    assert await count_of("b") == 1


async def test_first_pass_leaves_no_counter(test_session_factory, count_of):
    await _record(test_session_factory, "a", "b", False)
    assert await count_of("b") is None


async def test_pass_to_like_increments(test_session_factory, count_of):
    await _record(test_session_factory, "a", "b", False)
    await _record(test_session_factory, "a", "b", True)
    assert await count_of("b") == 1


async def test_repeat_like_is_idempotent(test_session_factory, count_of):
    await _record(test_session_factory, "a", "b", True)
    after_first = await count_of("b")
    await _record(test_session_factory, "a", "b", True)
    assert await count_of("b") == after_first == 1


async def test_repeat_pass_is_idempotent(test_session_factory, count_of):
    await _record(test_session_factory, "c", "b", True)
    await _record(test_session_factory, "a", "b", False)
    await _record(test_session_factory, "a", "b", False)
    assert await count_of("b") == 1


async def test_like_then_pass_round_trips(test_session_factory, count_of):
    await _record(test_session_factory, "c", "b", True)
    before = await count_of("b")
    await _record(test_session_factory, "a", "b", True)
    await _record(test_session_factory, "a", "b", False)
    assert await count_of("b") == before


async def test_counter_matches_liked_rows(test_session_factory, count_of):
    decisions = [
        ("a", "r", True), ("b", "r", True), ("c", "r", True),
        ("b", "r", False), ("c", "r", True), ("d", "r", False),
        ("d", "r", True), ("a", "r", False), ("a", "r", True),
    ]
    for actor, recipient, liked in decisions:
        await _record(test_session_factory, actor, recipient, liked)
    # final: a=like, b=pass, c=like, d=like
    assert await count_of("r") == 3


# ─── mutual likes ────────────────────────────────────────────────

async def test_mutual_like_reported_to_second_liker(test_session_factory):
    first = await _record(test_session_factory, "a", "b", True)
    second = await _record(test_session_factory, "b", "a", True)
    assert first is False
    assert second is True


async def test_pass_never_reports_mutual(test_session_factory):
    await _record(test_session_factory, "a", "b", True)
    await _record(test_session_factory, "b", "a", True)
    assert await _record(test_session_factory, "b", "a", False) is False


async def test_like_after_reverse_pass_not_mutual(test_session_factory):
    await _record(test_session_factory, "a", "b", False)
    assert await _record(test_session_factory, "b", "a", True) is False


async def test_pass_skips_reverse_lookup(test_session_factory):
    lookups = []

    class _CountingStore(SqlDecisionStore):
        async def reverse_like_exists(self, actor_id, recipient_id):
            lookups.append((actor_id, recipient_id))
            return await super().reverse_like_exists(actor_id, recipient_id)

    async with test_session_factory() as session:
        recorder = DecisionRecorder(session, decisions=_CountingStore(session))
        await recorder.record_decision("b", "a", True)
        assert lookups == [("b", "a")]
        assert await recorder.record_decision("b", "a", False) is False
        assert lookups == [("b", "a")]


async def test_repeat_like_still_reports_mutual(test_session_factory):
    await _record(test_session_factory, "a", "b", True)
    await _record(test_session_factory, "b", "a", True)
    assert await _record(test_session_factory, "b", "a", True) is True


# ─── atomicity ───────────────────────────────────────────────────

class _FailingCounter:
    async def increment(self, user_id):
        raise OperationalError("UPDATE like_counters", {}, Exception("connection lost"))

    async def decrement(self, user_id):
        raise OperationalError("UPDATE like_counters", {}, Exception("connection lost"))

    async def get(self, user_id):
        return 0


async def test_counter_failure_rolls_back_decision(
    test_session_factory, decision_of, count_of,
):
    with pytest.raises(TransactionFailureError) as exc_info:
        await _record(
            test_session_factory, "a", "b", True, counter=_FailingCounter(),
        )
    assert exc_info.value.code == "TRANSACTION_FAILURE"
    assert exc_info.value.context.actor_id == "a"
    assert await decision_of("a", "b") is None
    assert await count_of("b") is None


async def test_failure_on_update_keeps_previous_state(
    test_session_factory, decision_of, count_of,
):
    await _record(test_session_factory, "a", "b", True)
    with pytest.raises(TransactionFailureError):
        await _record(
            test_session_factory, "a", "b", False, counter=_FailingCounter(),
        )
    assert (await decision_of("a", "b")).liked is True
    assert await count_of("b") == 1


async def test_failure_in_mutual_check_rolls_back(
    test_session_factory, decision_of, count_of,
):
    class _BrokenReverseLookup(SqlDecisionStore):
        async def reverse_like_exists(self, actor_id, recipient_id):
            raise OperationalError("SELECT EXISTS", {}, Exception("timeout"))

    async with test_session_factory() as session:
        recorder = DecisionRecorder(
            session, decisions=_BrokenReverseLookup(session),
        )
        with pytest.raises(TransactionFailureError):
            await recorder.record_decision("a", "b", True)

    assert await decision_of("a", "b") is None
    assert await count_of("b") is None


async def test_lost_insert_race_does_not_double_count(test_session_factory, count_of):
    await _record(test_session_factory, "a", "b", True)

    async with test_session_factory() as session:
        store = SqlDecisionStore(session)
        real_lock_previous = store._lock_previous
        reads = []

        async def stale_first_read(actor_id, recipient_id):
            reads.append(actor_id)
            if len(reads) == 1:
                return None
            return await real_lock_previous(actor_id, recipient_id)

        store._lock_previous = stale_first_read
        recorder = DecisionRecorder(
            session, decisions=store, counter=SqlLikeCounter(session),
        )
        await recorder.record_decision("a", "b", True)

    assert await count_of("b") == 1
