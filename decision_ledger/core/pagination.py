"""Pagination Policy — page size defaults, cursor tokens, continuation signal.

Invariants:
    - parse_page_request is PURE and runs before any DB access (bad token → no work done)
    - Absent or empty token starts from the beginning (after_sequence = 0)
    - Non-positive cursors clamp to 0; non-numeric or out-of-range tokens raise InvalidTokenError
    - page_size is capped at MAX_PAGE_SIZE (unsigned 32-bit) so LIMIT always binds
    - next_page_token is non-empty ONLY when the page is exactly full

Design Decisions:
    - "Exactly full page" heuristic kept over a pageSize+1 peek: a dataset with exactly
      page_size rows left yields a token followed by one empty page
    - Token is the decimal string of the last sequence_id: opaque to callers, ordered for us
"""

import re
from dataclasses import dataclass

from decision_ledger.core.domain_types import SequenceId
from decision_ledger.core.errors import InvalidTokenError


DEFAULT_PAGE_SIZE: int = 2
START_OF_RESULTS = SequenceId(0)
MAX_SEQUENCE_ID: int = 2**63 - 1
MAX_PAGE_SIZE: int = 2**32 - 1

_TOKEN_PATTERN = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class PageRequest:
    """Normalized pagination parameters for one listing call."""
    page_size: int
    after_sequence: SequenceId


def parse_page_request(
    page_size: int | None,
    pagination_token: str | None,
    default_page_size: int = DEFAULT_PAGE_SIZE,
) -> PageRequest:
    """Apply defaults to page_size and decode the cursor token."""
    size = page_size if page_size is not None and page_size > 0 else default_page_size
    size = min(size, MAX_PAGE_SIZE)
    return PageRequest(
        page_size=size,
        after_sequence=decode_token(pagination_token),
    )


def decode_token(pagination_token: str | None) -> SequenceId:
    """Decode a cursor token. None or "" means start of results."""
    if not pagination_token:
        return START_OF_RESULTS
    if not _TOKEN_PATTERN.fullmatch(pagination_token):
        raise InvalidTokenError(pagination_token)
    value = int(pagination_token)
    if not -MAX_SEQUENCE_ID - 1 <= value <= MAX_SEQUENCE_ID:
        raise InvalidTokenError(pagination_token)
    if value <= 0:
        return START_OF_RESULTS
    return SequenceId(value)


def encode_token(sequence_id: SequenceId) -> str:
    return str(sequence_id)


def next_page_token(sequence_ids: list[SequenceId], page_size: int) -> str:
    """Token of the last row when the page is full, "" otherwise."""
    if sequence_ids and len(sequence_ids) == page_size:
        return encode_token(sequence_ids[-1])
    return ""
