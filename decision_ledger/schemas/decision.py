"""Decision Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - User ids are stripped and 1-64 chars after stripping
    - Liked-you responses always carry next_pagination_token ("" at the end)

Design Decisions:
    - field_validator for side-effect-free transforms (strip): keeps models pure
"""

from pydantic import BaseModel, Field, field_validator

from decision_ledger.core.domain_types import LikedYouPage
from decision_ledger.models.decision import USER_ID_LENGTH


def normalize_user_id(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("user id cannot be empty or whitespace")
    if len(v) > USER_ID_LENGTH:
        raise ValueError(f"user id longer than {USER_ID_LENGTH} characters")
    return v


class DecisionCreate(BaseModel):
    """Like (liked=true) or pass (liked=false) from actor toward recipient."""
    actor_id: str = Field(min_length=1)
    recipient_id: str = Field(min_length=1)
    liked: bool

    @field_validator("actor_id", "recipient_id")
    @classmethod
    def strip_user_id(cls, v: str) -> str:
        return normalize_user_id(v)


class DecisionResponse(BaseModel):
    mutual_like: bool


class LikerResponse(BaseModel):
    actor_id: str
    unix_timestamp: int


class LikedYouResponse(BaseModel):
    """One page of likers."""
    likers: list[LikerResponse]
    next_pagination_token: str = ""

    @classmethod
    def from_page(cls, page: LikedYouPage) -> "LikedYouResponse":
        return cls(
            likers=[
                LikerResponse(
                    actor_id=liker.actor_id,
                    unix_timestamp=liker.unix_timestamp,
                )
                for liker in page.likers
            ],
            next_pagination_token=page.next_pagination_token,
        )


class LikeCountResponse(BaseModel):
    count: int = Field(ge=0)
