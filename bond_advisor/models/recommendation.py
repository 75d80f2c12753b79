"""
Recommendation output model.

``Recommendation`` is the only thing the engine produces. It is built fresh
on every run, never persisted, and carries display text only: a category
tag, a title, a one-line description and an ordered list of action items.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from bond_advisor.taxonomy.asset_taxonomy import RecommendationCategory


class Recommendation(BaseModel):
    """A single piece of advice for display.

    Attributes:
        category: Which analysis produced it (``rollover``, ``liquidity``, ...).
        title: Short headline, e.g. ``"Bund 2026 matures in 45 days"``.
        description: One sentence of context preceding the action items.
        action_items: Ordered, human-readable suggestions.
        link: Optional external reference.
        region: Optional region tag the advice applies to.
    """

    model_config = ConfigDict(frozen=True)

    category: RecommendationCategory
    title: str
    description: str
    action_items: list[str] = []
    link: Optional[str] = None
    region: Optional[str] = None

    @field_validator("title")
    @classmethod
    def validate_title_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("title must not be empty.")
        return v.strip()
