"""Outfit recommendation schema shared by the stylist agent, store and API."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator


class RecommendationParseError(ValueError):
    """Raised when model output does not satisfy the recommendation schema."""


class OutfitItem(BaseModel):
    """One garment or accessory inside a recommendation.

    Model output sometimes labels the garment ``item`` instead of ``name``;
    both are accepted on input and ``name`` is always emitted.
    """

    model_config = ConfigDict(populate_by_name=True)

    category: str = Field(min_length=1)
    name: str = Field(min_length=1, validation_alias=AliasChoices("name", "item"))
    description: str
    color: Optional[str] = None
    style: Optional[str] = None


class OutfitRecommendation(BaseModel):
    """A complete look: title, summary, ordered items and styling tips."""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    description: str
    items: List[OutfitItem] = Field(min_length=1)
    styling_tips: List[str] = Field(alias="stylingTips", min_length=1)
    occasion: Optional[str] = None

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, title: str) -> str:
        if not title.strip():
            raise ValueError("title must not be blank")
        return title

    def to_payload(self) -> Dict[str, Any]:
        """Return the camelCase wire form used by the UI and saved outfits."""

        return self.model_dump(by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        return json.dumps(self.to_payload())


def parse_recommendation(text: str | None) -> OutfitRecommendation:
    """Decode model text into a validated recommendation, failing closed."""

    if not text or not text.strip():
        raise RecommendationParseError("empty response text")
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise RecommendationParseError(f"response is not JSON: {exc.msg}") from exc
    if not isinstance(payload, dict):
        raise RecommendationParseError("response JSON is not an object")
    try:
        return OutfitRecommendation.model_validate(payload)
    except ValidationError as exc:
        raise RecommendationParseError(f"response failed schema checks: {exc.error_count()} errors") from exc


def parse_trends(text: str | None, limit: int = 5) -> List[str]:
    """Decode a JSON array of trend labels."""

    if not text or not text.strip():
        raise RecommendationParseError("empty response text")
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise RecommendationParseError(f"response is not JSON: {exc.msg}") from exc
    if not isinstance(payload, list) or not all(isinstance(entry, str) for entry in payload):
        raise RecommendationParseError("trend response is not a list of strings")
    return [entry.strip() for entry in payload if entry.strip()][:limit]


# Gemini response-schema declarations. Type names follow the API enum.
OUTFIT_ITEM_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "category": {"type": "STRING"},
        "name": {"type": "STRING"},
        "description": {"type": "STRING"},
        "color": {"type": "STRING"},
        "style": {"type": "STRING"},
    },
    "required": ["category", "name", "description"],
}

RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "title": {"type": "STRING"},
        "description": {"type": "STRING"},
        "occasion": {"type": "STRING"},
        "items": {"type": "ARRAY", "items": OUTFIT_ITEM_SCHEMA},
        "stylingTips": {"type": "ARRAY", "items": {"type": "STRING"}},
    },
    "required": ["title", "description", "items", "stylingTips"],
}

TRENDS_SCHEMA: Dict[str, Any] = {"type": "ARRAY", "items": {"type": "STRING"}}


__all__ = [
    "OutfitItem",
    "OutfitRecommendation",
    "RecommendationParseError",
    "RESPONSE_SCHEMA",
    "TRENDS_SCHEMA",
    "parse_recommendation",
    "parse_trends",
]
