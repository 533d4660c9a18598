"""User profile and saved outfit records."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class UserProfile:
    id: int
    name: str
    style_preference: str
    body_type: str
    created_at: Optional[str] = None


@dataclass(frozen=True)
class SavedOutfit:
    """A serialized recommendation saved by a user for an occasion."""

    id: int
    user_id: int
    outfit_json: str
    occasion: Optional[str]
    created_at: Optional[str] = None


__all__ = ["UserProfile", "SavedOutfit"]
