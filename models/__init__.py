"""Model package exports."""

from models.profile import SavedOutfit, UserProfile
from models.recommendation import (
    OutfitItem,
    OutfitRecommendation,
    RecommendationParseError,
    parse_recommendation,
)

__all__ = [
    "OutfitItem",
    "OutfitRecommendation",
    "RecommendationParseError",
    "SavedOutfit",
    "UserProfile",
    "parse_recommendation",
]
