"""Pydantic schemas and helpers for validating stylist and store inputs."""

from __future__ import annotations

import base64
import binascii
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from models.recommendation import RecommendationParseError, parse_recommendation


class StyleRequest(BaseModel):
    """Context for one recommendation.

    A request needs free-text context (preferences or occasion) or an image;
    anything else is rejected before the model is called.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    preferences: Optional[str] = None
    occasion: Optional[str] = None
    weather: Optional[str] = None
    location: Optional[str] = None
    gender: Optional[str] = None
    body_type: Optional[str] = None
    image_base64: Optional[str] = None
    image_mime_type: str = "image/jpeg"

    @model_validator(mode="before")
    @classmethod
    def _split_data_url(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        image = values.get("image_base64")
        if isinstance(image, str) and image.startswith("data:") and "," in image:
            header, data = image.split(",", 1)
            values = {**values, "image_base64": data}
            mime_type = header[len("data:"):].split(";", 1)[0]
            if mime_type:
                values["image_mime_type"] = mime_type
        return values

    @field_validator("image_base64")
    @classmethod
    def _validate_image(cls, image: Optional[str]) -> Optional[str]:
        if not image:
            return None
        try:
            base64.b64decode(image, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ValueError("image_base64 is not valid base64 data") from exc
        return image

    @model_validator(mode="after")
    def _require_context_or_image(self) -> "StyleRequest":
        if not (self.preferences or self.occasion or self.image_base64):
            raise ValueError("Describe the occasion or your style, or upload a photo first")
        return self

    def image_bytes(self) -> Optional[bytes]:
        return base64.b64decode(self.image_base64) if self.image_base64 else None


class UserCreateRequest(BaseModel):
    """Input contract for onboarding a user."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1)
    style_preference: str = Field(min_length=1)
    body_type: str = Field(min_length=1)


class SavedOutfitCreateRequest(BaseModel):
    """Input contract for saving a recommendation."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: int = Field(alias="userId", gt=0)
    outfit_json: str = Field(alias="outfitJson")
    occasion: Optional[str] = None

    @field_validator("outfit_json")
    @classmethod
    def _outfit_is_recommendation(cls, outfit_json: str) -> str:
        try:
            parse_recommendation(outfit_json)
        except RecommendationParseError as exc:
            raise ValueError(f"outfitJson is not a valid recommendation: {exc}") from exc
        return outfit_json


class ImageRequest(BaseModel):
    """Input contract for outfit image generation."""

    model_config = ConfigDict(str_strip_whitespace=True)

    description: str = Field(min_length=1)


class ValidationResult(BaseModel):
    """Wrapper returned to callers when validation fails."""

    status: Literal["needs_review"] = "needs_review"
    message: str
    details: List[Dict[str, Any]]


def validation_failure(message: str, exc: ValidationError) -> Dict[str, Any]:
    """Translate Pydantic errors into a consistent review payload."""

    details = [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
        for error in exc.errors()
    ]
    return ValidationResult(message=message, details=details).model_dump()


__all__ = [
    "ImageRequest",
    "SavedOutfitCreateRequest",
    "StyleRequest",
    "UserCreateRequest",
    "ValidationResult",
    "validation_failure",
]
