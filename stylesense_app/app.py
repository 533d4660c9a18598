"""StyleSense app bootstrap and user-flow operations."""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Any, Dict, List, Optional

import google.generativeai as genai
from pydantic import ValidationError

from agents.stylist_agent import (
    RETRY_MESSAGE,
    ModelFactory,
    RecommendationUnavailableError,
    StylistAgent,
)
from logic.validation import StyleRequest, ValidationResult, validation_failure
from memory.session_state import OnboardingError, OnboardingFlow, RequestInFlightError, StyleSession
from stylesense_app.config import StyleSenseConfig
from stylesense_app.logging_config import configure_logging, get_logger, log_event, operation_context
from tools.profile_store import ProfileStore, SQLiteProfileStore, UnknownUserError
from tools.profile_tools import ProfileTools

LOGGER = get_logger(__name__)


class StyleSenseApp:
    """Wires together the store, the stylist agent and the session state."""

    def __init__(
        self,
        config: StyleSenseConfig | None = None,
        model_factory: ModelFactory | None = None,
        store: ProfileStore | None = None,
    ) -> None:
        self.config = config or StyleSenseConfig.from_env()
        configure_logging()
        genai.configure(api_key=self.config.api_key)

        self.store = store or SQLiteProfileStore(self.config.database_path)
        self.profile_tools = ProfileTools(self.store)
        self.stylist = StylistAgent(self.config, model_factory=model_factory)
        self.session = StyleSession()

    # Onboarding -----------------------------------------------------------

    def start_onboarding(self) -> OnboardingFlow:
        """Move the session into onboarding and return the step sequence."""

        return self.session.start_onboarding()

    def complete_onboarding(self) -> Dict[str, Any]:
        """Persist the finished onboarding answers and activate the profile."""

        flow = self.session.onboarding
        if flow is None:
            return ValidationResult(message="Onboarding has not started", details=[]).model_dump()
        try:
            fields = flow.profile_fields()
        except OnboardingError as exc:
            return ValidationResult(message=str(exc), details=[]).model_dump()

        try:
            created = self.profile_tools.create_user(**fields)
        except ValidationError as exc:
            return validation_failure("Invalid profile details", exc)
        return self.sign_in(created["id"])

    def onboard(self, name: str, style_preference: str, body_type: str) -> Dict[str, Any]:
        """Run the three onboarding steps in one call."""

        flow = self.start_onboarding()
        for value in (name, style_preference, body_type):
            try:
                flow.submit(value)
            except OnboardingError as exc:
                return ValidationResult(message=str(exc), details=[]).model_dump()
        return self.complete_onboarding()

    def sign_in(self, user_id: int) -> Dict[str, Any]:
        user = self.store.get_user(user_id)
        if user is None:
            return {"status": "error", "message": "User not found"}
        self.session.activate(user)
        log_event(LOGGER, logging.INFO, "session_activated", user_id=user.id)
        return {"status": "ok", "user": asdict(user)}

    def sign_out(self) -> None:
        self.session.sign_out()

    # Styling --------------------------------------------------------------

    def generate_recommendation(
        self,
        occasion: Optional[str] = None,
        *,
        preferences: Optional[str] = None,
        weather: Optional[str] = None,
        location: Optional[str] = None,
        gender: Optional[str] = None,
        image_base64: Optional[str] = None,
        include_image: bool = False,
    ) -> Dict[str, Any]:
        """Ask the stylist for a look; nothing is persisted here.

        The active profile supplies style and fit preferences unless
        ``preferences`` overrides them. Invalid input returns a ``needs_review``
        payload without calling the model. When ``include_image`` is set the
        image request runs after, and is derived from, the text result.
        """

        user = self.session.user
        with operation_context("app:generate_recommendation") as correlation_id:
            try:
                request = StyleRequest(
                    preferences=preferences or (user.style_preference if user else None),
                    occasion=occasion,
                    weather=weather,
                    location=location,
                    gender=gender,
                    body_type=user.body_type if user else None,
                    image_base64=image_base64,
                )
            except ValidationError as exc:
                log_event(
                    LOGGER,
                    logging.INFO,
                    "app_request_invalid",
                    method="generate_recommendation",
                    correlation_id=correlation_id,
                )
                return validation_failure("Describe the occasion or your style, or upload a photo first", exc)

            try:
                self.session.begin_request()
            except RequestInFlightError as exc:
                return {"status": "error", "message": str(exc)}
            try:
                recommendation = self.stylist.recommend_outfit(request)
                self.session.set_recommendation(recommendation, request.occasion)
                if include_image:
                    self.session.outfit_image = self.stylist.generate_image_for(recommendation)
            except RecommendationUnavailableError:
                self.session.clear_recommendation()
                return {"status": "error", "message": RETRY_MESSAGE}
            finally:
                self.session.end_request()

            return {
                "status": "ok",
                "recommendation": recommendation.to_payload(),
                "image": self.session.outfit_image,
            }

    def save_current_outfit(self) -> Dict[str, Any]:
        """Persist the recommendation currently shown to the active user."""

        user = self.session.require_active()
        recommendation = self.session.recommendation
        if recommendation is None:
            return {"status": "error", "message": "There is no recommendation to save yet"}
        try:
            created = self.profile_tools.create_saved_outfit(
                user_id=user.id,
                outfit_json=recommendation.to_json(),
                occasion=self.session.occasion,
            )
        except UnknownUserError as exc:
            return {"status": "error", "message": str(exc)}
        return {"status": "ok", "id": created["id"]}

    def list_saved_outfits(self) -> List[Dict[str, Any]]:
        user = self.session.require_active()
        return self.profile_tools.list_saved_outfits(user_id=user.id)

    def refresh_trends(self) -> List[str]:
        """Reload trend labels; an empty list means the lookup failed."""

        self.session.trends = self.stylist.fetch_trends()
        return self.session.trends


__all__ = ["StyleSenseApp"]
