"""Explicit state for the onboarding and styling flow."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from models.profile import UserProfile
from models.recommendation import OutfitRecommendation


class OnboardingError(ValueError):
    """Raised when an onboarding step is submitted out of order or blank."""


class SessionStateError(RuntimeError):
    """Raised when an operation is not allowed in the current session phase."""


class RequestInFlightError(SessionStateError):
    """Raised when a second request is started before the first finishes."""


class OnboardingStep(str, Enum):
    NAME = "name"
    STYLE_PREFERENCE = "style_preference"
    BODY_TYPE = "body_type"
    COMPLETE = "complete"


_NEXT_STEP: Dict[OnboardingStep, OnboardingStep] = {
    OnboardingStep.NAME: OnboardingStep.STYLE_PREFERENCE,
    OnboardingStep.STYLE_PREFERENCE: OnboardingStep.BODY_TYPE,
    OnboardingStep.BODY_TYPE: OnboardingStep.COMPLETE,
}


@dataclass
class OnboardingFlow:
    """name -> style preference -> body type -> complete.

    Each ``submit`` fills the current step and advances; blank answers are
    rejected and leave the step unchanged.
    """

    step: OnboardingStep = OnboardingStep.NAME
    answers: Dict[str, str] = field(default_factory=dict)

    @property
    def is_complete(self) -> bool:
        return self.step is OnboardingStep.COMPLETE

    def submit(self, value: str) -> OnboardingStep:
        if self.is_complete:
            raise OnboardingError("onboarding is already complete")
        cleaned = (value or "").strip()
        if not cleaned:
            raise OnboardingError(f"{self.step.value} must not be empty")
        self.answers[self.step.value] = cleaned
        self.step = _NEXT_STEP[self.step]
        return self.step

    def profile_fields(self) -> Dict[str, str]:
        if not self.is_complete:
            raise OnboardingError(f"onboarding stopped at step {self.step.value}")
        return dict(self.answers)


class SessionPhase(str, Enum):
    UNSET = "unset"
    ONBOARDING = "onboarding"
    ACTIVE = "active"


@dataclass
class StyleSession:
    """Current user, recommendation and loading state for one client."""

    phase: SessionPhase = SessionPhase.UNSET
    onboarding: Optional[OnboardingFlow] = None
    user: Optional[UserProfile] = None
    recommendation: Optional[OutfitRecommendation] = None
    outfit_image: Optional[str] = None
    occasion: Optional[str] = None
    trends: List[str] = field(default_factory=list)
    loading: bool = False

    def start_onboarding(self) -> OnboardingFlow:
        if self.phase is SessionPhase.ACTIVE:
            raise SessionStateError("sign out before onboarding a new profile")
        self.phase = SessionPhase.ONBOARDING
        self.onboarding = OnboardingFlow()
        return self.onboarding

    def activate(self, user: UserProfile) -> None:
        self.phase = SessionPhase.ACTIVE
        self.onboarding = None
        self.user = user
        self.clear_recommendation()

    def sign_out(self) -> None:
        if self.loading:
            raise RequestInFlightError("cannot sign out while a request is running")
        self.phase = SessionPhase.UNSET
        self.onboarding = None
        self.user = None
        self.clear_recommendation()

    def require_active(self) -> UserProfile:
        if self.phase is not SessionPhase.ACTIVE or self.user is None:
            raise SessionStateError("no active profile; complete onboarding first")
        return self.user

    def begin_request(self) -> None:
        if self.loading:
            raise RequestInFlightError("a request is already in flight")
        self.loading = True

    def end_request(self) -> None:
        self.loading = False

    def set_recommendation(
        self, recommendation: OutfitRecommendation, occasion: Optional[str]
    ) -> None:
        self.recommendation = recommendation
        self.occasion = recommendation.occasion or occasion
        self.outfit_image = None

    def clear_recommendation(self) -> None:
        self.recommendation = None
        self.outfit_image = None
        self.occasion = None


__all__ = [
    "OnboardingError",
    "OnboardingFlow",
    "OnboardingStep",
    "RequestInFlightError",
    "SessionPhase",
    "SessionStateError",
    "StyleSession",
]
