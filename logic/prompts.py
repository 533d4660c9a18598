"""Stylist prompts and guardrails shared by the stylist agent."""

from __future__ import annotations

from typing import List

from logic.validation import StyleRequest
from models.recommendation import OutfitRecommendation

GUARDRAIL_BULLETS: List[str] = [
    "Stay within fashion and styling advice for the described occasion.",
    "Build a cohesive look covering top, bottom, shoes and accessories.",
    "Respect the stated style preference, fit preference and weather.",
    "Do not comment on the user's body beyond the fit preference they gave.",
    "Return JSON that matches the response schema and nothing else.",
]

TRENDS_PROMPT = (
    "What are the top {count} fashion trends for the current season? "
    "Provide a list of short, catchy trend names."
)


def system_instruction(role_hint: str = "fashion stylist") -> str:
    """Compose a consistent system prompt with boundary reminders."""

    boundary_text = "\n".join(f"- {bullet}" for bullet in GUARDRAIL_BULLETS)
    return (
        f"You are a world-class, high-end {role_hint}.\n"
        "Follow these guardrails before responding:\n"
        f"{boundary_text}"
    )


def build_recommendation_prompt(request: StyleRequest, default_weather: str = "mild") -> str:
    lines = ["Generate a complete outfit recommendation for the following context:"]
    if request.gender:
        lines.append(f"- Gender: {request.gender}")
    if request.preferences:
        lines.append(f"- User Style Preferences: {request.preferences}")
    if request.body_type:
        lines.append(f"- Body Type / Fit Preference: {request.body_type}")
    if request.occasion:
        lines.append(f"- Occasion: {request.occasion}")
    lines.append(f"- Current Weather: {request.weather or default_weather}")
    if request.location:
        lines.append(f"- Location: {request.location}")
    if request.image_base64:
        lines.append("- A photo is attached: build the look around the garments or style shown in it.")
    lines.append("")
    lines.append("Provide a cohesive look including top, bottom, shoes, and accessories.")
    if request.occasion:
        lines.append("Set the occasion field to the occasion above.")
    return "\n".join(lines)


def describe_for_image(recommendation: OutfitRecommendation) -> str:
    """Summarize a recommendation as ``title. category: name, ...``."""

    pieces = ", ".join(f"{item.category}: {item.name}" for item in recommendation.items)
    return f"{recommendation.title}. {pieces}"


def build_image_prompt(outfit_description: str) -> str:
    return (
        f"A high-end fashion editorial photograph of a complete outfit: {outfit_description}. "
        "The style should be elegant, professional lighting, clean background, high fashion aesthetic. "
        "Portrait 3:4 framing. Show the full outfit clearly."
    )


__all__ = [
    "GUARDRAIL_BULLETS",
    "TRENDS_PROMPT",
    "build_image_prompt",
    "build_recommendation_prompt",
    "describe_for_image",
    "system_instruction",
]
