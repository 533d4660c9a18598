"""Stylist agent wrapping Gemini calls for recommendations, images and trends."""
from __future__ import annotations

import base64
import logging
from typing import Any, Callable, Dict, List, Optional

import google.generativeai as genai

from stylesense_app.config import StyleSenseConfig
from stylesense_app.logging_config import get_logger, log_event, operation_context
from logic.prompts import (
    TRENDS_PROMPT,
    build_image_prompt,
    build_recommendation_prompt,
    describe_for_image,
    system_instruction,
)
from logic.validation import StyleRequest
from models.recommendation import (
    RESPONSE_SCHEMA,
    TRENDS_SCHEMA,
    OutfitRecommendation,
    RecommendationParseError,
    parse_recommendation,
    parse_trends,
)

logger = get_logger(__name__)

ModelFactory = Callable[..., Any]

RETRY_MESSAGE = "Our stylist is unavailable right now. Please try again in a moment."


class RecommendationUnavailableError(RuntimeError):
    """Raised when no schema-conforming recommendation could be produced.

    Transport errors, blocked or empty responses and malformed JSON all map to
    this one failure kind. Callers show ``user_message`` and never retry.
    """

    user_message = RETRY_MESSAGE


def _response_text(response: Any) -> Optional[str]:
    # ``text`` raises ValueError when the candidate has no text part.
    try:
        return response.text
    except ValueError:
        return None


def _response_parts(response: Any) -> List[Any]:
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return []
    content = getattr(candidates[0], "content", None)
    return list(getattr(content, "parts", None) or [])


class StylistAgent:
    """Issues single, schema-constrained calls to the hosted model."""

    def __init__(self, config: StyleSenseConfig, model_factory: ModelFactory | None = None) -> None:
        self.config = config
        self._model_factory = model_factory or genai.GenerativeModel
        self.system_instruction = system_instruction()

    def _text_model(self) -> Any:
        return self._model_factory(
            model_name=self.config.model, system_instruction=self.system_instruction
        )

    def _request_options(self) -> Dict[str, float]:
        return {"timeout": self.config.request_timeout_seconds}

    def recommend_outfit(self, request: StyleRequest) -> OutfitRecommendation:
        """Return a validated recommendation or raise RecommendationUnavailableError."""

        with operation_context("agent:stylist.recommend_outfit") as correlation_id:
            log_event(
                logger,
                level=logging.INFO,
                event="agent_call_started",
                agent="stylist",
                method="recommend_outfit",
                correlation_id=correlation_id,
                occasion=request.occasion,
                has_image=request.image_base64 is not None,
            )
            contents: List[Any] = [build_recommendation_prompt(request, self.config.default_weather)]
            image = request.image_bytes()
            if image is not None:
                contents.append({"mime_type": request.image_mime_type, "data": image})

            try:
                response = self._text_model().generate_content(
                    contents,
                    generation_config={
                        "response_mime_type": "application/json",
                        "response_schema": RESPONSE_SCHEMA,
                    },
                    request_options=self._request_options(),
                )
            except Exception as exc:  # noqa: BLE001
                log_event(
                    logger,
                    level=logging.ERROR,
                    event="agent_call_failed",
                    agent="stylist",
                    method="recommend_outfit",
                    correlation_id=correlation_id,
                    reason="transport",
                    exc_info=True,
                )
                raise RecommendationUnavailableError(f"model call failed: {exc}") from exc

            try:
                recommendation = parse_recommendation(_response_text(response))
            except RecommendationParseError as exc:
                log_event(
                    logger,
                    level=logging.WARNING,
                    event="agent_call_failed",
                    agent="stylist",
                    method="recommend_outfit",
                    correlation_id=correlation_id,
                    reason="schema",
                    details=str(exc),
                )
                raise RecommendationUnavailableError(str(exc)) from exc

            if request.occasion and not recommendation.occasion:
                recommendation = recommendation.model_copy(update={"occasion": request.occasion})

            log_event(
                logger,
                level=logging.INFO,
                event="agent_call_completed",
                agent="stylist",
                method="recommend_outfit",
                correlation_id=correlation_id,
                item_count=len(recommendation.items),
                tip_count=len(recommendation.styling_tips),
            )
            return recommendation

    def generate_outfit_image(self, outfit_description: str) -> Optional[str]:
        """Render an outfit description to a ``data:`` URI, or None when no image comes back."""

        with operation_context("agent:stylist.generate_outfit_image") as correlation_id:
            try:
                response = self._model_factory(model_name=self.config.image_model).generate_content(
                    build_image_prompt(outfit_description),
                    request_options=self._request_options(),
                )
            except Exception:  # noqa: BLE001
                log_event(
                    logger,
                    level=logging.WARNING,
                    event="image_generation_failed",
                    agent="stylist",
                    correlation_id=correlation_id,
                    exc_info=True,
                )
                return None

            for part in _response_parts(response):
                inline = getattr(part, "inline_data", None)
                data = getattr(inline, "data", None) if inline is not None else None
                if not data:
                    continue
                mime_type = getattr(inline, "mime_type", None) or "image/png"
                encoded = data if isinstance(data, str) else base64.b64encode(data).decode("ascii")
                return f"data:{mime_type};base64,{encoded}"

            log_event(
                logger,
                level=logging.INFO,
                event="image_generation_empty",
                agent="stylist",
                correlation_id=correlation_id,
            )
            return None

    def generate_image_for(self, recommendation: OutfitRecommendation) -> Optional[str]:
        return self.generate_outfit_image(describe_for_image(recommendation))

    def fetch_trends(self, limit: int | None = None) -> List[str]:
        """Return current trend labels; any failure yields an empty list."""

        count = limit or self.config.trend_count
        try:
            response = self._model_factory(model_name=self.config.model).generate_content(
                TRENDS_PROMPT.format(count=count),
                generation_config={
                    "response_mime_type": "application/json",
                    "response_schema": TRENDS_SCHEMA,
                },
                request_options=self._request_options(),
            )
            return parse_trends(_response_text(response), limit=count)
        except Exception:  # noqa: BLE001
            log_event(
                logger,
                level=logging.WARNING,
                event="trend_fetch_failed",
                agent="stylist",
                exc_info=True,
            )
            return []


__all__ = ["RETRY_MESSAGE", "RecommendationUnavailableError", "StylistAgent"]
