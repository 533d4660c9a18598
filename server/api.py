"""FastAPI server exposing profile, saved-outfit and stylist endpoints."""

from typing import Any, Dict, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from agents.stylist_agent import RETRY_MESSAGE, RecommendationUnavailableError
from logic.validation import ImageRequest, SavedOutfitCreateRequest, StyleRequest, UserCreateRequest
from stylesense_app.app import StyleSenseApp
from tools.profile_store import UnknownUserError

_APP: FastAPI | None = None


def _error(status_code: int, message: str, **extra: Any) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, **extra})


def create_app(style_app: StyleSenseApp | None = None) -> FastAPI:
    """Build the API around a StyleSenseApp (a fresh one from the environment by default)."""

    service = style_app or StyleSenseApp()
    api = FastAPI(title="StyleSense", version="0.1.0")
    api.state.style_app = service

    @api.exception_handler(RequestValidationError)
    async def _validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
        details = [
            {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
            for error in exc.errors()
        ]
        return _error(422, "Invalid request", details=details)

    @api.get("/healthz")
    async def healthcheck() -> dict:
        """Lightweight readiness probe."""

        return {
            "status": "ok",
            "service": "stylesense",
            "environment": service.config.environment or "local",
            "model": service.config.model,
        }

    @api.get("/api/user/{user_id}")
    def get_user(user_id: int) -> Any:
        user = service.profile_tools.get_user(user_id=user_id)
        if user is None:
            return _error(404, "User not found")
        return user

    @api.post("/api/user")
    def create_user(payload: UserCreateRequest) -> Dict[str, int]:
        return service.profile_tools.create_user(**payload.model_dump())

    @api.get("/api/outfits/{user_id}")
    def list_outfits(user_id: int) -> List[Dict[str, Any]]:
        return service.profile_tools.list_saved_outfits(user_id=user_id)

    @api.post("/api/outfits")
    def create_outfit(payload: SavedOutfitCreateRequest) -> Any:
        try:
            return service.profile_tools.create_saved_outfit(
                user_id=payload.user_id,
                outfit_json=payload.outfit_json,
                occasion=payload.occasion,
            )
        except UnknownUserError as exc:
            return _error(404, str(exc))

    @api.post("/api/recommendations")
    def recommend(payload: StyleRequest) -> Any:
        """Run one stylist call; no persistence happens here."""

        try:
            recommendation = service.stylist.recommend_outfit(payload)
        except RecommendationUnavailableError:
            return _error(503, RETRY_MESSAGE)
        return recommendation.to_payload()

    @api.post("/api/recommendations/image")
    def recommendation_image(payload: ImageRequest) -> Dict[str, Any]:
        return {"image": service.stylist.generate_outfit_image(payload.description)}

    @api.get("/api/trends")
    def trends() -> List[str]:
        return service.stylist.fetch_trends()

    return api


def get_app() -> FastAPI:
    """Expose a process-wide FastAPI instance for ASGI servers."""

    global _APP
    if _APP is None:
        _APP = create_app()
    return _APP


if __name__ == "__main__":
    import uvicorn

    from stylesense_app.config import StyleSenseConfig

    settings = StyleSenseConfig.from_env()
    uvicorn.run("server.api:get_app", factory=True, host=settings.host, port=settings.port, reload=False)
