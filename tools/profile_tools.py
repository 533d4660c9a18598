"""Dict-shaped, instrumented wrappers around profile storage."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List, Optional

from logic.validation import SavedOutfitCreateRequest, UserCreateRequest
from tools.observability import instrument_tool
from tools.profile_store import ProfileStore, SQLiteProfileStore


def _default_store() -> SQLiteProfileStore:
    return SQLiteProfileStore()


class ProfileTools:
    """Thin wrapper to expose ProfileStore operations as JSON-ready calls.

    Inputs are validated with the request schemas before touching the store, so
    a blank name or a malformed outfit never reaches SQL.
    """

    def __init__(self, store: Optional[ProfileStore] = None) -> None:
        self.store = store or _default_store()

    @instrument_tool("create_user", input_model=UserCreateRequest)
    def create_user(self, *, name: str, style_preference: str, body_type: str) -> Dict[str, Any]:
        user_id = self.store.create_user(name, style_preference, body_type)
        return {"id": user_id}

    @instrument_tool("get_user")
    def get_user(self, user_id: int) -> Optional[Dict[str, Any]]:
        user = self.store.get_user(user_id)
        return asdict(user) if user else None

    @instrument_tool("create_saved_outfit", input_model=SavedOutfitCreateRequest)
    def create_saved_outfit(self, *, user_id: int, outfit_json: str, occasion: Optional[str] = None) -> Dict[str, Any]:
        outfit_id = self.store.create_saved_outfit(user_id, outfit_json, occasion)
        return {"id": outfit_id}

    @instrument_tool("list_saved_outfits")
    def list_saved_outfits(self, user_id: int) -> List[Dict[str, Any]]:
        return [asdict(outfit) for outfit in self.store.list_saved_outfits(user_id)]


__all__ = ["ProfileTools"]
