"""Profile and saved-outfit storage tests."""

from __future__ import annotations

import sqlite3
from pathlib import Path

import pytest
from pydantic import ValidationError

from tools.profile_store import MAX_ROW_ID, SQLiteProfileStore, UnknownUserError
from tools.profile_tools import ProfileTools


@pytest.fixture()
def store(tmp_path: Path) -> SQLiteProfileStore:
    return SQLiteProfileStore(tmp_path / "nested" / "stylesense.db")


def _count_saved_outfits(store: SQLiteProfileStore) -> int:
    with sqlite3.connect(store.database_path) as conn:
        return conn.execute("SELECT COUNT(*) FROM saved_outfits").fetchone()[0]


def test_create_then_fetch_user_round_trip(store: SQLiteProfileStore) -> None:
    """Fetching by the returned id gives back exactly the onboarding inputs."""

    user_id = store.create_user("Ada", "Minimalist", "Athletic")
    user = store.get_user(user_id)

    assert user is not None
    assert (user.id, user.name, user.style_preference, user.body_type) == (
        user_id,
        "Ada",
        "Minimalist",
        "Athletic",
    )
    assert user.created_at


def test_store_assigns_distinct_ids(store: SQLiteProfileStore) -> None:
    first = store.create_user("Ada", "Minimalist", "Athletic")
    second = store.create_user("Grace", "Bohemian", "Relaxed")
    assert first != second


def test_get_unknown_user_returns_none(store: SQLiteProfileStore) -> None:
    assert store.get_user(999) is None


def test_saved_outfit_for_unknown_user_fails_without_orphan(
    store: SQLiteProfileStore, recommendation_text: str
) -> None:
    with pytest.raises(UnknownUserError) as info:
        store.create_saved_outfit(42, recommendation_text, "Gala")

    assert info.value.user_id == 42
    assert _count_saved_outfits(store) == 0
    assert store.list_saved_outfits(42) == []


def test_list_returns_exactly_n_outfits_in_creation_order(
    store: SQLiteProfileStore, recommendation_text: str
) -> None:
    user_id = store.create_user("Ada", "Minimalist", "Athletic")
    other_id = store.create_user("Grace", "Bohemian", "Relaxed")
    occasions = ["Job Interview", "Summer Wedding", "Date Night", "Brunch"]

    created = [store.create_saved_outfit(user_id, recommendation_text, occasion) for occasion in occasions]
    store.create_saved_outfit(other_id, recommendation_text, "Gala")

    saved = store.list_saved_outfits(user_id)
    assert len(saved) == len(occasions)
    assert [outfit.id for outfit in saved] == created
    assert [outfit.occasion for outfit in saved] == occasions
    assert all(outfit.user_id == user_id for outfit in saved)
    assert saved[0].outfit_json == recommendation_text


def test_values_are_bound_not_interpolated(store: SQLiteProfileStore) -> None:
    """Quotes and SQL fragments are stored verbatim."""

    hostile = "Robert'); DROP TABLE users;--"
    user_id = store.create_user(hostile, "Classic", "Tall")

    user = store.get_user(user_id)
    assert user is not None and user.name == hostile
    assert store.create_user("Next", "Classic", "Tall") == user_id + 1


def test_profile_tools_return_json_ready_dicts(store: SQLiteProfileStore, recommendation_text: str) -> None:
    tools = ProfileTools(store)

    created = tools.create_user(name="  Ada ", style_preference="Minimalist", body_type="Athletic")
    user = tools.get_user(user_id=created["id"])
    assert user is not None and user["name"] == "Ada"

    saved = tools.create_saved_outfit(user_id=created["id"], outfit_json=recommendation_text, occasion="Gala")
    outfits = tools.list_saved_outfits(user_id=created["id"])
    assert outfits[0]["id"] == saved["id"]
    assert outfits[0]["occasion"] == "Gala"


def test_profile_tools_validate_before_writing(store: SQLiteProfileStore) -> None:
    tools = ProfileTools(store)
    user = tools.create_user(name="Ada", style_preference="Minimalist", body_type="Athletic")

    with pytest.raises(ValidationError):
        tools.create_user(name="", style_preference="Minimalist", body_type="Athletic")
    with pytest.raises(ValidationError):
        tools.create_saved_outfit(user_id=user["id"], outfit_json="{\"title\": \"x\"}", occasion=None)
    assert _count_saved_outfits(store) == 0


def test_out_of_range_ids_behave_like_unknown_users(
    store: SQLiteProfileStore, recommendation_text: str
) -> None:
    too_large = MAX_ROW_ID + 1

    assert store.get_user(too_large) is None
    assert store.list_saved_outfits(too_large) == []
    with pytest.raises(UnknownUserError):
        store.create_saved_outfit(too_large, recommendation_text, "Gala")
    assert _count_saved_outfits(store) == 0


def test_other_integrity_errors_are_not_reported_as_unknown_user(store: SQLiteProfileStore) -> None:
    user_id = store.create_user("Ada", "Minimalist", "Athletic")

    with pytest.raises(sqlite3.IntegrityError) as info:
        store.create_saved_outfit(user_id, None, "Gala")  # type: ignore[arg-type]

    assert not isinstance(info.value, UnknownUserError)
    assert _count_saved_outfits(store) == 0


def test_connections_are_closed_after_each_call(
    store: SQLiteProfileStore, monkeypatch: pytest.MonkeyPatch
) -> None:
    opened: list[sqlite3.Connection] = []
    connect = store._connect

    def _tracking_connect() -> sqlite3.Connection:
        conn = connect()
        opened.append(conn)
        return conn

    monkeypatch.setattr(store, "_connect", _tracking_connect)
    user_id = store.create_user("Ada", "Minimalist", "Athletic")
    store.get_user(user_id)
    store.list_saved_outfits(user_id)

    assert len(opened) == 3
    for conn in opened:
        with pytest.raises(sqlite3.ProgrammingError):
            conn.execute("SELECT 1")
