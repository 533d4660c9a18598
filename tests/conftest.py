"""Shared fixtures for recommendation payloads and temporary configuration."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Dict

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from stylesense_app.config import StyleSenseConfig  # noqa: E402


@pytest.fixture()
def recommendation_payload() -> Dict[str, Any]:
    return {
        "title": "Quiet Confidence",
        "description": "A clean, tailored look for a job interview.",
        "occasion": "Job Interview",
        "items": [
            {
                "category": "Top",
                "name": "Crisp poplin shirt",
                "description": "White, slim fit, tucked in.",
                "color": "White",
                "style": "Minimalist",
            },
            {
                "category": "Bottom",
                "name": "Tailored trousers",
                "description": "High-waisted charcoal wool.",
                "color": "Charcoal",
                "style": "Classic",
            },
            {
                "category": "Shoes",
                "name": "Leather loafers",
                "description": "Black, polished.",
            },
        ],
        "stylingTips": ["Keep accessories to a thin watch.", "Steam the shirt the night before."],
    }


@pytest.fixture()
def recommendation_text(recommendation_payload: Dict[str, Any]) -> str:
    return json.dumps(recommendation_payload)


@pytest.fixture()
def config(tmp_path: Path) -> StyleSenseConfig:
    return StyleSenseConfig(
        api_key="test-key",
        database_path=str(tmp_path / "stylesense.db"),
        request_timeout_seconds=12.5,
        environment="test",
    )
