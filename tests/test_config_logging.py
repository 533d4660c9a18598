"""Configuration loading and log redaction tests."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from stylesense_app.config import DEFAULT_GEMINI_MODEL, StyleSenseConfig
from stylesense_app.logging_config import JsonFormatter, log_event, redact_for_log


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in (
        "APP_ENV",
        "APP_CONFIG_PATH",
        "GEMINI_API_KEY",
        "GOOGLE_API_KEY",
        "MODEL",
        "DATABASE_PATH",
        "REQUEST_TIMEOUT_SECONDS",
        "PORT",
    ):
        monkeypatch.delenv(key, raising=False)


def test_defaults_without_environment(clean_env: None) -> None:
    config = StyleSenseConfig.from_env()

    assert config.model == DEFAULT_GEMINI_MODEL
    assert config.api_key is None
    assert config.request_timeout_seconds == 30.0
    assert config.port == 3000


def test_yaml_file_merged_under_environment(
    clean_env: None, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    config_file = tmp_path / "staging.yaml"
    config_file.write_text(
        "# staging settings\n"
        "model: \"gemini-2.5-flash\"\n"
        "database_path: /tmp/staging.db\n"
        "request_timeout_seconds: 10\n"
    )
    monkeypatch.setenv("APP_CONFIG_PATH", str(config_file))
    monkeypatch.setenv("DATABASE_PATH", "/var/lib/stylesense.db")
    monkeypatch.setenv("GOOGLE_API_KEY", "from-google-key")

    config = StyleSenseConfig.from_env()

    assert config.model == "gemini-2.5-flash"
    assert config.database_path == "/var/lib/stylesense.db"
    assert config.request_timeout_seconds == 10.0
    assert config.api_key == "from-google-key"


def test_redaction_masks_profile_fields() -> None:
    scrubbed = redact_for_log(
        {
            "style_preference": "Minimalist",
            "outfit_json": "{}",
            "contact": "ada@example.com",
            "image": "data:image/png;base64,AAAA",
            "count": 3,
        }
    )

    assert scrubbed["style_preference"] == "[redacted]"
    assert scrubbed["outfit_json"] == "[redacted]"
    assert scrubbed["contact"] == "[redacted-email]"
    assert scrubbed["image"] == "[redacted-image]"
    assert scrubbed["count"] == 3


def test_log_event_emits_json_with_correlation_id() -> None:
    records: list[logging.LogRecord] = []

    class _Collect(logging.Handler):
        def emit(self, record: logging.LogRecord) -> None:
            records.append(record)

    logger = logging.getLogger("stylesense.test")
    logger.setLevel(logging.INFO)
    logger.propagate = False
    logger.addHandler(_Collect())

    log_event(logger, logging.INFO, "user_created", name="Ada", correlation_id="abc123")

    payload = json.loads(JsonFormatter().format(records[0]))
    assert payload["event"] == "user_created"
    assert payload["correlation_id"] == "abc123"
    assert payload["field_name"] == "[redacted]"
