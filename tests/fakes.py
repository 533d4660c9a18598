"""Offline stand-ins for generative model responses."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any, Dict, List


class FakeResponse:
    """Mimics the text/candidates surface of a generate_content response."""

    def __init__(self, text: str | None = None, parts: List[Any] | None = None) -> None:
        self._text = text
        self.candidates = [SimpleNamespace(content=SimpleNamespace(parts=parts))] if parts is not None else []

    @property
    def text(self) -> str:
        if self._text is None:
            raise ValueError("response has no text part")
        return self._text


class FakeModelFactory:
    """Replays queued results in place of a model class and records every call."""

    def __init__(self, *results: Any) -> None:
        self.results: List[Any] = list(results)
        self.calls: List[Dict[str, Any]] = []

    def __call__(self, model_name: str, system_instruction: str | None = None) -> "_FakeModel":
        return _FakeModel(self, model_name, system_instruction)


class _FakeModel:
    def __init__(self, factory: FakeModelFactory, model_name: str, system_instruction: str | None) -> None:
        self.factory = factory
        self.model_name = model_name
        self.system_instruction = system_instruction

    def generate_content(self, contents: Any, generation_config: Any = None, request_options: Any = None) -> Any:
        self.factory.calls.append(
            {
                "model_name": self.model_name,
                "system_instruction": self.system_instruction,
                "contents": contents,
                "generation_config": generation_config,
                "request_options": request_options,
            }
        )
        if not self.factory.results:
            raise AssertionError("unexpected model call")
        result = self.factory.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


def image_response(data: bytes = b"\x89PNG-bytes", mime_type: str = "image/png") -> FakeResponse:
    text_part = SimpleNamespace(inline_data=None, text="Here is your outfit")
    image_part = SimpleNamespace(inline_data=SimpleNamespace(data=data, mime_type=mime_type))
    return FakeResponse(parts=[text_part, image_part])
