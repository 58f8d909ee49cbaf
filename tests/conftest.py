from __future__ import annotations

import sys
from pathlib import Path
from types import SimpleNamespace
from typing import Any

import pytest


def pytest_configure(config) -> None:  # pragma: no cover - pytest hook
    root = Path(__file__).resolve().parents[1]
    src_path = root / "src"
    if src_path.exists() and str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


def make_operation(done: bool = False, error: Any = None, uris: list[str] | None = None, name: str = "operations/veo-1"):
    response = None
    if uris is not None:
        response = SimpleNamespace(
            generated_videos=[SimpleNamespace(video=SimpleNamespace(uri=uri)) for uri in uris]
        )
    return SimpleNamespace(name=name, done=done, error=error, response=response)


class FakeModels:
    def __init__(self, text: str | None = None, operation: Any = None, exc: Exception | None = None) -> None:
        self.text = text
        self.operation = operation
        self.exc = exc
        self.content_calls: list[dict[str, Any]] = []
        self.video_calls: list[dict[str, Any]] = []

    def generate_content(self, **kwargs: Any):
        self.content_calls.append(kwargs)
        if self.exc is not None:
            raise self.exc
        return SimpleNamespace(text=self.text)

    def generate_videos(self, **kwargs: Any):
        self.video_calls.append(kwargs)
        if self.exc is not None:
            raise self.exc
        return self.operation


class FakeOperations:
    def __init__(self, sequence: list[Any] | None = None, exc: Exception | None = None) -> None:
        self.sequence = list(sequence or [])
        self.exc = exc
        self.calls: list[Any] = []

    def get(self, operation: Any):
        self.calls.append(operation)
        if self.exc is not None:
            raise self.exc
        return self.sequence.pop(0)


class FakeGenaiClient:
    """Stands in for ``google.genai.Client`` with scripted replies."""

    def __init__(
        self,
        text: str | None = None,
        operations: list[Any] | None = None,
        models_exc: Exception | None = None,
        operations_exc: Exception | None = None,
    ) -> None:
        handles = list(operations or [])
        first = handles.pop(0) if handles else None
        self.models = FakeModels(text=text, operation=first, exc=models_exc)
        self.operations = FakeOperations(handles, exc=operations_exc)


class RecordingSleep:
    def __init__(self) -> None:
        self.calls: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


SCRIPT_JSON = (
    '{"dialogue": ['
    '{"speaker": "Human", "text": "Is that really you?"}, '
    '{"speaker": "Bigfoot", "text": "Time is a pyramid scheme."}'
    '], "visualPrompt": "dim room, two mics..."}'
)


@pytest.fixture
def image_file(tmp_path: Path) -> Path:
    path = tmp_path / "bigfoot.jpg"
    path.write_bytes(b"\xff\xd8\xff\xe0fake-jpeg")
    return path


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()
