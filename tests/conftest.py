from __future__ import annotations

import dataclasses
import sys
from pathlib import Path
from typing import Callable, Optional
from unittest.mock import AsyncMock, Mock

import pytest


# Ensure the project root is importable when running `pytest` via its entrypoint
# (e.g., `uv run --extra test pytest`), where `sys.path[0]` may not be the repo root.
_PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from lingopanel.config.settings import invalidate_settings_cache  # noqa: E402
from lingopanel.services.translation_service import TranslationService  # noqa: E402
from lingopanel.ui.state import AppState  # noqa: E402


class FakeView:
    """In-memory TranslationView: records renders and timers, and doubles as the clipboard writer."""

    def __init__(self):
        self.renders: list[AppState] = []
        self.clipboard: list[str] = []
        self.clipboard_error: Optional[Exception] = None
        self.timers: list[tuple[float, Callable[[], None]]] = []

    def render(self, state: AppState) -> None:
        # Snapshot, the controller mutates the same state object
        self.renders.append(dataclasses.replace(state))

    async def write_clipboard(self, text: str) -> None:
        if self.clipboard_error is not None:
            raise self.clipboard_error
        self.clipboard.append(text)

    def schedule(self, delay: float, callback: Callable[[], None]) -> None:
        self.timers.append((delay, callback))

    def fire_timer(self, index: int = 0) -> None:
        _, callback = self.timers[index]
        callback()

    @property
    def last(self) -> AppState:
        return self.renders[-1]


@pytest.fixture
def fake_view() -> FakeView:
    return FakeView()


@pytest.fixture
def mock_gemini_client():
    """GeminiClient stand-in returning a well-formed payload"""
    client = Mock()
    client.model = "gemini-2.5-flash"
    client.generate = AsyncMock(return_value='{"translation": "Hola mundo"}')
    return client


@pytest.fixture
def translation_service(mock_gemini_client) -> TranslationService:
    return TranslationService(mock_gemini_client)


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    invalidate_settings_cache()
    yield
    invalidate_settings_cache()
