# tests/test_app.py
"""Tests for lingopanel.ui.app (no NiceGUI server is started)"""

import json
import tempfile
from pathlib import Path

import pytest

from lingopanel.config.settings import AppSettings
from lingopanel.models.types import TranslationResult
from lingopanel.services.gemini_client import GeminiClient
from lingopanel.services.translation_service import TranslationService
from lingopanel.ui.app import (
    LingoPanelApp,
    MIN_NICEGUI_VERSION,
    _ensure_nicegui_version,
    _parse_version,
    create_app,
)
from lingopanel.ui.controller import TranslationController


class TestVersionGuard:

    @pytest.mark.parametrize("version,expected", [
        ("3.0.0", (3, 0, 0)),
        ("3.1.2", (3, 1, 2)),
        ("3.0.0rc1", (3, 0, 0)),
        ("2.24", (2, 24, 0)),
        ("4", (4, 0, 0)),
    ])
    def test_parse_version(self, version, expected):
        assert _parse_version(version) == expected

    def test_supported_version_passes(self):
        _ensure_nicegui_version("3.0.0")
        _ensure_nicegui_version("3.4.1")

    def test_old_version_rejected(self):
        with pytest.raises(RuntimeError, match="nicegui>=3.0.0"):
            _ensure_nicegui_version("2.24.2")

    def test_minimum_is_3(self):
        assert MIN_NICEGUI_VERSION == (3, 0, 0)


class TestLingoPanelApp:

    def test_create_app(self):
        settings = AppSettings()
        app = create_app(settings=settings)
        assert isinstance(app, LingoPanelApp)
        assert app.settings is settings
        assert app.translation_service is None

    def test_settings_lazy_loaded(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            config_dir = Path(tmpdir)
            (config_dir / "settings.template.json").write_text(json.dumps({"title": "My Translator"}))
            app = LingoPanelApp(settings_path=config_dir / "settings.json")

            assert app._settings is None
            assert app.settings.title == "My Translator"

    def test_translation_service_created_once(self, monkeypatch):
        monkeypatch.setenv("API_KEY", "secret")
        app = LingoPanelApp(settings=AppSettings(model="gemini-2.5-pro", request_timeout=60))

        service = app._ensure_translation_service()

        assert isinstance(service, TranslationService)
        assert isinstance(service.client, GeminiClient)
        assert service.client.model == "gemini-2.5-pro"
        assert app._ensure_translation_service() is service

    def test_missing_api_key_still_builds_service(self, monkeypatch):
        for name in ("API_KEY", "GEMINI_API_KEY", "GOOGLE_API_KEY"):
            monkeypatch.delenv(name, raising=False)
        app = LingoPanelApp(settings=AppSettings())

        assert app._ensure_translation_service() is not None

    def test_create_controller(self, fake_view):
        app = LingoPanelApp(settings=AppSettings(copy_feedback_ms=1500))

        controller = app.create_controller(fake_view)

        assert isinstance(controller, TranslationController)
        assert controller.view is fake_view
        assert controller.copy_feedback_seconds == 1.5
        assert controller.service is app.translation_service

    def test_controllers_share_service(self, fake_view):
        app = LingoPanelApp(settings=AppSettings())
        first = app.create_controller(fake_view)
        second = app.create_controller(fake_view)
        assert first.service is second.service
        assert first.state is not second.state


class TestRememberLanguage:

    def test_last_language_saved(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            settings_path = Path(tmpdir) / "settings.json"
            app = LingoPanelApp(settings=AppSettings(), settings_path=settings_path)

            app._on_translated(TranslationResult(translation="Hola", target_language="Spanish"))

            assert app.settings.last_target_language == "Spanish"
            saved = json.loads((Path(tmpdir) / "user_settings.json").read_text(encoding="utf-8"))
            assert saved == {"last_target_language": "Spanish"}

    def test_same_language_not_rewritten(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            settings_path = Path(tmpdir) / "settings.json"
            app = LingoPanelApp(settings=AppSettings(last_target_language="Spanish"), settings_path=settings_path)

            app._on_translated(TranslationResult(translation="Hola", target_language="Spanish"))

            assert not (Path(tmpdir) / "user_settings.json").exists()

    def test_save_failure_is_logged(self, monkeypatch, caplog):
        app = LingoPanelApp(settings=AppSettings(), settings_path=Path("/nonexistent/config/settings.json"))

        def failing_save(path):
            raise PermissionError("read-only")

        monkeypatch.setattr(app.settings, "save", failing_save)
        app._on_translated(TranslationResult(translation="Salut", target_language="French"))

        assert app.settings.last_target_language == "French"
        assert "Failed to save settings" in caplog.text
