# lingopanel/ui/app.py
from __future__ import annotations

"""
LingoPanel - English text to a chosen language, rendered in the browser.
"""

import logging
from pathlib import Path
from typing import Optional, TYPE_CHECKING

from lingopanel import __app_name__, __version__
from lingopanel.config.settings import AppSettings, get_default_settings_path
from lingopanel.models.types import TranslationResult

# Deferred imports for faster startup
if TYPE_CHECKING:
    from lingopanel.services.translation_service import TranslationService
    from lingopanel.ui.controller import TranslationController

# Module logger
logger = logging.getLogger(__name__)

# Minimum supported NiceGUI version (major, minor, patch)
MIN_NICEGUI_VERSION = (3, 0, 0)


def _parse_version(version: str) -> tuple[int, int, int]:
    """Parse "3.1.0" / "3.0.0rc1" into a comparable (major, minor, patch) tuple."""
    parts: list[int] = []
    for raw in version.split('.')[:3]:
        digits = ''
        for ch in raw:
            if not ch.isdigit():
                break
            digits += ch
        parts.append(int(digits) if digits else 0)
    while len(parts) < 3:
        parts.append(0)
    return parts[0], parts[1], parts[2]


def _ensure_nicegui_version(version: str) -> None:
    """Fail fast on NiceGUI releases without js_handler support on events."""
    if _parse_version(version) < MIN_NICEGUI_VERSION:
        required = '.'.join(str(v) for v in MIN_NICEGUI_VERSION)
        raise RuntimeError(
            f"NiceGUI {version} is not supported; {__app_name__} requires nicegui>={required}"
        )


class LingoPanelApp:
    """
    Process-lifetime application object.

    Owns the settings and the translation service (and through it the single
    Gemini client). Every browser page gets its own TranslationController.
    """

    def __init__(self, settings: Optional[AppSettings] = None, settings_path: Optional[Path] = None):
        self.settings_path = settings_path or get_default_settings_path()
        self._settings: Optional[AppSettings] = settings
        self.translation_service: Optional["TranslationService"] = None

    @property
    def settings(self) -> AppSettings:
        """Lazy-load settings on first access"""
        if self._settings is None:
            self._settings = AppSettings.load(self.settings_path)
        return self._settings

    def _ensure_translation_service(self) -> "TranslationService":
        """Create the Gemini client and translation service once."""
        if self.translation_service is None:
            from lingopanel.services.gemini_client import GeminiClient
            from lingopanel.services.translation_service import TranslationService

            api_key = self.settings.get_api_key()
            if not api_key:
                logger.warning(
                    "No API key found in $%s; translations will fail until it is set",
                    self.settings.api_key_env,
                )
            client = GeminiClient(
                api_key=api_key,
                model=self.settings.model,
                request_timeout=self.settings.request_timeout,
            )
            self.translation_service = TranslationService(client)
        return self.translation_service

    def _on_translated(self, result: TranslationResult) -> None:
        """Remember the last used language for the next session."""
        if result.target_language == self.settings.last_target_language:
            return
        self.settings.last_target_language = result.target_language
        try:
            self.settings.save(self.settings_path)
        except OSError as e:
            logger.warning("Failed to save settings: %s", e)

    def create_controller(self, view) -> "TranslationController":
        from lingopanel.ui.controller import TranslationController

        return TranslationController(
            service=self._ensure_translation_service(),
            view=view,
            copy_feedback_seconds=self.settings.copy_feedback_seconds,
            on_translated=self._on_translated,
        )

    def create_ui(self) -> "TranslationController":
        """Build the page for the current client."""
        from nicegui import ui

        from lingopanel.ui.components.translator_panel import create_translator_panel
        from lingopanel.ui.styles import COMPLETE_CSS

        ui.add_css(COMPLETE_CSS)
        ui.page_title(self.settings.title)

        with ui.column().classes('app-header w-full gap-1'):
            ui.label(self.settings.title).classes('app-title')
            ui.label('Translate English text into another language').classes('app-subtitle')

        return create_translator_panel(
            languages=self.settings.languages,
            create_controller=self.create_controller,
            initial_language=self.settings.last_target_language,
        )


def create_app(settings: Optional[AppSettings] = None, settings_path: Optional[Path] = None) -> LingoPanelApp:
    """Create application instance"""
    return LingoPanelApp(settings=settings, settings_path=settings_path)


def run_app(
    host: Optional[str] = None,
    port: Optional[int] = None,
    show: bool = True,
    reload: bool = False,
    settings_path: Optional[Path] = None,
):
    """Run the application.

    Args:
        host: Host to bind to (default: settings.host)
        port: Port to bind to (default: settings.port)
        show: Open the page in the default browser
        reload: Auto-reload on source changes (development)
        settings_path: Settings base path (default: config/settings.json)
    """
    import nicegui
    from nicegui import ui

    _ensure_nicegui_version(nicegui.__version__)

    lingo_app = create_app(settings_path=settings_path)
    settings = lingo_app.settings

    # Create the shared client before the first page so startup logs show the key status
    lingo_app._ensure_translation_service()

    @ui.page('/')
    def main_page():
        lingo_app.create_ui()

    host = host or settings.host
    port = port or settings.port
    logger.info("Starting %s %s on http://%s:%d (model=%s)", __app_name__, __version__, host, port, settings.model)

    ui.run(
        host=host,
        port=port,
        title=settings.title,
        show=show,
        reload=reload,
        favicon='🌐',
    )
