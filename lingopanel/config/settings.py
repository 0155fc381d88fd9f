# lingopanel/config/settings.py
"""
Application settings management for LingoPanel.

Settings files:
- settings.template.json: defaults maintained by developers (overwritten on update)
- user_settings.json: only the values the user changed
- On load, the template is read first and user_settings overrides it

Caching:
- _settings_cache: AppSettings instances keyed by path
- load() prefers the cache and reloads when either file's mtime changes
- save() refreshes the cache
- invalidate_settings_cache() clears it explicitly
"""

import logging
import os
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import json

from lingopanel.models.types import SUPPORTED_LANGUAGES

# Module logger
logger = logging.getLogger(__name__)

# Settings cache: path -> (mtime_template, mtime_user, AppSettings)
# mtime is used to detect file changes and invalidate cache
_settings_cache: dict[str, tuple[float, float, "AppSettings"]] = {}
_settings_cache_lock = threading.Lock()

# Settings the user can change from the UI (saved to user_settings.json)
USER_SETTINGS_KEYS = {
    # Language selector (auto-saved after each translation)
    "last_target_language",
}

# Checked in order when the configured variable is not set
FALLBACK_API_KEY_ENVS = ("GEMINI_API_KEY", "GOOGLE_API_KEY")

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_COPY_FEEDBACK_MS = 2000


@dataclass
class AppSettings:
    """Application settings"""

    # Gemini API
    model: str = DEFAULT_MODEL
    api_key_env: str = "API_KEY"        # Environment variable holding the API key
    request_timeout: int = 0            # Seconds, 0 = no timeout (wait for the API)

    # Language selector
    languages: list[str] = field(default_factory=lambda: list(SUPPORTED_LANGUAGES))
    last_target_language: str = ""      # "" = nothing preselected

    # UI
    title: str = "LingoPanel"
    copy_feedback_ms: int = DEFAULT_COPY_FEEDBACK_MS

    # Server
    host: str = "127.0.0.1"
    port: int = 8765

    @classmethod
    def load(cls, path: Path, use_cache: bool = True) -> "AppSettings":
        """Load settings from template and user settings files.

        1. settings.template.json provides defaults
        2. user_settings.json overrides USER_SETTINGS_KEYS only

        Args:
            path: Settings path (config/settings.json). Used as the base path
                  to locate the template and user_settings files.
            use_cache: Whether to reuse a cached instance (default: True)
        """
        # Determine base config directory
        config_dir = path.parent
        template_path = config_dir / "settings.template.json"
        user_settings_path = config_dir / "user_settings.json"

        cache_key = str(path.resolve())

        # Get current file modification times
        template_mtime = template_path.stat().st_mtime if template_path.exists() else 0.0
        user_mtime = user_settings_path.stat().st_mtime if user_settings_path.exists() else 0.0

        # Check cache
        if use_cache:
            with _settings_cache_lock:
                if cache_key in _settings_cache:
                    cached_template_mtime, cached_user_mtime, cached_settings = _settings_cache[cache_key]
                    if cached_template_mtime == template_mtime and cached_user_mtime == user_mtime:
                        logger.debug("Using cached settings for: %s", path)
                        return cached_settings

        # Start with defaults
        data = {}

        # 1. Load from template (developer defaults)
        if template_path.exists():
            try:
                with open(template_path, 'r', encoding='utf-8-sig') as f:
                    data = json.load(f)
                    logger.debug("Loaded template settings from: %s", template_path)
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                logger.warning("Failed to load template settings: %s", e)

        if not isinstance(data, dict):
            logger.warning("Ignoring template settings: expected an object, got %s", type(data).__name__)
            data = {}

        # 2. Override with user settings
        if user_settings_path.exists():
            try:
                with open(user_settings_path, 'r', encoding='utf-8-sig') as f:
                    user_data = json.load(f)
                if isinstance(user_data, dict):
                    # Only apply known user settings keys
                    for key in USER_SETTINGS_KEYS:
                        if key in user_data:
                            data[key] = user_data[key]
                    logger.debug("Loaded user settings from: %s", user_settings_path)
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                logger.warning("Failed to load user settings: %s", e)

        # Filter to only known fields
        known_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered_data = {k: v for k, v in data.items() if k in known_fields}

        settings = cls(**filtered_data)
        settings._validate()

        # Update cache
        with _settings_cache_lock:
            _settings_cache[cache_key] = (template_mtime, user_mtime, settings)

        return settings

    def _validate(self) -> None:
        """Validate and normalize setting values.

        Invalid values are reset to defaults with warnings.
        """
        if not isinstance(self.model, str) or not self.model.strip():
            logger.warning("model is empty, resetting to %s", DEFAULT_MODEL)
            self.model = DEFAULT_MODEL

        # Language list: strings only, no duplicates, never empty
        languages = []
        if isinstance(self.languages, list):
            for lang in self.languages:
                if isinstance(lang, str) and lang.strip() and lang.strip() not in languages:
                    languages.append(lang.strip())
        if not languages:
            logger.warning("languages is empty or invalid, resetting to defaults")
            languages = list(SUPPORTED_LANGUAGES)
        self.languages = languages

        # A stale selection (language removed from the list) falls back to no selection
        if self.last_target_language and self.last_target_language not in self.languages:
            logger.debug("last_target_language %r not in languages, clearing", self.last_target_language)
            self.last_target_language = ""

        # Numeric settings must be real integers (JSON "2000" or true would slip through)
        for name, default in (
            ('copy_feedback_ms', DEFAULT_COPY_FEEDBACK_MS),
            ('request_timeout', 0),
            ('port', 8765),
        ):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                logger.warning("%s is not an integer (%r), resetting to %d", name, value, default)
                setattr(self, name, default)

        # Copy feedback duration
        if self.copy_feedback_ms < 100 or self.copy_feedback_ms > 10000:
            logger.warning("copy_feedback_ms out of range (%d), resetting to %d",
                           self.copy_feedback_ms, DEFAULT_COPY_FEEDBACK_MS)
            self.copy_feedback_ms = DEFAULT_COPY_FEEDBACK_MS

        # Timeout constraints (0 disables the timeout)
        if self.request_timeout < 0:
            logger.warning("request_timeout negative (%d), disabling timeout", self.request_timeout)
            self.request_timeout = 0
        elif self.request_timeout > 1800:
            logger.warning("request_timeout too large (%d), resetting to 1800", self.request_timeout)
            self.request_timeout = 1800

        if not 1 <= self.port <= 65535:
            logger.warning("port out of range (%d), resetting to 8765", self.port)
            self.port = 8765

    def save(self, path: Path) -> None:
        """Save user settings to user_settings.json.

        Only USER_SETTINGS_KEYS are written; the template is never modified.
        The cache is refreshed after saving.

        Args:
            path: Settings path (config/settings.json).
                  The data is written to config/user_settings.json.
        """
        config_dir = path.parent
        user_settings_path = config_dir / "user_settings.json"
        template_path = config_dir / "settings.template.json"

        config_dir.mkdir(parents=True, exist_ok=True)

        # Only save user-changeable settings
        data = {}
        for key in USER_SETTINGS_KEYS:
            if hasattr(self, key):
                data[key] = getattr(self, key)

        with open(user_settings_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

        logger.debug("Saved user settings to: %s", user_settings_path)

        # Update cache with new modification times
        cache_key = str(path.resolve())
        template_mtime = template_path.stat().st_mtime if template_path.exists() else 0.0
        user_mtime = user_settings_path.stat().st_mtime if user_settings_path.exists() else 0.0
        with _settings_cache_lock:
            _settings_cache[cache_key] = (template_mtime, user_mtime, self)

    def get_api_key(self) -> Optional[str]:
        """
        Read the API key from the environment.
        Returns None when no variable is set; the API call then fails and
        is reported like any other translation error.
        """
        for name in (self.api_key_env, *FALLBACK_API_KEY_ENVS):
            value = os.environ.get(name)
            if value:
                return value
        return None

    @property
    def copy_feedback_seconds(self) -> float:
        return self.copy_feedback_ms / 1000.0


def get_default_settings_path() -> Path:
    """Get default settings file path"""
    return Path(__file__).parent.parent.parent / "config" / "settings.json"


def invalidate_settings_cache(path: Optional[Path] = None) -> None:
    """Invalidate settings cache.

    Args:
        path: Only clear the cache for this path. None clears everything.
    """
    with _settings_cache_lock:
        if path is None:
            _settings_cache.clear()
            logger.debug("Cleared all settings cache")
        else:
            cache_key = str(path.resolve())
            if cache_key in _settings_cache:
                del _settings_cache[cache_key]
                logger.debug("Cleared settings cache for: %s", path)
