"""
Service layer for LingoPanel.

google-genai is imported by the client and prompt modules; they are lazy-loaded
so that lightweight imports (exceptions) stay fast.
Use explicit imports like:
    from lingopanel.services.translation_service import TranslationService
"""

# Fast imports - basic types
from .exceptions import (
    ClipboardError,
    ResponseFormatError,
    TranslationError,
    TranslationValidationError,
    TransportError,
)

# Lazy-loaded services via __getattr__
_LAZY_IMPORTS = {
    'GeminiClient': 'gemini_client',
    'TranslationService': 'translation_service',
}

# Submodules that can be accessed via __getattr__ (for patching support)
_SUBMODULES = {'gemini_client', 'translation_service', 'prompt_builder'}


def __getattr__(name: str):
    """Lazy-load heavy service modules on first access."""
    import importlib
    # Support accessing submodules directly (for unittest.mock.patch)
    if name in _SUBMODULES:
        return importlib.import_module(f'.{name}', __package__)
    if name in _LAZY_IMPORTS:
        module_name = _LAZY_IMPORTS[name]
        module = importlib.import_module(f'.{module_name}', __package__)
        return getattr(module, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    'ClipboardError',
    'GeminiClient',
    'ResponseFormatError',
    'TranslationError',
    'TranslationService',
    'TranslationValidationError',
    'TransportError',
]
