"""
Data models for LingoPanel.
"""

from .types import (
    SUPPORTED_LANGUAGES,
    TranslationRequest,
    TranslationResult,
    UIState,
)

__all__ = [
    'SUPPORTED_LANGUAGES',
    'TranslationRequest',
    'TranslationResult',
    'UIState',
]
