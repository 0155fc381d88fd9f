# lingopanel/models/types.py
"""
Core data types for LingoPanel.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


# Target languages offered by the language selector (display name is sent to the model)
SUPPORTED_LANGUAGES: tuple[str, ...] = (
    "Spanish",
    "French",
    "German",
    "Italian",
    "Portuguese",
    "Dutch",
    "Russian",
    "Japanese",
    "Korean",
    "Chinese (Simplified)",
    "Arabic",
    "Hindi",
)


class UIState(Enum):
    """Mutually exclusive visual states of the translator"""
    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"
    SUCCESS = "success"


@dataclass(frozen=True)
class TranslationRequest:
    """
    One translation request, built fresh per user action.
    """
    source_text: str                 # Trimmed English text
    target_language: str             # Entry from the language selector

    @classmethod
    def from_input(cls, input_text: Optional[str], target_language: Optional[str]) -> "TranslationRequest":
        """Build a request from raw widget values (text is trimmed, None becomes empty)"""
        return cls(
            source_text=(input_text or "").strip(),
            target_language=target_language or "",
        )

    @property
    def char_count(self) -> int:
        return len(self.source_text)


@dataclass
class TranslationResult:
    """
    Parsed response of a successful translation.
    """
    translation: str                 # Translated text shown in the output panel
    target_language: str             # Shown as the output header
    model: str = ""                  # Model that produced the translation (diagnostics only)
    elapsed_seconds: Optional[float] = None
