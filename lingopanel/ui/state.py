# lingopanel/ui/state.py
"""
Application state management for LingoPanel.
"""

import logging
from dataclasses import dataclass

from lingopanel.models.types import UIState

# Module logger
logger = logging.getLogger(__name__)

COPY_LABEL = "Copy"


@dataclass
class AppState:
    """
    Application state.
    Single source of truth for what the page shows.

    ui_state follows the translate lifecycle (IDLE -> LOADING -> SUCCESS/ERROR).
    The error banner is driven by error_message alone, so validation and
    clipboard errors can be shown without leaving the current lifecycle state.
    """
    ui_state: UIState = UIState.IDLE

    # Error banner ("" = hidden)
    error_message: str = ""

    # Output panel ("" = hidden)
    output_language: str = ""
    output_text: str = ""

    # Copy button label
    copy_label: str = COPY_LABEL

    def is_loading(self) -> bool:
        """Check if a translation is in flight (submit control disabled)"""
        return self.ui_state == UIState.LOADING

    def has_output(self) -> bool:
        return bool(self.output_text)

    def has_error(self) -> bool:
        return bool(self.error_message)

    def show_error(self, message: str) -> None:
        self.error_message = message

    def hide_error(self) -> None:
        self.error_message = ""

    def clear_output(self) -> None:
        """Empty and hide the output panel"""
        self.output_language = ""
        self.output_text = ""

    def start_loading(self) -> None:
        """Enter LOADING with an empty output panel"""
        self.clear_output()
        self.ui_state = UIState.LOADING

    def show_result(self, language: str, text: str) -> None:
        self.output_language = language
        self.output_text = text
        self.ui_state = UIState.SUCCESS

    def fail(self, message: str) -> None:
        """Show the error banner with an empty output panel"""
        self.show_error(message)
        self.clear_output()
        self.ui_state = UIState.ERROR

    def finish_loading(self) -> None:
        """Leave LOADING (always called when a request completes)"""
        if self.ui_state == UIState.LOADING:
            logger.debug("Request finished without a result, returning to IDLE")
            self.ui_state = UIState.IDLE
