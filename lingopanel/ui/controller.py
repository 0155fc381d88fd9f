# lingopanel/ui/controller.py
"""
Translation controller: one request/response cycle and the copy action.

The controller owns the AppState and talks to the page only through a
TranslationView, so it can run against NiceGUI in the app and against a
fake view in tests. All methods run on the UI event loop. The clipboard
writer is passed per copy, since the browser only allows the write inside
the click handler itself.
"""

import logging
from typing import Awaitable, Callable, Optional, Protocol

from lingopanel.models.types import TranslationResult
from lingopanel.services.exceptions import (
    ClipboardError,
    TranslationError,
    TranslationValidationError,
)
from lingopanel.services.translation_service import TranslationService, validate_request
from lingopanel.ui.state import AppState

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Sorry, an error occurred during translation. Please try again."
CLIPBOARD_ERROR_MESSAGE = "Could not copy text to clipboard."
COPIED_LABEL = "Copied!"
DEFAULT_COPY_FEEDBACK_SECONDS = 2.0


class TranslationView(Protocol):
    """Rendering side of the controller."""

    def render(self, state: AppState) -> None:
        """Make the page reflect state."""
        ...

    def schedule(self, delay: float, callback: Callable[[], None]) -> None:
        """Run callback once on the UI loop after delay seconds."""
        ...


class TranslationController:
    """
    Orchestrates translate and copy for one page.

    A new submit while a request is in flight is prevented by the disabled
    translate button; in-flight requests are never cancelled.
    """

    def __init__(
        self,
        service: TranslationService,
        view: TranslationView,
        state: Optional[AppState] = None,
        copy_feedback_seconds: float = DEFAULT_COPY_FEEDBACK_SECONDS,
        on_translated: Optional[Callable[[TranslationResult], Optional[Awaitable[None]]]] = None,
    ):
        self.service = service
        self.view = view
        self.state = state or AppState()
        self.copy_feedback_seconds = copy_feedback_seconds
        self._on_translated = on_translated

        # Incremented per successful copy; a revert timer only acts for the latest copy
        self._copy_generation = 0
        # Label to restore after the confirmation (captured before the first "Copied!")
        self._copy_label_restore = self.state.copy_label

    def _render(self) -> None:
        self.view.render(self.state)

    async def submit_translation(self, input_text: Optional[str], target_language: Optional[str]) -> Optional[TranslationResult]:
        """Translate input_text into target_language and update the page.

        Returns the result on success, None otherwise. Never raises for
        validation, transport or format errors.
        """
        try:
            request = validate_request(input_text, target_language)
        except TranslationValidationError as e:
            # No network call, no loading state
            logger.debug("Translation rejected: %s", e)
            self.state.show_error(str(e))
            self._render()
            return None

        self.state.hide_error()
        self.state.start_loading()
        self._render()

        result: Optional[TranslationResult] = None
        try:
            result = await self.service.translate(request)
            self.state.show_result(result.target_language, result.translation)
        except TranslationError as e:
            cause = e.__cause__
            if cause is not None:
                logger.error("Translation error: %s (cause: %s: %s)", e, type(cause).__name__, cause)
            else:
                logger.error("Translation error: %s", e)
            result = None
            self.state.fail(GENERIC_ERROR_MESSAGE)
        except Exception as e:
            logger.exception("Unexpected translation error: %s", e)
            result = None
            self.state.fail(GENERIC_ERROR_MESSAGE)
        finally:
            self.state.finish_loading()
            self._render()

        if result is not None and self._on_translated is not None:
            try:
                maybe_awaitable = self._on_translated(result)
                if maybe_awaitable is not None:
                    await maybe_awaitable
            except Exception as e:
                logger.warning("on_translated callback failed: %s", e)
        return result

    async def copy_last_translation(self, write_clipboard: Callable[[str], Awaitable[None]]) -> bool:
        """Copy the displayed translation to the clipboard.

        write_clipboard performs (or reports) the actual write and raises
        ClipboardError on failure. In the browser the write has to happen
        inside the click gesture, so the page passes a writer that reports
        the outcome of the click-time navigator.clipboard call.

        Returns True when the text was copied. Empty output is a no-op.
        """
        text = self.state.output_text
        if not text:
            return False

        try:
            await write_clipboard(text)
        except ClipboardError as e:
            logger.error("Failed to copy text: %s", e)
            self.state.show_error(CLIPBOARD_ERROR_MESSAGE)
            self._render()
            return False

        if self.state.copy_label != COPIED_LABEL:
            self._copy_label_restore = self.state.copy_label
        self._copy_generation += 1
        generation = self._copy_generation

        self.state.copy_label = COPIED_LABEL
        self._render()

        def revert_label() -> None:
            # A newer copy owns the label now
            if generation != self._copy_generation:
                return
            if self.state.copy_label == COPIED_LABEL:
                self.state.copy_label = self._copy_label_restore
                self._render()

        self.view.schedule(self.copy_feedback_seconds, revert_label)
        logger.debug("Copied %d chars to clipboard", len(text))
        return True
