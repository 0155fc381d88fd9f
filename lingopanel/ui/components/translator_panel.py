# lingopanel/ui/components/translator_panel.py
"""
Translator panel: input card, error banner and output card.

NiceGUIView renders AppState onto the widgets and gives the controller
one-shot UI timers. The copy button writes the clipboard in the browser,
inside the click, and reports the outcome back to the controller.
"""

import logging
from typing import Any, Callable, Optional

from nicegui import ui

from lingopanel.services.exceptions import ClipboardError
from lingopanel.ui.controller import TranslationController
from lingopanel.ui.state import AppState

logger = logging.getLogger(__name__)

# Click handler of the copy button. Browsers only grant clipboard writes during the
# user gesture, so writeText runs here and only its outcome is sent to the server.
# Nothing is emitted for an empty output (the controller treats it as a no-op too).
_COPY_JS_HANDLER = '''() => {
    const text = getHtmlElement(%s).innerText;
    if (!text) return;
    const report = (copied) => emit({copied: copied});
    (navigator.clipboard ? navigator.clipboard.writeText(text) : Promise.reject())
        .then(() => report(true), () => report(false));
}'''


class NiceGUIView:
    """TranslationView implementation backed by NiceGUI elements."""

    def __init__(
        self,
        container: ui.element,
        translate_button: ui.button,
        button_text: ui.label,
        spinner: ui.spinner,
        error_banner: ui.label,
        output_card: ui.element,
        output_language: ui.label,
        output_text: ui.label,
        copy_button: ui.button,
    ):
        self.container = container
        self.translate_button = translate_button
        self.button_text = button_text
        self.spinner = spinner
        self.error_banner = error_banner
        self.output_card = output_card
        self.output_language = output_language
        self.output_text = output_text
        self.copy_button = copy_button

    def render(self, state: AppState) -> None:
        loading = state.is_loading()
        self.translate_button.set_enabled(not loading)
        self.spinner.set_visibility(loading)
        self.button_text.set_visibility(not loading)

        self.error_banner.set_text(state.error_message)
        self.error_banner.set_visibility(state.has_error())

        self.output_language.set_text(state.output_language)
        self.output_text.set_text(state.output_text)
        self.output_card.set_visibility(state.has_output())

        self.copy_button.set_text(state.copy_label)

    def schedule(self, delay: float, callback: Callable[[], None]) -> None:
        with self.container:
            ui.timer(delay, callback, once=True)


def create_translator_panel(
    languages: list[str],
    create_controller: Callable[[NiceGUIView], TranslationController],
    initial_language: Optional[str] = None,
) -> TranslationController:
    """
    Build the translator panel and return its controller.

    Args:
        languages: Options of the target language selector
        create_controller: Factory receiving the view (the controller needs the view,
                           the widget handlers need the controller)
        initial_language: Preselected language ("" or None = nothing selected)
    """
    controller: Optional[TranslationController] = None

    async def handle_translate() -> None:
        # Ctrl+Enter bypasses the disabled button
        if controller is None or controller.state.is_loading():
            return
        await controller.submit_translation(textarea.value, language_select.value)

    async def handle_copy(e: Any) -> None:
        if controller is None:
            return
        result = e.args if isinstance(e.args, dict) else {}
        copied = result.get('copied') is True

        async def report_browser_write(text: str) -> None:
            # writeText already ran in the browser during the click
            if not copied:
                raise ClipboardError("Browser rejected the clipboard write")

        await controller.copy_last_translation(report_browser_write)

    with ui.column().classes('translator w-full gap-4') as container:
        with ui.element('div').classes('main-card w-full'):
            textarea = ui.textarea(
                placeholder='Enter English text to translate',
            ).classes('w-full source-input').props('outlined autogrow aria-label="Text to translate"')

            # Ctrl/Cmd+Enter submits; preventDefault keeps the newline out of the textarea
            textarea.on(
                'keydown',
                handle_translate,
                js_handler='''(e) => {
                    if ((e.ctrlKey || e.metaKey) && e.key === "Enter") {
                        e.preventDefault();
                        emit(e);
                    }
                }'''
            )

            with ui.row().classes('input-toolbar w-full items-center justify-between'):
                language_select = ui.select(
                    options=list(languages),
                    value=initial_language if initial_language in languages else None,
                    label='Target language',
                ).classes('language-select').props('outlined dense')

                with ui.button(on_click=handle_translate).classes('translate-btn').props(
                    'unelevated no-caps aria-label="Translate"'
                ) as translate_button:
                    button_text = ui.label('Translate').classes('btn-text')
                    spinner = ui.spinner(size='sm', color='white')
                    spinner.set_visibility(False)

        error_banner = ui.label('').classes('error-banner w-full').props('role=alert')
        error_banner.set_visibility(False)

        with ui.element('section').classes('output-card w-full') as output_card:
            with ui.row().classes('output-header w-full items-center justify-between'):
                output_language = ui.label('').classes('output-language')
                copy_button = ui.button('').classes('copy-btn').props(
                    'flat dense no-caps icon=content_copy aria-label="Copy translation"'
                )
            output_text = ui.label('').classes('translation-output')
            copy_button.on('click', handle_copy, js_handler=_COPY_JS_HANDLER % output_text.id)
        output_card.set_visibility(False)

    view = NiceGUIView(
        container=container,
        translate_button=translate_button,
        button_text=button_text,
        spinner=spinner,
        error_banner=error_banner,
        output_card=output_card,
        output_language=output_language,
        output_text=output_text,
        copy_button=copy_button,
    )
    controller = create_controller(view)
    view.render(controller.state)
    return controller
