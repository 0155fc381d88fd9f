# lingopanel/services/translation_service.py
"""
Main translation service.
Validates the request, calls the Gemini API once, and parses the structured reply.
"""

import json
import logging
import time
from typing import Optional

from lingopanel.models.types import TranslationRequest, TranslationResult
from lingopanel.services.exceptions import ResponseFormatError, TranslationValidationError
from lingopanel.services.gemini_client import GeminiClient
from lingopanel.services.prompt_builder import TRANSLATION_KEY, build_generate_config, build_prompt

# Module logger
logger = logging.getLogger(__name__)

EMPTY_TEXT_MESSAGE = "Please enter some text to translate."
EMPTY_LANGUAGE_MESSAGE = "Please select a target language."


def validate_request(input_text: Optional[str], target_language: Optional[str]) -> TranslationRequest:
    """Trim the input and reject empty text or an unset language.

    Text is checked before the language, so an empty form reports the text.

    Raises:
        TranslationValidationError: with the message to show to the user
    """
    request = TranslationRequest.from_input(input_text, target_language)
    if not request.source_text:
        raise TranslationValidationError(EMPTY_TEXT_MESSAGE)
    if not request.target_language:
        raise TranslationValidationError(EMPTY_LANGUAGE_MESSAGE)
    return request


def parse_translation_response(raw: Optional[str]) -> str:
    """Extract the translation from the JSON payload returned by the API.

    The payload must be a JSON object whose 'translation' field is a
    non-empty string. Surrounding whitespace is ignored.

    Raises:
        ResponseFormatError: on anything else
    """
    text = (raw or "").strip()
    try:
        result = json.loads(text)
    except (ValueError, RecursionError) as e:
        # JSONDecodeError is a ValueError; so are oversized integers. Deep nesting recurses.
        logger.debug("Response is not valid JSON: %r", text[:200])
        raise ResponseFormatError() from e

    if not isinstance(result, dict):
        logger.debug("Response JSON is not an object: %s", type(result).__name__)
        raise ResponseFormatError()

    translation = result.get(TRANSLATION_KEY)
    if not isinstance(translation, str) or not translation:
        logger.debug("Response JSON has no usable %r field: %r", TRANSLATION_KEY, text[:200])
        raise ResponseFormatError()
    return translation


class TranslationService:
    """
    Translation service using the Gemini API.
    """

    def __init__(self, client: GeminiClient):
        self.client = client

    async def translate(self, request: TranslationRequest) -> TranslationResult:
        """
        Translate one request.

        Issues exactly one API call. Errors are not retried.

        Raises:
            TransportError: the API call failed
            ResponseFormatError: the reply did not match {"translation": string}
        """
        start_time = time.monotonic()
        logger.info(
            "Translating %d chars to %s (model=%s)",
            request.char_count, request.target_language, self.client.model,
        )

        raw = await self.client.generate(
            build_prompt(request.source_text, request.target_language),
            build_generate_config(request.target_language),
        )
        translation = parse_translation_response(raw)

        elapsed = time.monotonic() - start_time
        logger.info("Translation to %s completed in %.2fs (%d chars)",
                    request.target_language, elapsed, len(translation))
        return TranslationResult(
            translation=translation,
            target_language=request.target_language,
            model=self.client.model,
            elapsed_seconds=elapsed,
        )
