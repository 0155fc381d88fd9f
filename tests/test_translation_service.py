# tests/test_translation_service.py
"""Tests for lingopanel.services.translation_service"""

import pytest
from unittest.mock import AsyncMock

from google.genai import types

from lingopanel.services.exceptions import ResponseFormatError, TranslationValidationError, TransportError
from lingopanel.services.translation_service import (
    EMPTY_LANGUAGE_MESSAGE,
    EMPTY_TEXT_MESSAGE,
    TranslationService,
    parse_translation_response,
    validate_request,
)


class TestValidateRequest:

    def test_valid(self):
        request = validate_request("  Hello  ", "Spanish")
        assert request.source_text == "Hello"
        assert request.target_language == "Spanish"

    @pytest.mark.parametrize("text", ["", "  ", "\n", None])
    def test_empty_text(self, text):
        with pytest.raises(TranslationValidationError) as exc_info:
            validate_request(text, "Spanish")
        assert str(exc_info.value) == EMPTY_TEXT_MESSAGE

    @pytest.mark.parametrize("language", ["", None])
    def test_empty_language(self, language):
        with pytest.raises(TranslationValidationError) as exc_info:
            validate_request("Hello", language)
        assert str(exc_info.value) == EMPTY_LANGUAGE_MESSAGE


class TestParseTranslationResponse:

    def test_plain_object(self):
        assert parse_translation_response('{"translation": "Hola"}') == "Hola"

    def test_surrounding_whitespace(self):
        assert parse_translation_response('\n  {"translation": "Ciao"}  \n') == "Ciao"

    def test_extra_fields_ignored(self):
        assert parse_translation_response('{"translation": "Hallo", "note": "x"}') == "Hallo"

    def test_unicode(self):
        assert parse_translation_response('{"translation": "\\u3053\\u3093\\u306b\\u3061\\u306f"}') == "こんにちは"

    @pytest.mark.parametrize("raw", [
        None,
        "",
        "Hola",
        "```json\n{\"translation\": \"Hola\"}\n```",
        "[\"Hola\"]",
        "{\"translation\": \"\"}",
        "{\"translation\": [\"Hola\"]}",
        "{}",
    ])
    def test_rejected(self, raw):
        with pytest.raises(ResponseFormatError) as exc_info:
            parse_translation_response(raw)
        assert str(exc_info.value) == "Invalid response format from API."

    @pytest.mark.parametrize("raw", [
        "{\"translation\": " + "1" * 5000 + "}",
        "[" * 100000,
        "{\"translation\": " + "[" * 100000 + "]" * 100000 + "}",
    ])
    def test_pathological_json_rejected(self, raw):
        with pytest.raises(ResponseFormatError):
            parse_translation_response(raw)


class TestTranslationService:

    @pytest.mark.asyncio
    async def test_translate_returns_result(self, translation_service, mock_gemini_client):
        request = validate_request("Hello world", "Spanish")

        result = await translation_service.translate(request)

        assert result.translation == "Hola mundo"
        assert result.target_language == "Spanish"
        assert result.model == "gemini-2.5-flash"
        assert result.elapsed_seconds is not None and result.elapsed_seconds >= 0

    @pytest.mark.asyncio
    async def test_translate_sends_prompt_and_schema(self, translation_service, mock_gemini_client):
        await translation_service.translate(validate_request("Thank you", "Japanese"))

        contents, config = mock_gemini_client.generate.call_args.args
        assert contents == 'Translate the following English text to Japanese: "Thank you"'
        assert isinstance(config, types.GenerateContentConfig)
        assert config.response_mime_type == "application/json"
        assert config.response_schema.properties["translation"].description == "The translated text in Japanese"

    @pytest.mark.asyncio
    async def test_transport_error_propagates(self, mock_gemini_client):
        mock_gemini_client.generate = AsyncMock(side_effect=TransportError("quota exceeded"))
        service = TranslationService(mock_gemini_client)

        with pytest.raises(TransportError):
            await service.translate(validate_request("Hello", "Spanish"))

    @pytest.mark.asyncio
    async def test_format_error_propagates(self, mock_gemini_client):
        mock_gemini_client.generate = AsyncMock(return_value='{"text": "Hola"}')
        service = TranslationService(mock_gemini_client)

        with pytest.raises(ResponseFormatError):
            await service.translate(validate_request("Hello", "Spanish"))
