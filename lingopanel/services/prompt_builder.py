# lingopanel/services/prompt_builder.py
"""
Builds the translation request sent to the Gemini API.

A request has three parts:
- the user prompt, embedding the source text and the target language
- the system instruction, framing the model as a translator that answers in JSON
- the response schema, an object with a single required string 'translation'
"""

from google.genai import types


PROMPT_TEMPLATE = 'Translate the following English text to {target_language}: "{text}"'

SYSTEM_INSTRUCTION = (
    "You are an expert translator. The user will provide English text and a target language. "
    "Translate the text to the specified language. "
    "Return the result as a JSON object with a single 'translation' key."
)

RESPONSE_MIME_TYPE = "application/json"

# Key of the only field in the structured response
TRANSLATION_KEY = "translation"


def build_prompt(text: str, target_language: str) -> str:
    """Build the user prompt (text is inserted as-is, already trimmed)"""
    return PROMPT_TEMPLATE.format(target_language=target_language, text=text)


def build_response_schema(target_language: str) -> types.Schema:
    """Response schema: {"translation": string}, 'translation' required."""
    return types.Schema(
        type=types.Type.OBJECT,
        properties={
            TRANSLATION_KEY: types.Schema(
                type=types.Type.STRING,
                description=f"The translated text in {target_language}",
            ),
        },
        required=[TRANSLATION_KEY],
    )


def build_generate_config(target_language: str) -> types.GenerateContentConfig:
    """Generation config that constrains the model output to the response schema."""
    return types.GenerateContentConfig(
        response_mime_type=RESPONSE_MIME_TYPE,
        response_schema=build_response_schema(target_language),
        system_instruction=SYSTEM_INSTRUCTION,
    )
