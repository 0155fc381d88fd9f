# lingopanel/services/gemini_client.py
from __future__ import annotations

"""
Thin async wrapper around the google-genai SDK.

One GeminiClient lives for the whole process and is shared by every browser
session. The SDK client itself is created on first use so that a missing or
invalid API key surfaces as a failed translation rather than a startup crash.
"""

import logging
import time
from typing import Optional

from google import genai
from google.genai import types

from lingopanel.services.exceptions import TransportError

logger = logging.getLogger(__name__)


class GeminiClient:
    """Sends one generate_content request per call."""

    def __init__(self, api_key: Optional[str], model: str, request_timeout: int = 0):
        self.model = model
        self._api_key = api_key
        self._request_timeout = request_timeout
        self._client: Optional[genai.Client] = None

    def _get_client(self) -> genai.Client:
        if self._client is None:
            http_options = None
            if self._request_timeout > 0:
                # HttpOptions.timeout is in milliseconds
                http_options = types.HttpOptions(timeout=self._request_timeout * 1000)
            self._client = genai.Client(api_key=self._api_key, http_options=http_options)
            logger.debug("Created Gemini client (model=%s, timeout=%ss)", self.model, self._request_timeout or None)
        return self._client

    async def generate(self, contents: str, config: types.GenerateContentConfig) -> str:
        """Issue the request and return the raw response text.

        Raises:
            TransportError: the SDK raised (network, auth, quota, missing key...).
        """
        start = time.monotonic()
        try:
            client = self._get_client()
            response = await client.aio.models.generate_content(
                model=self.model,
                contents=contents,
                config=config,
            )
        except Exception as e:
            logger.warning(
                "Gemini request failed after %.2fs: %s: %s",
                time.monotonic() - start, type(e).__name__, e,
            )
            raise TransportError(f"Gemini request failed: {e}") from e

        logger.debug("Gemini responded in %.2fs", time.monotonic() - start)

        # None when the response was blocked or had no candidates; parsing rejects it
        return response.text or ""
