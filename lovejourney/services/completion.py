# services/completion.py
import logging
from typing import Dict, List, Optional

import openai
from openai import OpenAI

from lovejourney.core.config import settings
from lovejourney.core.exceptions import CompletionError, CompletionQuotaExceededError

logger = logging.getLogger(__name__)

QUOTA_ERROR_CODES = {"insufficient_quota", "rate_limit_exceeded"}


class CompletionClient:
    """
    Thin wrapper around the OpenAI chat completions API.

    One synchronous request per call, no retries, bounded by a timeout.
    Failures are classified into CompletionQuotaExceededError (usage limits)
    and CompletionError (everything else).
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        timeout: Optional[float] = None,
    ):
        self.api_key = api_key or settings.OPENAI_API_KEY
        self.model = model or settings.OPENAI_MODEL
        self.temperature = settings.OPENAI_TEMPERATURE if temperature is None else temperature
        self.max_tokens = max_tokens or settings.OPENAI_MAX_TOKENS
        self.timeout = timeout or settings.OPENAI_TIMEOUT_SECONDS
        self._client: Optional[OpenAI] = None

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            try:
                self._client = OpenAI(
                    api_key=self.api_key, timeout=self.timeout, max_retries=0
                )
            except openai.OpenAIError as exc:
                raise CompletionError(f"Completion client not configured: {exc}") from exc
        return self._client

    def complete(self, messages: List[Dict[str, str]]) -> str:
        """
        Submit chat messages and return the generated text.

        Args:
            messages: OpenAI chat messages (system + user)

        Returns:
            Full response text

        Raises:
            CompletionQuotaExceededError: On quota or rate-limit rejection
            CompletionError: On timeout, connection, status or malformed-response errors
        """
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except openai.RateLimitError as exc:
            logger.warning("Completion service quota exceeded: code=%s", exc.code)
            raise CompletionQuotaExceededError(str(exc)) from exc
        except openai.APIStatusError as exc:
            if exc.code in QUOTA_ERROR_CODES:
                logger.warning("Completion service quota exceeded: code=%s", exc.code)
                raise CompletionQuotaExceededError(str(exc)) from exc
            raise CompletionError(
                f"Completion service returned status {exc.status_code}"
            ) from exc
        except openai.APITimeoutError as exc:
            raise CompletionError(
                f"Completion service timed out after {self.timeout}s"
            ) from exc
        except openai.APIConnectionError as exc:
            raise CompletionError("Could not reach completion service") from exc
        except openai.OpenAIError as exc:
            raise CompletionError(
                f"Completion service failed: {type(exc).__name__}"
            ) from exc

        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError, TypeError) as exc:
            raise CompletionError("Malformed completion response") from exc

        if not content or not content.strip():
            raise CompletionError("Completion service returned empty content")
        return content.strip()


completion_client = CompletionClient()
