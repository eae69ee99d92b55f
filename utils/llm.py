# utils/llm.py
import logging
from functools import lru_cache
from typing import Optional

import openai
from openai import OpenAI

from utils.config import Settings
from utils.errors import ConfigurationError, ParseError, TransportError

logger = logging.getLogger(__name__)


@lru_cache(maxsize=4)
def _build_client(api_key: str, base_url: Optional[str], timeout: float) -> OpenAI:
    # no silent retries: the user re-triggers a failed analysis
    return OpenAI(api_key=api_key, base_url=base_url, timeout=timeout, max_retries=0)


def get_client(settings: Settings) -> OpenAI:
    if not settings.api_key:
        raise ConfigurationError(
            "API key not configured. Please add OPENAI_API_KEY to your .env file."
        )
    return _build_client(settings.api_key, settings.base_url, settings.timeout)


def _status_message(e: openai.APIStatusError) -> str:
    body = e.body if isinstance(e.body, dict) else {}
    detail = body.get("error") if isinstance(body.get("error"), dict) else body
    message = (detail or {}).get("message")
    return message or f"API request failed with status {e.status_code}"


def call_llm(system: str, prompt: str, settings: Settings) -> str:
    """
    Send one chat-completion request and return the reply text.
    - system: fixed instruction for the model
    - prompt: the user message
    Raises TransportError for network/HTTP failures and ParseError when the
    reply carries no text.
    """
    client = get_client(settings)

    try:
        resp = client.chat.completions.create(
            model=settings.model,
            max_tokens=settings.max_tokens,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
            response_format={"type": "json_object"},
            temperature=0.2,
        )
    except openai.APITimeoutError as e:
        logger.error("LLM call timed out after %ss", settings.timeout)
        raise TransportError(f"Request timed out after {settings.timeout}s") from e
    except openai.APIConnectionError as e:
        logger.error("LLM call failed: %s", e)
        raise TransportError(f"Network error: {e}") from e
    except openai.APIStatusError as e:
        logger.error("LLM call failed with status %s", e.status_code)
        raise TransportError(_status_message(e), status_code=e.status_code) from e

    choices = getattr(resp, "choices", None) or []
    content = choices[0].message.content if choices else None
    if not content:
        raise ParseError("Invalid API response structure")

    return content
