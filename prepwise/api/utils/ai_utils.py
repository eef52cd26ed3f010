# prepwise/api/utils/ai_utils.py
"""
Thin Azure OpenAI layer shared by the CV analysis, interview and scorer services.

Callers check `is_ready()` first and keep a deterministic fallback for when the
model is not configured, unreachable or replies with something unusable.
"""
from __future__ import annotations

import functools
import json
import logging
import os
import re
import time
from typing import Any, Dict, Iterator, List, Optional

from openai import APIConnectionError, AzureOpenAI, RateLimitError

from prepwise.api.config import AI_CONFIG
from prepwise.api.utils.common_utils import get_logger

logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("openai").setLevel(logging.WARNING)

log = get_logger(__name__)

ENDPOINT = os.getenv("AZURE_OPENAI_ENDPOINT", "").strip()
API_KEY = os.getenv("AZURE_OPENAI_API_KEY", "").strip()

RETRY_ATTEMPTS = 3
RETRY_BASE_DELAY = 1.0

_client: Optional[AzureOpenAI] = None


def is_ready() -> bool:
    """True when an endpoint, key and chat deployment are all configured."""
    return bool(ENDPOINT and API_KEY and AI_CONFIG["CHAT_DEPLOYMENT"])


def get_client() -> AzureOpenAI:
    global _client
    if _client is None:
        if not is_ready():
            raise RuntimeError("Azure OpenAI is not configured (AZURE_OPENAI_ENDPOINT / AZURE_OPENAI_API_KEY)")
        _client = AzureOpenAI(api_key=API_KEY, api_version=AI_CONFIG["API_VERSION"], azure_endpoint=ENDPOINT)
    return _client


def with_backoff(func):
    """Retry rate-limit and connection failures, doubling the wait each time."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        delay = RETRY_BASE_DELAY
        for attempt in range(1, RETRY_ATTEMPTS + 1):
            try:
                return func(*args, **kwargs)
            except (RateLimitError, APIConnectionError) as e:
                if attempt == RETRY_ATTEMPTS:
                    log.error(f"LLM call gave up after {attempt} attempts: {e}")
                    raise
                log.warning(f"LLM call failed ({type(e).__name__}), attempt {attempt}; retrying in {delay:.0f}s")
                time.sleep(delay)
                delay *= 2

    return wrapper


@with_backoff
def chat(messages: List[Dict[str, Any]], *, temperature: float = 0.2, max_tokens: Optional[int] = None) -> str:
    """Content of the first choice of a chat completion ("" when empty)."""
    resp = get_client().chat.completions.create(
        model=AI_CONFIG["CHAT_DEPLOYMENT"],
        messages=messages,
        temperature=temperature,
        max_tokens=max_tokens,
    )
    return resp.choices[0].message.content or ""


# ------------------------------------------------------------------
# Lenient JSON parsing of model replies
# ------------------------------------------------------------------
_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)```", re.S | re.I)
_TRAILING_COMMA_RE = re.compile(r",\s*(?=[}\]])")
_PY_LITERALS = {"True": "true", "False": "false", "None": "null"}
_PY_LITERAL_RE = re.compile(r"\b(True|False|None)\b")
_SMART_QUOTES = str.maketrans({"“": '"', "”": '"', "‘": "'", "’": "'"})


def _candidates(text: str) -> Iterator[str]:
    yield text
    fence = _FENCE_RE.search(text)
    if fence:
        yield fence.group(1)
    starts = [i for i in (text.find("{"), text.find("[")) if i >= 0]
    if starts:
        start = min(starts)
        end = text.rfind("}" if text[start] == "{" else "]")
        if end > start:
            yield text[start: end + 1]


def _clean(fragment: str) -> str:
    fragment = fragment.translate(_SMART_QUOTES)
    fragment = _TRAILING_COMMA_RE.sub("", fragment)
    return _PY_LITERAL_RE.sub(lambda m: _PY_LITERALS[m.group(1)], fragment).strip()


def safe_extract_json(text: Any, default: Any = None) -> Any:
    """
    Parse JSON out of an LLM reply.

    Tries the reply as-is, then a ```json fenced block, then the outermost
    object/array. Smart quotes, trailing commas and Python literals are
    repaired. Returns `default` ({} when omitted) if nothing parses.
    """
    fallback = {} if default is None else default
    if not isinstance(text, str) or not text.strip():
        return fallback

    for fragment in _candidates(text):
        for attempt in (fragment, _clean(fragment)):
            try:
                return json.loads(attempt)
            except json.JSONDecodeError:
                continue

    log.warning(f"Unparseable JSON reply: {text[:200]!r}")
    return fallback
