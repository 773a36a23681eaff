"""
OpenAI-backed chat model for the response interpreter.

Sends exactly one chat completion per call. Retry, backoff and budget
policy belong to whoever wraps this client.

Usage:
    from smallville_chat.llm_client import LLMClient
    client = LLMClient(model="gpt-4o-mini")
    text = client.send_chat("What will you do today?", temperature=0.4)
"""

from __future__ import annotations
import json
import logging
import os
from dataclasses import dataclass, field
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o-mini"


@dataclass
class LLMClient:
    """
    Wraps the OpenAI chat completions API behind `send_chat`.

    Parameters
    ----------
    model : str
        Model used for every call.
    api_key : str | None
        Falls back to OPENAI_API_KEY env var.
    base_url : str | None
        Override for compatible endpoints; falls back to OPENAI_BASE_URL.
    max_tokens : int
        Max response tokens per call.
    system : str | None
        Optional system prompt sent ahead of every user prompt.
    client : object | None
        Pre-built SDK client (tests, custom transports).
    """

    model: str = DEFAULT_MODEL
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    max_tokens: int = 1000
    system: Optional[str] = None
    client: object = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.client is not None:
            return

        key = self.api_key or os.environ.get("OPENAI_API_KEY", "")
        if not key:
            logger.warning(
                "No OPENAI_API_KEY found. Set the env var or pass api_key=... "
                "to LLMClient. Calls will fail until a key is provided."
            )
        try:
            from openai import OpenAI
        except ImportError:
            raise ImportError(
                "openai package not found. Install with: pip install openai"
            )
        kwargs = {"api_key": key}
        base_url = self.base_url or os.environ.get("OPENAI_BASE_URL")
        if base_url:
            kwargs["base_url"] = base_url
        self.client = OpenAI(**kwargs)

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    def send_chat(self, prompt: str, temperature: float) -> str:
        """
        Send one prompt and return the assistant's reply text.

        Raises
        ------
        ValueError   : temperature outside [0, 1]
        LLMCallError : the SDK call failed
        """
        if not 0.0 <= temperature <= 1.0:
            raise ValueError(f"temperature must be within [0, 1], got {temperature}")

        messages = []
        if self.system:
            messages.append({"role": "system", "content": self.system})
        messages.append({"role": "user", "content": prompt})

        payload = {
            "model": self.model,
            "messages": messages,
            self._token_param_name(self.model): self.max_tokens,
        }
        if self._supports_custom_temperature(self.model):
            payload["temperature"] = temperature

        try:
            resp = self.client.chat.completions.create(**payload)
        except Exception as exc:
            raise LLMCallError(f"LLM call to {self.model} failed: {exc}") from exc

        text = self._extract_text(resp)
        if not text.strip():
            logger.warning("Model %s returned an empty text response.", self.model)
        logger.debug("LLM [%s] temperature=%.2f prompt=%d chars reply=%d chars",
                     self.model, temperature, len(prompt), len(text))
        return text

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _token_param_name(model: str) -> str:
        """
        Return the token-limit parameter accepted by the target model.
        GPT-5 family expects max_completion_tokens on chat.completions.
        """
        return "max_completion_tokens" if model.startswith("gpt-5") else "max_tokens"

    @staticmethod
    def _supports_custom_temperature(model: str) -> bool:
        """
        GPT-5 chat.completions currently supports only default temperature behavior.
        """
        return not model.startswith("gpt-5")

    @staticmethod
    def _extract_text(response) -> str:
        """
        Extract assistant text from a chat completion response.
        Some model/SDK combos return segmented content blocks.
        """
        try:
            message = response.choices[0].message
        except (AttributeError, IndexError, TypeError):
            return ""

        content = getattr(message, "content", None)
        if isinstance(content, str):
            return content

        if isinstance(content, list):
            parts: list[str] = []
            for block in content:
                if isinstance(block, str):
                    parts.append(block)
                    continue
                text_val = getattr(block, "text", None)
                if isinstance(text_val, str):
                    parts.append(text_val)
                    continue
                if isinstance(block, dict):
                    if isinstance(block.get("text"), str):
                        parts.append(block["text"])
                    elif isinstance(block.get("content"), str):
                        parts.append(block["content"])
            return "\n".join(p for p in parts if p).strip()

        if content is None:
            return ""
        try:
            return json.dumps(content, ensure_ascii=False)
        except (TypeError, ValueError):
            return str(content)


class LLMCallError(RuntimeError):
    pass
