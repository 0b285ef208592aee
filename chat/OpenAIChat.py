# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-09
# Description: OpenAIChat
# -----------------------------------------------------------------------------
import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from openai import OpenAI, OpenAIError

from utility.logging_utils import get_class_logger

Message = Dict[str, Any]  # {"role": "system"|"user"|"assistant"|"tool", "content": ..., ...}


class ChatProviderError(RuntimeError):
    """The chat completion provider failed or returned an unusable response."""


@dataclass
class OpenAIChat:
    """
        OpenAI chat wrapper for the CRM assistant.

        Expected Config fields:
          cfg.openai_api_key: str
          cfg.openai_base_url: str (blank for api.openai.com)
          cfg.openai_chat_model: str  (e.g. "gpt-4o")
          cfg.openai_title_model: str (short thread titles)
    """

    cfg: Any
    client: Any = None
    logger: Any = None

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)

        if not getattr(self.cfg, "openai_api_key", None):
            raise ValueError("Config is missing openai_api_key")

        self.model = getattr(self.cfg, "openai_chat_model", None)
        if not self.model:
            raise ValueError("Config missing openai_chat_model.")
        self.title_model = getattr(self.cfg, "openai_title_model", None) or self.model

        if self.client is None:
            self.client = OpenAI(
                api_key=self.cfg.openai_api_key,
                base_url=getattr(self.cfg, "openai_base_url", None) or None,
            )

        self.logger.info("OpenAIChat initialised (model=%s, title_model=%s)", self.model, self.title_model)

    # Standard chat call, optionally with tools
    def chat(
            self,
            messages: List[Message],
            temperature: float = 0.0,
            max_tokens: int = 512,
            tools: Optional[List[Dict[str, Any]]] = None,
            tool_choice: Optional[str] = None,
            model: Optional[str] = None,
            extra_params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        if not messages:
            raise ValueError("messages must be non-empty.")

        params: Dict[str, Any] = {
            "model": model or self.model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        if tools:
            params["tools"] = tools
            if tool_choice:
                params["tool_choice"] = tool_choice
        if extra_params:
            params.update(extra_params)

        self.logger.debug(
            "Chat request: model=%s temp=%s max_tokens=%s tools=%d",
            params["model"], temperature, max_tokens, len(tools or []),
        )

        try:
            resp = self.client.chat.completions.create(**params)
        except OpenAIError as e:
            self.logger.error("Chat completion failed: %s", e)
            raise ChatProviderError(f"Chat completion failed: {e}") from e

        if not getattr(resp, "choices", None):
            raise ChatProviderError("Chat completion returned no choices")

        self.logger.debug("Token usage: %r", getattr(resp, "usage", None))
        return resp

    @staticmethod
    def parse_tool_calls(message: Any) -> List[Dict[str, Any]]:
        """Flatten SDK tool calls into {id, name, arguments} with arguments decoded."""
        calls = []
        for tc in getattr(message, "tool_calls", None) or []:
            raw = tc.function.arguments or "{}"
            try:
                args = json.loads(raw)
            except json.JSONDecodeError:
                # Left as a string; the toolbox reports it back as invalid input
                args = raw
            calls.append({"id": tc.id, "name": tc.function.name, "arguments": args})
        return calls

    # Convenience helper functions
    def simple_chat(
            self,
            user_text: str,
            system_text: Optional[str] = None,
            **kwargs: Any,
    ) -> dict:
        messages: List[Message] = []
        if system_text:
            messages.append({"role": "system", "content": system_text})
        messages.append({"role": "user", "content": user_text})

        resp = self.chat(messages, **kwargs)
        content = resp.choices[0].message.content or ""

        self.logger.info("Chat answer generated (model=%s)", getattr(resp, "model", None))

        return {
            "answer": content,
            "raw": resp,
            "usage": getattr(resp, "usage", None),
            "model": getattr(resp, "model", None),
        }

    def healthcheck(self) -> bool:
        try:
            _ = self.simple_chat("ping", max_tokens=5, temperature=0.0)
            return True
        except ChatProviderError as e:
            self.logger.warning("Chat healthcheck failed: %s", e)
            return False
