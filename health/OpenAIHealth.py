# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-10
# Description: OpenAIHealth
# -----------------------------------------------------------------------------

import logging
import time
from typing import Optional

from chat.OpenAIChat import ChatProviderError, OpenAIChat
from utility.logging_utils import get_logger


class OpenAIHealth:
    """
    Smoke tests for OpenAI chat completions, including tool calling.
    """

    def __init__(self, chat_client: OpenAIChat, logger: Optional[logging.Logger] = None):
        self.chat_client = chat_client
        self.logger = logger or get_logger(__name__)

    def get_service_info(self) -> dict:
        key = getattr(self.chat_client.cfg, "openai_api_key", "")
        info = {
            "provider": "OpenAI",
            "endpoint": getattr(self.chat_client.cfg, "openai_base_url", "") or "https://api.openai.com/v1",
            "model": self.chat_client.model,
            "title_model": self.chat_client.title_model,
            "api_key_prefix": f"{key[:4]}..." if key else None,
        }
        self.logger.info("Service info: %s", info)
        return info

    def run(self) -> bool:
        """
        Run a standard OpenAI Chat smoke test.
        """
        self.logger.info("Starting OpenAI Chat healthcheck with model: %s", self.chat_client.model)
        start = time.time()

        try:
            result = self.chat_client.simple_chat(
                "Say OK if you can read this.",
                system_text="You are a model probe. Reply briefly to confirm connectivity.",
                max_tokens=10,
            )
        except ChatProviderError as e:
            self.logger.error("OpenAI Chat healthcheck FAILED: %s", e)
            return False

        elapsed_ms = (time.time() - start) * 1000.0
        self.logger.info("Chat call succeeded in %.1f ms.", elapsed_ms)

        content = (result.get("answer") or "").strip()
        if not content:
            self.logger.error("Chat response content is empty.")
            return False

        self.logger.info("Response content: %r", content)
        self.logger.info("OpenAI Chat healthcheck PASSED.")
        return True

    def run_tool_call_test(self) -> bool:
        """
        Heavier probe: force a tool call and check the arguments come back parsed.
        """
        tool = {
            "type": "function",
            "function": {
                "name": "echo",
                "description": "Echo a word back.",
                "parameters": {
                    "type": "object",
                    "properties": {"word": {"type": "string"}},
                    "required": ["word"],
                },
            },
        }

        try:
            resp = self.chat_client.chat(
                [{"role": "user", "content": "Call echo with the word 'healthcheck'."}],
                tools=[tool],
                tool_choice="required",
                max_tokens=50,
            )
        except ChatProviderError as e:
            self.logger.error("OpenAI tool-call healthcheck FAILED: %s", e)
            return False

        calls = self.chat_client.parse_tool_calls(resp.choices[0].message)
        if not calls or not isinstance(calls[0]["arguments"], dict):
            self.logger.error("Tool-call response had no usable tool call: %r", calls)
            return False

        self.logger.info("OpenAI tool-call healthcheck PASSED (%s).", calls[0]["arguments"])
        return True
