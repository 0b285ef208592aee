# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-12
# Description: CRMAssistantService.py
# -----------------------------------------------------------------------------
import json
import logging
from typing import Any, Callable, Dict, Iterator, List

import settings
from agent.CRMToolbox import CRMToolbox
from agent.ToolKind import openai_tools
from agent.prompts import SYSTEM_PROMPT
from chat.OpenAIChat import ChatProviderError, Message
from services.CRMThreadService import CRMThreadService
from services.common import EntityNotFoundError
from utility.logging_utils import get_class_logger

Event = Dict[str, Any]


class CRMAssistantService:
    """
    Assistant Service:
        - loads the thread's prior user/assistant turns
        - runs the tool-calling loop (bounded by max_steps)
        - executes tool calls through a per-user CRMToolbox
        - persists the user message and the assistant reply with its tool calls/results
        - yields stream events: tool-call, tool-result, text-delta, done, error
    """

    def __init__(
            self,
            *,
            chat_client: Any,
            threads: CRMThreadService,
            toolbox_factory: Callable[[str], CRMToolbox],
            max_steps: int = settings.AGENT_MAX_STEPS,
            temperature: float = settings.AGENT_TEMPERATURE,
            max_tokens: int = settings.AGENT_MAX_TOKENS,
            logger: logging.Logger | None = None,
    ) -> None:
        self.chat_client = chat_client
        self.threads = threads
        self.toolbox_factory = toolbox_factory
        self.max_steps = max_steps
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.logger = logger or get_class_logger(self.__class__)
        self.tools = openai_tools()

    @staticmethod
    def to_chat_messages(history: List[Dict[str, Any]]) -> List[Message]:
        """Prior turns as plain user/assistant text; tool traffic is not replayed."""
        out: List[Message] = []
        for m in history:
            if m["role"] in ("user", "assistant") and m.get("content"):
                out.append({"role": m["role"], "content": m["content"]})
        return out

    def run(self, user_id: str, thread_id: str, content: str) -> Iterator[Event]:
        """
        Generator of stream events. Raises EntityNotFoundError before the first
        event if the thread does not belong to the user; provider failures after
        that are reported as an ``error`` event.
        """
        text = (content or "").strip()
        if not text:
            raise ValueError("Message content is required")
        if not self.threads.exists(user_id, thread_id):
            raise EntityNotFoundError("Thread", thread_id)

        return self._run(user_id, thread_id, text)

    def _run(self, user_id: str, thread_id: str, text: str) -> Iterator[Event]:
        history = self.threads.history(thread_id)
        self.threads.add_message(thread_id, "user", text)

        messages: List[Message] = [{"role": "system", "content": SYSTEM_PROMPT}]
        messages.extend(self.to_chat_messages(history))
        messages.append({"role": "user", "content": text})

        toolbox = self.toolbox_factory(user_id)
        text_parts: List[str] = []
        tool_calls: List[Dict[str, Any]] = []
        tool_results: List[Dict[str, Any]] = []

        self.logger.info("Assistant turn: thread=%s history=%d", thread_id, len(history))

        try:
            for step in range(self.max_steps + 1):
                # Last pass forbids tools so the turn always ends in text
                final_pass = step == self.max_steps
                resp = self.chat_client.chat(
                    messages,
                    temperature=self.temperature,
                    max_tokens=self.max_tokens,
                    tools=self.tools,
                    tool_choice="none" if final_pass else "auto",
                )
                message = resp.choices[0].message
                calls = [] if final_pass else self.chat_client.parse_tool_calls(message)

                if message.content:
                    text_parts.append(message.content)
                    yield {"type": "text-delta", "text": message.content}

                if not calls:
                    break

                messages.append({
                    "role": "assistant",
                    "content": message.content,
                    "tool_calls": [
                        {
                            "id": c["id"],
                            "type": "function",
                            "function": {
                                "name": c["name"],
                                "arguments": c["arguments"] if isinstance(c["arguments"], str)
                                else json.dumps(c["arguments"]),
                            },
                        }
                        for c in calls
                    ],
                })

                for call in calls:
                    yield {"type": "tool-call", "tool_name": call["name"], "args": call["arguments"]}
                    result = toolbox.execute(call["name"], call["arguments"])
                    yield {"type": "tool-result", "tool_name": call["name"], "result": result}

                    tool_calls.append({"id": call["id"], "tool_name": call["name"], "args": call["arguments"]})
                    tool_results.append({"id": call["id"], "tool_name": call["name"], "result": result})
                    messages.append({
                        "role": "tool",
                        "tool_call_id": call["id"],
                        "content": json.dumps(result, default=str),
                    })

        except ChatProviderError as e:
            self.logger.error("Assistant turn failed (thread=%s): %s", thread_id, e)
            yield {"type": "error", "error": str(e)}
            return

        full_text = "\n\n".join(text_parts)
        self.threads.add_message(
            thread_id, "assistant", full_text,
            tool_calls=json.loads(json.dumps(tool_calls, default=str)),
            tool_results=json.loads(json.dumps(tool_results, default=str)),
        )
        self.logger.info("Assistant turn done: thread=%s tool_calls=%d", thread_id, len(tool_calls))

        yield {"type": "done", "message": full_text, "tool_calls": tool_calls or None}

    def respond(self, user_id: str, thread_id: str, content: str) -> Dict[str, Any]:
        """Run the whole turn and return the final message."""
        for event in self.run(user_id, thread_id, content):
            if event["type"] == "error":
                raise ChatProviderError(event["error"])
            if event["type"] == "done":
                return {"message": event["message"], "tool_calls": event["tool_calls"]}
        raise ChatProviderError("Assistant turn ended without a reply")
