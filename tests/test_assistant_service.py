# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-14
# Description: test_assistant_service.py
# -----------------------------------------------------------------------------
import pytest

from chat.OpenAIChat import ChatProviderError
from services.CRMAssistantService import CRMAssistantService
from services.common import EntityNotFoundError
from conftest import FakeChat, make_completion, make_tool_call


def _assistant(container, chat, max_steps=10):
    return CRMAssistantService(
        chat_client=chat,
        threads=container.thread_service,
        toolbox_factory=container.build_toolbox,
        max_steps=max_steps,
    )


@pytest.fixture
def thread(container, user_id):
    return container.thread_service.create(user_id, name="Test thread")


def test_plain_reply_is_streamed_and_saved(container, user_id, thread):
    chat = FakeChat([make_completion("Hi there!")])
    events = list(_assistant(container, chat).run(user_id, thread["id"], "  hello  "))

    assert [e["type"] for e in events] == ["text-delta", "done"]
    assert events[-1] == {"type": "done", "message": "Hi there!", "tool_calls": None}

    saved = container.thread_service.history(thread["id"])
    assert [(m["role"], m["content"]) for m in saved] == [("user", "hello"), ("assistant", "Hi there!")]

    sent = chat.requests[0]
    assert sent["messages"][0]["role"] == "system"
    assert sent["messages"][-1] == {"role": "user", "content": "hello"}
    assert sent["tool_choice"] == "auto"
    assert len(sent["tools"]) == 21


def test_tool_loop_executes_and_feeds_results_back(container, user_id, thread):
    chat = FakeChat([
        make_completion(None, [make_tool_call("call_1", "createCompany", {"name": "Acme"})]),
        make_completion("Created Acme."),
    ])

    events = list(_assistant(container, chat).run(user_id, thread["id"], "Add a company called Acme"))

    assert [e["type"] for e in events] == ["tool-call", "tool-result", "text-delta", "done"]
    assert events[0] == {"type": "tool-call", "tool_name": "createCompany", "args": {"name": "Acme"}}
    assert events[1]["result"]["success"] is True

    done = events[-1]
    assert done["message"] == "Created Acme."
    assert done["tool_calls"] == [{"id": "call_1", "tool_name": "createCompany", "args": {"name": "Acme"}}]

    # second request carries the assistant tool call and the tool reply
    second = chat.requests[1]["messages"]
    assert second[-2]["tool_calls"][0]["function"]["name"] == "createCompany"
    assert second[-1]["role"] == "tool"
    assert second[-1]["tool_call_id"] == "call_1"

    assert container.company_service.find_by_name(user_id, "acme") is not None

    reply = container.thread_service.history(thread["id"])[-1]
    assert reply["tool_results"][0]["result"]["company"]["name"] == "Acme"


def test_tool_errors_go_back_to_the_model(container, user_id, thread):
    chat = FakeChat([
        make_completion(None, [make_tool_call("call_1", "getContactDetails", {"contact_id": "missing"})]),
        make_completion("I could not find that contact."),
    ])

    events = list(_assistant(container, chat).run(user_id, thread["id"], "Show contact missing"))

    assert events[1]["result"] == {"success": False, "error": "Contact not found"}
    assert events[-1]["type"] == "done"


def test_step_cap_forces_a_text_answer(container, user_id, thread):
    looping = [
        make_completion(None, [make_tool_call(f"call_{i}", "listCompanies", {})])
        for i in range(3)
    ]
    chat = FakeChat(looping)

    events = list(_assistant(container, chat, max_steps=2).run(user_id, thread["id"], "loop"))

    assert len(chat.requests) == 3
    assert [r["tool_choice"] for r in chat.requests] == ["auto", "auto", "none"]
    assert sum(1 for e in events if e["type"] == "tool-call") == 2
    assert events[-1]["type"] == "done"


def test_history_replays_prior_text_turns(container, user_id, thread):
    container.thread_service.add_message(thread["id"], "user", "first question")
    container.thread_service.add_message(thread["id"], "assistant", "first answer", tool_calls=[{"id": "x"}])
    container.thread_service.add_message(thread["id"], "tool", "{}")

    chat = FakeChat([make_completion("second answer")])
    list(_assistant(container, chat).run(user_id, thread["id"], "second question"))

    roles = [m["role"] for m in chat.requests[0]["messages"]]
    assert roles == ["system", "user", "assistant", "user"]


def test_validation_happens_before_streaming(container, user_id, other_user_id, thread):
    assistant = _assistant(container, FakeChat())

    with pytest.raises(ValueError):
        assistant.run(user_id, thread["id"], "   ")
    with pytest.raises(EntityNotFoundError):
        assistant.run(other_user_id, thread["id"], "hello")

    assert container.thread_service.history(thread["id"]) == []


def test_provider_failure_is_an_error_event(container, user_id, thread):
    chat = FakeChat()
    chat.fail = True

    events = list(_assistant(container, chat).run(user_id, thread["id"], "hello"))
    assert events == [{"type": "error", "error": "chat provider unavailable"}]

    # only the user message was kept
    assert [m["role"] for m in container.thread_service.history(thread["id"])] == ["user"]

    with pytest.raises(ChatProviderError):
        _assistant(container, chat).respond(user_id, thread["id"], "again")


def test_respond_returns_final_message(container, user_id, thread):
    chat = FakeChat([make_completion("All set.")])
    assert _assistant(container, chat).respond(user_id, thread["id"], "hi") == {
        "message": "All set.", "tool_calls": None,
    }
