# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-12
# Updated: 2026-09-14
# Description: conftest.py
# -----------------------------------------------------------------------------

import json
import os
import re
import sys
import zlib
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import numpy as np
import pytest

# add project root to sys.path
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from chat.OpenAIChat import ChatProviderError, OpenAIChat  # noqa: E402
from config.Config import Config  # noqa: E402
from embedding.CRMEmbedder import EmbeddingProviderError  # noqa: E402
from persistence.Database import Database  # noqa: E402
from persistence.models import User  # noqa: E402

EMBED_DIM = 64


class FakeEmbedder:
    """
    Deterministic bag-of-words embedder: each lower-cased word bumps one of
    EMBED_DIM buckets, so texts sharing words have positive cosine.
    """

    model = "fake-embedding"

    def __init__(self, dim: int = EMBED_DIM):
        self.dim = dim
        self.fail = False
        self.calls: List[str] = []

    def embed_text(self, text: str) -> np.ndarray:
        if self.fail:
            raise EmbeddingProviderError("embedding provider unavailable")
        if not text or not text.strip():
            raise EmbeddingProviderError("Cannot embed empty text")
        self.calls.append(text)

        vec = np.zeros(self.dim, dtype=np.float32)
        for word in re.findall(r"\w+", text.lower()):
            vec[zlib.crc32(word.encode("utf-8")) % self.dim] += 1.0
        return vec


def make_tool_call(call_id: str, name: str, arguments: Dict[str, Any]) -> SimpleNamespace:
    return SimpleNamespace(
        id=call_id,
        type="function",
        function=SimpleNamespace(name=name, arguments=json.dumps(arguments)),
    )


def make_completion(content: Optional[str] = None, tool_calls: Optional[list] = None) -> SimpleNamespace:
    message = SimpleNamespace(content=content, tool_calls=tool_calls or None)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)], usage=None, model="fake-chat")


class FakeChat:
    """Plays back scripted completions; records every request."""

    model = "fake-chat"
    title_model = "fake-title"
    parse_tool_calls = staticmethod(OpenAIChat.parse_tool_calls)

    def __init__(self, responses: Optional[list] = None, title: str = "Acme follow-up"):
        self.responses = list(responses or [])
        self.title = title
        self.requests: List[Dict[str, Any]] = []
        self.fail = False

    def chat(self, messages, **kwargs) -> Any:
        self.requests.append({"messages": [dict(m) for m in messages], **kwargs})
        if self.fail:
            raise ChatProviderError("chat provider unavailable")
        if not self.responses:
            return make_completion("Done.")
        return self.responses.pop(0)

    def simple_chat(self, user_text: str, system_text: Optional[str] = None, **kwargs) -> dict:
        if self.fail:
            raise ChatProviderError("chat provider unavailable")
        return {"answer": self.title, "raw": None, "usage": None, "model": kwargs.get("model")}


@pytest.fixture
def db(tmp_path) -> Database:
    database = Database(database_url=f"sqlite:///{tmp_path / 'crm-test.db'}")
    database.create_all()
    yield database
    database.dispose()


@pytest.fixture
def add_user(db):
    def _add(user_id: str) -> str:
        with db.session() as session:
            session.add(User(id=user_id, email=f"{user_id}@example.com"))
        return user_id
    return _add


@pytest.fixture
def user_id(add_user) -> str:
    return add_user("user_1")


@pytest.fixture
def other_user_id(add_user) -> str:
    return add_user("user_2")


@pytest.fixture
def embedder() -> FakeEmbedder:
    return FakeEmbedder()


@pytest.fixture
def fake_chat() -> FakeChat:
    return FakeChat()


@pytest.fixture
def cfg() -> Config:
    return Config(openai_api_key="sk-test", database_url="sqlite://")


@pytest.fixture
def container(cfg, db, embedder, fake_chat):
    from api.AppContainer import AppContainer
    from utility.keepalive import KeepAliveState

    return AppContainer(cfg, db=db, embedder=embedder, chat_client=fake_chat, keepalive=KeepAliveState())


def has_openai_env() -> bool:
    return bool(os.getenv("OPENAI_API_KEY"))
