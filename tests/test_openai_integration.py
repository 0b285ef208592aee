# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-14
# Description: test_openai_integration.py
# -----------------------------------------------------------------------------
import pytest

from api.AppContainer import AppContainer
from chat.OpenAIChat import OpenAIChat
from config.Config import Config
from conftest import has_openai_env
from embedding.CRMEmbedder import CRMEmbedder
from search.VectorSimilarity import cosine_similarity
from utility.keepalive import KeepAliveState
from utility.pagination import PaginationParams

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(not has_openai_env(), reason="OPENAI_API_KEY not set"),
]

@pytest.fixture(scope="module")
def live_cfg() -> Config:
    return Config.from_env()

@pytest.fixture
def live_container(live_cfg, db):
    return AppContainer(live_cfg, db=db, keepalive=KeepAliveState())

def test_embeddings_rank_related_text_higher(live_cfg):
    embedder = CRMEmbedder(live_cfg)

    query = embedder.embed_text("procurement manager at a steel company")
    related = embedder.embed_text("Maria buys raw materials for Northwind Steel")
    unrelated = embedder.embed_text("Birthday party playlist")

    assert query.ndim == 1
    assert cosine_similarity(query, related) > cosine_similarity(query, unrelated)

def test_chat_healthcheck_and_title(live_cfg):
    chat = OpenAIChat(cfg=live_cfg)
    assert chat.healthcheck() is True

    result = chat.simple_chat("Say OK", max_tokens=5, model=chat.title_model)
    assert result["answer"]

def test_semantic_search_finds_contact_by_note(live_container, user_id):
    maria = live_container.contact_service.create(user_id, {"first_name": "Maria", "last_name": "Lopez"})
    live_container.contact_service.create(user_id, {"first_name": "Tom", "last_name": "Baker"})
    live_container.note_service.create(
        user_id, {"content": "Runs procurement for a steel mill", "contact_id": maria["id"]}
    )

    hits = live_container.search_service.semantic_search(user_id, "who handles purchasing of metal?", limit=1)
    assert hits[0]["entity_id"] == maria["id"]

def test_assistant_creates_contact(live_container, user_id):
    thread = live_container.thread_service.create(user_id, name="Integration")

    result = live_container.assistant_service.respond(
        user_id, thread["id"], "Add a new contact named Priya Shah who works at Globex as CFO."
    )

    assert result["message"]
    assert any(c["tool_name"] == "createContact" for c in result["tool_calls"] or [])
    assert live_container.contact_service.list(user_id, PaginationParams(offset=0, limit=10))["total"] == 1
