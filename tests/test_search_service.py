# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-14
# Description: test_search_service.py (hybrid merge and indexing on write paths)
# -----------------------------------------------------------------------------
import pytest


@pytest.fixture
def people(container, user_id):
    acme = container.company_service.create(user_id, {"name": "Acme Corp"})
    alex = container.contact_service.create(
        user_id, {"first_name": "Alex", "last_name": "Johnson", "company_id": acme["id"]}
    )
    alexa = container.contact_service.create(user_id, {"first_name": "Alexa", "last_name": "Brown"})
    maria = container.contact_service.create(user_id, {"first_name": "Maria", "last_name": "Garcia"})
    container.note_service.create(
        user_id, {"content": "interested in solar panels for the warehouse", "contact_id": maria["id"]}
    )
    return {"alex": alex, "alexa": alexa, "maria": maria}


def _ids(rows):
    return [r["id"] for r in rows]


def test_merge_buckets_are_disjoint(container, user_id, people):
    fuzzy = [{"id": people["alex"]["id"], "score": 0.1}, {"id": people["alexa"]["id"], "score": 0.3}]
    semantic = [
        {"entity_type": "contact", "entity_id": people["alex"]["id"], "score": 0.9, "source_text": ""},
        {"entity_type": "contact", "entity_id": people["maria"]["id"], "score": 0.5, "source_text": ""},
    ]

    result = container.search_service.merge(user_id, fuzzy, semantic)

    assert _ids(result["best_matches"]) == [people["alex"]["id"]]
    assert _ids(result["fuzzy_matches"]) == [people["alexa"]["id"]]
    assert _ids(result["semantic_matches"]) == [people["maria"]["id"]]
    assert result["semantic_matches"][0]["first_name"] == "Maria"
    assert result["semantic_matches"][0]["score"] == 0.5


def test_merge_caps_single_source_buckets_only(container, user_id):
    fuzzy = [{"id": f"f{i}"} for i in range(8)]
    semantic = [{"entity_type": "contact", "entity_id": f"f{i}", "score": 0.5, "source_text": ""} for i in range(7)]

    result = container.search_service.merge(user_id, fuzzy, semantic)

    # best matches are never capped
    assert _ids(result["best_matches"]) == [f"f{i}" for i in range(7)]
    assert _ids(result["fuzzy_matches"]) == ["f7"]

    result = container.search_service.merge(user_id, fuzzy, [])
    assert len(result["fuzzy_matches"]) == 5
    assert result["best_matches"] == []


def test_merge_drops_stale_semantic_ids(container, user_id, people):
    semantic = [
        {"entity_type": "contact", "entity_id": "deleted-contact", "score": 0.9, "source_text": ""},
        {"entity_type": "contact", "entity_id": people["maria"]["id"], "score": 0.4, "source_text": ""},
    ]

    result = container.search_service.merge(user_id, [], semantic)

    assert _ids(result["semantic_matches"]) == [people["maria"]["id"]]


def test_merge_never_hydrates_other_users_contacts(container, user_id, other_user_id):
    theirs = container.contact_service.create(other_user_id, {"first_name": "Hidden"})
    semantic = [{"entity_type": "contact", "entity_id": theirs["id"], "score": 0.9, "source_text": ""}]

    assert container.search_service.merge(user_id, [], semantic)["semantic_matches"] == []


def test_hybrid_search_end_to_end(container, user_id, people):
    result = container.search_service.search(user_id, "Alex Acme")

    assert _ids(result["best_matches"])[0] == people["alex"]["id"]
    all_ids = _ids(result["best_matches"]) + _ids(result["fuzzy_matches"]) + _ids(result["semantic_matches"])
    assert len(all_ids) == len(set(all_ids))
    assert len(result["fuzzy_matches"]) <= 5
    assert len(result["semantic_matches"]) <= 5


def test_semantic_only_hits_come_from_notes(container, user_id, people):
    result = container.search_service.search(user_id, "solar panels")

    # no lexical hits, so the note-bearing contact leads the semantic bucket
    assert result["best_matches"] == []
    assert result["fuzzy_matches"] == []
    assert _ids(result["semantic_matches"])[0] == people["maria"]["id"]


def test_semantic_branch_failure_keeps_fuzzy_results(container, user_id, people, embedder):
    embedder.fail = True

    result = container.search_service.search(user_id, "Alex")

    assert result["best_matches"] == []
    assert result["semantic_matches"] == []
    assert set(_ids(result["fuzzy_matches"])) == {people["alex"]["id"], people["alexa"]["id"]}


def test_blank_query_returns_empty_buckets(container, user_id):
    assert container.search_service.search(user_id, "  ") == {
        "best_matches": [], "fuzzy_matches": [], "semantic_matches": [],
    }
    assert container.search_service.search_companies(user_id, "") == {"companies": []}


def test_embedding_failure_during_update_still_saves(container, user_id, people, embedder):
    alex_id = people["alex"]["id"]
    embedder.fail = True

    updated = container.contact_service.update(user_id, alex_id, {"first_name": "Alexander"})

    assert updated["first_name"] == "Alexander"
    assert container.contact_service.get(user_id, alex_id)["first_name"] == "Alexander"

    # the stored embedding still reflects the old text
    [record] = [r for r in container.store.list_for_user(user_id) if r.entity_id == alex_id]
    assert record.source_text.startswith("Alex Johnson")

    # still lexically discoverable
    found = container.fuzzy_matcher.fuzzy_search_contacts(user_id, "Alexander")
    assert found[0]["id"] == alex_id

    embedder.fail = False
    assert container.search_service.index_contact(user_id, alex_id) is True
    [record] = [r for r in container.store.list_for_user(user_id) if r.entity_id == alex_id]
    assert record.source_text.startswith("Alexander Johnson")


def test_index_contact_reports_failure(container, user_id, people, embedder):
    embedder.fail = True
    assert container.search_service.index_contact(user_id, people["maria"]["id"]) is False
    assert container.search_service.index_contact(user_id, "missing") is False


def test_contact_delete_drops_embedding(container, user_id, people):
    maria_id = people["maria"]["id"]
    container.contact_service.delete(user_id, maria_id)

    assert maria_id not in [r.entity_id for r in container.store.list_for_user(user_id)]


def test_company_rename_reindexes_members(container, user_id, people):
    alex = container.contact_service.get(user_id, people["alex"]["id"])
    container.company_service.update(user_id, alex["company"]["id"], {"name": "Acme Holdings"})

    [record] = [r for r in container.store.list_for_user(user_id) if r.entity_id == alex["id"]]
    assert "Acme Holdings" in record.source_text
