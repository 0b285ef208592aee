# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-14
# Description: test_toolbox.py
# -----------------------------------------------------------------------------
from datetime import timedelta

import pytest

from agent.ToolKind import ToolKind, openai_tools
from persistence.models import utcnow
from utility.pagination import PaginationParams

@pytest.fixture
def toolbox(container, user_id):
    return container.build_toolbox(user_id)

def test_every_tool_has_a_handler_and_schema():
    tools = openai_tools()

    assert len(tools) == len(ToolKind) == 21
    names = {t["function"]["name"] for t in tools}
    assert {"search", "createContact", "confirmDeleteCompany", "completeNotification"} <= names

    create = next(t for t in tools if t["function"]["name"] == "createContact")
    params = create["function"]["parameters"]
    assert params["type"] == "object"
    assert params["required"] == ["first_name"]

def test_unknown_tool_and_bad_input(toolbox):
    assert toolbox.execute("launchRockets", {}) == {"success": False, "error": "Unknown tool: launchRockets"}

    bad = toolbox.execute("createContact", {"last_name": "Only"})
    assert bad["success"] is False
    assert bad["error"].startswith("Invalid input")

    assert toolbox.execute("search", "not an object")["success"] is False

def test_create_contact_by_company_name(toolbox, container, user_id):
    existing = container.company_service.create(user_id, {"name": "Acme Corp"})

    first = toolbox.execute("createContact", {"first_name": "Alex", "company_name": "acme corp"})
    second = toolbox.execute("createContact", {"first_name": "Sam", "company_name": "Initech"})

    assert first["success"] is True
    assert first["contact"]["company_id"] == existing["id"]
    assert second["contact"]["company"]["name"] == "Initech"
    assert container.company_service.list(user_id, PaginationParams(offset=0, limit=50))["total"] == 2

def test_update_and_details(toolbox, container, user_id):
    alex = container.contact_service.create(user_id, {"first_name": "Alex"})
    container.notification_service.create(user_id, {"title": "Call", "contact_id": alex["id"]})
    done = container.notification_service.create(user_id, {"title": "Old", "contact_id": alex["id"]})
    container.notification_service.complete(user_id, done["id"])

    updated = toolbox.execute("updateContact", {"contact_id": alex["id"], "updates": {"job_title": "CTO"}})
    assert updated["contact"]["job_title"] == "CTO"
    assert updated["contact"]["first_name"] == "Alex"

    details = toolbox.execute("getContactDetails", {"contact_id": alex["id"]})
    assert [n["title"] for n in details["contact"]["notifications"]] == ["Call"]

    assert toolbox.execute("getContactDetails", {"contact_id": "missing"}) == {
        "success": False, "error": "Contact not found",
    }

def test_contact_delete_needs_confirmation(toolbox, container, user_id):
    acme = container.company_service.create(user_id, {"name": "Acme"})
    alex = container.contact_service.create(
        user_id, {"first_name": "Alex", "last_name": "Smith", "company_id": acme["id"]}
    )

    asked = toolbox.execute("deleteContact", {"contact_id": alex["id"]})
    assert asked["requires_confirmation"] is True
    assert "Alex Smith from Acme" in asked["message"]
    assert container.contact_service.get(user_id, alex["id"]) is not None

    confirmed = toolbox.execute("confirmDeleteContact", {"contact_id": alex["id"]})
    assert confirmed == {"success": True, "message": "Deleted Alex Smith"}
    assert container.contact_service.get(user_id, alex["id"]) is None

def test_company_delete_needs_confirmation(toolbox, container, user_id):
    acme = container.company_service.create(user_id, {"name": "Acme"})
    container.contact_service.create(user_id, {"first_name": "Alex", "company_id": acme["id"]})

    asked = toolbox.execute("deleteCompany", {"company_id": acme["id"]})
    assert asked["requires_confirmation"] is True
    assert "1 contact(s)" in asked["message"]

    assert toolbox.execute("confirmDeleteCompany", {"company_id": acme["id"]})["message"] == "Deleted Acme"
    assert toolbox.execute("confirmDeleteCompany", {"company_id": acme["id"]})["success"] is False

def test_interactions_with_natural_dates(toolbox, container, user_id):
    alex = container.contact_service.create(user_id, {"first_name": "Alex"})
    before = utcnow()

    added = toolbox.execute(
        "addInteraction",
        {"contact_id": alex["id"], "type": "call", "summary": "Pricing", "occurred_at": "yesterday"},
    )
    undated = toolbox.execute("addInteraction", {"contact_id": alex["id"], "type": "email"})

    assert added["success"] is True
    assert added["interaction"]["occurred_at"][:10] == (before - timedelta(days=1)).date().isoformat()
    assert undated["interaction"]["occurred_at"] >= before.isoformat()[:19]

    listed = toolbox.execute("getInteractions", {"contact_id": alex["id"], "limit": 1})
    assert len(listed["interactions"]) == 1

    changed = toolbox.execute(
        "updateInteraction",
        {"interaction_id": added["interaction"]["id"], "updates": {"sentiment": "positive"}},
    )
    assert changed["interaction"]["sentiment"] == "positive"

def test_interaction_for_unknown_contact(toolbox):
    result = toolbox.execute("addInteraction", {"contact_id": "nope", "type": "call"})
    assert result == {"success": False, "error": "Contact not found: nope"}

def test_notes_and_notifications(toolbox, container, user_id):
    alex = container.contact_service.create(user_id, {"first_name": "Alex"})

    note = toolbox.execute("addNote", {"content": "Prefers mornings", "contact_id": alex["id"]})
    assert note["note"]["contact_id"] == alex["id"]

    created = toolbox.execute(
        "createNotification",
        {"title": "Send proposal", "type": "follow_up_email", "contact_id": alex["id"], "due_date": "tomorrow"},
    )
    assert created["notification"]["due_date"] > utcnow().isoformat()

    floating = toolbox.execute("createNotification", {"title": "Someday", "type": "general"})
    assert floating["notification"]["due_date"] is None

    pending = toolbox.execute("getNotifications", {})
    assert {n["title"] for n in pending["notifications"]} == {"Send proposal", "Someday"}

    completed = toolbox.execute("completeNotification", {"notification_id": created["notification"]["id"]})
    assert completed["notification"]["is_completed"] is True

    for_alex = toolbox.execute("getNotifications", {"contact_id": alex["id"]})
    assert for_alex["notifications"] == []
    with_done = toolbox.execute("getNotifications", {"contact_id": alex["id"], "include_completed": True})
    assert [n["title"] for n in with_done["notifications"]] == ["Send proposal"]

def test_search_tools(toolbox, container, user_id):
    acme = container.company_service.create(user_id, {"name": "Acme Corp"})
    container.contact_service.create(user_id, {"first_name": "Alex", "company_id": acme["id"]})

    found = toolbox.execute("search", {"query": "Alex"})
    assert found["best_matches"][0]["first_name"] == "Alex"

    companies = toolbox.execute("searchCompanies", {"query": "acme"})
    assert companies["companies"][0]["name"] == "Acme Corp"

    listed = toolbox.execute("listContacts", {"company_id": acme["id"]})
    assert listed["total"] == 1
    assert toolbox.execute("listCompanies", {})["total"] == 1

def test_toolbox_is_user_scoped(container, user_id, other_user_id):
    alex = container.contact_service.create(user_id, {"first_name": "Alex"})
    theirs = container.build_toolbox(other_user_id)

    assert theirs.execute("getContactDetails", {"contact_id": alex["id"]})["success"] is False
    assert theirs.execute("confirmDeleteContact", {"contact_id": alex["id"]})["success"] is False
    assert container.contact_service.get(user_id, alex["id"]) is not None
