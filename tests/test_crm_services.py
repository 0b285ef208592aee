# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-14
# Description: test_crm_services.py
# -----------------------------------------------------------------------------
from datetime import datetime, timedelta

import pytest

from persistence.models import utcnow
from services.CRMNotificationService import CRMNotificationService
from services.CRMStatsService import CRMStatsService
from services.common import EntityNotFoundError
from utility.pagination import PaginationParams

PAGE = PaginationParams(offset=0, limit=50)


def _names(page):
    return [c["first_name"] for c in page["data"]]


# -----------------------------------------------------------------------------
# Companies
# -----------------------------------------------------------------------------
def test_company_crud_and_lookup(container, user_id, other_user_id):
    svc = container.company_service
    acme = svc.create(user_id, {"name": "Acme Corp", "industry": "Manufacturing"})

    assert svc.find_by_name(user_id, "  acme corp ")["id"] == acme["id"]
    assert svc.find_by_name(other_user_id, "Acme Corp") is None
    assert svc.get_or_create_by_name(user_id, "ACME CORP")["id"] == acme["id"]
    assert svc.get_or_create_by_name(user_id, "Globex")["name"] == "Globex"

    updated = svc.update(user_id, acme["id"], {"website": "https://acme.test"})
    assert updated["website"] == "https://acme.test"
    assert svc.update(other_user_id, acme["id"], {"website": "x"}) is None

    page = svc.list(user_id, PAGE, sort_by="name")
    assert [c["name"] for c in page["data"]] == ["Acme Corp", "Globex"]
    assert svc.list(user_id, PAGE, query="manufact")["total"] == 1

    assert svc.delete(user_id, acme["id"])["name"] == "Acme Corp"
    assert svc.get(user_id, acme["id"]) is None


def test_company_delete_unlinks_contacts(container, user_id):
    acme = container.company_service.create(user_id, {"name": "Acme Corp"})
    alex = container.contact_service.create(user_id, {"first_name": "Alex", "company_id": acme["id"]})

    detail = container.company_service.get(user_id, acme["id"])
    assert [c["id"] for c in detail["contacts"]] == [alex["id"]]

    container.company_service.delete(user_id, acme["id"])

    contact = container.contact_service.get(user_id, alex["id"])
    assert contact is not None
    assert contact["company"] is None


# -----------------------------------------------------------------------------
# Contacts
# -----------------------------------------------------------------------------
def test_contact_requires_owned_company(container, user_id, other_user_id):
    theirs = container.company_service.create(other_user_id, {"name": "Theirs"})

    with pytest.raises(EntityNotFoundError):
        container.contact_service.create(user_id, {"first_name": "Alex", "company_id": theirs["id"]})


def test_contact_list_sorting_and_filters(container, user_id):
    svc = container.contact_service
    acme = container.company_service.create(user_id, {"name": "Acme"})
    zed = svc.create(user_id, {"first_name": "Zed", "company_id": acme["id"]})
    svc.create(user_id, {"first_name": "amy", "job_title": "Buyer"})
    bob = svc.create(user_id, {"first_name": "Bob"})

    now = utcnow()
    container.interaction_service.create(
        user_id, {"contact_id": bob["id"], "type": "call", "occurred_at": now - timedelta(days=1)}
    )
    container.interaction_service.create(
        user_id, {"contact_id": zed["id"], "type": "email", "occurred_at": now - timedelta(days=10)}
    )

    assert _names(svc.list(user_id, PAGE, sort_by="name")) == ["amy", "Bob", "Zed"]
    assert _names(svc.list(user_id, PAGE, sort_by="name", sort_order="desc")) == ["Zed", "Bob", "amy"]

    # contacts never contacted sort as the oldest
    by_recent = svc.list(user_id, PAGE, sort_by="last_interaction_at", sort_order="desc")
    assert _names(by_recent) == ["Bob", "Zed", "amy"]
    assert by_recent["data"][2]["last_interaction_at"] is None
    assert by_recent["data"][0]["last_interaction_at"] is not None

    assert _names(svc.list(user_id, PAGE, company_id=acme["id"])) == ["Zed"]
    assert _names(svc.list(user_id, PAGE, query="buyer")) == ["amy"]

    page = svc.list(user_id, PaginationParams(offset=1, limit=1), sort_by="name")
    assert _names(page) == ["Bob"]
    assert page["total"] == 3
    assert page["has_more"] is True


def test_contact_detail_has_recent_interactions(container, user_id):
    alex = container.contact_service.create(user_id, {"first_name": "Alex"})
    base = utcnow() - timedelta(days=30)
    for day in range(12):
        container.interaction_service.create(
            user_id, {"contact_id": alex["id"], "type": "call", "occurred_at": base + timedelta(days=day)}
        )

    detail = container.contact_service.get(user_id, alex["id"])

    assert len(detail["interactions"]) == 10
    occurred = [i["occurred_at"] for i in detail["interactions"]]
    assert occurred == sorted(occurred, reverse=True)


def test_contacts_are_user_scoped(container, user_id, other_user_id):
    alex = container.contact_service.create(user_id, {"first_name": "Alex"})

    assert container.contact_service.get(other_user_id, alex["id"]) is None
    assert container.contact_service.delete(other_user_id, alex["id"]) is None
    assert container.contact_service.list(other_user_id, PAGE)["total"] == 0


# -----------------------------------------------------------------------------
# Interactions and notes
# -----------------------------------------------------------------------------
def test_interaction_requires_owned_contact(container, user_id, other_user_id):
    theirs = container.contact_service.create(other_user_id, {"first_name": "Theirs"})

    with pytest.raises(EntityNotFoundError):
        container.interaction_service.create(
            user_id, {"contact_id": theirs["id"], "type": "call", "occurred_at": utcnow()}
        )


def test_interaction_update_and_list_by_contact(container, user_id):
    alex = container.contact_service.create(user_id, {"first_name": "Alex"})
    created = container.interaction_service.create(
        user_id, {"contact_id": alex["id"], "type": "meeting", "summary": "Kickoff", "occurred_at": utcnow()}
    )

    updated = container.interaction_service.update(user_id, created["id"], {"sentiment": "positive"})
    assert updated["sentiment"] == "positive"
    assert updated["summary"] == "Kickoff"

    page = container.interaction_service.list_by_contact(user_id, alex["id"], PAGE)
    assert [i["id"] for i in page["data"]] == [created["id"]]

    assert container.interaction_service.delete(user_id, created["id"])["id"] == created["id"]
    assert container.interaction_service.get(user_id, created["id"]) is None


def test_note_query_and_parents(container, user_id):
    acme = container.company_service.create(user_id, {"name": "Acme"})
    alex = container.contact_service.create(user_id, {"first_name": "Alex"})
    container.note_service.create(user_id, {"content": "Budget approved for Q3", "company_id": acme["id"]})
    container.note_service.create(user_id, {"content": "Wants a budget demo", "contact_id": alex["id"]})

    assert container.note_service.list(user_id, PAGE, query="budget")["total"] == 2
    assert container.note_service.list(user_id, PAGE, query="budget demo")["total"] == 1

    by_company = container.note_service.list_by(user_id, "company_id", acme["id"], PAGE)
    assert [n["content"] for n in by_company["data"]] == ["Budget approved for Q3"]

    [note] = container.note_service.list(user_id, PAGE, contact_id=alex["id"])["data"]
    assert note["contact"]["first_name"] == "Alex"

    with pytest.raises(ValueError):
        container.note_service.list_by(user_id, "user_id", user_id, PAGE)


def test_note_writes_reindex_contact(container, user_id):
    alex = container.contact_service.create(user_id, {"first_name": "Alex"})
    note = container.note_service.create(user_id, {"content": "Met at the expo", "contact_id": alex["id"]})

    def contact_text():
        [record] = [r for r in container.store.list_for_user(user_id) if r.entity_id == alex["id"]]
        return record.source_text

    assert contact_text() == "Alex Met at the expo"

    container.note_service.update(user_id, note["id"], {"content": "Met at the trade show"})
    assert contact_text() == "Alex Met at the trade show"

    container.note_service.delete(user_id, note["id"])
    assert contact_text() == "Alex"


# -----------------------------------------------------------------------------
# Notifications
# -----------------------------------------------------------------------------
@pytest.fixture
def reminders(db, user_id):
    now = datetime(2026, 10, 14, 12, 0)
    svc = CRMNotificationService(db=db, clock=lambda: now)
    rows = {
        "overdue": svc.create(user_id, {"title": "Overdue", "due_date": now - timedelta(days=1)}),
        "soon": svc.create(user_id, {"title": "Soon", "type": "follow_up_call", "due_date": now + timedelta(days=2)}),
        "later": svc.create(user_id, {"title": "Later", "due_date": now + timedelta(days=20)}),
        "undated": svc.create(user_id, {"title": "Undated"}),
        "done": svc.create(user_id, {"title": "Done", "due_date": now + timedelta(days=1)}),
    }
    svc.complete(user_id, rows["done"]["id"])
    return svc, rows


def test_notification_status_windows(reminders, user_id):
    svc, _ = reminders

    assert svc.count(user_id) == 5
    assert svc.count(user_id, "pending") == 4
    assert svc.count(user_id, "overdue") == 1
    assert svc.count(user_id, "upcoming") == 1
    assert svc.count(user_id, "upcoming", days=30) == 2

    pending = [n["title"] for n in svc.pending(user_id, PAGE)["data"]]
    # soonest first, undated last
    assert pending == ["Overdue", "Soon", "Later", "Undated"]

    assert [n["title"] for n in svc.overdue(user_id, PAGE)["data"]] == ["Overdue"]
    assert [n["title"] for n in svc.upcoming(user_id, PAGE)["data"]] == ["Soon"]

    with pytest.raises(ValueError):
        svc.count(user_id, "someday")


def test_notification_complete_toggle(reminders, user_id):
    svc, rows = reminders

    done = svc.complete(user_id, rows["soon"]["id"])
    assert done["is_completed"] is True
    assert done["completed_at"] is not None

    undone = svc.incomplete(user_id, rows["soon"]["id"])
    assert undone["is_completed"] is False
    assert undone["completed_at"] is None

    assert svc.complete(user_id, "missing") is None
    assert svc.list(user_id, PAGE, completed=True)["total"] == 1


def test_notification_defaults_to_general(reminders, user_id):
    svc, rows = reminders
    assert rows["overdue"]["type"] == "general"
    assert rows["soon"]["type"] == "follow_up_call"


# -----------------------------------------------------------------------------
# Stats
# -----------------------------------------------------------------------------
def test_stats_overview_and_activity(container, db, user_id, other_user_id):
    now = utcnow()
    acme = container.company_service.create(user_id, {"name": "Acme", "industry": "Energy"})
    alex = container.contact_service.create(user_id, {"first_name": "Alex", "company_id": acme["id"]})
    container.contact_service.create(user_id, {"first_name": "Quiet"})
    container.contact_service.create(other_user_id, {"first_name": "Other"})
    container.interaction_service.create(
        user_id, {"contact_id": alex["id"], "type": "call", "sentiment": "positive", "occurred_at": now}
    )
    container.interaction_service.create(
        user_id, {"contact_id": alex["id"], "type": "email", "occurred_at": now - timedelta(days=20)}
    )
    container.notification_service.create(user_id, {"title": "Call back", "due_date": now - timedelta(hours=1)})

    stats = CRMStatsService(db=db).get_stats(user_id, "7d")

    assert stats["overview"]["total_contacts"] == 2
    assert stats["overview"]["total_companies"] == 1
    assert stats["overview"]["total_interactions"] == 2
    assert stats["overview"]["overdue_notifications"] == 1

    assert stats["activity"]["by_type"] == {"call": 1, "email": 0, "meeting": 0, "other": 0}
    assert stats["activity"]["recent"] == {"last_7_days": 1, "last_30_days": 2}

    engagement = stats["engagement"]
    assert engagement["top_contacts"][0]["contact_id"] == alex["id"]
    assert engagement["top_contacts"][0]["interaction_count"] == 2
    assert engagement["contacts_without_interactions"] == 1
    assert engagement["average_interactions_per_contact"] == 1.0

    assert stats["industries"]["companies_by_industry"] == [{"industry": "Energy", "count": 1, "percentage": 100.0}]
    assert stats["tasks"]["pending_by_type"]["general"] == 1

    assert CRMStatsService(db=db).get_stats(user_id, "all")["activity"]["by_type"]["email"] == 1

    with pytest.raises(ValueError):
        CRMStatsService(db=db).get_stats(user_id, "90d")


# -----------------------------------------------------------------------------
# Threads and users
# -----------------------------------------------------------------------------
def test_thread_lifecycle(container, user_id, other_user_id, fake_chat):
    threads = container.thread_service

    named = threads.create(user_id, first_message="Remind me to call Acme")
    assert named["name"] == fake_chat.title

    fake_chat.fail = True
    fallback = threads.create(user_id, first_message="hello")
    assert fallback["name"] == "New conversation"
    assert threads.create(user_id)["name"] == "New conversation"

    threads.add_message(named["id"], "user", "hi")
    threads.add_message(named["id"], "assistant", "hello", tool_calls=[{"id": "t1"}])

    detail = threads.get(user_id, named["id"])
    assert [m["role"] for m in detail["messages"]] == ["user", "assistant"]
    assert detail["messages"][1]["tool_calls"] == [{"id": "t1"}]

    # touched by the new messages
    assert threads.list_recent(user_id, PAGE)["data"][0]["id"] == named["id"]

    assert threads.get(other_user_id, named["id"]) is None
    assert threads.delete(user_id, named["id"])["id"] == named["id"]
    assert threads.exists(user_id, named["id"]) is False


def test_user_get_or_create(container):
    users = container.user_service

    created = users.get_or_create("new-user", {"email": "new@example.com", "first_name": "New"})
    again = users.get_or_create("new-user", {"email": "changed@example.com"})

    assert created["email"] == "new@example.com"
    assert again["email"] == "new@example.com"
    assert users.update("new-user", {"last_name": "Person"})["last_name"] == "Person"
    assert users.update("missing", {"last_name": "x"}) is None
