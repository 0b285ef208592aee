# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-11
# Description: CRMToolbox
# -----------------------------------------------------------------------------
import logging
from typing import Any, Callable, Dict

from pydantic import ValidationError

from agent import tool_inputs as ti
from agent.ToolKind import ToolKind
from services.common import EntityNotFoundError
from utility.date_parser import parse_date, utcnow
from utility.logging_utils import get_class_logger
from utility.pagination import PaginationParams

# Tools list "everything"; cap what goes back into the model context
LIST_LIMIT = 100
RECENT_NOTES = 10

Result = Dict[str, Any]


def _fail(error: str) -> Result:
    return {"success": False, "error": error}


class CRMToolbox:
    """
    Executes assistant tool calls for one user.

    Contract for every ToolKind: validate the raw arguments with the kind's
    input model, run it against the user-scoped services, return a
    JSON-serialisable dict. Unknown tools, invalid input and missing entities
    come back as {"success": False, "error": ...} for the model to read.
    """

    def __init__(
            self,
            *,
            user_id: str,
            search,
            contacts,
            companies,
            interactions,
            notes,
            notifications,
            logger: logging.Logger | None = None,
    ):
        self.user_id = user_id
        self.search = search
        self.contacts = contacts
        self.companies = companies
        self.interactions = interactions
        self.notes = notes
        self.notifications = notifications
        self.logger = logger or get_class_logger(self.__class__)

        self._handlers: Dict[ToolKind, Callable[[Any], Result]] = {
            ToolKind.SEARCH: self._search,
            ToolKind.SEARCH_COMPANIES: self._search_companies,
            ToolKind.LIST_CONTACTS: self._list_contacts,
            ToolKind.CREATE_CONTACT: self._create_contact,
            ToolKind.UPDATE_CONTACT: self._update_contact,
            ToolKind.GET_CONTACT_DETAILS: self._get_contact_details,
            ToolKind.DELETE_CONTACT: self._delete_contact,
            ToolKind.CONFIRM_DELETE_CONTACT: self._confirm_delete_contact,
            ToolKind.LIST_COMPANIES: self._list_companies,
            ToolKind.CREATE_COMPANY: self._create_company,
            ToolKind.UPDATE_COMPANY: self._update_company,
            ToolKind.GET_COMPANY_DETAILS: self._get_company_details,
            ToolKind.DELETE_COMPANY: self._delete_company,
            ToolKind.CONFIRM_DELETE_COMPANY: self._confirm_delete_company,
            ToolKind.ADD_INTERACTION: self._add_interaction,
            ToolKind.UPDATE_INTERACTION: self._update_interaction,
            ToolKind.GET_INTERACTIONS: self._get_interactions,
            ToolKind.ADD_NOTE: self._add_note,
            ToolKind.CREATE_NOTIFICATION: self._create_notification,
            ToolKind.GET_NOTIFICATIONS: self._get_notifications,
            ToolKind.COMPLETE_NOTIFICATION: self._complete_notification,
        }

    def execute(self, name: str, arguments: Any) -> Result:
        try:
            kind = ToolKind(name)
        except ValueError:
            self.logger.warning("Model asked for unknown tool %r", name)
            return _fail(f"Unknown tool: {name}")

        if not isinstance(arguments, dict):
            return _fail("Tool arguments must be a JSON object")

        try:
            params = kind.input_model.model_validate(arguments)
        except ValidationError as e:
            self.logger.info("Invalid input for %s: %s", kind.value, e.errors())
            return _fail(f"Invalid input: {e}")

        self.logger.info("Tool %s (user=%s)", kind.value, self.user_id)
        try:
            return self._handlers[kind](params)
        except EntityNotFoundError as e:
            return _fail(str(e))
        except Exception as e:
            self.logger.exception("Tool %s failed: %s", kind.value, e)
            return _fail(f"{kind.value} failed: {e}")

    # -------------------------------------------------------------------------
    # Search
    # -------------------------------------------------------------------------
    def _search(self, p: ti.SearchInput) -> Result:
        return self.search.search(self.user_id, p.query)

    def _search_companies(self, p: ti.SearchInput) -> Result:
        return self.search.search_companies(self.user_id, p.query)

    # -------------------------------------------------------------------------
    # Contacts
    # -------------------------------------------------------------------------
    def _list_contacts(self, p: ti.ListContactsInput) -> Result:
        page = self.contacts.list(
            self.user_id, PaginationParams(offset=0, limit=LIST_LIMIT), company_id=p.company_id
        )
        return {"contacts": page["data"], "total": page["total"]}

    def _create_contact(self, p: ti.CreateContactInput) -> Result:
        company_id = p.company_id
        if not company_id and p.company_name:
            company_id = self.companies.get_or_create_by_name(self.user_id, p.company_name)["id"]

        data = p.model_dump(exclude={"company_name"})
        data["company_id"] = company_id
        contact = self.contacts.create(self.user_id, data)
        return {"success": True, "contact": contact}

    def _update_contact(self, p: ti.UpdateContactInput) -> Result:
        contact = self.contacts.update(self.user_id, p.contact_id, p.updates.model_dump(exclude_none=True))
        if contact is None:
            return _fail("Contact not found")
        return {"success": True, "contact": contact}

    def _get_contact_details(self, p: ti.ContactIdInput) -> Result:
        contact = self.contacts.get(self.user_id, p.contact_id)
        if contact is None:
            return _fail("Contact not found")
        contact["notes"] = contact["notes"][:RECENT_NOTES]
        contact["notifications"] = [n for n in contact["notifications"] if not n["is_completed"]]
        return {"success": True, "contact": contact}

    def _delete_contact(self, p: ti.ContactIdInput) -> Result:
        contact = self.contacts.get(self.user_id, p.contact_id)
        if contact is None:
            return _fail("Contact not found")

        name = " ".join(x for x in (contact["first_name"], contact["last_name"]) if x)
        where = f" from {contact['company']['name']}" if contact.get("company") else ""
        return {
            "success": True,
            "requires_confirmation": True,
            "message": (
                f"Are you sure you want to delete {name}{where}? This will also delete all "
                f"associated interactions, notes, and notifications."
            ),
            "contact": contact,
        }

    def _confirm_delete_contact(self, p: ti.ContactIdInput) -> Result:
        deleted = self.contacts.delete(self.user_id, p.contact_id)
        if deleted is None:
            return _fail("Contact not found")
        name = " ".join(x for x in (deleted["first_name"], deleted["last_name"]) if x)
        return {"success": True, "message": f"Deleted {name}"}

    # -------------------------------------------------------------------------
    # Companies
    # -------------------------------------------------------------------------
    def _list_companies(self, p: ti.NoInput) -> Result:
        page = self.companies.list(self.user_id, PaginationParams(offset=0, limit=LIST_LIMIT))
        return {"companies": page["data"], "total": page["total"]}

    def _create_company(self, p: ti.CreateCompanyInput) -> Result:
        return {"success": True, "company": self.companies.create(self.user_id, p.model_dump())}

    def _update_company(self, p: ti.UpdateCompanyInput) -> Result:
        company = self.companies.update(self.user_id, p.company_id, p.updates.model_dump(exclude_none=True))
        if company is None:
            return _fail("Company not found")
        return {"success": True, "company": company}

    def _get_company_details(self, p: ti.CompanyIdInput) -> Result:
        company = self.companies.get(self.user_id, p.company_id)
        if company is None:
            return _fail("Company not found")
        company["notes"] = company["notes"][:RECENT_NOTES]
        return {"success": True, "company": company}

    def _delete_company(self, p: ti.CompanyIdInput) -> Result:
        company = self.companies.get(self.user_id, p.company_id)
        if company is None:
            return _fail("Company not found")
        return {
            "success": True,
            "requires_confirmation": True,
            "message": (
                f"Are you sure you want to delete {company['name']}? This company has "
                f"{len(company['contacts'])} contact(s). The contacts will remain but will no "
                f"longer be associated with this company."
            ),
            "company": company,
        }

    def _confirm_delete_company(self, p: ti.CompanyIdInput) -> Result:
        deleted = self.companies.delete(self.user_id, p.company_id)
        if deleted is None:
            return _fail("Company not found")
        return {"success": True, "message": f"Deleted {deleted['name']}"}

    # -------------------------------------------------------------------------
    # Interactions
    # -------------------------------------------------------------------------
    def _add_interaction(self, p: ti.AddInteractionInput) -> Result:
        data = p.model_dump(exclude={"occurred_at"})
        parsed = parse_date(p.occurred_at) if p.occurred_at else None
        data["occurred_at"] = parsed.date if parsed else utcnow()

        interaction = self.interactions.create(self.user_id, data)
        return {"success": True, "interaction": interaction}

    def _update_interaction(self, p: ti.UpdateInteractionInput) -> Result:
        updates = p.updates.model_dump(exclude_none=True)
        if "occurred_at" in updates:
            parsed = parse_date(updates["occurred_at"])
            updates["occurred_at"] = parsed.date if parsed else utcnow()

        interaction = self.interactions.update(self.user_id, p.interaction_id, updates)
        if interaction is None:
            return _fail("Interaction not found")
        return {"success": True, "interaction": interaction}

    def _get_interactions(self, p: ti.GetInteractionsInput) -> Result:
        page = self.interactions.list_by_contact(
            self.user_id, p.contact_id, PaginationParams(offset=0, limit=p.limit)
        )
        return {"interactions": page["data"]}

    # -------------------------------------------------------------------------
    # Notes
    # -------------------------------------------------------------------------
    def _add_note(self, p: ti.AddNoteInput) -> Result:
        return {"success": True, "note": self.notes.create(self.user_id, p.model_dump())}

    # -------------------------------------------------------------------------
    # Notifications
    # -------------------------------------------------------------------------
    def _create_notification(self, p: ti.CreateNotificationInput) -> Result:
        data = p.model_dump(exclude={"due_date"})
        parsed = parse_date(p.due_date) if p.due_date else None
        data["due_date"] = parsed.date if parsed else None

        notification = self.notifications.create(self.user_id, data)
        return {"success": True, "notification": notification}

    def _get_notifications(self, p: ti.GetNotificationsInput) -> Result:
        window = PaginationParams(offset=0, limit=LIST_LIMIT)
        if p.include_completed:
            page = self.notifications.list(self.user_id, window, contact_id=p.contact_id)
        elif p.contact_id:
            page = self.notifications.list(self.user_id, window, contact_id=p.contact_id, completed=False)
        else:
            page = self.notifications.pending(self.user_id, window)
        return {"notifications": page["data"]}

    def _complete_notification(self, p: ti.NotificationIdInput) -> Result:
        notification = self.notifications.complete(self.user_id, p.notification_id)
        if notification is None:
            return _fail("Notification not found")
        return {"success": True, "notification": notification}
