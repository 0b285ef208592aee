# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-11
# Description: ToolKind
# -----------------------------------------------------------------------------
from enum import Enum
from typing import Any, Dict, List, Type

from agent import tool_inputs as ti


class ToolKind(str, Enum):
    """Closed set of tools the assistant may call. Values are the wire names."""

    SEARCH = "search"
    SEARCH_COMPANIES = "searchCompanies"

    LIST_CONTACTS = "listContacts"
    CREATE_CONTACT = "createContact"
    UPDATE_CONTACT = "updateContact"
    GET_CONTACT_DETAILS = "getContactDetails"
    DELETE_CONTACT = "deleteContact"
    CONFIRM_DELETE_CONTACT = "confirmDeleteContact"

    LIST_COMPANIES = "listCompanies"
    CREATE_COMPANY = "createCompany"
    UPDATE_COMPANY = "updateCompany"
    GET_COMPANY_DETAILS = "getCompanyDetails"
    DELETE_COMPANY = "deleteCompany"
    CONFIRM_DELETE_COMPANY = "confirmDeleteCompany"

    ADD_INTERACTION = "addInteraction"
    UPDATE_INTERACTION = "updateInteraction"
    GET_INTERACTIONS = "getInteractions"

    ADD_NOTE = "addNote"

    CREATE_NOTIFICATION = "createNotification"
    GET_NOTIFICATIONS = "getNotifications"
    COMPLETE_NOTIFICATION = "completeNotification"

    @property
    def description(self) -> str:
        return TOOL_DESCRIPTIONS[self]

    @property
    def input_model(self) -> Type[ti.ToolInput]:
        return TOOL_INPUTS[self]

    def to_openai_tool(self) -> Dict[str, Any]:
        schema = self.input_model.model_json_schema()
        schema.pop("title", None)
        return {
            "type": "function",
            "function": {"name": self.value, "description": self.description, "parameters": schema},
        }


TOOL_DESCRIPTIONS: Dict[ToolKind, str] = {
    ToolKind.SEARCH: (
        "Search contacts using natural language (name, email, company, notes). "
        "Use this before creating new records to avoid duplicates."
    ),
    ToolKind.SEARCH_COMPANIES: "Search for companies by name, industry, or description.",
    ToolKind.LIST_CONTACTS: "List all contacts, optionally filtered by company.",
    ToolKind.CREATE_CONTACT: "Create a new contact. ALWAYS search first to avoid duplicates.",
    ToolKind.UPDATE_CONTACT: "Update an existing contact's information.",
    ToolKind.GET_CONTACT_DETAILS: (
        "Get full details about a contact including recent interactions, notes, and pending reminders."
    ),
    ToolKind.DELETE_CONTACT: (
        "Request to delete a contact. Returns contact details for user confirmation. "
        "Call confirmDeleteContact after the user confirms."
    ),
    ToolKind.CONFIRM_DELETE_CONTACT: (
        "Delete a contact after the user has confirmed. Only call this after deleteContact and confirmation."
    ),
    ToolKind.LIST_COMPANIES: "List all companies with their contacts.",
    ToolKind.CREATE_COMPANY: "Create a new company. Search first to avoid duplicates.",
    ToolKind.UPDATE_COMPANY: "Update an existing company's information.",
    ToolKind.GET_COMPANY_DETAILS: "Get full details about a company including all contacts and recent notes.",
    ToolKind.DELETE_COMPANY: (
        "Request to delete a company. Returns company details for user confirmation. "
        "Call confirmDeleteCompany after the user confirms."
    ),
    ToolKind.CONFIRM_DELETE_COMPANY: (
        "Delete a company after the user has confirmed. Only call this after deleteCompany and confirmation."
    ),
    ToolKind.ADD_INTERACTION: "Log an interaction (call, email, meeting) with a contact.",
    ToolKind.UPDATE_INTERACTION: "Update an existing interaction.",
    ToolKind.GET_INTERACTIONS: "Get the interaction history for a contact, newest first.",
    ToolKind.ADD_NOTE: "Add a note to a contact, company, or interaction.",
    ToolKind.CREATE_NOTIFICATION: "Create a follow-up reminder or task.",
    ToolKind.GET_NOTIFICATIONS: "Get pending follow-up reminders and tasks.",
    ToolKind.COMPLETE_NOTIFICATION: "Mark a reminder or task as complete.",
}

TOOL_INPUTS: Dict[ToolKind, Type[ti.ToolInput]] = {
    ToolKind.SEARCH: ti.SearchInput,
    ToolKind.SEARCH_COMPANIES: ti.SearchInput,
    ToolKind.LIST_CONTACTS: ti.ListContactsInput,
    ToolKind.CREATE_CONTACT: ti.CreateContactInput,
    ToolKind.UPDATE_CONTACT: ti.UpdateContactInput,
    ToolKind.GET_CONTACT_DETAILS: ti.ContactIdInput,
    ToolKind.DELETE_CONTACT: ti.ContactIdInput,
    ToolKind.CONFIRM_DELETE_CONTACT: ti.ContactIdInput,
    ToolKind.LIST_COMPANIES: ti.NoInput,
    ToolKind.CREATE_COMPANY: ti.CreateCompanyInput,
    ToolKind.UPDATE_COMPANY: ti.UpdateCompanyInput,
    ToolKind.GET_COMPANY_DETAILS: ti.CompanyIdInput,
    ToolKind.DELETE_COMPANY: ti.CompanyIdInput,
    ToolKind.CONFIRM_DELETE_COMPANY: ti.CompanyIdInput,
    ToolKind.ADD_INTERACTION: ti.AddInteractionInput,
    ToolKind.UPDATE_INTERACTION: ti.UpdateInteractionInput,
    ToolKind.GET_INTERACTIONS: ti.GetInteractionsInput,
    ToolKind.ADD_NOTE: ti.AddNoteInput,
    ToolKind.CREATE_NOTIFICATION: ti.CreateNotificationInput,
    ToolKind.GET_NOTIFICATIONS: ti.GetNotificationsInput,
    ToolKind.COMPLETE_NOTIFICATION: ti.NotificationIdInput,
}


def openai_tools() -> List[Dict[str, Any]]:
    return [kind.to_openai_tool() for kind in ToolKind]
