# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-09
# Description: CRMThreadService
# -----------------------------------------------------------------------------
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import select, update
from sqlalchemy.orm import selectinload

import settings
from chat.OpenAIChat import ChatProviderError
from persistence.Database import Database
from persistence.models import MESSAGE_ROLES, Message, Thread, utcnow
from persistence.serializers import message_to_dict, thread_to_dict
from services.common import count_rows, get_owned
from utility.logging_utils import get_class_logger
from utility.pagination import PaginationParams, paginated_response

TITLE_PROMPT = (
    "Generate a short, descriptive title (max 6 words) for a CRM conversation. "
    "Return only the title, no quotes or punctuation."
)

MAX_TITLE_CHARS = 120


class CRMThreadService:
    """
    Assistant conversation threads and their message log.

    Thread names come from the title model; any provider failure falls back
    to the default name so creating a thread never depends on the LLM.
    """

    def __init__(self, *, db: Database, chat_client: Any = None, logger: logging.Logger | None = None):
        self.db = db
        self.chat_client = chat_client
        self.logger = logger or get_class_logger(self.__class__)

    def generate_name(self, first_message: Optional[str]) -> str:
        text = (first_message or "").strip()
        if not text or self.chat_client is None:
            return settings.DEFAULT_THREAD_NAME

        try:
            result = self.chat_client.simple_chat(
                text,
                system_text=TITLE_PROMPT,
                max_tokens=20,
                temperature=0.3,
                model=self.chat_client.title_model,
            )
        except ChatProviderError as e:
            self.logger.warning("Thread title generation failed, using default: %s", e)
            return settings.DEFAULT_THREAD_NAME

        name = (result.get("answer") or "").strip().strip("\"'").strip()
        return name[:MAX_TITLE_CHARS] or settings.DEFAULT_THREAD_NAME

    def create(self, user_id: str, first_message: Optional[str] = None, name: Optional[str] = None) -> Dict[str, Any]:
        name = (name or "").strip() or self.generate_name(first_message)
        with self.db.session() as session:
            thread = Thread(user_id=user_id, name=name)
            session.add(thread)
            session.flush()
            out = thread_to_dict(thread)

        self.logger.info("Created thread %s (%r)", out["id"], name)
        return out

    def get(self, user_id: str, thread_id: str) -> Optional[Dict[str, Any]]:
        with self.db.session() as session:
            thread = get_owned(session, Thread, user_id, thread_id, selectinload(Thread.messages))
            if thread is None:
                return None
            out = thread_to_dict(thread)
            out["messages"] = [message_to_dict(m) for m in thread.messages]
            return out

    def exists(self, user_id: str, thread_id: str) -> bool:
        with self.db.session() as session:
            return get_owned(session, Thread, user_id, thread_id) is not None

    def list_recent(self, user_id: str, pagination: PaginationParams) -> Dict[str, Any]:
        with self.db.session() as session:
            total = count_rows(session, Thread, Thread.user_id == user_id)
            rows = session.scalars(
                select(Thread)
                .where(Thread.user_id == user_id)
                .order_by(Thread.updated_at.desc(), Thread.id)
                .offset(pagination.offset)
                .limit(pagination.limit)
            ).all()
            data = [thread_to_dict(t) for t in rows]
        return paginated_response(data, total, pagination)

    def delete(self, user_id: str, thread_id: str) -> Optional[Dict[str, Any]]:
        with self.db.session() as session:
            thread = get_owned(session, Thread, user_id, thread_id)
            if thread is None:
                return None
            out = thread_to_dict(thread)
            session.delete(thread)
        return out

    def add_message(
            self,
            thread_id: str,
            role: str,
            content: Optional[str],
            tool_calls: Any = None,
            tool_results: Any = None,
    ) -> Dict[str, Any]:
        if role not in MESSAGE_ROLES:
            raise ValueError(f"Unknown message role: {role!r}")

        with self.db.session() as session:
            message = Message(
                thread_id=thread_id,
                role=role,
                content=content,
                tool_calls=tool_calls or None,
                tool_results=tool_results or None,
            )
            session.add(message)
            session.execute(update(Thread).where(Thread.id == thread_id).values(updated_at=utcnow()))
            session.flush()
            return message_to_dict(message)

    def history(self, thread_id: str) -> List[Dict[str, Any]]:
        with self.db.session() as session:
            rows = session.scalars(
                select(Message).where(Message.thread_id == thread_id).order_by(Message.created_at, Message.id)
            ).all()
            return [message_to_dict(m) for m in rows]
