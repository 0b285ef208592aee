# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-20
# Updated: 2026-09-13
# Description: AppContainer.py
# -----------------------------------------------------------------------------
from typing import Any, Optional

from agent.CRMToolbox import CRMToolbox
from chat.OpenAIChat import OpenAIChat
from config.Config import Config
from embedding.CRMEmbedder import CRMEmbedder
from health.DatabaseHealth import DatabaseHealth
from health.EmbeddingHealth import EmbeddingHealth
from health.OpenAIHealth import OpenAIHealth
from health.TestRunner import TestRunner
from persistence.Database import Database
from search.CRMEntityIndexer import CRMEntityIndexer
from search.CRMFuzzyMatcher import CRMFuzzyMatcher
from search.CRMSemanticMatcher import CRMSemanticMatcher
from services.CRMAssistantService import CRMAssistantService
from services.CRMCompanyService import CRMCompanyService
from services.CRMContactService import CRMContactService
from services.CRMHealthService import CRMHealthService
from services.CRMInteractionService import CRMInteractionService
from services.CRMNoteService import CRMNoteService
from services.CRMNotificationService import CRMNotificationService
from services.CRMSearchService import CRMSearchService
from services.CRMStatsService import CRMStatsService
from services.CRMThreadService import CRMThreadService
from services.CRMUserService import CRMUserService
from utility.keepalive import KeepAliveState, keepalive_state
from utility.logging_utils import get_logger
from vectorstore.SQLEmbeddingStore import SQLEmbeddingStore

logger = get_logger(__name__)


class AppContainer:
    """
    Owns heavy object instantiation and application wiring.
    Singleton instances are provided via FastAPI dependencies.

    Infrastructure pieces (database, embedder, chat client) can be passed in;
    anything omitted is built from ``cfg``.
    """

    def __init__(
            self,
            cfg: Optional[Config] = None,
            *,
            db: Optional[Database] = None,
            embedder: Any = None,
            chat_client: Any = None,
            keepalive: Optional[KeepAliveState] = None,
    ) -> None:
        # Configuration
        self.cfg = cfg or Config.from_env()
        logger.info("Building application container: %s", self.cfg.summary())

        # Core infrastructure
        self.db = db or Database(database_url=self.cfg.database_url)
        self.embedder = embedder or CRMEmbedder(cfg=self.cfg)
        self.store = SQLEmbeddingStore(db=self.db)
        self.openai_chat = chat_client or OpenAIChat(cfg=self.cfg)

        # Search core
        self.indexer = CRMEntityIndexer(db=self.db, embedder=self.embedder, store=self.store)
        self.fuzzy_matcher = CRMFuzzyMatcher(db=self.db)
        self.semantic_matcher = CRMSemanticMatcher(embedder=self.embedder, store=self.store)
        self.search_service = CRMSearchService(
            db=self.db,
            fuzzy=self.fuzzy_matcher,
            semantic=self.semantic_matcher,
            indexer=self.indexer,
        )

        # CRM entities
        self.user_service = CRMUserService(db=self.db)
        self.company_service = CRMCompanyService(db=self.db, search=self.search_service)
        self.contact_service = CRMContactService(db=self.db, search=self.search_service)
        self.interaction_service = CRMInteractionService(db=self.db)
        self.note_service = CRMNoteService(db=self.db, search=self.search_service)
        self.notification_service = CRMNotificationService(db=self.db)
        self.stats_service = CRMStatsService(db=self.db)

        # Conversations
        self.thread_service = CRMThreadService(db=self.db, chat_client=self.openai_chat)
        self.assistant_service = CRMAssistantService(
            chat_client=self.openai_chat,
            threads=self.thread_service,
            toolbox_factory=self.build_toolbox,
        )

        # Smoke tests / health
        self.test_runner = TestRunner(
            database_health=DatabaseHealth(self.db),
            embedding_health=EmbeddingHealth(self.embedder) if isinstance(self.embedder, CRMEmbedder) else None,
            openai_health=OpenAIHealth(self.openai_chat) if isinstance(self.openai_chat, OpenAIChat) else None,
        )
        self.health_service = CRMHealthService(
            test_runner=self.test_runner,
            db=self.db,
            keepalive=keepalive or keepalive_state,
        )

    def build_toolbox(self, user_id: str) -> CRMToolbox:
        """One toolbox per assistant turn, bound to the caller's user id."""
        return CRMToolbox(
            user_id=user_id,
            search=self.search_service,
            contacts=self.contact_service,
            companies=self.company_service,
            interactions=self.interaction_service,
            notes=self.note_service,
            notifications=self.notification_service,
        )

    def startup(self) -> None:
        self.db.create_all()

    def shutdown(self) -> None:
        self.db.dispose()
