"""Application bootstrap and lifecycle management."""

import os
from datetime import timedelta
from pathlib import Path
from typing import Protocol

from .config import env_float, resolve_db_path, resolve_tree_path
from .conversation import ConversationResolver, load_definition
from .dialogue import DialogueAgent, IDialogueAgent
from .dialogue.agent import DEFAULT_LLM_TIMEOUT
from .event_bus import EventBus
from .faq import FAQ_ENTRY_STATES, FAQRepository, FAQRotationTracker
from .forms import (
    PURCHASE_INQUIRY_FORM,
    PURCHASE_INQUIRY_START,
    FormSessionEngine,
    FormSessionSweeper,
)
from .llm import ILLMProvider, LLMProvider
from .logging_config import get_logger
from .messaging import IMessenger, QontakClient
from .models import ConversationDefinition
from .output_router import OutputRouter
from .storage import IStorage, Storage
from .tracker import ITracker, Tracker

logger = get_logger(__name__)

FORM_TRIGGERS = {PURCHASE_INQUIRY_START: PURCHASE_INQUIRY_FORM.form_type}


class IApplication(Protocol):
    """Bootstrap and lifecycle."""

    async def start(self) -> None:
        """Initialize components in dependency order."""
        ...

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        ...

    async def reset(self) -> None:
        """Reset data between test runs."""
        ...


class Application:
    """Main application bootstrap.

    ``messenger`` and ``llm_provider`` may be injected; otherwise they are
    built from the environment. Without ANTHROPIC_API_KEY the bot runs with
    canned replies for ai_generated states.
    """

    def __init__(
        self,
        db_path: str | None = None,
        tree_path: str | Path | None = None,
        messenger: IMessenger | None = None,
        llm_provider: ILLMProvider | None = None,
    ):
        env_db_path = os.getenv("DATABASE_URL") if db_path is None else db_path
        self._db_path = resolve_db_path(env_db_path)
        env_tree_path = os.getenv("CONVERSATION_TREE_PATH") if tree_path is None else tree_path
        self._tree_path = resolve_tree_path(env_tree_path)

        self._form_timeout = timedelta(minutes=env_float("FORM_TIMEOUT_MINUTES", 10))
        self._sweep_interval = env_float("FORM_SWEEP_INTERVAL_SECONDS", 300)
        self._llm_timeout = env_float("LLM_TIMEOUT_SECONDS", DEFAULT_LLM_TIMEOUT)

        self._messenger = messenger
        self._owns_messenger = messenger is None
        self._llm = llm_provider

        # Components (will be initialized in start())
        self._storage: IStorage | None = None
        self._event_bus: EventBus | None = None
        self._tracker: ITracker | None = None
        self._definition: ConversationDefinition | None = None
        self._faq_repository: FAQRepository | None = None
        self._forms: FormSessionEngine | None = None
        self._resolver: ConversationResolver | None = None
        self._dialogue_agent: IDialogueAgent | None = None
        self._output_router: OutputRouter | None = None
        self._sweeper: FormSessionSweeper | None = None

    async def start(self) -> None:
        """Initialize components in dependency order."""
        logger.info("Starting application")

        # 1. Storage (no dependencies)
        self._storage = Storage(self._db_path)
        await self._storage.init()
        logger.info("Storage initialized")

        # 2. EventBus (depends on Storage for persistence)
        self._event_bus = EventBus(self._storage)

        # 3. Tracker (depends on EventBus + Storage)
        self._tracker = Tracker(self._event_bus, self._storage)
        await self._tracker.start()

        # 4. Conversation definition; a broken document aborts startup
        self._definition = load_definition(self._tree_path, extra_targets=FORM_TRIGGERS)
        self._faq_repository = FAQRepository.default()

        # 5. Optional LLM for ai_generated states
        if self._llm is None:
            try:
                self._llm = LLMProvider()
                logger.info("LLM provider initialized")
            except ValueError as e:
                logger.warning("LLM disabled: %s", e)

        # 6. Messenger + OutputRouter
        if self._messenger is None:
            self._messenger = QontakClient()
        self._output_router = OutputRouter(self._event_bus, self._messenger, self._tracker)
        await self._output_router.start()

        # 7. Resolver, forms, DialogueAgent
        await self._build_conversation()
        logger.info("All components initialized successfully")

    async def _build_conversation(self) -> None:
        self._forms = FormSessionEngine([PURCHASE_INQUIRY_FORM], timeout=self._form_timeout)
        self._resolver = ConversationResolver(
            self._definition,
            forms=self._forms,
            form_triggers=FORM_TRIGGERS,
            faq_repository=self._faq_repository,
            faq_tracker=FAQRotationTracker(self._faq_repository),
            faq_states=FAQ_ENTRY_STATES,
        )
        self._dialogue_agent = DialogueAgent(
            resolver=self._resolver,
            event_bus=self._event_bus,
            storage=self._storage,
            tracker=self._tracker,
            llm_provider=self._llm,
            llm_timeout=self._llm_timeout,
        )
        self._sweeper = FormSessionSweeper(self._forms, interval=self._sweep_interval)
        await self._sweeper.start()

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        if self._sweeper is not None:
            await self._sweeper.stop()
        if self._output_router is not None:
            await self._output_router.stop()
        if self._messenger is not None and self._owns_messenger:
            await self._messenger.aclose()
            self._messenger = None
        if self._tracker is not None:
            await self._tracker.stop()
        if self._storage is not None:
            await self._storage.close()
            logger.info("Storage closed")

    async def reset(self) -> None:
        """Reset data between test runs: storage and every conversation."""
        if self._sweeper is not None:
            await self._sweeper.stop()
        if self._storage is not None:
            await self._storage.clear()
            logger.info("Storage cleared")
        if self._definition is not None:
            await self._build_conversation()
        logger.info("Reset complete")

    @property
    def storage(self) -> IStorage:
        if self._storage is None:
            raise RuntimeError("Application not started")
        return self._storage

    @property
    def resolver(self) -> ConversationResolver:
        if self._resolver is None:
            raise RuntimeError("Application not started")
        return self._resolver

    @property
    def forms(self) -> FormSessionEngine:
        if self._forms is None:
            raise RuntimeError("Application not started")
        return self._forms

    @property
    def dialogue_agent(self) -> IDialogueAgent:
        if self._dialogue_agent is None:
            raise RuntimeError("Application not started")
        return self._dialogue_agent
