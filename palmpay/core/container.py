"""Simple dependency container for wiring core services."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from palmpay.core.config import Settings, get_settings
from palmpay.infrastructure.database.session import build_engine, build_session_factory, init_db
from palmpay.modules.transfers import TransferExecutor
from palmpay.realtime import SubscriptionManager


@dataclass(slots=True)
class ApplicationContainer:
    settings: Settings
    engine: AsyncEngine
    session_factory: async_sessionmaker[AsyncSession]
    subscriptions: SubscriptionManager

    def transfer_executor(self) -> TransferExecutor:
        return TransferExecutor(
            self.session_factory,
            self.settings.transfers,
            dispatcher=self.subscriptions,
            notification_sound=self.settings.notifications.sound,
        )

    async def init_infrastructure(self) -> None:
        """Ensure the schema exists (development; migrations are preferred)."""
        await init_db(self.engine)

    async def dispose(self) -> None:
        await self.engine.dispose()


def build_container(settings: Settings | None = None) -> ApplicationContainer:
    settings = settings or get_settings()
    engine = build_engine(settings)
    return ApplicationContainer(
        settings=settings,
        engine=engine,
        session_factory=build_session_factory(engine),
        subscriptions=SubscriptionManager(settings.realtime.queue_size),
    )


__all__ = ["ApplicationContainer", "build_container"]
