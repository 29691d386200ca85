"""Database session and container providers."""

from collections.abc import AsyncIterator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.requests import HTTPConnection

from palmpay.core.config import Settings
from palmpay.core.container import ApplicationContainer
from palmpay.infrastructure.database.session import session_scope


def get_container(connection: HTTPConnection) -> ApplicationContainer:
    return connection.app.state.container


def get_app_settings(container: ApplicationContainer = Depends(get_container)) -> Settings:
    return container.settings


async def get_db_session(container: ApplicationContainer = Depends(get_container)) -> AsyncIterator[AsyncSession]:
    async with session_scope(container.session_factory) as session:
        yield session


__all__ = ["get_app_settings", "get_container", "get_db_session"]
