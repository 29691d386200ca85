"""WebSocket endpoint streaming balance and notification events to a signed-in account."""

import asyncio
import logging

from fastapi import APIRouter, Depends, HTTPException, Query, WebSocket, WebSocketDisconnect, status

from palmpay.core.container import ApplicationContainer
from palmpay.infrastructure.database.session import session_scope
from palmpay.interfaces.http.deps import AuthenticatedAccount, get_container, resolve_token
from palmpay.modules.accounts import AccountService
from palmpay.realtime import EVENT_ACCOUNT, RealtimeEvent, Subscription

logger = logging.getLogger(__name__)

router = APIRouter()

MESSAGE_PING = "ping"
MESSAGE_PONG = "pong"


async def _authenticate(container: ApplicationContainer, token: str) -> AuthenticatedAccount:
    async with session_scope(container.session_factory) as session:
        service = AccountService.with_session(session, container.settings.security)
        return await resolve_token(service, container.settings, token)


async def _current_account(container: ApplicationContainer, account_id: str):
    async with session_scope(container.session_factory) as session:
        return await AccountService.with_session(session, container.settings.security).get_by_id(account_id)


async def _forward(websocket: WebSocket, subscription: Subscription) -> None:
    async for event in subscription:
        await websocket.send_json(event.to_message())


@router.websocket("/ws")
async def account_socket(
    websocket: WebSocket,
    token: str = Query(...),
    container: ApplicationContainer = Depends(get_container),
):
    try:
        authenticated = await _authenticate(container, token)
    except HTTPException as exc:
        logger.warning("WebSocket token rejected: %s", exc.detail)
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION, reason=str(exc.detail))
        return

    account = authenticated.account
    await websocket.accept()
    async with container.subscriptions.subscribe(account.id) as subscription:
        # Read after subscribing so a transfer committed meanwhile is not lost.
        account = await _current_account(container, account.id) or account
        snapshot = RealtimeEvent(
            EVENT_ACCOUNT,
            {"account_id": account.id, "balance_cents": account.balance_cents, "currency": account.currency},
        )
        await websocket.send_json(snapshot.to_message())

        forwarder = asyncio.create_task(_forward(websocket, subscription))
        try:
            while True:
                message = await websocket.receive_text()
                if message == MESSAGE_PING:
                    await websocket.send_json({"type": MESSAGE_PONG})
        except WebSocketDisconnect:
            logger.info("Account %s disconnected", account.id)
        finally:
            forwarder.cancel()
            results = await asyncio.gather(forwarder, return_exceptions=True)
            for result in results:
                if isinstance(result, Exception):
                    logger.warning("Event forwarder for %s stopped with error: %s", account.id, result)
