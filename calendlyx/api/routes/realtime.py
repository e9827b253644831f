import asyncio

from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status
from starlette.concurrency import run_in_threadpool

from calendlyx.core.logging import get_logger
from calendlyx.services.auth import admin_sessions
from calendlyx.services.changes import COLLECTIONS, change_feed

logger = get_logger(__name__)

router = APIRouter(tags=["realtime"])


async def _pump(websocket: WebSocket, collection: str, queue: asyncio.Queue) -> None:
    while True:
        snapshot = await queue.get()
        await websocket.send_json({"collection": collection, "items": snapshot})


def _pump_finished(task: asyncio.Task) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.warning("websocket send failed: %r", exc)


@router.websocket("/ws/{collection}")
async def stream_collection(websocket: WebSocket, collection: str, token: str | None = None) -> None:
    """Push the whole collection on connect and after every change.

    Without an admin ``token`` activities are limited to public ones and
    requests to pending ones with requester contact details removed.
    """
    if collection not in COLLECTIONS:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await websocket.accept()
    loop = asyncio.get_running_loop()
    queue: asyncio.Queue = asyncio.Queue()

    def listener(snapshot: list[dict]) -> None:
        loop.call_soon_threadsafe(queue.put_nowait, snapshot)

    public_only = not admin_sessions.is_admin(token)
    unsubscribe = await run_in_threadpool(change_feed.subscribe, collection, listener, public_only=public_only)
    sender = asyncio.create_task(_pump(websocket, collection, queue))
    sender.add_done_callback(_pump_finished)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.debug("websocket closed collection=%s", collection)
    finally:
        sender.cancel()
        unsubscribe()
