"""WebSocket table stream with real-time phase timing."""

import asyncio
import json
import logging
from dataclasses import dataclass, field
from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from random import Random
from typing import Any

from api.table import table_state_response
from config import config
from core.game import AsyncioScheduler, ShuffleSequencer
from core.game.events import GameEvent

logger = logging.getLogger(__name__)

router = APIRouter()


def _enqueue(queue: asyncio.Queue, message: dict[str, Any]) -> None:
    try:
        queue.put_nowait(message)
    except asyncio.QueueFull:
        logger.warning("Dropping %s message, client queue is full", message["type"])


class QueueRenderer:
    """Renderer that turns placements and notices into outgoing messages."""

    def __init__(self, queue: asyncio.Queue) -> None:
        self._queue = queue
        self.round_id = ""

    def begin_round(self, round_id: str) -> None:
        self.round_id = round_id

    def place_card(
        self,
        card_index: int,
        slot: int | None,
        priority: int | None,
        face_up: bool,
        locked: bool,
    ) -> None:
        _enqueue(self._queue, {
            "type": "placement",
            "round_id": self.round_id,
            "card_index": card_index,
            "slot": slot,
            "priority": priority,
            "face_up": face_up,
            "locked": locked,
        })

    def notify(self, message: str) -> None:
        _enqueue(self._queue, {"type": "notice", "message": message})


@dataclass
class TableConnection:
    """One socket with the outgoing queue and table that belong to it."""

    websocket: WebSocket
    queue: asyncio.Queue = field(default_factory=lambda: asyncio.Queue(maxsize=1000))
    sequencer: ShuffleSequencer | None = None

    async def send(self, message: dict[str, Any]) -> None:
        await self.websocket.send_json(message)

    async def next_message(self) -> dict[str, Any] | None:
        """Get the next outgoing message, or None if nothing arrives shortly."""
        try:
            return await asyncio.wait_for(self.queue.get(), timeout=0.1)
        except asyncio.TimeoutError:
            return None


class ConnectionManager:
    """
    Manage WebSocket connections and their tables.

    A session id holds at most one connection. A newer socket on the same id
    takes the slot over; the older one keeps its own table until it closes,
    and closing it never touches the newer connection.
    """

    def __init__(self) -> None:
        self._connections: dict[str, TableConnection] = {}

    async def connect(self, websocket: WebSocket, session_id: str) -> TableConnection:
        """Accept a socket and register it as the session's connection."""
        await websocket.accept()
        if session_id in self._connections:
            logger.info("Table %s reconnected, replacing the previous socket", session_id)
        connection = TableConnection(websocket=websocket)
        self._connections[session_id] = connection
        return connection

    def disconnect(self, session_id: str, connection: TableConnection) -> None:
        """Stop a connection's table and unregister it if it still holds the session."""
        if connection.sequencer is not None:
            connection.sequencer.close()
        if self._connections.get(session_id) is connection:
            del self._connections[session_id]

    def open_table(self, connection: TableConnection, card_count: object = None) -> ShuffleSequencer:
        """Create a table whose phases advance on the running event loop."""
        sequencer = ShuffleSequencer(
            renderer=QueueRenderer(connection.queue),
            scheduler=AsyncioScheduler(),
            card_count=card_count,
            rng=Random(config.shuffle.seed),
        )
        sequencer.subscribe(lambda event: _enqueue(connection.queue, _event_to_message(event)))
        connection.sequencer = sequencer
        return sequencer

    def get_table(self, session_id: str) -> ShuffleSequencer | None:
        connection = self._connections.get(session_id)
        return connection.sequencer if connection is not None else None

    @property
    def active_connections(self) -> int:
        """Return number of active connections."""
        return len(self._connections)


# Global connection manager
manager = ConnectionManager()


def _table_state_to_dict(sequencer: ShuffleSequencer) -> dict[str, Any]:
    """Convert table state to a dictionary for JSON serialization."""
    return table_state_response(sequencer).model_dump()


def _event_to_message(event: GameEvent) -> dict[str, Any]:
    """Convert a table event to a WebSocket message."""
    return {
        "type": "event",
        "event_type": event.event_type.name,
        "data": event.data,
    }


@router.websocket("/table/{session_id}")
async def table_websocket(websocket: WebSocket, session_id: str) -> None:
    """
    WebSocket endpoint for a live table.

    Messages from client:
    - {"type": "deal", "card_count": 4}
    - {"type": "shuffle"}
    - {"type": "reveal", "card_index": 2}
    - {"type": "restart", "card_count": 3}
    - {"type": "phase_complete", "phase": "gathering"}
    - {"type": "get_state"}

    Messages to client:
    - {"type": "state_update", "state": {...}}
    - {"type": "placement", "card_index": 0, "slot": 2, ...}
    - {"type": "notice", "message": "..."}
    - {"type": "event", "event_type": "...", "data": {...}}
    - {"type": "error", "message": "..."}
    """
    connection = await manager.connect(websocket, session_id)
    sequencer = manager.open_table(connection)

    await connection.send({
        "type": "state_update",
        "state": _table_state_to_dict(sequencer),
    })

    async def forward_messages() -> None:
        """Send queued placements, notices and events to the client."""
        while True:
            message = await connection.next_message()
            if message is not None:
                await connection.send(message)

    forward_task = asyncio.create_task(forward_messages())

    try:
        while True:
            data = await websocket.receive_text()
            try:
                message = json.loads(data)
            except json.JSONDecodeError:
                message = None

            if not isinstance(message, dict):
                await connection.send({
                    "type": "error",
                    "message": "Messages must be JSON objects",
                })
                continue

            msg_type = message.get("type")

            if msg_type == "get_state":
                pass
            elif msg_type == "deal":
                sequencer.deal(message.get("card_count"))
            elif msg_type == "shuffle":
                sequencer.shuffle()
            elif msg_type == "reveal":
                card_index = message.get("card_index")
                if not isinstance(card_index, int):
                    await connection.send({
                        "type": "error",
                        "message": "card_index must be an integer",
                    })
                    continue
                sequencer.on_card_activated(card_index)
            elif msg_type == "restart":
                sequencer.restart(message.get("card_count"))
            elif msg_type == "phase_complete":
                sequencer.complete_phase(message.get("phase"), round_id=message.get("round_id"))
            else:
                await connection.send({
                    "type": "error",
                    "message": f"Unknown message type: {msg_type}",
                })
                continue

            await connection.send({
                "type": "state_update",
                "state": _table_state_to_dict(sequencer),
            })

    except WebSocketDisconnect:
        logger.info("Table %s disconnected", session_id)
    finally:
        manager.disconnect(session_id, connection)
        forward_task.cancel()
        try:
            await forward_task
        except asyncio.CancelledError:
            pass
