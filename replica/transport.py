"""
Transport seam between a replica and the broadcast channel.

The channel delivers opaque update envelopes to every replica with no
ordering or delivery guarantee. ``HttpBroadcastTransport`` is a small
adapter that pushes envelopes to peer replicas' ``/updates`` endpoint.
"""

import asyncio
import itertools
import logging
import uuid
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Set

import aiohttp

from common.constants import MAX_UPDATE_SIZE_BYTES
from common.protocol import Update

logger = logging.getLogger(__name__)

UpdateListener = Callable[[Update], object]


class Transport(ABC):
    """Broadcast channel as seen by one replica."""

    max_update_size: int = MAX_UPDATE_SIZE_BYTES

    @abstractmethod
    def send_update(self, update: Update, description: str = "") -> None:
        """
        Hand an update to the channel. Fire-and-forget; must not raise.

        ``description`` is a reserved legacy argument and is always sent
        empty.
        """

    @abstractmethod
    def set_update_listener(self, listener: UpdateListener) -> None:
        """Register the callback that receives every delivered update."""

    def send_file(self, name: str, text: str, label: str = "") -> bool:
        """
        Offer a file to the out-of-band exchange.

        Returns False when the transport has no file exchange; callers then
        fall back to a local file.
        """
        return False


class HttpBroadcastTransport(Transport):
    """
    Pushes each update to every peer replica over HTTP.

    Serials are assigned per sender from a monotonically increasing counter.
    The sender is the node id plus a per-process suffix, so a restarted
    replica with the same node id starts a fresh serial sequence that
    peers have not seen yet.
    The originator's own copy is delivered straight to its listener; peers
    receive theirs from background tasks whose failures are only logged.
    """

    def __init__(
        self,
        node_id: str,
        peers: List[str],
        max_update_size: int = MAX_UPDATE_SIZE_BYTES,
        timeout: float = 10.0
    ):
        self.node_id = node_id
        self.sender = f"{node_id}:{uuid.uuid4().hex[:8]}"
        self.peers = list(peers)
        self.max_update_size = max_update_size
        self.timeout = timeout
        self._serials = itertools.count(1)
        self._listener: Optional[UpdateListener] = None
        self._tasks: Set[asyncio.Task] = set()

    def set_update_listener(self, listener: UpdateListener) -> None:
        self._listener = listener

    def send_update(self, update: Update, description: str = "") -> None:
        envelope = Update(
            payload=update.payload,
            info=update.info,
            serial=next(self._serials),
            sender=self.sender,
        )

        if self._listener is not None:
            try:
                self._listener(envelope)
            except Exception as e:
                logger.error(f"Local delivery of serial {envelope.serial} failed: {e}", exc_info=True)

        if not self.peers:
            return

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning(
                f"No running event loop, serial {envelope.serial} not pushed to {len(self.peers)} peer(s)"
            )
            return

        task = loop.create_task(self._push_all(envelope))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _push_all(self, envelope: Update) -> None:
        body = envelope.to_json()
        async with aiohttp.ClientSession() as session:
            await asyncio.gather(
                *(self._push(session, peer, body, envelope.serial) for peer in self.peers)
            )

    async def _push(self, session: aiohttp.ClientSession, peer: str, body: bytes, serial: int) -> None:
        try:
            async with session.post(
                f"{peer}/updates",
                data=body,
                headers={"Content-Type": "application/json"},
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            ) as response:
                if response.status != 200:
                    logger.warning(f"Peer {peer} rejected serial {serial}: status={response.status}")
                else:
                    logger.debug(f"Delivered serial {serial} to {peer}")
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(f"Failed to deliver serial {serial} to {peer}: {e}")

    async def drain(self) -> None:
        """Wait for in-flight peer pushes (used on shutdown)."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
