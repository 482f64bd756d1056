"""Cooperative frame loop tying a session to its collaborators.

The loop runs the session at a fixed pace on an asyncio event loop.  An
optional input source runs next to it as a single background task and feeds
an :class:`~lptetris.controls.EventChannel`; the session drains at most one
event from it per frame.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Optional, Protocol

from .controls import EventChannel
from .session import FrameSink, Session


LOGGER = logging.getLogger(__name__)

# Seconds to sleep between frames.
FRAME_DELAY = 0.004


class InputSource(Protocol):
    async def capture(self, channel: EventChannel) -> None: ...


class GameRunner:
    """Drive ``session`` until it ends, painting into ``sink``."""

    def __init__(
        self,
        session: Session,
        sink: FrameSink,
        source: Optional[InputSource] = None,
        *,
        frame_delay: float = FRAME_DELAY,
        channel: Optional[EventChannel] = None,
    ) -> None:
        self.session = session
        self.sink = sink
        self.source = source
        self.frame_delay = frame_delay
        self.channel = channel if channel is not None else EventChannel()

    async def _capture(self, source: InputSource) -> None:
        try:
            await source.capture(self.channel)
        except Exception:
            # A broken input source only means no more input.
            LOGGER.exception("Input capture failed; continuing without input")
        finally:
            self.channel.close()

    async def run_async(self) -> Session:
        self.sink.clear()
        task: Optional[asyncio.Task] = None
        if self.source is not None:
            task = asyncio.ensure_future(self._capture(self.source))
        LOGGER.info("Game started")
        try:
            while self.session.frame(self.sink, self.channel):
                await asyncio.sleep(self.frame_delay)
        finally:
            if task is not None:
                task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await task
        LOGGER.info("Game ended (%s) after %d ticks", self.session.state.value, self.session.tick)
        self.sink.clear()
        return self.session

    def run(self) -> Session:
        """Run the loop to completion on a fresh event loop."""

        return asyncio.run(self.run_async())
