"""Single-slot cache of a warm TF process.

Starting the TF tool (a JVM for the CLC) costs seconds, so one spare process
is always kept spawned and waiting on stdin. Each invocation takes that
process, and a replacement starts in the background before the caller even
writes its command. A process serves exactly one command: closing its stdin
ends its useful life.

Ownership rule: a spawned process is either the current slot, or claimed by
exactly one caller, or killed. A spawn that completes after its slot was
replaced or the pool disposed is killed on arrival, so no duplicate process
ever outlives its slot.
"""

from __future__ import annotations

import asyncio
import os
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from tfvcbridge.logging import get_logger
from tfvcbridge.process.options import ExecOptions

log = get_logger("process")

SpawnFunc = Callable[[str, ExecOptions], Awaitable[asyncio.subprocess.Process]]


async def spawn_tf_process(location: str, options: ExecOptions) -> asyncio.subprocess.Process:
    """Start ``<location> @`` so the tool reads its command line from stdin."""
    env = os.environ.copy()
    env.update(options.environment_overrides)

    start_time = time.perf_counter()
    process = await asyncio.create_subprocess_exec(
        location,
        "@",
        stdin=asyncio.subprocess.PIPE,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        cwd=options.cwd,
        env=env,
    )
    duration_ms = (time.perf_counter() - start_time) * 1000
    log.debug("TFVC: spawned new process pid=%s (duration: %dms)", process.pid, duration_ms)
    return process


@dataclass(eq=False)
class _Slot:
    location: str
    options: ExecOptions
    generation: int
    task: asyncio.Task[asyncio.subprocess.Process] = field(init=False)
    claimed: bool = False

    def matches(self, location: str, options: ExecOptions) -> bool:
        return self.location == location and self.options.pool_key == options.pool_key

    @property
    def failed(self) -> bool:
        return self.task.done() and (self.task.cancelled() or self.task.exception() is not None)


class ProcessPool:
    """Owns the one cached TF process.

    Lifecycle:
        warm()    - make sure a matching process is spawned and ready
        acquire() - take the cached process for one command (and pre-spawn the next)
        drain()   - wait for any in-flight background spawn to settle
        dispose() - kill the cached process and forget it (idempotent)
    """

    def __init__(self, spawn: SpawnFunc | None = None) -> None:
        self._spawn = spawn or spawn_tf_process
        self._slot: _Slot | None = None
        self._generation = 0
        # Discarded spawns still in flight, and kills not yet reaped
        self._pending: set[asyncio.Future] = set()

    @property
    def generation(self) -> int:
        """Incremented by every dispose(); slots from older generations are dead."""
        return self._generation

    @property
    def has_cached_process(self) -> bool:
        return self._slot is not None

    async def warm(self, location: str, options: ExecOptions) -> None:
        """Ensure the slot holds a ready process for ``location``/``options``."""
        slot = self._ensure_slot(location, options)
        await asyncio.shield(slot.task)

    async def acquire(self, location: str, options: ExecOptions) -> asyncio.subprocess.Process:
        """Claim a process for exactly one command.

        Raises:
            OSError: The tool could not be started (FileNotFoundError when the
                executable is missing).
        """
        slot = self._claim(location, options)
        return await slot.task

    async def drain(self) -> None:
        """Wait until no spawn is in flight and every killed process is reaped."""
        while True:
            waiting = {f for f in self._pending if not f.done()}
            slot = self._slot
            if slot is not None and not slot.task.done():
                waiting.add(slot.task)
            if not waiting:
                return
            await asyncio.wait(waiting)

    def dispose(self) -> None:
        """Kill the cached process and clear the slot.

        A spawn still in flight is killed as soon as it completes.
        """
        self._generation += 1
        slot, self._slot = self._slot, None
        if slot is not None:
            log.debug("TFVC: disposing cached process (generation %d)", self._generation)
            self._discard(slot)

    # No awaits from here down: the check-then-replace below cannot be
    # interleaved with another caller on the event loop.

    def _claim(self, location: str, options: ExecOptions) -> _Slot:
        slot = self._ensure_slot(location, options)
        slot.claimed = True
        self._slot = None
        # Pre-spawn the next process; the caller never waits on it.
        self._slot = self._start(location, options)
        return slot

    def _ensure_slot(self, location: str, options: ExecOptions) -> _Slot:
        slot = self._slot
        if slot is not None and slot.matches(location, options) and not slot.failed:
            return slot
        if slot is not None:
            self._slot = None
            self._discard(slot)
        slot = self._start(location, options)
        self._slot = slot
        return slot

    def _start(self, location: str, options: ExecOptions) -> _Slot:
        slot = _Slot(location=location, options=options, generation=self._generation)
        slot.task = asyncio.ensure_future(self._spawn(location, options))
        slot.task.add_done_callback(lambda task, s=slot: self._on_spawned(s, task))
        return slot

    def _on_spawned(self, slot: _Slot, task: asyncio.Task[asyncio.subprocess.Process]) -> None:
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            # Surfaced to whoever claims the slot; only logged here.
            log.debug("TFVC: background spawn failed: %s", error)
            return
        orphaned = self._slot is not slot or slot.generation != self._generation
        if orphaned and not slot.claimed:
            self._terminate(task.result())

    def _discard(self, slot: _Slot) -> None:
        if slot.claimed:
            return
        task = slot.task
        if not task.done():
            self._track(task)
        elif not task.cancelled() and task.exception() is None:
            self._terminate(task.result())

    def _terminate(self, process: asyncio.subprocess.Process) -> None:
        if process.returncode is not None:
            return
        try:
            process.kill()
        except ProcessLookupError:
            return  # Already gone
        log.debug("TFVC: killed cached process pid=%s", process.pid)
        self._track(asyncio.ensure_future(process.wait()))

    def _track(self, future: asyncio.Future) -> None:
        self._pending.add(future)
        future.add_done_callback(self._pending.discard)
