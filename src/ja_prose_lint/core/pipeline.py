"""Debounced lint scheduling.

Turns a stream of document edits into at most one pending lint at a time.
Each submission supersedes the previous one: the pending task is cancelled
and only the result of the most recent request is ever published.
"""
from __future__ import annotations

import asyncio
import json
import logging
import sys
from typing import Callable, Optional, Protocol

from ja_prose_lint.core.linter.engine import RuleEngine
from ja_prose_lint.core.linter.models import LintResult

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_DELAY = 0.3  # seconds
DEFAULT_RESPONSE_LIMIT = 2 ** 24  # bytes per worker response line


class LintPipelineError(Exception):
    """Base class for failures of a lint request."""


class PipelineInitializationError(LintPipelineError):
    """The engine backend is not available."""


class TransportError(LintPipelineError):
    """The worker answered a request with an error or an unreadable response."""


class EngineBackend(Protocol):
    async def start(self) -> None: ...

    async def lint(self, text: str) -> LintResult: ...

    async def close(self) -> None: ...


class LocalEngineBackend:
    """Runs the rule engine in-process behind an async boundary."""

    def __init__(self, engine: RuleEngine | None = None, latency: float = 0.0):
        """
        Args:
            engine: Rule engine to run (default: all rules)
            latency: Simulated response delay in seconds
        """
        self.engine = engine or RuleEngine()
        self.latency = latency

    async def start(self) -> None:
        return None

    async def lint(self, text: str) -> LintResult:
        await asyncio.sleep(self.latency)
        return self.engine.lint(text)

    async def close(self) -> None:
        return None


class WorkerEngineBackend:
    """
    Runs the rule engine in a separate worker process.

    Requests are JSON lines ``{"id", "command": "lint", "text"}`` on the
    worker's stdin; responses ``{"id", "results"}`` or ``{"id", "error"}``
    come back on its stdout. Responses whose id is not the latest issued
    request are discarded.

    A response line longer than ``limit`` bytes cannot be read back; the
    request fails with TransportError and the worker is restarted.
    """

    def __init__(self, command: list[str] | None = None, limit: int = DEFAULT_RESPONSE_LIMIT):
        self.command = command or [sys.executable, "-m", "ja_prose_lint.worker"]
        self.limit = limit
        self._process: asyncio.subprocess.Process | None = None
        self._lock = asyncio.Lock()
        self._last_id = 0

    @property
    def is_running(self) -> bool:
        return self._process is not None and self._process.returncode is None

    async def start(self) -> None:
        """Spawn the worker process. Raises PipelineInitializationError on failure."""
        if self.is_running:
            return
        try:
            self._process = await asyncio.create_subprocess_exec(
                *self.command,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                limit=self.limit,
            )
        except OSError as e:
            raise PipelineInitializationError(f"Failed to start lint worker: {e}") from e
        logger.info(f"Started lint worker (pid {self._process.pid})")

    async def lint(self, text: str) -> LintResult:
        if not self.is_running:
            raise PipelineInitializationError("Lint worker is not running")

        self._last_id += 1
        request_id = self._last_id
        payload = json.dumps(
            {"id": request_id, "command": "lint", "text": text}, ensure_ascii=False
        )

        async with self._lock:
            process = self._process
            try:
                process.stdin.write((payload + "\n").encode("utf-8"))
                await process.stdin.drain()
            except (BrokenPipeError, ConnectionResetError) as e:
                raise PipelineInitializationError(f"Lint worker is not accepting requests: {e}") from e

            while True:
                try:
                    raw = await process.stdout.readline()
                except (ValueError, asyncio.LimitOverrunError) as e:
                    await self._restart()
                    raise TransportError(
                        f"Worker response exceeds {self.limit} bytes: {e}"
                    ) from e
                if not raw:
                    raise PipelineInitializationError("Lint worker exited")

                try:
                    response = json.loads(raw)
                except json.JSONDecodeError as e:
                    raise TransportError(f"Malformed worker response: {e}") from e

                if response.get("id") != request_id:
                    logger.debug(f"Discarding stale worker response {response.get('id')}")
                    continue

                if response.get("error"):
                    raise TransportError(response["error"])

                try:
                    return LintResult.from_dict(response["results"])
                except (KeyError, TypeError, ValueError) as e:
                    raise TransportError(f"Malformed lint results: {e}") from e

    async def _restart(self) -> None:
        # The rest of the oversized line is still in the pipe
        process = self._process
        self._process = None
        if process is not None and process.returncode is None:
            process.kill()
            await process.wait()
        logger.warning("Restarting lint worker after an unreadable response")
        await self.start()

    async def close(self) -> None:
        """Stop the worker process."""
        process = self._process
        self._process = None
        if process is None or process.returncode is not None:
            return
        process.stdin.close()
        try:
            await asyncio.wait_for(process.wait(), timeout=2.0)
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
        logger.info("Stopped lint worker")


def create_backend(engine: str = "local", latency: float = 0.0) -> EngineBackend:
    """
    Build an engine backend by name.

    Args:
        engine: "local" (in-process) or "worker" (separate process)
        latency: Simulated delay for the local backend, in seconds
    """
    if engine == "local":
        return LocalEngineBackend(latency=latency)
    if engine == "worker":
        return WorkerEngineBackend()
    raise ValueError(f"Unknown engine backend: {engine!r}")


class LintPipeline:
    """
    Debounces edits and publishes the result of the latest one.

    Usage::

        async with LintPipeline(LocalEngineBackend(), on_result=show) as pipeline:
            pipeline.submit(text)
            ...
            result = await pipeline.drain()
    """

    def __init__(
        self,
        backend: EngineBackend,
        delay: float = DEFAULT_DEBOUNCE_DELAY,
        on_result: Optional[Callable[[LintResult], None]] = None,
        on_error: Optional[Callable[[LintPipelineError], None]] = None,
    ):
        """
        Args:
            backend: Engine backend that performs the lint
            delay: Debounce delay in seconds
            on_result: Called with each published result
            on_error: Called with failures of the latest request; when
                omitted, failures are raised from drain()
        """
        self.backend = backend
        self.delay = delay
        self.on_result = on_result
        self.on_error = on_error

        self._task: asyncio.Task | None = None
        self._request_id = 0
        self._latest_result: LintResult | None = None

    @property
    def latest_result(self) -> LintResult | None:
        return self._latest_result

    @property
    def latest_request_id(self) -> int:
        return self._request_id

    async def __aenter__(self) -> LintPipeline:
        await self.backend.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def submit(self, text: str) -> int:
        """
        Schedule a lint of text, superseding any pending request.

        Blank text publishes an empty result immediately without invoking
        the backend. Must be called from a running event loop.

        Returns:
            The request id assigned to this submission
        """
        self._request_id += 1
        request_id = self._request_id
        self._cancel_pending()

        if not text.strip():
            self._publish(LintResult.empty())
            return request_id

        self._task = asyncio.get_running_loop().create_task(self._run(text, request_id))
        return request_id

    async def drain(self) -> LintResult | None:
        """
        Wait for the latest request to finish.

        Returns:
            The latest published result (None if nothing was linted yet)

        Raises:
            LintPipelineError: The latest request failed and no on_error
                callback is set
        """
        while self._task is not None and not self._task.done():
            await asyncio.wait({self._task})

        task = self._task
        if task is not None and not task.cancelled():
            exc = task.exception()
            if exc is not None:
                self._task = None
                raise exc
        return self._latest_result

    async def close(self) -> None:
        """Cancel pending work and stop the backend."""
        task = self._task
        self._cancel_pending()
        if task is not None:
            await asyncio.wait({task})
        await self.backend.close()

    def _cancel_pending(self) -> None:
        task = self._task
        self._task = None
        if task is None:
            return
        if task.done():
            self._retrieve_failure(task)
        else:
            task.cancel()
            logger.debug("Superseded pending lint request")

    def _retrieve_failure(self, task: asyncio.Task) -> None:
        """Log a failure nobody drained before its task is dropped."""
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.warning(f"Lint request failed before it was superseded: {exc}")

    async def _run(self, text: str, request_id: int) -> None:
        await asyncio.sleep(self.delay)

        try:
            result = await self.backend.lint(text)
        except LintPipelineError as e:
            if request_id != self._request_id:
                logger.debug(f"Ignoring failure of stale request {request_id}: {e}")
                return
            if self.on_error is None:
                raise
            self.on_error(e)
            return

        if request_id != self._request_id:
            logger.debug(f"Discarding stale result for request {request_id}")
            return

        self._publish(result)

    def _publish(self, result: LintResult) -> None:
        self._latest_result = result
        if self.on_result is not None:
            self.on_result(result)
