"""In-process implementation of TaskQueuePort.

Runs fire-and-forget work (such as frame cleanup) in the current event loop via
``asyncio.create_task``. Task failures are logged and recorded in the task status;
they never propagate to the code that enqueued the task.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from typing import Any, Callable, Coroutine

logger = logging.getLogger(__name__)

_FINISHED = frozenset({"SUCCESS", "FAILURE", "REVOKED"})


class InProcessTaskQueue:
    """Implements :class:`TaskQueuePort` with tasks on the running event loop.

    Task functions must be registered with :meth:`register` before they can be
    enqueued. Only the most recent ``max_history`` finished statuses are kept.
    """

    def __init__(self, max_history: int = 256) -> None:
        self._registry: dict[str, Callable[..., Coroutine[Any, Any, Any]]] = {}
        self._tasks: dict[str, dict[str, Any]] = {}
        self._async_tasks: dict[str, asyncio.Task[Any]] = {}
        self._max_history = max_history

    # -- registration ----------------------------------------------------------

    def register(
        self, task_name: str, fn: Callable[..., Coroutine[Any, Any, Any]]
    ) -> None:
        """Register an async callable under *task_name*."""
        self._registry[task_name] = fn
        logger.debug("Registered in-process task: %s", task_name)

    def is_registered(self, task_name: str) -> bool:
        return task_name in self._registry

    # -- TaskQueuePort implementation ------------------------------------------

    def enqueue(self, task_name: str, args: dict) -> str:
        """Schedule a registered task in the running event loop and return its id."""
        fn = self._registry.get(task_name)
        if fn is None:
            raise ValueError(
                f"Task '{task_name}' is not registered. "
                f"Available: {list(self._registry)}"
            )

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            raise RuntimeError(
                "InProcessTaskQueue.enqueue requires a running asyncio event loop"
            ) from None

        task_id = str(uuid.uuid4())
        self._tasks[task_id] = {
            "task_id": task_id,
            "task_name": task_name,
            "status": "PENDING",
            "result": None,
            "error": None,
        }

        async def _wrapper() -> None:
            self._tasks[task_id]["status"] = "STARTED"
            try:
                result = await fn(**args)
                self._tasks[task_id]["status"] = "SUCCESS"
                self._tasks[task_id]["result"] = result
            except asyncio.CancelledError:
                self._tasks[task_id]["status"] = "REVOKED"
                logger.info("Task %s was cancelled", task_id)
            except Exception as exc:
                self._tasks[task_id]["status"] = "FAILURE"
                self._tasks[task_id]["error"] = str(exc)
                logger.exception("Background task %s (%s) failed", task_name, task_id)

        def _done(task: asyncio.Task[Any]) -> None:
            self._async_tasks.pop(task_id, None)
            info = self._tasks.get(task_id)
            if task.cancelled() and info is not None and info["status"] not in _FINISHED:
                info["status"] = "REVOKED"
            self._prune_history()

        async_task = loop.create_task(_wrapper(), name=f"{task_name}-{task_id}")
        async_task.add_done_callback(_done)
        self._async_tasks[task_id] = async_task
        logger.debug("Enqueued in-process task %s -> %s", task_name, task_id)
        return task_id

    def get_status(self, task_id: str) -> dict:
        """Return the current status of an in-process task."""
        info = self._tasks.get(task_id)
        if info is None:
            return {"task_id": task_id, "status": "UNKNOWN"}
        return dict(info)

    def cancel(self, task_id: str) -> bool:
        """Cancel a pending or running task."""
        async_task = self._async_tasks.get(task_id)
        if async_task is None or async_task.done():
            logger.debug("Task %s is not running", task_id)
            return False
        async_task.cancel()
        logger.info("Cancelled in-process task %s", task_id)
        return True

    async def wait_idle(self) -> None:
        """Wait until every task enqueued so far has finished."""
        while self._async_tasks:
            await asyncio.gather(*list(self._async_tasks.values()), return_exceptions=True)

    # -- helpers ---------------------------------------------------------------

    def _prune_history(self) -> None:
        finished = [tid for tid, info in self._tasks.items() if info["status"] in _FINISHED]
        excess = len(finished) - self._max_history
        for tid in finished[:max(excess, 0)]:
            del self._tasks[tid]
