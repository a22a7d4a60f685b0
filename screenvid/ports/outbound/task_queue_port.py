"""Port for background task queue operations."""
from __future__ import annotations
from typing import Any, Callable, Coroutine, Protocol, runtime_checkable


@runtime_checkable
class TaskQueuePort(Protocol):
    def register(self, task_name: str, fn: Callable[..., Coroutine[Any, Any, Any]]) -> None: ...
    def enqueue(self, task_name: str, args: dict) -> str: ...
    def get_status(self, task_id: str) -> dict: ...
    def cancel(self, task_id: str) -> bool: ...
