"""Loading and error state tracking keyed by operation type."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum, StrEnum
from typing import TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)

# Seconds before a finished state returns to idle
SUCCESS_CLEAR_DELAY = 1.5
FAILURE_CLEAR_DELAY = 3.0


class LoadingStatus(Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True)
class LoadingState:
    """State of one kind of operation."""

    status: LoadingStatus = LoadingStatus.IDLE
    error_message: str | None = None

    @classmethod
    def idle(cls) -> "LoadingState":
        return cls(LoadingStatus.IDLE)

    @classmethod
    def loading(cls) -> "LoadingState":
        return cls(LoadingStatus.LOADING)

    @classmethod
    def success(cls) -> "LoadingState":
        return cls(LoadingStatus.SUCCESS)

    @classmethod
    def failure(cls, message: str) -> "LoadingState":
        return cls(LoadingStatus.FAILURE, message)

    @property
    def is_loading(self) -> bool:
        return self.status is LoadingStatus.LOADING

    @property
    def is_success(self) -> bool:
        return self.status is LoadingStatus.SUCCESS

    @property
    def is_failure(self) -> bool:
        return self.status is LoadingStatus.FAILURE


class OperationType(StrEnum):
    """Kinds of repository work a caller can be waiting on."""

    FETCH = "fetch"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    SEARCH = "search"
    DELETE_ALL = "delete_all"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES = {
    OperationType.FETCH: "Loading",
    OperationType.CREATE: "Creating",
    OperationType.UPDATE: "Updating",
    OperationType.DELETE: "Deleting",
    OperationType.SEARCH: "Searching",
    OperationType.DELETE_ALL: "Deleting everything",
}


class LoadingManager:
    """Tracks a LoadingState per OperationType.

    Finished states drop back to idle after a short delay when an event loop
    is running; outside a loop they stay until cleared explicitly.
    """

    def __init__(
        self,
        success_clear_delay: float = SUCCESS_CLEAR_DELAY,
        failure_clear_delay: float = FAILURE_CLEAR_DELAY,
    ):
        self.success_clear_delay = success_clear_delay
        self.failure_clear_delay = failure_clear_delay
        self._states: dict[OperationType, LoadingState] = {}
        # Bumped on every state change so stale clear timers can tell
        self._generations: dict[OperationType, int] = {}

    def set_state(self, state: LoadingState, operation: OperationType) -> None:
        self._states[operation] = state
        self._generations[operation] = self._generations.get(operation, 0) + 1

    def get_state(self, operation: OperationType) -> LoadingState:
        return self._states.get(operation, LoadingState.idle())

    def is_loading(self, operation: OperationType) -> bool:
        return self.get_state(operation).is_loading

    def is_any_loading(self) -> bool:
        return any(state.is_loading for state in self._states.values())

    def clear_state(self, operation: OperationType) -> None:
        self.set_state(LoadingState.idle(), operation)

    def clear_all_states(self) -> None:
        for operation in list(self._states):
            self.clear_state(operation)

    def start_loading(self, operation: OperationType) -> None:
        self.set_state(LoadingState.loading(), operation)

    def finish_loading(
        self,
        operation: OperationType,
        success: bool = True,
        error: str | None = None,
    ) -> None:
        if success:
            self.set_state(LoadingState.success(), operation)
        else:
            self.set_state(LoadingState.failure(error or "Unknown error"), operation)
        self._schedule_clear(operation, self.success_clear_delay)

    def handle_error(self, error: Exception, operation: OperationType) -> None:
        self.set_state(LoadingState.failure(str(error)), operation)
        self._schedule_clear(operation, self.failure_clear_delay)

    def _schedule_clear(self, operation: OperationType, delay: float) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
        generation = self._generations.get(operation, 0)

        def _clear() -> None:
            # Only clear the state this timer was scheduled for
            if self._generations.get(operation, 0) == generation:
                self.clear_state(operation)

        loop.call_later(delay, _clear)

    async def perform_operation(
        self,
        operation: OperationType,
        task: Callable[[], Awaitable[T]],
    ) -> T | None:
        """Run task with automatic state tracking; None means it failed."""
        self.start_loading(operation)
        try:
            result = await task()
        except Exception as exc:
            logger.warning("%s failed: %s", operation.display_name, exc)
            self.handle_error(exc, operation)
            return None
        self.finish_loading(operation, success=True)
        return result
