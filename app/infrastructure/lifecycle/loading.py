"""Loading phase of the host application.

The host starts in ``ASSET_LOADING``; when every asset has been read it
calls ``complete()``, which runs the registered exit hooks in order and
moves to ``MAIN``.
"""

from enum import Enum
from threading import Lock
from typing import Callable, List

from infrastructure.lifecycle.resources import Resources
from infrastructure.logging import get_module_logger

logger = get_module_logger()

ExitHook = Callable[[Resources], None]


class AppState(str, Enum):
    ASSET_LOADING = "asset_loading"
    MAIN = "main"


class InvalidStateTransitionError(RuntimeError):
    """Raised when the loading phase is completed more than once."""

    def __init__(self, current: AppState, target: AppState):
        self.current = current
        self.target = target
        super().__init__(f"Cannot transition from {current.value} to {target.value}")


class LoadingPhase:
    """Tracks the application state and runs exit hooks on completion.

    Exceptions raised by a hook propagate out of ``complete()`` and abort
    startup; the state stays ``ASSET_LOADING`` in that case.

    Attributes:
        resources: Container handed to every hook.
    """

    def __init__(self, resources: Resources):
        self.resources = resources
        self._state = AppState.ASSET_LOADING
        self._hooks: List[ExitHook] = []
        self._lock = Lock()

    @property
    def state(self) -> AppState:
        return self._state

    def on_exit(self, hook: ExitHook) -> ExitHook:
        """Register a hook to run when loading completes.

        Can be used as a decorator.
        """
        with self._lock:
            self._hooks.append(hook)
        logger.debug(
            "registered_exit_hook",
            hook=getattr(hook, "__name__", "unknown"),
            total_hooks=len(self._hooks),
        )
        return hook

    def complete(self) -> None:
        """Run every exit hook in registration order, then enter ``MAIN``.

        Raises:
            InvalidStateTransitionError: If loading was already completed.
        """
        with self._lock:
            if self._state is not AppState.ASSET_LOADING:
                raise InvalidStateTransitionError(self._state, AppState.MAIN)
            hooks = list(self._hooks)

        for hook in hooks:
            logger.debug("running_exit_hook", hook=getattr(hook, "__name__", "unknown"))
            hook(self.resources)

        with self._lock:
            self._state = AppState.MAIN
        logger.info("loading_phase_completed", hook_count=len(hooks))
