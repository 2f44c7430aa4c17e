"""Host lifecycle primitives.

- Resources: type-keyed container passed between systems
- LoadingPhase: ASSET_LOADING -> MAIN transition with exit hooks
"""

from infrastructure.lifecycle.loading import (
    AppState,
    InvalidStateTransitionError,
    LoadingPhase,
)
from infrastructure.lifecycle.resources import ResourceNotFoundError, Resources

__all__ = [
    "AppState",
    "InvalidStateTransitionError",
    "LoadingPhase",
    "ResourceNotFoundError",
    "Resources",
]
