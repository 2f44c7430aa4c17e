"""
Singleton service providers.

Provides provider functions for the engine's shared infrastructure objects.
"""

from infrastructure.services.providers import get_settings

__all__ = [
    "get_settings",
]
