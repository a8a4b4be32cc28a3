"""Core module - Settings, errors, logging and request dependencies.

Import dependencies directly where needed:

    from app.core.deps import get_trip_service
    from app.core.exceptions import TripNotFoundError
"""

from app.core.config import settings

__all__ = [
    "settings",
]
