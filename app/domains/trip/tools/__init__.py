"""Outbound integrations for the trip domain.

- OpenAICompletionProvider: chat completions for the AI curator
- VenueDirectoryClient: cached lookups of local companies
"""

from app.domains.trip.tools.base import APIClientError, RateLimitError, ToolError
from app.domains.trip.tools.completion import (
    CompletionProvider,
    CompletionResult,
    CompletionUnavailableError,
    OpenAICompletionProvider,
)
from app.domains.trip.tools.venues import Venue, VenueDirectoryClient

__all__ = [
    "APIClientError",
    "CompletionProvider",
    "CompletionResult",
    "CompletionUnavailableError",
    "OpenAICompletionProvider",
    "RateLimitError",
    "ToolError",
    "Venue",
    "VenueDirectoryClient",
]
