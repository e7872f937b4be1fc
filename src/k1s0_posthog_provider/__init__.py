"""k1s0 posthog provider library."""

from .client import PostHogClientProtocol, new_posthog_client
from .config import LogSection, PostHogSection, ProviderConfig, deep_merge, load
from .exceptions import PostHogProviderError, PostHogProviderErrorCodes
from .identity import extract_distinct_id, flatten_context
from .logger import new_logger
from .memory import InMemoryPostHogClient
from .models import DISTINCT_ID_KEY, ResolutionError, ResolutionErrorKind
from .provider import PROVIDER_NAME, PostHogProvider

__all__ = [
    "DISTINCT_ID_KEY",
    "PROVIDER_NAME",
    "InMemoryPostHogClient",
    "LogSection",
    "PostHogClientProtocol",
    "PostHogProvider",
    "PostHogProviderError",
    "PostHogProviderErrorCodes",
    "PostHogSection",
    "ProviderConfig",
    "ResolutionError",
    "ResolutionErrorKind",
    "deep_merge",
    "extract_distinct_id",
    "flatten_context",
    "load",
    "new_logger",
    "new_posthog_client",
]
