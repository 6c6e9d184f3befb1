"""Web adapters."""

from mood_dining.adapters.web.api_app import ApiServer, MoodDiningApi, create_app
from mood_dining.adapters.web.rate_limit_middleware import RateLimitMiddleware

__all__ = ["ApiServer", "MoodDiningApi", "RateLimitMiddleware", "create_app"]
