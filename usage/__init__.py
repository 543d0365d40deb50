"""ChatGPT usage, rate-limit and credit status for stored accounts"""

from .models import (
    RateLimitWindow,
    RateLimitDetails,
    CreditStatusDetails,
    RateLimitStatusPayload,
    UsageInfo,
)
from .client import (
    API_KEY_PLAN_TYPE,
    API_KEY_USAGE_ERROR,
    window_minutes,
    build_usage_headers,
    convert_payload_to_usage_info,
    fetch_usage,
    fetch_usage_all,
)

__all__ = [
    "RateLimitWindow",
    "RateLimitDetails",
    "CreditStatusDetails",
    "RateLimitStatusPayload",
    "UsageInfo",
    "API_KEY_PLAN_TYPE",
    "API_KEY_USAGE_ERROR",
    "window_minutes",
    "build_usage_headers",
    "convert_payload_to_usage_info",
    "fetch_usage",
    "fetch_usage_all",
]
