"""HTTP headers and constants package for codex-switcher"""

from .constants import (
    USER_AGENT,
    CHATGPT_ACCOUNT_ID_HEADER,
)

__all__ = [
    "USER_AGENT",
    "CHATGPT_ACCOUNT_ID_HEADER",
]
