"""JWT helpers for ChatGPT ID tokens

Claims are decoded without any signature verification. They only feed
display fields and must never be used to authorize anything.
"""

import base64
import binascii
import json
import logging
import re
from typing import Any, Dict, Optional, Tuple


logger = logging.getLogger(__name__)

# Namespaced claims object OpenAI adds to ChatGPT ID tokens
OPENAI_AUTH_CLAIM = "https://api.openai.com/auth"
CHATGPT_PLAN_TYPE_CLAIM = "chatgpt_plan_type"

# URL-safe base64 alphabet, no padding
_BASE64URL_NOPAD = re.compile(r"[A-Za-z0-9_-]*")


def parse_jwt_claims(token: str) -> Optional[Dict[str, Any]]:
    """Parse JWT token and extract claims from payload

    Args:
        token: JWT token string

    Returns:
        Dictionary of claims, or None if the token is not a three-part
        JWT with a base64url (unpadded) JSON object payload
    """
    if not token:
        return None

    parts = token.split(".")
    if len(parts) != 3:
        logger.debug(f"Invalid JWT format: expected 3 parts, got {len(parts)}")
        return None

    payload = parts[1]
    if not _BASE64URL_NOPAD.fullmatch(payload):
        logger.debug("JWT payload is not unpadded base64url")
        return None

    try:
        padded = payload + "=" * (-len(payload) % 4)
        data = base64.b64decode(padded, altchars=b"-_", validate=True)
        claims = json.loads(data)
    except (binascii.Error, ValueError) as e:
        logger.debug(f"Could not decode JWT payload: {e}")
        return None

    if not isinstance(claims, dict):
        return None
    return claims


def extract_claims(id_token: str) -> Tuple[Optional[str], Optional[str]]:
    """Extract display email and ChatGPT plan from an ID token

    Args:
        id_token: OAuth ID token

    Returns:
        Tuple of (email, plan_type); either is None when missing or malformed
    """
    claims = parse_jwt_claims(id_token)
    if not claims:
        return None, None

    email = claims.get("email")
    if not isinstance(email, str):
        email = None

    plan_type = None
    auth_claims = claims.get(OPENAI_AUTH_CLAIM)
    if isinstance(auth_claims, dict):
        plan = auth_claims.get(CHATGPT_PLAN_TYPE_CLAIM)
        if isinstance(plan, str):
            plan_type = plan

    return email, plan_type
