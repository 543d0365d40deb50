"""
Usage API client for fetching ChatGPT rate limits and credits.
"""
import asyncio
import logging
import re
from typing import Dict, List, Optional, Sequence

import httpx

from settings import CONNECT_TIMEOUT, REQUEST_TIMEOUT, USAGE_ENDPOINT
from headers import CHATGPT_ACCOUNT_ID_HEADER, USER_AGENT
from codex_auth.models import ApiKeyAuth, ChatGPTAuth, StoredAccount
from usage.models import RateLimitStatusPayload, RateLimitWindow, UsageInfo

logger = logging.getLogger(__name__)

API_KEY_PLAN_TYPE = "api_key"
API_KEY_USAGE_ERROR = "Usage info not available for API key accounts"
INVALID_TOKEN_ERROR = "Invalid access token"

# Visible ASCII, space and tab
_HEADER_VALUE = re.compile(r"[\t\x20-\x7e]*")


def window_minutes(seconds: int) -> int:
    """Convert a window length to minutes, rounding up"""
    return (seconds + 59) // 60


def create_usage_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=httpx.Timeout(REQUEST_TIMEOUT, connect=CONNECT_TIMEOUT))


def build_usage_headers(auth: ChatGPTAuth) -> Dict[str, str]:
    """Build request headers for the usage endpoint

    Args:
        auth: ChatGPT tokens of the account

    Returns:
        Dictionary of HTTP headers

    Raises:
        ValueError: If the access token cannot be sent as a header value
    """
    authorization = f"Bearer {auth.access_token}"
    if not _HEADER_VALUE.fullmatch(authorization):
        raise ValueError(INVALID_TOKEN_ERROR)

    headers = {
        "User-Agent": USER_AGENT,
        "Authorization": authorization,
    }
    if auth.account_id:
        if _HEADER_VALUE.fullmatch(auth.account_id):
            headers[CHATGPT_ACCOUNT_ID_HEADER] = auth.account_id
        else:
            logger.warning(f"Omitting {CHATGPT_ACCOUNT_ID_HEADER} header: value is not a valid header")
    return headers


def convert_payload_to_usage_info(account_id: str, payload: RateLimitStatusPayload) -> UsageInfo:
    """Flatten a backend status payload into a UsageInfo record

    Missing windows or credit blocks leave the matching fields unset.
    """
    primary: Optional[RateLimitWindow] = None
    secondary: Optional[RateLimitWindow] = None
    if payload.rate_limit is not None:
        primary = payload.rate_limit.primary_window
        secondary = payload.rate_limit.secondary_window

    def minutes(window: Optional[RateLimitWindow]) -> Optional[int]:
        if window is None or window.limit_window_seconds is None:
            return None
        return window_minutes(window.limit_window_seconds)

    credits = payload.credits

    return UsageInfo(
        account_id=account_id,
        plan_type=payload.plan_type,
        primary_used_percent=primary.used_percent if primary else None,
        primary_window_minutes=minutes(primary),
        primary_resets_at=primary.reset_at if primary else None,
        secondary_used_percent=secondary.used_percent if secondary else None,
        secondary_window_minutes=minutes(secondary),
        secondary_resets_at=secondary.reset_at if secondary else None,
        has_credits=credits.has_credits if credits else None,
        unlimited_credits=credits.unlimited if credits else None,
        credits_balance=credits.balance if credits else None,
    )


async def fetch_usage(
    account: StoredAccount,
    client: Optional[httpx.AsyncClient] = None,
) -> UsageInfo:
    """Get usage information for an account

    Remote failures are reported through ``UsageInfo.error``; this
    coroutine does not raise for them.

    Args:
        account: Account to query
        client: HTTP client to reuse (default: a short-lived client)

    Returns:
        Usage record for the account
    """
    auth = account.auth_data

    if isinstance(auth, ApiKeyAuth):
        logger.debug(f"Skipping usage for API key account '{account.name}'")
        return UsageInfo(
            account_id=account.id,
            plan_type=API_KEY_PLAN_TYPE,
            error=API_KEY_USAGE_ERROR,
        )

    if isinstance(auth, ChatGPTAuth):
        return await _fetch_chatgpt_usage(account, auth, client)

    raise TypeError(f"Unsupported auth data: {type(auth).__name__}")


async def _fetch_chatgpt_usage(
    account: StoredAccount,
    auth: ChatGPTAuth,
    client: Optional[httpx.AsyncClient],
) -> UsageInfo:
    try:
        headers = build_usage_headers(auth)
    except ValueError:
        logger.error(f"Access token for '{account.name}' is not a valid header value")
        return UsageInfo.from_error(account.id, INVALID_TOKEN_ERROR)

    if CHATGPT_ACCOUNT_ID_HEADER in headers:
        logger.debug(f"Using ChatGPT account ID {auth.account_id} for '{account.name}'")

    try:
        if client is None:
            async with create_usage_client() as owned_client:
                response = await owned_client.get(USAGE_ENDPOINT, headers=headers)
        else:
            response = await client.get(USAGE_ENDPOINT, headers=headers)
    except httpx.HTTPError as e:
        logger.error(f"Usage request failed for '{account.name}': {e!r}")
        return UsageInfo.from_error(account.id, f"Failed to send usage request: {e}")

    logger.debug(f"Usage response status for '{account.name}': {response.status_code}")

    if not response.is_success:
        logger.warning(
            f"Usage request for '{account.name}' failed with status {response.status_code}: "
            f"{response.text[:200]}"
        )
        return UsageInfo.from_error(
            account.id,
            f"API error: {response.status_code} {response.reason_phrase}".rstrip(),
        )

    try:
        payload = RateLimitStatusPayload.model_validate_json(response.content)
    except ValueError as e:
        logger.error(f"Failed to parse usage response for '{account.name}': {e}")
        return UsageInfo.from_error(account.id, f"Failed to parse usage response: {e}")

    usage = convert_payload_to_usage_info(account.id, payload)
    logger.info(
        f"Usage for '{account.name}' - primary: {usage.primary_used_percent}%, plan: {usage.plan_type}"
    )
    return usage


async def fetch_usage_all(
    accounts: Sequence[StoredAccount],
    client: Optional[httpx.AsyncClient] = None,
    max_concurrency: Optional[int] = None,
) -> List[UsageInfo]:
    """Refresh usage for several accounts concurrently

    Results come back in input order. A failing account only affects its
    own record.

    Args:
        accounts: Accounts to query
        client: HTTP client shared by all requests (default: a new one)
        max_concurrency: Cap on in-flight requests (default: no cap)

    Returns:
        One usage record per account
    """
    logger.info(f"Refreshing usage for {len(accounts)} account(s)")
    # Zero or negative means no cap
    semaphore = None
    if max_concurrency is not None and max_concurrency > 0:
        semaphore = asyncio.Semaphore(max_concurrency)

    async def fetch_one(account: StoredAccount, shared: httpx.AsyncClient) -> UsageInfo:
        if semaphore is None:
            return await fetch_usage(account, shared)
        async with semaphore:
            return await fetch_usage(account, shared)

    async def gather(shared: httpx.AsyncClient) -> List[UsageInfo]:
        return list(await asyncio.gather(*(fetch_one(account, shared) for account in accounts)))

    if client is None:
        async with create_usage_client() as owned_client:
            results = await gather(owned_client)
    else:
        results = await gather(client)

    logger.info("Usage refresh complete")
    return results
