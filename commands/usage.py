"""Usage query commands"""

import logging
from typing import List, Optional

import httpx

from settings import USAGE_MAX_CONCURRENCY
from codex_auth import AccountNotFoundError, AccountStore
from usage import UsageInfo, fetch_usage, fetch_usage_all

logger = logging.getLogger(__name__)


async def get_usage(
    account_id: str,
    store: Optional[AccountStore] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> UsageInfo:
    """Get usage info for a specific account

    Raises:
        AccountNotFoundError: If no stored account has this id
    """
    store = store or AccountStore()
    account = store.get_account(account_id)
    if account is None:
        raise AccountNotFoundError(account_id)

    return await fetch_usage(account, client)


async def refresh_all_usage(
    store: Optional[AccountStore] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> List[UsageInfo]:
    """Refresh usage info for all stored accounts"""
    store = store or AccountStore()
    accounts = store.load_accounts().accounts
    return await fetch_usage_all(
        accounts,
        client=client,
        max_concurrency=USAGE_MAX_CONCURRENCY or None,
    )
