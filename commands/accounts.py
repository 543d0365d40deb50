"""Account management commands"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from codex_auth import (
    AccountStore,
    AuthSwitcher,
    CredentialIOError,
    StoredAccount,
)

logger = logging.getLogger(__name__)


def list_accounts(store: Optional[AccountStore] = None) -> List[StoredAccount]:
    store = store or AccountStore()
    return store.load_accounts().accounts


def get_active_account_id(store: Optional[AccountStore] = None) -> Optional[str]:
    store = store or AccountStore()
    return store.load_accounts().active_account_id


def switch_account(
    id_or_name: str,
    store: Optional[AccountStore] = None,
    switcher: Optional[AuthSwitcher] = None,
) -> StoredAccount:
    """Write an account's credentials to auth.json and mark it active

    Raises:
        AccountNotFoundError: If no stored account matches
        CodexAuthError: If auth.json cannot be written
    """
    store = store or AccountStore()
    switcher = switcher or AuthSwitcher()

    account = store.find_account(id_or_name)
    switcher.switch_to_account(account)
    return store.set_active_account(account.id)


def import_account(
    path: Union[str, Path],
    name: str,
    store: Optional[AccountStore] = None,
    switcher: Optional[AuthSwitcher] = None,
) -> StoredAccount:
    """Import an auth.json file as a new stored account"""
    store = store or AccountStore()
    switcher = switcher or AuthSwitcher()

    account = switcher.import_from_document(path, name)
    return store.add_account(account)


def import_current_login(
    name: str,
    store: Optional[AccountStore] = None,
    switcher: Optional[AuthSwitcher] = None,
) -> StoredAccount:
    """Import the Codex CLI's current auth.json as a new stored account

    Raises:
        CredentialIOError: If there is no current login to import
    """
    store = store or AccountStore()
    switcher = switcher or AuthSwitcher()
    if not switcher.auth_file.exists():
        raise CredentialIOError(f"No Codex login found at {switcher.auth_file}")

    account = import_account(switcher.auth_file, name, store=store, switcher=switcher)
    return store.set_active_account(account.id)


def remove_account(id_or_name: str, store: Optional[AccountStore] = None) -> StoredAccount:
    store = store or AccountStore()
    account = store.find_account(id_or_name)
    return store.remove_account(account.id)


def rename_account(id_or_name: str, name: str, store: Optional[AccountStore] = None) -> StoredAccount:
    store = store or AccountStore()
    account = store.find_account(id_or_name)
    return store.rename_account(account.id, name)
