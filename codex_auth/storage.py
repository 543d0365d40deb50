"""Persistent storage for managed Codex accounts"""

import logging
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field

from settings import ACCOUNTS_FILE
from .errors import AccountNotFoundError, CredentialFormatError, CredentialIOError
from .fileio import ensure_directory, write_private_file
from .models import StoredAccount, utcnow


logger = logging.getLogger(__name__)

STORE_VERSION = 1


class AccountsFile(BaseModel):
    """On-disk layout of the accounts file"""

    version: int = STORE_VERSION
    accounts: List[StoredAccount] = Field(default_factory=list)
    active_account_id: Optional[str] = None

    def find(self, account_id: str) -> Optional[StoredAccount]:
        for account in self.accounts:
            if account.id == account_id:
                return account
        return None


class AccountStore:
    """Manages the collection of stored accounts

    Every mutating call loads the file, applies the change and writes it
    back, so the file is the only source of truth.
    """

    def __init__(self, accounts_file: Optional[Path] = None):
        """Initialize account storage

        Args:
            accounts_file: Path to accounts file (default: ACCOUNTS_FILE setting)
        """
        self.accounts_file = Path(accounts_file if accounts_file is not None else ACCOUNTS_FILE)

    def load_accounts(self) -> AccountsFile:
        """Load all stored accounts

        Returns:
            The stored accounts; empty when the file does not exist yet

        Raises:
            CredentialIOError: If the file cannot be read
            CredentialFormatError: If the file is malformed
        """
        if not self.accounts_file.exists():
            logger.debug(f"No accounts file at {self.accounts_file}")
            return AccountsFile()

        try:
            content = self.accounts_file.read_text(encoding="utf-8")
        except OSError as e:
            raise CredentialIOError(f"Failed to read accounts file: {self.accounts_file}") from e
        except UnicodeDecodeError as e:
            raise CredentialFormatError(f"Accounts file is not valid UTF-8: {self.accounts_file}") from e

        try:
            return AccountsFile.model_validate_json(content)
        except ValueError as e:
            raise CredentialFormatError(f"Failed to parse accounts file: {self.accounts_file}: {e}") from e

    def save_accounts(self, store: AccountsFile) -> None:
        """Write all accounts, replacing the previous file"""
        ensure_directory(self.accounts_file.parent)
        write_private_file(self.accounts_file, store.model_dump_json(indent=2))
        logger.debug(f"Saved {len(store.accounts)} account(s) to {self.accounts_file}")

    def get_account(self, account_id: str) -> Optional[StoredAccount]:
        return self.load_accounts().find(account_id)

    def find_account(self, id_or_name: str) -> StoredAccount:
        """Look up an account by id, falling back to an exact name match

        Raises:
            AccountNotFoundError: If nothing matches, or the name is ambiguous
        """
        store = self.load_accounts()
        account = store.find(id_or_name)
        if account is not None:
            return account

        matches = [a for a in store.accounts if a.name == id_or_name]
        if len(matches) == 1:
            return matches[0]
        if len(matches) > 1:
            logger.warning(f"Account name '{id_or_name}' is ambiguous ({len(matches)} matches), use the id")
        raise AccountNotFoundError(id_or_name)

    def add_account(self, account: StoredAccount) -> StoredAccount:
        store = self.load_accounts()
        store.accounts.append(account)
        self.save_accounts(store)
        logger.info(f"Added account '{account.name}' ({account.id})")
        return account

    def remove_account(self, account_id: str) -> StoredAccount:
        """Delete an account, clearing the active marker if it pointed at it

        Raises:
            AccountNotFoundError: If no account has this id
        """
        store = self.load_accounts()
        account = store.find(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)

        store.accounts = [a for a in store.accounts if a.id != account_id]
        if store.active_account_id == account_id:
            store.active_account_id = None
        self.save_accounts(store)
        logger.info(f"Removed account '{account.name}' ({account.id})")
        return account

    def rename_account(self, account_id: str, name: str) -> StoredAccount:
        """Change an account's display name

        Raises:
            AccountNotFoundError: If no account has this id
        """
        store = self.load_accounts()
        account = store.find(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)

        account.name = name
        self.save_accounts(store)
        return account

    def set_active_account(self, account_id: str) -> StoredAccount:
        """Mark an account as active and stamp its last use

        Raises:
            AccountNotFoundError: If no account has this id
        """
        store = self.load_accounts()
        account = store.find(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)

        account.last_used_at = utcnow()
        store.active_account_id = account_id
        self.save_accounts(store)
        return account


def load_accounts() -> AccountsFile:
    return AccountStore().load_accounts()


def get_account(account_id: str) -> Optional[StoredAccount]:
    return AccountStore().get_account(account_id)
