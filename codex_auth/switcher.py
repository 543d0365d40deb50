"""Account switching - writes credentials to the Codex CLI auth.json"""

import logging
import os
from pathlib import Path
from typing import Mapping, Optional, Union

from settings import AUTH_FILE_NAME, CODEX_DIR_NAME, CODEX_HOME_ENV
from .errors import CredentialFormatError, CredentialHomeError, CredentialIOError
from .fileio import ensure_directory, write_private_file
from .models import (
    ChatGPTAuth,
    CredentialDocument,
    StoredAccount,
    from_document,
    to_document,
)
from .utils import extract_claims


logger = logging.getLogger(__name__)


def resolve_credential_home(
    environ: Optional[Mapping[str, str]] = None,
    home: Optional[Path] = None,
) -> Path:
    """Locate the Codex home directory

    Args:
        environ: Environment to consult (default: os.environ)
        home: User home directory (default: discovered from the platform)

    Returns:
        $CODEX_HOME when set, otherwise <home>/.codex

    Raises:
        CredentialHomeError: If no home directory can be discovered
    """
    env = os.environ if environ is None else environ
    override = env.get(CODEX_HOME_ENV)
    if override:
        return Path(override)

    if home is None:
        try:
            home = Path.home()
        except (RuntimeError, KeyError) as e:
            raise CredentialHomeError("Could not find home directory") from e

    return Path(home) / CODEX_DIR_NAME


class AuthSwitcher:
    """Reads and writes the Codex CLI auth.json"""

    def __init__(self, codex_home: Optional[Path] = None):
        """Initialize the switcher

        Args:
            codex_home: Codex home directory (default: resolved from the
                environment each time it is needed)
        """
        self._codex_home = Path(codex_home) if codex_home is not None else None

    @property
    def codex_home(self) -> Path:
        if self._codex_home is not None:
            return self._codex_home
        return resolve_credential_home()

    @property
    def auth_file(self) -> Path:
        """Path to the auth.json file"""
        return self.codex_home / AUTH_FILE_NAME

    def switch_to_account(self, account: StoredAccount) -> None:
        """Make an account active by writing its credentials to auth.json

        Any previous auth.json is replaced, never merged.

        Raises:
            CredentialHomeError: If the Codex home cannot be resolved
            CredentialIOError: If the directory or file cannot be written
        """
        codex_home = self.codex_home
        ensure_directory(codex_home)

        content = to_document(account).to_json()
        auth_path = codex_home / AUTH_FILE_NAME
        write_private_file(auth_path, content)

        logger.info(f"Switched Codex credentials to account '{account.name}' ({account.auth_mode})")

    def import_from_document(
        self,
        path: Union[str, Path],
        display_name: str,
    ) -> StoredAccount:
        """Create a stored account from an existing auth.json file

        Args:
            path: auth.json file to import
            display_name: Name for the new account

        Raises:
            CredentialIOError: If the file cannot be read
            CredentialFormatError: If the file is malformed or has no credentials
        """
        path = Path(path)
        try:
            content = path.read_text(encoding="utf-8")
        except OSError as e:
            raise CredentialIOError(f"Failed to read auth.json: {path}") from e
        except UnicodeDecodeError as e:
            raise CredentialFormatError(f"auth.json is not valid UTF-8: {path}") from e

        auth = from_document(CredentialDocument.from_json(content))

        email = plan_type = None
        if isinstance(auth, ChatGPTAuth):
            email, plan_type = extract_claims(auth.id_token)

        account = StoredAccount(
            name=display_name,
            email=email,
            plan_type=plan_type,
            auth_data=auth,
        )
        logger.info(f"Imported {account.auth_mode} account '{display_name}' from {path}")
        return account

    def read_active_document(self) -> Optional[CredentialDocument]:
        """Read the current auth.json

        Returns:
            The parsed document, or None if auth.json does not exist

        Raises:
            CredentialIOError: If the file exists but cannot be read
            CredentialFormatError: If the file is malformed
        """
        path = self.auth_file
        if not path.exists():
            logger.debug(f"No auth.json found at {path}")
            return None

        try:
            content = path.read_text(encoding="utf-8")
        except OSError as e:
            raise CredentialIOError(f"Failed to read auth.json: {path}") from e
        except UnicodeDecodeError as e:
            raise CredentialFormatError(f"auth.json is not valid UTF-8: {path}") from e

        return CredentialDocument.from_json(content)

    def has_active_login(self) -> bool:
        """Check whether auth.json holds any credential"""
        document = self.read_active_document()
        return document is not None and document.has_credentials()


def switch_to_account(account: StoredAccount) -> None:
    AuthSwitcher().switch_to_account(account)


def import_from_document(path: Union[str, Path], display_name: str) -> StoredAccount:
    return AuthSwitcher().import_from_document(path, display_name)


def read_active_document() -> Optional[CredentialDocument]:
    return AuthSwitcher().read_active_document()


def has_active_login() -> bool:
    return AuthSwitcher().has_active_login()
