"""Codex account credentials

Models the two Codex CLI authentication modes (API key and ChatGPT OAuth
tokens), switches the active login by rewriting auth.json, and stores the
managed accounts.
"""

from .errors import (
    CodexAuthError,
    CredentialHomeError,
    CredentialIOError,
    CredentialFormatError,
    AccountNotFoundError,
)
from .models import (
    ApiKeyAuth,
    ChatGPTAuth,
    AuthData,
    StoredAccount,
    TokenData,
    CredentialDocument,
    to_document,
    from_document,
)
from .utils import parse_jwt_claims, extract_claims
from .switcher import (
    AuthSwitcher,
    resolve_credential_home,
    switch_to_account,
    import_from_document,
    read_active_document,
    has_active_login,
)
from .storage import AccountsFile, AccountStore, load_accounts, get_account

__all__ = [
    "CodexAuthError",
    "CredentialHomeError",
    "CredentialIOError",
    "CredentialFormatError",
    "AccountNotFoundError",
    "ApiKeyAuth",
    "ChatGPTAuth",
    "AuthData",
    "StoredAccount",
    "TokenData",
    "CredentialDocument",
    "to_document",
    "from_document",
    "parse_jwt_claims",
    "extract_claims",
    "AuthSwitcher",
    "resolve_credential_home",
    "switch_to_account",
    "import_from_document",
    "read_active_document",
    "has_active_login",
    "AccountsFile",
    "AccountStore",
    "load_accounts",
    "get_account",
]
