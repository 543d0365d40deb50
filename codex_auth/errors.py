"""Exceptions raised by credential and account operations"""


class CodexAuthError(Exception):
    """Base class for account switching and credential errors"""


class CredentialHomeError(CodexAuthError):
    """The Codex credential home directory could not be determined"""


class CredentialIOError(CodexAuthError):
    """Reading or writing a credential or account file failed

    The underlying ``OSError`` is attached as ``__cause__``.
    """


class CredentialFormatError(CodexAuthError, ValueError):
    """A credential document is malformed or carries no usable credential"""


class AccountNotFoundError(CodexAuthError, LookupError):
    """No stored account matches the requested identifier"""

    def __init__(self, account_id: str):
        super().__init__(f"Account not found: {account_id}")
        self.account_id = account_id
