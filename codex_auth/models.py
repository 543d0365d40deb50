"""Data models for stored Codex accounts and the auth.json credential document"""

import datetime
import re
import uuid
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import CredentialFormatError


# Codex writes nanosecond precision; datetime holds microseconds
_EXCESS_FRACTION = re.compile(r"(\.\d{6})\d+")


def utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class ApiKeyAuth(BaseModel):
    """Static OpenAI API key credential"""
    model_config = ConfigDict(frozen=True)

    type: Literal["api_key"] = "api_key"
    key: str


class ChatGPTAuth(BaseModel):
    """ChatGPT OAuth token triple

    Attributes:
        id_token: JWT ID token containing user identity
        access_token: Bearer token for API authentication
        refresh_token: Token for refreshing expired access tokens
        account_id: ChatGPT workspace identifier used for request routing
    """
    model_config = ConfigDict(frozen=True)

    type: Literal["chatgpt"] = "chatgpt"
    id_token: str
    access_token: str
    refresh_token: str
    account_id: Optional[str] = None


AuthData = Annotated[Union[ApiKeyAuth, ChatGPTAuth], Field(discriminator="type")]


class StoredAccount(BaseModel):
    """One managed Codex identity"""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    email: Optional[str] = None
    plan_type: Optional[str] = None
    auth_data: AuthData
    created_at: datetime.datetime = Field(default_factory=utcnow)
    last_used_at: Optional[datetime.datetime] = None

    @classmethod
    def new_api_key(cls, name: str, key: str) -> "StoredAccount":
        return cls(name=name, auth_data=ApiKeyAuth(key=key))

    @classmethod
    def new_chatgpt(
        cls,
        name: str,
        email: Optional[str],
        plan_type: Optional[str],
        id_token: str,
        access_token: str,
        refresh_token: str,
        account_id: Optional[str] = None,
    ) -> "StoredAccount":
        return cls(
            name=name,
            email=email,
            plan_type=plan_type,
            auth_data=ChatGPTAuth(
                id_token=id_token,
                access_token=access_token,
                refresh_token=refresh_token,
                account_id=account_id,
            ),
        )

    @property
    def auth_mode(self) -> str:
        return self.auth_data.type


class TokenData(BaseModel):
    """The ``tokens`` object of auth.json"""

    id_token: str
    access_token: str
    refresh_token: str
    account_id: Optional[str] = None


class CredentialDocument(BaseModel):
    """The auth.json document shared with the Codex CLI

    Field names and nesting must stay compatible with the Codex CLI.
    Keys this model does not know about are ignored on read.
    """

    openai_api_key: Optional[str] = None
    tokens: Optional[TokenData] = None
    last_refresh: Optional[datetime.datetime] = None

    @field_validator("last_refresh", mode="before")
    @classmethod
    def _trim_fraction(cls, value: Any) -> Any:
        if isinstance(value, str):
            return _EXCESS_FRACTION.sub(r"\1", value)
        return value

    def has_credentials(self) -> bool:
        return self.openai_api_key is not None or self.tokens is not None

    def to_json(self) -> str:
        """Serialize as indented JSON, omitting absent keys"""
        return self.model_dump_json(indent=2, exclude_none=True)

    @classmethod
    def from_json(cls, content: str) -> "CredentialDocument":
        """Parse auth.json content

        Raises:
            CredentialFormatError: If the content is not a valid document
        """
        try:
            return cls.model_validate_json(content)
        except ValueError as e:
            raise CredentialFormatError(f"Failed to parse auth.json: {e}") from e


def to_document(account: StoredAccount) -> CredentialDocument:
    """Build the auth.json document for an account"""
    auth = account.auth_data
    if isinstance(auth, ApiKeyAuth):
        return CredentialDocument(openai_api_key=auth.key)
    if isinstance(auth, ChatGPTAuth):
        return CredentialDocument(
            tokens=TokenData(
                id_token=auth.id_token,
                access_token=auth.access_token,
                refresh_token=auth.refresh_token,
                account_id=auth.account_id,
            ),
            last_refresh=utcnow(),
        )
    raise TypeError(f"Unsupported auth data: {type(auth).__name__}")


def from_document(document: CredentialDocument) -> Union[ApiKeyAuth, ChatGPTAuth]:
    """Recover the auth variant carried by an auth.json document

    An API key wins when a document carries both credential kinds.

    Raises:
        CredentialFormatError: If the document carries neither
    """
    if document.openai_api_key is not None:
        return ApiKeyAuth(key=document.openai_api_key)
    if document.tokens is not None:
        tokens = document.tokens
        return ChatGPTAuth(
            id_token=tokens.id_token,
            access_token=tokens.access_token,
            refresh_token=tokens.refresh_token,
            account_id=tokens.account_id,
        )
    raise CredentialFormatError("auth.json contains neither API key nor tokens")
