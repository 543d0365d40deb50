import base64
import json

import pytest

from codex_auth import AccountStore, AuthSwitcher, StoredAccount


def encode_jwt(payload) -> str:
    """Build an unsigned three-part token around ``payload``"""
    def segment(data: bytes) -> str:
        return base64.urlsafe_b64encode(data).rstrip(b"=").decode()

    header = segment(json.dumps({"alg": "none", "typ": "JWT"}).encode())
    body = segment(json.dumps(payload).encode())
    return f"{header}.{body}.signature"


@pytest.fixture
def make_jwt():
    return encode_jwt


@pytest.fixture
def codex_home(tmp_path):
    return tmp_path / "codex-home"


@pytest.fixture
def switcher(codex_home):
    return AuthSwitcher(codex_home)


@pytest.fixture
def store(tmp_path):
    return AccountStore(tmp_path / "switcher" / "accounts.json")


@pytest.fixture
def api_key_account():
    return StoredAccount.new_api_key("personal key", "sk-test-123")


@pytest.fixture
def chatgpt_account():
    id_token = encode_jwt({
        "email": "dev@example.com",
        "https://api.openai.com/auth": {"chatgpt_plan_type": "plus"},
    })
    return StoredAccount.new_chatgpt(
        "work",
        "dev@example.com",
        "plus",
        id_token=id_token,
        access_token="access-work",
        refresh_token="refresh-work",
        account_id="acct-work",
    )
