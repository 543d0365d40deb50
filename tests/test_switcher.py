import datetime
import json
import os
import platform
import stat
from pathlib import Path

import pytest

from codex_auth import (
    AuthSwitcher,
    ChatGPTAuth,
    CredentialFormatError,
    CredentialHomeError,
    CredentialIOError,
    resolve_credential_home,
)


def write_json(path: Path, data) -> Path:
    path.write_text(json.dumps(data))
    return path


def test_resolve_prefers_environment_override(tmp_path):
    home = resolve_credential_home(environ={"CODEX_HOME": str(tmp_path / "custom")}, home=tmp_path)
    assert home == tmp_path / "custom"


def test_resolve_defaults_to_dot_codex(tmp_path):
    assert resolve_credential_home(environ={}, home=tmp_path) == tmp_path / ".codex"


def test_resolve_ignores_empty_override(tmp_path):
    assert resolve_credential_home(environ={"CODEX_HOME": ""}, home=tmp_path) == tmp_path / ".codex"


def test_resolve_fails_without_home(monkeypatch):
    def no_home():
        raise RuntimeError("Could not determine home directory.")

    monkeypatch.setattr(Path, "home", staticmethod(no_home))
    with pytest.raises(CredentialHomeError):
        resolve_credential_home(environ={})


def test_switcher_resolves_home_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("CODEX_HOME", str(tmp_path))
    assert AuthSwitcher().auth_file == tmp_path / "auth.json"


def test_switch_api_key_account(switcher, codex_home, api_key_account):
    switcher.switch_to_account(api_key_account)

    data = json.loads((codex_home / "auth.json").read_text())
    assert data["openai_api_key"] == "sk-test-123"
    assert "tokens" not in data
    assert "last_refresh" not in data


def test_switch_chatgpt_account(switcher, codex_home, chatgpt_account):
    switcher.switch_to_account(chatgpt_account)

    data = json.loads((codex_home / "auth.json").read_text())
    assert "openai_api_key" not in data
    assert data["tokens"]["access_token"] == "access-work"
    assert data["tokens"]["refresh_token"] == "refresh-work"
    assert data["tokens"]["account_id"] == "acct-work"

    document = switcher.read_active_document()
    age = datetime.datetime.now(datetime.timezone.utc) - document.last_refresh
    assert datetime.timedelta(0) <= age < datetime.timedelta(minutes=1)


def test_switch_writes_human_readable_json(switcher, codex_home, api_key_account):
    switcher.switch_to_account(api_key_account)
    assert (codex_home / "auth.json").read_text() == '{\n  "openai_api_key": "sk-test-123"\n}'


def test_switch_replaces_previous_content(switcher, codex_home, api_key_account, chatgpt_account):
    codex_home.mkdir(parents=True)
    write_json(codex_home / "auth.json", {"openai_api_key": "sk-old", "custom": True})

    switcher.switch_to_account(chatgpt_account)

    data = json.loads((codex_home / "auth.json").read_text())
    assert "openai_api_key" not in data
    assert "custom" not in data


def test_switch_leaves_no_temp_files(switcher, codex_home, api_key_account, chatgpt_account):
    switcher.switch_to_account(api_key_account)
    switcher.switch_to_account(chatgpt_account)
    assert [p.name for p in codex_home.iterdir()] == ["auth.json"]


@pytest.mark.skipif(platform.system() == "Windows", reason="POSIX permission bits")
def test_switch_restricts_permissions(switcher, codex_home, chatgpt_account):
    codex_home.mkdir(parents=True)
    auth_file = codex_home / "auth.json"
    auth_file.write_text("{}")
    os.chmod(auth_file, 0o644)

    switcher.switch_to_account(chatgpt_account)

    mode = stat.S_IMODE(auth_file.stat().st_mode)
    assert mode == 0o600
    assert mode & (stat.S_IRWXG | stat.S_IRWXO) == 0


def test_switch_reports_write_failures(tmp_path, api_key_account):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("")
    with pytest.raises(CredentialIOError) as excinfo:
        AuthSwitcher(blocker / "codex").switch_to_account(api_key_account)
    assert isinstance(excinfo.value.__cause__, OSError)


def test_import_api_key_document(switcher, tmp_path):
    path = write_json(tmp_path / "auth.json", {"openai_api_key": "sk-imported"})

    account = switcher.import_from_document(path, "imported")

    assert account.name == "imported"
    assert account.auth_mode == "api_key"
    assert account.auth_data.key == "sk-imported"
    assert account.email is None


def test_import_chatgpt_document_extracts_claims(switcher, tmp_path, make_jwt):
    id_token = make_jwt({
        "email": "u@x.com",
        "https://api.openai.com/auth": {"chatgpt_plan_type": "pro"},
    })
    path = write_json(tmp_path / "auth.json", {
        "tokens": {
            "id_token": id_token,
            "access_token": "a",
            "refresh_token": "r",
            "account_id": "acct-1",
        },
        "last_refresh": "2025-06-01T12:00:00Z",
    })

    account = switcher.import_from_document(path, "team")

    assert isinstance(account.auth_data, ChatGPTAuth)
    assert account.auth_data.account_id == "acct-1"
    assert account.email == "u@x.com"
    assert account.plan_type == "pro"


def test_import_survives_undecodable_id_token(switcher, tmp_path):
    path = write_json(tmp_path / "auth.json", {
        "tokens": {"id_token": "opaque", "access_token": "a", "refresh_token": "r"},
    })

    account = switcher.import_from_document(path, "opaque")

    assert account.auth_mode == "chatgpt"
    assert account.email is None
    assert account.plan_type is None


def test_import_rejects_document_without_credentials(switcher, tmp_path):
    path = write_json(tmp_path / "auth.json", {"last_refresh": "2025-06-01T12:00:00Z"})
    with pytest.raises(CredentialFormatError):
        switcher.import_from_document(path, "empty")


def test_import_document_with_both_is_api_key(switcher, tmp_path):
    path = write_json(tmp_path / "auth.json", {
        "openai_api_key": "sk-both",
        "tokens": {"id_token": "i", "access_token": "a", "refresh_token": "r"},
    })
    account = switcher.import_from_document(path, "both")
    assert account.auth_mode == "api_key"
    assert account.auth_data.key == "sk-both"


def test_import_rejects_malformed_json(switcher, tmp_path):
    path = tmp_path / "auth.json"
    path.write_text("{")
    with pytest.raises(CredentialFormatError):
        switcher.import_from_document(path, "broken")


def test_import_missing_file(switcher, tmp_path):
    with pytest.raises(CredentialIOError):
        switcher.import_from_document(tmp_path / "missing.json", "missing")


def test_read_active_document_missing(switcher):
    assert switcher.read_active_document() is None
    assert switcher.has_active_login() is False


def test_read_active_document_malformed(switcher, codex_home):
    codex_home.mkdir(parents=True)
    (codex_home / "auth.json").write_text("not json")
    with pytest.raises(CredentialFormatError):
        switcher.read_active_document()


def test_import_rejects_non_utf8_file(switcher, tmp_path):
    path = tmp_path / "auth.json"
    path.write_bytes(b'{"openai_api_key": "\xff\xfe"}')
    with pytest.raises(CredentialFormatError):
        switcher.import_from_document(path, "binary")


def test_read_active_document_non_utf8(switcher, codex_home):
    codex_home.mkdir(parents=True)
    (codex_home / "auth.json").write_bytes(b'{"openai_api_key": "\xff\xfe"}')
    with pytest.raises(CredentialFormatError):
        switcher.read_active_document()


def test_has_active_login_after_switch(switcher, api_key_account):
    switcher.switch_to_account(api_key_account)
    assert switcher.has_active_login() is True


def test_has_active_login_false_for_empty_document(switcher, codex_home):
    codex_home.mkdir(parents=True)
    write_json(codex_home / "auth.json", {"openai_api_key": None, "tokens": None})
    assert switcher.has_active_login() is False


def test_module_level_helpers_use_codex_home(monkeypatch, tmp_path, api_key_account):
    from codex_auth import has_active_login, import_from_document, read_active_document, switch_to_account

    monkeypatch.setenv("CODEX_HOME", str(tmp_path / "env-home"))
    assert has_active_login() is False

    switch_to_account(api_key_account)

    assert read_active_document().openai_api_key == "sk-test-123"
    assert has_active_login() is True
    assert import_from_document(tmp_path / "env-home" / "auth.json", "again").auth_mode == "api_key"
