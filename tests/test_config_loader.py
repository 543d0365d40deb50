from config.loader import ConfigLoader


def make_loader(tmp_path):
    return ConfigLoader(env_path=str(tmp_path / "missing.env"))


def test_defaults_when_unset(monkeypatch, tmp_path):
    monkeypatch.delenv("USAGE_MAX_CONCURRENCY", raising=False)
    assert make_loader(tmp_path).get("USAGE_MAX_CONCURRENCY", 0) == 0


def test_typed_environment_values(monkeypatch, tmp_path):
    monkeypatch.setenv("USAGE_MAX_CONCURRENCY", "4")
    monkeypatch.setenv("REQUEST_TIMEOUT", "2.5")
    monkeypatch.setenv("SOME_FLAG", "yes")
    loader = make_loader(tmp_path)

    assert loader.get("USAGE_MAX_CONCURRENCY", 0) == 4
    assert loader.get("REQUEST_TIMEOUT", 30.0) == 2.5
    assert loader.get("SOME_FLAG", False) is True


def test_unparseable_number_falls_back(monkeypatch, tmp_path):
    monkeypatch.setenv("REQUEST_TIMEOUT", "soon")
    assert make_loader(tmp_path).get("REQUEST_TIMEOUT", 30.0) == 30.0


def test_home_expansion(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("ACCOUNTS_FILE", "~/accounts.json")
    assert make_loader(tmp_path).get("ACCOUNTS_FILE", "") == str(tmp_path / "accounts.json")


def test_env_file_is_loaded(monkeypatch, tmp_path):
    # setenv first so teardown removes what load_dotenv adds
    monkeypatch.setenv("LOG_LEVEL", "unset")
    monkeypatch.delenv("LOG_LEVEL")
    env_file = tmp_path / ".env"
    env_file.write_text("LOG_LEVEL=debug\n")

    loader = ConfigLoader(env_path=str(env_file))

    assert loader.get("LOG_LEVEL", "warning") == "debug"


def test_environment_wins_over_env_file(monkeypatch, tmp_path):
    monkeypatch.setenv("CODEX_HOME", "/from/environment")
    env_file = tmp_path / ".env"
    env_file.write_text("CODEX_HOME=/from/dotenv\n")

    loader = ConfigLoader(env_path=str(env_file))

    assert loader.get("CODEX_HOME", "") == "/from/environment"
