from pasty_cli import config


def test_load_config_defaults_when_missing(tmp_path, monkeypatch) -> None:
    monkeypatch.setattr(config, "user_config_dir", lambda _name: str(tmp_path))
    monkeypatch.delenv(config.ENV_HOST, raising=False)
    monkeypatch.delenv(config.ENV_PASSWORD, raising=False)

    cfg = config.load_config()

    assert cfg.host == config.DEFAULT_HOST
    assert cfg.port == config.DEFAULT_PORT
    assert cfg.use_tls is False
    assert cfg.auth.username == ""


def test_save_config_roundtrip_and_permissions(tmp_path, monkeypatch) -> None:
    monkeypatch.setattr(config, "user_config_dir", lambda _name: str(tmp_path))
    monkeypatch.delenv(config.ENV_HOST, raising=False)
    monkeypatch.delenv(config.ENV_PASSWORD, raising=False)
    cfg = config.AppConfig(
        host="pasty.example.com",
        port=8443,
        use_tls=True,
        auth=config.AuthConfig(username="alice", password="secret", token="tok"),
    )

    path = config.save_config(cfg)
    loaded = config.load_config()

    assert path.endswith("config.toml")
    assert (tmp_path / "config.toml").stat().st_mode & 0o777 == 0o600
    assert loaded == cfg


def test_from_toml_ignores_bad_values() -> None:
    cfg = config.from_toml({"host": "  ", "port": "http", "use_tls": "yes", "auth": "nope"})

    assert cfg.host == config.DEFAULT_HOST
    assert cfg.port == config.DEFAULT_PORT
    assert cfg.use_tls is False
    assert cfg.auth == config.AuthConfig()


def test_from_toml_rejects_out_of_range_port() -> None:
    assert config.from_toml({"port": 70000}).port == config.DEFAULT_PORT
    assert config.from_toml({"port": "8080"}).port == 8080


def _write_file_config(tmp_path) -> None:
    (tmp_path / "config.toml").write_text(
        '\n'.join(
            [
                'host = "file.test"',
                "port = 9000",
                "",
                "[auth]",
                'username = "alice"',
                'password = "from-file"',
                "",
            ]
        ),
        encoding="utf-8",
    )


def test_env_overrides_resolve_at_read_time(tmp_path, monkeypatch) -> None:
    monkeypatch.setattr(config, "user_config_dir", lambda _name: str(tmp_path))
    _write_file_config(tmp_path)
    monkeypatch.setenv(config.ENV_HOST, "env.test")
    monkeypatch.setenv(config.ENV_PASSWORD, "from-env")

    cfg = config.load_config()

    assert cfg.host == "file.test"
    assert cfg.auth.password == "from-file"
    assert config.resolve_host(cfg) == "env.test"
    assert config.resolve_password(cfg) == "from-env"


def test_env_overrides_are_not_written_back(tmp_path, monkeypatch) -> None:
    monkeypatch.setattr(config, "user_config_dir", lambda _name: str(tmp_path))
    _write_file_config(tmp_path)
    monkeypatch.setenv(config.ENV_HOST, "env.test")
    monkeypatch.setenv(config.ENV_PASSWORD, "env-secret")

    cfg = config.load_config()
    cfg.port = 5000
    config.save_config(cfg)
    contents = (tmp_path / "config.toml").read_text(encoding="utf-8")

    assert "env.test" not in contents
    assert "env-secret" not in contents
    assert 'host = "file.test"' in contents
    assert 'password = "from-file"' in contents
    assert "port = 5000" in contents


def test_resolve_without_env_uses_config(monkeypatch) -> None:
    monkeypatch.delenv(config.ENV_HOST, raising=False)
    monkeypatch.delenv(config.ENV_PASSWORD, raising=False)
    cfg = config.default_config()
    cfg.auth.password = "pw"

    assert config.resolve_host(cfg) == config.DEFAULT_HOST
    assert config.resolve_password(cfg) == "pw"
