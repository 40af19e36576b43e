import pytest

from marketwire.config import Config, ConfigModel, load_config, load_sources, save_config, save_sources
from marketwire.db.connection import build_conninfo
from marketwire.models import SourceKind, SourceSpec


def test_load_config(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "llm:\n"
        "  provider: mock\n"
        "server:\n"
        "  port: 9000\n"
        "  cron_secret_env: INGEST_SECRET\n"
    )

    config = load_config(path)

    assert config.llm.provider == "mock"
    assert config.server.port == 9000
    assert config.postgres.host == "localhost"


def test_empty_config_file_uses_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("")
    assert load_config(path) == ConfigModel()


def test_invalid_config_raises_value_error(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("server:\n  port: not-a-port\n")
    with pytest.raises(ValueError):
        load_config(path)


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "absent.yaml")
    assert Config(tmp_path / "absent.yaml").config == ConfigModel()


def test_config_path_from_environment(tmp_path, monkeypatch):
    path = tmp_path / "custom.yaml"
    save_config(ConfigModel(llm={"provider": "mock", "model": "tiny"}), path)
    monkeypatch.setenv("MARKETWIRE_CONFIG", str(path))

    config = Config()

    assert config.config_path == path
    assert config.get_llm_config()["model"] == "tiny"
    assert config.sources_path == tmp_path / "sources.yaml"


def test_secrets_come_from_environment(monkeypatch):
    config = Config.from_model(ConfigModel(llm={"api_key_env": "LLM_KEY"}))
    monkeypatch.setenv("LLM_KEY", "sk-test")
    monkeypatch.delenv("CRON_SECRET", raising=False)

    assert config.get_llm_config()["api_key"] == "sk-test"
    assert config.get_cron_secret() is None

    monkeypatch.setenv("CRON_SECRET", "abc")
    assert config.get_cron_secret() == "abc"


def test_sources_file_round_trip(tmp_path):
    path = tmp_path / "sources.yaml"
    specs = [
        SourceSpec(name="Polygon", url="https://api.polygon.io/v2/reference/news", api_key_env="POLYGON_API_KEY"),
        SourceSpec(name="Alpaca", url="wss://stream.data.alpaca.markets/v1beta1/news", kind=SourceKind.PUSH),
    ]

    save_sources(specs, path)

    assert load_sources(path) == specs


def test_sources_file_accepts_camel_case(tmp_path):
    path = tmp_path / "sources.yaml"
    path.write_text(
        "sources:\n"
        "  - name: Wire\n"
        "    url: https://wire.example.com\n"
        "    isActive: false\n"
        "    excludeKeywords: [offering]\n"
    )

    (spec,) = load_sources(path)

    assert spec.is_active is False
    assert spec.exclude_keywords == ["offering"]


def test_invalid_sources_file(tmp_path):
    path = tmp_path / "sources.yaml"
    path.write_text("sources:\n  - url: https://no-name.example.com\n")
    with pytest.raises(ValueError):
        load_sources(path)


def test_db_config_resolves_password_from_environment(monkeypatch):
    monkeypatch.setenv("MW_DB_PASSWORD", "hunter2")
    config = Config.from_model(ConfigModel(postgres={"host": "db", "port": 5433, "password_env": "MW_DB_PASSWORD"}))

    db_config = config.get_db_config()
    conninfo = build_conninfo(db_config)

    assert db_config["password"] == "hunter2"
    assert "host=db" in conninfo
    assert "port=5433" in conninfo
    assert "dbname=marketwire" in conninfo
