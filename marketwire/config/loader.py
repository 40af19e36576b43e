"""Configuration loader."""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError

from ..models import SourceSpec
from .models import ConfigModel


DEFAULT_CONFIG_DIR = Path.home() / ".config" / "marketwire"


def _with_env_secret(section: Dict[str, Any], env_key: str, target_key: str) -> Dict[str, Any]:
    """Fill ``target_key`` from the variable named by ``env_key`` when it is set."""
    variable = section.get(env_key)
    if variable and os.environ.get(variable):
        section[target_key] = os.environ[variable]
    return section


class Config:
    """Configuration manager.

    The config file location is ``MARKETWIRE_CONFIG`` when set, else
    ``~/.config/marketwire/config.yaml``. Secrets never live in the file;
    sections name the environment variables that hold them.
    """

    def __init__(self, config_path: Optional[Path] = None) -> None:
        if config_path is None:
            config_path = Path(os.environ.get("MARKETWIRE_CONFIG", DEFAULT_CONFIG_DIR / "config.yaml"))
        self.config_path = config_path
        self._config: Optional[ConfigModel] = None

    @classmethod
    def from_model(cls, model: ConfigModel, config_path: Optional[Path] = None) -> "Config":
        """Wrap an already built config model."""
        config = cls(config_path)
        config._config = model
        return config

    @property
    def config(self) -> ConfigModel:
        """Loaded config, or defaults when no file exists."""
        if self._config is None:
            self._config = load_config(self.config_path) if self.config_path.exists() else ConfigModel()
        return self._config

    @property
    def sources_path(self) -> Path:
        """Default location of the sources seed file."""
        return self.config_path.parent / "sources.yaml"

    def get_db_config(self) -> Dict[str, Any]:
        return _with_env_secret(self.config.postgres.model_dump(), "password_env", "password")

    def get_llm_config(self) -> Dict[str, Any]:
        return _with_env_secret(self.config.llm.model_dump(), "api_key_env", "api_key")

    def get_cron_secret(self) -> Optional[str]:
        """Expected secret for the scheduled trigger, or None when unset."""
        return os.environ.get(self.config.server.cron_secret_env) or None


def _read_yaml(path: Path, kind: str) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"{kind.capitalize()} file not found: {path}")
    with open(path) as f:
        try:
            return yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {kind} file: {e}")


def _write_yaml(data: Dict[str, Any], path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)


def load_config(config_path: Path) -> ConfigModel:
    """Load configuration from YAML file."""
    data = _read_yaml(config_path, "config")
    try:
        return ConfigModel(**data)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}")


def load_sources(sources_path: Path) -> List[SourceSpec]:
    """Load source declarations from the ``sources`` list of a YAML file."""
    declared = _read_yaml(sources_path, "sources").get("sources") or []
    try:
        return [SourceSpec(**entry) for entry in declared]
    except ValidationError as e:
        raise ValueError(f"Invalid source declaration: {e}")


def save_config(config: ConfigModel, config_path: Path) -> None:
    """Save configuration to YAML file."""
    _write_yaml(config.model_dump(), config_path)


def save_sources(sources: List[SourceSpec], sources_path: Path) -> None:
    """Save source declarations to a YAML file."""
    _write_yaml({"sources": [s.model_dump(mode="json") for s in sources]}, sources_path)
