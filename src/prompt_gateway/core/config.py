"""
Configuration loading for the prompt gateway.

Configuration covers transport settings only. Credentials and user
preferences are supplied by the caller on every request.
"""

import os
import logging
from typing import Dict, Any, Optional
from dataclasses import dataclass, field
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "PROMPT_GATEWAY_CONFIG"
DEFAULT_TIMEOUT = 60.0
DEFAULT_MAX_TOKENS = 1024
OLLAMA_HOST_ENV_VAR = "OLLAMA_HOST"


@dataclass
class BackendConfig:
    """Per-backend overrides."""
    base_url: Optional[str] = None
    timeout: Optional[float] = None
    validation_model: Optional[str] = None


@dataclass
class GatewayConfig:
    """Complete gateway configuration."""
    timeout: float = DEFAULT_TIMEOUT
    max_tokens: int = DEFAULT_MAX_TOKENS
    backends: Dict[str, BackendConfig] = field(default_factory=dict)

    def for_backend(self, backend: str) -> BackendConfig:
        """Get overrides for a backend, empty if none configured."""
        return self.backends.get(backend, BackendConfig())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GatewayConfig":
        """Build configuration from a parsed mapping."""
        return _parse_config(data)


def load_config(config_path: Optional[str] = None) -> GatewayConfig:
    """
    Load gateway configuration from YAML file.

    The local daemon URL falls back to ${OLLAMA_HOST} when the file sets
    none.

    Args:
        config_path: Path to config file. If None, searches default locations.

    Returns:
        Loaded configuration
    """
    config = _read_config(config_path)
    _apply_ollama_host(config)
    return config


def _read_config(config_path: Optional[str]) -> GatewayConfig:
    if config_path is None:
        paths = [
            Path("config/prompt-gateway.yaml"),
            Path.home() / ".config/prompt-gateway/gateway.yaml",
        ]
        if os.environ.get(CONFIG_ENV_VAR):
            paths.insert(0, Path(os.environ[CONFIG_ENV_VAR]))
        for p in paths:
            if p.exists():
                config_path = str(p)
                break

    if config_path is None or not Path(config_path).exists():
        logger.debug("No gateway config file found, using defaults")
        return GatewayConfig()

    try:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}

        return _parse_config(data)

    except (OSError, yaml.YAMLError, TypeError, ValueError, AttributeError) as e:
        logger.error(f"Failed to load config from {config_path}: {e}")
        return GatewayConfig()


def _apply_ollama_host(config: GatewayConfig) -> None:
    host = os.environ.get(OLLAMA_HOST_ENV_VAR)
    if not host:
        return

    ollama = config.backends.setdefault("ollama", BackendConfig())
    if ollama.base_url:
        return
    if "://" not in host:
        host = f"http://{host}"
    ollama.base_url = host
    logger.debug(f"Ollama base URL from {OLLAMA_HOST_ENV_VAR}: {host}")


def _expand_env(value: Any) -> Any:
    """Expand a ``${VAR}`` placeholder from the environment."""
    if isinstance(value, str) and value.startswith("${") and value.endswith("}"):
        return os.environ.get(value[2:-1]) or None
    return value


def _parse_config(data: Dict[str, Any]) -> GatewayConfig:
    """Parse configuration dictionary."""
    backends = {}

    for name, bk_data in (data.get("backends") or {}).items():
        bk_data = bk_data or {}
        timeout = _expand_env(bk_data.get("timeout"))
        backends[name] = BackendConfig(
            base_url=_expand_env(bk_data.get("base_url")),
            timeout=float(timeout) if timeout is not None else None,
            validation_model=_expand_env(bk_data.get("validation_model")),
        )

    return GatewayConfig(
        timeout=float(data.get("timeout", DEFAULT_TIMEOUT)),
        max_tokens=int(data.get("max_tokens", DEFAULT_MAX_TOKENS)),
        backends=backends,
    )
