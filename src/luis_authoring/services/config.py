from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping
import os, yaml

DEFAULT_CONFIG_NAME = "luis.yaml"
DEFAULT_PUBLISH_REGION = "northeurope"
DEFAULT_TRAINING_TIMEOUT = 600.0
DEFAULT_REQUEST_TIMEOUT = 30.0

# config key -> environment override
_ENV_OVERRIDES = {
    "AuthoringUrl": "LUIS_AUTHORING_URL",
    "AuthoringKey": "LUIS_AUTHORING_KEY",
    "EndpointKey": "LUIS_ENDPOINT_KEY",
    "PublishRegion": "LUIS_PUBLISH_REGION",
    "TrainingTimeout": "LUIS_TRAINING_TIMEOUT",
}


class LuisConfigError(RuntimeError):
    pass


@dataclass
class LuisConfig:
    authoring_url: str
    authoring_key: str
    endpoint_key: str | None = None
    publish_region: str = DEFAULT_PUBLISH_REGION
    training_timeout: float | None = DEFAULT_TRAINING_TIMEOUT
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT


def _config_path(path: str | Path | None = None) -> Path:
    if path:
        return Path(path).expanduser()
    env = os.environ.get("LUIS_CONFIG")
    if env:
        return Path(env).expanduser()
    return Path.cwd() / DEFAULT_CONFIG_NAME


_MISSING = object()


def _lookup(data: Mapping[str, Any], key: str) -> Any:
    """Value for ``key``, ``""`` when present but empty, ``_MISSING`` when absent."""
    env_name = _ENV_OVERRIDES.get(key)
    if env_name and env_name in os.environ:
        return os.environ[env_name]
    for name in (key, f"Luis{key}"):  # older config files prefix every key with "Luis"
        if name in data:
            value = data[name]
            return "" if value is None else value
    return _MISSING


def _text(value: Any) -> str | None:
    if value is _MISSING:
        return None
    text = str(value).strip()
    return text or None


def _seconds(key: str, value: Any, default: float | None) -> float | None:
    if value is _MISSING:
        return default
    if isinstance(value, str) and not value.strip():
        return None
    try:
        seconds = float(value)
    except (TypeError, ValueError) as exc:
        raise LuisConfigError(f"{key} must be a number of seconds, got {value!r}") from exc
    return seconds if seconds > 0 else None


def config_from_mapping(data: Mapping[str, Any]) -> LuisConfig:
    authoring_url = _text(_lookup(data, "AuthoringUrl"))
    authoring_key = _text(_lookup(data, "AuthoringKey"))
    missing = [name for name, value in (("AuthoringUrl", authoring_url), ("AuthoringKey", authoring_key)) if not value]
    if missing:
        raise LuisConfigError(f"missing required configuration: {', '.join(missing)}")
    request_timeout = _seconds("RequestTimeout", _lookup(data, "RequestTimeout"), DEFAULT_REQUEST_TIMEOUT)
    return LuisConfig(
        authoring_url=authoring_url,  # type: ignore[arg-type]
        authoring_key=authoring_key,  # type: ignore[arg-type]
        endpoint_key=_text(_lookup(data, "EndpointKey")),
        publish_region=_text(_lookup(data, "PublishRegion")) or DEFAULT_PUBLISH_REGION,
        training_timeout=_seconds("TrainingTimeout", _lookup(data, "TrainingTimeout"), DEFAULT_TRAINING_TIMEOUT),
        request_timeout=request_timeout or DEFAULT_REQUEST_TIMEOUT,
    )


def load_config(path: str | Path | None = None) -> LuisConfig:
    """
    Load configuration from YAML, then apply ``LUIS_*`` environment overrides.

    A missing file is not an error as long as the environment supplies the
    required keys. An explicitly given ``path`` must exist.
    """
    cfg_path = _config_path(path)
    data: Any = {}
    if cfg_path.exists():
        data = yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}
    elif path:
        raise LuisConfigError(f"config file not found: {cfg_path}")
    if not isinstance(data, Mapping):
        raise LuisConfigError(f"{cfg_path} must contain a mapping of configuration keys")
    return config_from_mapping(data)
