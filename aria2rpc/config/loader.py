"""Configuration loading utilities."""

import json
from pathlib import Path
from typing import Any

from aria2rpc.config.schema import Aria2Config, ClientConfig


def get_config_path() -> Path:
    """Get the default configuration file path."""
    return get_data_dir() / "config.json"


def get_data_dir() -> Path:
    """Get the aria2rpc data directory (config and logs live under it)."""
    return Path.home() / ".aria2rpc"


def load_config(
    config_path: Path | None = None,
    *,
    schema: type[ClientConfig] = Aria2Config,
    **overrides: Any,
) -> ClientConfig:
    """
    Load configuration from file, then apply explicit overrides.

    Args:
        config_path: Optional path to config file. Uses default if not provided.
        schema: Config class whose defaults fill unset fields.
        **overrides: Field values that win over the file; ``None`` values are ignored.

    Returns:
        Frozen configuration object.
    """
    path = config_path or get_config_path()
    data: dict[str, Any] = {}

    if path.exists():
        try:
            with open(path) as f:
                raw = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(
                f"Failed to load config from {path}: {e}. "
                "Fix the file or remove it to use defaults."
            ) from e
        if not isinstance(raw, dict):
            raise ValueError(f"Config file must be a JSON object: {path}")
        data = convert_keys(raw)

    allowed = set(schema.model_fields)
    data = {k: v for k, v in data.items() if k in allowed}
    data.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return schema(**data)
    except ValueError as e:
        raise ValueError(f"Invalid config from {path}: {e}") from e


def save_config(config: ClientConfig, config_path: Path | None = None) -> None:
    """
    Save configuration to file.

    Args:
        config: Configuration to save.
        config_path: Optional path to save to. Uses default if not provided.
    """
    path = config_path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    data = convert_to_camel(config.model_dump())

    with open(path, "w") as f:
        json.dump(data, f, indent=2)


def convert_keys(data: Any) -> Any:
    """Convert camelCase keys to snake_case for Pydantic."""
    if isinstance(data, dict):
        return {camel_to_snake(k): convert_keys(v) for k, v in data.items()}
    if isinstance(data, list):
        return [convert_keys(item) for item in data]
    return data


def convert_to_camel(data: Any) -> Any:
    """Convert snake_case keys to camelCase."""
    if isinstance(data, dict):
        return {snake_to_camel(k): convert_to_camel(v) for k, v in data.items()}
    if isinstance(data, list):
        return [convert_to_camel(item) for item in data]
    return data


def camel_to_snake(name: str) -> str:
    """Convert camelCase to snake_case."""
    result = []
    for i, char in enumerate(name):
        if char.isupper() and i > 0:
            result.append("_")
        result.append(char.lower())
    return "".join(result)


def snake_to_camel(name: str) -> str:
    """Convert snake_case to camelCase."""
    components = name.split("_")
    return components[0] + "".join(x.title() for x in components[1:])
