"""Directory-level operational config loader."""

from __future__ import annotations

import logging
import os
import shlex
import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import cast

logger = logging.getLogger(__name__)

CONFIG_RELATIVE_PATH = Path(".dotstyle") / "config.toml"


@dataclass(frozen=True, slots=True)
class DotstyleConfig:
    """Resolved operational configuration for dotstyle."""

    dotnet_command: str = "dotnet"
    kill_grace_seconds: float = 2.0

    @property
    def dotnet_executable(self) -> tuple[str, ...]:
        """Executable token sequence used to launch the .NET CLI."""

        return tuple(shlex.split(self.dotnet_command))


_SECTION_KEY_MAP: dict[str, dict[str, str]] = {
    "tools": {
        "dotnet": "dotnet_command",
    },
    "timeouts": {
        "kill_grace_seconds": "kill_grace_seconds",
    },
}

_ENV_OVERRIDE_MAP: dict[str, str] = {
    "DOTSTYLE_DOTNET_COMMAND": "dotnet_command",
    "DOTSTYLE_KILL_GRACE_SECONDS": "kill_grace_seconds",
}

_FLOAT_FIELDS = frozenset({"kill_grace_seconds"})


def resolve_config_path(root: Path) -> Path:
    return root / CONFIG_RELATIVE_PATH


def _coerce_file_value(*, field_name: str, raw_value: object, source: str) -> object:
    if field_name in _FLOAT_FIELDS:
        if isinstance(raw_value, bool) or not isinstance(raw_value, int | float):
            raise ValueError(
                f"Invalid value for '{source}': expected float, got "
                f"{type(raw_value).__name__} ({raw_value!r})."
            )
        if raw_value <= 0:
            raise ValueError(f"Invalid value for '{source}': expected a positive number.")
        return float(raw_value)

    if not isinstance(raw_value, str):
        raise ValueError(
            f"Invalid value for '{source}': expected str, got "
            f"{type(raw_value).__name__} ({raw_value!r})."
        )
    normalized = raw_value.strip()
    if not normalized:
        raise ValueError(f"Invalid value for '{source}': expected non-empty string.")
    return normalized


def _coerce_env_value(*, field_name: str, raw_value: str, env_name: str) -> object:
    if field_name in _FLOAT_FIELDS:
        try:
            value = float(raw_value.strip())
        except ValueError as error:
            raise ValueError(
                f"Invalid environment override '{env_name}': expected float, got {raw_value!r}."
            ) from error
        if value <= 0:
            raise ValueError(
                f"Invalid environment override '{env_name}': expected a positive number."
            )
        return value

    normalized = raw_value.strip()
    if not normalized:
        raise ValueError(
            f"Invalid environment override '{env_name}': expected non-empty string."
        )
    return normalized


def _default_values() -> dict[str, object]:
    defaults = DotstyleConfig()
    return {field.name: getattr(defaults, field.name) for field in fields(DotstyleConfig)}


def _apply_toml_payload(
    *,
    values: dict[str, object],
    payload: dict[str, object],
    path: Path,
) -> None:
    for key, raw_value in payload.items():
        section_map = _SECTION_KEY_MAP.get(key)
        if section_map is None:
            logger.warning("Ignoring unknown dotstyle config key '%s'.", key)
            continue
        if not isinstance(raw_value, dict):
            raise ValueError(f"Invalid value for '{key}' in '{path}': expected table.")
        for section_key, section_value in cast("dict[str, object]", raw_value).items():
            field_name = section_map.get(section_key)
            if field_name is None:
                logger.warning(
                    "Ignoring unknown dotstyle config key '%s.%s'.",
                    key,
                    section_key,
                )
                continue
            values[field_name] = _coerce_file_value(
                field_name=field_name,
                raw_value=section_value,
                source=f"{key}.{section_key}",
            )


def _apply_env_overrides(values: dict[str, object]) -> None:
    for env_name, field_name in _ENV_OVERRIDE_MAP.items():
        raw_value = os.getenv(env_name)
        if raw_value is None:
            continue
        values[field_name] = _coerce_env_value(
            field_name=field_name,
            raw_value=raw_value,
            env_name=env_name,
        )


def load_config(root: Path) -> DotstyleConfig:
    """Load `<root>/.dotstyle/config.toml` and apply environment overrides."""

    values = _default_values()
    path = resolve_config_path(root)
    if path.is_file():
        payload_obj = tomllib.loads(path.read_text(encoding="utf-8"))
        _apply_toml_payload(values=values, payload=cast("dict[str, object]", payload_obj), path=path)

    _apply_env_overrides(values)
    config = DotstyleConfig(
        dotnet_command=cast("str", values["dotnet_command"]),
        kill_grace_seconds=cast("float", values["kill_grace_seconds"]),
    )
    if not config.dotnet_executable:
        raise ValueError("Invalid dotnet command: expected at least one token.")
    return config
