from __future__ import annotations

import json
import tomllib
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Mapping, TypeVar

from .guards import MAX_INPUT_BYTES

CONFIG_FILE = Path("config.toml")

S = TypeVar("S")


@dataclass(slots=True)
class LimitConfig:
    max_input_bytes: int = MAX_INPUT_BYTES


@dataclass(slots=True)
class RuntimeConfig:
    log_file: Path = Path("logs/conversions.jsonl")
    log_svg_content: bool = False
    debug: bool = False
    enable_local_api: bool = False
    parallelism: int = 1


@dataclass(slots=True)
class APIConfig:
    host: str = "127.0.0.1"
    port: int = 8000


@dataclass(slots=True)
class AppConfig:
    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)
    limits: LimitConfig = field(default_factory=LimitConfig)
    api: APIConfig = field(default_factory=APIConfig)

    @property
    def max_input_bytes(self) -> int:
        # Configuration may lower the ceiling but never raise it.
        return max(1, min(self.limits.max_input_bytes, MAX_INPUT_BYTES))


def _coerce(value: object, default: object) -> object:
    # bool before int: bool is an int subclass.
    if isinstance(default, bool):
        return bool(value)
    if isinstance(default, int):
        return int(value)  # type: ignore[arg-type]
    if isinstance(default, Path):
        return Path(str(value))
    return str(value)


def _build_section(section: type[S], data: object) -> S:
    """Instantiate *section* from a TOML table, ignoring unknown keys."""
    instance = section()
    if not isinstance(data, Mapping):
        return instance
    for item in fields(section):  # type: ignore[arg-type]
        if item.name in data:
            default = getattr(instance, item.name)
            setattr(instance, item.name, _coerce(data[item.name], default))
    return instance


def _read_toml(path: Path) -> Mapping[str, Any]:
    if not path.exists():
        return {}
    with path.open("rb") as handle:
        return tomllib.load(handle)


def load_config(path: Path | None = None) -> AppConfig:
    """Load ``config.toml``; a missing file yields the defaults."""
    raw = _read_toml(path or CONFIG_FILE)
    return AppConfig(
        runtime=_build_section(RuntimeConfig, raw.get("runtime")),
        limits=_build_section(LimitConfig, raw.get("limits")),
        api=_build_section(APIConfig, raw.get("api")),
    )


def dump_config(config: AppConfig) -> str:
    payload = asdict(config)
    payload["limits"]["max_input_bytes"] = config.max_input_bytes
    return json.dumps(payload, indent=2, default=str)


__all__ = [
    "APIConfig",
    "AppConfig",
    "LimitConfig",
    "RuntimeConfig",
    "dump_config",
    "load_config",
]
