"""Typed configuration schema and loader for the regen package."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from functools import reduce
from importlib import resources as importlib_resources
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, SecretStr, conint

FlagName = Literal["IGNORECASE", "MULTILINE", "DOTALL", "VERBOSE", "ASCII"]

# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------


class GenerationSettings(BaseModel):
    """Settings shaping the generated strings."""

    unbound_max: conint(ge=0) = 32
    flags: list[FlagName] = []

    model_config = ConfigDict(extra="forbid")

    @property
    def re_flags(self) -> int:
        """Return ``flags`` combined into an ``re`` flag value."""

        return int(reduce(lambda acc, name: acc | getattr(re, name), self.flags, 0))


class RandomSettings(BaseModel):
    """Random source selection."""

    source: Literal["pseudo", "secure", "seeded"]
    seed_env: str
    seed: SecretStr | None = None

    model_config = ConfigDict(extra="forbid")


class OutputSettings(BaseModel):
    """Command line output behaviour."""

    count: conint(ge=1) = 1
    separator: str = "\n"
    strict: bool = False

    model_config = ConfigDict(extra="forbid")


class ConfigModel(BaseModel):
    """Top-level configuration model."""

    schema_version: conint(ge=1)
    generation: GenerationSettings
    random: RandomSettings
    output: OutputSettings

    model_config = ConfigDict(extra="forbid")


# ---------------------------------------------------------------------------
# Loader utilities
# ---------------------------------------------------------------------------


def deep_merge_dicts(a: dict[str, Any], b: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge mapping ``b`` onto ``a`` returning a new dict."""

    result: dict[str, Any] = dict(a)
    for key, b_val in b.items():
        if key in result and isinstance(result[key], dict) and isinstance(b_val, dict):
            result[key] = deep_merge_dicts(result[key], b_val)
        else:
            result[key] = b_val
    return result


def load_config(
    path: str | os.PathLike[str] | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> ConfigModel:
    """Load configuration from defaults and optional user overrides.

    Precedence of sources: package ``defaults.yml`` < user-provided YAML <
    environment variable named by ``random.seed_env``.
    """

    with (
        importlib_resources.files("regen.config")
        .joinpath("defaults.yml")
        .open("r", encoding="utf-8") as f
    ):
        defaults = yaml.safe_load(f) or {}

    if path is not None:
        with Path(path).open("r", encoding="utf-8") as f:
            overrides = yaml.safe_load(f) or {}
        merged = deep_merge_dicts(defaults, overrides)
    else:
        merged = defaults

    cfg = ConfigModel.model_validate(merged)

    environ = env if env is not None else os.environ
    seed_env = cfg.random.seed_env
    if seed_env in environ:
        cfg.random.seed = SecretStr(environ[seed_env])

    return cfg


__all__ = [
    "ConfigModel",
    "GenerationSettings",
    "RandomSettings",
    "OutputSettings",
    "deep_merge_dicts",
    "load_config",
]
