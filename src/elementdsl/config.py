"""Settings for payload rendering.

YAML-based configuration with built-in defaults. Loads from
``elementdsl.yaml`` if present; environment variables override the file.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from elementdsl.schema import DRAFT_04

_DEFAULTS: dict[str, Any] = {
    "examples": True,
    "schemas": True,
    "verbose": False,
    "benchmark": False,
    "indent": 2,
    "schema_dialect": DRAFT_04,
}

# Presence of the variable is what counts, not its value
_ENV_FLAGS = {
    "DRAFTER_EXAMPLES": ("examples", False),
    "BENCHMARK": ("benchmark", True),
    "ELEMENTDSL_VERBOSE": ("verbose", True),
}


@dataclass(frozen=True)
class Settings:
    """Options controlling how payload bodies and schemas are rendered.

    Attributes:
        examples: Generate example bodies. Disabled when a parser already
            supplies its own examples (``DRAFTER_EXAMPLES``).
        schemas: Generate JSON Schema documents
        verbose: Dump the offending element when a payload fails to render
        benchmark: Log how long payload rendering takes
        indent: JSON indentation of rendered bodies and schemas
        schema_dialect: Value written to the top-level ``$schema`` field

    """

    examples: bool = True
    schemas: bool = True
    verbose: bool = False
    benchmark: bool = False
    indent: int = 2
    schema_dialect: str = DRAFT_04


def load_config(
    path: str | Path = "elementdsl.yaml",
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Load settings from a YAML file, merging with defaults.

    Args:
        path: Path to YAML config file. If relative, resolved from CWD.
        environ: Environment to read overrides from (defaults to os.environ)

    Returns:
        Settings with every option populated

    Raises:
        ValueError: If the file names an unknown option

    """
    config = dict(_DEFAULTS)
    config_path = Path(path)
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            user = yaml.safe_load(f) or {}
        unknown = sorted(set(user) - set(_DEFAULTS))
        if unknown:
            msg = f"Unknown settings in {config_path}: {unknown}"
            raise ValueError(msg)
        config.update(user)

    env = os.environ if environ is None else environ
    for name, (option, value) in _ENV_FLAGS.items():
        if env.get(name):
            config[option] = value
    return Settings(**config)
