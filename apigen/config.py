"""Generator settings read from the environment.

API_URL     OpenAPI document URL (or local JSON path), required
API_LANG    "ts" (TypeScript source) or "js" (JavaScript + .d.ts), default "ts"
API_OUTPUT  output directory, required
API_TSC     command used to run the TypeScript compiler in "js" mode
"""

from __future__ import annotations

import os
import shlex
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from .errors import ConfigError

LANGUAGES = ("ts", "js")
DEFAULT_TSC_COMMAND = "npx --no-install tsc"


@dataclass(frozen=True)
class GeneratorConfig:
    source_url: str
    output_dir: Path
    output_language: str = "ts"
    tsc_command: list[str] = field(default_factory=lambda: shlex.split(DEFAULT_TSC_COMMAND))

    @property
    def compiled(self) -> bool:
        return self.output_language == "js"


def load_config(environ: Mapping[str, str] | None = None) -> GeneratorConfig:
    """Read settings from the environment; raise ConfigError on bad values."""
    env = os.environ if environ is None else environ

    source_url = env.get("API_URL", "").strip()
    if not source_url:
        raise ConfigError("API_URL is not set")

    output_dir = env.get("API_OUTPUT", "").strip()
    if not output_dir:
        raise ConfigError("API_OUTPUT is not set")

    language = env.get("API_LANG", "").strip() or "ts"
    if language not in LANGUAGES:
        raise ConfigError(f"API_LANG must be one of {', '.join(LANGUAGES)}, got {language!r}")

    tsc_command = shlex.split(env.get("API_TSC", "").strip() or DEFAULT_TSC_COMMAND)

    return GeneratorConfig(
        source_url=source_url,
        output_dir=Path(output_dir),
        output_language=language,
        tsc_command=tsc_command,
    )
