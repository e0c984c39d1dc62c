"""Write the rendered client into the output directory.

ts mode: api.ts (+ client.ts when missing)
js mode: api.js + api.d.ts (+ client.js + client.d.ts when client.js is
         missing); the .ts inputs are removed afterwards.

An existing client file is never overwritten, so local edits to it survive
regeneration.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from .codegen import client_source
from .compiler import Compiler, TscCompiler
from .config import GeneratorConfig

logger = logging.getLogger(__name__)

API_STEM = "api"
CLIENT_STEM = "client"


@dataclass
class EmitResult:
    written: list[Path] = field(default_factory=list)
    removed: list[Path] = field(default_factory=list)
    client_written: bool = False


def _write(path: Path, content: str, result: EmitResult) -> None:
    path.write_text(content, encoding="utf-8")
    logger.debug("Wrote %s", path)
    if path not in result.written:
        result.written.append(path)


def _remove(path: Path, result: EmitResult) -> None:
    path.unlink()
    logger.debug("Removed %s", path)
    if path in result.written:
        result.written.remove(path)
    result.removed.append(path)


def emit(
    source: str,
    config: GeneratorConfig,
    compiler: Compiler | None = None,
) -> EmitResult:
    """Write api/client files for config.output_language."""
    output_dir = config.output_dir
    output_dir.mkdir(parents=True, exist_ok=True)
    result = EmitResult()

    api_ts = output_dir / f"{API_STEM}.ts"
    client_ts = output_dir / f"{CLIENT_STEM}.ts"
    existing_client = output_dir / f"{CLIENT_STEM}.{config.output_language}"

    _write(api_ts, source, result)

    client_text = None
    if existing_client.exists():
        logger.debug("Keeping existing %s", existing_client)
    else:
        client_text = client_source()
        _write(client_ts, client_text, result)
        result.client_written = True

    if not config.compiled:
        return result

    compiler = compiler or TscCompiler(config.tsc_command)

    _write(output_dir / f"{API_STEM}.js", compiler.transpile(source, api_ts.name), result)
    if client_text is not None:
        _write(output_dir / f"{CLIENT_STEM}.js", compiler.transpile(client_text, client_ts.name), result)

    # Declarations come from the original TypeScript, not the lowered output.
    sources = [api_ts] if client_text is None else [api_ts, client_ts]
    for path, content in compiler.declarations(sources).items():
        _write(path, content, result)

    for path in sources:
        _remove(path, result)

    return result
