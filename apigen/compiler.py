"""Lower TypeScript to JavaScript and extract .d.ts declarations.

Both passes read the original TypeScript; declaration extraction never
sees the lowered output. The default implementation shells out to tsc.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
import tempfile
from pathlib import Path
from typing import Protocol

from .config import DEFAULT_TSC_COMMAND
from .errors import CompileError

logger = logging.getLogger(__name__)

# tsc exit status 2: diagnostics were reported but outputs were still written.
_TSC_OK_STATUSES = (0, 2)

_LOWERING_FLAGS = ["--module", "esnext", "--target", "esnext", "--skipLibCheck"]


class Compiler(Protocol):
    def transpile(self, source: str, file_name: str) -> str:
        """Return the JavaScript for one TypeScript module."""
        ...

    def declarations(self, paths: list[Path]) -> dict[Path, str]:
        """Return {path of .d.ts next to each input: declaration text}."""
        ...


def declaration_path(path: Path) -> Path:
    return path.with_name(path.stem + ".d.ts")


class TscCompiler:
    """Compiler backed by the tsc command line."""

    def __init__(self, command: list[str] | None = None) -> None:
        self.command = command or shlex.split(DEFAULT_TSC_COMMAND)

    def _run(self, args: list[str]) -> None:
        cmd = [*self.command, *args]
        logger.debug("Running %s", shlex.join(cmd))
        try:
            proc = subprocess.run(cmd, capture_output=True, text=True, check=False)
        except FileNotFoundError as exc:
            raise CompileError(f"TypeScript compiler not found: {self.command[0]}") from exc

        output = (proc.stdout + proc.stderr).strip()
        if proc.returncode not in _TSC_OK_STATUSES:
            raise CompileError(f"tsc exited with status {proc.returncode}", output)
        if output:
            logger.debug("tsc diagnostics:\n%s", output)

    def transpile(self, source: str, file_name: str) -> str:
        with tempfile.TemporaryDirectory(prefix="apigen-") as tmp:
            tmp_dir = Path(tmp)
            src = tmp_dir / file_name
            src.write_text(source, encoding="utf-8")
            out_dir = tmp_dir / "out"

            self._run([str(src), "--outDir", str(out_dir), "--noResolve", *_LOWERING_FLAGS])

            out = out_dir / (src.stem + ".js")
            if not out.exists():
                raise CompileError(f"tsc produced no JavaScript for {file_name}")
            return out.read_text(encoding="utf-8")

    def declarations(self, paths: list[Path]) -> dict[Path, str]:
        if not paths:
            return {}
        root = Path(os.path.commonpath([str(p.resolve().parent) for p in paths]))

        with tempfile.TemporaryDirectory(prefix="apigen-") as tmp:
            out_dir = Path(tmp)
            self._run([
                *(str(p) for p in paths),
                "--declaration",
                "--emitDeclarationOnly",
                "--rootDir", str(root),
                "--outDir", str(out_dir),
                *_LOWERING_FLAGS,
            ])

            result: dict[Path, str] = {}
            for path in paths:
                relative = path.resolve().relative_to(root)
                out = declaration_path(out_dir / relative)
                if not out.exists():
                    raise CompileError(f"tsc produced no declarations for {path.name}")
                result[declaration_path(path)] = out.read_text(encoding="utf-8")
            return result
