"""Invoke the naga command-line validator on WGSL source."""

from __future__ import annotations
import shutil
import subprocess
import tempfile
from pathlib import Path

from bindconf.compilers.base import CompileResult, CompilerError

DEFAULT_NAGA = "naga"


class NagaCompiler:
    name = "naga"

    def __init__(self, executable: str = DEFAULT_NAGA):
        self.executable = executable

    def available(self) -> bool:
        return shutil.which(self.executable) is not None

    def validate(self, source: str) -> CompileResult:
        with tempfile.NamedTemporaryFile(
            mode="w", suffix=".wgsl", delete=False, encoding="utf-8"
        ) as f:
            f.write(source)
            wgsl_path = Path(f.name)

        try:
            try:
                result = subprocess.run(
                    [self.executable, str(wgsl_path)],
                    capture_output=True, text=True,
                )
            except FileNotFoundError as e:
                raise CompilerError(f"naga executable not found: {self.executable}") from e
        finally:
            wgsl_path.unlink(missing_ok=True)

        output = f"{result.stderr}\n{result.stdout}"
        diagnostics = [line for line in output.splitlines() if line.strip()]
        return CompileResult(accepted=result.returncode == 0, diagnostics=diagnostics)
