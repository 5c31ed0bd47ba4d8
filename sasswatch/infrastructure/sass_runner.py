"""
Sass compiler adapter.

Runs the ``sass`` executable (Dart Sass) once per file. Output locations
follow the watch pattern that matched the file: the first capture group is
the path below the watched directory, mirrored under ``output`` unless
``shallow`` is set.
"""

import subprocess
from pathlib import Path, PurePosixPath

from sasswatch.config.groups import SassOptions
from sasswatch.domain.models import CompileResult
from sasswatch.infrastructure.formatter import Formatter
from sasswatch.observability import get_logger
from sasswatch.watching.watcher import Watcher

logger = get_logger(__name__)


class SassRunner:
    """Compiles a batch of stylesheets and reports which CSS files were written."""

    def __init__(
        self,
        watchers: list[Watcher],
        options: SassOptions,
        formatter: Formatter | None = None,
        root: Path | None = None,
    ):
        """
        Args:
            watchers: Guard watch patterns, used to mirror the source tree
            options: Compiler options (output, extension, style, load paths...)
            formatter: Terminal reporter
            root: Working directory paths are relative to (defaults to cwd)
        """
        self.watchers = watchers
        self.options = options
        self.formatter = formatter or Formatter(hide_success=options.hide_success)
        self.root = root or Path.cwd()

    def run(self, paths: list[str]) -> CompileResult:
        changed_files = []
        success = True

        for path in paths:
            output = self.output_path(path)
            ok = self._compile(path, output)
            success = success and ok
            if ok and not self.options.noop:
                changed_files.append(output)

        logger.info(
            "sass_run_complete",
            files=len(paths),
            written=len(changed_files),
            success=success,
            noop=self.options.noop,
        )
        return CompileResult(changed_files=changed_files, success=success)

    def output_dir(self, path: str) -> str:
        folder = PurePosixPath(self.options.output)
        if not self.options.shallow:
            for watcher in self.watchers:
                match = watcher.match(path)
                if match and match.groups() and match.group(1):
                    parent = PurePosixPath(match.group(1)).parent
                    return (folder / parent).as_posix()
        return folder.as_posix()

    def output_path(self, path: str) -> str:
        stem = PurePosixPath(path).name.split(".")[0]
        return (PurePosixPath(self.output_dir(path)) / f"{stem}{self.options.extension}").as_posix()

    def command(self, path: str, output: str) -> list[str]:
        cmd = [
            self.options.sass_executable,
            f"--style={self.options.style}",
            "--no-source-map",
        ]
        cmd.extend(f"--load-path={p}" for p in self.options.load_paths)
        cmd.append(path)
        if not self.options.noop:
            cmd.append(output)
        return cmd

    def _compile(self, path: str, output: str) -> bool:
        if not self.options.noop:
            (self.root / output).parent.mkdir(parents=True, exist_ok=True)

        try:
            proc = subprocess.run(
                self.command(path, output),
                cwd=self.root,
                capture_output=True,
                text=True,
                check=False,
            )
        except FileNotFoundError:
            logger.error("sass_executable_missing", executable=self.options.sass_executable)
            self.formatter.error(f"Sass executable not found: {self.options.sass_executable}")
            return False

        if proc.returncode != 0:
            logger.warning("sass_compile_failed", path=path, returncode=proc.returncode)
            self.formatter.error(f"Error compiling {path}", proc.stderr)
            return False

        if self.options.noop:
            self.formatter.success(f"Verified {path}")
        else:
            self.formatter.success(f"{path} -> {output}")
        return True
