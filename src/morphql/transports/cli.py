"""CLI provider: run the engine as a local child process.

The engine is located in this order:

1. ``runtime == "qjs"``: a QuickJS interpreter running the standalone
   ``qjs.js`` bundle (configured ``qjs_path``, else the bundled binary for
   this platform, else ``qjs`` on PATH).
2. An explicitly configured ``cli_path``.
3. The bundled ``bin/morphql.js`` entry point under ``node_path``.
4. The system-installed ``morphql`` executable.

Arguments are passed as an argv list, never through a shell.
"""

import logging
import os
from pathlib import Path
import subprocess
import sys
import tempfile

from morphql.config import FrozenConfig
from morphql.constants import (
    BUNDLED_BIN_DIR,
    CACHE_DIR_NAME,
    CHILD_ENV_OVERRIDES,
    DEFAULT_CLI_PATH,
    NODE_BUNDLE_NAME,
    QJS_BUNDLE_NAME,
    QJS_SYSTEM_BINARY,
    Runtime,
)
from morphql.exceptions import (
    ExecutionError,
    ProcessStartError,
    ProcessTimeoutError,
    ResourceMissingError,
)
from morphql.types import TransformRequest, normalize_data

from .base import choice, coerce_timeout

log = logging.getLogger(__name__)


def qjs_binary_name(platform: str | None = None) -> str:
    """Return the bundled QuickJS binary name for a ``sys.platform`` value."""
    platform = platform or sys.platform
    if platform.startswith("win"):
        return "qjs-windows-x86_64.exe"
    if platform == "darwin":
        return "qjs-darwin"
    return "qjs-linux-x86_64"


def resolve_cache_dir(config: FrozenConfig) -> str:
    """Return the configured cache directory or ``<tempdir>/morphql``.

    Keeps the engine's compiled-query cache out of the caller's working
    directory.
    """
    if config.cache_dir:
        return str(config.cache_dir)
    return os.path.join(tempfile.gettempdir(), CACHE_DIR_NAME)


class CliTransport:
    """Runs transformations through the MorphQL command-line engine.

    Args:
        bin_dir: Directory holding bundled artifacts (``morphql.js``,
            ``qjs.js`` and QuickJS binaries). Defaults to the package's
            ``bin`` directory.
    """

    def __init__(self, bin_dir: str | os.PathLike[str] | None = None) -> None:
        self.bin_dir = Path(bin_dir) if bin_dir is not None else BUNDLED_BIN_DIR

    def execute(self, request: TransformRequest, config: FrozenConfig) -> str:
        """Run the engine once and return its trimmed stdout.

        Raises:
            ResourceMissingError: The QuickJS bundle is absent.
            ProcessStartError: The process could not be spawned.
            ProcessTimeoutError: The process outlived ``config.timeout``.
            ExecutionError: The process exited with a non-zero code.
        """
        command = self.build_command(request, config)
        timeout = coerce_timeout(config.timeout)
        env = {**os.environ, **CHILD_ENV_OVERRIDES}

        log.debug(
            "Running MorphQL CLI: %s (runtime=%s, timeout=%s)",
            command[0],
            config.runtime,
            timeout,
        )

        try:
            completed = subprocess.run(  # noqa: S603
                command,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                env=env,
                timeout=timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            raise ProcessTimeoutError(
                f"MorphQL CLI timed out after {timeout:g}s",
                timeout=timeout,
                detail=_as_text(e.stderr).strip() or _as_text(e.stdout).strip(),
            ) from e
        except OSError as e:
            raise ProcessStartError(
                f"MorphQL: failed to start CLI process: {e}", command=command
            ) from e

        if completed.returncode != 0:
            stderr = completed.stderr.strip()
            detail = stderr if stderr else completed.stdout.strip()
            raise ExecutionError(
                f"MorphQL CLI error (exit code {completed.returncode}): {detail}",
                exit_code=completed.returncode,
                detail=detail,
            )

        return completed.stdout.strip()

    def build_command(
        self, request: TransformRequest, config: FrozenConfig
    ) -> list[str]:
        """Assemble the full argv for a request."""
        command = self.resolve_engine_command(config)

        if request.query_file is not None:
            command += ["-Q", str(request.query_file)]
        else:
            command += ["-q", request.query]

        command += [
            "-i",
            normalize_data(request.data),
            "--cache-dir",
            resolve_cache_dir(config),
        ]
        return command

    def resolve_engine_command(self, config: FrozenConfig) -> list[str]:
        """Return the argv prefix that starts the engine."""
        if choice(config.runtime) == Runtime.QJS:
            return self.resolve_qjs_command(config)

        if config.cli_path and config.cli_path != DEFAULT_CLI_PATH:
            return [str(config.cli_path)]

        bundled = self.bin_dir / NODE_BUNDLE_NAME
        if bundled.is_file():
            return [str(config.node_path), str(bundled.resolve())]

        return [str(config.cli_path or DEFAULT_CLI_PATH)]

    def resolve_qjs_command(self, config: FrozenConfig) -> list[str]:
        """Return the QuickJS interpreter plus standalone bundle.

        Raises:
            ResourceMissingError: If ``qjs.js`` is not in the bin directory.
        """
        bundle = self.bin_dir / QJS_BUNDLE_NAME
        if not bundle.is_file():
            raise ResourceMissingError(
                "MorphQL: QuickJS bundle not found. "
                "Run `python -m morphql.install --bundle PATH` to install it.",
                path=bundle,
            )

        return [self.resolve_qjs_binary(config), "--std", "-m", str(bundle.resolve())]

    def resolve_qjs_binary(self, config: FrozenConfig) -> str:
        if config.qjs_path:
            return str(config.qjs_path)

        bundled = self.bin_dir / qjs_binary_name()
        if bundled.is_file():
            return str(bundled.resolve())

        return QJS_SYSTEM_BINARY


def _as_text(value: str | bytes | None) -> str:
    # TimeoutExpired may carry undecoded partial output
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value


_default_transport = CliTransport()


def run_cli(request: TransformRequest, config: FrozenConfig) -> str:
    """Run a request through the default CLI transport."""
    return _default_transport.execute(request, config)
