"""
Project-wide constants for the MorphQL Python client
"""

from enum import Enum
from pathlib import Path

# ==============================================================================
# Providers and Runtimes
# ==============================================================================


class Provider(str, Enum):
    """Transport strategy used to reach the engine"""

    CLI = "cli"
    SERVER = "server"


class Runtime(str, Enum):
    """Local interpreter strategy for the CLI provider"""

    NODE = "node"
    QJS = "qjs"


# ==============================================================================
# Configuration Defaults
# ==============================================================================

ENV_PREFIX = "MORPHQL_"

DEFAULT_CLI_PATH = "morphql"
DEFAULT_NODE_PATH = "node"
DEFAULT_SERVER_URL = "http://localhost:3000"
DEFAULT_TIMEOUT = 30  # seconds

CACHE_DIR_NAME = "morphql"

# ==============================================================================
# CLI Transport
# ==============================================================================

BUNDLED_BIN_DIR = Path(__file__).resolve().parent / "bin"
NODE_BUNDLE_NAME = "morphql.js"
QJS_BUNDLE_NAME = "qjs.js"
QJS_SYSTEM_BINARY = "qjs"

# Child environment additions; Node prints experimental warnings to stderr
CHILD_ENV_OVERRIDES = {"NODE_NO_WARNINGS": "1"}

# ==============================================================================
# Server Transport
# ==============================================================================

EXECUTE_ENDPOINT = "/v1/execute"
API_KEY_HEADER = "X-API-KEY"

# ==============================================================================
# QuickJS Installer
# ==============================================================================

QJS_VERSION = "v0.11.0"
QJS_RELEASE_URL = "https://github.com/quickjs-ng/quickjs/releases/download/{version}/"
QJS_BINARIES = (
    "qjs-linux-x86_64",
    "qjs-darwin",
    "qjs-windows-x86_64.exe",
)
MIN_BINARY_SIZE = 1000  # bytes; anything smaller is an error page
