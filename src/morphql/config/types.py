"""Core configuration data types for the MorphQL client.

Configuration follows a resolve-once, freeze-then-flow pattern: every call
resolves a fresh ``ResolvedConfig`` (values plus their origins) and hands the
transports an immutable ``FrozenConfig``.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Final, Literal, NamedTuple

# --- Source Tracking Types ---

ConfigOrigin = Literal["call", "instance", "env", "default"]
SourceMap = Mapping[str, ConfigOrigin]

FIELD_ORDER: Final = (
    "provider",
    "runtime",
    "cli_path",
    "node_path",
    "qjs_path",
    "cache_dir",
    "server_url",
    "api_key",
    "timeout",
)

SENSITIVE_FIELDS: Final = frozenset({"api_key"})


class _Unset:
    """Marker for a resolver stage that has no value for a field.

    Distinct from ``None`` and from the empty string so that "not provided"
    never collides with a real value.
    """

    _instance: "_Unset | None" = None

    def __new__(cls) -> "_Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Final = _Unset()


# --- Core Configuration Data ---


class ResolvedConfig(NamedTuple):
    """Configuration after resolution from all tiers, before freezing.

    Carries the origin of each field for auditing. Logically immutable;
    ``with_overrides`` returns a new instance.
    """

    provider: str
    runtime: str
    cli_path: str
    node_path: str
    qjs_path: str | None
    cache_dir: str | None
    server_url: str
    api_key: str | None
    timeout: Any

    # Audit metadata - tracks where each field value came from
    origin: SourceMap

    def __str__(self) -> str:
        """String representation with redacted API key for safe logging."""
        return (
            f"ResolvedConfig({_format_fields(self)}, origin={dict(self.origin)!r})"
        )

    def __repr__(self) -> str:
        return self.__str__()

    def to_frozen(self) -> "FrozenConfig":
        """Convert to the immutable configuration handed to transports."""
        return FrozenConfig(**{field: getattr(self, field) for field in FIELD_ORDER})

    def with_overrides(self, **overrides: object) -> "ResolvedConfig":
        """Create a new ResolvedConfig with call-level overrides applied.

        Unknown fields and ``None`` values are ignored, as in resolution.
        """
        new_values = self._asdict()
        new_origin = dict(self.origin)

        for field, value in overrides.items():
            if field in FIELD_ORDER and value is not None:
                new_values[field] = value
                new_origin[field] = "call"

        new_values["origin"] = new_origin
        return ResolvedConfig(**new_values)

    def audit(self) -> str:
        """Generate a redacted report showing the origin of each field."""
        from .audit import generate_redacted_audit

        return generate_redacted_audit(self._asdict(), self.origin)


@dataclass(frozen=True)
class FrozenConfig:
    """Immutable configuration consumed by the transports.

    Holds only field values, no audit metadata. ``timeout`` is stored as
    resolved and coerced to a number by the transport that uses it.
    """

    provider: str
    runtime: str
    cli_path: str
    node_path: str
    qjs_path: str | None
    cache_dir: str | None
    server_url: str
    api_key: str | None
    timeout: Any

    def __str__(self) -> str:
        """String representation with redacted API key for safe logging."""
        return f"FrozenConfig({_format_fields(self)})"

    def __repr__(self) -> str:
        return self.__str__()


def _format_fields(config: ResolvedConfig | FrozenConfig) -> str:
    parts = []
    for field in FIELD_ORDER:
        value = getattr(config, field)
        if field in SENSITIVE_FIELDS and value is not None:
            value = "[REDACTED]"
        parts.append(f"{field}={value!r}")
    return ", ".join(parts)
