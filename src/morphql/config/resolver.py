"""Configuration resolution with precedence handling.

Each configuration field is resolved independently by walking an ordered
list of stages:

    call options > instance defaults > environment > hard-coded defaults

A stage is a pure function ``(field) -> value | UNSET``. The first stage
that yields a value wins; a field is never composed from two tiers.
"""

from collections.abc import Callable, Mapping
import logging
from typing import Any

from .audit import SourceTracker
from .env_loader import EnvironmentConfigLoader
from .schema import default_values
from .types import FIELD_ORDER, UNSET, ConfigOrigin, ResolvedConfig, _Unset

log = logging.getLogger(__name__)

Stage = Callable[[str], Any]


def mapping_stage(values: Mapping[str, Any] | None) -> Stage:
    """Build a stage that reads from an options mapping.

    A missing key and a ``None`` value are both treated as absent.
    """
    values = values or {}

    def _lookup(field: str) -> Any:
        value = values.get(field)
        return UNSET if value is None else value

    return _lookup


def defaults_stage() -> Stage:
    """Build the terminal stage returning the hard-coded default."""
    defaults = default_values()
    return defaults.__getitem__


class ConfigResolver:
    """Resolves configuration from the four tiers with proper precedence."""

    def __init__(self, env_loader: EnvironmentConfigLoader | None = None) -> None:
        self.env_loader = env_loader or EnvironmentConfigLoader()

    def stages(
        self,
        call_options: Mapping[str, Any] | None = None,
        instance_defaults: Mapping[str, Any] | None = None,
    ) -> list[tuple[ConfigOrigin, Stage]]:
        """Return the resolver stages in priority order."""
        return [
            ("call", mapping_stage(call_options)),
            ("instance", mapping_stage(instance_defaults)),
            ("env", self.env_loader.lookup),
            ("default", defaults_stage()),
        ]

    def resolve(
        self,
        call_options: Mapping[str, Any] | None = None,
        instance_defaults: Mapping[str, Any] | None = None,
    ) -> ResolvedConfig:
        """Resolve configuration from all tiers.

        Args:
            call_options: Per-call options (highest precedence)
            instance_defaults: Options preset on a client instance

        Returns:
            ResolvedConfig with merged values and source tracking.
            Resolution never fails; unknown keys are ignored.
        """
        source_tracker = SourceTracker()
        stages = self.stages(call_options, instance_defaults)
        values: dict[str, Any] = {}

        for field in FIELD_ORDER:
            for origin, stage in stages:
                value = stage(field)
                if not isinstance(value, _Unset):
                    values[field] = value
                    source_tracker.set_origin(field, origin)
                    break

        resolved = ResolvedConfig(**values, origin=source_tracker.get_source_map())
        log.debug("Resolved configuration: %s", resolved)
        return resolved
