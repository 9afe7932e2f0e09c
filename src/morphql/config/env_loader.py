"""Environment variable configuration loading.

This module is the single place where MORPHQL_* environment variables are
read. A variable that is unset or set to the empty string is reported as
``UNSET``, so an empty variable inherited from a parent shell never acts as
an explicit override.
"""

from collections.abc import Mapping
import os

from .schema import env_var_for
from .types import FIELD_ORDER, SENSITIVE_FIELDS, UNSET, _Unset


class EnvironmentConfigLoader:
    """Loads configuration values from MORPHQL_* environment variables.

    Values are returned as raw strings; type coercion happens where a value
    is used.
    """

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        """Initialize the loader.

        Args:
            environ: Mapping to read instead of ``os.environ``.
        """
        self._environ = environ

    @property
    def environ(self) -> Mapping[str, str]:
        return os.environ if self._environ is None else self._environ

    def lookup(self, field: str) -> str | _Unset:
        """Return the environment value for a field, or ``UNSET``."""
        value = self.environ.get(env_var_for(field))
        if value is None or value == "":
            return UNSET
        return value

    def load_env_config(self) -> dict[str, str]:
        """Return every field that has a non-empty environment value."""
        env_values = {}
        for field in FIELD_ORDER:
            value = self.lookup(field)
            if value is not UNSET:
                env_values[field] = value
        return env_values

    def get_env_summary(self) -> dict[str, str]:
        """Get a summary of current MORPHQL_* environment variables.

        Returns:
            Mapping of variable names to values, including empty ones.
            Sensitive values are redacted.
        """
        summary = {}

        for field in FIELD_ORDER:
            env_var = env_var_for(field)
            if env_var in self.environ:
                if field in SENSITIVE_FIELDS:
                    summary[env_var] = "<redacted>"
                else:
                    summary[env_var] = self.environ[env_var]

        return summary
