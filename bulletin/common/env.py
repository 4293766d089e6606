"""Environment parsing helpers used by the configuration dataclasses.

Only configuration constructors call these; runtime components receive
already-validated config values.
"""

from __future__ import annotations

import typing as typ

from bulletin.errors import ConfigurationError

Environ = typ.Mapping[str, str]


def optional_str(environ: Environ, name: str) -> str | None:
    """Return the stripped value of ``name`` or ``None`` when unset or blank."""
    raw = environ.get(name)
    if raw is None:
        return None
    value = raw.strip()
    return value or None


def require_str(environ: Environ, name: str) -> str:
    """Return the stripped value of ``name``.

    Raises
    ------
    ConfigurationError
        If the variable is unset or blank.

    """
    value = optional_str(environ, name)
    if value is None:
        raise ConfigurationError.missing(name)
    return value


def parse_int(
    environ: Environ,
    name: str,
    default: int,
    *,
    minimum: int | None = None,
    maximum: int | None = None,
) -> int:
    """Read an integer setting, validating optional inclusive bounds."""
    raw = optional_str(environ, name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigurationError.invalid(name, raw, "Must be an integer") from exc

    if minimum is not None and value < minimum:
        raise ConfigurationError.invalid(name, raw, f"Must be at least {minimum}")
    if maximum is not None and value > maximum:
        raise ConfigurationError.invalid(name, raw, f"Must be at most {maximum}")
    return value


def parse_float(
    environ: Environ,
    name: str,
    default: float,
    *,
    minimum: float,
    maximum: float,
) -> float:
    """Read a float setting bounded to ``[minimum, maximum]``."""
    raw = optional_str(environ, name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigurationError.invalid(
            name, raw, f"Must be a float between {minimum} and {maximum}"
        ) from exc

    if not minimum <= value <= maximum:
        raise ConfigurationError.invalid(
            name, raw, f"Must be a float between {minimum} and {maximum}"
        )
    return value


def parse_csv(environ: Environ, name: str) -> tuple[str, ...]:
    """Split a comma-separated setting into stripped, non-empty items."""
    raw = optional_str(environ, name)
    if raw is None:
        return ()
    return tuple(item.strip() for item in raw.split(",") if item.strip())
