"""Shared utility functions for kindload.

Small, self-contained helpers that are used across multiple modules.
Keeping them here avoids circular imports and reduces duplication.
"""

from __future__ import annotations


def coerce_value(value: str):
    """Coerce a string value to int, float, or bool where possible."""
    if value.lower() in ("true", "yes"):
        return True
    if value.lower() in ("false", "no"):
        return False
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return float(value)
    except ValueError:
        pass
    return value


def format_duration(seconds: float) -> str:
    """Render an elapsed time for console output.

    Examples::

        >>> format_duration(0.0042)
        '4ms'
        >>> format_duration(3.25)
        '3.25s'
        >>> format_duration(125)
        '2m5s'
    """
    if seconds < 1:
        return "%dms" % round(seconds * 1000)
    if seconds < 60:
        return "%.2fs" % seconds
    minutes, secs = divmod(int(seconds), 60)
    return "%dm%ds" % (minutes, secs)


def load_yaml(path) -> dict:
    """Load a YAML mapping from *path*.

    Returns an empty dict when the document is empty or not a mapping.

    Raises:
        ConfigError: The file cannot be read or is not valid YAML.
    """
    from pathlib import Path as _Path
    import yaml
    from kindload.errors import ConfigError
    try:
        with _Path(path).open() as f:
            data = yaml.safe_load(f)
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError("unable to read %s: %s" % (path, e)) from e
    except yaml.YAMLError as e:
        raise ConfigError("invalid YAML in %s: %s" % (path, e)) from e
    return data if isinstance(data, dict) else {}
