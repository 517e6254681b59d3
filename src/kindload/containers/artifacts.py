"""Build artifacts produced or resolved by a build run.

The artifact list is read from the JSON written by
``skaffold build --file-output``::

    {"builds": [{"imageName": "app", "tag": "app:v1", "built": true}]}

``built`` is optional and marks images this run actually produced.
Entries without it were resolved elsewhere (pulled, cached) and are not
loaded unless the caller names their tag explicitly.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from kindload.errors import ConfigError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Artifact:
    """A container image reference used during one run."""

    tag: str
    image_name: str = ""


@dataclass
class BuildOutput:
    artifacts: list[Artifact] = field(default_factory=list)
    built_tags: set[str] = field(default_factory=set)


def load_build_output(path: str | Path) -> BuildOutput:
    """Read a build-artifacts file.

    Args:
        path: Path to the JSON file.

    Returns:
        The artifacts in file order plus the tags flagged as built.

    Raises:
        ConfigError: The file cannot be read or is not in the expected shape.
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise ConfigError("unable to read build artifacts from %s: %s" % (path, e)) from e

    builds = data.get("builds") if isinstance(data, dict) else None
    if not isinstance(builds, list):
        raise ConfigError("%s: expected an object with a 'builds' list" % path)

    output = BuildOutput()
    for i, entry in enumerate(builds):
        tag = entry.get("tag") if isinstance(entry, dict) else None
        if not isinstance(tag, str) or not tag.strip():
            raise ConfigError("%s: builds[%d] has no tag" % (path, i))
        tag = tag.strip()
        output.artifacts.append(Artifact(tag=tag, image_name=str(entry.get("imageName") or "")))
        if entry.get("built") is True:
            output.built_tags.add(tag)

    logger.debug("Read %d artifact(s) from %s, %d built",
                 len(output.artifacts), path, len(output.built_tags))
    return output
