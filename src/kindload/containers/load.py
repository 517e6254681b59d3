"""Selective loading of built images into kind cluster nodes.

Only images produced by the current build are considered, and of those
only the ones no node already holds are transferred.  The node inventory
is queried at most once per call, on the first image that needs it, and
is treated as a fixed snapshot for the rest of the call.
"""

from __future__ import annotations

import enum
import logging
import time
from dataclasses import dataclass, field
from typing import Iterable, TextIO

import click

from kindload.containers.artifacts import Artifact
from kindload.containers.inventory import find_known_images
from kindload.errors import CommandError, InventoryQueryFailed, TransferFailed
from kindload.orchestration.kind import KindCLI
from kindload.utils import format_duration

logger = logging.getLogger(__name__)


class LoadOutcome(enum.Enum):
    SKIPPED_NOT_BUILT = "Skipped"
    FOUND = "Found"
    LOADED = "Loaded"
    FAILED = "Failed"


_STATUS_COLORS = {
    LoadOutcome.FOUND: "green",
    LoadOutcome.LOADED: "green",
    LoadOutcome.FAILED: "red",
}


@dataclass
class LoadReport:
    """Per-artifact outcomes of one load call, in artifact order."""

    outcomes: list[tuple[str, LoadOutcome]] = field(default_factory=list)
    elapsed: float = 0.0

    def tags_with(self, outcome: LoadOutcome) -> list[str]:
        return [tag for tag, o in self.outcomes if o is outcome]

    @property
    def loaded(self) -> list[str]:
        return self.tags_with(LoadOutcome.LOADED)

    @property
    def found(self) -> list[str]:
        return self.tags_with(LoadOutcome.FOUND)


def _report(report: LoadReport, tag: str, outcome: LoadOutcome, out: TextIO | None) -> None:
    report.outcomes.append((tag, outcome))
    if outcome in _STATUS_COLORS:
        click.echo(click.style(outcome.value, fg=_STATUS_COLORS[outcome]), file=out)


def load_images_in_kind_nodes(
    artifacts: Iterable[Artifact],
    built_tags: Iterable[str],
    kind_cluster: str,
    kubectl,
    out: TextIO | None = None,
    kind: KindCLI | None = None,
) -> LoadReport:
    """Load the images this run built into every node of a kind cluster.

    Artifacts are processed strictly in order.  For each one whose tag is
    in *built_tags*, a `` - <tag> -> `` line is started, then completed
    with ``Found`` when a node already has the image, ``Loaded`` after a
    successful ``kind load``, or ``Failed``.  The first failure aborts the
    call.  A final line reports the total elapsed time, also on failure.

    Args:
        artifacts: Images resolved by the build, in build order.
        built_tags: Tags produced by this run; everything else is skipped.
        kind_cluster: Name of the kind cluster to load into.
        kubectl: Used to query the node inventory.
        out: Stream for progress lines (stdout when ``None``).
        kind: Performs the transfer; a default :class:`KindCLI` when ``None``.

    Returns:
        A :class:`LoadReport` with one outcome per artifact.

    Raises:
        InventoryQueryFailed: The node inventory could not be read.
        TransferFailed: ``kind load`` failed for an image.
    """
    kind = kind or KindCLI()
    built = set(built_tags)
    report = LoadReport()
    start = time.monotonic()

    known_images: frozenset[str] | None = None
    try:
        for artifact in artifacts:
            tag = artifact.tag
            if tag not in built:
                report.outcomes.append((tag, LoadOutcome.SKIPPED_NOT_BUILT))
                continue

            click.echo(" - %s -> " % tag, file=out, nl=False)

            if known_images is None:
                try:
                    known_images = find_known_images(kubectl)
                except InventoryQueryFailed:
                    _report(report, tag, LoadOutcome.FAILED, out)
                    raise

            if tag in known_images:
                _report(report, tag, LoadOutcome.FOUND, out)
                continue

            try:
                kind.load_docker_image(kind_cluster, tag)
            except CommandError as e:
                _report(report, tag, LoadOutcome.FAILED, out)
                raise TransferFailed(tag, e, e.output) from e

            _report(report, tag, LoadOutcome.LOADED, out)
    finally:
        report.elapsed = time.monotonic() - start
        click.echo("Images loaded in %s" % format_duration(report.elapsed), file=out)

    logger.info("kind cluster '%s': %d image(s) loaded, %d already present",
                kind_cluster, len(report.loaded), len(report.found))
    return report
