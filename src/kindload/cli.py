"""Command-line interface for kindload."""

from __future__ import annotations

import logging

import click

from kindload import __version__
from kindload.config import KindloadConfig, kind_kube_context, resolve_kind_cluster
from kindload.containers.artifacts import Artifact, load_build_output
from kindload.containers.inventory import find_known_images
from kindload.containers.load import load_images_in_kind_nodes
from kindload.errors import KindloadError
from kindload.orchestration.kind import KindCLI
from kindload.orchestration.kubectl import KubectlCLI

logger = logging.getLogger(__name__)


def cluster_options(f):
    """Options selecting the target kind cluster."""
    f = click.option("--timeout", default=None, type=click.FloatRange(min=0, min_open=True),
                     help="Timeout in seconds for each kubectl/kind command")(f)
    f = click.option("--kubeconfig", default=None, type=click.Path(dir_okay=False),
                     help="Path to the kubeconfig file")(f)
    f = click.option("--context", "kube_context", default=None,
                     help="kube context to query (default: kind-<name>)")(f)
    f = click.option("--name", "cluster_name", default=None,
                     help="kind cluster name (default: derived from the kube context, else 'kind')")(f)
    return f


def _resolve_target(cluster_name, kube_context, kubeconfig, timeout) -> tuple[KindloadConfig, str]:
    """Merge CLI options over the loaded config and pick the cluster."""
    try:
        config = KindloadConfig.load().with_overrides(
            cluster_name=cluster_name,
            kube_context=kube_context,
            kubeconfig=kubeconfig,
            timeout=timeout,
        )
    except KindloadError as e:
        raise click.ClickException(str(e)) from e

    cluster = resolve_kind_cluster(config.cluster_name, config.kube_context)
    if config.kube_context is None:
        config.kube_context = kind_kube_context(cluster)
    logger.debug("Target kind cluster '%s' (context %s)", cluster, config.kube_context)
    return config, cluster


@click.group()
@click.version_option(__version__, prog_name="kindload")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def main(verbose):
    """Load locally built container images into kind cluster nodes."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command("load")
@click.argument("images", nargs=-1)
@click.option("--build-artifacts", "-a", "build_artifacts", default=None,
              type=click.Path(exists=True, dir_okay=False),
              help="JSON file written by the build (skaffold --file-output format)")
@click.option("--built", "built", multiple=True,
              help="Tag from the build-artifacts file that this run built (repeatable)")
@cluster_options
def load_cmd(images, build_artifacts, built, cluster_name, kube_context, kubeconfig, timeout):
    """Load the images this run built into every kind node.

    IMAGES given as arguments are treated as built by this run.  Images
    already present on a node are not transferred again.
    """
    artifacts: list[Artifact] = []
    built_tags = set(built)
    if build_artifacts:
        try:
            output = load_build_output(build_artifacts)
        except KindloadError as e:
            raise click.ClickException(str(e)) from e
        artifacts.extend(output.artifacts)
        built_tags |= output.built_tags
    for image in images:
        artifacts.append(Artifact(tag=image))
        built_tags.add(image)

    if not artifacts:
        raise click.UsageError("No images given. Pass IMAGES or --build-artifacts.")

    config, cluster = _resolve_target(cluster_name, kube_context, kubeconfig, timeout)
    click.echo("Loading images into kind cluster '%s' nodes..." % cluster)
    try:
        report = load_images_in_kind_nodes(
            artifacts,
            built_tags,
            cluster,
            KubectlCLI.from_config(config),
            kind=KindCLI.from_config(config),
        )
    except KindloadError as e:
        raise click.ClickException(str(e)) from e

    click.echo("%d loaded, %d already present" % (len(report.loaded), len(report.found)))


@main.command("images")
@cluster_options
def images_cmd(cluster_name, kube_context, kubeconfig, timeout):
    """List the images cached on the cluster's nodes."""
    config, _ = _resolve_target(cluster_name, kube_context, kubeconfig, timeout)
    try:
        images = find_known_images(KubectlCLI.from_config(config))
    except KindloadError as e:
        raise click.ClickException(str(e)) from e

    if not images:
        click.echo("No images found on cluster nodes.")
        return
    for image in sorted(images):
        click.echo(image)


if __name__ == "__main__":
    main()
