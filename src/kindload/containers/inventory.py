"""Discovery of the images already cached on cluster nodes."""

from __future__ import annotations

import logging

from kindload.errors import CommandError, InventoryQueryFailed

logger = logging.getLogger(__name__)

# Every name (tags and digests) of every image on every node.
NODE_IMAGES_JSONPATH = "{.items[*].status.images[*].names[*]}"

# Punctuation a jsonpath expression or shell quoting can leave around tokens.
_TOKEN_JUNK = "'\"[]{}(),"


def parse_node_images(output: str) -> frozenset[str]:
    """Split raw ``kubectl`` jsonpath output into a set of image names.

    Stray quote and bracket characters are stripped so that they can never
    make an unrelated token compare equal to a tag.
    """
    images = set()
    for token in output.split():
        token = token.strip(_TOKEN_JUNK)
        if token:
            images.add(token)
    return frozenset(images)


def find_known_images(kubectl) -> frozenset[str]:
    """Return the image names present on any node of the cluster.

    Issues a single ``kubectl get nodes`` query.

    Args:
        kubectl: A :class:`~kindload.orchestration.kubectl.KubectlCLI`
            (or anything with a compatible ``run_out``).

    Raises:
        InventoryQueryFailed: The query failed.
    """
    try:
        out = kubectl.run_out("get", "nodes", "-o", "jsonpath=" + NODE_IMAGES_JSONPATH)
    except CommandError as e:
        raise InventoryQueryFailed(e) from e

    images = parse_node_images(out)
    logger.debug("Found %d image name(s) on cluster nodes", len(images))
    return images
