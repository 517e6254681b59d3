"""kindload - Load locally built container images into the nodes of a kind cluster."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("kindload")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"
