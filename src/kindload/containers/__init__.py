"""Container image handling: build artifacts, node inventory and loading."""
