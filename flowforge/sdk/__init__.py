"""SDK for talking to the external graph generator."""

from flowforge.sdk.generator import GraphGenerator, GraphGeneratorError

__all__ = ["GraphGenerator", "GraphGeneratorError"]
