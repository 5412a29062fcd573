"""Utility functions for FlowForge."""

from flowforge.utils.identifiers import (
    IdSequence,
    generate_diagram_id,
    utc_timestamp,
)

__all__ = [
    "IdSequence",
    "generate_diagram_id",
    "utc_timestamp",
]
