"""Graph exchange models for diagram nodes and edges.

The shapes follow what the rendering surface consumes: a node keeps its label
inside `data`, positions stay empty until a layout runs, and unknown keys are
kept so a graph round-trips without loss.

Generated graphs are not trusted. Field validators coerce what can be coerced
(numeric ids become strings) and drop what cannot (a non-mapping `style`
becomes None), so building a Graph from raw input never raises. Deciding
whether the result is acceptable is the validator's job, not the model's.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator


def _as_text(value: Any) -> str | None:
    """Coerce scalar references to strings; anything else is treated as absent."""
    if value is None or isinstance(value, str):
        return value
    # bool is an int subclass but never a meaningful id
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return str(value)
    return None


def _as_mapping(value: Any) -> dict[str, Any] | None:
    if isinstance(value, Mapping):
        return dict(value)
    return None


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class Position(BaseModel):
    """2D canvas coordinate (top-left corner of the node)."""

    x: float
    y: float


class Node(BaseModel):
    """A diagram node.

    `type` is a presentation tag ("process", "decision", "freetext", ...);
    the semantic payload is `data["label"]`.
    """

    model_config = {"extra": "allow"}

    id: str | None = None
    type: str | None = None
    position: Position | None = None
    data: dict[str, Any] | None = None
    style: dict[str, Any] | None = None

    @field_validator("id", "type", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str | None:
        return _as_text(value)

    @field_validator("data", "style", mode="before")
    @classmethod
    def _coerce_mapping(cls, value: Any) -> dict[str, Any] | None:
        return _as_mapping(value)

    @field_validator("position", mode="before")
    @classmethod
    def _coerce_position(cls, value: Any) -> Any:
        if isinstance(value, Position):
            return value
        if isinstance(value, Mapping) and _is_number(value.get("x")) and _is_number(value.get("y")):
            return {"x": value["x"], "y": value["y"]}
        # stale or malformed coordinates are dropped, the layout engine will fill them in
        return None

    @property
    def label(self) -> Any:
        """The raw label value, or None when the node has no data payload."""
        if self.data is None:
            return None
        return self.data.get("label")

    @property
    def category(self) -> Any:
        if self.data is None:
            return None
        return self.data.get("category")

    @property
    def description(self) -> Any:
        if self.data is None:
            return None
        return self.data.get("description")


class Edge(BaseModel):
    """A directed edge between two node ids."""

    model_config = {"extra": "allow"}

    id: str | None = None
    source: str | None = None
    target: str | None = None
    type: str | None = None  # "smoothstep", "straight", "organic", ...
    label: str | None = None
    data: dict[str, Any] | None = None
    style: dict[str, Any] | None = None

    @field_validator("id", "source", "target", "type", "label", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str | None:
        return _as_text(value)

    @field_validator("data", "style", mode="before")
    @classmethod
    def _coerce_mapping(cls, value: Any) -> dict[str, Any] | None:
        return _as_mapping(value)


class Graph(BaseModel):
    """Nodes, edges and an open metadata bag.

    `nodes` / `edges` are None when the raw input did not provide a sequence
    there. The pipeline carries that through untouched so the validator can
    report it.
    """

    model_config = {"extra": "allow"}

    nodes: list[Node] | None = Field(default_factory=list)
    edges: list[Edge] | None = Field(default_factory=list)
    metadata: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_raw(cls, raw: Any) -> Graph:
        """Build a Graph from an untrusted JSON-like object. Never raises."""
        if isinstance(raw, Graph):
            return raw.model_copy(deep=True)
        if not isinstance(raw, Mapping):
            return cls(nodes=None, edges=None)

        nodes = _parse_items(raw.get("nodes"), Node)
        edges = _parse_items(raw.get("edges"), Edge)
        metadata = _as_mapping(raw.get("metadata")) or {}
        extras = {
            key: value
            for key, value in raw.items()
            if isinstance(key, str) and key not in ("nodes", "edges", "metadata")
        }
        return cls(nodes=nodes, edges=edges, metadata=metadata, **extras)

    def node_ids(self) -> set[str]:
        """Non-empty node ids present in the graph."""
        return {node.id for node in self.nodes or [] if node.id}

    def to_raw(self) -> dict[str, Any]:
        """Serialize back to the exchange shape (absent fields omitted)."""
        return self.model_dump(mode="json", exclude_none=True)


def _parse_items(value: Any, model: type[Node] | type[Edge]) -> list[Any] | None:
    if not isinstance(value, (list, tuple)):
        return None
    items = []
    for entry in value:
        if isinstance(entry, model):
            items.append(entry.model_copy(deep=True))
            continue
        if not isinstance(entry, Mapping):
            items.append(model())
            continue
        try:
            items.append(model.model_validate(dict(entry)))
        except ValidationError:
            # an entry the coercing validators still could not accept keeps
            # only its reference fields
            items.append(model.model_validate({k: entry.get(k) for k in ("id", "source", "target") if k in entry}))
    return items


def ensure_graph(graph: Graph | Mapping[str, Any] | Any) -> Graph:
    """Return `graph` if it already is a Graph, otherwise parse it leniently."""
    if isinstance(graph, Graph):
        return graph
    return Graph.from_raw(graph)
