"""API routes for diagram generation, assembly, validation and layout.

Everything here is stateless; saved diagrams live in diagram_routes.
"""

import os
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from flowforge.layout import LayoutDirection, LayoutStrategy, apply_layout
from flowforge.models.diagram import (
    DIAGRAM_KINDS,
    EDGE_TYPES,
    NODE_TYPES,
    STYLE_OPTIONS,
    AssembledDiagram,
    ComplexityTier,
)
from flowforge.pipeline import DiagramGenerationError, assemble, enhance_styling, validate
from flowforge.sdk.generator import GraphGenerator, GraphGeneratorError

router = APIRouter()


EXAMPLE_PROMPTS = {
    "simpleProcess": "Create a flowchart for making coffee",
    "businessProcess": "Show the customer onboarding process for a SaaS application",
    "decisionFlow": "Create a troubleshooting flowchart for network connectivity issues",
}


def get_generator() -> GraphGenerator | None:
    """Build the generator client from the environment; None when unset."""
    endpoint = os.getenv("GENERATOR_URL")
    if not endpoint:
        return None
    return GraphGenerator(
        endpoint,
        timeout=float(os.getenv("GENERATOR_TIMEOUT", "30")),
        max_retries=int(os.getenv("GENERATOR_MAX_RETRIES", "2")),
        api_key=os.getenv("GENERATOR_API_KEY") or None,
    )


class _CamelModel(BaseModel):
    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class GenerateRequest(_CamelModel):
    """request body for generating a diagram from a prompt."""

    prompt: str
    diagram_kind: str = "flowchart"
    complexity: str = "medium"
    style: str = "default"
    layout: LayoutStrategy | None = LayoutStrategy.hierarchical


class AssembleRequest(_CamelModel):
    """request body for assembling an existing raw graph."""

    graph: Any = None
    diagram_kind: str = "flowchart"
    layout: LayoutStrategy | None = None
    enhance_style: bool = True


class LayoutRequest(_CamelModel):
    """request body for laying out a graph."""

    graph: Any = None
    strategy: LayoutStrategy = LayoutStrategy.hierarchical
    canvas_width: float = Field(default=1200, gt=0)
    canvas_height: float = Field(default=800, gt=0)
    direction: LayoutDirection = LayoutDirection.TB
    seed: int | None = None


def _generation_failed(exc: DiagramGenerationError) -> HTTPException:
    return HTTPException(
        status_code=422,
        detail={
            "message": f"Generated {exc.diagram_kind} is not renderable",
            "errors": list(exc.errors),
            "warnings": list(exc.warnings),
            "retryable": True,
        },
    )


def _diagram_response(
    assembled: AssembledDiagram,
    layout: LayoutStrategy | None,
    enhance_style: bool = True,
) -> dict:
    graph = assembled.graph
    if enhance_style:
        graph = enhance_styling(graph)
    if layout is not None:
        graph = apply_layout(graph, layout)
    return {
        "graph": graph.to_raw(),
        "report": assembled.report.model_dump(by_alias=True, mode="json"),
        "metadata": assembled.metadata.model_dump(by_alias=True, mode="json"),
    }


@router.post("/diagrams/generate")
async def generate_diagram(
    request: GenerateRequest,
    generator: GraphGenerator | None = Depends(get_generator),
) -> dict:
    """generate a diagram from a prompt, then repair, validate, style and lay it out."""
    prompt = request.prompt.strip()
    if not prompt:
        raise HTTPException(status_code=400, detail="Prompt must not be empty")
    if request.diagram_kind not in DIAGRAM_KINDS:
        raise HTTPException(status_code=400, detail=f"Unsupported diagram kind: {request.diagram_kind}")
    if generator is None:
        raise HTTPException(status_code=503, detail="GENERATOR_URL environment variable not set")

    try:
        raw = await generator.generate(
            prompt,
            diagram_kind=request.diagram_kind,
            complexity=request.complexity,
            style=request.style,
        )
    except GraphGeneratorError as e:
        raise HTTPException(status_code=502, detail=str(e)) from e

    try:
        assembled = assemble(raw, diagram_kind=request.diagram_kind)
    except DiagramGenerationError as e:
        raise _generation_failed(e) from e

    return _diagram_response(assembled, request.layout)


@router.post("/diagrams/assemble")
def assemble_diagram(request: AssembleRequest) -> dict:
    """repair, filter and validate a raw graph."""
    try:
        assembled = assemble(request.graph, diagram_kind=request.diagram_kind)
    except DiagramGenerationError as e:
        raise _generation_failed(e) from e
    return _diagram_response(assembled, request.layout, request.enhance_style)


@router.post("/diagrams/validate")
def validate_diagram(raw: Any = Body(...)) -> dict:
    """validate a raw graph without changing it."""
    return validate(raw).model_dump(by_alias=True, mode="json")


@router.post("/diagrams/layout")
def layout_diagram(request: LayoutRequest) -> dict:
    """position every node of a graph."""
    raw = request.graph
    if not isinstance(raw, dict) or not isinstance(raw.get("nodes"), list):
        raise HTTPException(status_code=400, detail="Missing or invalid nodes array")
    graph = apply_layout(
        raw,
        request.strategy,
        canvas_width=request.canvas_width,
        canvas_height=request.canvas_height,
        direction=request.direction,
        seed=request.seed,
    )
    return {"graph": graph.to_raw()}


@router.get("/diagrams/formats")
def get_formats() -> dict:
    """supported diagram kinds, node and edge types, and example prompts."""
    return {
        "diagramKinds": list(DIAGRAM_KINDS),
        "nodeTypes": list(NODE_TYPES),
        "edgeTypes": list(EDGE_TYPES),
        "complexityLevels": [tier.value for tier in ComplexityTier],
        "layouts": [strategy.value for strategy in LayoutStrategy],
        "styleOptions": list(STYLE_OPTIONS),
        "examples": EXAMPLE_PROMPTS,
    }
