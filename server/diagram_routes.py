"""API routes for saved diagrams.

Diagrams are scoped to an owner given in the X-Owner-Id header; who that
owner is and how they signed in is decided in front of this service.
"""

from fastapi import APIRouter, Depends, Header, HTTPException, Query

from flowforge.layout import LayoutStrategy
from flowforge.models.diagram import DIAGRAM_KINDS, DiagramCreate, DiagramUpdate, StoredDiagram
from flowforge.utils.identifiers import generate_diagram_id, utc_timestamp
from server.diagram_db import (
    upsert_diagram as db_upsert_diagram,
    get_diagram as db_get_diagram,
    list_diagrams as db_list_diagrams,
    delete_diagram as db_delete_diagram,
)

router = APIRouter()

_LAYOUTS = {strategy.value for strategy in LayoutStrategy}


def require_owner(owner_id: str | None = Header(default=None, alias="X-Owner-Id")) -> str:
    """the caller's owner id; 401 when the header is missing."""
    if not owner_id or not owner_id.strip():
        raise HTTPException(status_code=401, detail="Missing X-Owner-Id header")
    return owner_id.strip()


def _check_fields(diagram_kind: str | None, layout: str | None) -> None:
    if diagram_kind is not None and diagram_kind not in DIAGRAM_KINDS:
        raise HTTPException(status_code=400, detail=f"Unsupported diagram kind: {diagram_kind}")
    if layout is not None and layout not in _LAYOUTS:
        raise HTTPException(status_code=400, detail=f"Unsupported layout: {layout}")


@router.post("/diagrams", status_code=201)
def create_diagram(
    request: DiagramCreate,
    owner_id: str = Depends(require_owner),
) -> StoredDiagram:
    """save a new diagram for the caller."""
    _check_fields(request.diagram_kind, request.layout)
    now = utc_timestamp()
    diagram = StoredDiagram(
        diagram_id=generate_diagram_id(),
        owner_id=owner_id,
        title=request.title,
        diagram_kind=request.diagram_kind,
        layout=request.layout,
        graph=request.graph,
        created_at=now,
        updated_at=now,
    )
    db_upsert_diagram(diagram)
    return diagram


@router.get("/diagrams")
def list_diagrams(
    limit: int = Query(default=50, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    owner_id: str = Depends(require_owner),
) -> list[StoredDiagram]:
    """list the caller's diagrams, most recently updated first."""
    return db_list_diagrams(owner_id, limit=limit, offset=offset)


@router.get("/diagrams/{diagram_id}")
def get_diagram(diagram_id: str, owner_id: str = Depends(require_owner)) -> StoredDiagram:
    """get one of the caller's diagrams."""
    diagram = db_get_diagram(owner_id, diagram_id)
    if not diagram:
        raise HTTPException(status_code=404, detail=f"Diagram not found: {diagram_id}")
    return diagram


@router.put("/diagrams/{diagram_id}")
def update_diagram(
    diagram_id: str,
    request: DiagramUpdate,
    owner_id: str = Depends(require_owner),
) -> StoredDiagram:
    """update a diagram; fields left out of the request are kept."""
    existing = db_get_diagram(owner_id, diagram_id)
    if not existing:
        raise HTTPException(status_code=404, detail=f"Diagram not found: {diagram_id}")
    _check_fields(request.diagram_kind, request.layout)

    changes = request.model_dump(exclude_unset=True, exclude_none=True)
    if request.graph is not None:
        changes["graph"] = request.graph
    diagram = existing.model_copy(update={**changes, "updated_at": utc_timestamp()})
    db_upsert_diagram(diagram)
    return diagram


@router.delete("/diagrams/{diagram_id}")
def delete_diagram(diagram_id: str, owner_id: str = Depends(require_owner)) -> dict:
    """delete one of the caller's diagrams."""
    if not db_delete_diagram(owner_id, diagram_id):
        raise HTTPException(status_code=404, detail=f"Diagram not found: {diagram_id}")
    return {"deleted": diagram_id}
