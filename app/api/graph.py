"""Graph API endpoints."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session, select

from app.config import settings
from app.database import get_session
from app.kinship.degree import calculate_relationship_degree, degrees_of_separation
from app.kinship.path_finder import (
    GraphEdge,
    GraphNode,
    RelationshipGraph,
    build_relationship_graph,
    find_path,
    neighbourhood,
)
from app.models import Person, Relationship
from app.ontology import Locale

router = APIRouter()


def load_relationship_graph(session: Session) -> RelationshipGraph:
    """Build the relationship graph from all active persons and stored relationships."""
    persons = session.exec(select(Person).where(Person.is_active == True)).all()
    relationships = session.exec(select(Relationship)).all()
    return build_relationship_graph(persons, relationships)


def serialize_node(node: GraphNode, root_id: Optional[UUID] = None) -> dict:
    return {
        "id": str(node.id),
        "label": " ".join(part for part in (node.first_name, node.last_name) if part) or "Unknown",
        "gender": node.gender,
        "is_root": node.id == root_id,
    }


def serialize_edge(edge: GraphEdge) -> dict:
    return {
        "source": str(edge.from_id),
        "target": str(edge.to_id),
        "relationship": edge.relationship_code.value,
        "direction": edge.direction.value,
    }


@router.get("/path")
async def get_relationship_path(
    from_id: UUID,
    to_id: UUID,
    locale: Optional[Locale] = Query(None),
    max_depth: Optional[int] = Query(None, ge=1, le=50),
    session: Session = Depends(get_session),
) -> dict:
    """
    Find how two persons are related.

    Returns the shortest chain of relationships between them, the
    relationship it amounts to, and the degree of separation.
    """
    for person_id in (from_id, to_id):
        if not session.get(Person, person_id):
            raise HTTPException(status_code=404, detail=f"Person not found: {person_id}")

    locale = locale or settings.default_locale
    graph = load_relationship_graph(session)
    result = find_path(graph, from_id, to_id, max_depth=max_depth)
    degree = calculate_relationship_degree(result.path, locale)

    return {
        "from_id": str(from_id),
        "to_id": str(to_id),
        "found": result.found,
        "path_length": result.path_length,
        "path": [
            {
                "person_id": str(step.person_id),
                "first_name": step.first_name,
                "last_name": step.last_name,
                "gender": step.gender,
                "relationship": step.relationship_code.value if step.relationship_code else None,
                "direction": step.direction.value if step.direction else None,
            }
            for step in result.path
        ],
        "relationship": {
            "label": degree.label,
            "description": degree.description,
            "degree": degree.degree,
            "category": degree.category.value,
        },
        "separation": degrees_of_separation(result.path_length, locale) if result.found else None,
    }


@router.get("/lineage/{person_id}")
async def get_lineage(
    person_id: UUID,
    depth: int = Query(default=2, ge=1, description="Traversal depth"),
    session: Session = Depends(get_session),
) -> dict:
    """
    Get lineage subgraph around a person.

    Returns nodes (persons) and edges (relationships) within depth levels.
    """
    if not session.get(Person, person_id):
        raise HTTPException(status_code=404, detail="Person not found")

    depth = min(depth, settings.lineage_max_depth)
    graph = load_relationship_graph(session)
    nodes, edges = neighbourhood(graph, person_id, depth)

    return {
        "root_person_id": str(person_id),
        "depth": depth,
        "nodes": [serialize_node(node, person_id) for node in nodes],
        "edges": [serialize_edge(edge) for edge in edges],
        "total_nodes": len(nodes),
        "total_edges": len(edges),
    }
