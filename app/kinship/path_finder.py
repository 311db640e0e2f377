"""
Relationship path finding.

Stored relationships are directed (to_person is the relationship_code of
from_person). The graph built here adds the inverse of every stored edge,
so a breadth-first search can walk the family in any direction and return
the shortest chain of relationships between two persons.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Iterable, Optional
from uuid import UUID

from app.config import settings
from app.ontology import Direction, RelationshipCode, get_direction, get_inverse_code


@dataclass
class GraphNode:
    id: UUID
    first_name: str
    last_name: str
    gender: Optional[str] = None


@dataclass
class GraphEdge:
    from_id: UUID
    to_id: UUID
    relationship_code: RelationshipCode  # to_id is this to from_id
    direction: Direction


@dataclass
class RelationshipGraph:
    nodes: dict[UUID, GraphNode] = field(default_factory=dict)
    adjacency: dict[UUID, list[GraphEdge]] = field(default_factory=dict)

    def add_node(self, node: GraphNode) -> None:
        if node.id not in self.nodes:
            self.nodes[node.id] = node
            self.adjacency[node.id] = []

    def add_edge(self, edge: GraphEdge) -> None:
        self.adjacency.setdefault(edge.from_id, []).append(edge)


@dataclass
class PathStep:
    """One person on a path and their relationship to the next person."""

    person_id: UUID
    first_name: str
    last_name: str
    gender: Optional[str]
    relationship_code: Optional[RelationshipCode]
    direction: Optional[Direction]


@dataclass
class PathResult:
    found: bool
    path_length: int = 0
    path: list[PathStep] = field(default_factory=list)

    @property
    def relationship_chain(self) -> list[RelationshipCode]:
        return [step.relationship_code for step in self.path if step.relationship_code]


def build_relationship_graph(persons: Iterable, relationships: Iterable) -> RelationshipGraph:
    """
    Build a bidirectional graph from Person and Relationship records.

    Relationship endpoints without a matching person become "Unknown" nodes.
    """
    graph = RelationshipGraph()

    for person in persons:
        graph.add_node(
            GraphNode(
                id=person.person_id,
                first_name=person.first_name or "",
                last_name=person.last_name or "",
                gender=person.gender.value if person.gender else None,
            )
        )

    for rel in relationships:
        for pid in (rel.from_person_id, rel.to_person_id):
            graph.add_node(GraphNode(id=pid, first_name="Unknown", last_name=""))

        code = RelationshipCode(rel.relationship_code)
        inverse = get_inverse_code(code)

        graph.add_edge(
            GraphEdge(
                from_id=rel.from_person_id,
                to_id=rel.to_person_id,
                relationship_code=code,
                direction=get_direction(code),
            )
        )
        graph.add_edge(
            GraphEdge(
                from_id=rel.to_person_id,
                to_id=rel.from_person_id,
                relationship_code=inverse,
                direction=get_direction(inverse),
            )
        )

    return graph


def find_path(
    graph: RelationshipGraph,
    start_id: UUID,
    end_id: UUID,
    max_depth: Optional[int] = None,
) -> PathResult:
    """Find the shortest relationship path between two persons using BFS."""
    if max_depth is None:
        max_depth = settings.path_max_depth

    if start_id not in graph.nodes or end_id not in graph.nodes:
        return PathResult(found=False)

    if start_id == end_id:
        return PathResult(found=True, path_length=0, path=[_step(graph, start_id, None)])

    # person_id -> (depth, edge that reached it)
    visited: dict[UUID, tuple[int, Optional[GraphEdge]]] = {start_id: (0, None)}
    queue = deque([start_id])

    while queue:
        current = queue.popleft()
        depth, _ = visited[current]
        if depth >= max_depth:
            continue

        for edge in graph.adjacency.get(current, []):
            if edge.to_id in visited:
                continue

            visited[edge.to_id] = (depth + 1, edge)
            if edge.to_id == end_id:
                return _build_path(graph, visited, end_id)
            queue.append(edge.to_id)

    return PathResult(found=False)


def _build_path(
    graph: RelationshipGraph,
    visited: dict[UUID, tuple[int, Optional[GraphEdge]]],
    end_id: UUID,
) -> PathResult:
    """Walk back from the target and emit steps front to back."""
    edges: list[GraphEdge] = []
    current = end_id
    while True:
        _, edge = visited[current]
        if edge is None:
            break
        edges.append(edge)
        current = edge.from_id
    edges.reverse()

    path = [_step(graph, edge.from_id, edge) for edge in edges]
    path.append(_step(graph, end_id, None))

    return PathResult(found=True, path_length=len(edges), path=path)


def _step(graph: RelationshipGraph, person_id: UUID, edge: Optional[GraphEdge]) -> PathStep:
    node = graph.nodes[person_id]
    return PathStep(
        person_id=person_id,
        first_name=node.first_name,
        last_name=node.last_name,
        gender=node.gender,
        relationship_code=edge.relationship_code if edge else None,
        direction=edge.direction if edge else None,
    )


def neighbourhood(
    graph: RelationshipGraph, person_id: UUID, depth: int
) -> tuple[list[GraphNode], list[GraphEdge]]:
    """
    Collect persons within `depth` hops of a person.

    Returns the reached nodes (root first) and one edge per related pair,
    oriented away from the person nearer to the root.
    """
    if person_id not in graph.nodes:
        return [], []

    distances = {person_id: 0}
    queue = deque([person_id])
    while queue:
        current = queue.popleft()
        if distances[current] >= depth:
            continue
        for edge in graph.adjacency.get(current, []):
            if edge.to_id not in distances:
                distances[edge.to_id] = distances[current] + 1
                queue.append(edge.to_id)

    nodes = [graph.nodes[pid] for pid in distances]

    edges = []
    seen = set()
    for pid in distances:
        for edge in graph.adjacency.get(pid, []):
            if edge.to_id not in distances:
                continue
            key = frozenset((edge.from_id, edge.to_id))
            if key in seen:
                continue
            seen.add(key)
            edges.append(edge)

    return nodes, edges
