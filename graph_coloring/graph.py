from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

NodeId = str


@dataclass(frozen=True)
class Node:
    id: NodeId
    label: str = ""


@dataclass(frozen=True)
class Edge:
    source: NodeId
    target: NodeId

    @property
    def is_self_loop(self) -> bool:
        return self.source == self.target


class GraphValidationError(ValueError):
    """Raised by `build_graph` when the raw input cannot form a graph.

    Every problem found is listed in `issues`, so callers can report them
    all at once instead of re-prompting one mistake at a time.
    """

    def __init__(self, issues: Sequence[str]) -> None:
        self.issues: List[str] = list(issues)
        super().__init__("; ".join(self.issues) or "Invalid graph")


class Graph:
    """An undirected graph whose node order fixes search and reveal order.

    Instances are built by `build_graph` and are not modified afterwards.
    Neighbor iteration follows edge-declaration order, so a given input
    always produces the same search.
    """

    def __init__(self, nodes: Sequence[Node], edges: Sequence[Edge]) -> None:
        self._nodes: Tuple[Node, ...] = tuple(nodes)
        self._edges: Tuple[Edge, ...] = tuple(edges)
        self._index: Dict[NodeId, int] = {n.id: i for i, n in enumerate(self._nodes)}

        # dicts as insertion-ordered sets
        adj: Dict[NodeId, Dict[NodeId, None]] = {n.id: {} for n in self._nodes}
        for e in self._edges:
            adj[e.source][e.target] = None
            adj[e.target][e.source] = None
        self._adj: Dict[NodeId, Tuple[NodeId, ...]] = {u: tuple(nbs) for u, nbs in adj.items()}

        loops: Dict[NodeId, None] = {}
        for e in self._edges:
            if e.is_self_loop:
                loops[e.source] = None
        self._self_loops: Tuple[NodeId, ...] = tuple(loops)

    @property
    def nodes(self) -> Tuple[Node, ...]:
        return self._nodes

    @property
    def edges(self) -> Tuple[Edge, ...]:
        return self._edges

    @property
    def node_ids(self) -> List[NodeId]:
        return [n.id for n in self._nodes]

    @property
    def self_loops(self) -> Tuple[NodeId, ...]:
        return self._self_loops

    def neighbors(self, u: NodeId) -> Tuple[NodeId, ...]:
        try:
            return self._adj[u]
        except KeyError as e:
            raise KeyError(f"Unknown node: {u!r}") from e

    def degree(self, u: NodeId) -> int:
        return len(self.neighbors(u))

    def index_of(self, u: NodeId) -> int:
        try:
            return self._index[u]
        except KeyError as e:
            raise KeyError(f"Unknown node: {u!r}") from e

    def adjacency(self) -> Dict[NodeId, List[NodeId]]:
        return {u: list(nbs) for u, nbs in self._adj.items()}

    def unique_edges(self) -> Iterator[Tuple[NodeId, NodeId]]:
        """Yield each undirected edge once, in declaration order."""
        seen = set()
        for e in self._edges:
            key = frozenset((e.source, e.target))
            if key in seen:
                continue
            seen.add(key)
            yield (e.source, e.target)

    def __contains__(self, u: object) -> bool:
        return u in self._index

    def __len__(self) -> int:
        return len(self._nodes)

    def to_networkx(self):
        """Convert to a networkx.Graph for layout and ad-hoc experimentation."""
        import networkx as nx

        g = nx.Graph()
        for node in self._nodes:
            g.add_node(node.id, label=node.label)
        g.add_edges_from(self.unique_edges())
        return g


def _raw_id(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = value if isinstance(value, str) else str(value)
    if not text.strip():
        return None
    return text


def _node_fields(raw: Any) -> Tuple[Any, Any]:
    if isinstance(raw, Node):
        return raw.id, raw.label
    if isinstance(raw, Mapping):
        return raw.get("id"), raw.get("label")
    # bare id
    return raw, None


def _edge_fields(raw: Any) -> Tuple[Any, Any]:
    if isinstance(raw, Edge):
        return raw.source, raw.target
    if isinstance(raw, Mapping):
        return raw.get("from", raw.get("source")), raw.get("to", raw.get("target"))
    if isinstance(raw, (list, tuple)) and len(raw) == 2:
        return raw[0], raw[1]
    raise TypeError(f"Unsupported edge record: {raw!r}")


def build_graph(nodes: Iterable[Any], edges: Iterable[Any] = ()) -> Graph:
    """Validate raw node/edge records and build a `Graph`.

    Node records may be `Node` instances, ``{"id", "label"}`` mappings or bare
    ids. Edge records may be `Edge` instances, ``{"from", "to"}`` mappings or
    ``[from, to]`` pairs. Self-loops are accepted and reported through
    `Graph.self_loops`; the solver treats them as uncolorable.
    """

    for name, records in (("nodes", nodes), ("edges", edges)):
        if isinstance(records, (str, bytes, Mapping)) or not isinstance(records, Iterable):
            raise GraphValidationError([f"{name} must be a list of records (got {type(records).__name__})"])

    issues: List[str] = []
    built_nodes: List[Node] = []
    seen: Dict[NodeId, int] = {}

    for i, raw in enumerate(nodes):
        raw_id, raw_label = _node_fields(raw)
        node_id = _raw_id(raw_id)
        if node_id is None:
            issues.append(f"Node #{i}: id must not be blank")
            continue
        if node_id in seen:
            issues.append(f"Node #{i}: duplicate id {node_id!r} (first declared at #{seen[node_id]})")
            continue
        seen[node_id] = i
        label = raw_label if isinstance(raw_label, str) and raw_label.strip() else node_id
        built_nodes.append(Node(id=node_id, label=label))

    built_edges: List[Edge] = []
    for i, raw in enumerate(edges):
        try:
            raw_u, raw_v = _edge_fields(raw)
        except TypeError as e:
            issues.append(f"Edge #{i}: {e}")
            continue
        u = _raw_id(raw_u)
        v = _raw_id(raw_v)
        bad = False
        for end, value in (("from", u), ("to", v)):
            if value is None:
                issues.append(f"Edge #{i}: {end!r} endpoint is blank")
                bad = True
            elif value not in seen:
                issues.append(f"Edge #{i}: {end!r} endpoint {value!r} is not a declared node")
                bad = True
        if not bad:
            built_edges.append(Edge(source=u, target=v))  # type: ignore[arg-type]

    if issues:
        raise GraphValidationError(issues)

    return Graph(built_nodes, built_edges)
