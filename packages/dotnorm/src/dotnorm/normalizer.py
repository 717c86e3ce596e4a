"""Reduce raw DOT statements into resolved graphs.

Default attributes set by ``graph|node|edge [..]`` statements cascade into
nested subgraphs by copy, so a subgraph never leaks defaults to its parent
or siblings. Node identity is shared by reference across every scope of one
top-level graph: a node appears once, in the scope that first mentions it,
and later mentions only merge attributes into it.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from dotnorm.model import Edge, Graph, GraphKind, Node, SubGraph
from dotnorm.parser.ast import (
    AttrPair,
    AttrStatement,
    AttrTarget,
    EdgeStatement,
    NodeId,
    NodeStatement,
    RawGraph,
    RawStatement,
    RawSubgraph,
)
from dotnorm.parser.loader import load_statement

logger = logging.getLogger(__name__)

Attrs = dict[str, str]
NodeTable = dict[str, Node]


@dataclass(slots=True)
class ScopeState:
    graph_attrs: Attrs = field(default_factory=dict)
    node_attrs: Attrs = field(default_factory=dict)
    edge_attrs: Attrs = field(default_factory=dict)

    def clone(self) -> "ScopeState":
        return ScopeState(
            graph_attrs=dict(self.graph_attrs),
            node_attrs=dict(self.node_attrs),
            edge_attrs=dict(self.edge_attrs),
        )

    def defaults_for(self, target: AttrTarget) -> Attrs:
        if target is AttrTarget.NODE:
            return self.node_attrs
        if target is AttrTarget.EDGE:
            return self.edge_attrs
        return self.graph_attrs


def normalize(statements: Iterable[RawStatement | Mapping[str, Any]]) -> list[Graph]:
    """Resolve every top-level ``graph``/``digraph``; other statements are ignored.

    Untyped, ``type``-tagged mappings are accepted and loaded first.
    """
    graphs: list[Graph] = []
    for statement in statements:
        if isinstance(statement, Mapping):
            statement = load_statement(statement)
        if isinstance(statement, RawGraph):
            graphs.append(reduce_graph(statement))
        else:
            logger.debug("Ignoring top-level statement %s", _describe(statement))
    return graphs


def reduce_graph(graph: RawGraph) -> Graph:
    # Node identity never crosses top-level graphs.
    node_table: NodeTable = {}
    body = reduce_subgraph(
        RawSubgraph(id=graph.id, children=graph.children),
        ScopeState(),
        node_table,
    )
    logger.debug(
        "Resolved %s %r: %d node(s), %d top-level edge(s)",
        graph.kind.value,
        graph.id,
        len(node_table),
        len(body.edges),
    )
    return Graph(
        kind=GraphKind(graph.kind.value),
        strict=graph.strict,
        id=body.id,
        nodes=body.nodes,
        edges=body.edges,
        attr=body.attr,
    )


def reduce_subgraph(subgraph: RawSubgraph, scope: ScopeState, node_table: NodeTable) -> SubGraph:
    """Fold the children of one scope in order.

    ``scope`` belongs to this call and is mutated by attribute statements;
    its graph defaults become the returned subgraph's ``attr``. Edges stay
    with the subgraph that declares them.
    """
    entries: list[SubGraph | Node] = []
    edges: list[Edge] = []

    for statement in subgraph.children:
        if isinstance(statement, RawSubgraph):
            entries.append(reduce_subgraph(statement, scope.clone(), node_table))
        elif isinstance(statement, NodeStatement):
            entries.extend(process_node(statement, node_table, scope.node_attrs))
        elif isinstance(statement, EdgeStatement):
            new_edges, new_nodes = process_edge(
                statement, node_table, scope.node_attrs, scope.edge_attrs
            )
            entries.extend(new_nodes)
            edges.extend(new_edges)
        elif isinstance(statement, AttrStatement):
            scope.defaults_for(statement.target).update(merge_attr_list(statement.attr_list))
        else:
            logger.debug("Ignoring %s inside subgraph %r", _describe(statement), subgraph.id)

    return SubGraph(id=subgraph.id, nodes=entries, edges=edges, attr=scope.graph_attrs)


def process_node(statement: NodeStatement, node_table: NodeTable, node_attrs: Attrs) -> list[Node]:
    """Return ``[node]`` when the id is new, ``[]`` when it merged into an existing node."""
    attrs = merge_attr_list(statement.attr_list)
    node_id = statement.node_id.id

    existing = node_table.get(node_id)
    if existing is not None:
        existing.attr.update(attrs)
        return []

    node = Node(id=node_id, attr={**node_attrs, **attrs})
    node_table[node_id] = node
    return [node]


def process_edge(
    statement: EdgeStatement,
    node_table: NodeTable,
    node_attrs: Attrs,
    edge_attrs: Attrs,
) -> tuple[list[Edge], list[Node]]:
    endpoints = [endpoint.id for endpoint in statement.edge_list]
    if not endpoints:
        return [], []

    nodes: list[Node] = []
    for node_id in endpoints:
        if node_id not in node_table:
            implicit = NodeStatement(node_id=NodeId(id=node_id))
            nodes.extend(process_node(implicit, node_table, node_attrs))

    attrs = merge_attr_list(statement.attr_list)
    edges = [
        Edge(source=source, target=target, attr={**edge_attrs, **attrs})
        for source, target in zip(endpoints, endpoints[1:])
    ]
    return edges, nodes


def merge_attr_list(attr_list: Iterable[Any]) -> Attrs:
    """Fold attribute pairs into one mapping; later keys win, id-less entries are skipped."""
    merged: Attrs = {}
    for pair in attr_list:
        if not isinstance(pair, AttrPair) or not pair.id:
            continue
        merged[pair.id] = pair.eq
    return merged


def _describe(statement: Any) -> str:
    kind = getattr(statement, "kind", None)
    return kind.value if kind is not None else type(statement).__name__
