from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar


class StatementKind(str, Enum):
    """Discriminator for the raw statement tagged union."""

    GRAPH = "graph"
    DIGRAPH = "digraph"
    SUBGRAPH = "subgraph"
    NODE_STMT = "node_stmt"
    EDGE_STMT = "edge_stmt"
    ATTR_STMT = "attr_stmt"


class AttrTarget(str, Enum):
    GRAPH = "graph"
    NODE = "node"
    EDGE = "edge"


@dataclass(slots=True)
class AttrPair:
    id: str
    eq: str


@dataclass(slots=True)
class NodeId:
    id: str
    port: str | None = None


@dataclass(slots=True)
class NodeStatement:
    node_id: NodeId
    attr_list: list[AttrPair] = field(default_factory=list)

    kind: ClassVar[StatementKind] = StatementKind.NODE_STMT


@dataclass(slots=True)
class EdgeStatement:
    edge_list: list[NodeId] = field(default_factory=list)
    attr_list: list[AttrPair] = field(default_factory=list)

    kind: ClassVar[StatementKind] = StatementKind.EDGE_STMT


@dataclass(slots=True)
class AttrStatement:
    target: AttrTarget
    attr_list: list[AttrPair] = field(default_factory=list)

    kind: ClassVar[StatementKind] = StatementKind.ATTR_STMT


@dataclass(slots=True)
class RawSubgraph:
    id: str | None = None
    children: list["RawStatement"] = field(default_factory=list)

    kind: ClassVar[StatementKind] = StatementKind.SUBGRAPH


@dataclass(slots=True)
class RawGraph:
    kind: StatementKind
    id: str | None = None
    strict: bool = False
    children: list["RawStatement"] = field(default_factory=list)


RawStatement = RawGraph | RawSubgraph | NodeStatement | EdgeStatement | AttrStatement
