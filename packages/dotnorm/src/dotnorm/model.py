"""Resolved graph model produced by the normalizer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class GraphKind(str, Enum):
    GRAPH = "graph"
    DIGRAPH = "digraph"


@dataclass(slots=True)
class Node:
    id: str
    attr: dict[str, str] = field(default_factory=dict)


@dataclass(slots=True)
class Edge:
    """A single source -> target link. Endpoints are node ids, not Node objects."""

    source: str
    target: str
    attr: dict[str, str] = field(default_factory=dict)


@dataclass(slots=True)
class SubGraph:
    id: str | None = None
    nodes: list[SubGraph | Node] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)
    attr: dict[str, str] = field(default_factory=dict)


@dataclass(slots=True)
class Graph:
    kind: GraphKind
    strict: bool = False
    id: str | None = None
    nodes: list[SubGraph | Node] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)
    attr: dict[str, str] = field(default_factory=dict)
