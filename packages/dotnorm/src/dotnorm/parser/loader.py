"""Load the untyped, ``type``-tagged statement tree emitted by DOT parsers.

The input follows the dotparser JSON shape::

    [{"type": "digraph", "id": "G", "strict": false, "children": [
        {"type": "node_stmt", "node_id": {"type": "node_id", "id": "a"},
         "attr_list": [{"type": "attr", "id": "shape", "eq": "box"}]}]}]

Optional fields may be absent and default to empty. Statements with an
unknown tag and attribute entries that are not ``attr`` pairs with an id are
dropped. Edge endpoints must be plain ``node_id`` references; subgraph
endpoints are rejected. Scalar ids and
values are rendered as text the way JavaScript stringifies them.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from dotnorm.errors import RawAstError
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
    StatementKind,
)

logger = logging.getLogger(__name__)

_ATTR_TARGETS = {target.value: target for target in AttrTarget}


def load_statements(data: Iterable[Any]) -> list[RawStatement]:
    statements: list[RawStatement] = []
    for item in data:
        statement = load_statement(item)
        if statement is not None:
            statements.append(statement)
    return statements


def load_statement(item: Any) -> RawStatement | None:
    """Convert one tagged mapping, or return ``None`` when its tag is not a statement."""
    if not isinstance(item, Mapping):
        raise RawAstError(f"Expected a statement mapping, got {type(item).__name__}")

    tag = item.get("type")
    if tag in (StatementKind.GRAPH.value, StatementKind.DIGRAPH.value):
        return RawGraph(
            kind=StatementKind(tag),
            id=_optional_text(item.get("id")),
            strict=bool(item.get("strict", False)),
            children=load_statements(item.get("children") or []),
        )

    if tag == StatementKind.SUBGRAPH.value:
        return RawSubgraph(
            id=_optional_text(item.get("id")),
            children=load_statements(item.get("children") or []),
        )

    if tag == StatementKind.NODE_STMT.value:
        node_id = _load_node_id(item.get("node_id"))
        if node_id is None:
            raise RawAstError("node_stmt is missing node_id.id")
        return NodeStatement(node_id=node_id, attr_list=load_attr_list(item.get("attr_list") or []))

    if tag == StatementKind.EDGE_STMT.value:
        endpoints = [_load_node_id(endpoint) for endpoint in item.get("edge_list") or []]
        if None in endpoints:
            raise RawAstError("edge_stmt endpoints must be node_id references with an id")
        return EdgeStatement(
            edge_list=endpoints,
            attr_list=load_attr_list(item.get("attr_list") or []),
        )

    if tag == StatementKind.ATTR_STMT.value:
        target = _ATTR_TARGETS.get(item.get("target"))
        if target is None:
            logger.debug("Dropping attr_stmt with unknown target %r", item.get("target"))
            return None
        return AttrStatement(target=target, attr_list=load_attr_list(item.get("attr_list") or []))

    logger.debug("Dropping raw statement with unknown tag %r", tag)
    return None


def load_attr_list(data: Iterable[Any]) -> list[AttrPair]:
    pairs: list[AttrPair] = []
    for entry in data:
        if not isinstance(entry, Mapping) or entry.get("type") != "attr":
            continue
        key = _optional_text(entry.get("id"))
        if not key:
            continue
        pairs.append(AttrPair(id=key, eq=_optional_text(entry.get("eq")) or ""))
    return pairs


def _load_node_id(data: Any) -> NodeId | None:
    if not isinstance(data, Mapping) or data.get("type", "node_id") != "node_id":
        return None
    node_id = _optional_text(data.get("id"))
    if node_id is None:
        return None
    return NodeId(id=node_id, port=_port_text(data.get("port")))


def _port_text(port: Any) -> str | None:
    if not isinstance(port, Mapping):
        return _optional_text(port)
    parts = [_optional_text(port.get("id")), _optional_text(port.get("compass_pt"))]
    return ":".join(part for part in parts if part) or None


def _optional_text(value: Any) -> str | None:
    # dotparser reports HTML ids as {"type": "id", "value": ..., "html": true}
    if isinstance(value, Mapping):
        value = value.get("value")
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (str, int, float)):
        return str(value)
    raise RawAstError(f"Expected a text value, got {type(value).__name__}")
