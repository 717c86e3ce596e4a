import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from dotnorm.model import Edge, Graph, Node, SubGraph


def to_dict(entry: Graph | SubGraph | Node | Edge) -> dict[str, Any]:
    """Render an output entry as plain data tagged by ``type``."""
    if isinstance(entry, Node):
        return {"type": "node", "id": entry.id, "attr": dict(entry.attr)}

    if isinstance(entry, Edge):
        return {
            "type": "edge",
            "source": entry.source,
            "target": entry.target,
            "attr": dict(entry.attr),
        }

    if isinstance(entry, Graph):
        payload: dict[str, Any] = {"type": entry.kind.value}
        if entry.strict:
            payload["strict"] = True
    else:
        payload = {"type": "subgraph"}

    if entry.id is not None:
        payload["id"] = entry.id
    payload["nodes"] = [to_dict(child) for child in entry.nodes]
    payload["edges"] = [to_dict(edge) for edge in entry.edges]
    payload["attr"] = dict(entry.attr)
    return payload


def dumps(graphs: Iterable[Graph], indent: int | None = 2) -> str:
    return json.dumps([to_dict(graph) for graph in graphs], indent=indent, ensure_ascii=False)


def dump(graphs: Iterable[Graph], path: str | Path, indent: int | None = 2) -> None:
    output_path = Path(path)
    output_path.write_text(dumps(graphs, indent=indent), encoding="utf-8")
