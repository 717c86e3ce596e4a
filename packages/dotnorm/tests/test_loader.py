import pytest

from dotnorm.errors import RawAstError
from dotnorm.normalizer import normalize
from dotnorm.parser.ast import (
    AttrPair,
    AttrStatement,
    AttrTarget,
    EdgeStatement,
    NodeId,
    NodeStatement,
    RawGraph,
    RawSubgraph,
    StatementKind,
)
from dotnorm.parser.loader import load_attr_list, load_statement, load_statements


def _attr(key, value):
    return {"type": "attr", "id": key, "eq": value}


def test_loader_builds_typed_statements_from_tagged_mappings():
    data = [
        {
            "type": "digraph",
            "id": "G",
            "strict": True,
            "children": [
                {"type": "attr_stmt", "target": "node", "attr_list": [_attr("shape", "box")]},
                {
                    "type": "node_stmt",
                    "node_id": {"type": "node_id", "id": "a"},
                    "attr_list": [_attr("color", "red")],
                },
                {
                    "type": "edge_stmt",
                    "edge_list": [{"type": "node_id", "id": "a"}, {"type": "node_id", "id": "b"}],
                    "attr_list": [],
                },
                {"type": "subgraph", "id": "inner", "children": []},
            ],
        }
    ]

    assert load_statements(data) == [
        RawGraph(
            kind=StatementKind.DIGRAPH,
            id="G",
            strict=True,
            children=[
                AttrStatement(target=AttrTarget.NODE, attr_list=[AttrPair("shape", "box")]),
                NodeStatement(node_id=NodeId("a"), attr_list=[AttrPair("color", "red")]),
                EdgeStatement(edge_list=[NodeId("a"), NodeId("b")]),
                RawSubgraph(id="inner"),
            ],
        )
    ]


def test_loader_defaults_absent_optional_fields_to_empty():
    statements = load_statements(
        [
            {"type": "graph"},
            {"type": "subgraph"},
            {"type": "node_stmt", "node_id": {"id": "n"}},
            {"type": "edge_stmt"},
        ]
    )

    assert statements == [
        RawGraph(kind=StatementKind.GRAPH),
        RawSubgraph(),
        NodeStatement(node_id=NodeId("n")),
        EdgeStatement(),
    ]


def test_loader_drops_unknown_tags_and_attr_targets():
    statements = load_statements(
        [
            {"type": "comment", "value": "hi"},
            {"type": "attr_stmt", "target": "cluster", "attr_list": [_attr("a", "b")]},
            {"type": "graph", "children": [{"type": "mystery"}]},
        ]
    )

    assert statements == [RawGraph(kind=StatementKind.GRAPH)]


def test_loader_skips_attr_entries_without_id_or_attr_tag():
    pairs = load_attr_list(
        [
            _attr("shape", "box"),
            {"type": "attr", "eq": "orphan"},
            {"type": "attr", "id": "", "eq": "blank"},
            {"type": "node_id", "id": "a"},
            _attr("width", 2),
        ]
    )

    assert pairs == [AttrPair("shape", "box"), AttrPair("width", "2")]


def test_loader_reads_ports_on_edge_endpoints():
    statement = load_statement(
        {
            "type": "edge_stmt",
            "edge_list": [
                {"type": "node_id", "id": "a", "port": {"type": "port", "id": "p", "compass_pt": "n"}},
                {"type": "node_id", "id": "b"},
            ],
        }
    )

    assert statement == EdgeStatement(edge_list=[NodeId("a", port="p:n"), NodeId("b")])


def test_loader_rejects_subgraph_edge_endpoints():
    data = [
        {
            "type": "digraph",
            "children": [
                {
                    "type": "edge_stmt",
                    "edge_list": [
                        {"type": "node_id", "id": "a"},
                        {"type": "subgraph", "children": [{"type": "node_stmt", "node_id": {"id": "x"}}]},
                        {"type": "node_id", "id": "b"},
                    ],
                }
            ],
        }
    ]

    with pytest.raises(RawAstError):
        load_statements(data)
    with pytest.raises(RawAstError):
        normalize(data)


def test_loader_stringifies_scalars_like_javascript():
    statement = load_statement(
        {
            "type": "node_stmt",
            "node_id": {"type": "node_id", "id": 1.0},
            "attr_list": [_attr("fixed", True), _attr("off", False), _attr("ratio", 0.5)],
        }
    )

    assert statement == NodeStatement(
        node_id=NodeId("1"),
        attr_list=[AttrPair("fixed", "true"), AttrPair("off", "false"), AttrPair("ratio", "0.5")],
    )


def test_loader_reads_html_ids_as_text():
    statement = load_statement(
        {"type": "digraph", "id": {"type": "id", "value": "<b>G</b>", "html": True}}
    )

    assert statement.id == "<b>G</b>"


def test_loader_returns_none_for_unknown_tag():
    assert load_statement({"type": "comment"}) is None


@pytest.mark.parametrize(
    "item",
    [
        "digraph",
        {"type": "node_stmt"},
        {"type": "node_stmt", "node_id": {"type": "node_id"}},
        {"type": "node_stmt", "node_id": {"type": "node_id", "id": ["a"]}},
    ],
)
def test_loader_rejects_out_of_contract_items(item):
    with pytest.raises(RawAstError):
        load_statement(item)
