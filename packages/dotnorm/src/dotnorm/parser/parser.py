import logging

from dotnorm.errors import DotSyntaxError
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
from dotnorm.parser.lexer import EDGE_OPERATORS, ID_KINDS, Token, lex

logger = logging.getLogger(__name__)

EDGE_OPERATOR_KINDS = frozenset(EDGE_OPERATORS.values())
GRAPH_KEYWORDS = {"graph", "digraph"}
ATTR_KEYWORDS = {target.value for target in AttrTarget}


class DotParser:
    def __init__(self, source: str):
        self._source = source
        self._tokens = lex(source)
        self._index = 0

    def parse(self) -> list[RawGraph]:
        graphs: list[RawGraph] = []
        while self._peek().kind != "EOF":
            graphs.append(self._parse_graph())
        return graphs

    def _parse_graph(self) -> RawGraph:
        strict = False
        if self._peek_keyword("strict"):
            self._consume()
            strict = True

        token = self._peek()
        keyword = _keyword(token)
        if keyword not in GRAPH_KEYWORDS:
            raise self._error(token, "Expected 'graph' or 'digraph'")
        self._consume()

        graph_id = None
        if self._peek().kind in ID_KINDS:
            graph_id = self._expect_id()

        return RawGraph(
            kind=StatementKind(keyword),
            id=graph_id,
            strict=strict,
            children=self._parse_block(),
        )

    def _parse_block(self) -> list[RawStatement]:
        self._expect("LBRACE")
        statements: list[RawStatement] = []

        while self._peek().kind not in {"RBRACE", "EOF"}:
            statements.append(self._parse_statement())
            if self._peek().kind == "SEMICOLON":
                self._consume()

        self._expect("RBRACE")
        return statements

    def _parse_statement(self) -> RawStatement:
        if self._at_subgraph():
            subgraph = self._parse_subgraph()
            if self._peek().kind in EDGE_OPERATOR_KINDS:
                raise self._error(self._peek(), "Subgraph edge endpoints are not supported")
            return subgraph

        token = self._peek()
        if token.kind not in ID_KINDS:
            raise self._error(token, "Expected statement")

        keyword = _keyword(token)
        if keyword in ATTR_KEYWORDS:
            self._consume()
            return AttrStatement(target=AttrTarget(keyword), attr_list=self._parse_attr_list())

        name = self._expect_id()
        if self._peek().kind == "EQUALS":
            self._consume()
            value = self._expect_id()
            return AttrStatement(target=AttrTarget.GRAPH, attr_list=[AttrPair(id=name, eq=value)])

        node_id = self._parse_node_id(name)
        if self._peek().kind in EDGE_OPERATOR_KINDS:
            return self._parse_edge_statement(node_id)

        return NodeStatement(node_id=node_id, attr_list=self._parse_attr_list(optional=True))

    def _parse_subgraph(self) -> RawSubgraph:
        subgraph_id = None
        if self._peek_keyword("subgraph"):
            self._consume()
            if self._peek().kind in ID_KINDS:
                subgraph_id = self._expect_id()
        return RawSubgraph(id=subgraph_id, children=self._parse_block())

    def _parse_edge_statement(self, first: NodeId) -> EdgeStatement:
        chain = [first]
        while self._peek().kind in EDGE_OPERATOR_KINDS:
            self._consume()
            if self._at_subgraph():
                raise self._error(self._peek(), "Subgraph edge endpoints are not supported")
            chain.append(self._parse_node_id())

        return EdgeStatement(edge_list=chain, attr_list=self._parse_attr_list(optional=True))

    def _parse_node_id(self, name: str | None = None) -> NodeId:
        node_id = name if name is not None else self._expect_id()
        port: list[str] = []
        while self._peek().kind == "COLON" and len(port) < 2:
            self._consume()
            port.append(self._expect_id())
        return NodeId(id=node_id, port=":".join(port) or None)

    def _parse_attr_list(self, optional: bool = False) -> list[AttrPair]:
        if optional and self._peek().kind != "LBRACKET":
            return []

        attrs: list[AttrPair] = []
        self._expect("LBRACKET")
        while True:
            while self._peek().kind != "RBRACKET":
                key = self._expect_id()
                self._expect("EQUALS")
                value = self._expect_id()
                attrs.append(AttrPair(id=key, eq=value))
                if self._peek().kind in {"COMMA", "SEMICOLON"}:
                    self._consume()
            self._expect("RBRACKET")
            if self._peek().kind != "LBRACKET":
                return attrs
            self._consume()

    def _expect_id(self) -> str:
        token = self._peek()
        if token.kind not in ID_KINDS:
            raise self._error(token, "Expected identifier")
        value = self._consume().value

        if token.kind == "STRING":
            while self._peek().kind == "PLUS":
                self._consume()
                following = self._peek()
                if following.kind != "STRING":
                    raise self._error(following, "Expected quoted string after '+'")
                value += self._consume().value
        return value

    def _expect(self, kind: str) -> Token:
        token = self._peek()
        if token.kind != kind:
            raise self._error(token, f"Expected {kind}")
        return self._consume()

    def _at_subgraph(self) -> bool:
        return self._peek().kind == "LBRACE" or self._peek_keyword("subgraph")

    def _peek_keyword(self, value: str) -> bool:
        return _keyword(self._peek()) == value

    def _peek(self, offset: int = 0) -> Token:
        return self._tokens[min(self._index + offset, len(self._tokens) - 1)]

    def _consume(self) -> Token:
        token = self._tokens[self._index]
        self._index += 1
        return token

    def _error(self, token: Token, message: str) -> DotSyntaxError:
        return DotSyntaxError.at(self._source, token.position, message)


def _keyword(token: Token) -> str:
    # Keywords are case-insensitive and never quoted.
    return token.value.lower() if token.kind == "IDENT" else ""


def parse_dot(source: str) -> list[RawGraph]:
    graphs = DotParser(source).parse()
    logger.debug("Read %d graph(s) from %d characters of DOT", len(graphs), len(source))
    return graphs
