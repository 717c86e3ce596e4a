import re
from dataclasses import dataclass

from dotnorm.errors import DotSyntaxError


@dataclass(slots=True, frozen=True)
class Token:
    kind: str
    value: str
    position: int


SINGLE_CHAR_TOKENS = {
    "{": "LBRACE",
    "}": "RBRACE",
    "[": "LBRACKET",
    "]": "RBRACKET",
    "=": "EQUALS",
    ",": "COMMA",
    ";": "SEMICOLON",
    ":": "COLON",
    "+": "PLUS",
}

EDGE_OPERATORS = {
    "->": "ARROW",
    "--": "LINE",
}

ID_KINDS = frozenset({"IDENT", "NUMERAL", "STRING", "HTML"})

_NUMERAL = re.compile(r"-?(?:\.[0-9]+|[0-9]+(?:\.[0-9]*)?)")


def lex(source: str) -> list[Token]:
    tokens: list[Token] = []
    index = 0
    length = len(source)

    while index < length:
        char = source[index]
        if char.isspace():
            index += 1
            continue

        if source.startswith("//", index) or (char == "#" and _at_line_start(source, index)):
            index = _skip_to_line_end(source, index)
            continue

        if source.startswith("/*", index):
            index = _skip_block_comment(source, index)
            continue

        if char == '"':
            value, end = _read_string(source, index)
            tokens.append(Token("STRING", value, index))
            index = end
            continue

        if char == "<":
            value, end = _read_html(source, index)
            tokens.append(Token("HTML", value, index))
            index = end
            continue

        operator = EDGE_OPERATORS.get(source[index : index + 2])
        if operator is not None:
            tokens.append(Token(operator, source[index : index + 2], index))
            index += 2
            continue

        numeral = _NUMERAL.match(source, index)
        if numeral is not None:
            tokens.append(Token("NUMERAL", numeral.group(), index))
            index = numeral.end()
            continue

        token_kind = SINGLE_CHAR_TOKENS.get(char)
        if token_kind is not None:
            tokens.append(Token(token_kind, char, index))
            index += 1
            continue

        if _is_identifier_start(char):
            value, end = _read_identifier(source, index)
            tokens.append(Token("IDENT", value, index))
            index = end
            continue

        raise DotSyntaxError.at(source, index, f"Unexpected character {char!r}")

    tokens.append(Token("EOF", "", len(source)))
    return tokens


def _at_line_start(source: str, index: int) -> bool:
    line_start = source.rfind("\n", 0, index) + 1
    return not source[line_start:index].strip()


def _skip_to_line_end(source: str, index: int) -> int:
    while index < len(source) and source[index] != "\n":
        index += 1
    return index


def _skip_block_comment(source: str, index: int) -> int:
    end = source.find("*/", index + 2)
    if end == -1:
        raise DotSyntaxError.at(source, index, "Unterminated comment")
    return end + 2


def _read_string(source: str, index: int) -> tuple[str, int]:
    start = index
    index += 1
    result: list[str] = []

    while index < len(source):
        char = source[index]
        if char == '"':
            return "".join(result), index + 1
        if char == "\\" and index + 1 < len(source):
            following = source[index + 1]
            # Escaped quotes lose the backslash, line continuations vanish,
            # other escapes (\n, \l, \N ...) are kept for the renderer.
            if following == '"':
                result.append('"')
            elif following != "\n":
                result.append(char + following)
            index += 2
            continue
        result.append(char)
        index += 1

    raise DotSyntaxError.at(source, start, "Unterminated string literal")


def _read_html(source: str, index: int) -> tuple[str, int]:
    start = index
    depth = 0

    while index < len(source):
        char = source[index]
        if char == "<":
            depth += 1
        elif char == ">":
            depth -= 1
            if depth == 0:
                return source[start : index + 1], index + 1
        index += 1

    raise DotSyntaxError.at(source, start, "Unterminated HTML string")


def _read_identifier(source: str, index: int) -> tuple[str, int]:
    start = index
    while index < len(source) and _is_identifier_part(source[index]):
        index += 1
    return source[start:index], index


def _is_identifier_start(char: str) -> bool:
    return char.isalpha() or char == "_"


def _is_identifier_part(char: str) -> bool:
    return char.isalnum() or char == "_"
