from dotnorm.model import Graph
from dotnorm.normalizer import normalize
from dotnorm.parser.parser import parse_dot


def parse(dot_source: str) -> list[Graph]:
    """Read DOT text and resolve every graph it declares.

    Raises ``DotSyntaxError`` when the text cannot be read; normalization
    itself does not fail.
    """
    return normalize(parse_dot(dot_source))
