from dotnorm.errors import DotError, DotSyntaxError, RawAstError
from dotnorm.export import dump, dumps, to_dict
from dotnorm.model import Edge, Graph, GraphKind, Node, SubGraph
from dotnorm.normalizer import normalize
from dotnorm.parser.loader import load_statements
from dotnorm.parser.parser import parse_dot
from dotnorm.pipeline import parse

__all__ = [
    "DotError",
    "DotSyntaxError",
    "Edge",
    "Graph",
    "GraphKind",
    "Node",
    "RawAstError",
    "SubGraph",
    "dump",
    "dumps",
    "load_statements",
    "normalize",
    "parse",
    "parse_dot",
    "to_dict",
]
