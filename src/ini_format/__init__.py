from ini_format.parser import ParsedLine, parse, parse_line, parse_lines
from ini_format.serializer import serialize
from ini_format import parser
from ini_format import serializer

__all__ = [
    "ParsedLine",
    "parse",
    "parse_line",
    "parse_lines",
    "serialize",
    "parser",
    "serializer",
]
