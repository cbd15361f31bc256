from cssarch.parser.errors import ParseError
from cssarch.parser.transformer import load_stylesheet, parse_css

__all__ = ["ParseError", "parse_css", "load_stylesheet"]
