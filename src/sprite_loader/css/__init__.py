from sprite_loader.css.errors import ParseError
from sprite_loader.css.model import AtRule, Comment, Declaration, StyleRule, Stylesheet
from sprite_loader.css.parser import parse_css
from sprite_loader.css.serializer import stringify

__all__ = [
    "parse_css",
    "stringify",
    "ParseError",
    "Stylesheet",
    "StyleRule",
    "Declaration",
    "Comment",
    "AtRule",
]
