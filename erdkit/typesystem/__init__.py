"""ABI type system: expression parser, type catalogue and mapper."""

from .mapper import TypeMapper as TypeMapper
from .mapper import map_type_expression as map_type_expression
from .parser import parse_type_expression as parse_type_expression
from .types import *
