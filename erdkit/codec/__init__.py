"""Argument codec: typed values, binary encoding and data-part serialization."""

from .binary import BinaryCodec as BinaryCodec
from .native import NativeSerializer as NativeSerializer
from .native import native_to_typed_values as native_to_typed_values
from .serializer import ArgSerializer as ArgSerializer
from .values import *
