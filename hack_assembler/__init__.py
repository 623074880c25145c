"""Two-pass assembler for the Nand2Tetris Hack computer."""

from .assembler import Assembler, assemble, first_pass, second_pass, to_hack
from .errors import (
    AddressRangeError,
    AsmError,
    EncodingError,
    InternalError,
    InvalidCompError,
    InvalidDestError,
    InvalidJumpError,
    MissingCompError,
    SymbolRangeError,
)
from .parser import InstructionType, Parser, SourceLine, normalize
from .symbol_table import PREDEFINED_SYMBOLS, SymbolTable

__version__ = "0.1.0"
