# assembler.py
# Nand2Tetris (Elements of Computing Systems) Chapter 6: two-pass driver
#
# - Pass 1 binds labels to ROM addresses and drops the label lines
# - Pass 2 allocates variables from RAM[16] and encodes every instruction
#
# Assembly either produces the whole program or raises AsmError.

import logging
from enum import Enum, auto
from typing import Iterator, List, Optional, Sequence

from . import code
from .errors import AsmError, InternalError, SymbolRangeError
from .parser import InstructionType, Parser, SourceLine, normalize
from .symbol_table import SymbolTable

logger = logging.getLogger(__name__)

WORD_SIZE = 16


class State(Enum):
    PASS1_SCANNING = auto()
    PASS1_DONE = auto()
    PASS2_SCANNING = auto()
    COMPLETE = auto()


# -----------------------------
# Cursor walk shared by both passes
# -----------------------------
def _walk(parser: Parser) -> Iterator[SourceLine]:
    """Visit every line from the start, the last one included."""
    parser.reset()
    if parser.current_line is None:
        return
    while True:
        yield parser.current_line
        if not parser.has_more_lines():
            return
        parser.advance()


# -----------------------------
# Pass 1: Build symbol table with labels
# -----------------------------
def first_pass(parser: Parser, symbols: SymbolTable) -> List[SourceLine]:
    """Bind every label and return the program without its label lines."""
    program: List[SourceLine] = []
    for line in _walk(parser):
        if parser.instruction_type() != InstructionType.L_INSTRUCTION:
            program.append(line)
            continue
        label = parser.symbol()
        # Only real instructions consume ROM addresses
        rom_addr = len(program)
        previous = symbols.get_address(label)
        if previous is not None and previous != rom_addr:
            logger.warning("[line %d] label %s redefined: %d -> %d",
                           line.line_no, label, previous, rom_addr)
        try:
            symbols.add_entry(label, rom_addr)
        except ValueError as e:
            raise SymbolRangeError(label, rom_addr, line_no=line.line_no,
                                   source=line.text) from e
        logger.debug("label %s -> ROM[%d]", label, rom_addr)
    return program


# -----------------------------
# Pass 2: Translate to machine code
# -----------------------------
def resolve_address(token: str, symbols: SymbolTable) -> int:
    # ASCII only: str.isdigit() also accepts '²' and other script digits
    if token.isascii() and token.isdigit():
        return int(token)
    return symbols.allocate_variable(token)


def translate(parser: Parser, symbols: SymbolTable) -> str:
    """Encode the instruction under the parser's cursor."""
    ctype = parser.instruction_type()
    if ctype == InstructionType.A_INSTRUCTION:
        return code.address(resolve_address(parser.symbol(), symbols))
    if ctype == InstructionType.C_INSTRUCTION:
        return code.c_instruction(parser.comp(), parser.dest(), parser.jump())
    raise InternalError(f"Unexpected {ctype} in second pass")


def second_pass(parser: Parser, symbols: SymbolTable) -> List[str]:
    out: List[str] = []
    for line in _walk(parser):
        try:
            word = translate(parser, symbols)
        except AsmError as e:
            e.with_location(line.line_no, line.text)
            raise
        if len(word) != WORD_SIZE:
            raise InternalError(f"Encoded word has {len(word)} bits: {word}",
                                line_no=line.line_no, source=line.text)
        out.append(word)
    return out


# -----------------------------
# Driver
# -----------------------------
class Assembler:
    """One assembly run: owns the symbol table and the cursor through both passes."""

    def __init__(self, symbols: Optional[SymbolTable] = None) -> None:
        self.symbols = symbols if symbols is not None else SymbolTable()
        self.parser = Parser([])
        self.state = State.PASS1_SCANNING

    def _expect(self, state: State) -> None:
        if self.state != state:
            raise InternalError(f"Assembler in state {self.state.name}, expected {state.name}")

    def bind_labels(self, asm_text: str) -> List[SourceLine]:
        self._expect(State.PASS1_SCANNING)
        self.parser = Parser(normalize(asm_text))
        logger.debug("pass 1: %d source lines", len(self.parser.lines))
        self.parser.lines = first_pass(self.parser, self.symbols)
        self.parser.reset()
        self.state = State.PASS1_DONE
        return self.parser.lines

    def encode(self) -> List[str]:
        self._expect(State.PASS1_DONE)
        self.state = State.PASS2_SCANNING
        logger.debug("pass 2: %d instructions", len(self.parser.lines))
        machine = second_pass(self.parser, self.symbols)
        self.state = State.COMPLETE
        return machine

    def run(self, asm_text: str) -> List[str]:
        self.bind_labels(asm_text)
        return self.encode()


def assemble(asm_text: str) -> List[str]:
    return Assembler().run(asm_text)


def to_hack(words: Sequence[str]) -> str:
    """Output file contents: one word per line, each newline-terminated."""
    return "".join(word + "\n" for word in words)
