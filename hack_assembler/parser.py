# parser.py
# Line normalization and instruction classification.
#
# The Parser only slices text; it never checks that a mnemonic is valid.
# Bad mnemonics are reported later by the code tables.

from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional, Sequence, Union

from .symbol_table import PREDEFINED_SYMBOLS

COMMENT = "//"


class InstructionType(Enum):
    A_INSTRUCTION = auto()  # @value
    C_INSTRUCTION = auto()  # dest=comp;jump
    L_INSTRUCTION = auto()  # (LABEL)


@dataclass(frozen=True)
class SourceLine:
    text: str
    line_no: int  # 1-based in the original file


# -----------------------------
# Line normalizer
# -----------------------------
def strip_comment_and_ws(line: str) -> str:
    # Remove inline comments and surrounding whitespace
    if COMMENT in line:
        line = line.split(COMMENT, 1)[0]
    return line.strip()


def normalize(text: str) -> List[SourceLine]:
    """Comment-free, non-empty, trimmed lines in source order."""
    lines: List[SourceLine] = []
    for i, raw in enumerate(text.splitlines()):
        code = strip_comment_and_ws(raw)
        if not code:
            continue
        lines.append(SourceLine(text=code, line_no=i + 1))
    return lines


def clean_lines(text: str) -> List[str]:
    return [line.text for line in normalize(text)]


# -----------------------------
# Parser: one instruction at a time
# -----------------------------
class Parser:
    def __init__(self, lines: Sequence[Union[SourceLine, str]]) -> None:
        self.lines: List[SourceLine] = [
            line if isinstance(line, SourceLine) else SourceLine(line, i + 1)
            for i, line in enumerate(lines)
        ]
        self.index: int = 0

    @classmethod
    def from_text(cls, text: str) -> "Parser":
        return cls(normalize(text))

    def has_more_lines(self) -> bool:
        """True when there is a line after the current one."""
        return self.index + 1 < len(self.lines)

    def advance(self) -> None:
        self.index += 1

    def reset(self) -> None:
        self.index = 0

    @property
    def current_line(self) -> Optional[SourceLine]:
        if 0 <= self.index < len(self.lines):
            return self.lines[self.index]
        return None

    @property
    def current(self) -> Optional[str]:
        line = self.current_line
        return line.text if line is not None else None

    def instruction_type(self) -> Optional[InstructionType]:
        line = self.current
        if line is None:
            return None
        if line.startswith("@"):
            return InstructionType.A_INSTRUCTION
        if line.startswith("(") and line.endswith(")"):
            return InstructionType.L_INSTRUCTION
        # Everything else is treated as a computation
        return InstructionType.C_INSTRUCTION

    def symbol(self) -> Optional[str]:
        """
        A: text after '@', with predefined names replaced by their
           decimal address (@SCREEN -> '16384').
        L: text between the parentheses.
        """
        ctype = self.instruction_type()
        line = self.current
        if ctype == InstructionType.A_INSTRUCTION:
            name = line[1:].strip()
            if name in PREDEFINED_SYMBOLS:
                return str(PREDEFINED_SYMBOLS[name])
            return name
        if ctype == InstructionType.L_INSTRUCTION:
            return line[1:-1].strip()
        return None

    def dest(self) -> Optional[str]:
        if self.instruction_type() != InstructionType.C_INSTRUCTION:
            return None
        line = self.current
        if "=" not in line:
            return None
        return line.split("=", 1)[0].strip()

    def comp(self) -> Optional[str]:
        if self.instruction_type() != InstructionType.C_INSTRUCTION:
            return None
        text = self.current
        if "=" in text:
            text = text.split("=", 1)[1]
        if ";" in text:
            text = text.split(";", 1)[0]
        return text.strip()

    def jump(self) -> Optional[str]:
        if self.instruction_type() != InstructionType.C_INSTRUCTION:
            return None
        line = self.current
        if ";" not in line:
            return None
        return line.split(";", 1)[1].strip()
