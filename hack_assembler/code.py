# code.py
# Mnemonic -> bit pattern tables for the Hack instruction set, plus the
# reverse lookups used to read encoded fields back.
#
# C-instruction layout: 111 a c1..c6 d1 d2 d3 j1 j2 j3
#                            \_comp_/ \_dest_/ \_jump_/

from typing import Dict, Optional

from .errors import (
    AddressRangeError,
    InvalidCompError,
    InvalidDestError,
    InvalidJumpError,
    MissingCompError,
)

C_PREFIX = "111"
MAX_ADDRESS = 0x7FFF  # 15-bit A-instruction field

# -----------------------------
# Code tables
# -----------------------------
# d1 = A, d2 = D, d3 = M
DEST_TABLE: Dict[str, str] = {
    "M":   "001",
    "D":   "010",
    "DM":  "011",
    "A":   "100",
    "AM":  "101",
    "AD":  "110",
    "ADM": "111",
}

# Spellings used by the Nand2Tetris book and its sample programs
DEST_ALIASES: Dict[str, str] = {
    "MD":  "DM",
    "AMD": "ADM",
}

JUMP_TABLE: Dict[str, str] = {
    "JGT": "001",
    "JEQ": "010",
    "JGE": "011",
    "JLT": "100",
    "JNE": "101",
    "JLE": "110",
    "JMP": "111",
}

COMP_TABLE: Dict[str, str] = {
    # a=0
    "0":   "0101010",
    "1":   "0111111",
    "-1":  "0111010",
    "D":   "0001100",
    "A":   "0110000",
    "!D":  "0001101",
    "!A":  "0110001",
    "-D":  "0001111",
    "-A":  "0110011",
    "D+1": "0011111",
    "A+1": "0110111",
    "D-1": "0001110",
    "A-1": "0110010",
    "D+A": "0000010",
    "D-A": "0010011",
    "A-D": "0000111",
    "D&A": "0000000",
    "D|A": "0010101",
    # a=1 (replace A with M)
    "M":   "1110000",
    "!M":  "1110001",
    "-M":  "1110011",
    "M+1": "1110111",
    "M-1": "1110010",
    "D+M": "1000010",
    "D-M": "1010011",
    "M-D": "1000111",
    "D&M": "1000000",
    "D|M": "1010101",
}

NULL_FIELD = "000"

_DEST_BY_BITS = {bits: name for name, bits in DEST_TABLE.items()}
_JUMP_BY_BITS = {bits: name for name, bits in JUMP_TABLE.items()}
_COMP_BY_BITS = {bits: name for name, bits in COMP_TABLE.items()}


# -----------------------------
# Encoding
# -----------------------------
def dest(mnemonic: Optional[str]) -> str:
    if mnemonic is None:
        return NULL_FIELD
    key = DEST_ALIASES.get(mnemonic, mnemonic)
    if key not in DEST_TABLE:
        raise InvalidDestError(mnemonic)
    return DEST_TABLE[key]


def jump(mnemonic: Optional[str]) -> str:
    if mnemonic is None:
        return NULL_FIELD
    if mnemonic not in JUMP_TABLE:
        raise InvalidJumpError(mnemonic)
    return JUMP_TABLE[mnemonic]


def comp(mnemonic: Optional[str]) -> str:
    """7-bit a+c field. A C-instruction without a comp part is an error."""
    if mnemonic is None:
        raise MissingCompError()
    if mnemonic not in COMP_TABLE:
        raise InvalidCompError(mnemonic)
    return COMP_TABLE[mnemonic]


def address(value: int) -> str:
    """16-bit A-instruction word: a 0 opcode bit then 15 address bits."""
    if value < 0 or value > MAX_ADDRESS:
        raise AddressRangeError(value)
    return "0" + f"{value:015b}"


def c_instruction(comp_mnemonic: Optional[str], dest_mnemonic: Optional[str],
                  jump_mnemonic: Optional[str]) -> str:
    return C_PREFIX + comp(comp_mnemonic) + dest(dest_mnemonic) + jump(jump_mnemonic)


# -----------------------------
# Decoding (bits -> canonical mnemonic)
# -----------------------------
def decode_dest(bits: str) -> Optional[str]:
    if bits == NULL_FIELD:
        return None
    if bits not in _DEST_BY_BITS:
        raise InvalidDestError(bits)
    return _DEST_BY_BITS[bits]


def decode_jump(bits: str) -> Optional[str]:
    if bits == NULL_FIELD:
        return None
    if bits not in _JUMP_BY_BITS:
        raise InvalidJumpError(bits)
    return _JUMP_BY_BITS[bits]


def decode_comp(bits: str) -> str:
    if bits not in _COMP_BY_BITS:
        raise InvalidCompError(bits)
    return _COMP_BY_BITS[bits]
