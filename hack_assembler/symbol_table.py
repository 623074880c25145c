# symbol_table.py
# Symbol name -> RAM/ROM address mapping for one assembly run.

import logging
from typing import Dict, Iterator, Optional

logger = logging.getLogger(__name__)

MAX_WORD = 0xFFFF
VARIABLE_BASE = 16  # first RAM address handed out to user variables

# R0..R4 share addresses with SP..THAT; that is how the Hack platform
# defines them.
PREDEFINED_SYMBOLS: Dict[str, int] = {
    "SP": 0, "LCL": 1, "ARG": 2, "THIS": 3, "THAT": 4,
    "SCREEN": 16384, "KBD": 24576,
    **{f"R{i}": i for i in range(16)}
}


class SymbolTable:
    def __init__(self) -> None:
        self._entries: Dict[str, int] = dict(PREDEFINED_SYMBOLS)
        self.next_variable: int = VARIABLE_BASE

    def contains(self, name: str) -> bool:
        return name in self._entries

    def add_entry(self, name: str, address: int) -> None:
        """Insert or overwrite `name`."""
        if not isinstance(address, int) or not 0 <= address <= MAX_WORD:
            raise ValueError(f"Address out of 16-bit range: {address!r}")
        self._entries[name] = address

    def get_address(self, name: str) -> Optional[int]:
        return self._entries.get(name)

    def allocate_variable(self, name: str) -> int:
        """Address of `name`, assigning the next free RAM slot on first use."""
        existing = self.get_address(name)
        if existing is not None:
            return existing
        addr = self.next_variable
        self.add_entry(name, addr)
        self.next_variable += 1
        logger.debug("variable %s -> RAM[%d]", name, addr)
        return addr

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __repr__(self) -> str:
        return f"SymbolTable({len(self)} entries, next_variable={self.next_variable})"
