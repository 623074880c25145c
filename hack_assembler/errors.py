# errors.py
# Exception taxonomy for the Hack assembler.
#
#   AsmError
#   ├── EncodingError
#   │   ├── InvalidDestError
#   │   ├── InvalidJumpError
#   │   ├── InvalidCompError
#   │   ├── MissingCompError
#   │   └── AddressRangeError
#   ├── SymbolRangeError
#   └── InternalError

from typing import Optional


class AsmError(Exception):
    """Base class for every failure raised while assembling."""

    def __init__(self, message: str, line_no: Optional[int] = None,
                 source: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.line_no = line_no
        self.source = source

    def with_location(self, line_no: int, source: str) -> "AsmError":
        # Fill in only what the raiser did not know
        if self.line_no is None:
            self.line_no = line_no
        if self.source is None:
            self.source = source
        return self

    def __str__(self) -> str:
        text = self.message
        if self.line_no is not None:
            text = f"[line {self.line_no}] {text}"
        if self.source is not None:
            text = f"{text}: {self.source}"
        return text


# -----------------------------
# Encoder failures (user errors)
# -----------------------------
class EncodingError(AsmError):
    pass


class InvalidDestError(EncodingError):
    def __init__(self, mnemonic: str, **kwargs) -> None:
        super().__init__(f"Invalid dest field: '{mnemonic}'", **kwargs)
        self.mnemonic = mnemonic


class InvalidJumpError(EncodingError):
    def __init__(self, mnemonic: str, **kwargs) -> None:
        super().__init__(f"Invalid jump field: '{mnemonic}'", **kwargs)
        self.mnemonic = mnemonic


class InvalidCompError(EncodingError):
    def __init__(self, mnemonic: str, **kwargs) -> None:
        super().__init__(f"Invalid comp field: '{mnemonic}'", **kwargs)
        self.mnemonic = mnemonic


class MissingCompError(EncodingError):
    def __init__(self, **kwargs) -> None:
        super().__init__("No computation provided", **kwargs)


class AddressRangeError(EncodingError):
    def __init__(self, value: int, **kwargs) -> None:
        super().__init__(
            f"Constant out of range for 15-bit A-instruction: {value}", **kwargs)
        self.value = value


class SymbolRangeError(AsmError):
    """A label bound past the last 16-bit ROM address."""

    def __init__(self, name: str, address: int, **kwargs) -> None:
        super().__init__(
            f"Address for '{name}' out of 16-bit range: {address}", **kwargs)
        self.name = name
        self.address = address


# -----------------------------
# Assembler bugs
# -----------------------------
class InternalError(AsmError):
    """An invariant of the assembler itself was broken."""
