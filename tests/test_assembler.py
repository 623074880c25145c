import logging

import pytest

from hack_assembler.assembler import (
    Assembler,
    State,
    assemble,
    first_pass,
    second_pass,
    to_hack,
)
from hack_assembler.errors import (
    AddressRangeError,
    AsmError,
    InternalError,
    InvalidCompError,
    InvalidDestError,
    InvalidJumpError,
    SymbolRangeError,
)
from hack_assembler.parser import Parser, SourceLine, normalize
from hack_assembler.symbol_table import PREDEFINED_SYMBOLS, SymbolTable

ADD_ASM = "@2\nD=A\n@3\nD=D+A\n@0\nM=D"
ADD_HACK = [
    "0000000000000010",
    "1110110000010000",
    "0000000000000011",
    "1110000010010000",
    "0000000000000000",
    "1110001100001000",
]

MAX_ASM = """\
// Computes R2 = max(R0, R1)
   @R0
   D=M              // D = first number
   @R1
   D=D-M            // D = first number - second number
   @OUTPUT_FIRST
   D;JGT            // if D>0 (first is greater) goto output_first
   @R1
   D=M              // D = second number
   @OUTPUT_D
   0;JMP            // goto output_d
(OUTPUT_FIRST)
   @R0
   D=M              // D = first number
(OUTPUT_D)
   @R2
   M=D              // M[2] = D (greatest number)
(INFINITE_LOOP)
   @INFINITE_LOOP
   0;JMP            // infinite loop
"""
MAX_HACK = [
    "0000000000000000",
    "1111110000010000",
    "0000000000000001",
    "1111010011010000",
    "0000000000001010",
    "1110001100000001",
    "0000000000000001",
    "1111110000010000",
    "0000000000001100",
    "1110101010000111",
    "0000000000000000",
    "1111110000010000",
    "0000000000000010",
    "1110001100001000",
    "0000000000001110",
    "1110101010000111",
]


def test_add_program():
    assert assemble(ADD_ASM) == ADD_HACK


def test_max_program():
    assert assemble(MAX_ASM) == MAX_HACK


def test_every_word_is_sixteen_bits():
    for word in assemble(MAX_ASM):
        assert len(word) == 16
        assert set(word) <= {"0", "1"}


@pytest.mark.parametrize("text", ["", "// nothing here\n\n   // still nothing"])
def test_empty_program(text):
    assert assemble(text) == []
    assert to_hack(assemble(text)) == ""


def test_to_hack_terminates_every_line():
    assert to_hack(ADD_HACK[:2]) == ADD_HACK[0] + "\n" + ADD_HACK[1] + "\n"


# -----------------------------
# Symbols
# -----------------------------
def test_label_and_variable():
    asm = "@i\nM=0\n(LOOP)\n@i\nM=M+1\n@LOOP\n0;JMP"
    runner = Assembler()
    words = runner.run(asm)
    assert runner.symbols.get_address("i") == 16
    assert runner.symbols.get_address("LOOP") == 2
    assert words == [
        "0000000000010000",
        "1110101010001000",
        "0000000000010000",
        "1111110111001000",
        "0000000000000010",
        "1110101010000111",
    ]


@pytest.mark.parametrize("name", sorted(PREDEFINED_SYMBOLS))
def test_predefined_symbols(name):
    expected = "0" + format(PREDEFINED_SYMBOLS[name], "015b")
    assert assemble(f"@{name}") == [expected]


def test_predefined_symbols_ignore_table_state():
    # The label rebinds R5 in the table; @R5 still means RAM[5]
    assert assemble("@0\n(R5)\n@R5") == ["0000000000000000", "0000000000000101"]


def test_variables_first_use_order():
    words = assemble("@a\n@b\n@a\n@c\n@b")
    assert words == [
        "0000000000010000",
        "0000000000010001",
        "0000000000010000",
        "0000000000010010",
        "0000000000010001",
    ]


def test_forward_label_reference_is_not_a_variable():
    words = assemble("@END\n0;JMP\n(END)\n@x\n(AFTER)\n@AFTER")
    assert words == [
        "0000000000000010",
        "1110101010000111",
        "0000000000010000",
        "0000000000000011",
    ]


def test_consecutive_labels_share_address():
    table = SymbolTable()
    program = first_pass(Parser(normalize("(A1)\n(A2)\n@1\n(A3)")), table)
    assert [line.text for line in program] == ["@1"]
    assert table.get_address("A1") == 0
    assert table.get_address("A2") == 0
    assert table.get_address("A3") == 1


def test_label_redefinition_overwrites(caplog):
    with caplog.at_level(logging.WARNING, logger="hack_assembler.assembler"):
        words = assemble("(X)\n@1\n(X)\n@X")
    assert words == ["0000000000000001", "0000000000000001"]
    assert "redefined" in caplog.text


def test_numeric_constant():
    assert assemble("@32767") == ["0111111111111111"]


def test_dest_aliases():
    assert assemble("MD=M+1\nAM=M-1\nAMD=D|M") == [
        "1111110111011000",
        "1111110010101000",
        "1111010101111000",
    ]


# -----------------------------
# Failures
# -----------------------------
def test_constant_out_of_range():
    with pytest.raises(AddressRangeError) as excinfo:
        assemble("@1\n@32768")
    assert excinfo.value.line_no == 2


@pytest.mark.parametrize("asm, error", [
    ("X=M", InvalidDestError),
    ("D=M;JUMP", InvalidJumpError),
    ("D=M+2", InvalidCompError),
    ("garbage", InvalidCompError),
    ("D=", InvalidCompError),
])
def test_bad_mnemonics(asm, error):
    with pytest.raises(error):
        assemble(asm)


def test_error_reports_source_line():
    with pytest.raises(AsmError) as excinfo:
        assemble("// header\n@1\n\nD=Q  // bad")
    err = excinfo.value
    assert err.line_no == 4
    assert err.source == "D=Q"
    assert str(err) == "[line 4] Invalid comp field: 'Q': D=Q"


def test_label_in_second_pass_is_internal_error():
    with pytest.raises(InternalError):
        second_pass(Parser([SourceLine("(LOOP)", 1)]), SymbolTable())


def test_assembler_state():
    runner = Assembler()
    assert runner.state == State.PASS1_SCANNING
    runner.run(ADD_ASM)
    assert runner.state == State.COMPLETE
    with pytest.raises(InternalError):
        runner.run(ADD_ASM)


def test_failed_run_stops_in_second_pass():
    runner = Assembler()
    with pytest.raises(InvalidDestError):
        runner.run("@1\nQ=1")
    assert runner.state == State.PASS2_SCANNING


def test_assembly_is_deterministic():
    assert assemble(MAX_ASM) == assemble(MAX_ASM)


def test_non_ascii_digits_are_variable_names():
    # Only 0-9 make a constant; '²' and Arabic-Indic digits are names
    assert assemble("@²\n@١٠\n@²") == [
        "0000000000010000",
        "0000000000010001",
        "0000000000010000",
    ]


def test_label_past_rom_range():
    asm = "@0\n" * 65536 + "(END)\n"
    with pytest.raises(SymbolRangeError) as excinfo:
        assemble(asm)
    assert excinfo.value.line_no == 65537
    assert excinfo.value.address == 65536


def test_passes_share_one_cursor():
    runner = Assembler()
    program = runner.bind_labels("(START)\n@START\n0;JMP\n(END)")
    assert runner.state == State.PASS1_DONE
    assert [line.text for line in program] == ["@START", "0;JMP"]
    assert runner.parser.index == 0
    assert runner.encode() == ["0000000000000000", "1110101010000111"]
    assert runner.parser.index == 1
    assert not runner.parser.has_more_lines()


def test_encode_before_labels_is_internal_error():
    with pytest.raises(InternalError):
        Assembler().encode()
