import pytest

from lc3vm.words import (HEX, ascii_str, lc_bin, lc_hex, lc_int,
                         parse_word, plus, sign_extend)

@pytest.mark.parametrize("imm", range(32))
def test_sign_extend_imm5(imm):
    if imm & 0b10000:
        assert sign_extend(imm, 5) == (imm - 32) & 0xFFFF
    else:
        assert sign_extend(imm, 5) == imm

def test_sign_extend_widths():
    assert sign_extend(0x1FF, 9) == 0xFFFF
    assert sign_extend(0x100, 9) == 0xFF00
    assert sign_extend(0x0FF, 9) == 0x00FF
    assert sign_extend(0x400, 11) == 0xFC00
    assert sign_extend(0x20, 6) == 0xFFE0

def test_plus_wraps():
    assert plus(0xFFFF, 1) == 0
    assert plus(0x3000, 0xFFFF) == 0x2FFF

def test_lc_int_and_bin():
    assert lc_int(0xFFFF) == -1
    assert lc_int(0x7FFF) == 32767
    assert lc_int(0x8000) == -32768
    assert lc_bin(-1) == 0xFFFF

def test_hex_formatting():
    assert lc_hex(0x3000) == "x3000"
    assert lc_hex(-1) == "xFFFF"
    assert repr(HEX(0xfe00)) == "xFE00"

def test_ascii_str():
    assert ascii_str(72) == "(or 72, 'H')"
    assert ascii_str(10) == "(or 10)"
    assert ascii_str(0x3000) == ""

@pytest.mark.parametrize("text,value", [
    ("x3000", 0x3000),
    ("xf025", 0xF025),
    ("x-1", 0xFFFF),
    ("#10", 10),
    ("#-3", 0xFFFD),
    ("-3", 0xFFFD),
    ("42", 42),
    ("0001000001000001", 0x1041),
])
def test_parse_word(text, value):
    assert parse_word(text) == value

def test_parse_word_rejects_garbage():
    with pytest.raises(ValueError):
        parse_word("LOOP")
