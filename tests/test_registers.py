import pytest

from lc3vm.registers import Flag, PC_START, Reg, RegisterFile

def test_initial_state():
    registers = RegisterFile()
    assert [registers.get(r) for r in range(8)] == [0] * 8
    assert registers.pc == PC_START
    assert registers.cond is Flag.ZRO

def test_set_truncates_to_16_bits():
    registers = RegisterFile()
    registers.set(Reg.R3, 0x12345)
    assert registers.get(3) == 0x2345
    registers.set(Reg.R4, -1)
    assert registers.get(Reg.R4) == 0xFFFF

def test_index_outside_register_file():
    registers = RegisterFile()
    with pytest.raises(ValueError):
        registers.get(10)
    with pytest.raises(ValueError):
        registers.set(-1, 0)

@pytest.mark.parametrize("value,flag", [
    (0, Flag.ZRO),
    (1, Flag.POS),
    (0x7FFF, Flag.POS),
    (0x8000, Flag.NEG),
    (0xFFFF, Flag.NEG),
])
def test_update_flags(value, flag):
    registers = RegisterFile()
    registers.update_flags(value)
    assert registers.cond is flag

def test_nzp():
    registers = RegisterFile()
    registers.update_flags(0xFFFF)
    assert registers.nzp() == (1, 0, 0)
    registers.update_flags(5)
    assert registers.nzp() == (0, 0, 1)

def test_reset():
    registers = RegisterFile()
    registers.set(Reg.R1, 7)
    registers.pc = 0x4000
    registers.update_flags(0x8000)
    registers.reset()
    assert registers.get(Reg.R1) == 0
    assert registers.pc == PC_START
    assert registers.cond is Flag.ZRO
