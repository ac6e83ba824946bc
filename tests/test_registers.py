from chip8vm import RegisterFile


def test_power_on_state():
    regs = RegisterFile()
    assert regs.V == [0] * 16
    assert regs.I == 0
    assert regs.pc == 0x200
    assert regs.call_stack() == []


def test_push_pop_order():
    regs = RegisterFile()
    assert regs.push(0x202)
    assert regs.push(0x304)
    assert regs.call_stack() == [0x202, 0x304]
    assert regs.pop() == 0x304
    assert regs.pop() == 0x202
    assert regs.pop() is None


def test_push_refuses_past_depth():
    regs = RegisterFile(stack_depth=2)
    assert regs.push(1) and regs.push(2)
    assert not regs.push(3)
    assert regs.call_stack() == [1, 2]
