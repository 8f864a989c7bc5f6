import pytest

import synvm.common.ops as ops
from synvm.common.faults import InvalidOpcode


def test_table_is_total_and_injective():
    assert sorted(ops.OPCODES) == list(range(22))
    mnemonics = [info.mnemonic for info in ops.OPCODES.values()]
    assert len(set(mnemonics)) == len(mnemonics)


def test_operand_counts():
    counts = [ops.OPCODES[op].operands for op in range(22)]
    assert counts == [0, 2, 1, 1, 3, 3, 1, 2, 2, 3, 3, 3, 3, 3, 2, 2, 2, 1, 0, 1, 1, 0]


def test_decode():
    assert ops.decode(ops.JT) == ops.OpInfo('jt', 2)
    assert ops.decode(ops.NOOP) == ops.OpInfo('noop', 0)
    assert ops.decode(ops.ADD).width == 4


@pytest.mark.parametrize('opcode', [22, 100, 32768, 65535, -1])
def test_decode_unknown(opcode):
    with pytest.raises(InvalidOpcode):
        ops.decode(opcode)


def test_format_instruction():
    assert ops.format_instruction(3, ops.ADD, [32768, 32769, 4]) == '00003: add r0 r1 4'
    assert ops.format_instruction(0, ops.HALT, []) == '00000: halt'
    assert ops.format_instruction(7, ops.OUT, [40000]) == '00007: out ?40000'
