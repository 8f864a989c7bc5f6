from typing import NamedTuple, Sequence

from synvm.common.hwconf import REGISTER_BASE, REGISTER_LAST, MAX_WORD
from synvm.common.faults import InvalidOpcode

HALT = 0    # stop execution
SET = 1     # b -> Ra
PUSH = 2    # a -> [stack]
POP = 3     # [stack] -> Ra
EQ = 4      # b .eq c -> Ra
GT = 5      # b .gt c -> Ra
JMP = 6     # goto a
JT = 7      # if a .ne 0 goto b
JF = 8      # if a .eq 0 goto b
ADD = 9     # b + c -> Ra
MULT = 10   # b * c -> Ra
MOD = 11    # b % c -> Ra
AND = 12    # b & c -> Ra
OR = 13     # b | c -> Ra
NOT = 14    # ~b -> Ra
RMEM = 15   # M[b] -> Ra
WMEM = 16   # b -> M[a]
CALL = 17   # push next; goto a
RET = 18    # goto [stack]
OUT = 19    # emit chr(a)
IN = 20     # read char -> Ra
NOOP = 21   # nothing


class OpInfo(NamedTuple):
    mnemonic: str
    operands: int

    @property
    def width(self) -> int:
        ''' Instruction length in words, opcode included '''
        return 1 + self.operands


OPCODES: dict[int, OpInfo] = {
    HALT: OpInfo('halt', 0),
    SET: OpInfo('set', 2),
    PUSH: OpInfo('push', 1),
    POP: OpInfo('pop', 1),
    EQ: OpInfo('eq', 3),
    GT: OpInfo('gt', 3),
    JMP: OpInfo('jmp', 1),
    JT: OpInfo('jt', 2),
    JF: OpInfo('jf', 2),
    ADD: OpInfo('add', 3),
    MULT: OpInfo('mult', 3),
    MOD: OpInfo('mod', 3),
    AND: OpInfo('and', 3),
    OR: OpInfo('or', 3),
    NOT: OpInfo('not', 2),
    RMEM: OpInfo('rmem', 2),
    WMEM: OpInfo('wmem', 2),
    CALL: OpInfo('call', 1),
    RET: OpInfo('ret', 0),
    OUT: OpInfo('out', 1),
    IN: OpInfo('in', 1),
    NOOP: OpInfo('noop', 0),
}


def decode(opcode: int) -> OpInfo:
    try:
        return OPCODES[opcode]
    except KeyError:
        raise InvalidOpcode(f'Unknown opcode {opcode}') from None


def format_operand(raw: int) -> str:
    if 0 <= raw <= MAX_WORD:
        return str(raw)

    if REGISTER_BASE <= raw <= REGISTER_LAST:
        return f'r{raw - REGISTER_BASE}'

    return f'?{raw}'


def format_instruction(address: int, opcode: int, operands: Sequence[int]) -> str:
    info = decode(opcode)
    parts = [f'{address:05d}:', info.mnemonic]
    parts.extend(format_operand(raw) for raw in operands)
    return ' '.join(parts)
