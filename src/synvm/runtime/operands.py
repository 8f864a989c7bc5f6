''' Operand encodings and their resolution to machine words '''

from typing import NewType, TYPE_CHECKING

from synvm.common.hwconf import MAX_WORD, REGISTER_BASE, REGISTER_LAST, WORD_MODULUS
from synvm.common.faults import InvalidOperand

if TYPE_CHECKING:
    from synvm.runtime.storage import Registers


Word = NewType('Word', int)          # resolved value, 0..32767
Operand = NewType('Operand', int)    # raw instruction slot, 0..32775 when valid


def wrap(value: int) -> Word:
    return Word(value % WORD_MODULUS)


def is_literal(raw: Operand) -> bool:
    return 0 <= raw <= MAX_WORD


def is_register(raw: Operand) -> bool:
    return REGISTER_BASE <= raw <= REGISTER_LAST


def register_index(raw: Operand) -> int:
    ''' Destination operands must name a register '''
    if not is_register(raw):
        raise InvalidOperand(f'Operand {raw} is not a register')

    return raw - REGISTER_BASE


def resolve(raw: Operand, registers: 'Registers') -> Word:
    if is_literal(raw):
        return Word(raw)

    if is_register(raw):
        return registers.get(raw - REGISTER_BASE)

    raise InvalidOperand(f'Invalid operand {raw}')
