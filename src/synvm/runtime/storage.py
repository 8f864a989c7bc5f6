import logging as lg
from array import array
from typing import Iterator, Sequence

from synvm.common.hwconf import MEMORY_SIZE, REGISTER_COUNT, IMAGE_WORD_MAX, PROGRAM_BASE
from synvm.common.faults import InvalidAddress, StackUnderflow, ImageError
from synvm.runtime.operands import Word


class Registers:
    ''' General purpose registers r0..r7 '''
    values: list[Word]

    def __init__(self):
        self.values = [Word(0)] * REGISTER_COUNT

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[Word]:
        return iter(self.values)

    def get(self, idx: int) -> Word:
        return self.values[idx % REGISTER_COUNT]

    def set(self, idx: int, value: Word):
        self.values[idx % REGISTER_COUNT] = value

    def dump(self) -> str:
        rows = []

        for base in range(0, REGISTER_COUNT, 4):
            cells = [f'r{i} => {self.values[i]:5d}' for i in range(base, base + 4)]
            rows.append('  '.join(cells))

        return '\n'.join(rows)


class Stack:
    ''' Unbounded word stack, listed bottom-to-top '''

    def __init__(self):
        self.items: list[Word] = []

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Word]:
        return iter(self.items)

    def push(self, value: Word):
        self.items.append(value)

    def pop(self) -> Word:
        if not self.items:
            raise StackUnderflow('Pop from empty stack')

        return self.items.pop()

    def peek(self) -> Word:
        if not self.items:
            raise StackUnderflow('Peek at empty stack')

        return self.items[-1]

    def is_empty(self) -> bool:
        return len(self.items) == 0

    def size(self) -> int:
        return len(self.items)

    def dump(self) -> str:
        if not self.items:
            return '<empty>'

        return ' '.join(str(v) for v in self.items)


class Memory:
    ''' Word-addressed main memory, zero-filled '''
    loaded_size: int

    def __init__(self, size: int = MEMORY_SIZE):
        self.cells = array('H', bytes(2 * size))
        self.loaded_size = 0

    def __len__(self) -> int:
        return len(self.cells)

    def check_address(self, address: int):
        if not 0 <= address < len(self.cells):
            raise InvalidAddress(f'Address {address} out of range')

    def read_word(self, address: int) -> int:
        self.check_address(address)
        return self.cells[address]

    def write_word(self, address: int, value: Word):
        self.check_address(address)
        self.cells[address] = value

    def read_slice(self, start: int, length: int) -> list[int]:
        if length == 0:
            return []

        self.check_address(start)
        self.check_address(start + length - 1)
        return self.cells[start:start + length].tolist()

    def load_program(self, words: Sequence[int], base: int = PROGRAM_BASE):
        if base < 0 or base + len(words) > len(self.cells):
            raise InvalidAddress(
                f'Image of {len(words)} words does not fit at {base}'
            )

        for offset, word in enumerate(words):
            if not 0 <= word <= IMAGE_WORD_MAX:
                raise ImageError(f'Word {word} at offset {offset} is not 16-bit')

        self.cells[base:base + len(words)] = array('H', words)
        self.loaded_size = len(words)
        lg.debug(f'Loaded {len(words)} words at {base}')
