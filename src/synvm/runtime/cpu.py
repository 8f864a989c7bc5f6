import time
import logging as lg
from enum import Enum
from typing import Callable, Sequence

import synvm.common.ops as ops
from synvm.common.hwconf import WORD_MASK
from synvm.common.faults import VMFault, DivideByZero, InputExhausted
from synvm.runtime.operands import Word, Operand, wrap, resolve, register_index
from synvm.runtime.storage import Registers, Stack, Memory
from synvm.runtime.channel import IOChannel, ConsoleChannel


class Halt(Exception):
    pass


class Aborted(Exception):
    ''' Run budget used up; the machine itself is still runnable '''
    pass


class State(Enum):
    RUNNING = 'running'
    HALTED = 'halted'
    FAULTED = 'faulted'


class CPU():
    pc: int                 # Program counter
    next_pc: int            # Where execution continues after the current instruction
    state: State
    fault: VMFault | None   # Set once the machine has faulted
    steps: int              # Instructions executed so far

    def __init__(
        self,
        channel: IOChannel | None = None,
        trace: bool = False,
        dump: bool = False
    ):
        self.registers = Registers()
        self.stack = Stack()
        self.memory = Memory()
        self.channel = channel if channel is not None else ConsoleChannel()

        self.trace = trace
        self.dump = dump

        self.pc = 0
        self.next_pc = 0
        self.state = State.RUNNING
        self.fault = None
        self.steps = 0

    # - Helpers - #

    def load(self, words: Sequence[int]):
        self.memory.load_program(words)

    def debug_dump(self):
        lg.info(f'PC:{self.pc} STATE:{self.state.value} STEPS:{self.steps}')

        for line in self.registers.dump().splitlines():
            lg.info(line)

        lg.info(f'STACK: {self.stack.dump()}')

    def value(self, raw: Operand) -> Word:
        return resolve(raw, self.registers)

    def store(self, raw: Operand, value: Word):
        self.registers.set(register_index(raw), value)

    def fetch(self) -> tuple[int, ops.OpInfo, list[Operand]]:
        opcode = self.memory.read_word(self.pc)
        info = ops.decode(opcode)
        words = self.memory.read_slice(self.pc + 1, info.operands)
        return opcode, info, [Operand(w) for w in words]

    # - Operations - #

    def halt(self):
        raise Halt()

    def setr(self, a: Operand, b: Operand):
        self.store(a, self.value(b))

    def push(self, a: Operand):
        self.stack.push(self.value(a))

    def pop(self, a: Operand):
        register_index(a)
        self.store(a, self.stack.pop())

    def eq(self, a: Operand, b: Operand, c: Operand):
        self.store(a, Word(1 if self.value(b) == self.value(c) else 0))

    def gt(self, a: Operand, b: Operand, c: Operand):
        self.store(a, Word(1 if self.value(b) > self.value(c) else 0))

    def jmp(self, a: Operand):
        self.next_pc = self.value(a)

    def jt(self, a: Operand, b: Operand):
        if self.value(a) != 0:
            self.next_pc = self.value(b)

    def jf(self, a: Operand, b: Operand):
        if self.value(a) == 0:
            self.next_pc = self.value(b)

    def call(self, a: Operand):
        target = self.value(a)
        self.memory.check_address(self.next_pc)
        self.stack.push(Word(self.next_pc))
        self.next_pc = target

    def ret(self):
        self.next_pc = self.stack.pop()

    def rmem(self, a: Operand, b: Operand):
        # Image cells may hold raw 16-bit words
        self.store(a, wrap(self.memory.read_word(self.value(b))))

    def wmem(self, a: Operand, b: Operand):
        self.memory.write_word(self.value(a), self.value(b))

    def out(self, a: Operand):
        self.channel.write_char(self.value(a))

    def inp(self, a: Operand):
        register_index(a)
        code = self.channel.read_char()

        if code is None:
            raise InputExhausted('No more input')

        self.store(a, wrap(code))

    def noop(self):
        pass

    # - Arithmetic - #

    def arithm_pair(self, a: Operand, b: Operand, c: Operand, op: Callable[[int, int], int]):
        self.store(a, wrap(op(self.value(b), self.value(c))))

    def add(self, a: Operand, b: Operand, c: Operand):
        self.arithm_pair(a, b, c, lambda x, y: x + y)

    def mult(self, a: Operand, b: Operand, c: Operand):
        self.arithm_pair(a, b, c, lambda x, y: x * y)

    def mod(self, a: Operand, b: Operand, c: Operand):
        if self.value(c) == 0:
            raise DivideByZero('Modulo by zero')

        self.arithm_pair(a, b, c, lambda x, y: x % y)

    def band(self, a: Operand, b: Operand, c: Operand):
        self.arithm_pair(a, b, c, lambda x, y: x & y)

    def bor(self, a: Operand, b: Operand, c: Operand):
        self.arithm_pair(a, b, c, lambda x, y: x | y)

    def inv(self, a: Operand, b: Operand):
        self.store(a, Word(self.value(b) ^ WORD_MASK))

    HANDLERS = {
        ops.HALT: halt,
        ops.SET: setr,
        ops.PUSH: push,
        ops.POP: pop,
        ops.EQ: eq,
        ops.GT: gt,
        ops.JMP: jmp,
        ops.JT: jt,
        ops.JF: jf,
        ops.ADD: add,
        ops.MULT: mult,
        ops.MOD: mod,
        ops.AND: band,
        ops.OR: bor,
        ops.NOT: inv,
        ops.RMEM: rmem,
        ops.WMEM: wmem,
        ops.CALL: call,
        ops.RET: ret,
        ops.OUT: out,
        ops.IN: inp,
        ops.NOOP: noop,
    }

    # -- Implementation -- #

    def step(self) -> State:
        if self.state is not State.RUNNING:
            lg.debug(f'Step ignored, machine is {self.state.value}')
            return self.state

        pc = self.pc

        try:
            opcode, info, operands = self.fetch()

            if self.trace:
                lg.info(ops.format_instruction(pc, opcode, operands))

            self.next_pc = pc + info.width
            handler = self.HANDLERS[opcode]
            handler(self, *operands)
            self.pc = self.next_pc

        except Halt:
            self.state = State.HALTED
            lg.debug(f'Halted at {pc}')

        except VMFault as e:
            e.pc = pc
            self.fault = e
            self.state = State.FAULTED
            lg.debug(f'{e.kind} at {pc}: {e.message}')
            raise

        self.steps += 1

        if self.dump:
            self.debug_dump()

        return self.state

    def run(self, max_steps: int | None = None, time_limit: float | None = None) -> State:
        deadline = None if time_limit is None else time.monotonic() + time_limit
        executed = 0

        while self.state is State.RUNNING:
            if max_steps is not None and executed >= max_steps:
                raise Aborted(f'Instruction budget of {max_steps} used up at pc={self.pc}')

            if deadline is not None and time.monotonic() >= deadline:
                raise Aborted(f'Time limit of {time_limit}s reached at pc={self.pc}')

            self.step()
            executed += 1

        return self.state
