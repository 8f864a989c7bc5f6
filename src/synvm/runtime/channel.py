import sys
import logging as lg
from typing import Iterable, TextIO


class IOChannel:
    ''' Character device behind the out and in instructions '''

    def write_char(self, code: int):
        raise NotImplementedError()

    def read_char(self) -> int | None:
        ''' Next character code, or None once the input is exhausted '''
        raise NotImplementedError()


class ConsoleChannel(IOChannel):
    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None):
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout

    def write_char(self, code: int):
        self.stdout.write(chr(code))

        # Programs prompt without newlines before reading
        if code == ord('\n'):
            self.stdout.flush()

    def read_char(self) -> int | None:
        self.stdout.flush()
        c = self.stdin.read(1)

        if c == '':
            lg.debug('Console input closed')
            return None

        return ord(c)


class BufferChannel(IOChannel):
    ''' Pre-recorded input, captured output '''

    def __init__(self, input: str | Iterable[int] = ''):
        if isinstance(input, str):
            self.input = [ord(c) for c in input]
        else:
            self.input = list(input)

        self.position = 0
        self.output: list[int] = []

    def write_char(self, code: int):
        self.output.append(code)

    def read_char(self) -> int | None:
        if self.position >= len(self.input):
            return None

        code = self.input[self.position]
        self.position += 1
        return code

    def text(self) -> str:
        return ''.join(chr(code) for code in self.output)
