from pathlib import Path

import synvm.image.loader as loader
import synvm.runtime.emulator as emulator
from synvm.runtime.channel import BufferChannel


def find_file(filename: str) -> Path:
    return Path(__file__).parent / filename


def load_file(filename: str) -> str:
    return find_file(filename).read_text()


def load_program(name: str) -> list[int]:
    return loader.load_file(find_file(f'testdata/programs/{name}.txt'))


def execute_program(name: str, input: str = ''):
    channel = BufferChannel(input)
    proc = emulator.execute(load_program(name), channel)
    return proc, channel
