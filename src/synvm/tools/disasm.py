import logging as lg
from pathlib import Path
from typing import Iterator, Sequence

import click

import synvm.common.ops as ops
from synvm.common.faults import ImageError
import synvm.image.loader as loader


def disassemble(
    words: Sequence[int],
    start: int = 0,
    end: int | None = None
) -> Iterator[tuple[int, str]]:
    ''' Linear sweep; anything that does not decode is listed as data '''
    if end is None or end > len(words):
        end = len(words)

    address = start

    while address < end:
        opcode = words[address]
        info = ops.OPCODES.get(opcode)

        if info is None or address + info.width > end:
            yield address, f'{address:05d}: .word {opcode}'
            address += 1
            continue

        operands = words[address + 1:address + info.width]
        yield address, ops.format_instruction(address, opcode, operands)
        address += info.width


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('--text/--binary', 'text_image', default=None, help='Image format (default: by suffix)')
@click.option('-s', '--start', type=int, default=0, help='First address to list')
@click.option('-e', '--end', type=int, help='Stop listing before this address')
@click.argument('image_filename', type=Path)
def disasm(verbose: bool, text_image: bool | None, start: int, end: int | None, image_filename: Path):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.WARNING)

    try:
        words = loader.load_file(image_filename, text=text_image)
    except ImageError as e:
        raise click.ClickException(str(e))

    for _, line in disassemble(words, start, end):
        click.echo(line)


if __name__ == '__main__':
    disasm()
