import io
import sys
from pathlib import Path
import logging as lg
from typing import Sequence

import click

from synvm.common.faults import VMFault, ImageError
from synvm.runtime.channel import IOChannel, ConsoleChannel
from synvm.runtime.settings import RunSettings, load_settings
import synvm.runtime.cpu as cpu
import synvm.image.loader as loader


EXIT_HALT = 0
EXIT_ABORTED = 3
EXIT_IMAGE_ERROR = 4
EXIT_EXEC_ERROR = 100


def execute(
    image: Sequence[int],
    channel: IOChannel | None = None,
    settings: RunSettings | None = None,
    registers: dict[int, int] | None = None
) -> cpu.CPU:
    if settings is None:
        settings = RunSettings()

    proc = cpu.CPU(channel, trace=settings.trace, dump=settings.dump)
    proc.load(image)

    for idx, value in (registers or {}).items():
        proc.registers.set(idx, value)

    proc.run(max_steps=settings.max_steps, time_limit=settings.time_limit)
    return proc


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('--trace', is_flag=True, default=None, help='Log every instruction before it runs')
@click.option('--dump', is_flag=True, default=None, help='Log registers and stack after every instruction')
@click.option('--max-steps', type=int, help='Abort after this many instructions')
@click.option('--time-limit', type=float, help='Abort after this many seconds')
@click.option('--text/--binary', 'text_image', default=None, help='Image format (default: by suffix)')
@click.option('-c', '--config', type=click.Path(exists=True, path_type=Path), help='TOML settings file')
@click.option('-i', '--input', 'input_file', type=click.Path(exists=True, path_type=Path),
              help='Feed this file to the program instead of stdin')
@click.argument('image_filename', type=Path)
def run(
    verbose: bool,
    trace: bool | None,
    dump: bool | None,
    max_steps: int | None,
    time_limit: float | None,
    text_image: bool | None,
    config: Path | None,
    input_file: Path | None,
    image_filename: Path
):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.info('SYNVM')

    settings = load_settings(config) if config else RunSettings()
    settings.update(
        trace=trace,
        dump=dump,
        max_steps=max_steps,
        time_limit=time_limit,
        text_image=text_image
    )

    channel = None

    if input_file is not None:
        channel = ConsoleChannel(stdin=io.StringIO(input_file.read_text()))

    try:
        image = loader.load_file(image_filename, text=settings.text_image)
        proc = execute(image, channel, settings)
        lg.info(
            f'Execution halted gracefully after {proc.steps} steps, '
            f'image of {proc.memory.loaded_size} words'
        )
        sys.exit(EXIT_HALT)

    except ImageError as e:
        lg.error(f'Cannot load image: {e}')
        sys.exit(EXIT_IMAGE_ERROR)

    except cpu.Aborted as e:
        lg.info(f'Execution aborted: {e}')
        sys.exit(EXIT_ABORTED)

    except KeyboardInterrupt:
        lg.info('Execution halted by the user')
        sys.exit(EXIT_ABORTED)

    except VMFault as e:
        lg.error(f'Execution faulted with {e.kind} at pc={e.pc}: {e.message}')
        sys.exit(EXIT_EXEC_ERROR)

    finally:
        sys.stdout.flush()


if __name__ == '__main__':
    run()
