import logging

import pytest
from click.testing import CliRunner

import synvm.runtime.cpu as cpu
import synvm.runtime.emulator as emulator
import synvm.image.loader as loader
from synvm.common.faults import InvalidOpcode
from synvm.runtime.channel import BufferChannel
from synvm.runtime.settings import RunSettings

from unit_utils import find_file


def test_execute_with_preset_registers():
    channel = BufferChannel()
    proc = emulator.execute([9, 32768, 32769, 4, 19, 32768], channel, registers={1: 65})
    assert channel.output == [69]
    assert proc.state is cpu.State.HALTED


def test_execute_respects_budget():
    settings = RunSettings().update(max_steps=10)

    with pytest.raises(cpu.Aborted):
        emulator.execute([6, 0], BufferChannel(), settings)


def test_execute_propagates_faults():
    with pytest.raises(InvalidOpcode):
        emulator.execute([30], BufferChannel())


def test_cli_text_image():
    runner = CliRunner()
    result = runner.invoke(emulator.run, [str(find_file('testdata/programs/countdown.txt'))])
    assert result.exit_code == emulator.EXIT_HALT
    assert result.stdout == '9876543210\n'


def test_cli_binary_image(tmp_path):
    image = tmp_path / 'hello.bin'
    image.write_bytes(loader.encode_binary([19, 72, 19, 105, 0]))
    result = CliRunner().invoke(emulator.run, [str(image)])
    assert result.exit_code == emulator.EXIT_HALT
    assert result.stdout == 'Hi'


def test_cli_input_file(tmp_path):
    feed = tmp_path / 'input.txt'
    feed.write_text('abc\n')
    program = str(find_file('testdata/programs/echo.txt'))
    result = CliRunner().invoke(emulator.run, ['--input', str(feed), program])
    assert result.exit_code == emulator.EXIT_HALT
    assert result.stdout == 'abc'


def test_cli_fault(tmp_path):
    image = tmp_path / 'bad.txt'
    image.write_text('18')
    result = CliRunner().invoke(emulator.run, [str(image)])
    assert result.exit_code == emulator.EXIT_EXEC_ERROR


def test_cli_budget(tmp_path):
    image = tmp_path / 'loop.txt'
    image.write_text('6, 0')
    result = CliRunner().invoke(emulator.run, ['--max-steps', '100', str(image)])
    assert result.exit_code == emulator.EXIT_ABORTED


def test_cli_bad_image(tmp_path):
    image = tmp_path / 'bad.bin'
    image.write_bytes(b'\x01')
    result = CliRunner().invoke(emulator.run, [str(image)])
    assert result.exit_code == emulator.EXIT_IMAGE_ERROR


def test_cli_config_file(tmp_path):
    image = tmp_path / 'loop.prog'
    image.write_text('6, 0')
    config = tmp_path / 'synvm.toml'
    config.write_text('[synvm]\nmax_steps = 20\n')
    result = CliRunner().invoke(emulator.run, ['--config', str(config), str(image)])
    assert result.exit_code == emulator.EXIT_ABORTED


def test_cli_reports_image_size(tmp_path, caplog):
    caplog.set_level(logging.INFO)
    image = tmp_path / 'hello.txt'
    image.write_text('19, 72, 0')
    result = CliRunner().invoke(emulator.run, [str(image)])
    assert result.exit_code == emulator.EXIT_HALT
    assert 'image of 3 words' in caplog.text
