# type: ignore
import pytest

import synvm.runtime.cpu as cpu
from synvm.runtime.channel import BufferChannel


@pytest.fixture
def channel():
    yield BufferChannel()


@pytest.fixture
def proc(channel):
    yield cpu.CPU(channel)
