import io

from synvm.runtime.channel import BufferChannel, ConsoleChannel


def test_buffer_channel():
    channel = BufferChannel('ab')
    assert channel.read_char() == ord('a')
    assert channel.read_char() == ord('b')
    assert channel.read_char() is None

    channel.write_char(72)
    channel.write_char(105)
    assert channel.output == [72, 105]
    assert channel.text() == 'Hi'


def test_buffer_channel_from_codes():
    channel = BufferChannel([1, 2])
    assert channel.read_char() == 1
    assert channel.read_char() == 2
    assert channel.read_char() is None


def test_console_channel():
    stdout = io.StringIO()
    channel = ConsoleChannel(stdin=io.StringIO('x'), stdout=stdout)
    channel.write_char(ord('O'))
    channel.write_char(ord('\n'))
    assert stdout.getvalue() == 'O\n'
    assert channel.read_char() == ord('x')
    assert channel.read_char() is None
