import struct
import logging as lg
from pathlib import Path

import pyparsing as pp

from synvm.common.hwconf import IMAGE_WORD_SIZE, IMAGE_WORD_MAX, MEMORY_SIZE
from synvm.common.faults import ImageError
import synvm.image.grammar as grammar

TEXT_SUFFIXES = ('.txt', '.prog')


def check_words(words: list[int]) -> list[int]:
    if len(words) > MEMORY_SIZE:
        raise ImageError(f'Image of {len(words)} words exceeds memory')

    for offset, word in enumerate(words):
        if word > IMAGE_WORD_MAX:
            raise ImageError(f'Word {word} at offset {offset} is not 16-bit')

    return words


def parse_binary(data: bytes) -> list[int]:
    if len(data) % IMAGE_WORD_SIZE != 0:
        raise ImageError(f'Binary image has odd length {len(data)}')

    count = len(data) // IMAGE_WORD_SIZE
    return check_words(list(struct.unpack(f'<{count}H', data)))


def parse_text(text: str) -> list[int]:
    try:
        tokens = grammar.image.parse_string(text, parse_all=True)
    except pp.ParseException as e:
        raise ImageError(f'Bad text image at line {e.lineno}, column {e.col}') from e

    return check_words(list(tokens))


def encode_binary(words: list[int]) -> bytes:
    return struct.pack(f'<{len(words)}H', *check_words(words))


def is_text_image(path: Path) -> bool:
    return path.suffix.lower() in TEXT_SUFFIXES


def load_file(path: str | Path, text: bool | None = None) -> list[int]:
    if isinstance(path, str):
        path = Path(path)

    if text is None:
        text = is_text_image(path)

    lg.debug(f'Loading {"text" if text else "binary"} image {path}')

    if text:
        words = parse_text(path.read_text())
    else:
        words = parse_binary(path.read_bytes())

    lg.info(f'Image {path.name}: {len(words)} words')
    return words
