import logging as lg
import tomllib
from pathlib import Path
from typing import Any


class RunSettings:
    trace: bool
    dump: bool
    max_steps: int | None
    time_limit: float | None
    text_image: bool | None     # None: guess from the file suffix

    KEYS = ('trace', 'dump', 'max_steps', 'time_limit', 'text_image')

    def __init__(self):
        self.trace = False
        self.dump = False
        self.max_steps = None
        self.time_limit = None
        self.text_image = None

    def update(
        self,
        trace: bool | None = None,
        dump: bool | None = None,
        max_steps: int | None = None,
        time_limit: float | None = None,
        text_image: bool | None = None
    ):
        if trace is not None:
            self.trace = trace

        if dump is not None:
            self.dump = dump

        if max_steps is not None:
            self.max_steps = max_steps

        if time_limit is not None:
            self.time_limit = time_limit

        if text_image is not None:
            self.text_image = text_image

        return self


def settings_from_dict(config: dict[str, Any]) -> RunSettings:
    section = config.get('synvm', {})

    for key in section:
        if key not in RunSettings.KEYS:
            raise UserWarning(f'Unknown setting {key}')

    return RunSettings().update(**section)


def load_settings(path: str | Path) -> RunSettings:
    if isinstance(path, str):
        path = Path(path)

    lg.debug(f'Loading settings from {path}')
    config = tomllib.loads(path.read_text())
    return settings_from_dict(config)
