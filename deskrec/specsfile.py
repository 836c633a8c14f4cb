"""The text file in the cache directory that records a capture's attributes."""

from __future__ import annotations

import re
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Callable, List, Tuple, Union

PathLike = Union[str, Path]


class SpecsFileError(Exception):
    """Raised when a specs file cannot be written or read back."""


# (file key, attribute name, converter) in the order they appear in the file.
_LAYOUT: List[Tuple[str, str, Callable[[str], object]]] = [
    ("recordMyDesktop", "version", str),
    ("Width", "width", int),
    ("Height", "height", int),
    ("Filename", "filename", str),
    ("FPS", "fps", float),
    ("NoSound", "nosound", lambda v: bool(int(v))),
    ("Frequency", "frequency", int),
    ("Channels", "channels", int),
    ("BufferSize", "buffsize", int),
    ("SoundFrameSize", "sound_framesize", int),
    ("PeriodSize", "periodsize", int),
    ("UsedJack", "use_jack", lambda v: bool(int(v))),
    ("v_bitrate", "v_bitrate", int),
    ("v_quality", "v_quality", int),
    ("s_quality", "s_quality", int),
    ("ZeroCompression", "zerocompression", lambda v: bool(int(v))),
]

_LINE = re.compile(r"^\s*(?P<key>\S+)\s*=\s*(?P<value>\S+)\s*$")


@dataclass
class CaptureSpecs:
    """Capture attributes needed to encode a cached recording later."""

    version: str
    width: int
    height: int
    filename: str
    fps: float = 15.0
    nosound: bool = False
    frequency: int = 22050
    channels: int = 2
    buffsize: int = 0
    sound_framesize: int = 0
    periodsize: int = 0
    use_jack: bool = False
    v_bitrate: int = 0
    v_quality: int = 0
    s_quality: int = 0
    zerocompression: bool = False

    def _format(self, name: str) -> str:
        value = getattr(self, name)
        if isinstance(value, bool):
            return str(int(value))
        if name == "fps":
            return f"{float(value):f}"
        return str(value)

    def render(self) -> str:
        """Produce the text of the specs file."""
        return "".join(f"{key} = {self._format(name)}\n" for key, name, _ in _LAYOUT)

    @classmethod
    def parse(cls, text: str) -> "CaptureSpecs":
        """Read specs from the text of a specs file; attributes must be in order."""
        lines = iter(line for line in text.splitlines() if line.strip())
        values = {}
        for key, name, convert in _LAYOUT:
            line = next(lines, None)
            match = _LINE.match(line) if line is not None else None
            if match is None or match["key"] != key:
                raise SpecsFileError(f"Error reading {key} attribute")
            try:
                values[name] = convert(match["value"])
            except ValueError as exc:
                raise SpecsFileError(f"Error reading {key} attribute") from exc
        return cls(**values)


def write_specs_file(path: PathLike, specs: CaptureSpecs) -> None:
    """Write ``specs`` to ``path``, replacing any previous file."""
    try:
        with open(path, "w", encoding="utf-8", newline="\n") as fp:
            fp.write(specs.render())
    except OSError as exc:
        raise SpecsFileError(f"Error writing specsfile {path}: {exc}") from exc


def read_specs_file(path: PathLike) -> CaptureSpecs:
    """Read the specs stored at ``path``."""
    try:
        with open(path, "r", encoding="utf-8") as fp:
            text = fp.read()
    except OSError as exc:
        raise SpecsFileError(f"Error opening specsfile {path}: {exc}") from exc
    return CaptureSpecs.parse(text)