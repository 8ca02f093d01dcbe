"""Deterministic per-repository colors.

The hash is the classic ``h * 31 + c`` string hash as browsers compute it:
only the ``h << 5`` term is truncated to a signed 32-bit integer, while the
subtraction and the character code are added at full precision. The
accumulator can therefore grow past 32 bits on long names. The same
repository name maps to the same hue on every run and on every machine. It
is not cryptographic: two names can collide.
"""

from __future__ import annotations

import colorsys
from dataclasses import dataclass

_SATURATION = 80
_BACKGROUND_LIGHTNESS = 90
_FOREGROUND_LIGHTNESS = 30


@dataclass(frozen=True)
class RepoColor:
    hue: int
    background: str
    foreground: str

    def to_hex(self) -> tuple[str, str]:
        """Return ``(background, foreground)`` as ``#rrggbb`` strings."""
        return (
            _hsl_to_hex(self.hue, _SATURATION, _BACKGROUND_LIGHTNESS),
            _hsl_to_hex(self.hue, _SATURATION, _FOREGROUND_LIGHTNESS),
        )


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def repo_hash(repo_name: str) -> int:
    h = 0
    for ch in repo_name:
        h = ord(ch) + (_to_int32(_to_int32(h) << 5) - h)
    return h


def color_for(repo_name: str) -> RepoColor:
    hue = abs(repo_hash(repo_name)) % 360
    return RepoColor(
        hue=hue,
        background=f"hsl({hue}, {_SATURATION}%, {_BACKGROUND_LIGHTNESS}%)",
        foreground=f"hsl({hue}, {_SATURATION}%, {_FOREGROUND_LIGHTNESS}%)",
    )


def _hsl_to_hex(hue: int, saturation: int, lightness: int) -> str:
    r, g, b = colorsys.hls_to_rgb(hue / 360, lightness / 100, saturation / 100)
    return "#{:02x}{:02x}{:02x}".format(round(r * 255), round(g * 255), round(b * 255))
