"""Keyboard shortcut parsing and the modifier masks grabbed for it."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntFlag
from typing import Sequence, Tuple

from deskrec.types import HotKey


class Modifier(IntFlag):
    """Core X modifier masks."""

    SHIFT = 1 << 0
    LOCK = 1 << 1
    CONTROL = 1 << 2
    MOD1 = 1 << 3
    MOD2 = 1 << 4
    MOD3 = 1 << 5
    MOD4 = 1 << 6
    MOD5 = 1 << 7


class ShortcutError(ValueError):
    """Raised when a shortcut string cannot be used."""


# Names looked for anywhere in the shortcut string.
_MODIFIER_NAMES = (
    ("Shift", Modifier.SHIFT),
    ("Control", Modifier.CONTROL),
    ("Mod1", Modifier.MOD1),
    ("Mod2", Modifier.MOD2),
    ("Mod3", Modifier.MOD3),
    ("Mod4", Modifier.MOD4),
    ("Mod5", Modifier.MOD5),
)


@dataclass(frozen=True)
class Shortcut:
    """A parsed shortcut: its modifiers and the name of its key."""

    modifiers: Modifier
    key: str

    def hotkey(self, keycode: int, numlock_mask: int = 0) -> HotKey:
        """The hotkey record for this shortcut bound to ``keycode``."""
        return HotKey(masks=grab_masks(int(self.modifiers), numlock_mask), key=keycode)


def parse_shortcut(shortcut: str) -> Shortcut:
    """Parse a string such as ``Control+Mod1+s``.

    At least one modifier is required, since the key is grabbed on the root
    window; the key is what follows the last ``+``.
    """
    modifiers = Modifier(0)
    for name, flag in _MODIFIER_NAMES:
        if name in shortcut:
            modifiers |= flag
    if not modifiers:
        raise ShortcutError(f"shortcut {shortcut!r} has no modifier")
    head, plus, key = shortcut.rpartition("+")
    if not plus:
        raise ShortcutError(f"shortcut {shortcut!r} has no key")
    if not key:
        raise ShortcutError(f"shortcut {shortcut!r} names an empty key")
    return Shortcut(modifiers=modifiers, key=key)


def grab_masks(modifier_mask: int, numlock_mask: int = 0) -> Tuple[int, ...]:
    """Masks to grab so the shortcut works with Caps Lock and Num Lock on or off."""
    modifier_mask = int(modifier_mask)
    lock = int(Modifier.LOCK)
    masks = [modifier_mask, lock | modifier_mask]
    if numlock_mask:
        masks += [numlock_mask | modifier_mask, numlock_mask | lock | modifier_mask]
    return tuple(masks)


def numlock_mask_from_modmap(modmap: Sequence[Sequence[int]], numlock_keycode: int) -> int:
    """Find the modifier mask that Num Lock is mapped to, or 0.

    ``modmap`` holds, for each of the eight modifiers, its keycodes; where Num
    Lock appears under several, the last one wins.
    """
    mask = 0
    for index, keycodes in enumerate(modmap[:8]):
        if numlock_keycode in keycodes:
            mask = 1 << index
    return mask