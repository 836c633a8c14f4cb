"""Working out the area to record from the screen, window and user options."""

from __future__ import annotations

import logging

from deskrec.types import BRWindow, DisplaySpecs, Rect

_log = logging.getLogger(__name__)


class WindowBoundsError(ValueError):
    """Raised when the requested recording area does not fit where it must."""


def _area_size(requested: int, available: int, offset: int) -> int:
    """The requested size, or what is left after ``offset`` when none is given."""
    size = requested if requested else available - offset
    if size < 0:
        raise WindowBoundsError(
            f"offset {offset} lies outside the available extent of {available}"
        )
    return size


def _report(brwin: BRWindow) -> BRWindow:
    r = brwin.rrect
    _log.info(
        "Initial recording window is set to: X:%d Y:%d Width:%d Height:%d",
        r.x,
        r.y,
        r.width,
        r.height,
    )
    return brwin


def root_recording_window(
    specs: DisplaySpecs, x: int = 0, y: int = 0, width: int = 0, height: int = 0
) -> BRWindow:
    """The recording window for the whole screen, cropped to the given area.

    A width or height of zero means "up to the screen's edge".
    """
    winrect = Rect(0, 0, specs.width, specs.height)
    try:
        rwidth = _area_size(width, winrect.width, x)
        rheight = _area_size(height, winrect.height, y)
    except WindowBoundsError as exc:
        raise WindowBoundsError(
            f"Window size specification out of bounds! "
            f"(current resolution:{specs.width}x{specs.height})"
        ) from exc

    if x + rwidth > specs.width or y + rheight > specs.height:
        raise WindowBoundsError(
            f"Window size specification out of bounds! "
            f"(current resolution:{specs.width}x{specs.height})"
        )

    rrect = Rect(x, y, rwidth, rheight)
    return _report(BRWindow(winrect=winrect, rrect=rrect, windowid=specs.root))


def child_recording_window(
    specs: DisplaySpecs,
    window_id: int,
    win_x: int,
    win_y: int,
    win_width: int,
    win_height: int,
    x: int = 0,
    y: int = 0,
    width: int = 0,
    height: int = 0,
) -> BRWindow:
    """The recording window for a single window placed at (win_x, win_y) on screen.

    ``x``, ``y``, ``width`` and ``height`` select an area relative to the
    window; a width or height of zero means "up to the window's edge".
    """
    if win_x + win_width > specs.width or win_y + win_height > specs.height:
        raise WindowBoundsError("Window must be on visible screen area!")
    winrect = Rect(win_x, win_y, win_width, win_height)

    try:
        rwidth = _area_size(width, win_width, x)
        rheight = _area_size(height, win_height, y)
    except WindowBoundsError as exc:
        raise WindowBoundsError("Specified Area is larger than window!") from exc

    if x + rwidth > win_width or y + rheight > win_height:
        raise WindowBoundsError("Specified Area is larger than window!")

    rrect = Rect(win_x + x, win_y + y, rwidth, rheight)
    return _report(BRWindow(winrect=winrect, rrect=rrect, windowid=window_id))