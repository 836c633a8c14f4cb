import pytest

from deskrec.types import BRWindow, DisplaySpecs, FrameHeader, HotKey, Rect


def test_rect_edges_follow_size():
    r = Rect(15, 2, 4, 3)
    assert r.right == r.x + r.width
    assert r.bottom == r.y + r.height


def test_rect_contains_itself_and_inner():
    outer = Rect(0, 0, 20, 20)
    inner = Rect(15, 2, 2, 2)
    assert outer.contains(outer)
    assert outer.contains(inner)
    assert not inner.contains(outer)


def test_rect_partial_overlap_is_not_contained():
    a = Rect(15, 2, 4, 3)
    b = Rect(10, 4, 6, 6)
    assert not a.contains(b)
    assert not b.contains(a)


@pytest.mark.parametrize(
    "args",
    [(0, 0, -1, 5), (0, 0, 5, 70000), (40000, 0, 1, 1), (0, -40000, 1, 1)],
)
def test_rect_rejects_out_of_range(args):
    with pytest.raises(ValueError):
        Rect(*args)


def test_brwindow_holds_rects():
    spec = DisplaySpecs(width=20, height=20, root=7)
    win = BRWindow(winrect=Rect(0, 0, spec.width, spec.height), rrect=Rect(2, 2, 2, 2), windowid=spec.root)
    assert win.winrect.contains(win.rrect)
    assert win.windowid == spec.root


def test_hotkey_modnum_counts_masks():
    hk = HotKey(masks=(4, 6, 20, 22), key=39)
    assert hk.modnum == len(hk.masks)
    assert hk.key == 39


def test_hotkey_rejects_too_many_masks():
    with pytest.raises(ValueError):
        HotKey(masks=(1, 2, 3, 4, 5), key=1)


def test_frame_header_size_and_prefix():
    data = FrameHeader(capture_frameno=3, ynum=1, unum=2, vnum=3).pack()
    assert len(data) == 20
    assert data[:4] == b"FRAM"


def test_frame_header_round_trip():
    header = FrameHeader(capture_frameno=123456, ynum=10, unum=20, vnum=30)
    assert FrameHeader.unpack(header.pack()) == header


def test_frame_header_rejects_bad_prefix():
    data = b"XXXX" + FrameHeader(capture_frameno=1).pack()[4:]
    with pytest.raises(ValueError):
        FrameHeader.unpack(data)


def test_frame_header_rejects_bad_length():
    with pytest.raises(ValueError):
        FrameHeader.unpack(FrameHeader(capture_frameno=1).pack()[:-1])