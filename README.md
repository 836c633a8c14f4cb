# deskrec

Pure-Python building blocks for a desktop recorder. The modules work on plain
numbers, bytes and files; nothing here talks to a display server. The package
needs only the standard library.

## Modules

### `deskrec.yuv`

- `make_matrices()` builds a `ColorTables` of BT.601 lookup tables; its
  `luma`, `chroma_u` and `chroma_v` methods convert one red/green/blue triple.
- `rgb_from_32(value)` and `rgb_from_16(value)` split a 24/32-bit or 5-6-5
  pixel value into red, green and blue.
- `YuvBuffer(y_width, y_height)` is a planar 4:2:0 image with `y`, `u` and `v`
  bytearrays; it raises `ValueError` for non-positive sizes.
- `BlockMap(width, height, unit=16)` flags changed square blocks: `mark(x, y)`,
  `clear()`, and `(x, y) in block_map`.
- `update_yuv_buffer(yuv, data, data_back, x, y, width, height, sampling, depth, blocks=None)`
  converts a region of packed pixels (depth 16, 24 or 32; any other depth
  raises `ValueError`) into the buffer. Chroma is taken from the top-left pixel
  of each 2×2 block (`Sampling.DISCARD`) or averaged over it
  (`Sampling.AVERAGE`). When `data_back` holds the previous frame, only changed
  pixels are converted and their blocks are marked in `blocks`, a sequence of
  the Y, U and V `BlockMap`s, which is then required.
- `dummy_pointer_to_yuv(...)` draws a 16-pixel-wide pointer image, skipping
  pixels equal to `no_pixel`; `xfixes_pointer_to_yuv(...)` alpha-blends a
  cursor image stored as one native `unsigned long` per pixel.

### `deskrec.types`

`Rect` (with `right`, `bottom` and `contains(other)`; values are checked
against X rectangle ranges), `DisplaySpecs`, `BRWindow`, `HotKey` (up to four
modifier masks, `modnum` counts them) and `FrameHeader`, whose `pack()` and
`FrameHeader.unpack(data)` read and write the fixed `SIZE`-byte header in the
host's byte order, starting with `b"FRAM"`.

### `deskrec.specsfile`

`CaptureSpecs` holds the attributes of a cached recording. `render()` produces
the `Key = value` text and `CaptureSpecs.parse(text)` reads it back, requiring
every attribute in order. `write_specs_file(path, specs)` and
`read_specs_file(path)` do the file I/O; any failure raises `SpecsFileError`.

### `deskrec.skeleton`

`FisheadPacket` and `FisbonePacket` encode Ogg Skeleton header packets with
`to_bytes()` and decode them with `from_bytes(data)`, raising `SkeletonError`
for a wrong identifier or a short packet. `FisbonePacket.add_message_header_field(key, value)`
appends a `key: value\r\n` line. `write_ogg_page(header, body, out)` writes an
already built page to a binary stream and returns the number of bytes written.

### `deskrec.shortcuts`

`parse_shortcut("Control+Mod1+s")` returns a `Shortcut` with its `Modifier`
flags and key name, or raises `ShortcutError` when there is no modifier or no
key after the last `+`. `grab_masks(modifier_mask, numlock_mask=0)` gives the
masks to listen for with Caps Lock and Num Lock on or off,
`numlock_mask_from_modmap(modmap, numlock_keycode)` finds Num Lock's modifier
mask, and `Shortcut.hotkey(keycode, numlock_mask=0)` builds a `HotKey`.

### `deskrec.window`

`root_recording_window(specs, x, y, width, height)` and
`child_recording_window(specs, window_id, win_x, win_y, win_width, win_height, x, y, width, height)`
return a `BRWindow` for the requested area (a width or height of zero means
"up to the edge"), raising `WindowBoundsError` when it does not fit. The chosen
area is logged at INFO level through `logging`.

## Example

```python
from deskrec.shortcuts import parse_shortcut
from deskrec.specsfile import CaptureSpecs, read_specs_file, write_specs_file
from deskrec.window import root_recording_window
from deskrec.types import DisplaySpecs

shortcut = parse_shortcut("Control+Mod1+s")
print(shortcut.key, shortcut.hotkey(keycode=39).masks)

area = root_recording_window(DisplaySpecs(width=1920, height=1080), x=100, y=50)
print(area.rrect)

specs = CaptureSpecs(version="0.1.0", width=area.rrect.width,
                     height=area.rrect.height, filename="out.ogv")
write_specs_file("specs.txt", specs)
assert read_specs_file("specs.txt") == specs
```

## What it does not do

There is no command-line program. The package does not capture the screen,
sound or the cursor, grab keys, or query windows; it does not encode Theora or
Vorbis and does not build Ogg pages or streams. Callers supply pixel data,
window geometry and keycodes themselves.

## Tests

```
pip install -e .[test]
pytest
```