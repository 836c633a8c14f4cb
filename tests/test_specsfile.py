import pytest

from deskrec.specsfile import (
    CaptureSpecs,
    SpecsFileError,
    read_specs_file,
    write_specs_file,
)

KEYS = [
    "recordMyDesktop",
    "Width",
    "Height",
    "Filename",
    "FPS",
    "NoSound",
    "Frequency",
    "Channels",
    "BufferSize",
    "SoundFrameSize",
    "PeriodSize",
    "UsedJack",
    "v_bitrate",
    "v_quality",
    "s_quality",
    "ZeroCompression",
]


def _specs(**overrides):
    base = dict(
        version="1.0",
        width=640,
        height=480,
        filename="out.ogv",
        fps=15.0,
        nosound=False,
        frequency=22050,
        channels=2,
        buffsize=4096,
        sound_framesize=4,
        periodsize=1024,
        use_jack=True,
        v_bitrate=45000,
        v_quality=63,
        s_quality=10,
        zerocompression=True,
    )
    base.update(overrides)
    return CaptureSpecs(**base)


def test_render_keys_in_order():
    lines = _specs().render().splitlines()
    assert [line.split(" = ")[0] for line in lines] == KEYS


def test_render_formats_fps_and_flags():
    lines = _specs().render().splitlines()
    assert lines[0] == "recordMyDesktop = 1.0"
    assert "FPS = 15.000000" in lines
    assert "UsedJack = 1" in lines
    assert "NoSound = 0" in lines


def test_parse_render_round_trip():
    specs = _specs(fps=29.5, nosound=True, use_jack=False)
    assert CaptureSpecs.parse(specs.render()) == specs


def test_parse_accepts_loose_spacing():
    text = _specs().render().replace(" = ", "=")
    assert CaptureSpecs.parse(text) == _specs()


def test_file_round_trip(tmp_path):
    path = tmp_path / "specs.txt"
    specs = _specs(filename="/tmp/capture.ogv")
    write_specs_file(path, specs)
    assert read_specs_file(path) == specs


def test_missing_attribute_names_it():
    lines = _specs().render().splitlines()
    del lines[2]
    with pytest.raises(SpecsFileError, match="Height"):
        CaptureSpecs.parse("\n".join(lines))


def test_bad_number_is_rejected():
    text = _specs().render().replace("Channels = 2", "Channels = two")
    with pytest.raises(SpecsFileError, match="Channels"):
        CaptureSpecs.parse(text)


def test_truncated_file_is_rejected():
    text = "\n".join(_specs().render().splitlines()[:-1])
    with pytest.raises(SpecsFileError, match="ZeroCompression"):
        CaptureSpecs.parse(text)


def test_read_missing_file(tmp_path):
    with pytest.raises(SpecsFileError):
        read_specs_file(tmp_path / "absent.txt")


def test_write_into_missing_directory(tmp_path):
    with pytest.raises(SpecsFileError):
        write_specs_file(tmp_path / "no" / "such" / "specs.txt", _specs())