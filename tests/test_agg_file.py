import logging
import struct
from pathlib import Path

from aggtool.archive import AggFile
from aggtool.format.errors import FormatViolationError
from aggtool.format.icn import read_frames

from agg_helper import build_agg, write_agg, write_png


def _scenario_archive() -> bytes:
    # count=2, name width 8, entries at [20,120) and [120,170)
    data = bytearray(186)
    for i in range(len(data)):
        data[i] = i % 251
    struct.pack_into("<H", data, 0, 2)
    struct.pack_into("<III", data, 2, 0, 20, 100)
    struct.pack_into("<III", data, 14, 0, 120, 50)
    data[170:186] = b"ICNHERO\x00AUDIOBKG"
    return bytes(data)


def test_read_returns_recorded_byte_range(tmp_path: Path):
    raw = _scenario_archive()
    path = tmp_path / "SCENARIO.AGG"
    path.write_bytes(raw)
    agg = AggFile(name_width=8)
    assert agg.open(path)
    assert agg.read("ICNHERO\x00") == raw[20:120]
    assert agg.read("AUDIOBKG") == raw[120:170]


def test_read_length_matches_record_size(tmp_path: Path):
    entries = [("A.BIN", b"a" * 10), ("B.BIN", b"b" * 3), ("C.BIN", b"c")]
    agg = AggFile()
    assert agg.open(write_agg(tmp_path / "DATA.AGG", entries))
    for name, data in entries:
        assert len(agg.read(name)) == agg.index[name].size
        assert agg.read(name) == data


def test_zero_size_entry_reads_empty(tmp_path: Path):
    agg = AggFile()
    assert agg.open(write_agg(tmp_path / "DATA.AGG", [("Z.BIN", b"")]))
    assert "Z.BIN" in agg
    assert agg.read("Z.BIN") == b""


def test_missing_entry_reads_empty(tmp_path: Path):
    agg = AggFile()
    assert agg.open(write_agg(tmp_path / "DATA.AGG", [("A.BIN", b"a")]))
    assert agg.read("NOPE.BIN") == b""


def test_failed_open_leaves_facade_unusable(tmp_path: Path):
    path = tmp_path / "BROKEN.AGG"
    path.write_bytes(struct.pack("<H", 900) + b"\x00" * 32)
    agg = AggFile()
    assert not agg.open(path)
    assert not agg.is_open
    assert isinstance(agg.error, FormatViolationError)
    assert agg.read("ANY") == b""
    assert agg.names() == []


def test_failed_reopen_discards_previous_archive(tmp_path: Path):
    agg = AggFile()
    assert agg.open(write_agg(tmp_path / "GOOD.AGG", [("A.BIN", b"a")]))
    assert not agg.open(tmp_path / "MISSING.AGG")
    assert agg.read("A.BIN") == b""


def test_override_wins_over_archive_bytes(tmp_path: Path):
    path = write_agg(tmp_path / "HEROES2.AGG", [("HERO.ICN", b"archive")])
    (tmp_path / "HEROES2" / "hero.icn").mkdir(parents=True)
    agg = AggFile(encoders={"ICN": lambda d: b"override bytes"})
    assert agg.open(path)
    assert agg.read("HERO.ICN") == b"override bytes"


def test_override_ignored_for_zero_size_entry(tmp_path: Path):
    path = write_agg(tmp_path / "HEROES2.AGG", [("HERO.ICN", b"")])
    (tmp_path / "HEROES2" / "HERO.ICN").mkdir(parents=True)
    agg = AggFile(encoders={"ICN": lambda d: b"override"})
    assert agg.open(path)
    assert "HERO.ICN" in agg.overrides
    assert agg.read("HERO.ICN") == b""


def test_override_without_archive_entry_is_not_served(tmp_path: Path):
    path = write_agg(tmp_path / "HEROES2.AGG", [("A.BIN", b"a")])
    (tmp_path / "HEROES2" / "NEW.ICN").mkdir(parents=True)
    agg = AggFile(encoders={"ICN": lambda d: b"override"})
    assert agg.open(path)
    assert agg.read("NEW.ICN") == b""


def test_override_use_is_reported_to_logger(tmp_path: Path, caplog):
    path = write_agg(tmp_path / "HEROES2.AGG", [("HERO.ICN", b"archive")])
    (tmp_path / "HEROES2" / "HERO.ICN").mkdir(parents=True)
    logger = logging.getLogger("test.agg")
    caplog.set_level(logging.INFO, logger="test.agg")
    agg = AggFile(encoders={"ICN": lambda d: b"x"}, logger=logger)
    assert agg.open(path)
    agg.read("HERO.ICN")
    assert "Using the external version of HERO.ICN" in caplog.text


def test_instances_do_not_share_state(tmp_path: Path):
    data = write_agg(tmp_path / "DATA.AGG", [("A.BIN", b"data")])
    audio = write_agg(tmp_path / "AUDIO.AGG", [("A.BIN", b"audio")])
    a, b = AggFile(), AggFile()
    assert a.open(data) and b.open(audio)
    assert a.read("A.BIN") == b"data"
    assert b.read("A.BIN") == b"audio"


def test_read_returns_independent_copy(tmp_path: Path):
    agg = AggFile()
    assert agg.open(write_agg(tmp_path / "DATA.AGG", [("A.BIN", b"abc")]))
    first = agg.read("A.BIN")
    assert isinstance(first, bytes)
    assert agg.read("A.BIN") == first == b"abc"


def test_archive_payload_larger_than_name_table(tmp_path: Path):
    raw = build_agg([("BIG.BIN", bytes(range(256)) * 8)])
    path = tmp_path / "BIG.AGG"
    path.write_bytes(raw)
    agg = AggFile()
    assert agg.open(path)
    assert agg.read("BIG.BIN") == bytes(range(256)) * 8


def test_out_of_range_record_fails_open(tmp_path: Path):
    data = bytearray(build_agg([("ONLY.BIN", b"\x07" * 10)]))
    struct.pack_into("<I", data, 2 + 8, 10000)
    path = tmp_path / "BAD.AGG"
    path.write_bytes(bytes(data))
    agg = AggFile()
    assert not agg.open(path)
    assert isinstance(agg.error, FormatViolationError)
    assert agg.read("ONLY.BIN") == b""


def test_oversized_override_image_skips_only_that_override(
    tmp_path: Path, monkeypatch
):
    from PIL import Image

    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 4)
    path = write_agg(
        tmp_path / "HEROES2.AGG",
        [("BIG.ICN", b"big archive"), ("HERO.ICN", b"hero archive")],
    )
    write_png(tmp_path / "HEROES2" / "BIG.ICN" / "0.png", (4, 4))
    write_png(tmp_path / "HEROES2" / "HERO.ICN" / "0.png", (1, 1))
    agg = AggFile()
    assert agg.open(path)
    assert "BIG.ICN" not in agg.overrides
    assert agg.read("BIG.ICN") == b"big archive"
    assert agg.read("HERO.ICN") != b"hero archive"
    assert read_frames(agg.read("HERO.ICN"))[0].width == 1
