import json
import struct
from pathlib import Path

from aggtool.cli import main

from agg_helper import build_agg, write_agg, write_png


def test_list_json(tmp_path: Path, capsys):
    path = write_agg(
        tmp_path / "DATA.AGG", [("A.BIN", b"aaa"), ("B.BIN", b"")]
    )
    assert main(["-r", "silent", "list", "--json", str(path)]) == 0
    info = json.loads(capsys.readouterr().out)
    assert info["count"] == 2
    assert [e["name"] for e in info["entries"]] == ["A.BIN", "B.BIN"]
    assert info["entries"][0]["size"] == 3


def test_extract_all(tmp_path: Path):
    path = write_agg(
        tmp_path / "DATA.AGG", [("A.BIN", b"aaa"), ("B.BIN", b"")]
    )
    out = tmp_path / "out"
    assert main(["-r", "silent", "extract", str(path), str(out)]) == 0
    assert (out / "A.BIN").read_bytes() == b"aaa"
    assert not (out / "B.BIN").exists()


def test_extract_uses_overrides(tmp_path: Path):
    path = write_agg(tmp_path / "HEROES2.AGG", [("HERO.ICN", b"archive")])
    write_png(tmp_path / "HEROES2" / "hero.icn" / "0.png", (1, 1))
    out = tmp_path / "out"
    assert main(["-r", "silent", "extract", str(path), str(out)]) == 0
    assert (out / "HERO.ICN").read_bytes()[:2] == b"\x01\x00"


def test_open_failure_exit_code(tmp_path: Path):
    bad = tmp_path / "BAD.AGG"
    bad.write_bytes(b"\xff\xff\x00\x00")
    assert main(["-r", "silent", "extract", str(bad), str(tmp_path)]) == 1


def test_icn_build_and_inspect(tmp_path: Path, capsys):
    src = tmp_path / "sprites"
    write_png(src / "0.png", (2, 2))
    write_png(src / "1.png", (1, 1))
    out = tmp_path / "out.icn"
    assert main(["-r", "silent", "icn-build", str(src), str(out)]) == 0
    capsys.readouterr()
    assert main(["-r", "silent", "icn-inspect", str(out)]) == 0
    info = json.loads(capsys.readouterr().out)
    assert info["frame_count"] == 2
    assert [f["pixel_data_offset"] for f in info["frames"]] == [13, 45]


def test_icn_build_empty_directory_fails(tmp_path: Path):
    (tmp_path / "empty").mkdir()
    args = ["-r", "silent", "icn-build", str(tmp_path / "empty"), "x.icn"]
    assert main(args) == 1


def test_config_name_width(tmp_path: Path, capsys):
    cfg = tmp_path / "aggtool.yaml"
    cfg.write_text("name_width: 8\n")
    path = write_agg(tmp_path / "DATA.AGG", [("AUDIOBKG", b"z")], name_width=8)
    argv = ["-r", "silent", "-c", str(cfg), "list", "--json", str(path)]
    assert main(argv) == 0
    assert json.loads(capsys.readouterr().out)["entries"][0]["name"] == (
        "AUDIOBKG"
    )


def test_overrides_listing(tmp_path: Path, capsys):
    path = write_agg(tmp_path / "HEROES2.AGG", [("HERO.ICN", b"archive")])
    write_png(tmp_path / "HEROES2" / "hero.icn" / "0.png", (1, 1))
    write_png(tmp_path / "HEROES2" / "extra.icn" / "0.png", (1, 1))
    assert main(["-r", "silent", "overrides", str(path)]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        "EXTRA.ICN 26 unused",
        "HERO.ICN 26 replaces archive entry",
    ]


def test_list_warns_about_overlapping_entries(tmp_path: Path, capsys):
    data = bytearray(build_agg([("A.BIN", b"a" * 4)]))
    # point the entry at the directory block
    struct.pack_into("<I", data, 2 + 4, 2)
    path = tmp_path / "DATA.AGG"
    path.write_bytes(bytes(data))
    assert main(["list", str(path)]) == 0
    err = capsys.readouterr().err
    assert "WARN: Entry A.BIN overlaps the directory" in err
    assert "entries=1" in err
