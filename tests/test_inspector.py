import struct
from pathlib import Path

from aggtool.archive.inspector import inspect_agg, validate_agg

from agg_helper import write_agg


def test_well_formed_archive_has_no_issues(tmp_path: Path):
    path = write_agg(
        tmp_path / "DATA.AGG", [("A.BIN", b"a" * 4), ("B.BIN", b"")]
    )
    info = inspect_agg(path)
    assert info["count"] == 2
    assert [e["name"] for e in info["entries"]] == ["A.BIN", "B.BIN"]
    assert validate_agg(info) == []


def test_entry_overlapping_directory_and_names_is_reported(tmp_path: Path):
    # count=2, name width 8, first entry starts inside the directory block
    data = bytearray(186)
    struct.pack_into("<H", data, 0, 2)
    struct.pack_into("<III", data, 2, 0, 20, 100)
    struct.pack_into("<III", data, 14, 0, 120, 60)
    data[170:186] = b"ICNHERO\x00AUDIOBKG"
    path = tmp_path / "SCENARIO.AGG"
    path.write_bytes(bytes(data))
    issues = validate_agg(inspect_agg(path, name_width=8))
    assert issues == [
        "Entry ICNHERO overlaps the directory",
        "Entry AUDIOBKG overlaps the name table",
    ]
