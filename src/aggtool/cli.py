"""Command line interface for aggtool."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .api import (
    build_icn,
    extract_assets,
    inspect_archive,
    inspect_icn,
    open_archive,
)
from .archive.inspector import validate_agg
from .config import AggConfig, load_config
from .format.errors import AggError
from .logging import configure_logging, get_logger, section, step
from .reporting import (
    PlainReporter,
    RichReporter,
    SilentReporter,
    get_reporter,
    set_reporter,
    set_verbosity,
)


def _list_cmd(args: argparse.Namespace, cfg: AggConfig) -> int:
    info = inspect_archive(args.archive, cfg)
    if args.json:
        print(json.dumps(info, indent=2, sort_keys=True))
    else:
        for e in info["entries"]:
            print(
                f"{e['name']:<{cfg.name_width}} "
                f"{e['offset']:>10} {e['size']:>10}"
            )
    rep = get_reporter()
    rep.status(
        "List summary: "
        + f"file={Path(args.archive).name} entries={info['count']} file_size={info['file_size']}"
    )
    for issue in validate_agg(info):
        rep.warning(issue)
    return 0


def _extract_cmd(args: argparse.Namespace, cfg: AggConfig) -> int:
    agg = open_archive(args.archive, cfg)
    step(f"extracting to {args.output}")
    result = extract_assets(agg, args.output, args.names or None)
    get_reporter().status(
        "Extract summary: "
        + f"files={result.files_written} bytes={result.bytes_written}"
    )
    return 0


def _overrides_cmd(args: argparse.Namespace, cfg: AggConfig) -> int:
    agg = open_archive(args.archive, cfg)
    rep = get_reporter()
    with section("Overrides"):
        for name in agg.overrides.names():
            entry = agg.overrides.get(name)
            used = "replaces archive entry" if name in agg else "unused"
            print(f"{name} {len(entry.data) if entry else 0} {used}")
    rep.status(f"Override summary: overrides={len(agg.overrides)}")
    return 0


def _icn_build_cmd(args: argparse.Namespace, cfg: AggConfig) -> int:
    written = build_icn(args.source, args.output, cfg)
    get_reporter().status(
        f"Build summary: file={args.output.name} bytes={written}"
    )
    return 0


def _icn_inspect_cmd(args: argparse.Namespace, cfg: AggConfig) -> int:
    print(json.dumps(inspect_icn(args.icn), indent=2, sort_keys=True))
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="aggtool", description="AGG archive inspection and override tool"
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (repeatable)",
    )
    p.add_argument(
        "-r",
        "--reporter",
        choices=["plain", "rich", "silent"],
        default="plain",
        help="Select reporter backend: plain (default), rich, silent",
    )
    p.add_argument(
        "-c",
        "--config",
        type=Path,
        help="YAML or JSON configuration file",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    ls = sub.add_parser("list", help="List archive entries")
    ls.add_argument("archive", type=Path)
    ls.add_argument("--json", action="store_true", help="Emit JSON listing")
    ls.set_defaults(func=_list_cmd)

    x = sub.add_parser("extract", help="Extract assets to a directory")
    x.add_argument("archive", type=Path)
    x.add_argument("output", type=Path)
    x.add_argument("names", nargs="*", help="Assets to extract (default: all)")
    x.set_defaults(func=_extract_cmd)

    o = sub.add_parser("overrides", help="Show loose-file overrides")
    o.add_argument("archive", type=Path)
    o.set_defaults(func=_overrides_cmd)

    b = sub.add_parser("icn-build", help="Encode a directory of images")
    b.add_argument("source", type=Path)
    b.add_argument("output", type=Path)
    b.set_defaults(func=_icn_build_cmd)

    i = sub.add_parser("icn-inspect", help="Describe an ICN container")
    i.add_argument("icn", type=Path)
    i.set_defaults(func=_icn_inspect_cmd)

    return p


def main(argv: list[str] | None = None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.reporter == "silent":
        set_reporter(SilentReporter())
    elif args.reporter == "rich" and sys.stderr.isatty():
        set_reporter(RichReporter())
    else:
        set_reporter(PlainReporter())
    set_verbosity(args.verbose)
    configure_logging(args.verbose)
    try:
        cfg = load_config(args.config) if args.config else AggConfig()
        return args.func(args, cfg)
    except (AggError, OSError, ValueError) as e:
        get_logger().error("%s", e)
        return 1
    finally:
        get_reporter().flush()


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
