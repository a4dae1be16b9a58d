import argparse
import sys
from pathlib import Path

from sfdisk_sort import __version__
from sfdisk_sort.config import settings
from sfdisk_sort.logging import LoggerFactory, operation_context, setup_logging
from sfdisk_sort.storage.exceptions import SfdiskSortError
from sfdisk_sort.storage.sfdisk import Disk, parse_dump, read_dump, read_dump_stream

FOOTER_LINES = (
    "",
    "# Partitions were sorted by start sector and renumbered by sfdisk-sort.",
    "# Review this table, then apply it with: sfdisk <device> < this-file",
)

EXIT_OK = 0
EXIT_FAILURE = 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sfdisk-sort",
        description="Sort an 'sfdisk -d' dump by start sector and renumber its partitions",
    )
    parser.add_argument("input", nargs="?", default="-", help="Dump file to read ('-' for stdin)")
    parser.add_argument("-o", "--output", default="-", help="Write the result here instead of stdout")
    parser.add_argument("--no-footer", action="store_true", help="Do not append the comment footer")
    parser.add_argument(
        "--check",
        action="store_true",
        help="Print nothing; exit 1 if partitions are out of order or not numbered 1..n",
    )
    parser.add_argument("-d", "--debug", action="store_true", help="Enable verbose debug output")
    parser.add_argument("--trace", action="store_true", help="Log every parsed line")
    parser.add_argument("--log-dir", type=Path, default=None, help="Also write log files here")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def load_input(source: str) -> str:
    if source == "-":
        return read_dump_stream(sys.stdin)
    return read_dump(Path(source))


def render_output(disk: Disk, *, footer: bool) -> str:
    text = disk.to_text()
    if footer:
        text += "".join(f"{line}\n" for line in FOOTER_LINES)
    return text


def write_output(destination: str, text: str) -> None:
    if destination == "-":
        sys.stdout.write(text)
        sys.stdout.flush()
        return
    Path(destination).write_text(text, encoding="utf-8")


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    log_dir = args.log_dir
    if log_dir is None and settings.get_setting("log_dir"):
        log_dir = Path(settings.get_setting("log_dir"))
    setup_logging(
        debug=args.debug or settings.get_bool("debug"),
        trace=args.trace,
        log_dir=log_dir,
    )
    log = LoggerFactory.for_cli()

    try:
        with operation_context("sort", source=args.input):
            disk = parse_dump(load_input(args.input))
            if args.check:
                if disk.is_ordered():
                    log.info(f"{disk.name}: partitions already in order")
                    return EXIT_OK
                log.warning(f"{disk.name}: partitions are out of order")
                return EXIT_FAILURE

            disk.rearrange()
            footer = settings.get_bool("footer_enabled", True) and not args.no_footer
            write_output(args.output, render_output(disk, footer=footer))
    except (SfdiskSortError, OSError):
        # operation_context has already logged the failure
        return EXIT_FAILURE

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
