import argparse
import logging
import sys
from typing import BinaryIO, cast

from indt.writer import IndentWriter

logger = logging.getLogger("indt")


def copy_indented(src: BinaryIO, writer: IndentWriter):
    for data in src:
        # retry the tail until the sink has taken all of it
        while data:
            data = data[writer.write(data) :]


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="indt", description="Indent every line of the input."
    )
    parser.add_argument("files", nargs="*", metavar="FILE", default=["-"])
    parser.add_argument("-d", "--depth", type=int, default=1)
    unit_group = parser.add_mutually_exclusive_group()
    unit_group.add_argument("-u", "--unit", default="    ")
    unit_group.add_argument("-t", "--tabs", action="store_true")
    parser.add_argument("--blank-lines", action="store_true")
    parser.add_argument("-o", "--output")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    depth = cast(int, args.depth)
    if depth < 0:
        parser.error("depth must not be negative")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    unit = "\t" if args.tabs else cast(str, args.unit)
    output = cast(str | None, args.output)

    try:
        out = open(output, "wb") if output else sys.stdout.buffer
    except OSError as exc:
        logger.error("cannot open output: %s", exc)
        return 1

    try:
        writer = IndentWriter(out, unit, indent_blank_lines=args.blank_lines)

        for _ in range(depth):
            writer.more()

        for path in cast(list[str], args.files):
            logger.debug("indenting %s at depth %d", path, depth)

            if path == "-":
                copy_indented(sys.stdin.buffer, writer)
            else:
                with open(path, "rb") as src:
                    copy_indented(src, writer)

        writer.flush()
    except OSError as exc:
        logger.error("%s", exc)
        return 1
    finally:
        if output:
            out.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
