import argparse
import logging
import os
import sys
from collections.abc import Sequence
from typing import TextIO

from framewire.bootstrap import deps
from framewire.bootstrap.config.loader import CONFIG_ENV
from framewire.core.helpers.utils import setup_logging
from framewire.core.models.errors import EndOfStream, FrameError
from framewire.core.models.frame import HEADER_SIZE
from framewire.core.ports.render import Renderer
from framewire.infra.format_renderer import JsonRenderer, YamlRenderer

RENDERERS: dict[str, type[Renderer]] = {
    "json": JsonRenderer,
    "yaml": YamlRenderer,
}

logger = logging.getLogger("bootstrap.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="framewire",
        description=(
            "Inspect and copy framewire streams.\n\n"
            "A stream is a sequence of frames, each made of an 8-byte\n"
            "little-endian length followed by a MessagePack payload."
        ),
        formatter_class=argparse.RawTextHelpFormatter
    )

    parser.add_argument(
        "-c", "--config",
        type=str,
        help=f"Path to a framewire YAML settings file (overrides {CONFIG_ENV})"
    )

    parser.add_argument(
        "-l", "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity (DEBUG traces every frame)."
    )

    sub = parser.add_subparsers(dest="command", required=True)

    dump = sub.add_parser("dump", help="Decode and print every frame of a file.")
    dump.add_argument("file", type=str)
    dump.add_argument(
        "-f", "--format",
        default="yaml",
        choices=sorted(RENDERERS),
        help="Output format: one YAML document or one JSON line per frame."
    )

    stat = sub.add_parser("stat", help="Count frames and payload bytes without decoding.")
    stat.add_argument("file", type=str)

    relay = sub.add_parser("relay", help="Copy frames verbatim from SRC to DST.")
    relay.add_argument("src", type=str)
    relay.add_argument("dst", type=str)
    relay.add_argument(
        "-n", "--count",
        type=int,
        default=None,
        help="Number of frames to copy (default: all)."
    )
    relay.add_argument(
        "-a", "--append",
        action="store_true",
        help="Append to DST instead of truncating it."
    )

    return parser


def cmd_dump(args: argparse.Namespace, out: TextIO) -> None:
    codec = deps.get_codec()
    renderer = RENDERERS[args.format]()
    with open(args.file, "rb") as stream:
        for value in codec.iter_values(stream):
            print(renderer.render(value), file=out)


def cmd_stat(args: argparse.Namespace, out: TextIO) -> None:
    codec = deps.get_codec()
    frames = 0
    payload_bytes = 0
    largest = 0
    with open(args.file, "rb") as stream:
        for frame in codec.iter_frames(stream):
            frames += 1
            payload_bytes += frame.length
            largest = max(largest, frame.length)

    stats = {
        "frames": frames,
        "payload_bytes": payload_bytes,
        "stream_bytes": payload_bytes + HEADER_SIZE * frames,
        "largest_payload": largest,
    }
    print(YamlRenderer().render(stats), file=out)


def cmd_relay(args: argparse.Namespace, out: TextIO) -> None:
    if args.count is not None and args.count < 0:
        raise ValueError("--count must not be negative")

    codec = deps.get_codec()
    mode = "ab" if args.append else "wb"
    relayed = 0
    with open(args.src, "rb") as source, open(args.dst, mode) as target:
        while args.count is None or relayed < args.count:
            try:
                codec.relay(source, target)
            except EndOfStream:
                if args.count is not None:
                    raise
                break
            relayed += 1

    logger.info(f"Relayed {relayed} frame(s) from {args.src} to {args.dst}")
    print(f"relayed: {relayed}", file=out)


COMMANDS = {
    "dump": cmd_dump,
    "stat": cmd_stat,
    "relay": cmd_relay,
}


def main(argv: Sequence[str] | None = None, out: TextIO | None = None) -> int:
    args = build_parser().parse_args(argv)
    out = out or sys.stdout

    setup_logging(args.log_level)

    previous = os.environ.get(CONFIG_ENV)
    if args.config:
        os.environ[CONFIG_ENV] = args.config
    deps.reset()

    try:
        COMMANDS[args.command](args, out)
    except FrameError as ex:
        logger.error(f"{args.command} failed: {ex}")
        return 1
    except (OSError, ValueError, TypeError) as ex:
        logger.error(f"{args.command} failed: {ex}")
        return 2
    finally:
        if args.config:
            if previous is None:
                os.environ.pop(CONFIG_ENV, None)
            else:
                os.environ[CONFIG_ENV] = previous
        deps.reset()

    return 0


if __name__ == "__main__":
    sys.exit(main())
