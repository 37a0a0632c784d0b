from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from pypixbuf.buffer import PixelBuffer
from pypixbuf.config.io import BufferConfig, load_buffer_config
from pypixbuf.constants import THRESHOLD_OPS
from pypixbuf.serialization.binary import load_buffer, read_header, save_buffer
from pypixbuf.utils.jsonable import to_jsonable

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pypixbuf",
        description="Inspect, create and transform raw pixel-buffer files (.imgbin).",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable DEBUG logging")
    sub = parser.add_subparsers(dest="command", required=True)

    info = sub.add_parser("info", help="Print the header of a saved buffer")
    info.add_argument("path", help="Path to a .imgbin file")
    info.add_argument("--json", action="store_true", help="Print the header as JSON")

    new = sub.add_parser("new", help="Create a filled buffer and save it")
    new.add_argument("--out", required=True, help="Output .imgbin path")
    new.add_argument(
        "--config",
        default=None,
        help="JSON/YAML file with width/height/channels/model/fill (flags override it)",
    )
    new.add_argument("--width", type=int, default=None)
    new.add_argument("--height", type=int, default=None)
    new.add_argument("--channels", type=int, default=None)
    new.add_argument("--model", default=None, help="Model label, e.g. RGB or GRAY")
    new.add_argument("--fill", type=int, default=None, help="Sample value in [0, 255]")

    thr = sub.add_parser("threshold", help="Save a single-channel mask of a buffer")
    thr.add_argument("path", help="Input .imgbin path")
    thr.add_argument("--op", required=True, choices=list(THRESHOLD_OPS))
    thr.add_argument("--value", required=True, type=int, help="Integer threshold")
    thr.add_argument("--out", required=True, help="Output .imgbin path")

    inv = sub.add_parser("invert", help="Save the inverted buffer")
    inv.add_argument("path", help="Input .imgbin path")
    inv.add_argument("--out", required=True, help="Output .imgbin path")

    return parser


def _cmd_info(args: argparse.Namespace) -> int:
    header = read_header(Path(str(args.path)))
    payload: dict[str, Any] = {
        "path": Path(str(args.path)),
        "width": header.width,
        "height": header.height,
        "channels": header.channels,
        "model": header.model,
        "payload_size": header.payload_size,
    }
    if bool(args.json):
        print(json.dumps(to_jsonable(payload), indent=2, sort_keys=True))
        return 0
    print(f"PixelBuffer({header.width}x{header.height}x{header.channels}, {header.model})")
    return 0


def _cmd_new(args: argparse.Namespace) -> int:
    base = load_buffer_config(str(args.config)) if args.config is not None else BufferConfig()
    cfg = base.merged(
        {
            "width": args.width,
            "height": args.height,
            "channels": args.channels,
            "model": args.model,
            "fill": args.fill,
        }
    )
    buf = PixelBuffer.filled(cfg.width, cfg.height, cfg.channels, cfg.model, cfg.fill)
    save_buffer(Path(str(args.out)), buf)
    print(repr(buf))
    return 0


def _cmd_threshold(args: argparse.Namespace) -> int:
    buf = load_buffer(Path(str(args.path)))
    mask = buf.threshold(str(args.op), int(args.value))
    save_buffer(Path(str(args.out)), mask)
    print(repr(mask))
    return 0


def _cmd_invert(args: argparse.Namespace) -> int:
    buf = load_buffer(Path(str(args.path)))
    inverted = ~buf
    save_buffer(Path(str(args.out)), inverted)
    print(repr(inverted))
    return 0


_COMMANDS = {
    "info": _cmd_info,
    "new": _cmd_new,
    "threshold": _cmd_threshold,
    "invert": _cmd_invert,
}


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if bool(args.verbose) else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        return _COMMANDS[str(args.command)](args)
    except Exception as exc:  # noqa: BLE001 - CLI boundary
        logger.debug("Command %r failed", args.command, exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
