"""Command line entry point: one-shot conversion and the HTTP server."""

import argparse
import sys
import time
from collections.abc import Sequence
from pathlib import Path

import uvicorn
from loguru import logger
from pydantic import ValidationError

from .common.encoding import Encoding, FilterType
from .common.errors import ResizerError
from .common.schemas import (
    DEFAULT_CONCURRENCY_LIMIT,
    DEFAULT_QUALITY,
    DEFAULT_SPEED,
    EncodeConfig,
    ServerConfig,
    resize_spec_from_options,
)
from .pipeline.pipeline import process
from .server import create_app
from .utils.logging import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cl-image-resizer",
        description="Resize images and encode them as AVIF or JPEG.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--quality", type=float, default=DEFAULT_QUALITY, help="1 <= quality <= 100")
    parser.add_argument("--speed", type=int, default=DEFAULT_SPEED, help="1 <= speed <= 10 (AVIF only)")
    parser.add_argument(
        "--filter",
        type=FilterType,
        choices=list(FilterType),
        default=FilterType.LANCZOS3,
        help="Resampling kernel (gaussian and mitchell are not available in Pillow)",
    )
    parser.add_argument("--log-level", default="INFO", help="loguru log level")

    commands = parser.add_subparsers(dest="command", required=True)

    server = commands.add_parser(
        "server",
        help="Start an HTTP server with the resize endpoints",
        description="The endpoints are at /images/resized/{width}/{height}/{image}[/{encoding}], "
        + "/images/resized/width/{width}/{image}[/{encoding}], "
        + "/images/resized/height/{height}/{image}[/{encoding}] and "
        + "/images/resized/scale/{scale}/{image}[/{encoding}].",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    server.add_argument("--host", default="0.0.0.0", help="Address to bind")
    server.add_argument("--port", type=int, default=3000, help="Port to bind")
    server.add_argument("--images", type=Path, default=Path("images"), help="Directory of images")
    server.add_argument(
        "--concurrency",
        type=int,
        default=DEFAULT_CONCURRENCY_LIMIT,
        help="Maximum number of images processed concurrently",
    )
    server.add_argument("--workers", type=int, default=None, help="Worker thread pool size")

    convert = commands.add_parser(
        "convert",
        help="Convert an image and write it to a file",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    convert.add_argument("image", type=Path, help="Source image")
    convert.add_argument("output", type=Path, help="Target file")
    convert.add_argument("--width", type=int, default=None, help="Target width")
    convert.add_argument("--height", type=int, default=None, help="Target height")
    convert.add_argument("--scale", type=float, default=None, help="Scale factor")
    convert.add_argument(
        "--encoding",
        default=None,
        help="avif, jpeg or jpg (default: from the output file extension, else avif)",
    )

    return parser


def run_convert(args: argparse.Namespace, config: EncodeConfig, parser: argparse.ArgumentParser) -> int:
    try:
        resize_spec = resize_spec_from_options(args.width, args.height, args.scale)
        encoding = (
            Encoding.parse(args.encoding) if args.encoding is not None else Encoding.from_suffix(args.output)
        )
    except ValueError as exc:
        parser.error(str(exc))

    try:
        output = process(args.image, resize_spec, encoding, config)
    except ResizerError as exc:
        logger.error(f"{args.image}: {exc!r}")
        print(f"error: {exc}", file=sys.stderr)
        return 1

    begin = time.perf_counter()
    try:
        _ = args.output.write_bytes(output.data)
    except OSError as exc:
        logger.error(f"cannot write {args.output}: {exc}")
        print(f"error: {exc}", file=sys.stderr)
        return 1
    elapsed_secs = time.perf_counter() - begin
    logger.debug(f"wrote {args.output} elapsed_secs={elapsed_secs:.3f}")
    return 0


def run_server(args: argparse.Namespace, config: EncodeConfig, parser: argparse.ArgumentParser) -> int:
    try:
        server_config = ServerConfig(
            host=args.host,
            port=args.port,
            images_dir=args.images,
            concurrency_limit=args.concurrency,
            workers=args.workers,
        )
    except ValidationError as exc:
        parser.error(str(exc))

    app = create_app(server_config, config)
    logger.info(f"serving on {server_config.host}:{server_config.port}")
    uvicorn.run(app, host=server_config.host, port=server_config.port, log_config=None)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    logger.debug(f"arguments: {vars(args)}")

    try:
        config = EncodeConfig(quality=args.quality, speed=args.speed, filter=args.filter)
    except ValidationError as exc:
        parser.error(str(exc))

    if args.command == "server":
        return run_server(args, config, parser)
    return run_convert(args, config, parser)


if __name__ == "__main__":
    raise SystemExit(main())
