"""Entry point for running the LED board server or one-off conversions."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .config import SETTINGS, configure_logging
from .errors import LedBoardError
from .payloads import parse_color
from .processing.codec import format_for_filename
from .processing.pipeline import BLACK, WHITE, EffectOptions, TextSpec, render_led_effect, render_text_image


def cmd_serve(_args: argparse.Namespace) -> int:
    """Run the Flask development server."""
    from .app import create_app

    create_app().run(host="0.0.0.0", port=SETTINGS.port, debug=False)
    return 0


def cmd_process(args: argparse.Namespace) -> int:
    options = EffectOptions(
        brightness=args.brightness,
        contrast=args.contrast,
        invert=args.invert,
        cell_size=args.cell_size,
    )
    output = Path(args.output)
    data = render_led_effect(Path(args.input).read_bytes(), format_for_filename(output.name), options)
    output.write_bytes(data)
    print(f"Processed image saved to: {output}")
    return 0


def cmd_text(args: argparse.Namespace) -> int:
    spec = TextSpec(
        text=args.text,
        font_size=args.font_size,
        color=parse_color(args.color, WHITE),
        background_color=parse_color(args.background, BLACK),
    )
    output = Path(args.output)
    output.write_bytes(render_text_image(spec, format_for_filename(output.name), font_path=SETTINGS.font_path))
    print(f"Text image saved to: {output}")
    return 0


def cmd_screenshot(args: argparse.Namespace) -> int:
    from .infrastructure.capture import CaptureClient
    from .infrastructure.storage import ImageStore

    store = ImageStore(SETTINGS.screenshots_dir, "screenshot", "/screenshots")
    store.path_for(args.filename)
    data = CaptureClient(SETTINGS).capture(args.url, selector=args.selector)
    path = store.save(args.filename, data)
    print(f"Screenshot saved to: {path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ledboard", description="LED board image effects")
    sub = parser.add_subparsers(dest="command")

    serve = sub.add_parser("serve", help="Run the HTTP server")
    serve.set_defaults(func=cmd_serve)

    process = sub.add_parser("process", help="Apply the LED effect to an image file")
    process.add_argument("input")
    process.add_argument("output")
    process.add_argument("--brightness", type=float, default=None)
    process.add_argument("--contrast", type=float, default=None)
    process.add_argument("--invert", action="store_true")
    process.add_argument("--cell-size", type=int, default=SETTINGS.led_size)
    process.set_defaults(func=cmd_process)

    text = sub.add_parser("text", help="Render a line of text to an image file")
    text.add_argument("text")
    text.add_argument("output")
    text.add_argument("--font-size", type=int, default=SETTINGS.font_size)
    text.add_argument("--color", default=None, help="Hex color, e.g. #ffffff")
    text.add_argument("--background", default=None, help="Hex color, e.g. #000000")
    text.set_defaults(func=cmd_text)

    shot = sub.add_parser("screenshot", help="Capture a page into the screenshots directory")
    shot.add_argument("url")
    shot.add_argument("filename")
    shot.add_argument("--selector", default=None)
    shot.set_defaults(func=cmd_screenshot)

    parser.set_defaults(func=cmd_serve)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    configure_logging()
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except (LedBoardError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
