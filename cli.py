#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
aisbreaker-stability Unified CLI Entry Point

Usage:
    python cli.py text2image "a cat" --width 512 --height 512   # Generate images
    python cli.py text2image "a cat" --dry-run                  # Show request body only
    python cli.py version                                       # Show version info
    python cli.py check                                         # Check library status
"""

import argparse
import importlib
import json
import sys

# Fix Windows console encoding
if sys.platform == 'win32':
    try:
        sys.stdout.reconfigure(encoding='utf-8', errors='replace')
        sys.stderr.reconfigure(encoding='utf-8', errors='replace')
    except Exception:
        pass


REQUIRED_LIBS = {
    "aiohttp": "aiohttp",
    "yaml": "pyyaml",
    "pydantic": "pydantic",
}


def build_request_data(args) -> dict:
    """Map CLI arguments to the normalized request shape"""
    text = {"content": args.prompt}
    if args.weight is not None:
        text["weight"] = args.weight

    data = {"inputs": [{"text": text}]}
    if args.width is not None or args.height is not None:
        data["requestMedia"] = {"image": {"width": args.width, "height": args.height}}
    if args.samples is not None:
        data["requestOptions"] = {"numberOfAlternativeResponses": args.samples}
    return data


async def _run_text2image(service, request) -> int:
    response = await service.send_message(request)
    written = await service.wait_for_image_writes()

    print(f"[OK] {len(response.outputs)} image(s) in {response.usage.total_milliseconds} ms")
    for path in written:
        print(f"  - {path}")
    if len(written) < len(response.outputs):
        print(f"[WARN] {len(response.outputs) - len(written)} image(s) could not be written")
    return 0


def cmd_text2image(args):
    """Generate images from a text prompt"""
    import asyncio

    from aisbreaker.api import Request
    from aisbreaker.config import (
        DEFAULT_CONFIG,
        get_nested,
        init_logging,
        load_config,
        merge_config,
    )
    from aisbreaker.services import StabilityAIText2ImageFactory, StabilityAIText2ImageProps
    from aisbreaker.services.stability import build_text_to_image_body

    config = DEFAULT_CONFIG
    if args.config:
        config = merge_config(config, load_config(args.config))
    if args.debug:
        config = merge_config(
            config,
            {"global": {"log": {"level": "debug"}}, "stability": {"debug": True}},
        )
    if args.output_dir:
        config = merge_config(config, {"stability": {"image_output_dir": args.output_dir}})

    init_logging(get_nested(config, "global", "log"))

    request = Request.model_validate(build_request_data(args))

    if args.dry_run:
        print(json.dumps(build_text_to_image_body(request), ensure_ascii=False, indent=2))
        return 0

    props = StabilityAIText2ImageProps.from_config(config)
    service = StabilityAIText2ImageFactory().create_ais_api(props)
    return asyncio.run(_run_text2image(service, request))


def cmd_version(args):
    """Show version info"""
    from aisbreaker import __version__
    print(f"aisbreaker-stability v{__version__}")
    return 0


def cmd_check(args):
    """Check library status"""
    print("aisbreaker-stability Library Status\n")
    print("=" * 40)

    missing = []
    for module_name, package_name in REQUIRED_LIBS.items():
        try:
            importlib.import_module(module_name)
            print(f"[OK] {package_name}: installed")
        except ModuleNotFoundError:
            print(f"[--] {package_name}: not installed")
            missing.append(package_name)

    print("=" * 40)

    if missing:
        print(f"\nTip: Install missing libraries:")
        print(f"   pip install {' '.join(missing)}")
        return 1

    print(f"\n[OK] All required libraries installed!")
    return 0


def main():
    parser = argparse.ArgumentParser(
        prog="aisbreaker-stability",
        description="aisbreaker-stability: Stability AI text-to-image adapter",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # text2image subcommand
    p_t2i = subparsers.add_parser("text2image", help="Generate images from a text prompt")
    p_t2i.add_argument("prompt", help="Text prompt")
    p_t2i.add_argument("-c", "--config", default=None, help="Config file path")
    p_t2i.add_argument("--width", type=int, default=None, help="Target image width")
    p_t2i.add_argument("--height", type=int, default=None, help="Target image height")
    p_t2i.add_argument("-n", "--samples", type=int, default=None, help="Number of images")
    p_t2i.add_argument("--weight", type=float, default=None, help="Prompt weight")
    p_t2i.add_argument("-o", "--output-dir", default=None, help="Image output directory")
    p_t2i.add_argument("--debug", action="store_true", help="Log raw API response")
    p_t2i.add_argument("--dry-run", action="store_true", help="Only print the request body")
    p_t2i.set_defaults(func=cmd_text2image)

    # version subcommand
    p_version = subparsers.add_parser("version", help="Show version info")
    p_version.set_defaults(func=cmd_version)

    # check subcommand
    p_check = subparsers.add_parser("check", help="Check library status")
    p_check.set_defaults(func=cmd_check)

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 0

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted by user")
        return 1
    except Exception as e:
        print(f"\n[ERROR] {e}")
        import traceback
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
