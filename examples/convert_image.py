"""Convert an image file on disk to another format.

Usage:
    uv run python examples/convert_image.py photo.heic --to jpg
    uv run python examples/convert_image.py logo.png --to ico --out-dir build/
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path

from imgconvert import ImageConverter, ImageConvertError, ImageFormat, available_targets, detect_format

_SIZE_UNITS = ("B", "KB", "MB", "GB")


def _format_size(num_bytes: int) -> str:
    """Human-readable size: whole bytes, one decimal above that."""
    size = float(num_bytes)
    unit = 0
    while size >= 1024 and unit < len(_SIZE_UNITS) - 1:
        size /= 1024
        unit += 1
    return f"{size:.{0 if unit == 0 else 1}f} {_SIZE_UNITS[unit]}"


async def convert(paths: list[Path], target: str, out_dir: Path) -> int:
    """Convert each file, printing one line per result."""
    converter = ImageConverter()
    failures = 0
    out_dir.mkdir(parents=True, exist_ok=True)

    for path in paths:
        try:
            result = await converter.convert_file(path.read_bytes(), target, filename=path.name)
        except (ImageConvertError, OSError) as e:
            # One generic message per file, details go to the log
            logging.getLogger(__name__).debug("Conversion of %s failed", path, exc_info=e)
            print(f"{path.name}: invalid format or corrupt file ({e})")
            failures += 1
            continue

        dest = out_dir / result.filename
        dest.write_bytes(result.image.data)
        print(f"{path.name} -> {dest} ({result.image.mime}, {_format_size(len(result.image.data))})")

    return failures


def list_targets(paths: list[Path]) -> int:
    """Print the valid target formats for each file name."""
    failures = 0
    for path in paths:
        try:
            source = detect_format(None, path.name)
        except ImageConvertError as e:
            print(f"{path.name}: invalid format or corrupt file ({e})")
            failures += 1
            continue
        targets = ", ".join(fmt.value for fmt in available_targets(source))
        print(f"{path.name}: {targets}")
    return 1 if failures else 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Convert images between formats")
    parser.add_argument("files", nargs="+", type=Path, help="Input image files")
    parser.add_argument(
        "--to",
        dest="target",
        choices=[fmt.value for fmt in ImageFormat] + ["jpeg"],
        help="Target format",
    )
    parser.add_argument("--out-dir", type=Path, default=Path("."), help="Output directory")
    parser.add_argument("--list-targets", action="store_true", help="Show valid targets per file and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.list_targets:
        return list_targets(args.files)

    if not args.target:
        parser.error("--to is required")

    failures = asyncio.run(convert(args.files, args.target, args.out_dir))
    return 1 if failures else 0


if __name__ == "__main__":
    raise SystemExit(main())
