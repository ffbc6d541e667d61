from __future__ import annotations

import argparse
from pathlib import Path


class _UsageParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:
        self.print_usage()
        self.exit(1, f"{self.prog}: error: {message}\n")


def _build_parser() -> argparse.ArgumentParser:
    parser = _UsageParser(
        prog="imgds",
        description="Convert a directory of labeled JPEG class folders into a serialized dataset",
        epilog="Example: imgds imagenet_train imagenet.dat 224",
    )
    parser.add_argument("image_directory", help="Root directory with one <id>_<description> folder per class")
    parser.add_argument("output_file", help="Path of the dataset file to write")
    parser.add_argument("image_size", type=int, help="Square image size in pixels (width and height)")

    parser.add_argument("--config", help="Path to TOML/YAML/JSON config file")
    parser.add_argument("--test-fraction", type=float, help="Fraction of samples held out for testing (default 0.05)")
    parser.add_argument("--preview-count", type=int, help="Samples shown per split after building (default 3)")
    parser.add_argument("--no-preview", action="store_true", help="Log preview samples without opening a window")

    parser.add_argument("--json-logs", action="store_true", help="Emit structured JSON logs")
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Log level")
    parser.add_argument("--quiet", action="store_true", help="Suppress non-warning logs")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    from imgds.commands.build import run_build

    return run_build(args, Path.cwd())


if __name__ == "__main__":
    raise SystemExit(main())
