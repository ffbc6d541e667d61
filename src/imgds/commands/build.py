from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from imgds.cancellation import CancellationToken, interrupt_source
from imgds.config import load_build_config
from imgds.dataset import build_dataset, load_and_split
from imgds.monitoring import configure_logging, log_context
from imgds.preview import PreviewWindow, preview_split


def build_overrides(args: Any) -> dict[str, Any]:
    log_level = "WARNING" if args.quiet else args.log_level
    return {
        "dataset": {
            "image_directory": args.image_directory,
            "output_file": args.output_file,
            "image_size": args.image_size,
            "test_fraction": args.test_fraction,
        },
        "preview": {
            "enabled": (False if args.no_preview else None),
            "count": args.preview_count,
        },
        "monitoring": {
            "json_logs": (True if args.json_logs else None),
            "log_level": log_level,
        },
    }


def run_build(args: Any, search_root: Path) -> int:
    logger = logging.getLogger("imgds.command")
    try:
        config = load_build_config(
            search_root=search_root,
            config_path=args.config,
            cli_overrides=build_overrides(args),
        )
    except Exception as exc:
        configure_logging()
        logger.error("build failed: %s", exc)
        return 1

    configure_logging(config.monitoring.log_level, config.monitoring.json_logs)
    logger.info("creating dataset", extra=log_context(**config.as_log_context()))

    try:
        token = CancellationToken()
        with interrupt_source(token):
            summary = build_dataset(
                images_root=config.dataset.image_directory,
                output_path=config.dataset.output_file,
                target_size=config.dataset.image_size,
                cancel_token=token,
                progress_interval=config.dataset.progress_interval,
            )

        split = load_and_split(summary.output_path, test_fraction=config.dataset.test_fraction)
        if config.preview.count > 0:
            window = PreviewWindow(config.preview.window_name) if config.preview.enabled else None
            preview_split(split, count=config.preview.count, window=window)
    except KeyboardInterrupt:
        logger.error("build interrupted")
        return 1
    except Exception as exc:
        logger.error("build failed: %s", exc, extra=log_context(error_type=type(exc).__name__))
        return 1

    payload = {
        "build": summary.as_dict(),
        "split": {
            "test_fraction": config.dataset.test_fraction,
            "train": len(split.train),
            "test": len(split.test),
        },
    }
    print(json.dumps(payload, ensure_ascii=True, indent=2))
    return 0
