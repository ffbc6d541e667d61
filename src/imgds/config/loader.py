from __future__ import annotations

import json
import math
from dataclasses import asdict
from pathlib import Path
from typing import Any

from dynaconf import Dynaconf

from imgds.config.defaults import DEFAULT_CONFIG
from imgds.config.models import BuildConfig, DatasetConfig, MonitoringConfig, PreviewConfig
from imgds.errors import ConfigurationError

_CONFIG_NAMES = (
    "imgds.toml",
    "imgds.yaml",
    "imgds.yml",
    "imgds.json",
)


def _merge_dict(base: dict[str, Any], patch: dict[str, Any]) -> dict[str, Any]:
    for key, value in patch.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge_dict(base[key], value)
        else:
            base[key] = value
    return base


def _lower_keys(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {str(k).lower(): _lower_keys(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_lower_keys(item) for item in obj]
    return obj


def _drop_none(payload: dict[str, Any]) -> dict[str, Any]:
    cleaned: dict[str, Any] = {}
    for key, value in payload.items():
        if isinstance(value, dict):
            nested = _drop_none(value)
            if nested:
                cleaned[key] = nested
            continue
        if value is not None:
            cleaned[key] = value
    return cleaned


def _load_with_dynaconf(config_paths: list[Path]) -> dict[str, Any]:
    settings = Dynaconf(
        envvar_prefix="IMGDS",
        settings_files=[str(path) for path in config_paths],
        merge_enabled=True,
        environments=False,
        load_dotenv=False,
    )
    return _lower_keys(settings.as_dict())


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def _as_int(section: dict[str, Any], key: str) -> int:
    try:
        return int(section[key])
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{key} must be an integer, got {section[key]!r}") from exc


def _normalize(data: dict[str, Any]) -> BuildConfig:
    dataset_data = data.get("dataset", {})
    preview_data = data.get("preview", {})
    monitoring_data = data.get("monitoring", {})

    image_size = _as_int(dataset_data, "image_size")
    if image_size <= 0:
        raise ConfigurationError(f"image_size must be positive, got {image_size}")

    try:
        test_fraction = float(dataset_data["test_fraction"])
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(
            f"test_fraction must be a number, got {dataset_data['test_fraction']!r}"
        ) from exc
    if not math.isfinite(test_fraction) or not 0.0 <= test_fraction <= 1.0:
        raise ConfigurationError(f"test_fraction must be within [0, 1], got {test_fraction}")

    image_directory = dataset_data.get("image_directory")
    output_file = dataset_data.get("output_file")

    return BuildConfig(
        dataset=DatasetConfig(
            image_directory=str(image_directory) if image_directory else None,
            output_file=str(output_file) if output_file else None,
            image_size=image_size,
            test_fraction=test_fraction,
            progress_interval=max(1, _as_int(dataset_data, "progress_interval")),
        ),
        preview=PreviewConfig(
            enabled=_coerce_bool(preview_data.get("enabled", True)),
            count=max(0, _as_int(preview_data, "count")),
            window_name=str(preview_data.get("window_name", "imgds")),
        ),
        monitoring=MonitoringConfig(
            json_logs=_coerce_bool(monitoring_data.get("json_logs", False)),
            log_level=str(monitoring_data.get("log_level", "INFO")).upper(),
        ),
    )


def _default_config_copy() -> dict[str, Any]:
    return json.loads(json.dumps(DEFAULT_CONFIG))


def load_build_config(
    search_root: Path,
    config_path: str | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> BuildConfig:
    """Merge defaults, config file / IMGDS_* environment, and CLI overrides."""
    config_paths: list[Path] = []
    if config_path:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        config_paths.append(path)
    else:
        config_paths.extend(
            search_root / name for name in _CONFIG_NAMES if (search_root / name).exists()
        )

    merged = _default_config_copy()
    _merge_dict(merged, _load_with_dynaconf(config_paths))
    if cli_overrides:
        _merge_dict(merged, _lower_keys(_drop_none(cli_overrides)))

    return _normalize(merged)


def build_config_to_dict(config: BuildConfig) -> dict[str, Any]:
    return asdict(config)
