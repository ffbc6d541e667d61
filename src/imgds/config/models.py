from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class DatasetConfig:
    image_directory: str | None = None
    output_file: str | None = None
    image_size: int = 224
    test_fraction: float = 0.05
    progress_interval: int = 1000


@dataclass
class PreviewConfig:
    enabled: bool = True
    count: int = 3
    window_name: str = "imgds"


@dataclass
class MonitoringConfig:
    json_logs: bool = False
    log_level: str = "INFO"


@dataclass
class BuildConfig:
    dataset: DatasetConfig = field(default_factory=DatasetConfig)
    preview: PreviewConfig = field(default_factory=PreviewConfig)
    monitoring: MonitoringConfig = field(default_factory=MonitoringConfig)

    def as_log_context(self) -> dict[str, Any]:
        return {
            "image_directory": self.dataset.image_directory,
            "output_file": self.dataset.output_file,
            "image_size": self.dataset.image_size,
            "test_fraction": self.dataset.test_fraction,
            "preview": self.preview.enabled,
            "json_logs": self.monitoring.json_logs,
        }
