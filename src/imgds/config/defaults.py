from __future__ import annotations


DEFAULT_CONFIG: dict = {
    "dataset": {
        "image_size": 224,
        "test_fraction": 0.05,
        "progress_interval": 1000,
    },
    "preview": {
        "enabled": True,
        "count": 3,
        "window_name": "imgds",
    },
    "monitoring": {
        "json_logs": False,
        "log_level": "INFO",
    },
}
