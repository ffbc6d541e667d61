from imgds.config.loader import build_config_to_dict, load_build_config
from imgds.config.models import BuildConfig, DatasetConfig, MonitoringConfig, PreviewConfig

__all__ = [
    "BuildConfig",
    "DatasetConfig",
    "MonitoringConfig",
    "PreviewConfig",
    "build_config_to_dict",
    "load_build_config",
]
