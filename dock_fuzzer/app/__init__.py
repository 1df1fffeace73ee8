"""Application-level utilities (environment, settings, runtime overrides)."""

from .configuration import RuntimeConfig, load_runtime_config
from .environment import Paths, build_default_paths, default_data_root
from .settings import FuzzerSettings
