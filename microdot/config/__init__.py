"""Configuration schema and loading."""

from microdot.config.loader import ConfigSource, load_config
from microdot.config.schema import MicrodotConfig

__all__ = ["ConfigSource", "MicrodotConfig", "load_config"]
