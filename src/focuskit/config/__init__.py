from .settings import FocusSettings, load_settings  # noqa: F401

__all__ = ["FocusSettings", "load_settings"]
