"""Application layer: bootstrap and the context object collaborators use."""

from .bootstrap import create_app, AppContext, LIVE_REGION_ID  # noqa: F401

__all__ = ["create_app", "AppContext", "LIVE_REGION_ID"]
