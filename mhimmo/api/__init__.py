"""HTTP backend mirroring the data store operations."""

from mhimmo.api.app import create_app, create_app_from_env

__all__ = ["create_app", "create_app_from_env"]
