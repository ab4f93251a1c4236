"""HTTP interface for the vehicle expense tracker."""

from .app import create_app

__all__ = ["create_app"]
