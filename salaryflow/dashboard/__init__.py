"""Dash application: layout, callbacks and the app factory."""

from salaryflow.dashboard.app import create_app

__all__ = ["create_app"]
