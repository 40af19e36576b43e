"""HTTP API."""

from .app import check_cron_secret, create_app

__all__ = ["check_cron_secret", "create_app"]
