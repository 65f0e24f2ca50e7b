"""Observability bootstrap: JSON logs plus request metrics."""

from __future__ import annotations

from fastapi import FastAPI

from publicgoods.obs import logging as obs_logging
from publicgoods.obs import middleware
from publicgoods.settings import settings


def init(app: FastAPI) -> None:
	"""Install logging and the metrics middleware once per app; no-op when disabled."""
	if not settings.obs_enabled or getattr(app.state, "obs_installed", False):
		return
	obs_logging.configure_logging()
	middleware.install(app)
	app.state.obs_installed = True


__all__ = ["init"]
