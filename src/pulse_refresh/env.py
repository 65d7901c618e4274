"""
Environment-variable configuration.

Values are read from (and written to) `os.environ` on every access, so
settings made by the CLI are visible to anything it spawns.
"""

from __future__ import annotations

import logging
import os

from pulse_refresh.errors import RefreshError

ENV_PULSE_REFRESH_LOG_LEVEL = "PULSE_REFRESH_LOG_LEVEL"
ENV_PULSE_REFRESH_DEBUG = "PULSE_REFRESH_DEBUG"

DEFAULT_LOG_LEVEL = "WARNING"

_TRUTHY = {"1", "true", "yes", "on"}


class RefreshEnv:
	def _get(self, key: str) -> str | None:
		return os.environ.get(key)

	def _set(self, key: str, value: str | None) -> None:
		if value is None:
			os.environ.pop(key, None)
		else:
			os.environ[key] = value

	@property
	def log_level(self) -> str:
		if self.debug:
			return "DEBUG"
		value = self._get(ENV_PULSE_REFRESH_LOG_LEVEL)
		if not value:
			return DEFAULT_LOG_LEVEL
		return value.strip().upper()

	@log_level.setter
	def log_level(self, value: str | None) -> None:
		self._set(ENV_PULSE_REFRESH_LOG_LEVEL, value.upper() if value else None)

	@property
	def debug(self) -> bool:
		value = self._get(ENV_PULSE_REFRESH_DEBUG)
		return value is not None and value.strip().lower() in _TRUTHY

	@debug.setter
	def debug(self, value: bool) -> None:
		self._set(ENV_PULSE_REFRESH_DEBUG, "1" if value else None)


env = RefreshEnv()


def configure_logging() -> None:
	"""Apply the configured level to the `pulse_refresh` loggers."""
	level = logging.getLevelName(env.log_level)
	if not isinstance(level, int):
		raise RefreshError(
			f"Invalid {ENV_PULSE_REFRESH_LOG_LEVEL}: {env.log_level!r}"
		)
	logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
	logging.getLogger("pulse_refresh").setLevel(level)
