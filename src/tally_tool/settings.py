"""Configuración desde variables de entorno (zona horaria, objetivo, racha)."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

from tally_tool.periods import CalendarConfig

logger = logging.getLogger(__name__)

MAX_DAILY_GOAL = 100

_ENV_PREFIX = "TALLY_"


@dataclass(frozen=True)
class Settings:
    """Configuracion de la app.

    ``daily_goal`` 0 means no goal configured.
    """

    timezone: str = ""
    week_start: str = "monday"
    daily_goal: int = 10
    best_streak: int = 0

    def calendar(self) -> CalendarConfig:
        """Build the calendar configuration.

        Raises:
            ValueError: If timezone or week start are invalid.
        """
        return CalendarConfig.from_names(self.timezone, self.week_start)


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Devuelve configuracion del entorno mezclada con defaults."""
    env = os.environ if environ is None else environ
    defaults = Settings()
    goal = _parse_int(env, "DAILY_GOAL", defaults.daily_goal)
    best = _parse_int(env, "BEST_STREAK", defaults.best_streak)
    return Settings(
        timezone=env.get(_ENV_PREFIX + "TIMEZONE", defaults.timezone).strip(),
        week_start=env.get(_ENV_PREFIX + "WEEK_START", defaults.week_start).strip()
        or defaults.week_start,
        daily_goal=min(max(goal, 0), MAX_DAILY_GOAL),
        best_streak=max(best, 0),
    )


def _parse_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(_ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        logger.warning("Invalid %s%s=%r, using %d", _ENV_PREFIX, name, raw, default)
        return default
