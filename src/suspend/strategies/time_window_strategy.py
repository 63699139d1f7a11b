"""
SUSPEND - Strategies - Time Window

Suspension active seulement sur une plage horaire et/ou certains jours.

Métadonnées:
    start: "H:MM" ou "HH:MM:SS" (aujourd'hui, dans le fuseau) ou date-heure ISO 8601
    end: idem
    days: jours de semaine autorisés, 0 = dimanche ... 6 = samedi
    timezone: fuseau IANA (défaut: fuseau de l'application)

Toutes les clauses présentes doivent être vérifiées; bornes incluses.
Une liste days vide n'autorise aucun jour.
"""

import re
from datetime import datetime
from typing import Any, Mapping, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.interfaces import Clock, RequestContext, ensure_aware, utc_now
from .interfaces import IStrategy, StrategyType


_TIME_OF_DAY_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")

_DAY_COLLECTIONS = (list, tuple, set, frozenset)


class InvalidTimeFormatError(ValueError):
    """Borne horaire illisible."""

    pass


def weekday_sunday_first(moment: datetime) -> int:
    """Jour de semaine avec 0 = dimanche ... 6 = samedi."""
    return moment.isoweekday() % 7


class TimeWindowStrategy(IStrategy):
    """
    Fenêtre temporelle évaluée dans un fuseau donné.

    Args:
        clock: Horloge injectable (défaut: UTC courant)
        default_timezone: Fuseau utilisé sans clé "timezone"
    """

    def __init__(self, clock: Optional[Clock] = None, default_timezone: str = "UTC"):
        self._clock = clock or utc_now
        self._default_timezone = default_timezone

    def identifier(self) -> str:
        return StrategyType.TIME_WINDOW.value

    def matches(self, request: RequestContext, metadata: Mapping[str, Any]) -> bool:
        timezone_name = metadata.get("timezone")
        if not isinstance(timezone_name, str) or not timezone_name:
            timezone_name = self._default_timezone

        try:
            tz = ZoneInfo(timezone_name)
        except (ZoneInfoNotFoundError, ValueError):
            return False

        now = ensure_aware(self._clock()).astimezone(tz)

        days = metadata.get("days")
        if isinstance(days, _DAY_COLLECTIONS) and weekday_sunday_first(now) not in days:
            return False

        try:
            start = metadata.get("start")
            if isinstance(start, str) and now < self._parse_time(start, now, tz):
                return False

            end = metadata.get("end")
            if isinstance(end, str) and now > self._parse_time(end, now, tz, is_end=True):
                return False
        except InvalidTimeFormatError:
            return False

        return True

    @staticmethod
    def _parse_time(value: str, now: datetime, tz: ZoneInfo, is_end: bool = False) -> datetime:
        """
        Convertit une borne en instant comparable à now.

        Une heure "H:MM" de fin couvre toute la minute; avec les secondes
        ("HH:MM:SS"), la borne est exacte.

        Raises:
            InvalidTimeFormatError: Borne illisible
        """
        value = value.strip()

        match = _TIME_OF_DAY_RE.match(value)
        if match:
            hour, minute, second = match.groups()
            whole_minute = second is None and is_end
            try:
                return now.replace(
                    hour=int(hour),
                    minute=int(minute),
                    second=59 if whole_minute else int(second or 0),
                    microsecond=999999 if whole_minute else 0,
                )
            except ValueError as e:
                raise InvalidTimeFormatError(f"Invalid time of day: {value!r}") from e

        # fromisoformat n'accepte "Z" qu'à partir de Python 3.11
        if value.endswith(("Z", "z")):
            value = value[:-1] + "+00:00"

        try:
            parsed = datetime.fromisoformat(value)
        except ValueError as e:
            raise InvalidTimeFormatError(f"Invalid date-time: {value!r}") from e

        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=tz)
        return parsed
