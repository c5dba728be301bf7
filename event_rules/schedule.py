"""Schedule expressions for EventBridge rules."""

from aws_cdk import Duration

CRON_MINUTE_UNDEFINED_WARNING = (
    "When 'minute' is undefined in CronOptions, '*' is used as the default value, "
    "scheduling the event for every minute within the supplied parameters."
)

_TOKEN_RATE_UNITS = ("minute", "minutes", "hour", "hours", "day", "days")


class Schedule:
    """
    Schedule for scheduled event rules.

    Use one of the ``expression``, ``rate`` or ``cron`` factories rather
    than constructing this class directly.
    """

    def __init__(self, expression_string: str, minute_undefined_warning: str | None = None) -> None:
        self.expression_string = expression_string
        self.minute_undefined_warning = minute_undefined_warning

    @classmethod
    def expression(cls, expression: str) -> "Schedule":
        """Construct a schedule from a literal expression, e.g. ``rate(5 minutes)``."""
        return cls(expression)

    @classmethod
    def rate(cls, duration: Duration) -> "Schedule":
        """
        Construct a schedule that runs at a regular interval.

        The largest whole unit is used: days, then hours, then minutes.

        Raises:
            ValueError: If the duration is zero, or is a token in a unit
                other than minutes, hours or days.
        """
        if duration.is_unresolved():
            if duration.unit_label() not in _TOKEN_RATE_UNITS:
                raise ValueError(
                    "Allowed units for scheduling are: 'minute', 'minutes', "
                    "'hour', 'hours', 'day', 'days'"
                )
            return cls(f"rate({duration.format_token_to_number()})")

        if duration.to_seconds() == 0:
            raise ValueError("Duration cannot be 0")

        rate = _maybe_rate(duration.to_days(integral=False), "day")
        if rate is None:
            rate = _maybe_rate(duration.to_hours(integral=False), "hour")
        if rate is None:
            rate = _make_rate(int(duration.to_minutes(integral=True)), "minute")
        return cls(rate)

    @classmethod
    def cron(
        cls,
        *,
        minute: str | None = None,
        hour: str | None = None,
        day: str | None = None,
        month: str | None = None,
        week_day: str | None = None,
        year: str | None = None,
    ) -> "Schedule":
        """
        Construct a schedule from cron fields.

        Unspecified fields default to ``*``. ``day`` and ``week_day`` are
        mutually exclusive; whichever one is left out becomes ``?``.

        Raises:
            ValueError: If both ``day`` and ``week_day`` are supplied.
        """
        if week_day is not None and day is not None:
            raise ValueError("Cannot supply both 'day' and 'weekDay', use at most one")

        minute_field = minute if minute is not None else "*"
        hour_field = hour if hour is not None else "*"
        month_field = month if month is not None else "*"
        year_field = year if year is not None else "*"
        if day is not None:
            day_field = day
        else:
            day_field = "?" if week_day is not None else "*"
        week_day_field = week_day if week_day is not None else "?"

        return cls(
            f"cron({minute_field} {hour_field} {day_field} {month_field} "
            f"{week_day_field} {year_field})",
            CRON_MINUTE_UNDEFINED_WARNING if minute is None else None,
        )


def _maybe_rate(interval: float, singular: str) -> str | None:
    if interval == 0 or not float(interval).is_integer():
        return None
    return _make_rate(int(interval), singular)


def _make_rate(interval: int, singular: str) -> str:
    return f"rate(1 {singular})" if interval == 1 else f"rate({interval} {singular}s)"
