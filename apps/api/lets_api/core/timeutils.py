from datetime import datetime, timedelta, timezone


def now_ms() -> int:
    return int(datetime.now(timezone.utc).timestamp() * 1000)


def days_ago_ms(days: int, *, now: int | None = None) -> int:
    reference = now if now is not None else now_ms()
    return reference - int(timedelta(days=days).total_seconds() * 1000)
