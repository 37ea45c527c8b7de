from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    # Guardamos UTC "naive" en la base de datos
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    # Si viene con zona horaria (p.ej. ISO con Z), convertir a UTC y quitar tz
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value
