"""
Configuración de logging del servicio.

Cada módulo usa ``logging.getLogger(__name__)``; todo cuelga del logger
``backoffice``, que recibe aquí un único handler.
"""

import json
import logging
from datetime import datetime, timezone

# Atributos que trae cualquier LogRecord; el resto llegó por ``extra=``
_RESERVED_ATTRS = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """Un objeto JSON por línea."""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "module": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                log_entry[key] = value

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json", logger_name: str = "backoffice") -> logging.Logger:
    """
    Configura el logger del paquete.

    Args:
        level: nivel (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        fmt: "json" para salida estructurada, cualquier otro valor para texto plano
        logger_name: logger raíz del paquete
    """
    logger = logging.getLogger(logger_name)

    # Evita handlers duplicados si el lifespan corre más de una vez (tests, --reload)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))

    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.propagate = False

    return logger
