"""
Logistica Server - Logging
"""
import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-25s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_configured = False


def configure_logging(level: str = "INFO"):
    """Configura o logger raiz uma única vez (chamado no startup)"""
    global _configured

    root = logging.getLogger()
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    if _configured:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    root.addHandler(handler)

    # SQLAlchemy loga muito em INFO; echo é controlado por DB_ECHO
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    _configured = True
