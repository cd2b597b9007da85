# certportal/core/logging.py
import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    # passlib reclama da versão do bcrypt a cada hash
    logging.getLogger("passlib").setLevel(logging.ERROR)
