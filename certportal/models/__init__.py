# Carrega módulos para registrar tabelas no metadata:
from certportal.models.user import User                # noqa: F401
from certportal.models.certificate import Certificate  # noqa: F401

__all__ = ["User", "Certificate"]
