# certportal/core/errors.py
"""
Erros de domínio. Cada um carrega o status HTTP e o código que o handler
registrado em ``certportal.main`` devolve ao cliente.
"""
from __future__ import annotations


class PortalError(Exception):
    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(self, message: str = "Erro interno do servidor"):
        super().__init__(message)
        self.message = message


class ValidationError(PortalError):
    status_code = 400
    code = "VALIDATION_ERROR"


class AuthenticationError(PortalError):
    status_code = 401
    code = "UNAUTHENTICATED"


class AuthorizationError(PortalError):
    status_code = 403
    code = "FORBIDDEN"


class NotFoundError(PortalError):
    status_code = 404
    code = "NOT_FOUND"


class ConflictError(PortalError):
    status_code = 409
    code = "CONFLICT"
