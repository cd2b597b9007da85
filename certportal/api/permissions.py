# certportal/api/permissions.py
from enum import Enum
from typing import Callable, Iterable

from fastapi import Depends

from certportal.api.deps import get_current_identity
from certportal.core.errors import AuthorizationError
from certportal.core.tokens import AuthContext


class Role(str, Enum):
    ADMIN = "ADMIN"


ACCESS_DENIED = "Acesso negado"


def require_roles(allowed: Iterable[Role]) -> Callable[[AuthContext], AuthContext]:
    """
    Use: Depends(require_roles([Role.ADMIN]))
    Roda depois da autenticação; papel fora da lista -> 403 (não 401).
    """
    allowed_set = {r.value for r in allowed}

    def _checker(identity: AuthContext = Depends(get_current_identity)) -> AuthContext:
        if identity.role not in allowed_set:
            raise AuthorizationError(ACCESS_DENIED)
        return identity

    return _checker


require_admin = require_roles([Role.ADMIN])
