# app/user/roles.py
from enum import Enum


class Role(str, Enum):
    ALUMNO = "Alumno"
    MAESTRO = "Maestro"
    ADMINISTRATIVO = "Administrativo"
    SOPORTE = "Soporte"
    ADMINISTRADOR = "Administrador"


# legacy spellings found in existing rows
_ALIASES = {
    "estudiante": Role.ALUMNO,
    "alumno": Role.ALUMNO,
    "maestro": Role.MAESTRO,
    "profesor": Role.MAESTRO,
    "administrativo": Role.ADMINISTRATIVO,
    "soporte": Role.SOPORTE,
    "administrador": Role.ADMINISTRADOR,
    "admin": Role.ADMINISTRADOR,
}

# see only the tickets they reported
RESTRICTED_ROLES = frozenset({Role.ALUMNO, Role.MAESTRO})
# may reassign tickets and change their status
TICKET_EDITOR_ROLES = frozenset({Role.ADMINISTRATIVO, Role.MAESTRO, Role.SOPORTE})
# may be picked as assignee
STAFF_ROLES = frozenset({Role.ADMINISTRATIVO, Role.MAESTRO, Role.SOPORTE, Role.ADMINISTRADOR})


def normalize_role(value: str | None) -> Role | None:
    """Map a stored ``tipo_usuario`` to its canonical role, or None if unknown."""
    if not value:
        return None
    return _ALIASES.get(value.strip().lower())


def spellings(roles) -> list[str]:
    """Lower-cased spellings (canonical and legacy) that map to ``roles``."""
    return sorted(alias for alias, role in _ALIASES.items() if role in roles)
