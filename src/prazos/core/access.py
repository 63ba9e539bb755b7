"""Role-based checks and display lookups for the deadline list"""

from collections.abc import Iterable

from .models.deadline import Deadline
from .models.enums import UserProfile
from .models.user import User

UNASSIGNED_LABEL = "Não atribuído"
UNKNOWN_USER_LABEL = "Usuário não encontrado"


def can_modify(deadline: Deadline, user: User | None) -> bool:
    """Admins may edit or delete anything; others only what is assigned to them"""
    if user is None:
        return False
    if user.profile == UserProfile.ADMIN:
        return True
    return deadline.responsible_user_id == user.id


def responsible_name(deadline: Deadline, users: Iterable[User]) -> str:
    """Display name of the responsible user"""
    if not deadline.responsible_user_id:
        return UNASSIGNED_LABEL
    for user in users:
        if user.id == deadline.responsible_user_id:
            return user.name
    if deadline.responsible is not None:
        return deadline.responsible.name
    return UNKNOWN_USER_LABEL
