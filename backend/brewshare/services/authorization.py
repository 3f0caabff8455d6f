"""Ownership-or-admin authorization policy"""

from typing import Optional

from ..exceptions import Forbidden
from ..models import User


def is_owner_or_admin(actor: User, owner_id: Optional[int]) -> bool:
    """True if actor owns the resource or holds the admin flag"""
    if actor.is_admin:
        return True
    return owner_id is not None and actor.id == owner_id


def ensure_owner_or_admin(actor: User, owner_id: Optional[int], detail: Optional[str] = None) -> None:
    """
    Gate a mutation on ownership-or-admin

    Raises:
        Forbidden: If actor is neither the owner nor an admin
    """
    if not is_owner_or_admin(actor, owner_id):
        raise Forbidden(detail)
