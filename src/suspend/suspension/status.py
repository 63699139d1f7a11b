"""
SUSPEND - Suspension - Status

Statut d'une suspension dérivé à la lecture de trois horodatages
optionnels. Priorité fixe:

    1. revoked_at renseigné            -> REVOKED
    2. starts_at renseigné et > now    -> PENDING
    3. expires_at renseigné et <= now  -> EXPIRED
    4. sinon                           -> ACTIVE

Une suspension programmée dans le futur avec une expiration déjà
passée est donc PENDING et non EXPIRED.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from ..core.interfaces import ensure_aware


class SuspensionStatus(Enum):
    """États possibles d'une suspension."""

    ACTIVE = "active"
    PENDING = "pending"
    EXPIRED = "expired"
    REVOKED = "revoked"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def is_enforced(self) -> bool:
        return self is SuspensionStatus.ACTIVE


def derive_status(
    now: datetime,
    starts_at: Optional[datetime] = None,
    expires_at: Optional[datetime] = None,
    revoked_at: Optional[datetime] = None,
) -> SuspensionStatus:
    """
    Calcule le statut à l'instant now.

    Les datetimes naïfs sont interprétés comme UTC.

    Args:
        now: Instant d'évaluation
        starts_at: Début d'application programmé
        expires_at: Fin d'application
        revoked_at: Date de révocation

    Returns:
        Statut courant
    """
    if revoked_at is not None:
        return SuspensionStatus.REVOKED

    now = ensure_aware(now)

    if starts_at is not None and ensure_aware(starts_at) > now:
        return SuspensionStatus.PENDING

    if expires_at is not None and ensure_aware(expires_at) <= now:
        return SuspensionStatus.EXPIRED

    return SuspensionStatus.ACTIVE
