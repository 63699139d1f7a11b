"""
SUSPEND - Suspension

Cycle de vie des suspensions: statut dérivé, stockage, événements,
manager et garde de requêtes.
"""

from .status import SuspensionStatus, derive_status
from .interfaces import (
    # Références
    SubjectReference,
    ActorReference,
    MatchCriterion,
    # Enregistrement
    Suspension,
    # Événements
    SuspensionCreated,
    SuspensionRevoked,
    SuspensionLifted,
    # Interfaces
    ISuspensionRepository,
    ISuspensionEventSink,
    # Erreurs
    SuspensionError,
    SuspensionNotFoundError,
    SuspensionAlreadyRevokedError,
)
from .repository import InMemorySuspensionRepository
from .event_dispatcher import SuspensionEventDispatcher
from .manager import SuspendManager, SubjectConductor, MatchConductor, CheckConductor
from .guard import SuspensionGuard, SuspendedError

__all__ = [
    # Status
    "SuspensionStatus",
    "derive_status",
    # Data classes
    "SubjectReference",
    "ActorReference",
    "MatchCriterion",
    "Suspension",
    "SuspensionCreated",
    "SuspensionRevoked",
    "SuspensionLifted",
    # Interfaces
    "ISuspensionRepository",
    "ISuspensionEventSink",
    # Implementations
    "InMemorySuspensionRepository",
    "SuspensionEventDispatcher",
    "SuspendManager",
    "SubjectConductor",
    "MatchConductor",
    "CheckConductor",
    "SuspensionGuard",
    # Exceptions
    "SuspensionError",
    "SuspensionNotFoundError",
    "SuspensionAlreadyRevokedError",
    "SuspendedError",
]
