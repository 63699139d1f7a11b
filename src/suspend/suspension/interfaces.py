"""
SUSPEND - Suspension - Interfaces

Modèle de données des suspensions, événements émis et contrats des
collaborateurs de persistance et de notification.

Une suspension vise un sujet (ex: un utilisateur), un critère de
correspondance (ex: email "*@spam.example"), les deux, ou aucun (règle
globale évaluée seulement via sa stratégie). Elle n'est jamais
supprimée: la révocation marque la fin de son application et
l'enregistrement reste pour l'historique.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..core.interfaces import SuspendError
from .status import SuspensionStatus, derive_status


# ══════════════════════════════════════════════════════════════════════════════
# ERREURS
# ══════════════════════════════════════════════════════════════════════════════


class SuspensionError(SuspendError):
    """Erreur de cycle de vie d'une suspension."""

    pass


class SuspensionNotFoundError(SuspensionError):
    """Identifiant de suspension inconnu."""

    pass


class SuspensionAlreadyRevokedError(SuspensionError):
    """Révocation d'une suspension déjà révoquée."""

    pass


# ══════════════════════════════════════════════════════════════════════════════
# RÉFÉRENCES
# ══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class SubjectReference:
    """
    Référence typée vers l'entité suspendue, sans contrainte de stockage.

    Attributes:
        entity_type: Type d'entité ("user", "team", ...)
        entity_id: Clé de l'entité, toujours en chaîne
    """

    entity_type: str
    entity_id: str

    @classmethod
    def of(cls, entity_type: str, entity_id: Any) -> "SubjectReference":
        return cls(entity_type=entity_type, entity_id=str(entity_id))

    def __str__(self) -> str:
        return f"{self.entity_type}:{self.entity_id}"


@dataclass(frozen=True)
class ActorReference:
    """Auteur d'une suspension ou d'une révocation."""

    entity_type: str
    entity_id: str

    @classmethod
    def of(cls, entity_type: str, entity_id: Any) -> "ActorReference":
        return cls(entity_type=entity_type, entity_id=str(entity_id))

    def __str__(self) -> str:
        return f"{self.entity_type}:{self.entity_id}"


@dataclass(frozen=True)
class MatchCriterion:
    """
    Couple (type, valeur) interprété par le matcher du type.

    La valeur est stockée normalisée par ce matcher.
    """

    match_type: str
    match_value: str


# ══════════════════════════════════════════════════════════════════════════════
# SUSPENSION
# ══════════════════════════════════════════════════════════════════════════════


@dataclass
class Suspension:
    """
    Enregistrement de suspension.

    Seuls les champs de révocation et reason évoluent après création;
    le statut n'est pas stocké mais dérivé à chaque lecture.
    """

    id: str
    suspended_at: datetime
    subject: Optional[SubjectReference] = None
    criterion: Optional[MatchCriterion] = None
    reason: Optional[str] = None
    starts_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    revoked_at: Optional[datetime] = None
    suspended_by: Optional[ActorReference] = None
    revoked_by: Optional[ActorReference] = None
    strategy: Optional[str] = None
    strategy_metadata: Dict[str, Any] = field(default_factory=dict)
    match_metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def match_type(self) -> Optional[str]:
        return self.criterion.match_type if self.criterion else None

    @property
    def match_value(self) -> Optional[str]:
        return self.criterion.match_value if self.criterion else None

    def status(self, now: datetime) -> SuspensionStatus:
        return derive_status(now, self.starts_at, self.expires_at, self.revoked_at)

    def is_active(self, now: datetime) -> bool:
        return self.status(now) is SuspensionStatus.ACTIVE

    def is_pending(self, now: datetime) -> bool:
        return self.status(now) is SuspensionStatus.PENDING

    def is_expired(self, now: datetime) -> bool:
        return self.status(now) is SuspensionStatus.EXPIRED

    def is_revoked(self) -> bool:
        return self.revoked_at is not None

    def is_subject_based(self) -> bool:
        return self.subject is not None

    def is_criterion_based(self) -> bool:
        return self.criterion is not None

    def revoke(
        self,
        at: datetime,
        revoked_by: Optional[ActorReference] = None,
        reason: Optional[str] = None,
    ) -> None:
        """
        Marque la suspension comme révoquée.

        Args:
            at: Instant de révocation
            revoked_by: Auteur de la révocation
            reason: Nouveau motif (conserve l'ancien si None)

        Raises:
            SuspensionAlreadyRevokedError: Déjà révoquée
        """
        if self.revoked_at is not None:
            raise SuspensionAlreadyRevokedError(f"Suspension {self.id} is already revoked")

        self.revoked_at = at
        if revoked_by is not None:
            self.revoked_by = revoked_by
        if reason is not None:
            self.reason = reason

    def to_dict(self) -> Dict[str, Any]:
        """Représentation sérialisable (dates ISO 8601)."""

        def iso(moment: Optional[datetime]) -> Optional[str]:
            return moment.isoformat() if moment else None

        return {
            "id": self.id,
            "subject_type": self.subject.entity_type if self.subject else None,
            "subject_id": self.subject.entity_id if self.subject else None,
            "match_type": self.match_type,
            "match_value": self.match_value,
            "reason": self.reason,
            "suspended_at": iso(self.suspended_at),
            "starts_at": iso(self.starts_at),
            "expires_at": iso(self.expires_at),
            "revoked_at": iso(self.revoked_at),
            "suspended_by": str(self.suspended_by) if self.suspended_by else None,
            "revoked_by": str(self.revoked_by) if self.revoked_by else None,
            "strategy": self.strategy,
            "strategy_metadata": dict(self.strategy_metadata),
            "match_metadata": dict(self.match_metadata),
        }


# ══════════════════════════════════════════════════════════════════════════════
# ÉVÉNEMENTS
# ══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class SuspensionCreated:
    """Nouvelle suspension enregistrée."""

    suspension: Suspension


@dataclass(frozen=True)
class SuspensionRevoked:
    """Suspension révoquée individuellement."""

    suspension: Suspension
    reason: Optional[str] = None


@dataclass(frozen=True)
class SuspensionLifted:
    """
    Levée groupée des suspensions actives d'un sujet ou d'un critère.

    Émis une seule fois par levée, seulement si count > 0.
    """

    count: int
    subject: Optional[SubjectReference] = None
    match_type: Optional[str] = None
    match_value: Optional[str] = None


# ══════════════════════════════════════════════════════════════════════════════
# INTERFACES
# ══════════════════════════════════════════════════════════════════════════════


class ISuspensionRepository(ABC):
    """
    Stockage des suspensions.

    Aucune suppression: une suspension révoquée reste consultable.
    """

    @abstractmethod
    def add(self, suspension: Suspension) -> Suspension:
        """
        Enregistre une nouvelle suspension.

        Returns:
            La suspension, avec son identifiant attribué si vide
        """
        pass

    @abstractmethod
    def save(self, suspension: Suspension) -> Suspension:
        """
        Persiste les modifications d'une suspension existante.

        Raises:
            SuspensionNotFoundError: Identifiant inconnu
        """
        pass

    @abstractmethod
    def get(self, suspension_id: str) -> Optional[Suspension]:
        pass

    @abstractmethod
    def find(
        self,
        subject: Optional[SubjectReference] = None,
        match_type: Optional[str] = None,
        match_value: Optional[str] = None,
        status: Optional[SuspensionStatus] = None,
        now: Optional[datetime] = None,
    ) -> List[Suspension]:
        """
        Recherche par critères combinés (ET), plus récentes d'abord.

        Args:
            subject: Sujet suspendu
            match_type: Type de critère
            match_value: Valeur normalisée du critère
            status: Statut à l'instant now
            now: Instant d'évaluation du statut (requis avec status)

        Returns:
            Suspensions triées par suspended_at décroissant
        """
        pass

    @abstractmethod
    def all(self) -> List[Suspension]:
        pass


class ISuspensionEventSink(ABC):
    """Destination des événements de cycle de vie."""

    @abstractmethod
    def dispatch(self, event: Any) -> None:
        """
        Publie un événement (SuspensionCreated, SuspensionRevoked,
        SuspensionLifted).
        """
        pass
