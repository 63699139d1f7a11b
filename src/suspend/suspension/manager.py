"""
SUSPEND - Suspension - Manager

Point d'entrée applicatif:

    manager.for_subject(user).suspend(reason="Spam")
    manager.match("email", "*@spam.example").suspend_for(timedelta(days=7))
    manager.check().email(address).ip(client_ip).first(request)

Les conducteurs (SubjectConductor, MatchConductor, CheckConductor)
portent les opérations; le manager détient les registres, le dépôt,
l'horloge et la diffusion des événements.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..core.interfaces import Clock, RequestContext, bind_request, utc_now
from ..logging.interfaces import IStructuredLogger
from ..logging.structured_logger import StructuredLogger
from ..matchers.interfaces import IMatcher, MatchType, coerce_to_text
from ..matchers.matcher_registry import InvalidMatcherValueError, MatcherRegistry
from ..resolvers.interfaces import IGeoResolver, IIpResolver
from ..strategies.interfaces import IStrategy
from ..strategies.strategy_registry import StrategyRegistry
from .interfaces import (
    ActorReference,
    ISuspensionEventSink,
    ISuspensionRepository,
    MatchCriterion,
    SubjectReference,
    Suspension,
    SuspensionCreated,
    SuspensionLifted,
    SuspensionNotFoundError,
    SuspensionRevoked,
)
from .status import SuspensionStatus


class SuspendManager:
    """
    Orchestration des suspensions.

    Args:
        repository: Stockage des suspensions
        matchers: Registre des matchers
        strategies: Registre des stratégies
        ip_resolver: Résolution de l'IP cliente
        geo_resolver: Géolocalisation
        event_sink: Destination des événements (optionnelle)
        logger: Logger structuré (défaut: "suspend.manager")
        clock: Horloge injectable (défaut: UTC courant)
    """

    def __init__(
        self,
        repository: ISuspensionRepository,
        matchers: MatcherRegistry,
        strategies: StrategyRegistry,
        ip_resolver: IIpResolver,
        geo_resolver: IGeoResolver,
        event_sink: Optional[ISuspensionEventSink] = None,
        logger: Optional[IStructuredLogger] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self._repository = repository
        self._matchers = matchers
        self._strategies = strategies
        self._ip_resolver = ip_resolver
        self._geo_resolver = geo_resolver
        self._events = event_sink
        self._logger = logger or StructuredLogger("suspend.manager")
        self._clock = clock or utc_now

    # ──────────────────────────────────────────────────────────────────────────
    # Accès
    # ──────────────────────────────────────────────────────────────────────────

    @property
    def repository(self) -> ISuspensionRepository:
        return self._repository

    @property
    def matchers(self) -> MatcherRegistry:
        return self._matchers

    @property
    def strategies(self) -> StrategyRegistry:
        return self._strategies

    @property
    def ip_resolver(self) -> IIpResolver:
        return self._ip_resolver

    @property
    def geo_resolver(self) -> IGeoResolver:
        return self._geo_resolver

    @property
    def logger(self) -> IStructuredLogger:
        return self._logger

    def now(self) -> datetime:
        return self._clock()

    def get_matcher(self, match_type: str) -> Optional[IMatcher]:
        return self._matchers.get(match_type)

    def get_strategy(self, identifier: str) -> Optional[IStrategy]:
        return self._strategies.get(identifier)

    # ──────────────────────────────────────────────────────────────────────────
    # Conducteurs
    # ──────────────────────────────────────────────────────────────────────────

    def for_subject(self, subject: SubjectReference) -> "SubjectConductor":
        return SubjectConductor(self, subject)

    def match(self, match_type: str, value: Any) -> "MatchConductor":
        """
        Conducteur pour un critère de correspondance.

        Raises:
            UnknownMatcherTypeError: Type non enregistré
        """
        return MatchConductor(self, match_type, value)

    def check(self) -> "CheckConductor":
        return CheckConductor(self)

    # ──────────────────────────────────────────────────────────────────────────
    # Évaluation
    # ──────────────────────────────────────────────────────────────────────────

    def applies(self, suspension: Suspension, request: RequestContext) -> bool:
        """
        Vérifie que la stratégie de la suspension s'applique à la requête.

        Sans stratégie, la suspension s'applique toujours. Une stratégie
        inconnue ne s'applique jamais.
        """
        if not suspension.strategy:
            return True

        strategy = self._strategies.get(suspension.strategy)
        if strategy is None:
            self._logger.warn(
                "Unknown strategy on suspension, skipped",
                suspension_id=suspension.id,
                strategy=suspension.strategy,
            )
            return False

        with bind_request(request):
            return strategy.matches(request, suspension.strategy_metadata)

    # ──────────────────────────────────────────────────────────────────────────
    # Cycle de vie
    # ──────────────────────────────────────────────────────────────────────────

    def create(
        self,
        subject: Optional[SubjectReference] = None,
        criterion: Optional[MatchCriterion] = None,
        reason: Optional[str] = None,
        starts_at: Optional[datetime] = None,
        expires_at: Optional[datetime] = None,
        suspended_by: Optional[ActorReference] = None,
        strategy: Optional[str] = None,
        strategy_metadata: Optional[Mapping[str, Any]] = None,
        match_metadata: Optional[Mapping[str, Any]] = None,
    ) -> Suspension:
        """
        Enregistre une suspension et émet SuspensionCreated.

        Raises:
            UnknownStrategyError: Stratégie non enregistrée
            MissingStrategyMetadataError: Métadonnée requise absente
        """
        if strategy:
            self._strategies.require(strategy, strategy_metadata)

        suspension = self._repository.add(
            Suspension(
                id="",
                suspended_at=self.now(),
                subject=subject,
                criterion=criterion,
                reason=reason,
                starts_at=starts_at,
                expires_at=expires_at,
                suspended_by=suspended_by,
                strategy=strategy,
                strategy_metadata=dict(strategy_metadata or {}),
                match_metadata=dict(match_metadata or {}),
            )
        )

        self._logger.info(
            "Suspension created",
            suspension_id=suspension.id,
            subject=str(subject) if subject else None,
            match_type=suspension.match_type,
            match_value=suspension.match_value,
            strategy=strategy,
        )
        self._dispatch(SuspensionCreated(suspension))

        return suspension

    def revoke(
        self,
        suspension: Suspension,
        revoked_by: Optional[ActorReference] = None,
        reason: Optional[str] = None,
    ) -> Suspension:
        """
        Révoque une suspension et émet SuspensionRevoked.

        Raises:
            SuspensionAlreadyRevokedError: Déjà révoquée
            SuspensionNotFoundError: Absente du dépôt (suspension inchangée)
        """
        if self._repository.get(suspension.id) is None:
            raise SuspensionNotFoundError(f"Suspension {suspension.id} not found")

        suspension.revoke(self.now(), revoked_by=revoked_by, reason=reason)
        self._repository.save(suspension)

        self._logger.info(
            "Suspension revoked",
            suspension_id=suspension.id,
            revoked_by=str(revoked_by) if revoked_by else None,
        )
        self._dispatch(SuspensionRevoked(suspension, reason))

        return suspension

    def lift(
        self,
        subject: Optional[SubjectReference] = None,
        match_type: Optional[str] = None,
        match_value: Optional[str] = None,
        reason: Optional[str] = None,
    ) -> int:
        """
        Révoque toutes les suspensions actives d'un sujet ou d'un critère.

        Returns:
            Nombre de suspensions révoquées

        Raises:
            ValueError: Ni sujet ni critère fourni
        """
        if subject is None and match_type is None and match_value is None:
            raise ValueError("lift() requires a subject or a match criterion")

        active = self._repository.find(
            subject=subject,
            match_type=match_type,
            match_value=match_value,
            status=SuspensionStatus.ACTIVE,
            now=self.now(),
        )

        for suspension in active:
            self.revoke(suspension, reason=reason)

        if active:
            self._dispatch(
                SuspensionLifted(
                    count=len(active),
                    subject=subject,
                    match_type=match_type,
                    match_value=match_value,
                )
            )

        return len(active)

    def suspend_many(
        self,
        subjects: Iterable[SubjectReference],
        reason: Optional[str] = None,
        expires_at: Optional[datetime] = None,
        metadata: Optional[Mapping[str, Any]] = None,
        suspended_by: Optional[ActorReference] = None,
    ) -> List[Suspension]:
        return [
            self.create(
                subject=subject,
                reason=reason,
                expires_at=expires_at,
                suspended_by=suspended_by,
                strategy_metadata=metadata,
            )
            for subject in subjects
        ]

    def revoke_many(self, subjects: Iterable[SubjectReference], reason: Optional[str] = None) -> int:
        return sum(self.lift(subject=subject, reason=reason) for subject in subjects)

    def _dispatch(self, event: Any) -> None:
        if self._events is not None:
            self._events.dispatch(event)


class _Conductor(ABC):
    """Opérations communes aux conducteurs de sujet et de critère."""

    def __init__(self, manager: SuspendManager) -> None:
        self._manager = manager
        self._strategy: Optional[str] = None
        self._strategy_metadata: Dict[str, Any] = {}

    def using(self, strategy: str, metadata: Optional[Mapping[str, Any]] = None):
        """
        Conditionne les prochaines suspensions à une stratégie.

        Raises:
            UnknownStrategyError: Stratégie non enregistrée
        """
        self._manager.strategies.require(strategy, metadata)
        self._strategy = strategy
        self._strategy_metadata = dict(metadata or {})
        return self

    def suspend(
        self,
        reason: Optional[str] = None,
        expires_at: Optional[datetime] = None,
        metadata: Optional[Mapping[str, Any]] = None,
        suspended_by: Optional[ActorReference] = None,
    ) -> Suspension:
        return self._create(reason, None, expires_at, metadata, suspended_by)

    def suspend_at(
        self,
        starts_at: datetime,
        reason: Optional[str] = None,
        expires_at: Optional[datetime] = None,
        metadata: Optional[Mapping[str, Any]] = None,
        suspended_by: Optional[ActorReference] = None,
    ) -> Suspension:
        return self._create(reason, starts_at, expires_at, metadata, suspended_by)

    def suspend_for(
        self,
        duration: timedelta,
        reason: Optional[str] = None,
        metadata: Optional[Mapping[str, Any]] = None,
        suspended_by: Optional[ActorReference] = None,
    ) -> Suspension:
        expires_at = self._manager.now() + duration
        return self._create(reason, None, expires_at, metadata, suspended_by)

    def is_not_suspended(self, request: Optional[RequestContext] = None) -> bool:
        return not self.is_suspended(request)

    def is_suspended(self, request: Optional[RequestContext] = None) -> bool:
        """
        Vérifie l'existence d'une suspension active.

        Avec une requête, seules comptent les suspensions dont la
        stratégie s'applique.
        """
        for suspension in self.active_suspensions():
            if request is None or self._manager.applies(suspension, request):
                return True
        return False

    def active_suspensions(self) -> List[Suspension]:
        return self._manager.repository.find(
            status=SuspensionStatus.ACTIVE, now=self._manager.now(), **self._scope()
        )

    def history(self) -> List[Suspension]:
        return self._manager.repository.find(**self._scope())

    def lift(self, reason: Optional[str] = None) -> int:
        return self._manager.lift(reason=reason, **self._scope())

    @abstractmethod
    def _scope(self) -> Dict[str, Any]:
        """Critères de recherche propres au conducteur."""
        pass

    @abstractmethod
    def _create(
        self,
        reason: Optional[str],
        starts_at: Optional[datetime],
        expires_at: Optional[datetime],
        metadata: Optional[Mapping[str, Any]],
        suspended_by: Optional[ActorReference],
    ) -> Suspension:
        pass


class SubjectConductor(_Conductor):
    """
    Suspensions d'un sujet identifié (utilisateur, équipe, ...).

    Les métadonnées passées à suspend() complètent celles de using().
    """

    def __init__(self, manager: SuspendManager, subject: SubjectReference) -> None:
        super().__init__(manager)
        self._subject = subject

    @property
    def subject(self) -> SubjectReference:
        return self._subject

    def _scope(self) -> Dict[str, Any]:
        return {"subject": self._subject}

    def _create(self, reason, starts_at, expires_at, metadata, suspended_by) -> Suspension:
        strategy_metadata = {**self._strategy_metadata, **dict(metadata or {})}
        return self._manager.create(
            subject=self._subject,
            reason=reason,
            starts_at=starts_at,
            expires_at=expires_at,
            suspended_by=suspended_by,
            strategy=self._strategy,
            strategy_metadata=strategy_metadata,
        )


class MatchConductor(_Conductor):
    """
    Suspensions d'un critère (email, IP, domaine, ...).

    La valeur est normalisée par le matcher du type; les métadonnées
    passées à suspend() sont conservées dans match_metadata.
    """

    def __init__(self, manager: SuspendManager, match_type: str, value: Any) -> None:
        super().__init__(manager)
        self._type = match_type
        self._raw_value = value
        self._matcher = manager.matchers.require(match_type)
        self._value = self._stored_form(self._matcher, value)

    @staticmethod
    def _stored_form(matcher: IMatcher, value: Any) -> str:
        normalized = matcher.normalize(value)
        # Un joker final retiré par la normalisation ("+1555*") est conservé
        if coerce_to_text(value).strip().endswith("*") and not normalized.endswith("*"):
            normalized += "*"
        return normalized

    @property
    def match_type(self) -> str:
        return self._type

    @property
    def value(self) -> str:
        return self._value

    def _scope(self) -> Dict[str, Any]:
        return {"match_type": self._type, "match_value": self._value}

    def _create(self, reason, starts_at, expires_at, metadata, suspended_by) -> Suspension:
        if not self._matcher.validate(self._raw_value):
            raise InvalidMatcherValueError(self._type, coerce_to_text(self._raw_value))

        return self._manager.create(
            criterion=MatchCriterion(self._type, self._value),
            reason=reason,
            starts_at=starts_at,
            expires_at=expires_at,
            suspended_by=suspended_by,
            strategy=self._strategy,
            strategy_metadata=self._strategy_metadata,
            match_metadata=metadata,
        )


class CheckConductor:
    """
    Vérification de valeurs de contexte contre les suspensions actives.

    Usage:
        suspension = manager.check().email(email).ip(ip).first(request)
    """

    def __init__(self, manager: SuspendManager) -> None:
        self._manager = manager
        self._checks: Dict[str, List[Any]] = {}
        self._cache: Optional[Dict[str, List[Suspension]]] = None

    def email(self, email: str) -> "CheckConductor":
        return self.type(MatchType.EMAIL.value, email)

    def phone(self, phone: str) -> "CheckConductor":
        return self.type(MatchType.PHONE.value, phone)

    def ip(self, ip: str) -> "CheckConductor":
        return self.type(MatchType.IP.value, ip)

    def domain(self, domain: str) -> "CheckConductor":
        return self.type(MatchType.DOMAIN.value, domain)

    def country(self, country: str) -> "CheckConductor":
        return self.type(MatchType.COUNTRY.value, country)

    def fingerprint(self, fingerprint: str) -> "CheckConductor":
        return self.type(MatchType.FINGERPRINT.value, fingerprint)

    def type(self, match_type: str, value: Any) -> "CheckConductor":
        self._checks.setdefault(match_type, []).append(value)
        self._cache = None
        return self

    @property
    def checks(self) -> Dict[str, List[Any]]:
        return {match_type: list(values) for match_type, values in self._checks.items()}

    def matches(self, request: Optional[RequestContext] = None) -> bool:
        return self.first(request) is not None

    def first(self, request: Optional[RequestContext] = None) -> Optional[Suspension]:
        """Première suspension active correspondant à une valeur vérifiée."""
        for suspension in self._iter_matches(request):
            return suspension
        return None

    def all(self, request: Optional[RequestContext] = None) -> List[Suspension]:
        """Toutes les suspensions correspondantes, sans doublon."""
        seen = set()
        results = []
        for suspension in self._iter_matches(request):
            if suspension.id not in seen:
                seen.add(suspension.id)
                results.append(suspension)
        return results

    def _iter_matches(self, request: Optional[RequestContext]):
        suspensions_by_type = self._load()

        for match_type, values in self._checks.items():
            matcher = self._manager.get_matcher(match_type)
            if matcher is None:
                self._manager.logger.warn("Unknown matcher type, check skipped", match_type=match_type)
                continue

            for value in values:
                candidate = matcher.normalize(value)
                for suspension in suspensions_by_type.get(match_type, []):
                    if not matcher.matches(suspension.match_value, candidate):
                        continue
                    if request is not None and not self._manager.applies(suspension, request):
                        continue
                    yield suspension

    def _load(self) -> Dict[str, List[Suspension]]:
        if self._cache is None:
            now = self._manager.now()
            self._cache = {
                match_type: self._manager.repository.find(
                    match_type=match_type,
                    status=SuspensionStatus.ACTIVE,
                    now=now,
                )
                for match_type in self._checks
            }
        return self._cache
