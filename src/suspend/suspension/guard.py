"""
SUSPEND - Suspension - Guard

Contrôle d'accès indépendant du framework HTTP: à appeler en début de
traitement de requête (middleware, dépendance, décorateur).

Vérifications disponibles:
    - "ip": IP cliente contre les suspensions de type ip
    - "country": pays de l'IP cliente contre les suspensions de type country
    - "subject": suspensions du sujet authentifié

Les noms de vérification inconnus sont ignorés.
"""

from fnmatch import fnmatchcase
from typing import Iterable, List, Optional

from ..core.interfaces import GuardConfig, RequestContext, SuspendError, bind_request
from ..logging.interfaces import IStructuredLogger
from .interfaces import SubjectReference, Suspension
from .manager import SuspendManager


CHECK_IP = "ip"
CHECK_COUNTRY = "country"
CHECK_SUBJECT = "subject"


class SuspendedError(SuspendError):
    """
    Accès refusé: une suspension s'applique à la requête.

    Attributes:
        suspension: Suspension en cause
        status_code: Code HTTP à renvoyer
        message: Message destiné au client
    """

    def __init__(self, suspension: Suspension, status_code: int, message: str):
        self.suspension = suspension
        self.status_code = status_code
        self.message = message
        super().__init__(message)

    @classmethod
    def from_suspension(cls, suspension: Suspension, config: GuardConfig) -> "SuspendedError":
        message = config.response_message
        if suspension.reason is not None:
            message += " Reason: " + suspension.reason
        return cls(suspension, config.response_code, message)


class SuspensionGuard:
    """
    Garde de requêtes.

    Usage:
        guard = SuspensionGuard(manager, config.guard)
        try:
            guard.check(request, subject=SubjectReference.of("user", user.id))
        except SuspendedError as e:
            return Response(e.message, status=e.status_code)
    """

    def __init__(
        self,
        manager: SuspendManager,
        config: Optional[GuardConfig] = None,
        logger: Optional[IStructuredLogger] = None,
    ) -> None:
        self._manager = manager
        self._config = config or GuardConfig()
        self._logger = logger or manager.logger

    @property
    def config(self) -> GuardConfig:
        return self._config

    def default_checks(self) -> List[str]:
        checks = []
        if self._config.check_ip:
            checks.append(CHECK_IP)
        if self._config.check_country:
            checks.append(CHECK_COUNTRY)
        checks.append(CHECK_SUBJECT)
        return checks

    def is_excepted(self, path: str) -> bool:
        """Chemin exempté (égalité ou motif glob de except_paths)."""
        return any(
            path == pattern or fnmatchcase(path, pattern)
            for pattern in self._config.except_paths
        )

    def check(
        self,
        request: RequestContext,
        checks: Optional[Iterable[str]] = None,
        subject: Optional[SubjectReference] = None,
    ) -> None:
        """
        Lève si une suspension s'applique à la requête.

        Args:
            request: Contexte de requête
            checks: Vérifications à effectuer (défaut: selon la configuration)
            subject: Sujet authentifié (défaut: request.user s'il s'agit
                d'une SubjectReference)

        Raises:
            SuspendedError: Suspension applicable trouvée
        """
        suspension = self.is_blocked(request, checks, subject)
        if suspension is None:
            return

        self._logger.warn(
            "Request blocked by suspension",
            suspension_id=suspension.id,
            path=request.path,
            method=request.method,
        )
        raise SuspendedError.from_suspension(suspension, self._config)

    def is_blocked(
        self,
        request: RequestContext,
        checks: Optional[Iterable[str]] = None,
        subject: Optional[SubjectReference] = None,
    ) -> Optional[Suspension]:
        """
        Retourne la première suspension applicable, ou None.

        La requête est liée au contexte courant pendant l'évaluation
        (voir bind_request).
        """
        if self.is_excepted(request.path):
            return None

        with bind_request(request):
            return self._first_applicable(request, checks, subject)

    def _first_applicable(
        self,
        request: RequestContext,
        checks: Optional[Iterable[str]],
        subject: Optional[SubjectReference],
    ) -> Optional[Suspension]:
        wanted = list(checks) if checks is not None else self.default_checks()
        conductor = self._manager.check()

        if CHECK_IP in wanted or CHECK_COUNTRY in wanted:
            client_ip = self._manager.ip_resolver.resolve(request)
            if client_ip is not None:
                if CHECK_IP in wanted:
                    conductor.ip(client_ip)
                if CHECK_COUNTRY in wanted:
                    country = self._manager.geo_resolver.country(client_ip)
                    if country is not None:
                        conductor.country(country)

        suspension = conductor.first(request)
        if suspension is not None:
            return suspension

        if CHECK_SUBJECT in wanted:
            if subject is None and isinstance(request.user, SubjectReference):
                subject = request.user
            if subject is not None:
                for candidate in self._manager.for_subject(subject).active_suspensions():
                    if self._manager.applies(candidate, request):
                        return candidate

        return None
