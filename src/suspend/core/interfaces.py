"""
SUSPEND - Core Interfaces

Types partagés par tous les modules: erreur racine, contexte de requête
et modèles de configuration.
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ══════════════════════════════════════════════════════════════════════════════
# ERREURS
# ══════════════════════════════════════════════════════════════════════════════


class SuspendError(Exception):
    """Erreur racine de la bibliothèque."""

    pass


class RegistryFrozenError(SuspendError):
    """Enregistrement refusé: le registre est figé."""

    pass


# ══════════════════════════════════════════════════════════════════════════════
# HORLOGE
# ══════════════════════════════════════════════════════════════════════════════


Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Horloge par défaut: instant courant en UTC."""
    return datetime.now(timezone.utc)


def ensure_aware(moment: datetime) -> datetime:
    """Un datetime naïf est interprété comme UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


# ══════════════════════════════════════════════════════════════════════════════
# CONTEXTE DE REQUÊTE
# ══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class RequestContext:
    """
    Vue abstraite d'une requête entrante.

    Les stratégies et résolveurs ne lisent que ces champs; l'application
    construit le contexte depuis son framework HTTP.

    Attributes:
        method: Méthode HTTP (GET, POST, ...)
        path: Chemin de la requête, sans query string
        headers: En-têtes HTTP (recherche insensible à la casse via header())
        remote_addr: Adresse de la connexion directe
        user: Référence optionnelle vers l'utilisateur authentifié
    """

    method: str = "GET"
    path: str = "/"
    headers: Mapping[str, str] = field(default_factory=dict)
    remote_addr: Optional[str] = None
    user: Optional[Any] = None

    def header(self, name: str) -> Optional[str]:
        """
        Retourne un en-tête, recherche insensible à la casse.

        Args:
            name: Nom de l'en-tête

        Returns:
            Valeur de l'en-tête ou None si absent
        """
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return None


RequestProvider = Callable[[], Optional[RequestContext]]

_current_request: ContextVar[Optional[RequestContext]] = ContextVar(
    "suspend_current_request", default=None
)


def current_request() -> Optional[RequestContext]:
    """Requête liée au contexte d'exécution courant (thread ou tâche)."""
    return _current_request.get()


@contextmanager
def bind_request(request: RequestContext) -> Iterator[RequestContext]:
    """
    Lie une requête au contexte courant le temps d'un bloc.

    Le garde et SuspendManager.applies() lient la requête évaluée; un
    middleware applicatif peut aussi la lier pour toute la requête.

    Usage:
        with bind_request(request):
            geo_resolver.country(client_ip)
    """
    token = _current_request.set(request)
    try:
        yield request
    finally:
        _current_request.reset(token)


# ══════════════════════════════════════════════════════════════════════════════
# CONFIGURATION
# ══════════════════════════════════════════════════════════════════════════════


IP_RESOLVERS = ("standard", "cloudflare", "fastly", "akamai", "aws", "trusted_proxy")


class GuardConfig(BaseModel):
    """Configuration du garde de requêtes."""

    model_config = ConfigDict(extra="forbid")

    check_ip: bool = True
    check_country: bool = False
    response_code: int = Field(default=403, ge=400, le=599)
    response_message: str = "Access denied. Your access has been suspended."
    except_paths: List[str] = []


class LoggingConfig(BaseModel):
    """Configuration du logger structuré."""

    model_config = ConfigDict(extra="forbid")

    min_level: str = "INFO"
    mask_sensitive: bool = True

    @field_validator("min_level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        upper = value.upper()
        if upper not in ("DEBUG", "INFO", "WARN", "ERROR", "CRITICAL"):
            raise ValueError(f"niveau de log invalide: {value}")
        return upper


class SuspendConfig(BaseModel):
    """
    Configuration complète de la bibliothèque.

    Attributes:
        timezone: Fuseau par défaut des fenêtres horaires
        regex_timeout: Durée max (secondes) d'une évaluation regex
        ip_resolver: Résolveur IP à construire (voir IP_RESOLVERS)
        trusted_proxies: Proxies de confiance (IP ou CIDR) pour trusted_proxy
        device_header: En-tête portant l'empreinte d'appareil
        guard: Configuration du garde de requêtes
        logging: Configuration du logger
    """

    model_config = ConfigDict(extra="forbid")

    timezone: str = "UTC"
    regex_timeout: float = Field(default=0.25, gt=0, le=10)
    ip_resolver: str = "standard"
    trusted_proxies: List[str] = []
    device_header: str = "X-Device-Fingerprint"
    guard: GuardConfig = GuardConfig()
    logging: LoggingConfig = LoggingConfig()

    @field_validator("timezone")
    @classmethod
    def _check_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"fuseau horaire inconnu: {value}")
        return value

    @field_validator("ip_resolver")
    @classmethod
    def _check_ip_resolver(cls, value: str) -> str:
        if value not in IP_RESOLVERS:
            raise ValueError(f"résolveur IP inconnu: {value}")
        return value


# ══════════════════════════════════════════════════════════════════════════════
# INTERFACES
# ══════════════════════════════════════════════════════════════════════════════


class IConfigLoader(ABC):
    """Charge et valide la configuration."""

    @abstractmethod
    def load(self, path: Optional[str] = None) -> SuspendConfig:
        """
        Charge la configuration depuis un fichier YAML.

        Raises:
            ConfigIntegrityError: Si fichier absent ou contenu invalide
        """
        pass

    @abstractmethod
    def from_dict(self, data: Dict[str, Any]) -> SuspendConfig:
        """Construit la configuration depuis un dictionnaire."""
        pass
