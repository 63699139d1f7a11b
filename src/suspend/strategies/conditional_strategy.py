"""
SUSPEND - Strategies - Conditional

Stratégie définie par un prédicat fourni par l'application.

Usage:
    staff_only = ConditionalStrategy(
        lambda request, metadata: request.path.startswith("/admin"),
        identifier="admin_area",
    )
"""

from typing import Any, Callable, Mapping

from ..core.interfaces import RequestContext
from .interfaces import IStrategy, StrategyType


Predicate = Callable[[RequestContext, Mapping[str, Any]], Any]


class ConditionalStrategy(IStrategy):
    """
    Délègue à un prédicat (request, metadata) -> valeur quelconque.

    La valeur retournée est convertie en booléen; un prédicat qui lève
    vaut False.

    Args:
        predicate: Fonction évaluée à chaque requête
        identifier: Nom d'enregistrement (défaut: "conditional")
    """

    def __init__(self, predicate: Predicate, identifier: str = StrategyType.CONDITIONAL.value):
        self._predicate = predicate
        self._identifier = identifier

    def identifier(self) -> str:
        return self._identifier

    def matches(self, request: RequestContext, metadata: Mapping[str, Any]) -> bool:
        try:
            return bool(self._predicate(request, metadata))
        except Exception:
            return False
