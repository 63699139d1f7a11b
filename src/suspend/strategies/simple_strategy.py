"""
SUSPEND - Strategies - Simple

Stratégie inconditionnelle.
"""

from typing import Any, Mapping

from ..core.interfaces import RequestContext
from .interfaces import IStrategy, StrategyType


class SimpleStrategy(IStrategy):
    """S'applique toujours."""

    def identifier(self) -> str:
        return StrategyType.SIMPLE.value

    def matches(self, request: RequestContext, metadata: Mapping[str, Any]) -> bool:
        return True
