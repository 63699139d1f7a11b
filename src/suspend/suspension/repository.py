"""
SUSPEND - Suspension - Repository

Stockage en mémoire des suspensions, pour les tests et les
applications mono-processus. Une base de données se branche en
implémentant ISuspensionRepository.
"""

import threading
import uuid
from datetime import datetime
from typing import Dict, List, Optional

from ..core.interfaces import ensure_aware, utc_now
from .interfaces import (
    ISuspensionRepository,
    SubjectReference,
    Suspension,
    SuspensionNotFoundError,
)
from .status import SuspensionStatus


class InMemorySuspensionRepository(ISuspensionRepository):
    """
    Dépôt en mémoire, thread-safe.

    Les identifiants vides sont remplacés par un uuid4 à l'ajout.
    """

    def __init__(self) -> None:
        self._suspensions: Dict[str, Suspension] = {}
        self._sequence: Dict[str, int] = {}
        self._next_sequence = 0
        self._lock = threading.Lock()

    def add(self, suspension: Suspension) -> Suspension:
        with self._lock:
            if not suspension.id:
                suspension.id = str(uuid.uuid4())
            if suspension.id in self._suspensions:
                raise ValueError(f"Suspension {suspension.id} already exists")

            self._suspensions[suspension.id] = suspension
            self._sequence[suspension.id] = self._next_sequence
            self._next_sequence += 1
        return suspension

    def save(self, suspension: Suspension) -> Suspension:
        with self._lock:
            if suspension.id not in self._suspensions:
                raise SuspensionNotFoundError(f"Suspension {suspension.id} not found")
            self._suspensions[suspension.id] = suspension
        return suspension

    def get(self, suspension_id: str) -> Optional[Suspension]:
        with self._lock:
            return self._suspensions.get(suspension_id)

    def find(
        self,
        subject: Optional[SubjectReference] = None,
        match_type: Optional[str] = None,
        match_value: Optional[str] = None,
        status: Optional[SuspensionStatus] = None,
        now: Optional[datetime] = None,
    ) -> List[Suspension]:
        moment = now or utc_now()
        results = []

        for suspension in self.all():
            if subject is not None and suspension.subject != subject:
                continue
            if match_type is not None and suspension.match_type != match_type:
                continue
            if match_value is not None and suspension.match_value != match_value:
                continue
            if status is not None and suspension.status(moment) is not status:
                continue
            results.append(suspension)

        return results

    def all(self) -> List[Suspension]:
        with self._lock:
            suspensions = list(self._suspensions.values())
            order = dict(self._sequence)

        return sorted(
            suspensions,
            key=lambda s: (ensure_aware(s.suspended_at), order[s.id]),
            reverse=True,
        )

    def count(self) -> int:
        with self._lock:
            return len(self._suspensions)
