"""
Tests unitaires pour InMemorySuspensionRepository et le modèle
Suspension.
"""

from datetime import timedelta

import pytest

from helpers import REFERENCE_NOW
from suspend.suspension import (
    ActorReference,
    InMemorySuspensionRepository,
    ISuspensionRepository,
    MatchCriterion,
    SubjectReference,
    Suspension,
    SuspensionAlreadyRevokedError,
    SuspensionNotFoundError,
    SuspensionStatus,
)


USER = SubjectReference.of("user", 42)
OTHER = SubjectReference.of("user", 7)


def make_suspension(**kwargs) -> Suspension:
    kwargs.setdefault("id", "")
    kwargs.setdefault("suspended_at", REFERENCE_NOW)
    return Suspension(**kwargs)


# ══════════════════════════════════════════════════════════════════════════════
# MODÈLE
# ══════════════════════════════════════════════════════════════════════════════


class TestReferences:
    def test_subject_of_stringifies_id(self) -> None:
        assert USER.entity_id == "42"
        assert str(USER) == "user:42"
        assert USER == SubjectReference("user", "42")

    def test_actor(self) -> None:
        assert str(ActorReference.of("admin", 1)) == "admin:1"


class TestSuspensionModel:
    def test_kinds(self) -> None:
        by_subject = make_suspension(subject=USER)
        by_criterion = make_suspension(criterion=MatchCriterion("ip", "10.0.0.0/8"))

        assert by_subject.is_subject_based() and not by_subject.is_criterion_based()
        assert by_criterion.is_criterion_based() and not by_criterion.is_subject_based()
        assert by_criterion.match_type == "ip"
        assert by_criterion.match_value == "10.0.0.0/8"
        assert by_subject.match_type is None

    def test_status_helpers(self) -> None:
        suspension = make_suspension(expires_at=REFERENCE_NOW + timedelta(days=1))

        assert suspension.is_active(REFERENCE_NOW)
        assert suspension.is_expired(REFERENCE_NOW + timedelta(days=2))
        assert not suspension.is_pending(REFERENCE_NOW)
        assert not suspension.is_revoked()

    def test_revoke(self) -> None:
        admin = ActorReference.of("admin", 1)
        suspension = make_suspension(subject=USER, reason="Spam")

        suspension.revoke(REFERENCE_NOW, revoked_by=admin)

        assert suspension.is_revoked()
        assert suspension.revoked_by == admin
        assert suspension.reason == "Spam"
        assert suspension.status(REFERENCE_NOW) is SuspensionStatus.REVOKED

    def test_revoke_replaces_reason(self) -> None:
        suspension = make_suspension(reason="Spam")

        suspension.revoke(REFERENCE_NOW, reason="Appeal accepted")

        assert suspension.reason == "Appeal accepted"

    def test_revoke_twice(self) -> None:
        suspension = make_suspension(id="s-1")
        suspension.revoke(REFERENCE_NOW)

        with pytest.raises(SuspensionAlreadyRevokedError):
            suspension.revoke(REFERENCE_NOW)

    def test_to_dict(self) -> None:
        suspension = make_suspension(
            id="s-1",
            subject=USER,
            reason="Spam",
            suspended_by=ActorReference.of("admin", 1),
            strategy="ip_address",
            strategy_metadata={"ip": "10.0.0.0/8"},
        )

        data = suspension.to_dict()

        assert data["id"] == "s-1"
        assert data["subject_type"] == "user"
        assert data["subject_id"] == "42"
        assert data["match_type"] is None
        assert data["suspended_at"] == REFERENCE_NOW.isoformat()
        assert data["expires_at"] is None
        assert data["suspended_by"] == "admin:1"
        assert data["strategy_metadata"] == {"ip": "10.0.0.0/8"}


# ══════════════════════════════════════════════════════════════════════════════
# DÉPÔT
# ══════════════════════════════════════════════════════════════════════════════


class TestInMemorySuspensionRepository:
    def setup_method(self) -> None:
        self.repository = InMemorySuspensionRepository()

    def test_implements_interface(self) -> None:
        assert isinstance(self.repository, ISuspensionRepository)

    def test_add_assigns_id(self) -> None:
        suspension = self.repository.add(make_suspension(subject=USER))

        assert suspension.id
        assert self.repository.get(suspension.id) is suspension
        assert self.repository.count() == 1

    def test_add_keeps_given_id(self) -> None:
        self.repository.add(make_suspension(id="s-1"))

        assert self.repository.get("s-1") is not None

    def test_add_duplicate_id(self) -> None:
        self.repository.add(make_suspension(id="s-1"))

        with pytest.raises(ValueError):
            self.repository.add(make_suspension(id="s-1"))

    def test_save_unknown(self) -> None:
        with pytest.raises(SuspensionNotFoundError):
            self.repository.save(make_suspension(id="missing"))

    def test_get_unknown(self) -> None:
        assert self.repository.get("missing") is None

    def test_all_newest_first(self) -> None:
        older = self.repository.add(make_suspension(suspended_at=REFERENCE_NOW - timedelta(days=1)))
        first = self.repository.add(make_suspension())
        second = self.repository.add(make_suspension())

        assert self.repository.all() == [second, first, older]

    def test_find_by_subject(self) -> None:
        mine = self.repository.add(make_suspension(subject=USER))
        self.repository.add(make_suspension(subject=OTHER))

        assert self.repository.find(subject=USER) == [mine]

    def test_find_by_criterion(self) -> None:
        ip = self.repository.add(make_suspension(criterion=MatchCriterion("ip", "10.0.0.1")))
        self.repository.add(make_suspension(criterion=MatchCriterion("ip", "10.0.0.2")))
        self.repository.add(make_suspension(criterion=MatchCriterion("email", "10.0.0.1")))

        assert self.repository.find(match_type="ip", match_value="10.0.0.1") == [ip]
        assert len(self.repository.find(match_type="ip")) == 2

    def test_find_by_status(self) -> None:
        active = self.repository.add(make_suspension(subject=USER))
        self.repository.add(
            make_suspension(subject=USER, expires_at=REFERENCE_NOW - timedelta(hours=1))
        )
        pending = self.repository.add(
            make_suspension(subject=USER, starts_at=REFERENCE_NOW + timedelta(hours=1))
        )

        found_active = self.repository.find(
            subject=USER, status=SuspensionStatus.ACTIVE, now=REFERENCE_NOW
        )
        found_pending = self.repository.find(status=SuspensionStatus.PENDING, now=REFERENCE_NOW)

        assert found_active == [active]
        assert found_pending == [pending]

    def test_save_persists_revocation(self) -> None:
        suspension = self.repository.add(make_suspension(subject=USER))
        suspension.revoke(REFERENCE_NOW)

        self.repository.save(suspension)

        assert self.repository.find(status=SuspensionStatus.REVOKED, now=REFERENCE_NOW) == [suspension]
        assert self.repository.count() == 1
