"""
Tests unitaires pour SuspensionGuard.

La requête de test vient de 203.0.113.10, localisée en France par
le faux résolveur géographique.
"""

import pytest

from helpers import make_request
from suspend.core import GuardConfig
from suspend.logging import LogLevel
from suspend.suspension import (
    SubjectReference,
    SuspendedError,
    SuspendManager,
    SuspensionGuard,
)


DEFAULT_MESSAGE = "Access denied. Your access has been suspended."


class TestGuardChecks:
    def test_default_checks(self, manager: SuspendManager) -> None:
        assert SuspensionGuard(manager).default_checks() == ["ip", "subject"]

        config = GuardConfig(check_ip=False, check_country=True)
        assert SuspensionGuard(manager, config).default_checks() == ["country", "subject"]

    def test_nothing_suspended(self, manager: SuspendManager) -> None:
        guard = SuspensionGuard(manager)

        guard.check(make_request())

        assert guard.is_blocked(make_request()) is None

    def test_blocks_ip(self, manager: SuspendManager) -> None:
        suspension = manager.match("ip", "203.0.113.0/24").suspend(reason="Abuse")
        guard = SuspensionGuard(manager)

        with pytest.raises(SuspendedError) as exc_info:
            guard.check(make_request(path="/shop"))

        error = exc_info.value
        assert error.suspension == suspension
        assert error.status_code == 403
        assert error.message == DEFAULT_MESSAGE + " Reason: Abuse"
        assert str(error) == error.message

    def test_block_logged(self, manager: SuspendManager) -> None:
        suspension = manager.match("ip", "203.0.113.10").suspend()
        guard = SuspensionGuard(manager)

        with pytest.raises(SuspendedError):
            guard.check(make_request(path="/shop", method="POST"))

        warning = manager.logger.get_entries_by_level(LogLevel.WARN)[-1]
        assert warning.message == "Request blocked by suspension"
        assert warning.extra["suspension_id"] == suspension.id
        assert warning.extra["path"] == "/shop"
        assert warning.extra["method"] == "POST"

    def test_message_without_reason(self, manager: SuspendManager) -> None:
        manager.match("ip", "203.0.113.10").suspend()

        with pytest.raises(SuspendedError) as exc_info:
            SuspensionGuard(manager).check(make_request())

        assert exc_info.value.message == DEFAULT_MESSAGE

    def test_custom_response(self, manager: SuspendManager) -> None:
        manager.match("ip", "203.0.113.10").suspend()
        config = GuardConfig(response_code=451, response_message="Unavailable.")

        with pytest.raises(SuspendedError) as exc_info:
            SuspensionGuard(manager, config).check(make_request())

        assert exc_info.value.status_code == 451
        assert exc_info.value.message == "Unavailable."

    def test_country_only_when_enabled(self, manager: SuspendManager) -> None:
        suspension = manager.match("country", "FR").suspend()

        assert SuspensionGuard(manager).is_blocked(make_request()) is None

        guard = SuspensionGuard(manager, GuardConfig(check_country=True))
        assert guard.is_blocked(make_request()) == suspension

    def test_country_unknown_location(self, manager: SuspendManager) -> None:
        manager.match("country", "FR").suspend()
        guard = SuspensionGuard(manager, GuardConfig(check_country=True))

        assert guard.is_blocked(make_request(remote_addr="192.0.2.1")) is None

    def test_explicit_checks(self, manager: SuspendManager) -> None:
        manager.match("ip", "203.0.113.10").suspend()
        guard = SuspensionGuard(manager)

        assert guard.is_blocked(make_request(), checks=["subject"]) is None
        assert guard.is_blocked(make_request(), checks=["ip"]) is not None
        assert guard.is_blocked(make_request(), checks=["unknown"]) is None

    def test_no_client_ip(self, manager: SuspendManager) -> None:
        manager.match("ip", "0.0.0.0/0").suspend()

        assert SuspensionGuard(manager).is_blocked(make_request(remote_addr=None)) is None


class TestGuardSubjects:
    def test_subject_from_request_user(self, manager: SuspendManager, user: SubjectReference) -> None:
        suspension = manager.for_subject(user).suspend(reason="Spam")

        blocked = SuspensionGuard(manager).is_blocked(make_request(user=user))

        assert blocked == suspension

    def test_explicit_subject(self, manager: SuspendManager, user: SubjectReference) -> None:
        suspension = manager.for_subject(user).suspend()

        blocked = SuspensionGuard(manager).is_blocked(make_request(), subject=user)

        assert blocked == suspension

    def test_non_reference_user_ignored(self, manager: SuspendManager, user: SubjectReference) -> None:
        manager.for_subject(user).suspend()

        assert SuspensionGuard(manager).is_blocked(make_request(user={"id": 42})) is None

    def test_subject_strategy_respected(
        self, manager: SuspendManager, user: SubjectReference
    ) -> None:
        manager.for_subject(user).using("ip_address", {"ip": "10.0.0.0/8"}).suspend()
        guard = SuspensionGuard(manager)

        assert guard.is_blocked(make_request(user=user)) is None
        assert guard.is_blocked(make_request(remote_addr="10.1.2.3", user=user)) is not None


class TestGuardExceptions:
    @pytest.mark.parametrize("path", ["/login", "/health", "/health/db"])
    def test_excepted_paths(self, manager: SuspendManager, path: str) -> None:
        manager.match("ip", "203.0.113.10").suspend()
        guard = SuspensionGuard(manager, GuardConfig(except_paths=["/login", "/health*"]))

        assert guard.is_excepted(path)
        guard.check(make_request(path=path))

    def test_other_paths_guarded(self, manager: SuspendManager) -> None:
        manager.match("ip", "203.0.113.10").suspend()
        guard = SuspensionGuard(manager, GuardConfig(except_paths=["/login"]))

        assert not guard.is_excepted("/login/extra")
        with pytest.raises(SuspendedError):
            guard.check(make_request(path="/login/extra"))
