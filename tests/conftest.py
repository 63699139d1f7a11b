"""
SUSPEND - Pytest Configuration
Fixtures partagées pour tous les tests.
"""

from pathlib import Path

import pytest

from helpers import FakeGeoResolver, FrozenClock
from suspend.logging import LogConfig, LogLevel, StructuredLogger
from suspend.matchers import MatcherRegistry
from suspend.resolvers import HeaderDeviceResolver, StandardIpResolver
from suspend.strategies import StrategyRegistry
from suspend.suspension import (
    InMemorySuspensionRepository,
    SubjectReference,
    SuspendManager,
    SuspensionEventDispatcher,
)


@pytest.fixture
def fixtures_path() -> Path:
    """Chemin vers le dossier fixtures."""
    return Path(__file__).parent.parent / "fixtures"


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture
def logger() -> StructuredLogger:
    return StructuredLogger("suspend.test", config=LogConfig(min_level=LogLevel.DEBUG))


@pytest.fixture
def geo_resolver() -> FakeGeoResolver:
    return FakeGeoResolver({"203.0.113.10": "FR", "198.51.100.7": "us"})


@pytest.fixture
def events(logger: StructuredLogger) -> SuspensionEventDispatcher:
    return SuspensionEventDispatcher(logger=logger)


@pytest.fixture
def repository() -> InMemorySuspensionRepository:
    return InMemorySuspensionRepository()


@pytest.fixture
def manager(
    repository: InMemorySuspensionRepository,
    geo_resolver: FakeGeoResolver,
    events: SuspensionEventDispatcher,
    logger: StructuredLogger,
    clock: FrozenClock,
) -> SuspendManager:
    ip_resolver = StandardIpResolver()
    strategies = StrategyRegistry.with_defaults(
        ip_resolver,
        geo_resolver,
        HeaderDeviceResolver(),
        clock=clock,
    )
    return SuspendManager(
        repository=repository,
        matchers=MatcherRegistry.with_defaults(),
        strategies=strategies,
        ip_resolver=ip_resolver,
        geo_resolver=geo_resolver,
        event_sink=events,
        logger=logger,
        clock=clock,
    )


@pytest.fixture
def user() -> SubjectReference:
    return SubjectReference.of("user", 42)
