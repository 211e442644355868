"""
Global pytest configuration and fixtures for all tests.

Provides:
- Logging configured for the test environment
- factory_boy factories for members, invitations and teams
- Repository and event bus fixtures
"""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import factory
import pytest
import pytest_asyncio
from faker import Faker

from teamhub.core.config import get_settings
from teamhub.core.domain.unique_id import UniqueId
from teamhub.core.enums import Environment, LogLevel
from teamhub.core.events.bus import InMemoryEventBus
from teamhub.core.logging import LogConfig, configure_logging
from teamhub.modules.team.domain.aggregates.team import Team
from teamhub.modules.team.domain.entities.team.team_enums import TeamRole
from teamhub.modules.team.domain.entities.team.team_invitation import TeamInvitation
from teamhub.modules.team.domain.entities.team.team_member import TeamMember
from teamhub.modules.team.infrastructure.repositories.in_memory_team_repository import (
    InMemoryTeamRepository,
)

fake = Faker()

FIXED_NOW = datetime(2024, 1, 15, 12, 0, tzinfo=UTC)


@pytest.fixture(scope="session", autouse=True)
def configure_test_logging():
    """Console logging at WARNING for the whole test session."""
    configure_logging(LogConfig(level=LogLevel.WARNING, environment=Environment.TESTING))


@pytest.fixture
def clear_settings_cache():
    """Reset the cached settings before and after a test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# Test Factories using Factory Boy


class TeamMemberFactory(factory.Factory):
    """Factory for creating test TeamMember value objects."""

    class Meta:
        model = TeamMember

    user_id = factory.LazyFunction(UniqueId.generate)
    role = TeamRole.MEMBER
    joined_at = factory.LazyFunction(lambda: FIXED_NOW)


class TeamInvitationFactory(factory.Factory):
    """Factory for creating pending test invitations."""

    class Meta:
        model = TeamInvitation

    id = factory.LazyFunction(UniqueId.generate)
    team_id = factory.LazyFunction(UniqueId.generate)
    user_id = factory.LazyFunction(UniqueId.generate)
    invited_by = factory.LazyFunction(UniqueId.generate)
    role = TeamRole.MEMBER
    email = factory.Faker("email")
    created_at = factory.LazyFunction(lambda: FIXED_NOW)
    expires_at = factory.LazyAttribute(lambda obj: obj.created_at + timedelta(days=7))


class TeamFactory(factory.Factory):
    """Factory for creating Team aggregates through ``Team.create``."""

    class Meta:
        model = Team

    name = factory.LazyFunction(lambda: fake.company()[:50])
    owner_id = factory.LazyFunction(lambda: str(uuid4()))
    description = factory.Faker("sentence")
    now = factory.LazyFunction(lambda: FIXED_NOW)

    @classmethod
    def _build(cls, model_class, *args, **kwargs):
        return model_class.create(*args, **kwargs).unwrap()

    @classmethod
    def _create(cls, model_class, *args, **kwargs):
        return cls._build(model_class, *args, **kwargs)


# Common fixtures


@pytest.fixture
def member_factory():
    return TeamMemberFactory


@pytest.fixture
def invitation_factory():
    return TeamInvitationFactory


@pytest.fixture
def team_factory():
    return TeamFactory


@pytest.fixture
def now():
    return FIXED_NOW


@pytest.fixture
def team():
    """A freshly created team with an empty event log."""
    team = TeamFactory()
    team.clear_events()
    return team


@pytest.fixture
def repository():
    return InMemoryTeamRepository()


@pytest_asyncio.fixture
async def event_bus():
    bus = InMemoryEventBus(fail_fast=True)
    await bus.start()
    yield bus
    await bus.stop()
