"""
In-Memory Team Repository

Dictionary-backed implementation of ``ITeamRepository`` for tests and
single-process use. The repository stores immutable ``TeamState`` snapshots,
so every ``find_*`` returns a fresh aggregate and changes made to a loaded
team are invisible until it is saved.
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime

from teamhub.core.domain.unique_id import UniqueId
from teamhub.core.logging import get_logger
from teamhub.core.result import Result, err, ok
from teamhub.modules.team.domain.aggregates.team import Team, TeamState
from teamhub.modules.team.domain.entities.team.team_errors import TeamError
from teamhub.modules.team.domain.entities.team.team_invitation import TeamInvitation
from teamhub.modules.team.domain.interfaces.repositories.team_repository import (
    ITeamRepository,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class _StoredTeam:
    state: TeamState
    created_at: datetime
    updated_at: datetime
    version: int


class InMemoryTeamRepository(ITeamRepository):
    """In-memory team storage with optimistic concurrency on ``version``."""

    def __init__(self):
        self._teams: dict[UniqueId, _StoredTeam] = {}
        self._lock = asyncio.Lock()

    async def find_by_id(self, team_id: UniqueId) -> Team | None:
        stored = self._teams.get(UniqueId.coerce(team_id))
        if stored is None:
            return None
        return self._to_domain(UniqueId.coerce(team_id), stored)

    async def find_by_member_id(self, user_id: UniqueId) -> list[Team]:
        uid = UniqueId.coerce(user_id)
        return [
            self._to_domain(team_id, stored)
            for team_id, stored in self._teams.items()
            if stored.state.find_member(uid) is not None
        ]

    async def find_pending_invitations(self, user_id: UniqueId) -> list[TeamInvitation]:
        uid = UniqueId.coerce(user_id)
        return [
            invitation
            for stored in self._teams.values()
            for invitation in stored.state.invitations
            if invitation.user_id == uid and invitation.is_pending
        ]

    async def save(self, team: Team) -> Result[None, TeamError]:
        async with self._lock:
            current = self._teams.get(team.id)
            stored_version = current.version if current else 0
            if team.version != stored_version:
                logger.warning(
                    "Concurrent team modification detected",
                    team_id=str(team.id),
                    expected_version=stored_version,
                    actual_version=team.version,
                )
                return err(
                    TeamError.concurrency_conflict(team.id, stored_version, team.version)
                )

            self._teams[team.id] = _StoredTeam(
                state=team.state,
                created_at=team.created_at,
                updated_at=team.updated_at,
                version=stored_version + 1,
            )
            team.increment_version()

        logger.debug("Team saved", team_id=str(team.id), version=team.version)
        return ok()

    async def delete(self, team_id: UniqueId) -> Result[None, TeamError]:
        async with self._lock:
            if self._teams.pop(UniqueId.coerce(team_id), None) is None:
                return err(TeamError.team_not_found(team_id))
        return ok()

    async def exists(self, team_id: UniqueId) -> bool:
        return UniqueId.coerce(team_id) in self._teams

    @staticmethod
    def _to_domain(team_id: UniqueId, stored: _StoredTeam) -> Team:
        # Snapshots were validated on the way in
        return Team(
            stored.state,
            entity_id=team_id,
            created_at=stored.created_at,
            updated_at=stored.updated_at,
            version=stored.version,
        )


__all__ = ["InMemoryTeamRepository"]
