"""Team Repository Interface

Domain contract for team data access that must be implemented by the infrastructure layer.
"""

from abc import abstractmethod

from teamhub.core.domain.contracts import IRepository
from teamhub.core.domain.unique_id import UniqueId
from teamhub.core.result import Result

from ...aggregates.team import Team
from ...entities.team.team_errors import TeamError
from ...entities.team.team_invitation import TeamInvitation


class ITeamRepository(IRepository[Team, TeamError]):
    """Repository interface for the Team aggregate."""

    @abstractmethod
    async def find_by_id(self, team_id: UniqueId) -> Team | None:
        """Find team by ID.

        Args:
            team_id: Team identifier

        Returns:
            Team aggregate if found, None otherwise
        """

    @abstractmethod
    async def find_by_member_id(self, user_id: UniqueId) -> list[Team]:
        """Find all teams a user belongs to.

        Args:
            user_id: User identifier

        Returns:
            List of teams the user is a member of
        """

    @abstractmethod
    async def save(self, team: Team) -> Result[None, TeamError]:
        """Save team aggregate with all changes.

        The stored version must equal ``team.version``; on success the
        aggregate's version is incremented.

        Returns:
            Ok on success, Err with CONCURRENCY_CONFLICT or PERSISTENCE_FAILED otherwise
        """

    @abstractmethod
    async def delete(self, team_id: UniqueId) -> Result[None, TeamError]:
        """Delete team from storage.

        Returns:
            Ok on success, Err with TEAM_NOT_FOUND if absent
        """

    @abstractmethod
    async def find_pending_invitations(self, user_id: UniqueId) -> list[TeamInvitation]:
        """Find every pending invitation addressed to a user, across teams."""

    @abstractmethod
    async def exists(self, team_id: UniqueId) -> bool:
        """Check if team exists."""


__all__ = ["ITeamRepository"]
