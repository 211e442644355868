"""Structural team invariants."""

from .team_invariants import (
    check_guest_policy,
    check_invitations,
    check_member_ceiling,
    check_single_owner,
    check_team_invariants,
    check_unique_members,
)

__all__ = [
    "check_guest_policy",
    "check_invitations",
    "check_member_ceiling",
    "check_single_owner",
    "check_team_invariants",
    "check_unique_members",
]
