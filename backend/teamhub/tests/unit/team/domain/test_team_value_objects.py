"""
Test cases for TeamName and TeamDescription value objects.

Factories return ``Result`` values; direct construction of an invalid value
is a programmer error and raises.
"""

from dataclasses import FrozenInstanceError

import pytest

from teamhub.core.errors import ValidationError
from teamhub.modules.team.domain.entities.team.team_constants import TeamLimits
from teamhub.modules.team.domain.entities.team.team_errors import TeamErrorCode
from teamhub.modules.team.domain.value_objects.team_description import TeamDescription
from teamhub.modules.team.domain.value_objects.team_name import TeamName


class TestTeamName:
    """Test TeamName creation and validation."""

    def test_create_valid_team_name(self):
        """Test creating a valid team name."""
        name = TeamName.create("  Platform Team ").unwrap()

        assert name.value == "Platform Team"
        assert str(name) == "Platform Team"

    def test_single_character_name_is_valid(self):
        assert TeamName.create("T").unwrap().value == "T"

    def test_maximum_length_name(self):
        value = "x" * TeamLimits.MAX_NAME_LENGTH

        assert TeamName.create(value).is_ok()

    @pytest.mark.parametrize("value", ["", "   ", None])
    def test_blank_name_is_too_short(self, value):
        result = TeamName.create(value)

        assert result.is_err()
        assert result.error.code is TeamErrorCode.NAME_TOO_SHORT

    def test_name_too_long(self):
        result = TeamName.create("x" * (TeamLimits.MAX_NAME_LENGTH + 1))

        assert result.error.code is TeamErrorCode.NAME_TOO_LONG
        assert result.error.details["length"] == TeamLimits.MAX_NAME_LENGTH + 1

    def test_direct_construction_validates(self):
        with pytest.raises(ValidationError):
            TeamName("")

    def test_immutable(self):
        name = TeamName("Platform")

        with pytest.raises(FrozenInstanceError):
            name.value = "Other"


class TestTeamDescription:
    def test_create_strips_text(self):
        description = TeamDescription.create("  Builds things  ").unwrap()

        assert description.value == "Builds things"
        assert not description.is_empty

    def test_blank_description_is_empty(self):
        assert TeamDescription.create("   ").unwrap().is_empty

    def test_maximum_length(self):
        assert TeamDescription.create("d" * TeamLimits.MAX_DESCRIPTION_LENGTH).is_ok()

    def test_too_long(self):
        result = TeamDescription.create("d" * (TeamLimits.MAX_DESCRIPTION_LENGTH + 1))

        assert result.error.code is TeamErrorCode.DESCRIPTION_TOO_LONG

    def test_direct_construction_validates(self):
        with pytest.raises(ValidationError):
            TeamDescription("d" * (TeamLimits.MAX_DESCRIPTION_LENGTH + 1))
