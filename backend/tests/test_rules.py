"""Validation rules: each check is independent and all failures are reported together."""
import pytest

from conftest import RecordingLogger

from teamboard.domain.team.models import Team
from teamboard.domain.team.rules import (
    capacity_too_small,
    validate_capacity,
    validate_new_team,
    validate_ownership,
    validate_team_update,
)
from teamboard.domain.team_request.rules import validate_new_request
from teamboard.domain.user.models import User
from teamboard.domain.user.rules import validate_registration


def _messages(result):
    return [e.message for e in result.errors]


@pytest.mark.parametrize("value,too_small", [
    (None, False),
    (11, False),
    (500, False),
    (10, True),
    (0, True),
    (-3, True),
    (True, True),
    ("12", True),
    (11.5, True),
])
def test_capacity_too_small(value, too_small):
    assert capacity_too_small(value) is too_small


def test_new_team_valid():
    assert validate_new_team("o@example.com", "Rockets", 11, name_taken=False).is_success


def test_new_team_collects_every_failure():
    result = validate_new_team("o@example.com", "abc", 10, name_taken=True, logger=RecordingLogger())
    assert _messages(result) == [
        "Team name already exists.",
        "Name must be at least 4 characters long.",
        "Max member count must be greater than 10.",
    ]
    assert [e.external.code for e in result.errors] == [409, 400, 400]


def test_new_team_missing_params():
    result = validate_new_team(None, None, None, name_taken=False, logger=RecordingLogger())
    assert _messages(result) == ["Team name, owner, and max member count must be provided."]


def test_team_update_needs_a_change():
    result = validate_team_update("Rockets", "o@example.com", None, None, name_taken=False, logger=RecordingLogger())
    assert _messages(result) == ["Team name or max member count must be provided."]


def test_team_update_checks_only_provided_fields():
    assert validate_team_update("Rockets", "o@example.com", None, 20, name_taken=False).is_success
    assert validate_team_update("Rockets", "o@example.com", "Comets", None, name_taken=False).is_success


def test_team_update_locators_required():
    result = validate_team_update(None, None, "Comets", None, name_taken=False, logger=RecordingLogger())
    assert _messages(result) == ["Team name and owner must be provided."]


def test_ownership():
    owner = User(id="u1", email="o@example.com", name="Owner", hashed_password="x", score=1)
    other = User(id="u2", email="x@example.com", name="Other", hashed_password="x", score=1)
    team = Team(id="t1", name="Rockets", max_member_count=11, owner_id="u1")

    assert validate_ownership(team, owner, "update the team").is_success
    forbidden = validate_ownership(team, other, "update the team", logger=RecordingLogger())
    assert forbidden.errors[0].external.to_dict() == {
        "code": 403,
        "message": "Forbidden. Only team owner can update the team.",
    }


def test_capacity():
    team = Team(id="t1", name="Rockets", max_member_count=11, owner_id="u1")
    assert validate_capacity(team, 10).is_success
    full = validate_capacity(team, 11, logger=RecordingLogger())
    assert full.errors[0].external.to_dict() == {"code": 409, "message": "Team is full."}


def test_new_request():
    assert validate_new_request(is_member=False, request_exists=False).is_success
    result = validate_new_request(is_member=True, request_exists=True, logger=RecordingLogger())
    assert _messages(result) == ["User is already a team member.", "Team request already exists."]


def test_registration_valid():
    assert validate_registration("a@example.com", "Alice", "password1", False, False).is_success


def test_registration_collects_every_failure():
    result = validate_registration("not-an-email", "Al", "short", True, True, logger=RecordingLogger())
    assert _messages(result) == [
        "Email already exists.",
        "Name already exists.",
        "Invalid email format.",
        "Name must be at least 4 characters long.",
        "Password must be at least 8 characters long.",
    ]


def test_registration_missing_fields():
    result = validate_registration(None, None, None, False, False, logger=RecordingLogger())
    assert _messages(result) == ["Email, name, and password must be provided."]
