"""TeamRequestAppService against the SQLite store."""
import pytest

from conftest import codes, messages

from teamboard.persistence.interfaces.errors import TeamFullError


@pytest.fixture
def owner(make_user):
    return make_user("Owner", 30)


@pytest.fixture
def joiner(make_user):
    return make_user("Joiner", 60)


@pytest.fixture
def team(team_service, team_repo, owner):
    assert team_service.create_team(owner.email, "Rockets", 11).is_success
    return team_repo.get_by_name("Rockets")


# ------------------------------------------------------------------
# CREATE
# ------------------------------------------------------------------
def test_create_team_request(request_service, request_repo, team, joiner):
    result = request_service.create_team_request(joiner.email, "Rockets", "Let me in")

    assert result.is_success
    request = request_repo.find_first(team.id, joiner.id)
    assert request.message == "Let me in"


def test_create_team_request_without_message(request_service, request_repo, team, joiner):
    assert request_service.create_team_request(joiner.email, "Rockets", None).is_success
    assert request_repo.find_first(team.id, joiner.id).message == ""


def test_create_team_request_twice_conflicts(request_service, team, joiner):
    request_service.create_team_request(joiner.email, "Rockets", "first")
    result = request_service.create_team_request(joiner.email, "Rockets", "second")
    assert messages(result) == ["Team request already exists."]
    assert codes(result) == [409]


def test_create_team_request_by_member_conflicts(request_service, team, owner):
    result = request_service.create_team_request(owner.email, "Rockets", "")
    assert messages(result) == ["User is already a team member."]
    assert codes(result) == [409]


def test_create_team_request_missing_params(request_service, db_path):
    result = request_service.create_team_request(None, "Rockets")
    assert messages(result) == ["User and team name must be provided."]


def test_create_team_request_unknown_user_and_team(request_service, db_path):
    result = request_service.create_team_request("ghost@example.com", "Nowhere")
    assert messages(result) == ["User does not exist.", "Team does not exist."]
    assert codes(result) == [404, 404]


# ------------------------------------------------------------------
# ACCEPT
# ------------------------------------------------------------------
def test_accept_team_request(request_service, request_repo, team_repo, team, owner, joiner, logger):
    request_service.create_team_request(joiner.email, "Rockets", "hi")

    result = request_service.accept_team_request(owner.email, "Rockets", "Joiner")

    assert result.is_success
    assert team_repo.is_member(team.id, joiner.id)
    assert team_repo.count_members(team.id) == 2
    assert request_repo.find_first(team.id, joiner.id) is None
    assert any(r["event"] == "team_request_accepted" for r in logger.records)


def test_accept_without_request(request_service, team, owner, joiner):
    result = request_service.accept_team_request(owner.email, "Rockets", "Joiner")
    assert messages(result) == ["Team request does not exist."]
    assert codes(result) == [404]


def test_accept_twice(request_service, team, owner, joiner):
    request_service.create_team_request(joiner.email, "Rockets", "hi")
    assert request_service.accept_team_request(owner.email, "Rockets", "Joiner").is_success

    again = request_service.accept_team_request(owner.email, "Rockets", "Joiner")
    assert messages(again) == ["Team request does not exist."]
    assert codes(again) == [404]


def test_accept_loses_race_for_the_request(request_service, request_repo, team_repo, team, owner, joiner, monkeypatch):
    request_service.create_team_request(joiner.email, "Rockets", "hi")
    # Another writer consumed the request between lookup and acceptance
    monkeypatch.setattr(request_repo, "accept", lambda request, max_member_count: False)

    result = request_service.accept_team_request(owner.email, "Rockets", "Joiner")

    assert messages(result) == ["Team request not found."]
    assert codes(result) == [404]
    assert not team_repo.is_member(team.id, joiner.id)


def test_accept_into_full_team(request_service, team_repo, make_user, team, owner):
    for i in range(10):
        user = make_user(f"Member{i}", i)
        request_service.create_team_request(user.email, "Rockets", "")
        assert request_service.accept_team_request(owner.email, "Rockets", user.name).is_success
    assert team_repo.count_members(team.id) == 11

    late = make_user("Latecomer", 5)
    request_service.create_team_request(late.email, "Rockets", "")
    result = request_service.accept_team_request(owner.email, "Rockets", "Latecomer")

    assert result.errors[0].to_dict() == {"code": 409, "message": "Team is full."}
    assert not team_repo.is_member(team.id, late.id)


def test_accept_loses_race_for_the_last_seat(request_service, request_repo, team_repo, make_user, team, owner, monkeypatch):
    for i in range(9):
        user = make_user(f"Member{i}", i)
        request_service.create_team_request(user.email, "Rockets", "")
        assert request_service.accept_team_request(owner.email, "Rockets", user.name).is_success
    alpha = make_user("Alpha", 40)
    bravo = make_user("Bravo", 41)
    request_service.create_team_request(alpha.email, "Rockets", "")
    request_service.create_team_request(bravo.email, "Rockets", "")
    assert team_repo.count_members(team.id) == 10

    store_accept = request_repo.accept

    def accept_after_bravo(request, max_member_count):
        # Bravo takes the last seat after Alpha passed the capacity pre-check
        monkeypatch.setattr(request_repo, "accept", store_accept)
        assert request_service.accept_team_request(owner.email, "Rockets", "Bravo").is_success
        return store_accept(request, max_member_count)

    monkeypatch.setattr(request_repo, "accept", accept_after_bravo)

    result = request_service.accept_team_request(owner.email, "Rockets", "Alpha")

    assert result.errors[0].to_dict() == {"code": 409, "message": "Team is full."}
    assert team_repo.count_members(team.id) == 11
    assert team_repo.is_member(team.id, bravo.id)
    assert not team_repo.is_member(team.id, alpha.id)
    assert request_repo.find_first(team.id, alpha.id) is not None


def test_accept_unknown_requester_reads_as_missing_request(request_service, team, owner):
    result = request_service.accept_team_request(owner.email, "Rockets", "Nobody")
    assert messages(result) == ["Team request does not exist."]
    assert codes(result) == [404]


def test_accept_by_non_owner_forbidden(request_service, make_user, team, joiner):
    intruder = make_user("Intruder", 1)
    request_service.create_team_request(joiner.email, "Rockets", "hi")
    result = request_service.accept_team_request(intruder.email, "Rockets", "Joiner")
    assert result.errors[0].to_dict() == {
        "code": 403,
        "message": "Forbidden. Only team owner can accept requests.",
    }


def test_accept_missing_params(request_service, db_path):
    result = request_service.accept_team_request("o@example.com", None, "Joiner")
    assert messages(result) == ["Owner, user and team name must be provided."]


# ------------------------------------------------------------------
# DELETE
# ------------------------------------------------------------------
def test_delete_team_request(request_service, request_repo, team_repo, team, owner, joiner):
    request_service.create_team_request(joiner.email, "Rockets", "hi")

    result = request_service.delete_team_request(owner.email, "Rockets", "Joiner")

    assert result.is_success
    assert request_repo.find_first(team.id, joiner.id) is None
    assert not team_repo.is_member(team.id, joiner.id)


def test_delete_missing_team_request(request_service, team, owner, joiner):
    result = request_service.delete_team_request(owner.email, "Rockets", "Joiner")
    assert messages(result) == ["Team request not found."]
    assert codes(result) == [404]


def test_delete_unknown_requester(request_service, team, owner):
    result = request_service.delete_team_request(owner.email, "Rockets", "Nobody")
    assert messages(result) == ["User does not exist."]


def test_delete_by_non_owner_forbidden(request_service, team, joiner):
    request_service.create_team_request(joiner.email, "Rockets", "hi")
    result = request_service.delete_team_request(joiner.email, "Rockets", "Joiner")
    assert codes(result) == [403]
    assert messages(result) == ["Forbidden. Only team owner can delete requests."]


# ------------------------------------------------------------------
# READ
# ------------------------------------------------------------------
def test_get_all_team_requests(request_service, make_user, team, owner, joiner):
    other = make_user("Other", 1)
    request_service.create_team_request(joiner.email, "Rockets", "hi")
    request_service.create_team_request(other.email, "Rockets", "")

    result = request_service.get_all_team_requests(owner.email, "Rockets")

    assert result.value == [
        {"name": "Joiner", "message": "hi"},
        {"name": "Other", "message": ""},
    ]


def test_get_all_team_requests_empty(request_service, team, owner):
    assert request_service.get_all_team_requests(owner.email, "Rockets").value == []


def test_get_all_team_requests_by_non_owner_forbidden(request_service, team, joiner):
    result = request_service.get_all_team_requests(joiner.email, "Rockets")
    assert result.errors[0].to_dict() == {
        "code": 403,
        "message": "Forbidden. Only team owner can fetch join requests.",
    }


def test_get_all_team_requests_missing_params(request_service, db_path):
    result = request_service.get_all_team_requests("o@example.com", None)
    assert messages(result) == ["Owner and team name must be provided."]


# ------------------------------------------------------------------
# Store
# ------------------------------------------------------------------
def test_store_accept_consumes_request_once(request_service, request_repo, team_repo, team, joiner):
    request_service.create_team_request(joiner.email, "Rockets", "hi")
    request = request_repo.find_first(team.id, joiner.id)

    assert request_repo.accept(request, team.max_member_count) is True
    assert request_repo.accept(request, team.max_member_count) is False
    assert team_repo.count_members(team.id) == 2


def test_store_accept_refuses_full_team(request_service, request_repo, team_repo, team, joiner):
    request_service.create_team_request(joiner.email, "Rockets", "hi")
    request = request_repo.find_first(team.id, joiner.id)

    with pytest.raises(TeamFullError):
        request_repo.accept(request, max_member_count=1)
    assert team_repo.count_members(team.id) == 1
    assert request_repo.find_first(team.id, joiner.id) is not None
