"""Unit tests for data models."""

import pytest
from pydantic import ValidationError

from gitwrap.models import AccessToken, ResolutionChoice, Result, StatusSnapshot
from gitwrap.utils.errors import PushError


@pytest.mark.parametrize("raw, expected", [
    ("1", ResolutionChoice.CURRENT),
    ("2", ResolutionChoice.INCOMING),
    (" 3\n", ResolutionChoice.BOTH),
])
def test_resolution_choice_from_input(raw, expected):
    """Test parsing valid menu choices."""
    assert ResolutionChoice.from_input(raw) is expected


@pytest.mark.parametrize("raw", ["0", "4", "-1", "both", "", None])
def test_resolution_choice_rejects_other_input(raw):
    """Test parsing invalid menu choices."""
    assert ResolutionChoice.from_input(raw) is None


def test_resolution_choice_labels():
    """Test menu labels."""
    assert ResolutionChoice.CURRENT.label == "Accept current changes"
    assert ResolutionChoice.INCOMING.label == "Accept incoming changes"
    assert ResolutionChoice.BOTH.label == "Accept both changes"


def test_status_snapshot_defaults():
    """Test an empty status snapshot."""
    snapshot = StatusSnapshot()
    assert snapshot.untracked == frozenset()
    assert snapshot.modified == frozenset()
    assert not snapshot.has_conflicts


def test_status_snapshot_is_frozen():
    """Test that snapshots are immutable."""
    snapshot = StatusSnapshot(conflicting=frozenset({"x.txt"}))
    assert snapshot.has_conflicts
    with pytest.raises(ValidationError):
        snapshot.conflicting = frozenset()


def test_access_token_requires_value():
    """Test that an empty access token is rejected."""
    token = AccessToken(access_token="gho_abc", token_type="bearer", scope="repo")
    assert str(token) == "gho_abc"

    with pytest.raises(ValidationError):
        AccessToken(access_token="")


def test_result_success():
    """Test a successful result."""
    result = Result.success("abc")
    assert result.ok
    assert result.unwrap() == "abc"


def test_result_failure():
    """Test a failed result."""
    error = PushError("Error pushing changes: rejected")
    result = Result.failure(error)

    assert not result.ok
    assert result.value is None
    with pytest.raises(PushError, match="rejected"):
        result.unwrap()
