"""
Tests for participant-key resolution policies.
"""

import pytest

from bragging_rights.scoring.participants import canonical_name, folder_owner, resolve_participant


class TestCanonicalName:
    """Tests for the static alias table."""

    def test_known_handle(self):
        assert canonical_name("lolidrk") == "kalyani"
        assert canonical_name("Tanmay-Kulkarni101") == "tanmay"

    def test_case_insensitive_fallback(self):
        assert canonical_name("LOLIDRK") == "kalyani"

    def test_unknown_passthrough(self):
        assert canonical_name("stranger") == "stranger"


class TestResolveParticipant:
    """Tests for resolve_participant function."""

    def test_login_policy_uses_handle(self, make_record):
        record = make_record("[Easy] x", login="lolidrk", name="Kalyani")
        assert resolve_participant(record, "login") == "lolidrk"

    def test_login_policy_skips_without_handle(self, make_record):
        record = make_record("[Easy] x", login=None, name="Kalyani")
        assert resolve_participant(record, "login") is None

    def test_login_or_name_falls_back_to_name(self, make_record):
        record = make_record("[Easy] x", login=None, name="Kalyani Deshmukh")
        assert resolve_participant(record, "login_or_name") == "Kalyani Deshmukh"

    def test_alias_collapses_handle_and_name(self, make_record):
        by_login = make_record("[Easy] x", login="Tanmay-Kulkarni101", name="T K")
        by_name = make_record("[Easy] x", login=None, name="Tanmay Kulkarni")
        assert resolve_participant(by_login, "alias") == "tanmay"
        assert resolve_participant(by_name, "alias") == "tanmay"

    def test_alias_no_identity(self, make_record):
        record = make_record("[Easy] x", login=None, name="")
        assert resolve_participant(record, "alias") is None

    def test_unknown_policy(self, make_record):
        with pytest.raises(ValueError, match="author key policy"):
            resolve_participant(make_record("[Easy] x"), "email")


class TestFolderOwner:
    """Tests for folder_owner function."""

    def test_top_level_folder(self):
        assert folder_owner("bob/arrays/two_sum.py") == "bob"

    def test_folder_is_aliased(self):
        assert folder_owner("Kalyani/two_sum.py") == "kalyani"

    def test_root_file(self):
        assert folder_owner("main.py") is None
