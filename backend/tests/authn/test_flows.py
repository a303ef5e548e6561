"""
Tests for authentication flow classification.
"""

import pytest

from apps.authn.flows import AuthFlow, classify, is_declared, normalize_flow_type


class TestNormalizeFlowType:
    """Tests for declared type normalization."""

    @pytest.mark.parametrize(
        "declared",
        ["magic_link", "MAGIC_LINK", "magiclink", "MAGICLINK", "MagicLink", "magic-link"],
    )
    def test_magic_link_spellings(self, declared: str) -> None:
        assert normalize_flow_type(declared) is AuthFlow.MAGIC_LINK

    @pytest.mark.parametrize(
        "declared",
        ["session", "SESSION", "session_token", "SESSION_TOKEN", "sessiontoken", "SessionToken"],
    )
    def test_session_spellings(self, declared: str) -> None:
        assert normalize_flow_type(declared) is AuthFlow.SESSION

    @pytest.mark.parametrize("declared", [None, "", "   "])
    def test_missing_type(self, declared: str | None) -> None:
        assert normalize_flow_type(declared) is None

    def test_unknown_type(self) -> None:
        assert normalize_flow_type("password") is None


class TestIsDeclared:
    """Tests for is_declared."""

    def test_blank_values_are_not_declared(self) -> None:
        assert not is_declared(None)
        assert not is_declared("")
        assert not is_declared("  ")

    def test_any_text_is_declared(self) -> None:
        assert is_declared("invalid")


class TestClassify:
    """Tests for classify."""

    def test_declared_type_wins_over_token_shape(self) -> None:
        """A sess_-looking token declared as a magic link is a magic link."""
        assert classify("sess_abc", "magic_link") is AuthFlow.MAGIC_LINK

    def test_declared_type_case_insensitive(self) -> None:
        assert classify("tok_xyz", "MAGICLINK") is AuthFlow.MAGIC_LINK

    @pytest.mark.parametrize("token", ["sess_abc", "SESS_abc", "Sess_123"])
    def test_session_prefix_without_type(self, token: str) -> None:
        assert classify(token) is AuthFlow.SESSION

    @pytest.mark.parametrize("token", ["tok_xyz", "DOYoip3rvIMMW2A7LRLI4M3EjcxZ", "xsess_abc", "sess"])
    def test_other_tokens_without_type_are_magic_links(self, token: str) -> None:
        assert classify(token) is AuthFlow.MAGIC_LINK

    def test_unknown_type_falls_back_to_token_shape(self) -> None:
        """classify itself never raises; rejecting unknown types is the dispatcher's job."""
        assert classify("sess_abc", "bogus") is AuthFlow.SESSION
        assert classify("tok_xyz", "bogus") is AuthFlow.MAGIC_LINK
