"""
Tests for data models.
"""
from pathlib import Path

import pytest

from docsync.models import AnnotatedComment, BrokenLink, LinkReference, LintFinding


class TestAnnotatedComment:
    """Tests for AnnotatedComment."""

    def test_str_with_source(self):
        """Location is shown when known."""
        comment = AnnotatedComment("Login", "/** @feature Login */", Path("lib/a.js"), 7)
        assert str(comment) == "@feature Login (lib/a.js:7)"

    def test_str_without_source(self):
        """Bare comments show only the key."""
        assert str(AnnotatedComment("Login", "body")) == "@feature Login"

    def test_immutable(self):
        """Comments are frozen."""
        comment = AnnotatedComment("Login", "body")
        with pytest.raises(AttributeError):
            comment.feature_key = "Other"


class TestLinkReference:
    """Tests for LinkReference."""

    def test_path_portion(self):
        """Anchors are stripped from the path portion only."""
        ref = LinkReference(Path("/d/a.md"), "b.md#x#y", Path("/d/b.md"), 2)
        assert ref.path_portion == "b.md"
        assert ref.raw_target == "b.md#x#y"
        assert str(ref) == "/d/a.md:2 -> b.md#x#y"

    def test_hashable(self):
        """References can be collected in sets."""
        ref = LinkReference(Path("/d/a.md"), "b.md", Path("/d/b.md"))
        assert len({ref, ref}) == 1


class TestBrokenLink:
    """Tests for BrokenLink."""

    def test_from_reference(self):
        """A broken link keeps the original target string."""
        ref = LinkReference(Path("/d/a.md"), "./missing.md", Path("/d/missing.md"), 3)
        link = BrokenLink.from_reference(ref)
        assert link.target == "./missing.md"
        assert link.resolved_path == Path("/d/missing.md")
        assert str(link) == 'In "/d/a.md": link to "./missing.md" is broken.'

    def test_dict_round_trip(self):
        """to_dict/from_dict preserve every field."""
        link = BrokenLink(Path("/d/a.md"), "x.md#y", Path("/d/x.md"), 9)
        assert BrokenLink.from_dict(link.to_dict()) == link


class TestLintFinding:
    """Tests for LintFinding."""

    def test_str_with_location(self):
        """File and line prefix the message."""
        assert str(LintFinding("Bad heading", file="a.md", line=3)) == "a.md:3 Bad heading"

    def test_from_dict_defaults(self):
        """Optional fields default to None."""
        finding = LintFinding.from_dict({"message": "oops"})
        assert finding == LintFinding("oops")
