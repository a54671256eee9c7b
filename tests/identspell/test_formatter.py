"""
Tests for diagnostic formatting.
"""

from identspell.base import SpellingDiagnostic, TextSpan
from identspell.formatter import format_diagnostics, format_path, format_spelling_error


def make_diagnostic(path, start, line, column, value="lenght"):
    return SpellingDiagnostic(value, value, TextSpan(path, start, len(value), line, column), 0)


class TestFormatter:
    """Tests for the message format."""

    def test_one_based_position(self):
        diagnostic = make_diagnostic("src/a.cs", 40, 2, 4)
        assert format_spelling_error(diagnostic) == "src/a.cs(3,5): Fix spelling of 'lenght'"

    def test_relative_path(self, tmp_path):
        path = tmp_path / "src" / "a.cs"
        diagnostic = make_diagnostic(str(path), 0, 0, 0)

        line = format_spelling_error(diagnostic, base_directory=tmp_path)

        assert line.startswith("src")
        assert line.endswith("a.cs(1,1): Fix spelling of 'lenght'")

    def test_path_outside_base_is_kept(self, tmp_path):
        assert format_path("/elsewhere/a.cs", tmp_path / "repo") == "/elsewhere/a.cs"

    def test_missing_path(self):
        assert format_path(None) == ""

    def test_diagnostics_are_sorted(self):
        diagnostics = [
            make_diagnostic("b.cs", 5, 0, 5, "wrod"),
            make_diagnostic("A.cs", 9, 1, 0, "teh"),
            make_diagnostic("a.cs", 2, 0, 2, "adn"),
        ]

        assert list(format_diagnostics(diagnostics)) == [
            "a.cs(1,3): Fix spelling of 'adn'",
            "A.cs(2,1): Fix spelling of 'teh'",
            "b.cs(1,6): Fix spelling of 'wrod'",
        ]
