"""
Tests for the Fix List Store
============================
"""

import pytest

from identspell.config_logging import FixListFormatError
from identspell.fixlist import FixList, SpellingFix, SpellingFixKind


class TestParse:
    """Tests for reading fix lists."""

    def test_parse_pairs(self):
        """Each line is word=fix; repeated keys collect several fixes."""
        fix_list = FixList.load_text("teh=the\nrecieve=receive\n\nteh=ten\n")

        assert len(fix_list) == 2
        assert fix_list.get_fixes("TEH") == {
            SpellingFix("the", SpellingFixKind.PREDEFINED),
            SpellingFix("ten", SpellingFixKind.PREDEFINED),
        }

    def test_split_at_first_delimiter(self):
        """Only the first '=' separates the word from the fix."""
        fix_list = FixList.load_text("a=b=c")
        assert fix_list.get_fixes("a") == {SpellingFix("b=c", SpellingFixKind.PREDEFINED)}

    def test_missing_delimiter_is_fatal(self, tmp_path):
        """A line without '=' fails the whole load."""
        path = tmp_path / "fixes.fixlist"
        path.write_text("teh=the\nbroken line\n", encoding="utf-8")

        with pytest.raises(FixListFormatError) as exc_info:
            FixList.load(path)

        assert exc_info.value.line_number == 2
        assert exc_info.value.path == str(path)
        assert exc_info.value.to_dict()['error']['code'] == "FIX_LIST_FORMAT"

    def test_empty_side_is_fatal(self):
        """Both the word and the fix must be present."""
        with pytest.raises(FixListFormatError):
            FixList.load_text("=the")

    def test_missing_file_is_empty(self, tmp_path):
        """A missing fix list loads as empty."""
        assert len(FixList.load(tmp_path / "missing.fixlist")) == 0


class TestSaveAndMerge:
    """Tests for saving, merging and baseline subtraction."""

    def test_save_sorted_by_key(self, tmp_path):
        """Lines are written sorted by key."""
        path = tmp_path / "fixes.fixlist"
        FixList({
            "teh": [SpellingFix("the", SpellingFixKind.SWAP)],
            "adn": [SpellingFix("and", SpellingFixKind.SWAP)],
        }).save(path)

        assert path.read_text(encoding="utf-8") == "adn=and\nteh=the\n"

    def test_save_and_load(self, tmp_path):
        """Saved fixes load back as predefined fixes."""
        path = tmp_path / "fixes.fixlist"
        FixList({"teh": [SpellingFix("the", SpellingFixKind.SWAP)]}, path).save()

        loaded = FixList.load(path)

        assert loaded.get_fixes("teh") == {SpellingFix("the", SpellingFixKind.PREDEFINED)}

    def test_duplicate_fixes_collapse(self):
        """The same value and kind is stored once per key."""
        fix_list = FixList({"teh": [
            SpellingFix("the", SpellingFixKind.SWAP),
            SpellingFix("the", SpellingFixKind.SWAP),
        ]})
        assert len(fix_list.get_fixes("teh")) == 1

    def test_merge_unions_per_key(self):
        """Merging combines the fixes of equal keys."""
        first = FixList({"teh": [SpellingFix("the", SpellingFixKind.PREDEFINED)]})
        second = FixList({
            "TEH": [SpellingFix("ten", SpellingFixKind.SWAP)],
            "adn": [SpellingFix("and", SpellingFixKind.SWAP)],
        })

        merged = first.merge(second)

        assert len(merged) == 2
        assert {fix.value for fix in merged.get_fixes("teh")} == {"the", "ten"}
        assert len(first) == 1

    def test_except_baseline(self):
        """Fixes already in the baseline are dropped, ignoring case and kind."""
        current = FixList({
            "teh": [SpellingFix("the", SpellingFixKind.SWAP),
                    SpellingFix("ten", SpellingFixKind.SWAP)],
            "adn": [SpellingFix("and", SpellingFixKind.SWAP)],
        })
        baseline = FixList.load_text("teh=THE\nadn=and\n")

        result = current.except_baseline(baseline)

        assert result.keys() == ["teh"]
        assert result.get_fixes("teh") == {SpellingFix("ten", SpellingFixKind.SWAP)}

    def test_normalized(self):
        """Normalization lower-cases keys and values and removes duplicates."""
        fix_list = FixList({"Teh": [
            SpellingFix("The", SpellingFixKind.SWAP),
            SpellingFix("the", SpellingFixKind.FUZZY),
        ]})

        normalized = fix_list.normalized()

        assert normalized.keys() == ["teh"]
        assert normalized.get_fixes("teh") == {SpellingFix("the", SpellingFixKind.SWAP)}

    def test_add_returns_new_list(self):
        """add() leaves the original untouched."""
        original = FixList()
        updated = original.add("teh", SpellingFix("the", SpellingFixKind.USER))

        assert "teh" in updated
        assert "teh" not in original
