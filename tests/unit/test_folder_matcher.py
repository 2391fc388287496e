import pytest

from docfiler.filing.folder_matcher import find_best_match, similarity


class TestSimilarity:
    def test_identical_strings_score_one(self) -> None:
        assert similarity("w-2s", "w-2s") == 1.0

    def test_whitespace_is_ignored(self) -> None:
        assert similarity("tax returns", "taxreturns") == 1.0

    def test_disjoint_strings_score_zero(self) -> None:
        assert similarity("abc", "xyz") == 0.0

    def test_single_character_scores_zero_unless_equal(self) -> None:
        assert similarity("a", "ab") == 0.0

    def test_score_is_symmetric(self) -> None:
        assert similarity("notices", "notice") == pytest.approx(similarity("notice", "notices"))

    def test_partial_overlap_scores_between_zero_and_one(self) -> None:
        score = similarity("01 - tax returns", "01 - tax returns & extensions")
        assert 0.5 < score < 1.0


class TestFindBestMatch:
    FOLDERS = [
        "01 - Tax Returns & Extensions",
        "02 - Source Documents",
        "03 - Tax Planning & Projections",
    ]

    def test_matches_abbreviated_name(self) -> None:
        match = find_best_match("02 - Source Docs", self.FOLDERS)
        assert match is not None
        assert match.name == "02 - Source Documents"
        assert match.index == 1

    def test_is_case_insensitive(self) -> None:
        match = find_best_match("W-2S", ["1099s", "W-2s", "K-1s"])
        assert match is not None
        assert match.name == "W-2s"

    def test_returns_none_without_candidates(self) -> None:
        assert find_best_match("2024", []) is None

    def test_returns_none_below_threshold(self) -> None:
        assert find_best_match("Correspondence", ["2023", "2024"], threshold=0.4) is None

    def test_returns_none_when_nothing_overlaps(self) -> None:
        assert find_best_match("zzz", ["abc"]) is None

    def test_ties_resolve_to_first_candidate(self) -> None:
        match = find_best_match("drafts", ["Drafts", "DRAFTS"])
        assert match is not None
        assert match.index == 0

    def test_repeated_calls_return_same_match(self) -> None:
        first = find_best_match("Final Filed", ["Drafts", "Final Filed Return", "Filed"])
        second = find_best_match("Final Filed", ["Drafts", "Final Filed Return", "Filed"])
        assert first == second
