# ABOUTME: Unit tests for product name extraction from noisy search titles.
# ABOUTME: Covers segmenting, listing cleanup, casing restoration, and the reduction itself.

from shelfie.matching.product_name import (
    clean_listing_title,
    extract_product_name,
    meaningful_segments,
    restore_capitalization,
)

PS5_NAMES = [
    "Sony PS5 Console - 825GB",
    "PS5 Console 825GB Sony",
    "sony ps5 console 825gb",
]


class TestExtractProductName:
    """Tests for reducing raw titles to one product name."""

    def test_empty_list_gives_empty_string(self) -> None:
        assert extract_product_name([]) == ""

    def test_only_empty_names_give_empty_string(self) -> None:
        assert extract_product_name(["", ""]) == ""

    def test_single_name_is_whitespace_normalized(self) -> None:
        assert extract_product_name(["  The Witcher 3   Wild Hunt "]) == "The Witcher 3 Wild Hunt"

    def test_single_name_keeps_its_own_casing(self) -> None:
        assert extract_product_name(["Random Access Memories"]) == "Random Access Memories"

    def test_ps5_titles_reduce_to_short_product_name(self) -> None:
        """The shared product words survive and the name is shorter than any title."""
        result = extract_product_name(PS5_NAMES)
        words = result.split()

        assert "PS5" in words
        assert "Console" in words
        assert len(result) < min(len(name) for name in PS5_NAMES)

    def test_result_is_deterministic(self) -> None:
        assert extract_product_name(PS5_NAMES) == extract_product_name(list(PS5_NAMES))

    def test_falls_back_to_frequent_words(self) -> None:
        """Titles with nothing in common fall back to their most frequent words."""
        assert extract_product_name(["Abcdef", "Uvwxyz"]) == "Abcdef Uvwxyz"

    def test_empty_entries_are_ignored(self) -> None:
        assert extract_product_name(["", "Catan"]) == "Catan"


class TestMeaningfulSegments:
    """Tests for candidate segment generation."""

    def test_splits_on_separators(self) -> None:
        segments = meaningful_segments("sony ps5 - 825gb")
        assert "sony ps5" in segments
        assert "825gb" in segments

    def test_full_text_is_last(self) -> None:
        text = "the witcher 3: wild hunt"
        assert meaningful_segments(text)[-1] == text

    def test_word_runs_need_two_words(self) -> None:
        segments = meaningful_segments("ps5 console 825gb sony")
        assert "console 825gb" in segments
        assert "console" not in segments

    def test_short_word_runs_are_skipped(self) -> None:
        """Runs of five characters or fewer are not segments."""
        segments = meaningful_segments("a b c d")
        assert "a b" not in segments
        assert "a b c" not in segments


class TestCleanListingTitle:
    """Tests for stripping retail listing noise."""

    def test_removes_site_suffix(self) -> None:
        assert clean_listing_title("Console PS5 Sony | Fnac") == "Console PS5 Sony"

    def test_removes_parenthesized_text(self) -> None:
        assert clean_listing_title("Catan (Edition 2022) Jeu de base") == "Catan Jeu de base"

    def test_removes_promotional_phrases(self) -> None:
        assert clean_listing_title("Dune Neuf au meilleur prix") == "Dune"

    def test_collapses_whitespace(self) -> None:
        assert clean_listing_title("  Random   Access  Memories ") == "Random Access Memories"


class TestRestoreCapitalization:
    """Tests for re-casing a reduced name."""

    def test_majority_casing_wins(self) -> None:
        raw = ["Sony PS5 Console", "sony ps5 console", "PS5 Console"]
        assert restore_capitalization("ps5 console", raw) == "PS5 Console"

    def test_first_word_is_capitalized(self) -> None:
        assert restore_capitalization("war and peace", []) == "War and Peace"

    def test_minor_words_stay_lower_case(self) -> None:
        assert restore_capitalization("guide to the galaxy", []) == "Guide to the Galaxy"

    def test_short_upper_case_tokens_are_kept(self) -> None:
        assert restore_capitalization("console PS5", []) == "Console PS5"

    def test_unseen_lower_case_words_get_title_case(self) -> None:
        assert restore_capitalization("sony ps5", []) == "Sony Ps5"
