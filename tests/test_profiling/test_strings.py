"""Tests for string field pattern analysis."""

from __future__ import annotations

from fieldlens.profiling.strings import (
    analyze_case,
    analyze_character_composition,
    compute_length_stats,
    compute_string_stats,
    detect_formats,
    detect_prefixes,
    detect_suffixes,
)


class TestLengthStats:
    def test_lengths(self) -> None:
        result = compute_length_stats(["ab", "abc", "ab"])
        assert result.min == 2
        assert result.max == 3
        assert result.average == 2.33
        assert result.most_common == 2
        assert result.most_common_count == 2
        assert result.distribution == {2: 2, 3: 1}


class TestAffixes:
    def test_shared_prefixes(self) -> None:
        prefixes = detect_prefixes(["INV-001", "INV-002", "INV-003"])
        assert [p.text for p in prefixes] == ["IN", "INV", "INV-", "INV-0", "INV-00"]
        assert prefixes[0].count == 3
        assert prefixes[0].percentage == 100.0

    def test_shared_suffix(self) -> None:
        suffixes = detect_suffixes(["file.csv", "data.csv"])
        assert any(s.text == ".csv" and s.count == 2 for s in suffixes)

    def test_single_occurrences_dropped(self) -> None:
        assert detect_prefixes(["abc", "xyz"]) == []


class TestCharacterComposition:
    def test_classes(self) -> None:
        result = analyze_character_composition(["ab 1"])
        assert result.alphanumeric_percentage == 75.0
        assert result.alphabetic_percentage == 50.0
        assert result.numeric_percentage == 25.0
        assert result.whitespace_percentage == 25.0
        assert result.special_char_percentage == 0.0

    def test_non_ascii_counted_as_special(self) -> None:
        result = analyze_character_composition(["é"])
        assert result.special_char_percentage == 100.0
        assert result.non_ascii_count == 1

    def test_surrounding_whitespace(self) -> None:
        result = analyze_character_composition([" a", "b "])
        assert result.leading_whitespace_count == 1
        assert result.trailing_whitespace_count == 1


class TestCaseAnalysis:
    def test_case_counts(self) -> None:
        result = analyze_case(["ABC", "abc", "Hello World", "hello World", "123"])
        assert result.uppercase_count == 1
        assert result.lowercase_count == 1
        assert result.mixed_case_count == 2
        assert result.title_case_count == 1
        assert result.uppercase_percentage == 20.0


class TestFormatDetection:
    def test_email(self) -> None:
        result = compute_string_stats(["user@example.com", "not-an-email"])
        email = result.format_detection.email
        assert email.count == 1
        assert email.percentage == 50.0
        assert email.samples == ["user@example.com"]

    def test_url(self) -> None:
        result = detect_formats(["https://example.com/path", "example.org", "hello"])
        assert result.url.count == 2

    def test_phone_countries(self) -> None:
        result = detect_formats(["555-123-4567", "+44 1234 567890"])
        assert result.phone.count == 2
        assert result.phone.breakdown == {"US": 1, "UK": 1}

    def test_national_id_only_without_phone_match(self) -> None:
        result = detect_formats(["123-45-6789", "555-123-4567"])
        assert result.national_id.count == 1
        assert result.national_id.breakdown == {"US": 1}
        assert result.phone.count == 1

    def test_date_strings(self) -> None:
        result = detect_formats(["2024-01-15", "01/15/2024", "March 5, 2024", "soon"])
        assert result.date_string.count == 3
        assert result.date_string.breakdown == {
            "ISO 8601": 1,
            "US format": 1,
            "Long format": 1,
        }

    def test_samples_capped(self) -> None:
        values = [f"user{i}@example.com" for i in range(8)]
        assert len(detect_formats(values).email.samples) == 5


class TestComputeStringStats:
    def test_counts_nulls(self) -> None:
        result = compute_string_stats(["a", None, "", "b"])
        assert result.is_string
        assert result.value_count == 2
        assert result.null_count == 2

    def test_no_values(self) -> None:
        result = compute_string_stats([None, ""])
        assert not result.is_string
        assert result.null_count == 2
        assert result.length_stats is None
