"""Tests for Alphabet byte mapping and classification."""

import pytest
from passgen.alphabet import (
    Alphabet,
    CharClass,
    DEFAULT_ALPHABET,
    DEFAULT_CHARACTERS,
    FULL_CHARACTERS,
)


class TestDefaultAlphabet:
    """Tests for the documented default alphabet."""

    def test_layout(self):
        """64 distinct characters split at 55."""
        assert len(DEFAULT_ALPHABET) == 64
        assert len(set(DEFAULT_CHARACTERS)) == 64
        assert DEFAULT_ALPHABET.split == 55
        assert DEFAULT_ALPHABET.special == "@#$%&()_+"
        assert DEFAULT_ALPHABET.plain == DEFAULT_CHARACTERS[:55]
        assert DEFAULT_ALPHABET.plain.isalnum()

    def test_confusable_glyphs_removed(self):
        """Easily confused letters are not in the default alphabet."""
        for c in "ilovIOU":
            assert c not in DEFAULT_CHARACTERS

    def test_special_probability(self):
        assert DEFAULT_ALPHABET.special_probability == 9 / 64

    def test_entropy_per_char(self):
        assert DEFAULT_ALPHABET.entropy_per_char == 6.0

    def test_mask(self):
        assert DEFAULT_ALPHABET.mask == 63


class TestMapping:
    """Tests for map_to_char and map_bytes."""

    def test_known_values(self):
        """Spot check the byte -> character contract."""
        assert DEFAULT_ALPHABET.map_to_char(0) == "a"
        assert DEFAULT_ALPHABET.map_to_char(54) == "9"
        assert DEFAULT_ALPHABET.map_to_char(55) == "@"
        assert DEFAULT_ALPHABET.map_to_char(63) == "+"
        assert DEFAULT_ALPHABET.map_to_char(64) == "a"
        assert DEFAULT_ALPHABET.map_to_char(119) == "@"
        assert DEFAULT_ALPHABET.map_to_char(255) == "+"

    def test_each_character_hit_four_times(self):
        """Exactly 256 / 64 byte values map to each character."""
        counts = {}
        for b in range(256):
            c = DEFAULT_ALPHABET.map_to_char(b)
            counts[c] = counts.get(c, 0) + 1
        assert set(counts) == set(DEFAULT_CHARACTERS)
        assert all(n == 4 for n in counts.values())

    def test_map_bytes_matches_map_to_char(self):
        """Table mapping agrees with per-byte mapping for every byte."""
        buffer = bytes(range(256))
        text = DEFAULT_ALPHABET.map_bytes(buffer)
        assert text == "".join(DEFAULT_ALPHABET.map_to_char(b) for b in range(256))

    def test_map_bytes_accepts_buffer_types(self):
        data = bytes([0, 55, 255])
        assert DEFAULT_ALPHABET.map_bytes(data) == "a@+"
        assert DEFAULT_ALPHABET.map_bytes(bytearray(data)) == "a@+"
        assert DEFAULT_ALPHABET.map_bytes(memoryview(data)) == "a@+"

    def test_out_of_range(self):
        with pytest.raises(ValueError):
            DEFAULT_ALPHABET.map_to_char(-1)
        with pytest.raises(ValueError):
            DEFAULT_ALPHABET.map_to_char(256)


class TestClassification:
    """Tests for raw-byte classification."""

    def test_classify_matches_mapped_range(self):
        """classify(b) is SPECIAL iff the mapped character is special."""
        for b in range(256):
            expected = DEFAULT_ALPHABET.map_to_char(b) in DEFAULT_ALPHABET.special
            assert DEFAULT_ALPHABET.is_special(b) == expected
            assert (DEFAULT_ALPHABET.classify(b) is CharClass.SPECIAL) == expected

    def test_classify_uses_reduced_byte(self):
        """High bytes classify by their low six bits, not the raw value."""
        assert DEFAULT_ALPHABET.classify(100) is CharClass.PLAIN  # 100 & 63 == 36
        assert DEFAULT_ALPHABET.classify(183) is CharClass.SPECIAL  # 183 & 63 == 55

    def test_threshold_follows_split(self):
        """Changing the split moves the classification boundary."""
        alphabet = Alphabet(DEFAULT_CHARACTERS, split=54)
        assert alphabet.is_special(54)
        assert not DEFAULT_ALPHABET.is_special(54)
        assert alphabet.special == "9@#$%&()_+"

    def test_classify_out_of_range(self):
        with pytest.raises(ValueError):
            DEFAULT_ALPHABET.classify(256)


class TestMapAndCount:
    """Tests for combined mapping and counting."""

    def test_full_count(self):
        text, count = DEFAULT_ALPHABET.map_and_count(bytes([0, 55, 56, 1, 127]))
        assert text == "a@#b+"
        assert count == 3

    def test_count_stops_at_quota(self):
        """Counting stops at the quota but every byte is still mapped."""
        text, count = DEFAULT_ALPHABET.map_and_count(bytes([55, 56, 57, 58, 0]), 2)
        assert text == "@#$%a"
        assert count == 2

    def test_zero_quota(self):
        text, count = DEFAULT_ALPHABET.map_and_count(bytes([55, 56]), 0)
        assert text == "@#"
        assert count == 0

    def test_quota_not_reached(self):
        _, count = DEFAULT_ALPHABET.map_and_count(bytes([0, 55, 1]), 3)
        assert count == 1

    def test_negative_quota(self):
        with pytest.raises(ValueError):
            DEFAULT_ALPHABET.map_and_count(bytes([55]), -1)
        with pytest.raises(ValueError):
            DEFAULT_ALPHABET.count_special_bytes(bytes([55]), -1)


class TestCountSpecialBytes:
    """Tests for counting specials from raw bytes."""

    def test_full_count(self):
        assert DEFAULT_ALPHABET.count_special_bytes(bytes([0, 55, 56, 1, 127])) == 3

    def test_stops_at_quota(self):
        assert DEFAULT_ALPHABET.count_special_bytes(bytearray([55, 56, 57, 58]), 2) == 2

    def test_zero_quota(self):
        assert DEFAULT_ALPHABET.count_special_bytes(bytes([55, 56]), 0) == 0

    def test_memoryview(self):
        data = bytearray([0, 55, 183, 100])
        assert DEFAULT_ALPHABET.count_special_bytes(memoryview(data)) == 2
        assert DEFAULT_ALPHABET.count_special_bytes(memoryview(data)[2:]) == 1

    def test_agrees_with_mapped_text(self):
        data = bytes(range(256))
        count = DEFAULT_ALPHABET.count_special_bytes(data)
        assert count == DEFAULT_ALPHABET.count_special(DEFAULT_ALPHABET.map_bytes(data))
        assert count == 4 * 9


class TestHelpers:
    """Tests for text helpers."""

    def test_count_special(self):
        assert DEFAULT_ALPHABET.count_special("ab@#9") == 2
        assert DEFAULT_ALPHABET.count_special("") == 0

    def test_contains(self):
        assert DEFAULT_ALPHABET.contains("abc@+")
        assert not DEFAULT_ALPHABET.contains("abc!")
        assert not DEFAULT_ALPHABET.contains("l")


class TestAlphabetErrors:
    """Test validation."""

    def test_size_must_divide_256(self):
        """The 74-character set cannot be byte-mapped without bias."""
        with pytest.raises(ValueError):
            Alphabet(FULL_CHARACTERS)
        with pytest.raises(ValueError):
            Alphabet("a")

    def test_duplicates(self):
        with pytest.raises(ValueError):
            Alphabet("aa@+")

    def test_non_printable(self):
        with pytest.raises(ValueError):
            Alphabet("ab\n+")
        with pytest.raises(ValueError):
            Alphabet("ab +")
        with pytest.raises(ValueError):
            Alphabet("abé+")

    def test_no_specials(self):
        with pytest.raises(ValueError):
            Alphabet("abcd")

    def test_specials_not_contiguous(self):
        with pytest.raises(ValueError):
            Alphabet("a@b+")

    def test_split_out_of_range(self):
        with pytest.raises(ValueError):
            Alphabet("ab@+", split=0)
        with pytest.raises(ValueError):
            Alphabet("ab@+", split=4)

    def test_small_alphabet(self):
        """Any power of two works; the derived split is the first symbol."""
        alphabet = Alphabet("ab@+")
        assert alphabet.split == 2
        assert alphabet.map_to_char(6) == "@"
        assert alphabet.special_probability == 0.5

    def test_immutable(self):
        with pytest.raises(AttributeError):
            DEFAULT_ALPHABET.split = 10


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
