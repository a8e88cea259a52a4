"""
Alphabets with zero-bias byte mapping.

An alphabet is an ordered set of characters whose size divides 256. Any
byte value b maps to characters[b & (size - 1)], and exactly 256 / size
byte values land on each character, so a uniform byte gives a uniform
character with no modulo bias.

The alphabet is split at index `split` into two contiguous ranges:
- plain: characters[:split] (letters and digits)
- special: characters[split:] (symbols)

Because the ranges are contiguous, whether a byte maps to a special
character is decided from the raw byte with one mask-and-compare,
(b & mask) >= split, without looking at the mapped character. Both the
mapping and the classification are precomputed as 256-entry tables.
"""

import math
from dataclasses import dataclass, field
from enum import Enum


# 22 lowercase (no i, l, o, v), 23 uppercase (no I, O, U), 10 digits,
# 9 symbols. Split at 55: indices 55-63 are special.
DEFAULT_CHARACTERS = "abcdefghjkmnpqrstuwxyzABCDEFGHJKLMNPQRSTVWXYZ0123456789@#$%&()_+"

# 74 characters. Does not divide 256; only usable with CharsetSampler.
FULL_CHARACTERS = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789!@#$%^&*()_+"


class CharClass(Enum):
    """Class of an alphabet position."""

    PLAIN = "plain"
    SPECIAL = "special"


def _derive_split(characters: str) -> int:
    """Index of the first symbol; everything before must be alphanumeric."""
    for i, c in enumerate(characters):
        if not c.isalnum():
            break
    else:
        raise ValueError("alphabet has no special characters")

    if any(not c.isalnum() for c in characters[:i]) or any(c.isalnum() for c in characters[i:]):
        raise ValueError(
            "special characters must form one contiguous range at the end of the alphabet"
        )
    return i


@dataclass(frozen=True)
class Alphabet:
    """Immutable alphabet of power-of-two size with a plain/special split."""

    characters: str
    split: int | None = None  # Defaults to the index of the first symbol

    _translation: bytes = field(init=False, repr=False, compare=False)
    _special_flags: bytes = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        size = len(self.characters)
        # SEC: size must divide 256 or byte & mask is biased.
        if size < 2 or size > 256 or (size & (size - 1)) != 0:
            raise ValueError(f"alphabet size must be a power of 2 in [2, 256], got {size}")
        if len(set(self.characters)) != size:
            raise ValueError("alphabet characters must be distinct")
        for c in self.characters:
            if not (c.isascii() and c.isprintable()) or c.isspace():
                raise ValueError(f"alphabet character {c!r} is not printable ASCII")

        if self.split is None:
            object.__setattr__(self, "split", _derive_split(self.characters))
        elif not 0 < self.split < size:
            raise ValueError(f"split must be in (0, {size}), got {self.split}")

        mask = size - 1
        object.__setattr__(
            self,
            "_translation",
            bytes(ord(self.characters[b & mask]) for b in range(256)),
        )
        object.__setattr__(
            self,
            "_special_flags",
            bytes(1 if (b & mask) >= self.split else 0 for b in range(256)),
        )

    def __len__(self) -> int:
        return len(self.characters)

    @property
    def mask(self) -> int:
        """Bit mask reducing a byte to an index (size - 1)."""
        return len(self.characters) - 1

    @property
    def plain(self) -> str:
        """Plain characters, indices [0, split)."""
        return self.characters[: self.split]

    @property
    def special(self) -> str:
        """Special characters, indices [split, size)."""
        return self.characters[self.split :]

    @property
    def special_probability(self) -> float:
        """Probability that a uniform byte maps to a special character."""
        return len(self.special) / len(self.characters)

    @property
    def entropy_per_char(self) -> float:
        """Bits of entropy delivered by one uniformly drawn character."""
        return math.log2(len(self.characters))

    def classify(self, byte_value: int) -> CharClass:
        """
        Classify a raw byte before mapping.

        Returns CharClass.SPECIAL iff (byte_value & mask) >= split.
        """
        if self.is_special(byte_value):
            return CharClass.SPECIAL
        return CharClass.PLAIN

    def is_special(self, byte_value: int) -> bool:
        """Return True if byte_value maps into the special range."""
        if not 0 <= byte_value <= 255:
            raise ValueError(f"byte value {byte_value} out of range [0, 255]")
        return self._special_flags[byte_value] == 1

    def map_to_char(self, byte_value: int) -> str:
        """Map one byte to its character, characters[byte_value & mask]."""
        if not 0 <= byte_value <= 255:
            raise ValueError(f"byte value {byte_value} out of range [0, 255]")
        return self.characters[byte_value & self.mask]

    def map_bytes(self, buffer: bytes | bytearray | memoryview) -> str:
        """Map every byte of buffer through the translation table."""
        if isinstance(buffer, memoryview):
            buffer = buffer.tobytes()
        return buffer.translate(self._translation).decode("ascii")

    def count_special_bytes(self, buffer: bytes | bytearray | memoryview, quota: int | None = None) -> int:
        """
        Count bytes that map into the special range, without mapping them.

        The count runs left to right over the raw bytes and stops once it
        reaches quota.

        Args:
            buffer: Raw random bytes
            quota: Stop counting at this many specials. None counts all.

        Returns:
            Special count, capped at quota
        """
        if quota is not None and quota < 0:
            raise ValueError("quota must be non-negative")
        if quota == 0:
            return 0

        flags = self._special_flags
        count = 0
        for b in buffer:
            if flags[b]:
                count += 1
                if count == quota:
                    break
        return count

    def map_and_count(self, buffer: bytes | bytearray | memoryview, quota: int | None = None) -> tuple[str, int]:
        """
        Map a buffer and count its special bytes.

        Mapping always covers every byte; the count is taken from the raw
        bytes and stops once it reaches quota.

        Args:
            buffer: Raw random bytes
            quota: Stop counting at this many specials. None counts all.

        Returns:
            (mapped text, special count capped at quota)
        """
        count = self.count_special_bytes(buffer, quota)
        return self.map_bytes(buffer), count

    def count_special(self, text: str) -> int:
        """Count characters of text that fall in the special range."""
        special = set(self.special)
        return sum(1 for c in text if c in special)

    def contains(self, text: str) -> bool:
        """Return True if every character of text belongs to the alphabet."""
        members = set(self.characters)
        return all(c in members for c in text)


DEFAULT_ALPHABET = Alphabet(DEFAULT_CHARACTERS)
