"""
Random string samplers with an unbiased minimum-special quota.

QuotaSampler draws a whole candidate, counts its special characters and
either accepts it or throws it away and draws again:

    loop:
        fill(buffer)                          // N fresh bytes
        count = count_special_bytes(buffer)   // raw bytes, stops at K
        if count >= K: return map(buffer)     // accept, map once
                                              // else reject, no reuse

Rejection conditions on the event "count >= K" without reweighting the
outcomes that survive, so every accepted string is distributed exactly as a
uniform string restricted to that event. Forcing K special positions and
shuffling does not have this property: it overweights strings with exactly
K specials. With three coins and "at least one tails", forcing one tails
gives TTT probability 1/4 instead of 1/7.

Expected attempts are 1 / P(X >= K) with X ~ Binomial(N, p) and
p = len(special) / len(alphabet).
"""

import logging
import math
import random
import secrets
from functools import lru_cache

from .alphabet import Alphabet, DEFAULT_ALPHABET
from .params import SampleRequest, validate_request
from .protocols import ByteSource
from .sources import source_for
from .stats import expected_attempts

logger = logging.getLogger(__name__)

# Log a warning when a quota needs more than this many attempts on average.
WARN_EXPECTED_ATTEMPTS = 1000


class QuotaNotMetError(RuntimeError):
    """No candidate met the quota within the configured attempt cap."""


@lru_cache(maxsize=256)
def _check_quota(length: int, minimum_special: int, p: float) -> float:
    """
    Warn once per configuration when a quota is improbable.

    Diagnostic only: a numerical failure here is logged and never stops
    sampling.
    """
    try:
        attempts = expected_attempts(length, minimum_special, p)
    except (OverflowError, ValueError) as e:
        logger.debug(f"Skipped quota check for length={length} quota={minimum_special}: {e}")
        return math.nan
    if attempts > WARN_EXPECTED_ATTEMPTS:
        logger.warning(
            f"minimum_special={minimum_special} for length={length} needs "
            f"~{attempts:.3g} attempts on average (special probability {p:.4f})"
        )
    return attempts


def _check_max_attempts(max_attempts: int | None) -> None:
    if max_attempts is not None and max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")


class UnconstrainedSampler:
    """
    Sampler without a quota.

    One fill per call, no retries.
    """

    def __init__(self, source: ByteSource, alphabet: Alphabet = DEFAULT_ALPHABET):
        self.source = source
        self.alphabet = alphabet

    def sample(self, length: int) -> str:
        """
        Draw a string of the given length.

        Args:
            length: Number of characters (0 returns "" without a fill)

        Returns:
            String of uniformly drawn alphabet characters
        """
        if length < 0:
            raise ValueError("length must be non-negative")
        if length == 0:
            return ""

        buffer = bytearray(length)
        self.source.fill(buffer)
        return self.alphabet.map_bytes(buffer)


class QuotaSampler:
    """
    Sampler enforcing a minimum count of special characters.

    The byte buffer is allocated once per call and overwritten on every
    attempt. The loop is unbounded unless max_attempts is set, in which case
    running out of attempts raises QuotaNotMetError.
    """

    def __init__(
        self,
        source: ByteSource,
        alphabet: Alphabet = DEFAULT_ALPHABET,
        max_attempts: int | None = None,
    ):
        """
        Initialize sampler.

        Args:
            source: Byte source to draw from
            alphabet: Alphabet to map bytes into
            max_attempts: Optional cap on fills per call
        """
        _check_max_attempts(max_attempts)
        self.source = source
        self.alphabet = alphabet
        self.max_attempts = max_attempts

    def expected_attempts(self, length: int, minimum_special: int) -> float:
        """Mean number of fills needed for (length, minimum_special)."""
        return expected_attempts(length, minimum_special, self.alphabet.special_probability)

    def sample(self, length: int, minimum_special: int = 0) -> str:
        """
        Draw a string with at least minimum_special special characters.

        Args:
            length: Number of characters, at least 1
            minimum_special: Quota, 0 <= minimum_special <= length

        Returns:
            Accepted string

        Raises:
            ValueError: Invalid request (raised before any fill)
            QuotaNotMetError: max_attempts fills were all rejected
        """
        text, _ = self.sample_with_attempts(length, minimum_special)
        return text

    def sample_with_attempts(self, length: int, minimum_special: int = 0) -> tuple[str, int]:
        """
        Same as sample(), also returning the number of fills this call used.

        The count belongs to the call, so concurrent calls on one sampler
        each see their own.

        Returns:
            (accepted string, attempts)
        """
        validate_request(length, minimum_special)
        if minimum_special > 0:
            _check_quota(length, minimum_special, self.alphabet.special_probability)

        buffer = bytearray(length)
        attempts = 0
        while self.max_attempts is None or attempts < self.max_attempts:
            attempts += 1
            self.source.fill(buffer)
            # Rejected candidates are decided from raw bytes and never mapped.
            if self.alphabet.count_special_bytes(buffer, minimum_special) >= minimum_special:
                logger.debug(f"Accepted length={length} quota={minimum_special} after {attempts} attempt(s)")
                return self.alphabet.map_bytes(buffer), attempts

        raise QuotaNotMetError(
            f"No sample of length {length} with {minimum_special} special "
            f"characters in {self.max_attempts} attempts"
        )


class CharsetSampler:
    """
    Sampler over an arbitrary charset.

    Draws each index with rng.randrange(size), which is unbiased for any
    size, so charsets that do not divide 256 (such as the 74-character
    FULL_CHARACTERS) are usable. Slower than the byte-mapped samplers: one
    generator call per character instead of one fill per attempt.

    The same whole-sample rejection rule enforces the quota.
    """

    def __init__(
        self,
        characters: str,
        rng: random.Random | None = None,
        special: str | None = None,
        max_attempts: int | None = None,
    ):
        """
        Initialize sampler.

        Args:
            characters: Distinct characters to draw from (at least 2)
            rng: Object with randrange(); defaults to secrets.SystemRandom()
            special: Characters counted toward the quota. Defaults to the
                non-alphanumeric characters of the charset.
            max_attempts: Optional cap on candidates per call
        """
        if len(characters) < 2:
            raise ValueError("charset must have at least 2 characters")
        if len(set(characters)) != len(characters):
            raise ValueError("charset characters must be distinct")
        if special is None:
            special = "".join(c for c in characters if not c.isalnum())
        if not set(special) <= set(characters):
            raise ValueError("special characters must belong to the charset")
        _check_max_attempts(max_attempts)

        self.characters = characters
        self.special = frozenset(special)
        self.max_attempts = max_attempts
        self._rng = rng if rng is not None else secrets.SystemRandom()

    @property
    def special_probability(self) -> float:
        """Probability that one draw is a special character."""
        return len(self.special) / len(self.characters)

    def sample(self, length: int, minimum_special: int = 0) -> str:
        """Draw a string with at least minimum_special special characters."""
        validate_request(length, minimum_special)
        if minimum_special > 0:
            if not self.special:
                raise ValueError("charset has no special characters")
            _check_quota(length, minimum_special, self.special_probability)

        chars = [""] * length
        size = len(self.characters)
        attempts = 0
        while self.max_attempts is None or attempts < self.max_attempts:
            attempts += 1
            count = 0
            for i in range(length):
                c = self.characters[self._rng.randrange(size)]
                chars[i] = c
                if c in self.special:
                    count += 1
            if count >= minimum_special:
                return "".join(chars)

        raise QuotaNotMetError(
            f"No sample of length {length} with {minimum_special} special "
            f"characters in {self.max_attempts} attempts"
        )


def generate(
    length: int,
    minimum_special: int,
    source: ByteSource,
    alphabet: Alphabet = DEFAULT_ALPHABET,
) -> str:
    """
    Generate a random string with a minimum special-character quota.

    Postconditions:
    - len(result) == length
    - alphabet.count_special(result) >= minimum_special
    - every character of result belongs to alphabet

    Args:
        length: Number of characters, at least 1
        minimum_special: Quota, 0 <= minimum_special <= length
        source: Byte source to draw from
        alphabet: Alphabet to map into

    Returns:
        Accepted string
    """
    return QuotaSampler(source, alphabet).sample(length, minimum_special)


def generate_password(request: SampleRequest, alphabet: Alphabet = DEFAULT_ALPHABET) -> str:
    """Generate a string for a request, using the shared source for its mode."""
    return generate(request.length, request.minimum_special, source_for(request.mode), alphabet)
