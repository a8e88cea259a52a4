"""
Analysis helpers for the samplers.

Includes:
- Binomial quota math: acceptance probability, expected attempts, and the
  distribution of special counts among accepted samples
- Empirical checks: frequency histograms and the chi-squared statistic
- modulo_histogram, showing the bias of byte % size when size does not
  divide 256
- entropy_bits for comparing alphabets
"""

import math
from collections.abc import Iterable

from .alphabet import Alphabet
from .protocols import ByteSource


def _log_binomial_pmf(n: int, k: int, p: float) -> float:
    """log P(X == k) for X ~ Binomial(n, p); -inf when impossible."""
    # lgamma stays finite where float(comb(n, k)) overflows.
    if p == 0.0:
        return 0.0 if k == 0 else -math.inf
    if p == 1.0:
        return 0.0 if k == n else -math.inf
    return (
        math.lgamma(n + 1)
        - math.lgamma(k + 1)
        - math.lgamma(n - k + 1)
        + k * math.log(p)
        + (n - k) * math.log1p(-p)
    )


def _binomial_pmf(n: int, k: int, p: float) -> float:
    return math.exp(_log_binomial_pmf(n, k, p))


def _check_binomial(length: int, minimum_special: int, p: float) -> None:
    if length < 0:
        raise ValueError("length must be non-negative")
    if not 0 <= minimum_special <= length:
        raise ValueError(f"minimum_special must be in [0, {length}]")
    if not 0.0 <= p <= 1.0:
        raise ValueError(f"p must be in [0, 1], got {p}")


def quota_probability(length: int, minimum_special: int, p: float) -> float:
    """
    Probability that one candidate meets the quota.

    P(X >= K) for X ~ Binomial(length, p). At or below the mean the lower
    tail is summed and subtracted from 1; above it the upper tail is summed
    directly, so small probabilities keep their precision.
    """
    _check_binomial(length, minimum_special, p)
    if minimum_special == 0:
        return 1.0
    if minimum_special <= length * p:
        lower = sum(_binomial_pmf(length, k, p) for k in range(minimum_special))
        total = 1.0 - lower
    else:
        total = sum(_binomial_pmf(length, k, p) for k in range(minimum_special, length + 1))
    return max(0.0, min(total, 1.0))


def expected_attempts(length: int, minimum_special: int, p: float) -> float:
    """
    Mean number of candidates drawn before one is accepted.

    Attempts are geometric with success probability quota_probability(),
    so the mean is its reciprocal. Returns math.inf if no candidate can
    ever be accepted.
    """
    prob = quota_probability(length, minimum_special, p)
    if prob == 0.0:
        return math.inf
    return 1.0 / prob


def accepted_count_distribution(length: int, minimum_special: int, p: float) -> list[float]:
    """
    Distribution of the special count among accepted samples.

    The binomial pmf truncated to [minimum_special, length] and
    renormalized. Index i holds P(count == minimum_special + i).
    Normalization is done in log space, so deep tails do not underflow.
    """
    _check_binomial(length, minimum_special, p)
    logs = [_log_binomial_pmf(length, k, p) for k in range(minimum_special, length + 1)]
    peak = max(logs)
    if peak == -math.inf:
        raise ValueError("quota can never be met")
    weights = [math.exp(x - peak) for x in logs]
    total = sum(weights)
    return [w / total for w in weights]


def frequency_histogram(samples: Iterable[str], alphabet: Alphabet | str) -> dict[str, int]:
    """
    Count occurrences of each alphabet character.

    Args:
        samples: A string or an iterable of strings
        alphabet: Alphabet or plain string of characters

    Returns:
        Mapping from every alphabet character to its count (zeros included)

    Raises:
        ValueError: A sample contains a character outside the alphabet
    """
    characters = alphabet.characters if isinstance(alphabet, Alphabet) else alphabet
    counts = dict.fromkeys(characters, 0)
    if isinstance(samples, str):
        samples = [samples]
    for text in samples:
        for c in text:
            if c not in counts:
                raise ValueError(f"character {c!r} is not in the alphabet")
            counts[c] += 1
    return counts


def chi_squared(observed: list[int], expected: list[float] | float | None = None) -> float:
    """
    Pearson's chi-squared statistic.

    Args:
        observed: Observed counts per category
        expected: Expected counts per category, a single expected count
            shared by every category, or None for a uniform expectation

    Returns:
        sum((o - e)^2 / e)
    """
    if not observed:
        raise ValueError("observed must be non-empty")
    if expected is None:
        expected = sum(observed) / len(observed)
    if isinstance(expected, (int, float)):
        expected = [float(expected)] * len(observed)
    if len(expected) != len(observed):
        raise ValueError(f"Length mismatch: {len(observed)} vs {len(expected)}")
    if any(e <= 0 for e in expected):
        raise ValueError("expected counts must be positive")
    return sum((o - e) ** 2 / e for o, e in zip(observed, expected))


def modulo_histogram(size: int, source: ByteSource, draws: int, chunk_size: int = 4096) -> list[int]:
    """
    Count byte % size over draws random bytes.

    When size divides 256 every bucket is equally likely. Otherwise the
    first 256 % size buckets receive one extra byte value each; for size 74
    that is 4 values instead of 3, about 16300 vs 12200 hits per million.

    Args:
        size: Number of buckets (1-256)
        source: Byte source to draw from
        draws: Number of bytes to draw
        chunk_size: Bytes per fill

    Returns:
        List of size counts
    """
    if not 1 <= size <= 256:
        raise ValueError(f"size must be in [1, 256], got {size}")
    if draws < 0:
        raise ValueError("draws must be non-negative")
    if chunk_size < 1:
        raise ValueError("chunk_size must be at least 1")

    counts = [0] * size
    buffer = bytearray(min(chunk_size, draws))
    remaining = draws
    while remaining > 0:
        view = memoryview(buffer)[: min(remaining, len(buffer))]
        source.fill(view)
        for b in view:
            counts[b % size] += 1
        remaining -= len(view)
    return counts


def entropy_bits(alphabet_size: int, length: int = 1) -> float:
    """Entropy in bits of length uniform draws from alphabet_size characters."""
    if alphabet_size < 1:
        raise ValueError("alphabet_size must be at least 1")
    if length < 0:
        raise ValueError("length must be non-negative")
    return length * math.log2(alphabet_size)
