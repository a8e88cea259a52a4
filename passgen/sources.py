"""
Byte sources for the samplers.

Includes:
- SecureByteSource: OS CSPRNG via pycryptodome, for production passwords
- FastByteSource: Mersenne Twister, statistically uniform but predictable
- SeededByteSource: SHAKE-256 counter mode, deterministic for test vectors
- Shared per-process instances and source_for() to pick one by Mode

SEC: Only SecureByteSource is suitable for secrets. FastByteSource exists so
the cost of the secure fill can be compared against a cheap one.
"""

import hashlib
import random
import threading

from Crypto.Random import get_random_bytes

from .params import Mode
from .protocols import ByteSource


class ByteSourceError(RuntimeError):
    """The underlying generator did not deliver the requested bytes."""


def _write(buffer: bytearray | memoryview, data: bytes) -> None:
    if len(data) != len(buffer):
        raise ByteSourceError(
            f"Entropy source returned {len(data)} bytes, expected {len(buffer)}"
        )
    buffer[:] = data


class SecureByteSource:
    """
    Cryptographically secure byte source.

    Backed by Crypto.Random.get_random_bytes, which reads the operating
    system CSPRNG. Holds no state, so one instance can be shared freely
    between threads.
    """

    def fill(self, buffer: bytearray | memoryview) -> None:
        """Overwrite buffer with bytes from the OS CSPRNG."""
        n = len(buffer)
        if n == 0:
            return
        _write(buffer, get_random_bytes(n))

    def __repr__(self) -> str:
        return "SecureByteSource()"


class FastByteSource:
    """
    Fast, non-cryptographic byte source.

    Uses random.Random (Mersenne Twister). Output is uniform but its
    internal state can be recovered from observed output.

    A lock serializes access to the generator, so a single instance may be
    shared between threads.
    """

    def __init__(self, seed: int | None = None):
        """
        Initialize the generator.

        Args:
            seed: Optional seed for reproducible output. If None, the
                generator is seeded from OS entropy.
        """
        self._rng = random.Random(seed)
        self._lock = threading.Lock()

    def fill(self, buffer: bytearray | memoryview) -> None:
        """Overwrite buffer with Mersenne Twister output."""
        n = len(buffer)
        if n == 0:
            return
        with self._lock:
            data = self._rng.randbytes(n)
        _write(buffer, data)

    def __repr__(self) -> str:
        return "FastByteSource()"


class SeededByteSource:
    """
    Deterministic byte source using SHAKE-256 in counter mode.

    Same seed produces the same sequence of fills. Each call to fill()
    derives its output from the seed and an internal counter, so fills of
    different sizes never overlap.
    """

    def __init__(self, seed: bytes):
        """
        Initialize with a seed.

        Args:
            seed: Seed bytes (any length, at least one byte)
        """
        if not seed:
            raise ValueError("seed must be non-empty")
        self._seed = bytes(seed)
        self._counter = 0
        self._lock = threading.Lock()

    @property
    def fills(self) -> int:
        """Number of fill() calls served so far."""
        return self._counter

    def fill(self, buffer: bytearray | memoryview) -> None:
        """Overwrite buffer with the next block of the SHAKE-256 stream."""
        with self._lock:
            counter = self._counter
            self._counter += 1
        n = len(buffer)
        if n == 0:
            return
        data = hashlib.shake_256(
            self._seed + counter.to_bytes(8, "little")
        ).digest(n)
        _write(buffer, data)

    def __repr__(self) -> str:
        return f"SeededByteSource(fills={self._counter})"


# Process-wide instances, created once at import and never replaced.
_secure_source = SecureByteSource()
_fast_source = FastByteSource()


def secure_source() -> SecureByteSource:
    """Get the shared cryptographically secure source."""
    return _secure_source


def fast_source() -> FastByteSource:
    """Get the shared fast, non-cryptographic source."""
    return _fast_source


def source_for(mode: Mode) -> ByteSource:
    """
    Return the shared source for an entropy mode.

    Args:
        mode: Mode.SECURE or Mode.FAST

    Returns:
        The process-wide source for that mode
    """
    if mode is Mode.SECURE:
        return _secure_source
    if mode is Mode.FAST:
        return _fast_source
    raise ValueError(f"Unknown mode: {mode!r}")
