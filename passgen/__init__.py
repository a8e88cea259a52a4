"""
passgen: unbiased random password sampling.

Draws uniformly distributed characters from a 64-character alphabet using a
byte-oriented entropy source, and enforces a minimum count of special
characters by rejecting whole samples, so the quota adds no bias.

Modules:
- protocols: ByteSource capability interface
- sources: Secure, fast and seeded byte sources
- alphabet: Zero-bias byte to character mapping with a plain/special split
- params: SampleRequest and entropy Mode
- sampler: QuotaSampler, UnconstrainedSampler, CharsetSampler, generate()
- stats: Quota probabilities and distribution checks
"""

from .alphabet import Alphabet, CharClass, DEFAULT_ALPHABET, DEFAULT_CHARACTERS, FULL_CHARACTERS
from .params import Mode, SampleRequest, create_request
from .protocols import ByteSource
from .sources import ByteSourceError, FastByteSource, SecureByteSource, SeededByteSource
from .sampler import (
    CharsetSampler,
    QuotaNotMetError,
    QuotaSampler,
    UnconstrainedSampler,
    generate,
    generate_password,
)

__version__ = "0.1.0"
__all__ = [
    "Alphabet",
    "CharClass",
    "DEFAULT_ALPHABET",
    "DEFAULT_CHARACTERS",
    "FULL_CHARACTERS",
    "Mode",
    "SampleRequest",
    "create_request",
    "ByteSource",
    "ByteSourceError",
    "FastByteSource",
    "SecureByteSource",
    "SeededByteSource",
    "CharsetSampler",
    "QuotaNotMetError",
    "QuotaSampler",
    "UnconstrainedSampler",
    "generate",
    "generate_password",
]
