#!/usr/bin/env python3
"""
Demo of unbiased password sampling with a special-character quota.

This demonstrates:
1. The default 64-character alphabet and its plain/special split
2. Generating passwords with a minimum number of specials
3. Expected rejection attempts per quota
4. Modulo bias when the alphabet size does not divide 256
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from passgen import DEFAULT_ALPHABET, FULL_CHARACTERS, CharsetSampler, QuotaSampler, create_request, generate_password
from passgen.sources import fast_source, secure_source
from passgen.stats import entropy_bits, modulo_histogram


def main():
    print("=" * 60)
    print("Unbiased Password Sampling Demo")
    print("=" * 60)

    alphabet = DEFAULT_ALPHABET
    print(f"\nAlphabet: {alphabet.characters}")
    print(f"  - Size: {len(alphabet)}")
    print(f"  - Split: {alphabet.split} (specials: {alphabet.special})")
    print(f"  - Special probability: {alphabet.special_probability:.4f}")
    print(f"  - Entropy per character: {alphabet.entropy_per_char:.3f} bits")

    print("\n[1] Generating passwords...")
    for length in (14, 24, 32):
        for minimum_special in (0, 1, 2):
            request = create_request(length, minimum_special, "secure")
            print(f"    {request}: {generate_password(request)}")

    print("\n[2] Expected attempts per call...")
    sampler = QuotaSampler(secure_source())
    for length, minimum_special in [(14, 2), (24, 2), (8, 4), (4, 4)]:
        expected = sampler.expected_attempts(length, minimum_special)
        _, attempts = sampler.sample_with_attempts(length, minimum_special)
        print(f"    length={length}, minimum_special={minimum_special}: "
              f"expected {expected:.2f}, this call {attempts}")

    print("\n[3] Modulo bias (1,000,000 bytes)...")
    for size in (64, 74):
        counts = modulo_histogram(size, fast_source(), 1_000_000)
        print(f"    byte % {size}: min={min(counts)}, max={max(counts)}")

    print("\n[4] 74-character set without bias...")
    wide = CharsetSampler(FULL_CHARACTERS)
    print(f"    {wide.sample(24, 2)}")
    print(f"    Entropy for 24 chars: {entropy_bits(74, 24):.1f} bits "
          f"vs {entropy_bits(len(alphabet), 24):.1f} bits")

    print("\n" + "=" * 60)
    print("Demo complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
