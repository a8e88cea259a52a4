"""
Request parameters for password sampling.

Key parameters:
- length: Number of characters in the result
- minimum_special: Lower bound on special characters in the result
- mode: Entropy mode, SECURE (OS CSPRNG) or FAST (non-cryptographic)

A request is validated on construction, before any entropy is consumed.
"""

from dataclasses import dataclass
from enum import Enum


class Mode(Enum):
    """Entropy mode for a request."""

    FAST = "fast"
    SECURE = "secure"


@dataclass(frozen=True)
class SampleRequest:
    """A single password request."""

    length: int  # Characters in the result
    minimum_special: int = 0  # Required special characters
    mode: Mode = Mode.SECURE  # SEC: FAST is for comparison only

    def __post_init__(self):
        validate_request(self.length, self.minimum_special)
        if not isinstance(self.mode, Mode):
            raise ValueError(f"mode must be a Mode, got {self.mode!r}")

    def __repr__(self) -> str:
        return (
            f"SampleRequest(length={self.length}, "
            f"minimum_special={self.minimum_special}, mode={self.mode.value})"
        )


def validate_request(length: int, minimum_special: int) -> None:
    """
    Check that a (length, minimum_special) pair is satisfiable.

    Raises:
        ValueError: If length < 1, minimum_special < 0, or
            minimum_special > length
    """
    if length < 1:
        raise ValueError("length must be at least 1")
    if minimum_special < 0:
        raise ValueError("minimum_special must be non-negative")
    if minimum_special > length:
        raise ValueError(
            f"minimum_special ({minimum_special}) exceeds length ({length})"
        )


def create_request(length: int, minimum_special: int = 0, mode: Mode | str = Mode.SECURE) -> SampleRequest:
    """
    Create a sample request.

    Args:
        length: Characters in the result
        minimum_special: Required special characters
        mode: Mode or its string value ("fast", "secure")

    Returns:
        Validated SampleRequest
    """
    if isinstance(mode, str):
        mode = Mode(mode)
    return SampleRequest(length=length, minimum_special=minimum_special, mode=mode)
