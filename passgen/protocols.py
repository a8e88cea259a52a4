"""
Entropy source protocol for the samplers.

A byte source is the only collaborator the samplers need: something that
overwrites a caller-owned buffer with uniformly distributed bytes. The
samplers depend on this capability, not on a concrete class, so the
cryptographically secure source, the fast source and deterministic test
sources can be used interchangeably.

Concrete implementations are in passgen/sources.py.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class ByteSource(Protocol):
    """
    Supplier of uniformly random bytes.

    Requirements:
    - fill() must overwrite every byte of the buffer with an independent,
      uniformly distributed value in [0, 255]
    - fill() may be called any number of times per sampling call
    - A shared instance must tolerate concurrent fill() calls from
      independent sampling calls without correlating their output
    """

    def fill(self, buffer: bytearray | memoryview) -> None:
        """
        Overwrite buffer in place with random bytes.

        Args:
            buffer: Writable buffer; every byte is replaced

        Raises:
            Any error from the underlying generator. Callers do not retry.
        """
        ...
