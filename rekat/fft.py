"""Bit-reversal helpers and precomputed tables for radix-2 Fourier transforms."""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import TypeVar

__all__ = [
    "log2",
    "next_power_of_two",
    "reverse_bits",
    "bit_reverse_order",
    "FastFourierTransform",
]

_T = TypeVar("_T")

_MAX_DIMENSIONS = 3


def log2(n: int) -> int:
    """Return the integer base-2 logarithm of ``n``, rounded down; -1 for zero."""
    if n < 0:
        raise ValueError(f"log2 is not defined for negative values: {n}")
    return n.bit_length() - 1


def next_power_of_two(n: int) -> int:
    """Return the smallest power of two not below ``n``.

    Values that are already powers of two, zero and negative values are returned as given.
    """
    if n <= 0 or n & (n - 1) == 0:
        return n
    return 1 << n.bit_length()


def reverse_bits(n: int, value: int) -> int:
    """Reverse the lowest ``log2(n)`` bits of ``value``; higher bits are dropped."""
    width = log2(n)
    result = 0
    for position in range(width):
        if value & (1 << position):
            result |= 1 << (width - 1 - position)
    return result


def bit_reverse_order(values: Sequence[_T]) -> list[_T]:
    """Return ``values`` reordered so item ``i`` is taken from index ``reverse_bits(len, i)``."""
    count = len(values)
    return [values[reverse_bits(count, index)] for index in range(count)]


class FastFourierTransform:
    """Twiddle factors and decimation tables for a 1-, 2- or 3-dimensional transform.

    Each size is rounded down to a power of two. For every dimension the object
    holds the exponent, the size, half the size, the normalising factor, the
    forward and inverse twiddle factors and the bit-reversal lookup table.
    """

    def __init__(self, *args: int):
        if not 1 <= len(args) <= _MAX_DIMENSIONS:
            raise ValueError(
                f"between 1 and {_MAX_DIMENSIONS} sizes are required, got {len(args)}"
            )
        for size in args:
            if size < 1:
                raise ValueError(f"transform sizes must be positive, got {size}")

        self.dimensions: int = len(args)
        self.orders: list[int] = []
        self.sizes: list[int] = []
        self.halves: list[int] = []
        self.scales: list[float] = []
        self.twiddles: list[list[complex]] = []
        self.inverse_twiddles: list[list[complex]] = []
        self.decimation: list[list[int]] = []

        for requested in args:
            order = log2(requested)
            size = 1 << order
            half = size >> 1
            forward = [
                complex(math.cos(2 * math.pi * i / size), -math.sin(2 * math.pi * i / size))
                for i in range(half)
            ]
            self.orders.append(order)
            self.sizes.append(size)
            self.halves.append(half)
            self.scales.append(1.0 / size)
            self.twiddles.append(forward)
            self.inverse_twiddles.append([factor.conjugate() for factor in forward])
            self.decimation.append([reverse_bits(size, i) for i in range(size)])