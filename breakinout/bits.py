"""Byte-sized bit-mask helpers and interpolation curves."""

BYTE_MASK = 0xFF


def is_bit_set(mask: int, bit: int) -> bool:
    """Return True when any bit of ``bit`` is set in ``mask``."""
    return (mask & BYTE_MASK) & (bit & BYTE_MASK) != 0


def set_bit(mask: int, bit: int) -> int:
    """Return ``mask`` with ``bit`` set, kept within one byte."""
    return (mask | bit) & BYTE_MASK


def clear_bit(mask: int, bit: int) -> int:
    """Return ``mask`` with ``bit`` cleared, kept within one byte."""
    return mask & ~bit & BYTE_MASK


def toggle_bit(mask: int, bit: int) -> int:
    """Return ``mask`` with ``bit`` flipped, kept within one byte."""
    return (mask ^ bit) & BYTE_MASK


def get_bit_index(bit: int) -> int:
    """Index of a single-bit byte value; 0 for anything else."""
    bit &= BYTE_MASK
    if bit and bit & (bit - 1) == 0:
        return bit.bit_length() - 1
    return 0


def linear_interpolation(start: float, end: float, t: float) -> float:
    """Interpolate linearly from ``start`` to ``end``."""
    return start + t * (end - start)


def bezier_quadratic(p0: float, p1: float, p2: float, t: float) -> float:
    """Evaluate a one-dimensional quadratic Bezier curve at ``t``."""
    u = 1 - t
    return u * u * p0 + 2 * u * t * p1 + t * t * p2


def bezier_cubic(p0: float, p1: float, p2: float, p3: float, t: float) -> float:
    """Evaluate a one-dimensional cubic Bezier curve at ``t``."""
    u = 1 - t
    return u * u * u * p0 + 3 * u * u * t * p1 + 3 * u * t * t * p2 + t * t * t * p3