from __future__ import annotations

from typing import Iterator, Tuple


def popcount(word: int) -> int:
    return word.bit_count()


def iter_from_left(word: int) -> Iterator[int]:
    """Yield every set bit of `word` as a single-bit int, most significant first."""
    while word:
        top = 1 << (word.bit_length() - 1)
        yield top
        word ^= top


def iter_from_right(word: int) -> Iterator[int]:
    """Yield every set bit of `word` as a single-bit int, least significant first."""
    while word:
        low = word & -word
        yield low
        word ^= low


def _next_combination(current: int, bits: Tuple[int, ...], prefix: Tuple[int, ...]) -> int:
    """
    Gosper's hack over a sparse mask.

    `bits` are the mask's set bits, lowest first, so index i in `bits` is the
    dense position of that card. `prefix[j]` is the OR of `bits[:j]`.
    Returns 0 once `current` was the last combination.
    """
    for i in range(len(bits) - 1):
        low, high = bits[i], bits[i + 1]
        if current & low and not current & high:
            current = (current | high) ^ low

            # pack everything below the moved bit back onto the lowest slots
            below = prefix[i]
            kept = popcount(current & below)
            return (current & ~below) | prefix[kept]
    return 0


def _combinations(bits: Tuple[int, ...], prefix: Tuple[int, ...], k: int) -> Iterator[int]:
    if k == 0:
        yield 0
        return

    current = prefix[k]
    while current:
        yield current
        current = _next_combination(current, bits, prefix)


def iter_combinations(mask: int, k: int) -> Iterator[int]:
    """
    Lazily yield every k-bit sub-mask of `mask`, each exactly once.

    Order is colex over the dense index space of the mask's set bits,
    starting from the k lowest cards. Raises ValueError straight away when
    the mask has fewer than k set bits.
    """
    bits = tuple(iter_from_right(mask))
    if k < 0:
        raise ValueError(f"combo size must be non-negative, got {k}")
    if k > len(bits):
        raise ValueError(f"combo size ({k}) larger than the amount of 1-bits {len(bits)}")

    # built once per enumeration, so advancing never allocates
    prefix = [0]
    for b in bits:
        prefix.append(prefix[-1] | b)
    return _combinations(bits, tuple(prefix), k)
