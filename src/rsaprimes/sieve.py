"""Small-prime tables used to weed out candidates before any expensive primality testing.

The tables are computed lazily, at most once per bound and process, and are never mutated afterward. Worker
processes build their own copy on first use.

Typical usage example:

    primes = get_pre_primes(10000)
    groups = get_prime_groups(10000, 64)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
import math
import threading

SIEVE_BOUND: int = 100_000
GROUP_BITS: int = 64

_log = logging.getLogger(__name__)
_lock = threading.Lock()
_SMALL_PRIMES: dict[int, tuple[int, ...]] = {}
_PRIME_GROUPS: dict[tuple[int, int], tuple[int, ...]] = {}


def _sieve(bound: int = SIEVE_BOUND) -> list[int]:
    """Implements the Sieve of Eratosthenes.

    Only odd numbers are kept in the table, and sieving stops at the square root of `bound`.

    Args:
        bound: Exclusive upper limit of the primes to generate. Defaults to `SIEVE_BOUND`.

    Returns:
        A list of all primes strictly below `bound`, in ascending order.
    """
    if bound <= 2:
        return []
    # Index i stands for the odd number 2 * i + 1.
    size = bound // 2
    odd = bytearray(b"\x01") * size
    odd[0] = 0
    for i in range(1, (math.isqrt(bound - 1) + 1) // 2):
        if odd[i]:
            p = 2 * i + 1
            start = p * p // 2
            odd[start::p] = bytes(len(range(start, size, p)))
    return [2] + [2 * i + 1 for i, flag in enumerate(odd) if flag]


def _group_primes(primes: list[int] | tuple[int, ...], group_bits: int = GROUP_BITS) -> list[int]:
    """Batch the odd primes into products that stay below `2**group_bits`.

    Args:
        primes: Ascending primes to batch. The prime 2 is skipped.
        group_bits: Products must remain strictly below `2**group_bits`.

    Returns:
        The list of group products, in order of their smallest member.
    """
    cap = 1 << group_bits
    groups = []
    product = 1
    for p in primes:
        if p == 2:
            continue
        if product * p >= cap and product > 1:
            groups.append(product)
            product = 1
        product *= p
    if product > 1:
        groups.append(product)
    return groups


def get_pre_primes(bound: int = SIEVE_BOUND) -> tuple[int, ...]:
    """Get the small primes below `bound`, sieving them on first request.

    Args:
        bound: Exclusive upper limit of the primes. Defaults to `SIEVE_BOUND`. Must be >= 0.

    Returns:
        Tuple of primes in ascending order.

    Raises:
        ValueError: If `bound` is negative.
    """
    if bound < 0:
        raise ValueError("bound must be >= 0")
    primes = _SMALL_PRIMES.get(bound)
    if primes is None:
        with _lock:
            primes = _SMALL_PRIMES.get(bound)
            if primes is None:
                primes = tuple(_sieve(bound))
                _SMALL_PRIMES[bound] = primes
                _log.debug("Sieved %d primes below %d", len(primes), bound)
    return primes


def get_prime_groups(bound: int = SIEVE_BOUND, group_bits: int = GROUP_BITS) -> tuple[int, ...]:
    """Get the word-bounded products of the odd small primes below `bound`.

    A single GCD against one of these products replaces a trial division by each of its members.

    Args:
        bound: Exclusive upper limit of the primes. Defaults to `SIEVE_BOUND`.
        group_bits: Bit width every product must stay below. Defaults to `GROUP_BITS`.

    Returns:
        Tuple of group products.

    Raises:
        ValueError: If `group_bits` is below 2 or `bound` is negative.
    """
    if group_bits < 2:
        raise ValueError("group_bits must be >= 2")
    key = (bound, group_bits)
    groups = _PRIME_GROUPS.get(key)
    if groups is None:
        primes = get_pre_primes(bound)
        with _lock:
            groups = _PRIME_GROUPS.get(key)
            if groups is None:
                groups = tuple(_group_primes(primes, group_bits))
                _PRIME_GROUPS[key] = groups
                _log.debug("Batched primes below %d into %d groups of < %d bits", bound, len(groups), group_bits)
    return groups
