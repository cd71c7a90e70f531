"""Random prime candidates and their hardening against small prime factors.

Candidates are drawn from the system CSPRNG and then walked upward in steps of two until no small prime divides
them. Hardening is only a cheap filter in front of Miller-Rabin; a hardened candidate is not necessarily prime.

Typical usage example:

    c = harden(random_candidate(1024))
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import math
import secrets

from rsaprimes import sieve

STRATEGIES = ("gcd", "trial")


def random_integer(bit_length: int, exact: bool = True) -> int:
    """Draw a uniformly random non-negative integer of `bit_length` bits.

    Reads `ceil(bit_length / 8)` bytes from the CSPRNG and clears the padding bits above `bit_length`.

    Args:
        bit_length: Number of bits of the result. Must be >= 1.
        exact: Whether to force the top bit, so the result has exactly `bit_length` bits. Defaults to True.
            If False, the result is uniform in `[0, 2**bit_length)`.

    Returns:
        The random integer.

    Raises:
        ValueError: If `bit_length` is below 1.
    """
    if bit_length < 1:
        raise ValueError("bit_length must be >= 1")
    byts = secrets.token_bytes((bit_length + 7) // 8)
    value = int.from_bytes(byts, "big") & ((1 << bit_length) - 1)
    if exact:
        value |= 1 << (bit_length - 1)
    return value


def random_candidate(bit_length: int) -> int:
    """Draw an odd random integer of exactly `bit_length` bits."""
    return random_integer(bit_length) | 1


def _harden_trial(candidate: int, primes: tuple[int, ...]) -> int:
    """Walk `candidate` up by two until no small prime `p` with `p * p <= candidate` divides it.

    Args:
        candidate: Odd integer >= 3 to start from.
        primes: Ascending small primes to divide by.

    Returns:
        The first odd integer >= `candidate` passing a full trial division pass.
    """
    changed = True
    while changed:
        changed = False
        for p in primes:
            if p * p > candidate:
                break
            if candidate % p == 0:
                candidate += 2
                changed = True
                break
    return candidate


def _harden_gcd(candidate: int, groups: tuple[int, ...]) -> int:
    """Walk `candidate` up by two until it is coprime to every prime-group product.

    Args:
        candidate: Odd integer larger than every prime in `groups`.
        groups: Products of small primes, as from `get_prime_groups()`.

    Returns:
        The first odd integer >= `candidate` sharing no factor with any group.
    """
    changed = True
    while changed:
        changed = False
        for group in groups:
            if math.gcd(candidate, group) != 1:
                candidate += 2
                changed = True
                break
    return candidate


def harden(candidate: int,
           bound: int = sieve.SIEVE_BOUND,
           strategy: str = "gcd",
           group_bits: int = sieve.GROUP_BITS) -> int:
    """Move `candidate` up to the nearest odd integer without small prime factors.

    The candidate is first made odd (and at least 3). Then, until a full pass finds nothing, each hit by a small
    prime below `bound` bumps it by two and restarts the pass.

    Args:
        candidate: The integer to harden. Must be non-negative.
        bound: Exclusive upper limit of the small primes. Defaults to `SIEVE_BOUND`.
        strategy: "gcd" to test batches of primes with a single GCD each, or "trial" for plain trial division.
            Defaults to "gcd". Candidates no larger than the largest small prime always use trial division.
        group_bits: Bit width of the prime batches for the "gcd" strategy. Defaults to `GROUP_BITS`.

    Returns:
        An odd integer >= `max(candidate, 3)` with no small prime factor other than itself.

    Raises:
        ValueError: If `candidate` is negative or `strategy` is unknown.
    """
    if candidate < 0:
        raise ValueError("candidate must be >= 0")
    if strategy not in STRATEGIES:
        raise ValueError(f"Unknown hardening strategy {strategy!r}.")
    candidate = max(candidate | 1, 3)
    primes = sieve.get_pre_primes(bound)
    if strategy == "trial" or not primes or candidate <= primes[-1]:
        return _harden_trial(candidate, primes)
    return _harden_gcd(candidate, sieve.get_prime_groups(bound, group_bits))
