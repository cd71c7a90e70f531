"""Core prime generation API, producing random probable primes of an exact bit length.

Ties the candidate source, the hardening and the Miller-Rabin rounds together behind a parallel search. The
primes are probable primes only: a returned value passed `num_checks` independent rounds, so it is prime with
probability at least `1 - (1/2)**num_checks`.

Typical usage example:

    p = generate_prime(1024)
    p, q = generate_primes(1024, num_checks=64, max_workers=4)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging

from rsaprimes import candidates
from rsaprimes import search
from rsaprimes import sieve

DEFAULT_NUM_CHECKS: int = 1000

_log = logging.getLogger(__name__)


def generate_prime(bit_length: int,
                   num_checks: int = DEFAULT_NUM_CHECKS,
                   max_workers: int | None = None,
                   *,
                   sieve_bound: int = sieve.SIEVE_BOUND,
                   strategy: str = "gcd") -> int:
    """Generate a probable prime of exactly `bit_length` bits.

    Loops until a candidate passes all rounds; no attempt limit is imposed, so callers needing bounded latency
    have to wrap the call in their own timeout.

    Args:
        bit_length: Bit length of the prime. Must be >= 2.
        num_checks: Number of independent Miller-Rabin rounds the prime has to pass. Defaults to 1000.
        max_workers: Number of worker processes racing for the prime. Defaults to the CPU count.
        sieve_bound: Exclusive upper limit of the small primes used for hardening. Defaults to `SIEVE_BOUND`.
        strategy: Hardening strategy, "gcd" or "trial". Defaults to "gcd".

    Returns:
        An odd probable prime (3 for a `bit_length` of 2) with exactly `bit_length` bits.

    Raises:
        ValueError: If any of the parameters is out of range.
    """
    if bit_length < 2:
        raise ValueError("bit_length must be at least 2.")
    if num_checks < 1:
        raise ValueError("num_checks must be at least 1.")
    if max_workers is not None and max_workers < 1:
        raise ValueError("max_workers must be at least 1.")
    if strategy not in candidates.STRATEGIES:
        raise ValueError(f"Unknown hardening strategy {strategy!r}.")
    config = search.SearchConfig(bit_length, num_checks, sieve_bound, strategy)
    return search.parallel_search(config, max_workers)


def generate_primes(bit_length: int,
                    num_checks: int = DEFAULT_NUM_CHECKS,
                    max_workers: int | None = None) -> tuple[int, int]:
    """Generates a pair of distinct, independently drawn probable primes.

    Args:
        bit_length: Bit length of each prime. Must be >= 3, as only one 2-bit odd prime exists.
        num_checks: Passed to `generate_prime()`.
        max_workers: Passed to `generate_prime()`.

    Returns:
        A pair of distinct probable primes of `bit_length` bits each.

    Raises:
        ValueError: If any of the parameters is out of range.
    """
    if bit_length < 3:
        raise ValueError("bit_length must be at least 3.")
    p = generate_prime(bit_length, num_checks, max_workers)
    q = generate_prime(bit_length, num_checks, max_workers)
    while p == q:  # (Un)Likely story.
        _log.debug("Drew the same %d-bit prime twice, redrawing", bit_length)
        q = generate_prime(bit_length, num_checks, max_workers)
    return p, q
