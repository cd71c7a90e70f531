"""Probabilistic primality testing, centred on a single-witness Miller-Rabin round.

One call of `is_probably_prime` is one round with one fresh random witness; a composite survives a round with
probability at most 1/4. Callers amplify the confidence by running independent rounds, either through
`passes_rounds` or through `check_prime`, which front-loads a trial division by the small primes.

Typical usage example:

    is_probably_prime(561)
    passes_rounds(candidate, 1000)
    check_prime(candidate)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from rsaprimes import candidates
from rsaprimes import sieve


def _decompose(m: int) -> tuple[int, int]:
    """Split an odd `m > 1` into `(k, u)` with `m - 1 == 2**k * u` and `u` odd."""
    tm = m - 1
    k = (tm & -tm).bit_length() - 1
    return k, tm >> k


def _draw_witness(m: int, bit_length: int) -> int:
    """Draw a non-zero random witness modulo `m`.

    Args:
        m: The odd integer under test.
        bit_length: Bit length of the random draw. Never narrower than `m` itself.

    Returns:
        A witness in `[1, m - 1]`.
    """
    bit_length = max(bit_length, m.bit_length())
    a = candidates.random_integer(bit_length, exact=False) % m
    while a == 0:
        a = candidates.random_integer(bit_length, exact=False) % m
    return a


def is_probably_prime(m: int, bit_length: int | None = None) -> bool:
    """Perform a single Miller-Rabin round with a fresh random witness.

    With `m - 1 == 2**k * u`, the witness `a` is raised to `u` and then squared up to `k` times. `m` is reported
    probably prime only if the squaring reaches 1 and the value right before it was 1 or `m - 1`, i.e. 1 has
    no non-trivial square root along the way.

    Args:
        m: The integer to test.
        bit_length: Bit length of the random draw the witness is reduced from.
            Defaults to, and is never taken below, the bit length of `m`.

    Returns:
        False if `m` is certainly composite (or below 2), True if `m` is probably prime.
    """
    if m < 3:
        return m == 2
    if m % 2 == 0:
        return False
    k, u = _decompose(m)
    a = _draw_witness(m, bit_length or 0)
    x = pow(a, u, m)
    for _ in range(k):
        y = x
        x = x * x % m
        if x == 1:
            return y == 1 or y == m - 1
    return False


def passes_rounds(m: int, num_checks: int, bit_length: int | None = None) -> bool:
    """Run up to `num_checks` independent Miller-Rabin rounds, stopping at the first failure.

    Args:
        m: The integer to test.
        num_checks: Number of rounds `m` has to survive.
        bit_length: Passed to `is_probably_prime()`.

    Returns:
        True if every round passed, in which case `m` is prime with probability >= 1 - (1/2)**num_checks.
    """
    return all(is_probably_prime(m, bit_length) for _ in range(num_checks))


def _trial_division(no: int, bound: int = sieve.SIEVE_BOUND) -> bool:
    """Check the provided `no` against the known small primes.

    Args:
         no: The number to check.
         bound: Exclusive upper limit of the small primes. Defaults to `SIEVE_BOUND`.

    Returns:
        False if `no` cannot be prime, True otherwise. Exact for `no < bound**2`.
    """
    if no < 2:
        return False
    for prime in sieve.get_pre_primes(bound):
        if prime**2 > no:
            return True
        if no % prime == 0:
            return False
    return True


def rounds_for_bits(bit_length: int) -> int:
    """Number of Miller-Rabin rounds for a candidate of `bit_length` bits, after FIPS 186-5 Appendix C.1."""
    if bit_length <= 512:
        return 40
    if bit_length <= 1024:
        return 56
    if bit_length <= 1536:
        return 64
    if bit_length <= 2048:
        return 70
    return 74


def check_prime(candidate: int, num_checks: int | None = None, bound: int = sieve.SIEVE_BOUND) -> bool:
    """Performs a composite primality test: trial division by the small primes, then Miller-Rabin rounds.

    Meant for re-validating an externally supplied integer. Values whose square root is covered by the small
    primes are settled by the trial division alone.

    Args:
        candidate: The candidate prime to test.
        num_checks: Number of Miller-Rabin rounds to perform.
            If not provided will use defaults as per the FIPS 186-5 Appendix C.1
        bound: Exclusive upper limit of the small primes. Defaults to `SIEVE_BOUND`.

    Returns:
        True if `candidate` is probably prime, False otherwise.
    """
    if not _trial_division(candidate, bound):
        return False
    if candidate < bound * bound:
        return True
    if num_checks is None:
        num_checks = rounds_for_bits(candidate.bit_length())
    return passes_rounds(candidate, num_checks)
