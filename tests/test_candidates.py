# pylint: disable=protected-access,missing-module-docstring
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import secrets

import pytest
import sympy

from rsaprimes import candidates
from rsaprimes import sieve

test_sizes = [1, 2, 3, 7, 8, 9, 63, 64, 65, 512, 1024, 2048]

harden_cases = [
    (0, 3),
    (1, 3),
    (2, 3),
    (3, 3),
    (4, 5),
    (7, 7),
    (9, 11),
    (15, 17),
    (25, 29),
    (120, 127),
    (99989, 99989),
    (99990, 99991),
    (99991, 99991),
    # 99993, 99995, 99997, 99999 and 100001 all have small factors.
    (99992, 100003),
]


@pytest.mark.parametrize("size", test_sizes)
def test_random_integer_exact(size):
    for _ in range(20):
        assert candidates.random_integer(size).bit_length() == size


@pytest.mark.parametrize("size", test_sizes)
def test_random_integer_loose(size):
    for _ in range(20):
        assert 0 <= candidates.random_integer(size, exact=False) < 2**size


@pytest.mark.parametrize("size", [1, 8, 12, 64, 1000])
def test_random_integer_shaping(mocker, size):
    nbytes = (size + 7) // 8
    mocker.patch("secrets.token_bytes", return_value=b"\x00" * nbytes)
    assert candidates.random_integer(size) == 1 << (size - 1)
    assert candidates.random_integer(size, exact=False) == 0
    secrets.token_bytes.assert_called_with(nbytes)


def test_random_integer_clears_padding(mocker):
    mocker.patch("secrets.token_bytes", return_value=b"\xff\xff")
    assert candidates.random_integer(12, exact=False) == 0xFFF
    assert candidates.random_integer(9) == 0x1FF


@pytest.mark.parametrize("size", [0, -1, -64])
def test_random_integer_errors(size):
    with pytest.raises(ValueError):
        candidates.random_integer(size)


@pytest.mark.parametrize("size", test_sizes[1:])
def test_random_candidate(size):
    for _ in range(20):
        c = candidates.random_candidate(size)
        assert c.bit_length() == size
        assert c % 2 == 1


def test_random_candidate_forces_bits(mocker):
    mocker.patch("secrets.token_bytes", return_value=b"\x00" * 8)
    assert candidates.random_candidate(64) == (1 << 63) | 1


@pytest.mark.parametrize("strategy", candidates.STRATEGIES)
@pytest.mark.parametrize("num,expected", harden_cases)
def test_harden_concrete(num, expected, strategy):
    assert candidates.harden(num, strategy=strategy) == expected


@pytest.mark.parametrize("strategy", candidates.STRATEGIES)
@pytest.mark.parametrize("size", [2, 8, 17, 64, 128, 512])
def test_harden_idempotent(size, strategy):
    for _ in range(10):
        x = candidates.random_integer(size, exact=False)
        once = candidates.harden(x, strategy=strategy)
        assert candidates.harden(once, strategy=strategy) == once


@pytest.mark.parametrize("size", [64, 128, 512, 1024])
def test_harden_no_small_factors(size):
    primes = sieve.get_pre_primes()
    for _ in range(5):
        x = candidates.random_integer(size)
        h = candidates.harden(x)
        assert h % 2 == 1
        assert h >= x
        assert all(h % p for p in primes)


@pytest.mark.parametrize("size", [20, 64, 256])
def test_harden_strategies_agree(size):
    for _ in range(10):
        x = candidates.random_integer(size, exact=False)
        assert candidates.harden(x, strategy="gcd") == candidates.harden(x, strategy="trial")


@pytest.mark.parametrize("group_bits", [16, 64, 512])
def test_harden_group_bits(group_bits):
    x = candidates.random_integer(256)
    assert candidates.harden(x, group_bits=group_bits) == candidates.harden(x, strategy="trial")


def test_harden_keeps_primes():
    p = int(sympy.nextprime(2**127))
    assert candidates.harden(p) == p
    assert candidates.harden(p - 1) == p


def test_harden_small_bound():
    assert candidates.harden(2**64 + 1, bound=0) == 2**64 + 1
    assert candidates.harden(9, bound=3) == 9
    assert candidates.harden(9, bound=4) == 11
    assert candidates.harden(25, bound=5) == 25


def test_harden_dispatch(mocker):
    gcd_spy = mocker.spy(candidates, "_harden_gcd")
    trial_spy = mocker.spy(candidates, "_harden_trial")
    candidates.harden(2**64 + 1)
    assert gcd_spy.call_count == 1
    assert trial_spy.call_count == 0
    candidates.harden(1001)
    assert gcd_spy.call_count == 1
    assert trial_spy.call_count == 1


def test_harden_errors():
    with pytest.raises(ValueError):
        candidates.harden(-5)
    with pytest.raises(ValueError):
        candidates.harden(101, strategy="wheel")
