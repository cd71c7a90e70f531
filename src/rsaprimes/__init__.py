"""Probable prime generation for RSA-style key material.

Provides a parallel random prime search, the single-round Miller-Rabin test it is built on, and the small-prime
hardening in front of it. Assembling keys from the primes is left to the caller.

Typical usage example:

    p = generate_prime(1024)
    p, q = generate_primes(1024)
    ok = is_probably_prime(p)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging

from rsaprimes.candidates import harden
from rsaprimes.candidates import random_candidate
from rsaprimes.candidates import random_integer
from rsaprimes.keygen import generate_prime
from rsaprimes.keygen import generate_primes
from rsaprimes.primality import check_prime
from rsaprimes.primality import is_probably_prime
from rsaprimes.search import SearchConfig
from rsaprimes.sieve import get_pre_primes
from rsaprimes.sieve import get_prime_groups

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.0.1"
__all__ = [
    "SearchConfig",
    "check_prime",
    "generate_prime",
    "generate_primes",
    "get_pre_primes",
    "get_prime_groups",
    "harden",
    "is_probably_prime",
    "random_candidate",
    "random_integer",
]
