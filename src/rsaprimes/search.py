"""Candidate search loop and the process-parallel race built on top of it.

Every worker runs the same loop: draw a random candidate, harden it, and put it through the Miller-Rabin rounds.
In the parallel case the first worker to come back with a prime wins; the rest notice a shared event at their next
iteration and give up. Processes are used instead of threads since the arithmetic holds the GIL.

Typical usage example:

    cfg = SearchConfig(bit_length=1024, num_checks=64)
    p = parallel_search(cfg, max_workers=4)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import concurrent.futures
import logging
import multiprocessing
from multiprocessing.synchronize import Event
import os
import typing

from rsaprimes import candidates
from rsaprimes import primality
from rsaprimes import sieve

_log = logging.getLogger(__name__)
# Installed in each worker process by the pool initializer.
_cancel_event: Event | None = None


class SearchConfig(typing.NamedTuple):
    """Everything a search worker needs, in a form that can be pickled over to another process."""
    bit_length: int
    num_checks: int
    sieve_bound: int = sieve.SIEVE_BOUND
    strategy: str = "gcd"
    group_bits: int = sieve.GROUP_BITS


def search(config: SearchConfig, cancelled: typing.Callable[[], bool] | None = None) -> int | None:
    """Look for a probable prime sequentially until one is found or the search is cancelled.

    Cancellation is cooperative and checked once per candidate, so a cycle already underway still completes.

    Args:
        config: Target bit length, number of rounds and hardening parameters.
        cancelled: Optional callable returning True once the search should stop.

    Returns:
        A probable prime of exactly `config.bit_length` bits, or None if cancelled first.
    """
    tried = 0
    while cancelled is None or not cancelled():
        tried += 1
        candidate = candidates.harden(candidates.random_candidate(config.bit_length), config.sieve_bound,
                                      config.strategy, config.group_bits)
        # Hardening may push it over the next power of two.
        if candidate.bit_length() != config.bit_length:
            continue
        if primality.passes_rounds(candidate, config.num_checks, config.bit_length):
            _log.debug("Found a %d-bit probable prime after %d candidates", config.bit_length, tried)
            return candidate
    _log.debug("Search cancelled after %d candidates", tried)
    return None


def _init_worker(event: Event) -> None:
    """Pool initializer, installing the shared cancellation event in the worker process."""
    global _cancel_event
    _cancel_event = event


def _search_worker(config: SearchConfig) -> int | None:
    """Run `search()` in a pool worker until it finds a prime or the shared event is set.

    Args:
        config: Passed to `search()`.

    Returns:
        The prime found, or None if another worker won first.
    """
    return search(config, _cancel_event.is_set)


def parallel_search(config: SearchConfig, max_workers: int | None = None) -> int:
    """Race independent search workers and return the first prime any of them finds.

    Args:
        config: Passed to every worker's `search()`.
        max_workers: Number of worker processes. Defaults to the CPU count.
            With a single worker the search runs in the calling process.

    Returns:
        The winning worker's probable prime.

    Raises:
        RuntimeError: If every worker stopped without a result.
    """
    workers = max_workers or os.cpu_count() or 1
    _log.debug("Searching for a %d-bit prime (%d rounds) with %d workers", config.bit_length, config.num_checks,
               workers)
    if workers == 1:
        return search(config)
    ctx = multiprocessing.get_context()
    event = ctx.Event()
    with concurrent.futures.ProcessPoolExecutor(max_workers=workers,
                                                mp_context=ctx,
                                                initializer=_init_worker,
                                                initargs=(event,)) as executor:
        pending = {executor.submit(_search_worker, config) for _ in range(workers)}
        try:
            while pending:
                done, pending = concurrent.futures.wait(pending, return_when=concurrent.futures.FIRST_COMPLETED)
                for future in done:
                    result = future.result()
                    if result is not None:
                        return result
        finally:
            event.set()
    raise RuntimeError("All search workers stopped without finding a prime.")
