"""Test fixtures for exploration tests."""

from __future__ import annotations

import pytest

from cfsm_verifier.model import load_network


@pytest.fixture
def self_loop_network():
    """Two processes synchronizing on c forever."""
    return load_network("P0\ns0 c! s0\n.\nP1\ns0 c? s0\n.\n")


@pytest.fixture
def mismatch_network():
    """Sender and receiver on different channels."""
    return load_network("P0\ns0 c! s1\n.\nP1\ns0 d? s1\n.\n")


@pytest.fixture
def one_shot_network():
    """A single synchronization, then both processes stop."""
    return load_network("P\ns0 c! s1\n.\nQ\ns0 c? s1\n.\n")


@pytest.fixture
def priority_network():
    """P offers a (priority 1, no partner) and b (priority 0, partner Q)."""
    return load_network(
        """
        P
        s0 a!@1 s1
        s0 b!@0 s1
        .
        Q
        s0 b?@0 s1
        .
        """
    )


@pytest.fixture
def three_senders_network():
    """Three one-shot senders and a looping receiver on one channel."""
    return load_network("S 3\ns0 c! s1\n.\nR\nr c? r\n.\n")
