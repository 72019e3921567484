#!/usr/bin/env python3

# Copyright (C) 2026 The slip10zk developers
#
# This file is part of slip10zk. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of slip10zk including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `slip10zk.gadgets.sha512` module."

import hashlib

import pytest

from slip10zk.cs.bit_codec import alloc_bytes, bytes_from_booleans, constant_bits
from slip10zk.cs.boolean import enforce_equal
from slip10zk.cs.constraint_system import ConstraintSystem
from slip10zk.cs.uint64 import UInt64
from slip10zk.exceptions import ZKValueError
from slip10zk.gadgets.sha512 import IV, K, Sha512Core, n_blocks, padding_bits


def test_constants() -> None:
    assert len(K) == 80
    assert len(IV) == 8
    assert K[0] == 0x428A2F98D728AE22
    assert K[79] == 0x6C44198C4A475817
    assert len(set(K)) == 80


def test_padding() -> None:
    for n_bytes in (0, 1, 3, 64, 111, 112, 127, 128, 200):
        padding = padding_bits(8 * n_bytes)
        assert (8 * n_bytes + len(padding)) % 1024 == 0
        assert (8 * n_bytes + len(padding)) // 1024 == n_blocks(n_bytes)
        assert padding[0] is True
        length = int("".join("1" if b else "0" for b in padding[-128:]), 2)
        assert length == 8 * n_bytes
    assert n_blocks(111) == 1
    assert n_blocks(112) == 2


def test_constant_message() -> None:
    "Constant messages are hashed without constraints."
    cs = ConstraintSystem()
    sha512 = Sha512Core(cs)
    for message in (b"", b"abc", b"ed25519 seed", bytes(range(200))):
        digest = sha512.digest(constant_bits(message))
        assert all(bit.is_constant for bit in digest)
        assert bytes_from_booleans(digest) == hashlib.sha512(message).digest()
    assert cs.n_constraints == 0
    assert cs.n_vars == 1


def test_witness_message() -> None:
    for message in (b"abc", bytes(range(112))):
        cs = ConstraintSystem()
        sha512 = Sha512Core(cs)
        digest = sha512.digest(alloc_bytes(cs, message, len(message)))
        assert len(digest) == 512
        assert bytes_from_booleans(digest) == hashlib.sha512(message).digest()
        assert sha512.n_compressions == n_blocks(len(message))
        assert cs.is_satisfied()


def test_wrong_witness() -> None:
    "The digest is bound to the message."
    expected = constant_bits(hashlib.sha512(b"abc").digest())
    for message, satisfied in ((b"abc", True), (b"abd", False)):
        cs = ConstraintSystem()
        digest = Sha512Core(cs).digest(alloc_bytes(cs, message, 3))
        for bit, expected_bit in zip(digest, expected):
            enforce_equal(cs, bit, expected_bit)
        assert cs.is_satisfied() is satisfied


def test_setup_mode() -> None:
    "The circuit shape does not depend on the witness."
    cs = ConstraintSystem(witness=False)
    digest = Sha512Core(cs).digest(alloc_bytes(cs, None, 3))
    assert bytes_from_booleans(digest) is None

    cs2 = ConstraintSystem()
    Sha512Core(cs2).digest(alloc_bytes(cs2, b"xyz", 3))
    assert cs.n_constraints == cs2.n_constraints
    assert cs.n_vars == cs2.n_vars


def test_exceptions() -> None:
    cs = ConstraintSystem()
    sha512 = Sha512Core(cs)
    with pytest.raises(ZKValueError, match="not a whole number of bytes: "):
        sha512.digest(constant_bits(b"abc")[:-1])
    state = [UInt64.constant(iv) for iv in IV]
    block = constant_bits(b"\x00" * 128)
    with pytest.raises(ZKValueError, match="invalid state size: "):
        sha512.compress(state[:7], block)
    with pytest.raises(ZKValueError, match="invalid block size: "):
        sha512.compress(state, block[:-1])
