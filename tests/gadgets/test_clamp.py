#!/usr/bin/env python3

# Copyright (C) 2026 The slip10zk developers
#
# This file is part of slip10zk. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of slip10zk including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `slip10zk.gadgets.clamp` module."

import hashlib

import pytest

from slip10zk.cs.bit_codec import alloc_bytes, bytes_from_booleans, constant_bits
from slip10zk.cs.boolean import FALSE
from slip10zk.cs.constraint_system import ConstraintSystem
from slip10zk.ed25519 import clamp, secret_scalar
from slip10zk.exceptions import ZKValueError
from slip10zk.gadgets.clamp import ClampedScalar, expand_private_key, scalar_clamp
from slip10zk.gadgets.sha512 import Sha512Core


def test_scalar_clamp() -> None:
    for data in (
        b"\x00" * 32,
        b"\xff" * 32,
        hashlib.sha512(b"clamp").digest()[:32],
        bytes(range(32)),
    ):
        cs = ConstraintSystem()
        scalar = scalar_clamp(alloc_bytes(cs, data, 32))
        assert scalar.value == clamp(data)
        assert scalar.value is not None
        assert scalar.value % 8 == 0
        assert 2**254 <= scalar.value < 2**255
        # rewiring only
        assert cs.n_constraints == 256


def test_expand_private_key() -> None:
    prv_key = bytes.fromhex(
        "9d61b19deffd5a60ba844af492ec2cc44449c5697b326919703bac031cae7f60"
    )
    cs = ConstraintSystem()
    sha512 = Sha512Core(cs)
    expanded = expand_private_key(sha512, alloc_bytes(cs, prv_key, 32))
    assert bytes_from_booleans(expanded) == hashlib.sha512(prv_key).digest()[:32]
    assert scalar_clamp(expanded).value == secret_scalar(prv_key)
    assert sha512.n_compressions == 1
    assert cs.is_satisfied()


def test_constant_key() -> None:
    prv_key = b"\x42" * 32
    cs = ConstraintSystem()
    expanded = expand_private_key(Sha512Core(cs), constant_bits(prv_key))
    assert scalar_clamp(expanded).value == secret_scalar(prv_key)
    assert cs.n_constraints == 0


def test_exceptions() -> None:
    cs = ConstraintSystem()
    with pytest.raises(ZKValueError, match="invalid private key size: "):
        expand_private_key(Sha512Core(cs), constant_bits(b"\x00" * 31))
    with pytest.raises(ZKValueError, match="invalid size: "):
        scalar_clamp(constant_bits(b"\x00" * 33))
    with pytest.raises(ZKValueError, match="invalid number of scalar bits: "):
        ClampedScalar([FALSE] * 255)
