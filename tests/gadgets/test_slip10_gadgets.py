#!/usr/bin/env python3

# Copyright (C) 2026 The slip10zk developers
#
# This file is part of slip10zk. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of slip10zk including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `slip10zk.gadgets.slip10` module."

import pytest

from slip10zk import slip10
from slip10zk.cs.bit_codec import alloc_bytes, bytes_from_booleans, constant_bits
from slip10zk.cs.boolean import FALSE, TRUE
from slip10zk.cs.constraint_system import ConstraintSystem
from slip10zk.exceptions import ZKValueError
from slip10zk.gadgets.hmac_sha512 import HmacSha512
from slip10zk.gadgets.sha512 import Sha512Core
from slip10zk.gadgets.slip10 import (
    CKDPriv,
    DerivationChain,
    KeyMaterialBits,
    MasterKeyDerivation,
    hardened_index_bits,
)


def _hmac(cs: ConstraintSystem) -> HmacSha512:
    return HmacSha512(Sha512Core(cs))


def test_key_material_bits() -> None:
    key_material = slip10.master_key_from_seed(b"\x01" * 64)
    bits = constant_bits(key_material.key + key_material.chain_code)
    assert KeyMaterialBits.from_digest(bits).value == key_material

    cs = ConstraintSystem(witness=False)
    bits = alloc_bytes(cs, None, 64)
    assert KeyMaterialBits.from_digest(bits).value is None

    with pytest.raises(ZKValueError, match="invalid key material size: "):
        KeyMaterialBits.from_digest(bits[:-8])


def test_hardened_index_bits() -> None:
    for index in (0, 1, 44, 501, slip10.HARDENED - 1):
        cs = ConstraintSystem()
        var = cs.alloc_input(index)
        bits = hardened_index_bits(cs, var, index)
        assert len(bits) == 32
        assert bits[0] is TRUE
        assert bytes_from_booleans(bits) == slip10.hardened_index_bytes(index)
        assert cs.n_constraints == 31 + 1
        assert cs.is_satisfied()


def test_hardened_index_range() -> None:
    "An index of 2^31 or more cannot be decomposed in 31 bits."
    for index in (slip10.HARDENED, slip10.HARDENED + 44, 2**40):
        cs = ConstraintSystem()
        var = cs.alloc_input(index)
        hardened_index_bits(cs, var, index)
        assert not cs.is_satisfied()


def test_master_key() -> None:
    seed = bytes(range(64))
    cs = ConstraintSystem()
    master = MasterKeyDerivation(_hmac(cs))(alloc_bytes(cs, seed, 64))
    assert master.value == slip10.master_key_from_seed(seed)
    assert cs.is_satisfied()

    with pytest.raises(ZKValueError, match="invalid seed size: "):
        MasterKeyDerivation(_hmac(cs))(constant_bits(seed[:32]))


def test_ckd_priv() -> None:
    parent = slip10.master_key_from_seed(b"\x00" * 64)
    index = 44

    cs = ConstraintSystem()
    index_var = cs.alloc_input(index)
    parent_bits = KeyMaterialBits.from_digest(
        alloc_bytes(cs, parent.key + parent.chain_code, 64)
    )
    ckd = CKDPriv(_hmac(cs))
    child = ckd(parent_bits, hardened_index_bits(cs, index_var, index))
    assert child.value == slip10.ckd_priv(parent, index)
    assert ckd.hmac.sha512.n_compressions == 4
    assert cs.is_satisfied()


def test_ckd_priv_exceptions() -> None:
    cs = ConstraintSystem()
    parent = KeyMaterialBits.from_digest(constant_bits(b"\x00" * 64))
    ckd = CKDPriv(_hmac(cs))
    with pytest.raises(ZKValueError, match="invalid index size: "):
        ckd(parent, [TRUE] + [FALSE] * 30)
    with pytest.raises(ZKValueError, match="not a hardened index"):
        ckd(parent, [FALSE] * 32)


def test_derivation_chain_exceptions() -> None:
    cs = ConstraintSystem()
    ckd = CKDPriv(_hmac(cs))
    with pytest.raises(ZKValueError, match="invalid derivation depth: "):
        DerivationChain(ckd, 0)
    chain = DerivationChain(ckd, 4)
    master = KeyMaterialBits.from_digest(constant_bits(b"\x00" * 64))
    index = constant_bits(slip10.hardened_index_bytes(0))
    with pytest.raises(ZKValueError, match="invalid path length: 3 instead of 4"):
        chain(master, [index] * 3)


def test_constant_chain() -> None:
    "A constant seed and path fold to constants."
    seed = b"\x00" * 64
    cs = ConstraintSystem()
    hmac_sha512 = _hmac(cs)
    master = MasterKeyDerivation(hmac_sha512)(constant_bits(seed))
    indexes = [constant_bits(slip10.hardened_index_bytes(i)) for i in (44, 501)]
    chain = DerivationChain(CKDPriv(hmac_sha512), 2)(master, indexes)
    assert len(chain) == 3
    assert [c.value for c in chain] == slip10.derivation_chain(seed, "m/44'/501'")
    assert cs.n_constraints == 0
