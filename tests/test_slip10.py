#!/usr/bin/env python3

# Copyright (C) 2026 The slip10zk developers
#
# This file is part of slip10zk. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of slip10zk including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `slip10zk.slip10` module."

import hmac
import json
from os import path

import pytest

from slip10zk import slip10
from slip10zk.ed25519 import pub_key_from_prv_key
from slip10zk.exceptions import ZKValueError

data_folder = path.join(path.dirname(__file__), "_data")


def test_slip10_vectors() -> None:
    filename = path.join(data_folder, "slip10_ed25519_test_vectors.json")
    with open(filename, "r", encoding="ascii") as file_:
        test_vectors = json.load(file_)

    for seed, levels in test_vectors.items():
        chain = slip10.derivation_chain(seed, levels[-1][0])
        assert len(chain) == len(levels)
        for key_material, (der_path, chain_code, prv_key, pub_key) in zip(
            chain, levels
        ):
            assert key_material.chain_code.hex() == chain_code
            assert key_material.key.hex() == prv_key
            # SLIP-0010 public keys are prefixed by a zero byte
            assert "00" + pub_key_from_prv_key(prv_key).hex() == pub_key
            assert slip10.derive(seed, der_path) == key_material
            assert "00" + slip10.derive_pub_key(seed, der_path).hex() == pub_key


def test_master_key() -> None:
    seed = bytes(range(64))
    expected = hmac.new(b"ed25519 seed", seed, "sha512").digest()
    master = slip10.master_key_from_seed(seed)
    assert master.key == expected[:32]
    assert master.chain_code == expected[32:]

    with pytest.raises(ZKValueError, match="too few bits for seed: "):
        slip10.master_key_from_seed(b"\x00" * 15)
    with pytest.raises(ZKValueError, match="too many bits for seed: "):
        slip10.master_key_from_seed(b"\x00" * 65)


def test_ckd_priv() -> None:
    master = slip10.master_key_from_seed(b"\x00" * 64)
    data = b"\x00" + master.key + bytes.fromhex("8000002c")
    expected = hmac.new(master.chain_code, data, "sha512").digest()
    child = slip10.ckd_priv(master, 44)
    assert child.key + child.chain_code == expected

    with pytest.raises(ZKValueError, match="invalid index: "):
        slip10.ckd_priv(master, slip10.HARDENED)
    with pytest.raises(ZKValueError, match="invalid key length: "):
        slip10.KeyMaterial(b"\x00" * 31, b"\x00" * 32)
    with pytest.raises(ZKValueError, match="invalid chain_code length: "):
        slip10.KeyMaterial(b"\x00" * 32, b"\x00" * 33)


def test_der_path() -> None:
    indexes = [44, 501, 0, 0]
    for der_path in (
        "m/44'/501'/0'/0'",
        "m/44h/501h/0h/0h",
        "M / 44H / 501H / 0' / 0'",
        "44'/501'/0'/0'",
        indexes,
        tuple(indexes),
    ):
        assert slip10.indexes_from_path(der_path) == indexes
        assert slip10.str_from_path(der_path) == "m/44'/501'/0'/0'"
    assert slip10.indexes_from_path("m") == []
    assert slip10.indexes_from_path("m/2147483647'") == [0x7FFFFFFF]

    assert slip10.hardened_index_bytes(0) == b"\x80\x00\x00\x00"
    assert slip10.hardened_index_bytes(0x7FFFFFFF) == b"\xff\xff\xff\xff"

    # ed25519 has no unhardened derivation
    with pytest.raises(ZKValueError, match="not a hardened index: "):
        slip10.indexes_from_path("m/44'/501'/0/0'")
    for invalid_path in ("m/2147483648'", [2**31], [-1]):
        with pytest.raises(ZKValueError, match="invalid index: "):
            slip10.indexes_from_path(invalid_path)
    with pytest.raises(ZKValueError, match="invalid index: "):
        slip10.hardened_index_bytes(2**31)


def test_derive_pub_keys() -> None:
    seed = b"\x00" * 64
    paths = ["m/44'/501'/0'/0'", [44, 501, 0, 1]]
    pub_keys = slip10.derive_pub_keys(seed, paths)
    assert pub_keys == [slip10.derive_pub_key(seed, p) for p in paths]
    assert pub_keys[0] != pub_keys[1]
    assert all(len(pub_key) == 32 for pub_key in pub_keys)
