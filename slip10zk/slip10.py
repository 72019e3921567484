#!/usr/bin/env python3

# Copyright (C) 2026 The slip10zk developers
#
# This file is part of slip10zk. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of slip10zk including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""SLIP-0010 ed25519 hierarchical deterministic key derivation.

Native (out-of-circuit) reference implementation, see
https://github.com/satoshilabs/slips/blob/master/slip-0010.md

For ed25519 only hardened derivation is defined:
the child key is the left half of
HMAC-SHA512(chain_code, 0x00 || key || ser32(index + 2^31)),
the child chain code being the right half.

A derivation path can be represented as:

- "m/44'/501'/0'/0'" or "44h/501h/0h/0h" string,
  every level being hardened
- sequence of unhardened integer indexes, e.g. [44, 501, 0, 0]
"""

import hmac
from dataclasses import dataclass
from typing import List, Sequence

from slip10zk.alias import DerPath, Octets
from slip10zk.ed25519 import pub_key_from_prv_key
from slip10zk.exceptions import ZKValueError
from slip10zk.utils import bytes_from_octets

ED25519_SEED_KEY = b"ed25519 seed"
HARDENED = 0x80000000


@dataclass(frozen=True)
class KeyMaterial:
    "Private key and chain code at one derivation level."
    key: bytes
    chain_code: bytes

    def __post_init__(self) -> None:
        for name in ("key", "chain_code"):
            value = getattr(self, name)
            if len(value) != 32:
                err_msg = f"invalid {name} length: {len(value)} bytes instead of 32"
                raise ZKValueError(err_msg)


def int_from_index_str(s: str) -> int:
    "Return the unhardened index of a hardened path level string."

    s = s.strip().lower()
    if not s or s[-1] not in ("'", "h"):
        raise ZKValueError(f"not a hardened index: '{s}'")
    index = int(s[:-1])
    if not 0 <= index < HARDENED:
        raise ZKValueError(f"invalid index: {index}")
    return index


def indexes_from_path(der_path: DerPath) -> List[int]:
    "Return the list of unhardened indexes of a derivation path."

    if isinstance(der_path, str):
        steps = [x.strip() for x in der_path.split("/")]
        if steps[0].lower() == "m":
            steps = steps[1:]
        return [int_from_index_str(s) for s in steps if s != ""]

    indexes = [int(i) for i in der_path]
    for index in indexes:
        if not 0 <= index < HARDENED:
            raise ZKValueError(f"invalid index: {index}")
    return indexes


def str_from_path(der_path: DerPath) -> str:
    indexes = indexes_from_path(der_path)
    return "/".join(["m"] + [f"{i}'" for i in indexes])


def hardened_index_bytes(index: int) -> bytes:
    "Return ser32(index + 2^31), big-endian."
    if not 0 <= index < HARDENED:
        raise ZKValueError(f"invalid index: {index}")
    return (index + HARDENED).to_bytes(4, byteorder="big", signed=False)


def master_key_from_seed(seed: Octets) -> KeyMaterial:
    "Return the master key material from seed."

    seed = bytes_from_octets(seed)
    bitlenght = len(seed) * 8
    if bitlenght < 128:
        raise ZKValueError(f"too few bits for seed: {bitlenght}")
    if bitlenght > 512:
        raise ZKValueError(f"too many bits for seed: {bitlenght}")
    hmac_ = hmac.new(ED25519_SEED_KEY, seed, "sha512").digest()
    return KeyMaterial(hmac_[:32], hmac_[32:])


def ckd_priv(parent: KeyMaterial, index: int) -> KeyMaterial:
    "Hardened private child key derivation (index is unhardened)."

    data = b"\x00" + parent.key + hardened_index_bytes(index)
    hmac_ = hmac.new(parent.chain_code, data, "sha512").digest()
    return KeyMaterial(hmac_[:32], hmac_[32:])


def derivation_chain(seed: Octets, der_path: DerPath) -> List[KeyMaterial]:
    "Return the key material of every level, master first."

    chain = [master_key_from_seed(seed)]
    for index in indexes_from_path(der_path):
        chain.append(ckd_priv(chain[-1], index))
    return chain


def derive(seed: Octets, der_path: DerPath) -> KeyMaterial:
    "Return the key material at the end of the derivation path."
    return derivation_chain(seed, der_path)[-1]


def derive_pub_key(seed: Octets, der_path: DerPath) -> bytes:
    "Return the 32-byte ed25519 public key at the end of the derivation path."
    return pub_key_from_prv_key(derive(seed, der_path).key)


def derive_pub_keys(seed: Octets, der_paths: Sequence[DerPath]) -> List[bytes]:
    master = master_key_from_seed(seed)
    pub_keys = []
    for der_path in der_paths:
        key_material = master
        for index in indexes_from_path(der_path):
            key_material = ckd_priv(key_material, index)
        pub_keys.append(pub_key_from_prv_key(key_material.key))
    return pub_keys
