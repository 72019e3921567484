#!/usr/bin/env python3

# Copyright (C) 2026 The slip10zk developers
#
# This file is part of slip10zk. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of slip10zk including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""SLIP-0010 ed25519 derivation gadgets.

Only hardened private derivation exists for ed25519:

- master: I = HMAC-SHA512(Key = "ed25519 seed", Data = seed)
- child:  I = HMAC-SHA512(Key = c_par, Data = 0x00 || k_par || ser32(i))

with k = I[:32] and c = I[32:].
No modular reduction of the child key is involved.

Indexes are public inputs holding the unhardened index i < 2^31:
ser32(i + 2^31) is its 31-bit decomposition with a constant top bit.
"""

from typing import List, Optional, Sequence

from slip10zk.cs.bit_codec import bytes_from_booleans, constant_bits
from slip10zk.cs.boolean import FALSE, TRUE, Boolean, alloc_bits, pack_le
from slip10zk.cs.constraint_system import LC, ConstraintSystem
from slip10zk.exceptions import ZKValueError
from slip10zk.gadgets.hmac_sha512 import HmacSha512
from slip10zk.slip10 import ED25519_SEED_KEY, KeyMaterial

INDEX_BITS = 31
SEED_BITS = 512
KEY_BITS = 256


class KeyMaterialBits:
    "Private key and chain code bits at one derivation level."

    __slots__ = ("key", "chain_code")

    def __init__(self, key: List[Boolean], chain_code: List[Boolean]) -> None:
        if len(key) != KEY_BITS or len(chain_code) != KEY_BITS:
            err_msg = f"invalid key material size: {len(key)}, {len(chain_code)} bits"
            raise ZKValueError(err_msg)
        self.key = key
        self.chain_code = chain_code

    @classmethod
    def from_digest(cls, bits: Sequence[Boolean]) -> "KeyMaterialBits":
        "Split an HMAC-SHA512 output in key and chain code."
        return cls(list(bits[:KEY_BITS]), list(bits[KEY_BITS:]))

    @property
    def value(self) -> Optional[KeyMaterial]:
        "Return the key material value, None in setup mode."
        key = bytes_from_booleans(self.key)
        chain_code = bytes_from_booleans(self.chain_code)
        if key is None or chain_code is None:
            return None
        return KeyMaterial(key, chain_code)


def hardened_index_bits(
    cs: ConstraintSystem, index_var: int, value: Optional[int] = None
) -> List[Boolean]:
    """Return the 32 big-endian bits of ser32(index + 2^31).

    The 31-bit decomposition of the index variable
    also range-checks it: a larger index cannot be decomposed.
    """

    bits = alloc_bits(cs, value, INDEX_BITS)
    cs.enforce_equal(pack_le(bits), LC({index_var: 1}))
    return [TRUE] + list(reversed(bits))


class MasterKeyDerivation:
    "SLIP-0010 ed25519 master key from a 64-byte seed."

    def __init__(self, hmac: HmacSha512) -> None:
        self.hmac = hmac
        self.key = constant_bits(ED25519_SEED_KEY)

    def __call__(self, seed: Sequence[Boolean]) -> KeyMaterialBits:
        if len(seed) != SEED_BITS:
            raise ZKValueError(f"invalid seed size: {len(seed)} bits")
        with self.hmac.cs.namespace("master key"):
            return KeyMaterialBits.from_digest(self.hmac.digest(self.key, seed))


class CKDPriv:
    "SLIP-0010 ed25519 hardened private child key derivation."

    def __init__(self, hmac: HmacSha512) -> None:
        self.hmac = hmac

    def __call__(
        self, parent: KeyMaterialBits, index: Sequence[Boolean]
    ) -> KeyMaterialBits:
        if len(index) != 32:
            raise ZKValueError(f"invalid index size: {len(index)} bits")
        if not (index[0].is_constant and index[0].value):
            raise ZKValueError("not a hardened index")
        data = [FALSE] * 8 + parent.key + list(index)
        return KeyMaterialBits.from_digest(self.hmac.digest(parent.chain_code, data))


class DerivationChain:
    "Fixed-depth chain of hardened derivations."

    def __init__(self, ckd: CKDPriv, depth: int = 4) -> None:
        if depth < 1:
            raise ZKValueError(f"invalid derivation depth: {depth}")
        self.ckd = ckd
        self.depth = depth

    def __call__(
        self, master: KeyMaterialBits, indexes: Sequence[Sequence[Boolean]]
    ) -> List[KeyMaterialBits]:
        "Return the key material of every level, master first."

        if len(indexes) != self.depth:
            err_msg = f"invalid path length: {len(indexes)} instead of {self.depth}"
            raise ZKValueError(err_msg)

        cs = self.ckd.hmac.cs
        chain = [master]
        for level, index in enumerate(indexes):
            with cs.namespace(f"level {level + 1}"):
                chain.append(self.ckd(chain[-1], index))
        return chain
