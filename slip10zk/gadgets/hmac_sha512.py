#!/usr/bin/env python3

# Copyright (C) 2026 The slip10zk developers
#
# This file is part of slip10zk. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of slip10zk including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""HMAC-SHA512 gadget (RFC 2104).

HMAC(K, m) = H((K' ^ opad) || H((K' ^ ipad) || m))

where K' is the key zero-padded to the 128-byte block size,
or its SHA-512 digest if the key is longer than a block.
Key and message lengths are fixed by the number of input bits.
"""

from typing import List, Sequence

from slip10zk.cs.bit_codec import constant_bits
from slip10zk.cs.boolean import FALSE, Boolean, xor
from slip10zk.exceptions import ZKValueError
from slip10zk.gadgets.sha512 import BLOCK_BITS, Sha512Core

IPAD = constant_bits(b"\x36" * (BLOCK_BITS // 8))
OPAD = constant_bits(b"\x5c" * (BLOCK_BITS // 8))


class HmacSha512:
    def __init__(self, sha512: Sha512Core) -> None:
        self.sha512 = sha512
        self.cs = sha512.cs

    def _block_key(self, key: Sequence[Boolean]) -> List[Boolean]:
        if len(key) > BLOCK_BITS:
            with self.cs.namespace("long key"):
                key = self.sha512.digest(key)
        return list(key) + [FALSE] * (BLOCK_BITS - len(key))

    def digest(self, key: Sequence[Boolean], message: Sequence[Boolean]) -> List[Boolean]:
        "Return the 512 bits of HMAC-SHA512(key, message)."

        if len(key) % 8:
            raise ZKValueError(f"not a whole number of key bytes: {len(key)} bits")

        cs = self.cs
        block_key = self._block_key(key)
        with cs.namespace("inner"):
            inner_key = [xor(cs, k, pad) for k, pad in zip(block_key, IPAD)]
            inner = self.sha512.digest(inner_key + list(message))
        with cs.namespace("outer"):
            outer_key = [xor(cs, k, pad) for k, pad in zip(block_key, OPAD)]
            return self.sha512.digest(outer_key + inner)
