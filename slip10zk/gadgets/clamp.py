#!/usr/bin/env python3

# Copyright (C) 2026 The slip10zk developers
#
# This file is part of slip10zk. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of slip10zk including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""From a 32-byte private key to the RFC 8032 clamped secret scalar.

h = SHA-512(k), and the scalar is h[:32] read as a little-endian
integer, with bits 0, 1, 2, 255 cleared and bit 254 set.
"""

from typing import List, Optional, Sequence

from slip10zk.cs.boolean import FALSE, TRUE, Boolean
from slip10zk.exceptions import ZKValueError
from slip10zk.gadgets.sha512 import Sha512Core

SCALAR_BITS = 256


class ClampedScalar:
    "256 scalar bits, least significant first."

    __slots__ = ("bits",)

    def __init__(self, bits: List[Boolean]) -> None:
        if len(bits) != SCALAR_BITS:
            raise ZKValueError(f"invalid number of scalar bits: {len(bits)}")
        self.bits = bits

    @property
    def value(self) -> Optional[int]:
        result = 0
        for i, bit in enumerate(self.bits):
            if bit.value is None:
                return None
            if bit.value:
                result |= 1 << i
        return result


def expand_private_key(sha512: Sha512Core, key: Sequence[Boolean]) -> List[Boolean]:
    "Return the first 32 bytes of SHA-512(key), as 256 big-endian bits."
    if len(key) != 256:
        raise ZKValueError(f"invalid private key size: {len(key)} bits")
    with sha512.cs.namespace("key expansion"):
        return sha512.digest(key)[:256]


def scalar_clamp(data: Sequence[Boolean]) -> ClampedScalar:
    """Return the clamped little-endian scalar of 32 bytes.

    The input bits are already constrained to {0, 1}:
    reading them little-endian is rewiring only,
    and the clamped bits become constants.
    """

    if len(data) != 256:
        raise ZKValueError(f"invalid size: {len(data)} bits instead of 256")

    # bit i of byte j is at position 8 * j + 7 - i of the big-endian bits
    bits = [data[8 * j + 7 - i] for j in range(32) for i in range(8)]
    bits[0] = bits[1] = bits[2] = FALSE
    bits[254] = TRUE
    bits[255] = FALSE
    return ClampedScalar(bits)
