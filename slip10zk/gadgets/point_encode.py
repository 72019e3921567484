#!/usr/bin/env python3

# Copyright (C) 2026 The slip10zk developers
#
# This file is part of slip10zk. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of slip10zk including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Ed25519 point compression gadget (RFC 8032 section 5.1.2).

The 32-byte encoding is the little-endian y coordinate,
with the least significant bit of x in the most significant bit
of the last byte. Both coordinates are proven to be in [0, p):
an unreduced y would not be a canonical encoding,
an unreduced x would have the wrong parity.
"""

from typing import List

from slip10zk.cs.boolean import Boolean
from slip10zk.gadgets.edwards import EdwardsPoint
from slip10zk.gadgets.foreign_field import ForeignElement, ForeignField


class PointEncode:
    def __init__(self, field: ForeignField) -> None:
        self.field = field

    def _canonical(self, a: ForeignElement) -> ForeignElement:
        if a.bits is None:
            a = self.field.reduce(a)
        self.field.assert_canonical(a)
        return a

    def __call__(self, P: EdwardsPoint) -> List[Boolean]:
        "Return the 256 big-endian bits of the 32-byte encoding of P."

        with self.field.cs.namespace("encode"):
            x = self._canonical(P.x)
            y = self._canonical(P.y)

        assert x.bits is not None and y.bits is not None
        # little-endian integer bits
        bits = y.bits[:255] + [x.bits[0]]
        return [bits[8 * j + 7 - i] for j in range(32) for i in range(8)]
