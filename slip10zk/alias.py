#!/usr/bin/env python3

# Copyright (C) 2026 The slip10zk developers
#
# This file is part of slip10zk. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of slip10zk including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Aliases

mypy aliases, documenting also coding input conventions.
"""

from typing import Sequence, Tuple, Union

# Octets are a sequence of eight-bit bytes or a hex-string (not text string)
#
# hex-strings are strings that can be converted to bytes using bytes.fromhex,
# e.g.:
# "deadbeef"
# "dead beef"
# "3b6a27bcceb6a42d62a3a8d02a6f0d73653215771de243a63ac048a18b59da29"
#
# use slip10zk.utils.bytes_from_octets to convert Octets to bytes
#
# Octets are used for seeds (64 bytes), private keys and chain codes
# (32 bytes), and encoded public keys (32 bytes).
Octets = Union[bytes, str]

# hex-string or bytes representation of an int
Integer = Union[bytes, str, int]

# A derivation path can be represented as:
#
# - "m/44'/501'/0'/0'" or "44h/501h/0h/0h" string (all levels hardened)
# - sequence of unhardened integer indexes, e.g. [44, 501, 0, 0]
DerPath = Union[str, Sequence[int]]

# Twisted Edwards point in affine coordinates.
# The neutral element is (0, 1), a regular affine point.
Point = Tuple[int, int]

# Twisted Edwards point in extended coordinates (X, Y, Z, T),
# with x = X/Z, y = Y/Z, x*y = T/Z.
ExtPoint = Tuple[int, int, int, int]

# Neutral element in affine and extended coordinates
INF = 0, 1
INFE = 0, 1, 1, 0
