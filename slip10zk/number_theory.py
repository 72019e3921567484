#!/usr/bin/env python3

# Copyright (C) 2026 The slip10zk developers
#
# This file is part of slip10zk. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of slip10zk including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Modular arithmetic over the prime fields of ed25519.

Square roots are restricted to the prime moduli used here
(p = 3 mod 4 and p = 5 mod 8, the latter being the ed25519 case).
"""

from slip10zk.exceptions import ZKValueError
from slip10zk.utils import hex_string

HEX_THRESHOLD = 0xFFFFFFFF


def _fmt(i: int) -> str:
    return f"'{hex_string(i)}'" if i > HEX_THRESHOLD else f"{i}"


def mod_inv(a: int, m: int) -> int:
    "Return the inverse of a (mod m). m does not have to be a prime."

    a %= m
    try:
        return pow(a, -1, m)
    except ValueError as e:
        raise ZKValueError(f"No inverse for {_fmt(a)} mod {_fmt(m)}") from e


def mod_sqrt(a: int, p: int) -> int:
    """Return a quadratic residue (mod p) of a; p must be a prime.

    Solve the equation:
        x^2 = a mod p

    and return x. Note that p - x is also a root.
    """

    a %= p

    if p % 4 == 3:
        # inverse candidate is pow(a, (p + 1) // 4, p)
        r = pow(a, (p >> 2) + 1, p)
    elif p % 8 == 5:  # ed25519 case
        # inverse candidate is pow(a, (p + 3) // 8, p)
        r = pow(a, (p >> 3) + 1, p)
        if r * r % p == a:
            return r
        # another inverse candidate
        r = r * pow(2, p >> 2, p) % p
    else:
        raise ZKValueError(f"unsupported modulus for square root: {_fmt(p)}")

    if r * r % p != a:
        raise ZKValueError(f"no root for {_fmt(a)} mod {_fmt(p)}")
    return r
