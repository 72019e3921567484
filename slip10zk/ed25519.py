#!/usr/bin/env python3

# Copyright (C) 2026 The slip10zk developers
#
# This file is part of slip10zk. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of slip10zk including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Twisted Edwards curve group and Ed25519 key generation.

Native (out-of-circuit) reference implementation, used to compute
expected public keys and the constant tables of the fixed-base
multiplication gadget.

The curve is the set of points (x, y) solving a*x^2 + y^2 = 1 + d*x^2*y^2
over Fp. With a a square and d a non-square (as for ed25519)
the addition law is complete: no exceptional cases.

Group operations are performed in extended coordinates (X, Y, Z, T),
x = X/Z, y = Y/Z, x*y = T/Z, see
https://eprint.iacr.org/2008/522 (Hisil, Wong, Carter, Dawson).

Key generation follows RFC 8032 section 5.1.5:
https://datatracker.ietf.org/doc/html/rfc8032#section-5.1.5
"""

import hashlib
from math import ceil
from typing import Optional

from slip10zk.alias import INF, INFE, ExtPoint, Integer, Octets, Point
from slip10zk.exceptions import ZKTypeError, ZKValueError
from slip10zk.number_theory import mod_inv, mod_sqrt
from slip10zk.utils import bytes_from_octets, hex_string, int_from_integer

HEX_THRESHOLD = 0xFFFFFFFF


class TwistedEdwardsCurve:
    """Prime order subgroup of a twisted Edwards curve over Fp.

    The curve is defined by a*x^2 + y^2 = 1 + d*x^2*y^2,
    with a, d in Fp, a != d, and a*d != 0.
    The subgroup is generated by G, of prime order n;
    the curve has cardinality h*n (h being the cofactor).
    """

    def __init__(
        self,
        p: Integer,
        a: Integer,
        d: Integer,
        G: Point,
        n: Integer,
        h: int,
    ) -> None:

        p = int_from_integer(p)
        a = int_from_integer(a)
        d = int_from_integer(d)
        n = int_from_integer(n)

        # Fermat test will do as _probabilistic_ primality test...
        if p < 2 or p % 2 == 0 or pow(2, p - 1, p) != 1:
            err_msg = "p is not prime: "
            err_msg += f"'{hex_string(p)}'" if p > HEX_THRESHOLD else f"{p}"
            raise ZKValueError(err_msg)
        self.p = p
        self.p_size = ceil(p.bit_length() / 8)

        for name, value in (("a", a), ("d", d)):
            if not 0 < value < p:
                raise ZKValueError(f"{name} not in 1..p-1: {hex_string(value)}")
        if a == d:
            raise ZKValueError("a == d: singular curve")
        self.a = a
        self.d = d

        if not self.is_on_curve(G):
            raise ZKValueError("generator is not on curve")
        self.G = G[0] % p, G[1] % p
        self.GE = self.ext_from_aff(self.G)
        self.n = n
        self.h = h
        if self.aff_from_ext(self.mult_ext(n, self.GE)) != INF:
            raise ZKValueError("n is not the generator order")

    def __repr__(self) -> str:
        result = "TwistedEdwardsCurve("
        result += f"'{hex_string(self.p)}', '{hex_string(self.a)}'"
        result += f", '{hex_string(self.d)}'"
        result += f", ('{hex_string(self.G[0])}', '{hex_string(self.G[1])}')"
        result += f", '{hex_string(self.n)}', {self.h})"
        return result

    def is_on_curve(self, Q: Point) -> bool:
        "Return True if the affine point is on the curve."
        if len(Q) != 2:
            raise ZKTypeError("not a point")
        x, y = Q[0] % self.p, Q[1] % self.p
        x2, y2 = x * x, y * y
        return (self.a * x2 + y2 - 1 - self.d * x2 * y2) % self.p == 0

    def require_on_curve(self, Q: Point) -> None:
        if not self.is_on_curve(Q):
            raise ZKValueError("point not on curve")

    def negate(self, Q: Point) -> Point:
        return (self.p - Q[0]) % self.p, Q[1]

    @staticmethod
    def ext_from_aff(Q: Point) -> ExtPoint:
        "Return the extended representation of the affine point."
        return Q[0], Q[1], 1, Q[0] * Q[1]

    def aff_from_ext(self, Q: ExtPoint) -> Point:
        # point is assumed to be on curve
        z_inv = mod_inv(Q[2], self.p)
        return Q[0] * z_inv % self.p, Q[1] * z_inv % self.p

    def add_ext(self, Q1: ExtPoint, Q2: ExtPoint) -> ExtPoint:
        "Return the sum of two points in extended coordinates."
        p = self.p
        X1, Y1, Z1, T1 = Q1
        X2, Y2, Z2, T2 = Q2
        A = X1 * X2 % p
        B = Y1 * Y2 % p
        C = T1 * self.d * T2 % p
        D = Z1 * Z2 % p
        E = ((X1 + Y1) * (X2 + Y2) - A - B) % p
        F = (D - C) % p
        G = (D + C) % p
        H = (B - self.a * A) % p
        return E * F % p, G * H % p, F * G % p, E * H % p

    def double_ext(self, Q: ExtPoint) -> ExtPoint:
        "Return the double of a point in extended coordinates."
        p = self.p
        X1, Y1, Z1, _ = Q
        A = X1 * X1 % p
        B = Y1 * Y1 % p
        C = 2 * Z1 * Z1 % p
        D = self.a * A % p
        E = ((X1 + Y1) * (X1 + Y1) - A - B) % p
        G = (D + B) % p
        F = (G - C) % p
        H = (D - B) % p
        return E * F % p, G * H % p, F * G % p, E * H % p

    def add(self, Q1: Point, Q2: Point) -> Point:
        """Return the sum of two points.

        The input points must be on the curve.
        """
        self.require_on_curve(Q1)
        self.require_on_curve(Q2)
        QE = self.add_ext(self.ext_from_aff(Q1), self.ext_from_aff(Q2))
        return self.aff_from_ext(QE)

    def mult_ext(self, m: int, Q: ExtPoint) -> ExtPoint:
        "Return m*Q using double and add, most significant bit first."
        if m < 0:
            raise ZKValueError(f"negative m: {hex(m)}")
        R = INFE
        for i in reversed(range(m.bit_length())):
            R = self.double_ext(R)
            if (m >> i) & 1:
                R = self.add_ext(R, Q)
        return R

    def mult(self, m: Integer, Q: Optional[Point] = None) -> Point:
        """Return the point multiplication m*Q.

        The default point is the generator G.
        """
        m = int_from_integer(m)
        if Q is None:
            Q = self.G
        else:
            self.require_on_curve(Q)
        return self.aff_from_ext(self.mult_ext(m, self.ext_from_aff(Q)))

    def x_from_y(self, y: int, odd: bool) -> int:
        "Return the x-coordinate with the required parity."
        p = self.p
        y2 = y * y % p
        x2 = (y2 - 1) * mod_inv(self.d * y2 - self.a, p) % p
        x = mod_sqrt(x2, p)
        if x == 0 and odd:
            raise ZKValueError(f"invalid sign bit for x = 0: {hex_string(y)}")
        return p - x if (x & 1) != odd else x

    def encode(self, Q: Point) -> bytes:
        """Return the compressed encoding of a point.

        little-endian y, with the parity of x stored in the top bit
        of the last byte
        """
        self.require_on_curve(Q)
        x, y = Q[0] % self.p, Q[1] % self.p
        return (y | (x & 1) << (8 * self.p_size - 1)).to_bytes(
            self.p_size, byteorder="little", signed=False
        )

    def decode(self, encoded: Octets) -> Point:
        "Return the point from its compressed encoding."
        encoded = bytes_from_octets(encoded, self.p_size)
        i = int.from_bytes(encoded, byteorder="little", signed=False)
        top_bit = 8 * self.p_size - 1
        y = i & ((1 << top_bit) - 1)
        if y >= self.p:
            raise ZKValueError(f"y-coordinate not in 0..p-1: {hex_string(y)}")
        x = self.x_from_y(y, bool(i >> top_bit))
        return x, y


_P = 2**255 - 19
ed25519 = TwistedEdwardsCurve(
    p=_P,
    a=_P - 1,
    d=-121665 * mod_inv(121666, _P) % _P,
    G=(
        0x216936D3CD6E53FEC0A4E231FDD6DC5C692CC7609525A7B2C9562D608F25D51A,
        0x6666666666666666666666666666666666666666666666666666666666666658,
    ),
    n=2**252 + 0x14DEF9DEA2F79CD65812631A5CF5D3ED,
    h=8,
)


def clamp(k: Octets) -> int:
    """Return the clamped scalar from a 32-byte little-endian string.

    The three least significant bits are cleared,
    bit 254 is set, bit 255 is cleared.
    """
    k = bytes_from_octets(k, 32)
    s = int.from_bytes(k, byteorder="little", signed=False)
    s &= (1 << 254) - 8
    s |= 1 << 254
    return s


def secret_scalar(prv_key: Octets) -> int:
    "Return the RFC 8032 secret scalar of a 32-byte private key."
    prv_key = bytes_from_octets(prv_key, 32)
    return clamp(hashlib.sha512(prv_key).digest()[:32])


def pub_key_from_prv_key(prv_key: Octets, ec: TwistedEdwardsCurve = ed25519) -> bytes:
    "Return the 32-byte encoded public key of a 32-byte private key."
    return ec.encode(ec.mult(secret_scalar(prv_key)))
