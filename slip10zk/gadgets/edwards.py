#!/usr/bin/env python3

# Copyright (C) 2026 The slip10zk developers
#
# This file is part of slip10zk. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of slip10zk including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Twisted Edwards curve gadgets over an emulated foreign field.

Affine points, with the complete addition law

    x3 = (x1*y2 + y1*x2) / (1 + d*x1*x2*y1*y2)
    y3 = (y1*y2 - a*x1*x2) / (1 - d*x1*x2*y1*y2)

which has no exceptional cases for a square and d non-square
(as for ed25519): the coordinates of the sum are witnessed,
the divisions are checked by multiplication,
and every sum is constrained to lie on the curve.

Fixed-base scalar multiplication splits the variable scalar bits
in windows: each window selects a constant multiple of the base point
with a multilinear lookup, and the selected points are added up.
"""

from typing import Dict, List, Optional, Sequence, Tuple

from slip10zk.alias import ExtPoint, Point
from slip10zk.cs.boolean import Boolean, and_
from slip10zk.cs.constraint_system import LC
from slip10zk.ed25519 import TwistedEdwardsCurve, ed25519
from slip10zk.exceptions import ZKValueError
from slip10zk.gadgets.foreign_field import ForeignElement, ForeignField


class EdwardsPoint:
    "Affine point with foreign field coordinates."

    __slots__ = ("x", "y")

    def __init__(self, x: ForeignElement, y: ForeignElement) -> None:
        self.x = x
        self.y = y

    def __repr__(self) -> str:
        return f"EdwardsPoint({self.value})"

    @property
    def value(self) -> Optional[Point]:
        "Return the coordinates as integers, None in setup mode."
        x, y = self.x.value, self.y.value
        if x is None or y is None:
            return None
        return x, y


class EdwardsGadget:
    "Point arithmetic on a twisted Edwards curve."

    def __init__(self, field: ForeignField, ec: TwistedEdwardsCurve = ed25519) -> None:
        if field.p != ec.p:
            raise ZKValueError("field and curve modulus mismatch")
        self.field = field
        self.ec = ec
        self.cs = field.cs

    def constant(self, Q: Point) -> EdwardsPoint:
        self.ec.require_on_curve(Q)
        return EdwardsPoint(self.field.constant(Q[0]), self.field.constant(Q[1]))

    def alloc(self, Q: Optional[Point] = None) -> EdwardsPoint:
        "Allocate a point constrained to be on the curve."
        x = y = None
        if Q is not None:
            x, y = Q[0] % self.ec.p, Q[1] % self.ec.p
        P = EdwardsPoint(self.field.alloc(x), self.field.alloc(y))
        self.assert_on_curve(P)
        return P

    def assert_on_curve(self, P: EdwardsPoint) -> None:
        "Enforce a*x^2 + y^2 = 1 + d*x^2*y^2."

        f = self.field
        with self.cs.namespace("on curve"):
            xx = f.mul(P.x, P.x)
            yy = f.mul(P.y, P.y)
            xxyy = f.mul(xx, yy)
            one = f.constant(1)
            f.assert_zero(
                f.scale(self.ec.a, xx)
                + yy.poly()
                - one.poly()
                - f.scale(self.ec.d, xxyy)
            )

    def add(self, P1: EdwardsPoint, P2: EdwardsPoint) -> EdwardsPoint:
        "Return P1 + P2."

        f, ec = self.field, self.ec

        value = None
        Q1, Q2 = P1.value, P2.value
        if Q1 is not None and Q2 is not None:
            value = ec.aff_from_ext(ec.add_ext(ec.ext_from_aff(Q1), ec.ext_from_aff(Q2)))

        with self.cs.namespace("add"):
            xx = f.mul(P1.x, P2.x)
            yy = f.mul(P1.y, P2.y)
            t = f.mul(xx, yy)

            x3 = f.alloc(None if value is None else value[0])
            y3 = f.alloc(None if value is None else value[1])

            # x3 + d*t*x3 = x1*y2 + y1*x2
            m = f.mul(x3, t)
            f.assert_zero(
                x3.poly()
                + f.scale(ec.d, m)
                - f.product(P1.x, P2.y)
                - f.product(P1.y, P2.x)
            )
            # y3 - d*t*y3 = y1*y2 - a*x1*x2
            n = f.mul(y3, t)
            f.assert_zero(
                y3.poly() - f.scale(ec.d, n) - yy.poly() + f.scale(ec.a, xx)
            )

            P3 = EdwardsPoint(x3, y3)
            self.assert_on_curve(P3)
        return P3

    def lookup(self, bits: Sequence[Boolean], table: Sequence[Point]) -> EdwardsPoint:
        """Return table[sum(bits[i] * 2^i)] for variable bits.

        Every coordinate limb is the multilinear polynomial in the bits
        interpolating the table: the monomials (products of bits) cost
        one constraint each, the limbs are their linear combinations.
        """

        n = len(bits)
        if len(table) != 1 << n:
            raise ZKValueError(f"invalid table size: {len(table)} for {n} bits")
        f = self.field
        w = f.limb_bits

        with self.cs.namespace("lookup"):
            # monomials[mask] = product of bits[i] for i in mask
            monomials: List[Optional[Boolean]] = [None] * (1 << n)
            for mask in range(1, 1 << n):
                top = mask.bit_length() - 1
                rest = mask ^ (1 << top)
                monomial = monomials[rest]
                monomials[mask] = (
                    bits[top] if monomial is None else and_(self.cs, monomial, bits[top])
                )

        index = None
        if all(bit.value is not None for bit in bits):
            index = sum(1 << i for i, bit in enumerate(bits) if bit.value)

        coordinates = []
        for c in range(2):
            limb_table = [
                [(Q[c] >> (w * j)) & ((1 << w) - 1) for j in range(f.n_limbs)]
                for Q in table
            ]
            limbs = []
            for j in range(f.n_limbs):
                # Moebius transform: coefficients of the multilinear polynomial
                coeffs = [row[j] for row in limb_table]
                for i in range(n):
                    for mask in range(1 << n):
                        if mask & (1 << i):
                            coeffs[mask] -= coeffs[mask ^ (1 << i)]
                limb = LC.from_constant(coeffs[0])
                for mask in range(1, 1 << n):
                    if coeffs[mask]:
                        monomial = monomials[mask]
                        assert monomial is not None
                        limb = limb + monomial.lc() * coeffs[mask]
                limbs.append(limb)
            values = None if index is None else limb_table[index]
            bounds = [max(row[j] for row in limb_table) for j in range(f.n_limbs)]
            coordinates.append(ForeignElement(limbs, values, bounds, w))

        return EdwardsPoint(coordinates[0], coordinates[1])


class PointMultiply:
    """Fixed-base scalar multiplication.

    Only the variable scalar bits are windowed:
    the multiple of the base point due to the constant bits
    is folded into the first window table.
    Tables depend only on the variable bit positions, and are
    computed once per instance.
    """

    def __init__(
        self, curve: EdwardsGadget, window_bits: int = 4, base: Optional[Point] = None
    ) -> None:
        if not 1 <= window_bits <= 8:
            raise ZKValueError(f"invalid window bits: {window_bits}")
        self.curve = curve
        self.window_bits = window_bits
        self.base = curve.ec.G if base is None else base
        curve.ec.require_on_curve(self.base)
        self._tables: Dict[Tuple[Tuple[int, ...], int], List[Point]] = {}
        self._powers: List[ExtPoint] = []

    def _power(self, i: int) -> ExtPoint:
        "Return 2^i * base in extended coordinates."
        ec = self.curve.ec
        if not self._powers:
            self._powers.append(ec.ext_from_aff(self.base))
        while len(self._powers) <= i:
            self._powers.append(ec.double_ext(self._powers[-1]))
        return self._powers[i]

    def table(self, positions: Sequence[int], offset: int = 0) -> List[Point]:
        """Return the points (offset + sum(b_i * 2^positions[i])) * base.

        Entries are indexed by the bits b_i, the first one being
        the least significant.
        """

        key = (tuple(positions), offset)
        if key not in self._tables:
            ec = self.curve.ec
            entries = [ec.mult_ext(offset, ec.ext_from_aff(self.base))]
            for i, position in enumerate(positions):
                power = self._power(position)
                entries += [ec.add_ext(entry, power) for entry in entries[: 1 << i]]
            self._tables[key] = [ec.aff_from_ext(entry) for entry in entries]
        return self._tables[key]

    def __call__(self, bits: Sequence[Boolean]) -> EdwardsPoint:
        "Return (sum(bits[i] * 2^i)) * base, bits least significant first."

        offset = 0
        positions = []
        for i, bit in enumerate(bits):
            if bit.is_constant:
                if bit.value:
                    offset += 1 << i
            else:
                positions.append(i)

        if not positions:
            return self.curve.constant(self.curve.ec.mult(offset, self.base))

        cs = self.curve.cs
        result: Optional[EdwardsPoint] = None
        for n in range(0, len(positions), self.window_bits):
            window = positions[n : n + self.window_bits]
            with cs.namespace(f"window {n // self.window_bits}"):
                table = self.table(window, offset if n == 0 else 0)
                P = self.curve.lookup([bits[i] for i in window], table)
                result = P if result is None else self.curve.add(result, P)
        assert result is not None
        return result
