#!/usr/bin/env python3

# Copyright (C) 2026 The slip10zk developers
#
# This file is part of slip10zk. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of slip10zk including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Foreign field arithmetic.

Elements of GF(p), p being the ed25519 base field prime,
are emulated in the native field of the constraint system as
n_limbs limbs of limb_bits bits, least significant first:

    a = sum(a_i * 2^(limb_bits * i))

An element is the polynomial a(X) = sum(a_i * X^i) evaluated at
X = 2^limb_bits. Limb products, linear combinations and constant
multiples are polynomial operations with integer coefficients,
whose integer range is tracked so that nothing ever wraps around
the native modulus.

The only modular operation is assert_zero: e(2^limb_bits) = 0 (mod p)
is proven with a witnessed range-checked quotient q,
e(2^limb_bits) = q * p, checked limb by limb with witnessed
range-checked carries.

Allocated elements are range-checked bit by bit to [0, 2^n_bits),
but are not necessarily reduced: assert_canonical enforces a < p.
"""

from typing import List, Optional, Sequence, Tuple

from slip10zk.cs.boolean import Boolean, alloc_bits, pack_le
from slip10zk.cs.constraint_system import LC, ConstraintSystem
from slip10zk.ed25519 import ed25519
from slip10zk.exceptions import ZKValueError

Bounds = Tuple[int, int]


def split(i: int, limb_bits: int) -> List[int]:
    "Return the minimal list of limb_bits limbs of a nonnegative integer."
    mask = (1 << limb_bits) - 1
    n_limbs = max(1, -(-i.bit_length() // limb_bits))
    return [(i >> (limb_bits * j)) & mask for j in range(n_limbs)]


def limb_widths(n_bits: int, limb_bits: int) -> List[int]:
    """Return the bit widths of the limbs of a n_bits integer.

    A short top remainder (up to 8 bits) is merged into the previous limb.
    """
    if n_bits <= 0:
        return []
    widths = [limb_bits] * (n_bits // limb_bits)
    rest = n_bits % limb_bits
    if rest:
        if widths and rest <= 8:
            widths[-1] += rest
        else:
            widths.append(rest)
    return widths


class Poly:
    """Integer polynomial with linear combination coefficients.

    values are the signed integer values of the coefficients
    (None in setup mode), bounds their (min, max) integer range.
    """

    __slots__ = ("coeffs", "values", "bounds")

    def __init__(
        self,
        coeffs: List[LC],
        values: Optional[List[int]],
        bounds: List[Bounds],
    ) -> None:
        self.coeffs = coeffs
        self.values = values
        self.bounds = bounds

    def __len__(self) -> int:
        return len(self.coeffs)

    @classmethod
    def constant(cls, coeffs: Sequence[int]) -> "Poly":
        return cls(
            [LC.from_constant(c) for c in coeffs],
            list(coeffs),
            [(c, c) for c in coeffs],
        )

    def _padded(self, n: int) -> "Poly":
        extra = n - len(self.coeffs)
        if extra <= 0:
            return self
        values = None if self.values is None else self.values + [0] * extra
        return Poly(
            self.coeffs + [LC() for _ in range(extra)],
            values,
            self.bounds + [(0, 0)] * extra,
        )

    def __add__(self, other: "Poly") -> "Poly":
        n = max(len(self), len(other))
        a = self._padded(n)
        b = other._padded(n)
        coeffs = [x + y for x, y in zip(a.coeffs, b.coeffs)]
        values = None
        if a.values is not None and b.values is not None:
            values = [x + y for x, y in zip(a.values, b.values)]
        bounds = [(x[0] + y[0], x[1] + y[1]) for x, y in zip(a.bounds, b.bounds)]
        return Poly(coeffs, values, bounds)

    def __neg__(self) -> "Poly":
        values = None if self.values is None else [-v for v in self.values]
        bounds = [(-hi, -lo) for lo, hi in self.bounds]
        return Poly([-c for c in self.coeffs], values, bounds)

    def __sub__(self, other: "Poly") -> "Poly":
        return self + (-other)

    def evaluate(self, limb_bits: int) -> Optional[int]:
        "Return the integer value at X = 2^limb_bits, None in setup mode."
        if self.values is None:
            return None
        return sum(v << (limb_bits * i) for i, v in enumerate(self.values))


class ForeignElement:
    """Foreign field element as nonnegative limbs.

    bounds are the maximum integer values of the limbs;
    bits are the range-checked bits of allocated elements,
    least significant first, None otherwise.
    """

    __slots__ = ("limbs", "values", "bounds", "limb_bits", "bits")

    def __init__(
        self,
        limbs: List[LC],
        values: Optional[List[int]],
        bounds: List[int],
        limb_bits: int,
        bits: Optional[List[Boolean]] = None,
    ) -> None:
        self.limbs = limbs
        self.values = values
        self.bounds = bounds
        self.limb_bits = limb_bits
        self.bits = bits

    def __repr__(self) -> str:
        return f"ForeignElement({self.value})"

    @property
    def is_constant(self) -> bool:
        return all(limb.is_constant() for limb in self.limbs)

    @property
    def value(self) -> Optional[int]:
        "Return the (not reduced) integer value, None in setup mode."
        if self.values is None:
            return None
        return sum(v << (self.limb_bits * i) for i, v in enumerate(self.values))

    def poly(self) -> Poly:
        values = None if self.values is None else list(self.values)
        return Poly(list(self.limbs), values, [(0, b) for b in self.bounds])


class ForeignField:
    "Arithmetic modulo p on a native constraint system."

    def __init__(
        self,
        cs: ConstraintSystem,
        p: int = ed25519.p,
        limb_bits: int = 85,
        n_limbs: int = 3,
    ) -> None:

        self.n_bits = p.bit_length()
        if limb_bits * n_limbs < self.n_bits:
            err_msg = f"{n_limbs} limbs of {limb_bits} bits"
            err_msg += f" cannot hold a {self.n_bits}-bit modulus"
            raise ZKValueError(err_msg)
        if limb_bits * (n_limbs - 1) >= self.n_bits:
            raise ZKValueError(f"too many limbs: {n_limbs}")

        self.cs = cs
        self.p = p
        self.limb_bits = limb_bits
        self.n_limbs = n_limbs
        self.widths = [limb_bits] * (n_limbs - 1)
        self.widths.append(self.n_bits - limb_bits * (n_limbs - 1))
        # p as not reduced constant limbs
        p_limbs = split(p, limb_bits)
        self.p_element = ForeignElement(
            [LC.from_constant(v) for v in p_limbs], p_limbs, list(p_limbs), limb_bits
        )

    def __repr__(self) -> str:
        return f"ForeignField({hex(self.p)}, {self.n_limbs}x{self.limb_bits})"

    def _range(self, value: Optional[int], n_bits: int) -> LC:
        "Return the packed linear combination of n_bits fresh bits."
        return pack_le(alloc_bits(self.cs, value, n_bits))

    def constant(self, c: int) -> ForeignElement:
        c %= self.p
        values = split(c, self.limb_bits)
        values += [0] * (self.n_limbs - len(values))
        limbs = [LC.from_constant(v) for v in values]
        return ForeignElement(limbs, values, list(values), self.limb_bits)

    def alloc(self, value: Optional[int] = None) -> ForeignElement:
        """Allocate an element in [0, 2^n_bits).

        Every limb is a variable, packing its range-checked bits.
        """

        cs = self.cs
        bits = alloc_bits(cs, value, self.n_bits)
        limbs: List[LC] = []
        values: Optional[List[int]] = None if value is None else []
        start = 0
        for width in self.widths:
            limb_bits = bits[start : start + width]
            limb_value = None
            if values is not None:
                limb_value = sum(1 << i for i, bit in enumerate(limb_bits) if bit.value)
                values.append(limb_value)
            index = cs.alloc(limb_value)
            cs.enforce_equal(pack_le(limb_bits), LC({index: 1}))
            limbs.append(LC({index: 1}))
            start += width
        bounds = [(1 << width) - 1 for width in self.widths]
        return ForeignElement(limbs, values, bounds, self.limb_bits, bits)

    def product(self, a: ForeignElement, b: ForeignElement) -> Poly:
        """Return the polynomial product a(X) * b(X).

        If neither factor is constant, the 2n - 1 product coefficients
        are witnessed and bound by evaluating the identity
        a(t) * b(t) = c(t) at 2n - 1 distinct points t:
        the coefficient integer ranges are far below the native modulus,
        so the native polynomial identity is an integer one.
        """

        n = len(a.limbs) + len(b.limbs) - 1
        values: Optional[List[int]] = None
        if a.values is not None and b.values is not None:
            values = [0] * n
            for i, x in enumerate(a.values):
                for j, y in enumerate(b.values):
                    values[i + j] += x * y
        bounds = [(0, 0)] * n
        for i, x in enumerate(a.bounds):
            for j, y in enumerate(b.bounds):
                bounds[i + j] = (0, bounds[i + j][1] + x * y)

        if a.is_constant or b.is_constant:
            if a.is_constant:
                a, b = b, a
            # b is constant
            assert b.values is not None
            coeffs = [LC() for _ in range(n)]
            for i, limb in enumerate(a.limbs):
                for j, c in enumerate(b.values):
                    coeffs[i + j] = coeffs[i + j] + limb * c
            return Poly(coeffs, values, bounds)

        cs = self.cs
        with cs.namespace("product"):
            coeffs = [
                LC({cs.alloc(None if values is None else values[m]): 1})
                for m in range(n)
            ]
            for t in range(n):
                a_t = LC()
                for i, limb in enumerate(a.limbs):
                    a_t = a_t + limb * t**i
                b_t = LC()
                for j, limb in enumerate(b.limbs):
                    b_t = b_t + limb * t**j
                c_t = LC()
                for m, coeff in enumerate(coeffs):
                    c_t = c_t + coeff * t**m
                cs.enforce(a_t, b_t, c_t)
        return Poly(coeffs, values, bounds)

    def scale(self, c: int, a: ForeignElement) -> Poly:
        "Return the polynomial product of a constant and an element."
        return self.product(a, self.constant(c))

    def assert_zero(self, e: Poly) -> None:
        "Enforce e(2^limb_bits) = 0 (mod p)."

        cs, p, w = self.cs, self.p, self.limb_bits

        lower = sum(lo << (w * i) for i, (lo, _) in enumerate(e.bounds))
        upper = sum(hi << (w * i) for i, (_, hi) in enumerate(e.bounds))
        # make the integer value nonnegative adding a multiple of p
        if lower < 0:
            k = -(lower // p)
            e = e + Poly.constant(split(k * p, w))
            upper += k * p

        with cs.namespace("congruence"):
            value = e.evaluate(w)
            q_value = None if value is None else value // p
            q_limbs: List[LC] = []
            q_values: Optional[List[int]] = None if q_value is None else []
            q_bounds: List[int] = []
            shift = 0
            for width in limb_widths((upper // p).bit_length(), w):
                limb_value = None
                if q_value is not None and q_values is not None:
                    limb_value = (q_value >> shift) & ((1 << width) - 1)
                    q_values.append(limb_value)
                q_limbs.append(self._range(limb_value, width))
                q_bounds.append((1 << width) - 1)
                shift += w

            # d(X) = e(X) - q(X) * p(X), with d(2^w) = 0 over the integers
            if q_limbs:
                q = ForeignElement(q_limbs, q_values, q_bounds, w)
                d = e - self.product(q, self.p_element)
            else:
                d = e

            carry = LC()
            carry_value: Optional[int] = 0
            carry_lo = carry_hi = 0
            last = len(d) - 1
            for i in range(len(d)):
                lc = d.coeffs[i] + carry
                if i == last:
                    cs.enforce_zero(lc)
                    break
                lo = d.bounds[i][0] + carry_lo
                hi = d.bounds[i][1] + carry_hi
                value_i = None
                if d.values is not None and carry_value is not None:
                    value_i = d.values[i] + carry_value
                carry_lo, carry_hi = lo >> w, hi >> w
                carry_value = None if value_i is None else value_i >> w
                n_bits = (carry_hi - carry_lo).bit_length()
                if n_bits:
                    offset = None if carry_value is None else carry_value - carry_lo
                    carry = self._range(offset, n_bits) + carry_lo
                else:
                    carry = LC.from_constant(carry_lo)
                cs.enforce_zero(lc - carry * (1 << w))

    def mul(self, a: ForeignElement, b: ForeignElement) -> ForeignElement:
        "Return a * b mod p as an allocated element."
        value = None
        if a.value is not None and b.value is not None:
            value = a.value * b.value % self.p
        with self.cs.namespace("mul"):
            r = self.alloc(value)
            self.assert_zero(self.product(a, b) - r.poly())
        return r

    def reduce(self, a: ForeignElement) -> ForeignElement:
        "Return a mod p as an allocated element."
        value = None if a.value is None else a.value % self.p
        with self.cs.namespace("reduce"):
            r = self.alloc(value)
            self.assert_zero(a.poly() - r.poly())
        return r

    def assert_equal(self, a: ForeignElement, b: ForeignElement) -> None:
        "Enforce a = b (mod p)."
        self.assert_zero(a.poly() - b.poly())

    def assert_canonical(self, a: ForeignElement) -> None:
        """Enforce a < p, for an allocated element.

        a < p if and only if a + 2^n_bits - p fits in n_bits bits.
        """

        if a.bits is None:
            raise ZKValueError("not an allocated element")
        c = (1 << self.n_bits) - self.p
        value = None if a.value is None else a.value + c
        with self.cs.namespace("canonical"):
            self.cs.enforce_equal(pack_le(a.bits) + c, self._range(value, self.n_bits))
