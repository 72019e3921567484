#!/usr/bin/env python3

# Copyright (C) 2026 The slip10zk developers
#
# This file is part of slip10zk. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of slip10zk including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Boolean gadget.

A Boolean is either a constant, or a variable constrained to {0, 1},
possibly negated. Negation and any operation involving constants
are folded without constraints, so that hashing constant data
(e.g. the HMAC key pad of a constant key) costs nothing.

The value of a variable Boolean is None in setup mode.
"""

from typing import List, Optional

from slip10zk.cs.constraint_system import LC, ONE, ConstraintSystem


class Boolean:

    __slots__ = ("index", "value", "negated")

    def __init__(
        self, index: Optional[int], value: Optional[bool], negated: bool = False
    ) -> None:
        # index None means constant
        self.index = index
        self.value = value
        self.negated = negated

    def __repr__(self) -> str:
        if self.index is None:
            return f"Boolean.constant({self.value})"
        sign = "~" if self.negated else ""
        return f"Boolean({sign}{self.index}, {self.value})"

    @staticmethod
    def constant(value: bool) -> "Boolean":
        return TRUE if value else FALSE

    @property
    def is_constant(self) -> bool:
        return self.index is None

    def lc(self) -> LC:
        "Return the linear combination evaluating to the Boolean value."
        if self.index is None:
            return LC({ONE: 1}) if self.value else LC()
        if self.negated:
            return LC({ONE: 1, self.index: -1})
        return LC({self.index: 1})

    def __invert__(self) -> "Boolean":
        if self.index is None:
            return FALSE if self.value else TRUE
        value = None if self.value is None else not self.value
        return Boolean(self.index, value, not self.negated)


TRUE = Boolean(None, True)
FALSE = Boolean(None, False)


def alloc_bit(cs: ConstraintSystem, value: Optional[bool] = None) -> Boolean:
    "Allocate a variable Boolean, enforcing b * (1 - b) = 0."
    index = cs.alloc(None if value is None else int(value))
    cs.enforce(LC({index: 1}), LC({ONE: 1, index: -1}), LC())
    return Boolean(index, None if value is None else bool(value))


def alloc_bits(
    cs: ConstraintSystem, value: Optional[int], n_bits: int
) -> List[Boolean]:
    """Allocate the n_bits least significant bits of value, LSB first.

    Negative values are taken in two's complement: the bits are
    always allocated, and an out of range value just fails to satisfy
    whatever packing constraint the caller enforces.
    """
    if value is None:
        return [alloc_bit(cs) for _ in range(n_bits)]
    return [alloc_bit(cs, bool((value >> i) & 1)) for i in range(n_bits)]


def pack_le(bits: List[Boolean]) -> LC:
    "Return the linear combination sum(b_i * 2^i), LSB first."
    result = LC()
    constant = 0
    for i, bit in enumerate(bits):
        if bit.index is None:
            if bit.value:
                constant += 1 << i
        elif bit.negated:
            constant += 1 << i
            result.add_term(bit.index, -(1 << i))
        else:
            result.add_term(bit.index, 1 << i)
    if constant:
        result.add_term(ONE, constant)
    return result


def xor(cs: ConstraintSystem, a: Boolean, b: Boolean) -> Boolean:
    "Return a XOR b."

    if a.index is None:
        return ~b if a.value else b
    if b.index is None:
        return ~a if b.value else a
    if a.index == b.index:
        return Boolean.constant(a.negated != b.negated)

    # a XOR ~b = ~(a XOR b): operate on the underlying variables
    negated = a.negated != b.negated
    value = None if a.value is None or b.value is None else a.value != b.value
    raw = None if value is None else int(value != negated)
    index = cs.alloc(raw)
    # (2a) * (b) = a + b - c
    cs.enforce(
        LC({a.index: 2}),
        LC({b.index: 1}),
        LC({a.index: 1, b.index: 1, index: -1}),
    )
    return Boolean(index, value, negated)


def and_(cs: ConstraintSystem, a: Boolean, b: Boolean) -> Boolean:
    "Return a AND b."

    if a.index is None:
        return b if a.value else FALSE
    if b.index is None:
        return a if b.value else FALSE
    if a.index == b.index:
        return a if a.negated == b.negated else FALSE

    value = None if a.value is None or b.value is None else a.value and b.value
    index = cs.alloc(None if value is None else int(value))
    cs.enforce(a.lc(), b.lc(), LC({index: 1}))
    return Boolean(index, value)


def ch(cs: ConstraintSystem, a: Boolean, b: Boolean, c: Boolean) -> Boolean:
    "Return b if a else c, i.e. (a AND b) XOR (NOT a AND c)."

    if a.index is None:
        return b if a.value else c
    if b.index is None and c.index is None:
        if b.value == c.value:
            return b
        return a if b.value else ~a

    if a.value is None or b.value is None or c.value is None:
        value = None
    else:
        value = b.value if a.value else c.value
    index = cs.alloc(None if value is None else int(value))
    # a * (b - c) = ch - c
    cs.enforce(a.lc(), b.lc() - c.lc(), LC({index: 1}) - c.lc())
    return Boolean(index, value)


def maj(cs: ConstraintSystem, a: Boolean, b: Boolean, c: Boolean) -> Boolean:
    "Return the majority of a, b, c: c if a != b else a."
    return ch(cs, xor(cs, a, b), c, a)


def enforce_equal(cs: ConstraintSystem, a: Boolean, b: Boolean) -> None:
    cs.enforce_equal(a.lc(), b.lc())
