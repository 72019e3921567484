#!/usr/bin/env python3

# Copyright (C) 2026 The slip10zk developers
#
# This file is part of slip10zk. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of slip10zk including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `slip10zk.gadgets.edwards` module."

import pytest

from slip10zk.alias import INF
from slip10zk.cs.boolean import FALSE, TRUE, alloc_bits
from slip10zk.cs.constraint_system import ConstraintSystem
from slip10zk.ed25519 import ed25519 as ec
from slip10zk.exceptions import ZKValueError
from slip10zk.gadgets.edwards import EdwardsGadget, PointMultiply
from slip10zk.gadgets.foreign_field import ForeignField


def _curve(cs: ConstraintSystem) -> EdwardsGadget:
    return EdwardsGadget(ForeignField(cs))


def test_constructor() -> None:
    cs = ConstraintSystem()
    with pytest.raises(ZKValueError, match="field and curve modulus mismatch"):
        EdwardsGadget(ForeignField(cs, p=2**127 - 1, n_limbs=2))


def test_constant() -> None:
    cs = ConstraintSystem()
    curve = _curve(cs)
    G = curve.constant(ec.G)
    assert G.value == ec.G
    assert cs.n_constraints == 0
    with pytest.raises(ZKValueError, match="point not on curve"):
        curve.constant((1, 1))


def test_alloc() -> None:
    cs = ConstraintSystem()
    curve = _curve(cs)
    for Q in (ec.G, INF, ec.mult(12345)):
        assert curve.alloc(Q).value == Q
    assert cs.is_satisfied()

    # off-curve witness
    cs = ConstraintSystem()
    _curve(cs).alloc((1, 1))
    assert not cs.is_satisfied()


def test_add() -> None:
    cs = ConstraintSystem()
    curve = _curve(cs)
    P3 = curve.alloc(ec.mult(3))
    P5 = curve.alloc(ec.mult(5))
    assert curve.add(P3, P5).value == ec.mult(8)
    # doubling and identity need no special case
    assert curve.add(P3, P3).value == ec.mult(6)
    assert curve.add(P3, curve.alloc(INF)).value == ec.mult(3)
    assert curve.add(P3, curve.alloc(ec.negate(ec.mult(3)))).value == INF
    # constant addend
    assert curve.add(P5, curve.constant(ec.G)).value == ec.mult(6)
    assert cs.is_satisfied()


def test_lookup() -> None:
    table = [ec.mult(i + 1) for i in range(4)]
    for i in range(4):
        cs = ConstraintSystem()
        curve = _curve(cs)
        P = curve.lookup(alloc_bits(cs, i, 2), table)
        assert P.value == table[i]
        assert cs.is_satisfied()
        # a single product monomial
        assert cs.n_constraints == 2 + 1

    cs = ConstraintSystem()
    curve = _curve(cs)
    with pytest.raises(ZKValueError, match="invalid table size: "):
        curve.lookup(alloc_bits(cs, 0, 3), table)


def test_table() -> None:
    pm = PointMultiply(_curve(ConstraintSystem()))
    table = pm.table([0, 1])
    assert table == [INF, ec.mult(1), ec.mult(2), ec.mult(3)]
    assert pm.table([0, 1]) is table
    assert pm.table([2, 5], 3) == [ec.mult(3 + k) for k in (0, 4, 32, 36)]


def test_point_multiply() -> None:
    for k in (0, 1, 2, 77, 255):
        cs = ConstraintSystem()
        pm = PointMultiply(_curve(cs))
        P = pm(alloc_bits(cs, k, 8))
        assert P.value == ec.mult(k)
        assert cs.is_satisfied()


def test_point_multiply_constant_bits() -> None:
    "Constant bits are folded into the first window."
    cs = ConstraintSystem()
    pm = PointMultiply(_curve(cs), window_bits=3)
    bits = [FALSE] * 3 + alloc_bits(cs, 5, 4) + [TRUE] + [FALSE] * 2 + [TRUE]
    P = pm(bits)
    assert P.value == ec.mult(5 * 8 + 2**7 + 2**10)
    assert cs.is_satisfied()

    cs = ConstraintSystem()
    P = PointMultiply(_curve(cs))([TRUE, FALSE, TRUE])
    assert P.value == ec.mult(5)
    assert cs.n_constraints == 0


def test_point_multiply_base() -> None:
    base = ec.mult(9)
    cs = ConstraintSystem()
    pm = PointMultiply(_curve(cs), window_bits=2, base=base)
    assert pm(alloc_bits(cs, 13, 5)).value == ec.mult(13, base)
    assert cs.is_satisfied()

    with pytest.raises(ZKValueError, match="point not on curve"):
        PointMultiply(_curve(cs), base=(1, 1))
    for window_bits in (0, 9):
        with pytest.raises(ZKValueError, match="invalid window bits: "):
            PointMultiply(_curve(cs), window_bits)


def test_setup_mode() -> None:
    "The circuit shape does not depend on the witness."
    counts = []
    for cs, k in ((ConstraintSystem(witness=False), None), (ConstraintSystem(), 99)):
        PointMultiply(_curve(cs))(alloc_bits(cs, k, 8))
        counts.append((cs.n_constraints, cs.n_vars))
    assert counts[0] == counts[1]
