#!/usr/bin/env python3

# Copyright (C) 2026 The slip10zk developers
#
# This file is part of slip10zk. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of slip10zk including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `slip10zk.cs.constraint_system` module."

import pytest
from py_ecc.optimized_bn128 import curve_order

from slip10zk.cs.constraint_system import (
    LC,
    MAX_REPORTED,
    ONE,
    R1CS,
    ConstraintSystem,
    Witness,
)
from slip10zk.exceptions import ZKRuntimeError, ZKValueError


def test_linear_combination() -> None:
    a = LC.from_variable(1)
    b = LC.from_variable(2, 3)
    assert a + b == {1: 1, 2: 3}
    assert a + 5 == {1: 1, ONE: 5}
    assert 5 + a == {1: 1, ONE: 5}
    assert a - b == {1: 1, 2: -3}
    assert 1 - a == {1: -1, ONE: 1}
    assert -b == {2: -3}
    assert b * 2 == {2: 6}
    assert 2 * b == {2: 6}
    assert b * 0 == {}
    assert LC.from_constant(0) == {}
    assert LC.from_constant(7).is_constant()
    assert not a.is_constant()
    assert (a - a).is_constant()
    assert (a + b + 4).evaluate([1, 10, 100]) == 314

    # operations never modify their operands
    c = a + b
    c.add_term(1, 1)
    assert a == {1: 1}
    assert c == {1: 2, 2: 3}


def test_witness_mode() -> None:
    cs = ConstraintSystem()
    assert cs.p == curve_order
    x = cs.alloc_input(3)
    y = cs.alloc(4)
    z = cs.alloc(12)
    with cs.namespace("mul"):
        cs.enforce(LC({x: 1}), LC({y: 1}), LC({z: 1}))
    cs.enforce_equal(LC({x: 1}) + 1, LC({y: 1}))
    assert cs.is_satisfied()
    assert cs.which_is_unsatisfied() is None
    assert cs.n_constraints == 2
    assert cs.n_vars == 4
    assert cs.n_inputs == 1
    assert cs.public_inputs() == [3]
    assert cs.value(LC({x: 2, z: -1})) == curve_order - 6

    # values are reduced modulo the native field
    w = cs.alloc(-1)
    cs.enforce_zero(LC({w: 1}) + 1)
    assert cs.is_satisfied()

    with cs.namespace("outer"):
        with cs.namespace("inner"):
            assert cs.current_namespace == "outer/inner"
            cs.enforce_equal(LC({x: 1}), LC({y: 1}))
    assert cs.current_namespace == ""
    assert not cs.is_satisfied()
    assert cs.n_unsatisfied == 1
    assert cs.which_is_unsatisfied() == "constraint 3 in 'outer/inner'"
    assert cs.unsatisfied() == [(3, "outer/inner")]

    for _ in range(2 * MAX_REPORTED):
        cs.enforce_zero(LC({ONE: 1}))
    assert cs.n_unsatisfied == 2 * MAX_REPORTED + 1
    assert len(cs.unsatisfied()) == MAX_REPORTED

    witness = cs.witness()
    assert witness.values[ONE] == 1
    assert witness.public_inputs == [3]
    assert Witness.from_json(witness.to_json()) == witness
    assert witness.to_dict()["values"][:3] == ["1", "3", "4"]

    err_msg = "public inputs must be allocated before private variables"
    with pytest.raises(ZKRuntimeError, match=err_msg):
        cs.alloc_input(1)
    with pytest.raises(ZKRuntimeError, match="missing witness value in "):
        cs.alloc()
    with pytest.raises(ZKRuntimeError, match="constraints have not been recorded"):
        cs.r1cs()


def test_setup_mode() -> None:
    cs = ConstraintSystem(witness=False, record=True)
    x = cs.alloc_input()
    y = cs.alloc()
    z = cs.alloc()
    cs.enforce(LC({x: 1}), LC({y: 1}), LC({z: 1}))
    cs.enforce_zero(LC({x: 1, y: 1, z: curve_order - 1}) - LC({x: 1}))
    assert cs.value(LC({x: 1})) is None

    for method in (cs.is_satisfied, cs.public_inputs, cs.witness):
        with pytest.raises(ZKRuntimeError, match="no witness in setup mode"):
            method()

    r1cs = cs.r1cs()
    assert r1cs.n_vars == 4
    assert r1cs.n_inputs == 1
    assert len(r1cs.constraints) == 2
    # zero coefficients are dropped, the others reduced
    assert r1cs.constraints[1][0] == ((y, 1), (z, curve_order - 1))
    assert r1cs.constraints[1][1] == ((ONE, 1),)
    assert R1CS.from_json(r1cs.to_json()) == r1cs

    assert r1cs.is_satisfied([1, 1, 4, 4])
    assert not r1cs.is_satisfied([1, 3, 4, 12])
    with pytest.raises(ZKValueError, match="invalid witness length: "):
        r1cs.is_satisfied([1, 3, 4])
    with pytest.raises(ZKValueError, match="invalid constant one: "):
        r1cs.is_satisfied([0, 3, 4, 4])


def test_recorded_witness() -> None:
    "The exported constraints agree with the witness evaluation."
    cs = ConstraintSystem(record=True)
    x = cs.alloc_input(5)
    y = cs.alloc(25)
    cs.enforce(LC({x: 1}), LC({x: 1}), LC({y: 1}))
    assert cs.is_satisfied()
    assert cs.r1cs().is_satisfied(cs.witness().values)

    cs.enforce(LC({x: 1}), LC({y: 1}), LC({y: 1}))
    assert not cs.is_satisfied()
    assert not cs.r1cs().is_satisfied(cs.witness().values)
