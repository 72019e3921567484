#!/usr/bin/env python3

# Copyright (C) 2026 The slip10zk developers
#
# This file is part of slip10zk. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of slip10zk including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Rank-1 constraint system.

A constraint is <A,w> * <B,w> = <C,w> (mod r), where w is the
assignment vector, A, B, C are linear combinations of its entries,
and r is the native field modulus.

The assignment vector layout is

- [0] the constant one
- [1 : 1 + n_inputs] public inputs
- [1 + n_inputs :] private variables

so that public inputs must be allocated before any private variable.

A ConstraintSystem is either in setup mode (no witness,
only the shape of the circuit) or in witness mode:
values are supplied at allocation time and every constraint is
evaluated as soon as it is enforced.
A violated constraint is never an exception: it is recorded,
and satisfiability is queried with is_satisfied().
"""

import contextlib
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from dataclasses_json import DataClassJsonMixin, config
from py_ecc.optimized_bn128 import curve_order

from slip10zk.exceptions import ZKRuntimeError, ZKValueError

# index of the constant-one variable
ONE = 0

# unsatisfied constraints reported by which_is_unsatisfied
MAX_REPORTED = 16


class LinearCombination(dict):
    """Sparse linear combination of variables: {index: coefficient}.

    Coefficients are plain (possibly negative) integers,
    reduced modulo the native field only on evaluation and export.
    Integers are accepted as constant linear combinations.
    """

    __slots__ = ()

    @classmethod
    def from_constant(cls, c: int) -> "LinearCombination":
        return cls({ONE: c}) if c else cls()

    @classmethod
    def from_variable(cls, index: int, coeff: int = 1) -> "LinearCombination":
        return cls({index: coeff})

    def __add__(self, other) -> "LinearCombination":  # type: ignore
        result = LinearCombination(self)
        if isinstance(other, int):
            if other:
                result[ONE] = result.get(ONE, 0) + other
            return result
        for k, v in other.items():
            result[k] = result.get(k, 0) + v
        return result

    __radd__ = __add__

    def __neg__(self) -> "LinearCombination":
        return LinearCombination({k: -v for k, v in self.items()})

    def __sub__(self, other) -> "LinearCombination":
        if isinstance(other, int):
            return self + (-other)
        result = LinearCombination(self)
        for k, v in other.items():
            result[k] = result.get(k, 0) - v
        return result

    def __rsub__(self, other) -> "LinearCombination":
        return (-self) + other

    def __mul__(self, c: int) -> "LinearCombination":  # type: ignore
        if not c:
            return LinearCombination()
        return LinearCombination({k: v * c for k, v in self.items()})

    __rmul__ = __mul__

    def add_term(self, index: int, coeff: int) -> None:
        "In-place accumulation, only for combinations still being built."
        self[index] = self.get(index, 0) + coeff

    def is_constant(self) -> bool:
        return all(k == ONE or not v for k, v in self.items())

    def evaluate(self, values: Sequence[int]) -> int:
        "Return the (unreduced) value for the assignment values."
        return sum(values[k] * v for k, v in self.items())


LC = LinearCombination


def _encode_lc(lc: Sequence[Tuple[int, int]]) -> Dict[str, str]:
    return {str(k): str(v) for k, v in lc}


def _decode_lc(lc: Dict[str, str]) -> Tuple[Tuple[int, int], ...]:
    return tuple((int(k), int(v)) for k, v in lc.items())


def _evaluate_terms(terms: Sequence[Tuple[int, int]], values: Sequence[int]) -> int:
    return sum(values[k] * v for k, v in terms)


@dataclass
class R1CS(DataClassJsonMixin):
    "Exported constraint system, coefficients reduced modulo the native field."

    modulus: int = field(metadata=config(encoder=str, decoder=int))
    n_vars: int
    n_inputs: int
    constraints: List[Tuple[Tuple[Tuple[int, int], ...], ...]] = field(
        default_factory=list,
        metadata=config(
            encoder=lambda cs: [[_encode_lc(lc) for lc in c] for c in cs],
            decoder=lambda cs: [tuple(_decode_lc(lc) for lc in c) for c in cs],
        ),
    )

    def is_satisfied(self, witness: Sequence[int]) -> bool:
        "Return True if the full assignment vector satisfies every constraint."
        if len(witness) != self.n_vars:
            err_msg = f"invalid witness length: {len(witness)}"
            err_msg += f" instead of {self.n_vars}"
            raise ZKValueError(err_msg)
        if witness[ONE] != 1:
            raise ZKValueError(f"invalid constant one: {witness[ONE]}")
        p = self.modulus
        for a, b, c in self.constraints:
            va = _evaluate_terms(a, witness)
            vb = _evaluate_terms(b, witness)
            vc = _evaluate_terms(c, witness)
            if (va * vb - vc) % p:
                return False
        return True


@dataclass
class Witness(DataClassJsonMixin):
    "Full assignment vector, public inputs first."

    modulus: int = field(metadata=config(encoder=str, decoder=int))
    n_inputs: int
    values: List[int] = field(
        default_factory=list,
        metadata=config(
            encoder=lambda vs: [str(v) for v in vs],
            decoder=lambda vs: [int(v) for v in vs],
        ),
    )

    @property
    def public_inputs(self) -> List[int]:
        return self.values[1 : 1 + self.n_inputs]


class ConstraintSystem:
    """R1CS builder and witness evaluator.

    In witness mode every constraint is checked when enforced,
    the first violated ones being reported with the namespace
    under which they were enforced.
    Constraints are stored only if record is True
    (the full circuit has millions of them).
    """

    def __init__(
        self, modulus: int = curve_order, witness: bool = True, record: bool = False
    ) -> None:

        self.p = modulus
        self.has_witness = witness
        self.record = record

        self.values: List[int] = [1] if witness else []
        self.n_vars = 1
        self.n_inputs = 0
        self.n_constraints = 0
        self.constraints: List[Tuple[Tuple[Tuple[int, int], ...], ...]] = []

        self.n_unsatisfied = 0
        self._unsatisfied: List[Tuple[int, str]] = []
        self._namespace: List[str] = []

    def __repr__(self) -> str:
        mode = "witness" if self.has_witness else "setup"
        result = f"ConstraintSystem({mode}, {self.n_constraints} constraints"
        return result + f", {self.n_vars} variables, {self.n_inputs} public inputs)"

    @contextlib.contextmanager
    def namespace(self, name: str) -> Iterator[None]:
        "Annotate the constraints enforced within the context."
        self._namespace.append(name)
        try:
            yield
        finally:
            self._namespace.pop()

    @property
    def current_namespace(self) -> str:
        return "/".join(self._namespace)

    def alloc(self, value: Optional[int] = None) -> int:
        "Allocate a private variable and return its index."
        if self.has_witness:
            if value is None:
                err_msg = f"missing witness value in '{self.current_namespace}'"
                raise ZKRuntimeError(err_msg)
            self.values.append(value % self.p)
        index = self.n_vars
        self.n_vars += 1
        return index

    def alloc_input(self, value: Optional[int] = None) -> int:
        "Allocate a public input and return its index."
        if self.n_vars != self.n_inputs + 1:
            err_msg = "public inputs must be allocated before private variables"
            raise ZKRuntimeError(err_msg)
        index = self.alloc(value)
        self.n_inputs += 1
        return index

    def enforce(self, a: LC, b: LC, c: LC) -> None:
        "Enforce a * b = c."

        self.n_constraints += 1
        if self.record:
            self.constraints.append(
                (tuple(a.items()), tuple(b.items()), tuple(c.items()))
            )
        if self.has_witness:
            values = self.values
            va = sum(values[k] * v for k, v in a.items())
            vb = sum(values[k] * v for k, v in b.items())
            vc = sum(values[k] * v for k, v in c.items())
            if (va * vb - vc) % self.p:
                self._report()

    def enforce_zero(self, a: LC) -> None:
        "Enforce a * 1 = 0."
        self.enforce(a, LC({ONE: 1}), LC())

    def enforce_equal(self, a: LC, b: LC) -> None:
        "Enforce (a - b) * 1 = 0."
        self.enforce_zero(a - b)

    def _report(self) -> None:
        self.n_unsatisfied += 1
        if len(self._unsatisfied) < MAX_REPORTED:
            self._unsatisfied.append((self.n_constraints - 1, self.current_namespace))

    def value(self, lc: LC) -> Optional[int]:
        "Return the value of a linear combination, None in setup mode."
        if not self.has_witness:
            return None
        return lc.evaluate(self.values) % self.p

    def is_satisfied(self) -> bool:
        if not self.has_witness:
            raise ZKRuntimeError("no witness in setup mode")
        return self.n_unsatisfied == 0

    def which_is_unsatisfied(self) -> Optional[str]:
        "Return the namespace of the first unsatisfied constraint, if any."
        if not self.is_satisfied():
            index, namespace = self._unsatisfied[0]
            return f"constraint {index} in '{namespace}'"
        return None

    def unsatisfied(self) -> List[Tuple[int, str]]:
        "Return index and namespace of the first unsatisfied constraints."
        return list(self._unsatisfied)

    def public_inputs(self) -> List[int]:
        if not self.has_witness:
            raise ZKRuntimeError("no witness in setup mode")
        return self.values[1 : 1 + self.n_inputs]

    def witness(self) -> Witness:
        if not self.has_witness:
            raise ZKRuntimeError("no witness in setup mode")
        return Witness(self.p, self.n_inputs, list(self.values))

    def r1cs(self) -> R1CS:
        "Return the recorded constraints, reduced modulo the native field."
        if not self.record:
            raise ZKRuntimeError("constraints have not been recorded")
        p = self.p
        constraints = [
            tuple(tuple((k, v % p) for k, v in lc if v % p) for lc in constraint)
            for constraint in self.constraints
        ]
        return R1CS(p, self.n_vars, self.n_inputs, constraints)
