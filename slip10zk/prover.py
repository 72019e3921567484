#!/usr/bin/env python3

# Copyright (C) 2026 The slip10zk developers
#
# This file is part of slip10zk. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of slip10zk including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Proof generation and verification driver.

The proving system is an external collaborator: a ProvingBackend
turns a satisfying witness into a proof, and checks a proof
against the public-input vector and a verification key.
Key generation consumes the R1CS of setup_r1cs.

A witness that does not satisfy every constraint
never reaches the backend.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Union

from dataclasses_json import DataClassJsonMixin, config

from slip10zk.circuit import TwoKeysFromSameSeed
from slip10zk.config import DEFAULT_CONFIG, CircuitConfig
from slip10zk.cs.constraint_system import R1CS, ConstraintSystem, Witness
from slip10zk.exceptions import BackendError, UnsatisfiedConstraintError
from slip10zk.inputs import PublicInputs, TwoKeysInputs, n_public_inputs

logger = logging.getLogger(__name__)


@dataclass
class Proof(DataClassJsonMixin):
    backend: str = ""
    public_inputs: List[int] = field(
        default_factory=list,
        metadata=config(
            field_name="publicSignals",
            encoder=lambda vs: [str(v) for v in vs],
            decoder=lambda vs: [int(v) for v in vs],
        ),
    )
    # backend specific proof encoding
    data: Dict[str, Any] = field(default_factory=dict)


class ProvingBackend(ABC):
    name = "abstract"

    @abstractmethod
    def prove(self, witness: Witness) -> Proof:
        "Return the proof of a satisfying witness."

    @abstractmethod
    def verify(
        self, proof: Proof, public_inputs: Sequence[int], verification_key: Any
    ) -> bool:
        "Return True if the proof is valid for the public inputs."


def synthesize(
    inputs: TwoKeysInputs, cfg: CircuitConfig = DEFAULT_CONFIG, record: bool = False
) -> ConstraintSystem:
    "Return the witness-mode constraint system for inputs."

    cs = ConstraintSystem(cfg.native_modulus, witness=True, record=record)
    TwoKeysFromSameSeed(cfg).synthesize(cs, inputs)
    return cs


def setup_r1cs(cfg: CircuitConfig = DEFAULT_CONFIG) -> R1CS:
    "Return the constraint system shape, for key generation."

    cs = ConstraintSystem(cfg.native_modulus, witness=False, record=True)
    TwoKeysFromSameSeed(cfg).synthesize(cs)
    logger.info("setup: %d constraints, %d variables", cs.n_constraints, cs.n_vars)
    return cs.r1cs()


def prove(
    backend: ProvingBackend,
    inputs: TwoKeysInputs,
    cfg: CircuitConfig = DEFAULT_CONFIG,
) -> Proof:
    """Return the proof that both public keys derive from the seed.

    Raise UnsatisfiedConstraintError if they do not,
    BackendError if the backend fails.
    """

    inputs.assert_valid(cfg.depth)
    cs = synthesize(inputs, cfg)
    if not cs.is_satisfied():
        err_msg = f"{cs.n_unsatisfied} unsatisfied constraints, "
        err_msg += f"first one: {cs.which_is_unsatisfied()}"
        logger.info("proof not generated: %s", err_msg)
        raise UnsatisfiedConstraintError(err_msg)

    witness = cs.witness()
    try:
        proof = backend.prove(witness)
    except BackendError:
        raise
    except Exception as e:
        raise BackendError(f"{backend.name} prove failed: {e}") from e
    if proof.public_inputs != witness.public_inputs:
        raise BackendError(f"{backend.name} proof public inputs mismatch")

    logger.info("proof generated by %s", backend.name)
    return proof


def verify(
    backend: ProvingBackend,
    proof: Proof,
    public_inputs: Union[PublicInputs, Sequence[int]],
    verification_key: Any,
    depth: Optional[int] = None,
) -> bool:
    "Return True if the proof is valid for the public inputs."

    depth = DEFAULT_CONFIG.depth if depth is None else depth
    if isinstance(public_inputs, PublicInputs):
        vector = public_inputs.vector()
    else:
        vector = [int(i) for i in public_inputs]

    if len(vector) != n_public_inputs(depth):
        logger.warning(
            "rejected: %d public inputs instead of %d",
            len(vector),
            n_public_inputs(depth),
        )
        return False
    if proof.public_inputs != vector:
        logger.warning("rejected: proof for different public inputs")
        return False

    try:
        result = bool(backend.verify(proof, vector, verification_key))
    except BackendError:
        raise
    except Exception as e:
        raise BackendError(f"{backend.name} verify failed: {e}") from e

    logger.info("proof %s by %s", "verified" if result else "rejected", backend.name)
    return result
