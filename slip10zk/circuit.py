#!/usr/bin/env python3

# Copyright (C) 2026 The slip10zk developers
#
# This file is part of slip10zk. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of slip10zk including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Two ed25519 public keys derived from the same seed.

Public inputs: pubkey1, pubkey2 (one element per byte), path1, path2
(unhardened indexes). Secret witness: the 64-byte seed.

The circuit derives the SLIP-0010 master key from the seed once,
then for each path derives the hardened child keys,
expands and clamps the last one into the secret scalar,
multiplies the ed25519 base point and encodes the result:
the encoding is constrained byte by byte to equal the public key.
There is no output signal: the constraint system is satisfiable
only if both public keys derive from the seed.
"""

import logging
from typing import List, Optional

from slip10zk.config import DEFAULT_CONFIG, CircuitConfig
from slip10zk.cs.bit_codec import alloc_bytes, alloc_input_bytes, enforce_bytes_equal
from slip10zk.cs.constraint_system import ConstraintSystem
from slip10zk.ed25519 import ed25519
from slip10zk.exceptions import ZKValueError
from slip10zk.gadgets.clamp import expand_private_key, scalar_clamp
from slip10zk.gadgets.edwards import EdwardsGadget, PointMultiply
from slip10zk.gadgets.foreign_field import ForeignField
from slip10zk.gadgets.hmac_sha512 import HmacSha512
from slip10zk.gadgets.point_encode import PointEncode
from slip10zk.gadgets.sha512 import Sha512Core
from slip10zk.gadgets.slip10 import (
    CKDPriv,
    DerivationChain,
    MasterKeyDerivation,
    hardened_index_bits,
)
from slip10zk.inputs import PUB_KEY_SIZE, SEED_SIZE, TwoKeysInputs

logger = logging.getLogger(__name__)


class TwoKeysFromSameSeed:
    N_PATHS = 2

    def __init__(self, config: CircuitConfig = DEFAULT_CONFIG) -> None:
        self.config = config

    def __repr__(self) -> str:
        return f"TwoKeysFromSameSeed({self.config})"

    def synthesize(
        self, cs: ConstraintSystem, inputs: Optional[TwoKeysInputs] = None
    ) -> None:
        """Add the circuit constraints to an empty constraint system.

        inputs are required in witness mode, ignored in setup mode.
        """

        config = self.config
        if cs.p != config.native_modulus:
            raise ZKValueError(f"constraint system modulus mismatch: {cs.p}")
        if not cs.has_witness:
            inputs = None
        elif inputs is None:
            raise ZKValueError("missing inputs in witness mode")
        else:
            inputs.assert_valid(config.depth)

        pub_keys = [None, None] if inputs is None else [inputs.pubkey1, inputs.pubkey2]
        paths: List[List[Optional[int]]] = [[None] * config.depth] * self.N_PATHS
        if inputs is not None:
            paths = [list(inputs.path1), list(inputs.path2)]

        with cs.namespace("public inputs"):
            pub_key_vars = [alloc_input_bytes(cs, v, PUB_KEY_SIZE) for v in pub_keys]
            index_vars = [[cs.alloc_input(i) for i in path] for path in paths]

        with cs.namespace("seed"):
            seed = alloc_bytes(cs, None if inputs is None else inputs.seed, SEED_SIZE)

        sha512 = Sha512Core(cs)
        hmac = HmacSha512(sha512)
        master_key_derivation = MasterKeyDerivation(hmac)
        derivation_chain = DerivationChain(CKDPriv(hmac), config.depth)
        field = ForeignField(cs, ed25519.p, config.limb_bits, config.n_limbs)
        point_multiply = PointMultiply(EdwardsGadget(field), config.window_bits)
        point_encode = PointEncode(field)

        master = master_key_derivation(seed)
        logger.debug("master key derivation: %d constraints", cs.n_constraints)

        for n in range(self.N_PATHS):
            with cs.namespace(f"path {n + 1}"):
                with cs.namespace("index bits"):
                    indexes = [
                        hardened_index_bits(cs, var, value)
                        for var, value in zip(index_vars[n], paths[n])
                    ]
                key = derivation_chain(master, indexes)[-1].key
                logger.debug("path %d derivation: %d constraints", n + 1, cs.n_constraints)
                scalar = scalar_clamp(expand_private_key(sha512, key))
                with cs.namespace("point multiply"):
                    point = point_multiply(scalar.bits)
                logger.debug("path %d point: %d constraints", n + 1, cs.n_constraints)
                pub_key = point_encode(point)
                with cs.namespace("public key binding"):
                    enforce_bytes_equal(cs, pub_key, pub_key_vars[n])

        logger.debug(
            "synthesized %d constraints, %d variables, %d public inputs, %d compressions",
            cs.n_constraints,
            cs.n_vars,
            cs.n_inputs,
            sha512.n_compressions,
        )
