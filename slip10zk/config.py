#!/usr/bin/env python3

# Copyright (C) 2026 The slip10zk developers
#
# This file is part of slip10zk. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of slip10zk including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Circuit configuration.

The constraint system is proving-system agnostic:
the only property of the proving system that matters here
is the native field modulus, BN254 scalar field order by default.
"""

from dataclasses import InitVar, dataclass, field

from dataclasses_json import DataClassJsonMixin, config
from py_ecc.optimized_bn128 import curve_order

from slip10zk.exceptions import ZKValueError

# bit size of the emulated field: ed25519 base field 2^255 - 19
FOREIGN_BITS = 255


@dataclass(frozen=True)
class CircuitConfig(DataClassJsonMixin):
    native_modulus: int = field(
        default=curve_order,
        metadata=config(encoder=str, decoder=int),
    )
    # foreign field element representation
    limb_bits: int = 85
    n_limbs: int = 3
    # fixed-base scalar multiplication window
    window_bits: int = 4
    # number of hardened derivation levels per path
    depth: int = 4
    check_validity: InitVar[bool] = True

    def __post_init__(self, check_validity: bool) -> None:
        if check_validity:
            self.assert_valid()

    def assert_valid(self) -> None:

        p = self.native_modulus
        if p < 3 or p % 2 == 0 or pow(2, p - 1, p) != 1:
            raise ZKValueError(f"native modulus is not an odd prime: {p}")

        if self.limb_bits < 8:
            raise ZKValueError(f"too few limb bits: {self.limb_bits}")
        if self.limb_bits * self.n_limbs < FOREIGN_BITS:
            err_msg = f"limbs do not cover {FOREIGN_BITS} bits: "
            err_msg += f"{self.n_limbs} x {self.limb_bits}"
            raise ZKValueError(err_msg)
        # limb products, their sums, and carries must not wrap around
        headroom = 2 * self.limb_bits + (4 * self.n_limbs).bit_length() + 8
        if headroom >= p.bit_length() - 1:
            err_msg = f"native modulus too small for {self.limb_bits}-bit limbs: "
            err_msg += f"{p.bit_length()} bits"
            raise ZKValueError(err_msg)

        if not 1 <= self.window_bits <= 8:
            raise ZKValueError(f"invalid window bits: {self.window_bits}")
        if self.depth < 1:
            raise ZKValueError(f"invalid derivation depth: {self.depth}")


DEFAULT_CONFIG = CircuitConfig()
