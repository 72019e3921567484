#!/usr/bin/env python3

# Copyright (C) 2026 The slip10zk developers
#
# This file is part of slip10zk. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of slip10zk including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Module slip10zk.cs."""

from slip10zk.cs.boolean import FALSE, TRUE, Boolean, alloc_bit, alloc_bits
from slip10zk.cs.constraint_system import (
    LC,
    ONE,
    R1CS,
    ConstraintSystem,
    LinearCombination,
    Witness,
)
from slip10zk.cs.uint64 import UInt64

__all__ = [
    "FALSE",
    "TRUE",
    "Boolean",
    "alloc_bit",
    "alloc_bits",
    "LC",
    "ONE",
    "R1CS",
    "ConstraintSystem",
    "LinearCombination",
    "Witness",
    "UInt64",
]
