#!/usr/bin/env python3

# Copyright (C) 2026 The slip10zk developers
#
# This file is part of slip10zk. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of slip10zk including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Module slip10zk.gadgets."""

from slip10zk.gadgets.clamp import ClampedScalar, expand_private_key, scalar_clamp
from slip10zk.gadgets.edwards import EdwardsGadget, EdwardsPoint, PointMultiply
from slip10zk.gadgets.foreign_field import ForeignElement, ForeignField
from slip10zk.gadgets.hmac_sha512 import HmacSha512
from slip10zk.gadgets.point_encode import PointEncode
from slip10zk.gadgets.sha512 import Sha512Core
from slip10zk.gadgets.slip10 import (
    CKDPriv,
    DerivationChain,
    KeyMaterialBits,
    MasterKeyDerivation,
    hardened_index_bits,
)

__all__ = [
    "ClampedScalar",
    "expand_private_key",
    "scalar_clamp",
    "EdwardsGadget",
    "EdwardsPoint",
    "PointMultiply",
    "ForeignElement",
    "ForeignField",
    "HmacSha512",
    "PointEncode",
    "Sha512Core",
    "CKDPriv",
    "DerivationChain",
    "KeyMaterialBits",
    "MasterKeyDerivation",
    "hardened_index_bits",
]
