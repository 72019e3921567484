#!/usr/bin/env python3

# Copyright (C) 2026 The slip10zk developers
#
# This file is part of slip10zk. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of slip10zk including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `slip10zk.config` module."

import pytest
from py_ecc.optimized_bn128 import curve_order

from slip10zk.config import DEFAULT_CONFIG, CircuitConfig
from slip10zk.exceptions import ZKValueError


def test_default_config() -> None:
    config = CircuitConfig()
    assert config == DEFAULT_CONFIG
    assert config.native_modulus == curve_order
    assert config.limb_bits * config.n_limbs >= 255
    assert config.depth == 4

    config_dict = config.to_dict()
    assert config_dict["native_modulus"] == str(curve_order)
    assert CircuitConfig.from_dict(config_dict) == config
    assert CircuitConfig.from_json(config.to_json()) == config

    config2 = CircuitConfig(limb_bits=64, n_limbs=4, window_bits=2, depth=1)
    assert CircuitConfig.from_json(config2.to_json()) == config2


def test_invalid_config() -> None:

    with pytest.raises(ZKValueError, match="native modulus is not an odd prime: "):
        CircuitConfig(native_modulus=curve_order + 1)
    with pytest.raises(ZKValueError, match="too few limb bits: "):
        CircuitConfig(limb_bits=7, n_limbs=40)
    with pytest.raises(ZKValueError, match="limbs do not cover 255 bits: "):
        CircuitConfig(limb_bits=84, n_limbs=3)
    with pytest.raises(ZKValueError, match="native modulus too small for "):
        CircuitConfig(limb_bits=128, n_limbs=2)
    with pytest.raises(ZKValueError, match="native modulus too small for "):
        CircuitConfig(native_modulus=2**127 - 1)
    with pytest.raises(ZKValueError, match="invalid window bits: "):
        CircuitConfig(window_bits=0)
    with pytest.raises(ZKValueError, match="invalid window bits: "):
        CircuitConfig(window_bits=9)
    with pytest.raises(ZKValueError, match="invalid derivation depth: "):
        CircuitConfig(depth=0)

    config = CircuitConfig(depth=0, check_validity=False)
    with pytest.raises(ZKValueError, match="invalid derivation depth: "):
        config.assert_valid()
