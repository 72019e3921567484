#!/usr/bin/env python3

# Copyright (C) 2026 The slip10zk developers
#
# This file is part of slip10zk. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of slip10zk including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Byte strings to/from bit vectors.

The convention is big-endian throughout: bytes in order,
most significant bit first within each byte,
i.e. the order in which SHA-512 consumes its input.
"""

from typing import List, Optional, Sequence

from slip10zk.cs.boolean import Boolean, alloc_bit, pack_le
from slip10zk.cs.constraint_system import LC, ConstraintSystem
from slip10zk.exceptions import ZKValueError


def bits_from_bytes(data: bytes) -> List[bool]:
    return [bool((byte >> (7 - i)) & 1) for byte in data for i in range(8)]


def bytes_from_bits(bits: Sequence[bool]) -> bytes:
    if len(bits) % 8:
        raise ZKValueError(f"not a whole number of bytes: {len(bits)} bits")
    result = bytearray()
    for n in range(0, len(bits), 8):
        byte = 0
        for bit in bits[n : n + 8]:
            byte = (byte << 1) | int(bit)
        result.append(byte)
    return bytes(result)


def constant_bits(data: bytes) -> List[Boolean]:
    return [Boolean.constant(bit) for bit in bits_from_bytes(data)]


def alloc_bytes(
    cs: ConstraintSystem, data: Optional[bytes], length: int
) -> List[Boolean]:
    "Allocate a witness byte string as 8 * length constrained bits."
    if data is None:
        return [alloc_bit(cs) for _ in range(8 * length)]
    if len(data) != length:
        raise ZKValueError(f"invalid size: {len(data)} bytes instead of {length}")
    return [alloc_bit(cs, bit) for bit in bits_from_bytes(data)]


def bytes_from_booleans(bits: Sequence[Boolean]) -> Optional[bytes]:
    "Return the byte string value of the bits, None in setup mode."
    if any(bit.value is None for bit in bits):
        return None
    return bytes_from_bits([bool(bit.value) for bit in bits])


def pack_byte(bits: Sequence[Boolean]) -> LC:
    "Return the linear combination of 8 bits, most significant first."
    if len(bits) != 8:
        raise ZKValueError(f"invalid number of bits: {len(bits)}")
    return pack_le(list(reversed(bits)))


def alloc_input_bytes(
    cs: ConstraintSystem, data: Optional[bytes], length: int
) -> List[int]:
    "Allocate a byte string as public inputs, one field element per byte."
    if data is None:
        return [cs.alloc_input() for _ in range(length)]
    if len(data) != length:
        raise ZKValueError(f"invalid size: {len(data)} bytes instead of {length}")
    return [cs.alloc_input(byte) for byte in data]


def enforce_bytes_equal(
    cs: ConstraintSystem, bits: Sequence[Boolean], byte_vars: Sequence[int]
) -> None:
    """Enforce that bits encode the bytes held by byte_vars.

    One constraint per byte: the bits are already constrained to {0, 1},
    so the packed value is a byte and equality is exact.
    """
    if len(bits) != 8 * len(byte_vars):
        err_msg = f"length mismatch: {len(bits)} bits"
        err_msg += f" for {len(byte_vars)} bytes"
        raise ZKValueError(err_msg)
    for i, var in enumerate(byte_vars):
        cs.enforce_equal(pack_byte(bits[8 * i : 8 * i + 8]), LC({var: 1}))
