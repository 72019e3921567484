#!/usr/bin/env python3

# Copyright (C) 2026 The slip10zk developers
#
# This file is part of slip10zk. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of slip10zk including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""64-bit unsigned word gadget.

Words are kept as 64 Booleans, least significant bit first:
rotations and shifts are rewiring only, xor is one constraint per
non-constant bit, and addition modulo 2^64 of any number of words
is a single packing constraint on the allocated bits of the sum.
"""

from typing import List, Optional, Sequence

from slip10zk.cs.boolean import FALSE, Boolean, alloc_bits, pack_le, xor
from slip10zk.cs.constraint_system import ConstraintSystem
from slip10zk.exceptions import ZKValueError

WORD_BITS = 64
MASK = (1 << WORD_BITS) - 1


def _value_from_bits(bits: Sequence[Boolean]) -> Optional[int]:
    result = 0
    for i, bit in enumerate(bits):
        if bit.value is None:
            return None
        if bit.value:
            result |= 1 << i
    return result


class UInt64:

    __slots__ = ("bits", "value")

    def __init__(self, bits: List[Boolean], value: Optional[int]) -> None:
        if len(bits) != WORD_BITS:
            raise ZKValueError(f"invalid number of bits: {len(bits)}")
        self.bits = bits
        self.value = value

    def __repr__(self) -> str:
        value = "None" if self.value is None else f"0x{self.value:016x}"
        return f"UInt64({value})"

    @classmethod
    def constant(cls, value: int) -> "UInt64":
        value &= MASK
        bits = [Boolean.constant(bool((value >> i) & 1)) for i in range(WORD_BITS)]
        return cls(bits, value)

    @classmethod
    def alloc(cls, cs: ConstraintSystem, value: Optional[int] = None) -> "UInt64":
        return cls(alloc_bits(cs, value, WORD_BITS), value)

    @classmethod
    def from_bits_be(cls, bits: Sequence[Boolean]) -> "UInt64":
        "Return the word from 64 bits, most significant first."
        bits = list(reversed(bits))
        return cls(bits, _value_from_bits(bits))

    def to_bits_be(self) -> List[Boolean]:
        return list(reversed(self.bits))

    @property
    def is_constant(self) -> bool:
        return all(bit.index is None for bit in self.bits)

    def rotr(self, by: int) -> "UInt64":
        by %= WORD_BITS
        bits = self.bits[by:] + self.bits[:by]
        value = None
        if self.value is not None:
            value = ((self.value >> by) | (self.value << (WORD_BITS - by))) & MASK
        return UInt64(bits, value)

    def shr(self, by: int) -> "UInt64":
        bits = self.bits[by:] + [FALSE] * by
        value = None if self.value is None else self.value >> by
        return UInt64(bits, value)

    def xor(self, cs: ConstraintSystem, other: "UInt64") -> "UInt64":
        bits = [xor(cs, a, b) for a, b in zip(self.bits, other.bits)]
        value = None
        if self.value is not None and other.value is not None:
            value = self.value ^ other.value
        return UInt64(bits, value)

    @staticmethod
    def addmany(cs: ConstraintSystem, operands: Sequence["UInt64"]) -> "UInt64":
        """Return the sum modulo 2^64 of the operands.

        The full sum is allocated with as many bits as its maximum
        value requires (no wrap-around in the native field),
        then only the 64 least significant bits are kept.
        """

        if not operands:
            raise ZKValueError("no operands")

        total: Optional[int] = 0
        for operand in operands:
            if operand.value is None:
                total = None
                break
            total += operand.value

        if all(operand.is_constant for operand in operands):
            return UInt64.constant(total)

        max_value = 0
        lc = pack_le(operands[0].bits)
        max_value += operands[0].value if operands[0].is_constant else MASK
        for operand in operands[1:]:
            lc = lc + pack_le(operand.bits)
            max_value += operand.value if operand.is_constant else MASK

        result_bits = alloc_bits(cs, total, max_value.bit_length())
        cs.enforce_equal(lc, pack_le(result_bits))
        value = None if total is None else total & MASK
        return UInt64(result_bits[:WORD_BITS], value)
