#!/usr/bin/env python3

# Copyright (C) 2026 The slip10zk developers
#
# This file is part of slip10zk. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of slip10zk including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""SHA-512 gadget.

FIPS 180-4 SHA-512 over fixed-length bit messages:
the message length is part of the circuit shape,
so the padding is made of constant bits.

Input and output bits are big-endian (see slip10zk.cs.bit_codec).
Blocks made of constant bits only are hashed without any constraint.
"""

from typing import List, Sequence

from slip10zk.cs.boolean import Boolean, ch, maj
from slip10zk.cs.constraint_system import ConstraintSystem
from slip10zk.cs.uint64 import UInt64
from slip10zk.exceptions import ZKValueError

BLOCK_BITS = 1024
DIGEST_BITS = 512

# initial hash value
IV = (
    0x6A09E667F3BCC908,
    0xBB67AE8584CAA73B,
    0x3C6EF372FE94F82B,
    0xA54FF53A5F1D36F1,
    0x510E527FADE682D1,
    0x9B05688C2B3E6C1F,
    0x1F83D9ABFB41BD6B,
    0x5BE0CD19137E2179,
)

# round constants
K = (
    0x428A2F98D728AE22, 0x7137449123EF65CD, 0xB5C0FBCFEC4D3B2F, 0xE9B5DBA58189DBBC,
    0x3956C25BF348B538, 0x59F111F1B605D019, 0x923F82A4AF194F9B, 0xAB1C5ED5DA6D8118,
    0xD807AA98A3030242, 0x12835B0145706FBE, 0x243185BE4EE4B28C, 0x550C7DC3D5FFB4E2,
    0x72BE5D74F27B896F, 0x80DEB1FE3B1696B1, 0x9BDC06A725C71235, 0xC19BF174CF692694,
    0xE49B69C19EF14AD2, 0xEFBE4786384F25E3, 0x0FC19DC68B8CD5B5, 0x240CA1CC77AC9C65,
    0x2DE92C6F592B0275, 0x4A7484AA6EA6E483, 0x5CB0A9DCBD41FBD4, 0x76F988DA831153B5,
    0x983E5152EE66DFAB, 0xA831C66D2DB43210, 0xB00327C898FB213F, 0xBF597FC7BEEF0EE4,
    0xC6E00BF33DA88FC2, 0xD5A79147930AA725, 0x06CA6351E003826F, 0x142929670A0E6E70,
    0x27B70A8546D22FFC, 0x2E1B21385C26C926, 0x4D2C6DFC5AC42AED, 0x53380D139D95B3DF,
    0x650A73548BAF63DE, 0x766A0ABB3C77B2A8, 0x81C2C92E47EDAEE6, 0x92722C851482353B,
    0xA2BFE8A14CF10364, 0xA81A664BBC423001, 0xC24B8B70D0F89791, 0xC76C51A30654BE30,
    0xD192E819D6EF5218, 0xD69906245565A910, 0xF40E35855771202A, 0x106AA07032BBD1B8,
    0x19A4C116B8D2D0C8, 0x1E376C085141AB53, 0x2748774CDF8EEB99, 0x34B0BCB5E19B48A8,
    0x391C0CB3C5C95A63, 0x4ED8AA4AE3418ACB, 0x5B9CCA4F7763E373, 0x682E6FF3D6B2B8A3,
    0x748F82EE5DEFB2FC, 0x78A5636F43172F60, 0x84C87814A1F0AB72, 0x8CC702081A6439EC,
    0x90BEFFFA23631E28, 0xA4506CEBDE82BDE9, 0xBEF9A3F7B2C67915, 0xC67178F2E372532B,
    0xCA273ECEEA26619C, 0xD186B8C721C0C207, 0xEADA7DD6CDE0EB1E, 0xF57D4F7FEE6ED178,
    0x06F067AA72176FBA, 0x0A637DC5A2C898A6, 0x113F9804BEF90DAE, 0x1B710B35131C471B,
    0x28DB77F523047D84, 0x32CAAB7B40C72493, 0x3C9EBE0A15C9BEBC, 0x431D67C49C100D4C,
    0x4CC5D4BECB3E42B6, 0x597F299CFC657E2A, 0x5FCB6FAB3AD6FAEC, 0x6C44198C4A475817,
)  # fmt: skip


def padding_bits(bit_length: int) -> List[bool]:
    """Return the SHA-512 padding of a message of bit_length bits.

    a 1 bit, then zeros up to 896 mod 1024 bits,
    then the 128-bit big-endian message bit length
    """
    n_zeros = (BLOCK_BITS - 128 - 1 - bit_length) % BLOCK_BITS
    length = [bool((bit_length >> (127 - i)) & 1) for i in range(128)]
    return [True] + [False] * n_zeros + length


def n_blocks(byte_length: int) -> int:
    "Return the number of compressions hashing byte_length bytes."
    return (8 * byte_length + 1 + 128 + BLOCK_BITS - 1) // BLOCK_BITS


class Sha512Core:
    """SHA-512 gadget bound to a constraint system.

    One instance is meant to be shared by every gadget
    hashing on the same constraint system.
    """

    def __init__(self, cs: ConstraintSystem) -> None:
        self.cs = cs
        self.n_compressions = 0

    def _xor3(self, x: UInt64, y: UInt64, z: UInt64) -> UInt64:
        return x.xor(self.cs, y).xor(self.cs, z)

    def _big_sigma0(self, x: UInt64) -> UInt64:
        return self._xor3(x.rotr(28), x.rotr(34), x.rotr(39))

    def _big_sigma1(self, x: UInt64) -> UInt64:
        return self._xor3(x.rotr(14), x.rotr(18), x.rotr(41))

    def _small_sigma0(self, x: UInt64) -> UInt64:
        return self._xor3(x.rotr(1), x.rotr(8), x.shr(7))

    def _small_sigma1(self, x: UInt64) -> UInt64:
        return self._xor3(x.rotr(19), x.rotr(61), x.shr(6))

    def _ch(self, x: UInt64, y: UInt64, z: UInt64) -> UInt64:
        bits = [ch(self.cs, a, b, c) for a, b, c in zip(x.bits, y.bits, z.bits)]
        value = None
        if x.value is not None and y.value is not None and z.value is not None:
            value = (x.value & y.value) ^ (~x.value & z.value)
        return UInt64(bits, value)

    def _maj(self, x: UInt64, y: UInt64, z: UInt64) -> UInt64:
        bits = [maj(self.cs, a, b, c) for a, b, c in zip(x.bits, y.bits, z.bits)]
        value = None
        if x.value is not None and y.value is not None and z.value is not None:
            value = (x.value & y.value) ^ (x.value & z.value) ^ (y.value & z.value)
        return UInt64(bits, value)

    def compress(self, state: Sequence[UInt64], block: Sequence[Boolean]) -> List[UInt64]:
        "Return the state after processing one 1024-bit block."

        if len(state) != 8:
            raise ZKValueError(f"invalid state size: {len(state)} words")
        if len(block) != BLOCK_BITS:
            raise ZKValueError(f"invalid block size: {len(block)} bits")

        cs = self.cs
        self.n_compressions += 1

        with cs.namespace("message schedule"):
            w = [UInt64.from_bits_be(block[64 * i : 64 * i + 64]) for i in range(16)]
            for t in range(16, 80):
                s0 = self._small_sigma0(w[t - 15])
                s1 = self._small_sigma1(w[t - 2])
                w.append(UInt64.addmany(cs, [w[t - 16], s0, w[t - 7], s1]))

        a, b, c, d, e, f, g, h = state
        for t in range(80):
            with cs.namespace(f"round {t}"):
                s1 = self._big_sigma1(e)
                ch_ = self._ch(e, f, g)
                k = UInt64.constant(K[t])
                s0 = self._big_sigma0(a)
                maj_ = self._maj(a, b, c)
                # e = d + t1, a = t1 + t2
                # with t1 = h + s1 + ch + k + w, t2 = s0 + maj
                new_e = UInt64.addmany(cs, [d, h, s1, ch_, k, w[t]])
                new_a = UInt64.addmany(cs, [h, s1, ch_, k, w[t], s0, maj_])
                h, g, f, e = g, f, e, new_e
                d, c, b, a = c, b, a, new_a

        with cs.namespace("final addition"):
            return [
                UInt64.addmany(cs, [x, y])
                for x, y in zip(state, (a, b, c, d, e, f, g, h))
            ]

    def digest(self, message: Sequence[Boolean]) -> List[Boolean]:
        "Return the 512-bit digest of a whole number of message bytes."

        if len(message) % 8:
            raise ZKValueError(f"not a whole number of bytes: {len(message)} bits")

        padded = list(message)
        padded += [Boolean.constant(bit) for bit in padding_bits(len(message))]

        state = [UInt64.constant(iv) for iv in IV]
        for n in range(0, len(padded), BLOCK_BITS):
            with self.cs.namespace(f"block {n // BLOCK_BITS}"):
                state = self.compress(state, padded[n : n + BLOCK_BITS])

        result: List[Boolean] = []
        for word in state:
            result += word.to_bits_be()
        return result
