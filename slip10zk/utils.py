#!/usr/bin/env python3

# Copyright (C) 2026 The slip10zk developers
#
# This file is part of slip10zk. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of slip10zk including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Conversions at the API boundary.

Byte strings may be given as hex-strings, integers as bytes or hex-strings:
everything is normalized here before reaching the circuit code.
"""

from typing import Optional

from slip10zk.alias import Integer, Octets
from slip10zk.exceptions import ZKValueError


def bytes_from_octets(octets: Octets, out_size: Optional[int] = None) -> bytes:
    "Return bytes from bytes or hex-string, optionally checking their size."

    data = bytes.fromhex(octets) if isinstance(octets, str) else bytes(octets)
    if out_size is not None and len(data) != out_size:
        raise ZKValueError(f"invalid size: {len(data)} bytes instead of {out_size}")
    return data


def int_from_integer(i: Integer) -> int:
    """Return an int from an int, big-endian bytes, or hex-string.

    Hex-strings may carry the 0x prefix.
    """

    if isinstance(i, int):
        return i
    if isinstance(i, str):
        i = i.strip().lower()
        return int(i[2:] if i.startswith("0x") else i, 16)
    return int.from_bytes(i, byteorder="big", signed=False)


def hex_string(i: Integer) -> str:
    """Return the upper case hex-string of a nonnegative integer.

    Digits are grouped by four bytes, the first group zero-padded
    to a whole number of bytes.
    """

    i = int_from_integer(i)
    if i < 0:
        raise ZKValueError(f"negative integer: {i}")
    digits = f"{i:X}"
    digits = "0" * (len(digits) % 2) + digits
    first = len(digits) % 8 or 8
    groups = [digits[:first]]
    groups += [digits[n : n + 8] for n in range(first, len(digits), 8)]
    return " ".join(groups)
