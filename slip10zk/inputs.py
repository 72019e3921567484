#!/usr/bin/env python3

# Copyright (C) 2026 The slip10zk developers
#
# This file is part of slip10zk. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of slip10zk including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Inputs of the TwoKeysFromSameSeed circuit.

The public-input vector has a fixed layout:

- pubkey1: 32 elements, one per byte
- pubkey2: 32 elements, one per byte
- path1: depth unhardened indexes
- path2: depth unhardened indexes

Paths can be given as sequences of unhardened indexes
or as "m/44'/501'/0'/0'" strings: they are stored as index lists.
"""

from dataclasses import InitVar, dataclass, field
from typing import Dict, List, Optional, Sequence, Type, TypeVar

from dataclasses_json import DataClassJsonMixin, config

from slip10zk.alias import DerPath, Octets
from slip10zk.exceptions import ZKValueError
from slip10zk.slip10 import derive_pub_keys, indexes_from_path
from slip10zk.utils import bytes_from_octets

SEED_SIZE = 64
PUB_KEY_SIZE = 32
DEPTH = 4

_PublicInputs = TypeVar("_PublicInputs", bound="PublicInputs")
_TwoKeysInputs = TypeVar("_TwoKeysInputs", bound="TwoKeysInputs")


def n_public_inputs(depth: int = DEPTH) -> int:
    return 2 * PUB_KEY_SIZE + 2 * depth


def _assert_valid_path(
    path: Sequence[int], name: str, depth: Optional[int]
) -> None:
    if depth is not None and len(path) != depth:
        raise ZKValueError(f"invalid {name} length: {len(path)} instead of {depth}")
    indexes_from_path(path)


def _hex_field():
    return field(
        default=b"",
        metadata=config(encoder=lambda v: v.hex(), decoder=bytes.fromhex),
    )


@dataclass
class PublicInputs(DataClassJsonMixin):
    pubkey1: bytes = _hex_field()
    pubkey2: bytes = _hex_field()
    path1: List[int] = field(default_factory=list)
    path2: List[int] = field(default_factory=list)
    check_validity: InitVar[bool] = True

    def __post_init__(self, check_validity: bool) -> None:
        self.pubkey1 = bytes_from_octets(self.pubkey1)
        self.pubkey2 = bytes_from_octets(self.pubkey2)
        self.path1 = indexes_from_path(self.path1)
        self.path2 = indexes_from_path(self.path2)
        # path length is checked against the circuit depth only on demand
        if check_validity:
            self.assert_valid(None)

    def assert_valid(self, depth: Optional[int] = DEPTH) -> None:
        for name in ("pubkey1", "pubkey2"):
            pub_key = getattr(self, name)
            if len(pub_key) != PUB_KEY_SIZE:
                err_msg = f"invalid {name} size: {len(pub_key)} bytes"
                err_msg += f" instead of {PUB_KEY_SIZE}"
                raise ZKValueError(err_msg)
        _assert_valid_path(self.path1, "path1", depth)
        _assert_valid_path(self.path2, "path2", depth)

    def vector(self) -> List[int]:
        "Return the public-input vector."
        return list(self.pubkey1) + list(self.pubkey2) + self.path1 + self.path2

    @classmethod
    def from_vector(
        cls: Type[_PublicInputs], vector: Sequence[int], depth: int = DEPTH
    ) -> _PublicInputs:

        if len(vector) != n_public_inputs(depth):
            err_msg = f"invalid public-input vector length: {len(vector)}"
            err_msg += f" instead of {n_public_inputs(depth)}"
            raise ZKValueError(err_msg)
        for byte in vector[: 2 * PUB_KEY_SIZE]:
            if not 0 <= byte < 256:
                raise ZKValueError(f"invalid byte: {byte}")

        i = PUB_KEY_SIZE
        pubkey1 = bytes(vector[:i])
        pubkey2 = bytes(vector[i : 2 * i])
        path1 = list(vector[2 * i : 2 * i + depth])
        path2 = list(vector[2 * i + depth :])
        result = cls(pubkey1, pubkey2, path1, path2, check_validity=False)
        result.assert_valid(depth)
        return result


@dataclass
class TwoKeysInputs(DataClassJsonMixin):
    "Secret seed and public inputs."

    seed: bytes = _hex_field()
    path1: List[int] = field(default_factory=list)
    path2: List[int] = field(default_factory=list)
    pubkey1: bytes = _hex_field()
    pubkey2: bytes = _hex_field()
    check_validity: InitVar[bool] = True

    def __post_init__(self, check_validity: bool) -> None:
        self.seed = bytes_from_octets(self.seed)
        self.pubkey1 = bytes_from_octets(self.pubkey1)
        self.pubkey2 = bytes_from_octets(self.pubkey2)
        self.path1 = indexes_from_path(self.path1)
        self.path2 = indexes_from_path(self.path2)
        # path length is checked against the circuit depth only on demand
        if check_validity:
            self.assert_valid(None)

    @property
    def public(self) -> PublicInputs:
        return PublicInputs(
            self.pubkey1, self.pubkey2, self.path1, self.path2, check_validity=False
        )

    def assert_valid(self, depth: Optional[int] = DEPTH) -> None:
        if len(self.seed) != SEED_SIZE:
            err_msg = f"invalid seed size: {len(self.seed)} bytes instead of {SEED_SIZE}"
            raise ZKValueError(err_msg)
        self.public.assert_valid(depth)

    def to_circuit_input(self) -> Dict[str, List[str]]:
        "Return the decimal-string arrays of a circuit input.json document."
        return {
            "seed": [str(i) for i in self.seed],
            "pubkey1": [str(i) for i in self.pubkey1],
            "pubkey2": [str(i) for i in self.pubkey2],
            "path1": [str(i) for i in self.path1],
            "path2": [str(i) for i in self.path2],
        }

    @classmethod
    def from_seed(
        cls: Type[_TwoKeysInputs],
        seed: Octets,
        path1: DerPath,
        path2: DerPath,
    ) -> _TwoKeysInputs:
        "Return the inputs with the public keys derived from seed."
        pubkey1, pubkey2 = derive_pub_keys(seed, [path1, path2])
        return cls(seed, path1, path2, pubkey1, pubkey2)  # type: ignore
