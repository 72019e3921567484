#!/usr/bin/env python3

# Copyright (C) 2026 The slip10zk developers
#
# This file is part of slip10zk. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of slip10zk including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Exception classes.

These are only meant to discriminate between Exceptions being raised
by slip10zk from those raised by other codebase.

Users are usually better off just dealing with the regular
ValueError, TypeError, and RuntimeError
from which the slip10zk versions are derived.

Three failure families are kept apart:

* input-shape errors (ZKValueError), raised before any synthesis;
* unsatisfied constraints (UnsatisfiedConstraintError):
  the witness does not satisfy the constraint system, so no proof exists;
* proving/verification backend failures (BackendError).
"""


class ZKValueError(ValueError):
    pass


class ZKTypeError(TypeError):
    pass


class ZKRuntimeError(RuntimeError):
    pass


class UnsatisfiedConstraintError(ZKRuntimeError):
    pass


class BackendError(ZKRuntimeError):
    pass
