#!/usr/bin/env python3

# Copyright (C) 2026 The slip10zk developers
#
# This file is part of slip10zk. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of slip10zk including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"__init__ module for the slip10zk package."

name = "slip10zk"
__version__ = "2026.10.1"
__author__ = "The slip10zk developers"
__author_email__ = "devs@slip10zk.org"
__copyright__ = "Copyright (C) 2026 The slip10zk developers"
__license__ = "MIT License"
