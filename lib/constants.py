#
#

# Copyright (C) 2026 the sheeppool authors
# All rights reserved.
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions are
# met:
#
# 1. Redistributions of source code must retain the above copyright notice,
# this list of conditions and the following disclaimer.
#
# 2. Redistributions in binary form must reproduce the above copyright
# notice, this list of conditions and the following disclaimer in the
# documentation and/or other materials provided with the distribution.
#
# THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS
# IS" AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED
# TO, THE IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR
# PURPOSE ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR
# CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL,
# EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT LIMITED TO,
# PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA, OR
# PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF
# LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING
# NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE OF THIS
# SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.


"""Module holding different constants."""

RELEASE_VERSION = "0.1.0"

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_CONFIGURATION = 2

# error codes, carried by storage errors as their "ecode"
ERRORS_ECODE_NORES = "insufficient_resources"
ERRORS_ECODE_INVAL = "wrong_input"
ERRORS_ECODE_FAULT = "internal_error"
ERRORS_ECODE_ENVIRON = "environment_error"

# seconds a child may linger after SIGTERM before it gets SIGKILL
CHILD_LINGER_TIMEOUT = 5.0

# pool types
POOL_TYPE_SHEEPDOG = "sheepdog"
POOL_TYPES = frozenset([POOL_TYPE_SHEEPDOG])

# volume types; sheepdog volumes have no local device node
VOL_TYPE_NETWORK = "network"

# volume keys are "<source name>/<volume name>"
VOL_KEY_SEPARATOR = "/"

# sheepdog
SHEEPDOG_DEFAULT_ADDRESS = "localhost"
SHEEPDOG_DEFAULT_PORT = 7000
#: Highest valid TCP port; port 0 selects the default
MAX_PORT = 65535
SHEEPDOG_DEFAULT_SOURCE = "sheepdog"

# environment variable overriding the collie binary
COLLIE_ENVNAME = "SHEEPPOOL_COLLIE"
COLLIE_DEFAULT_CMD = "collie"

# units accepted on the command line, as multiples of a byte
UNIT_MULTIPLIERS = {
  "b": 1,
  "k": 1024,
  "m": 1024 ** 2,
  "g": 1024 ** 3,
  "t": 1024 ** 4,
  "p": 1024 ** 5,
  }
