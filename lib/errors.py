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


"""sheeppool exception handling.

"""

from sheeppool import constants


ECODE_NORES = constants.ERRORS_ECODE_NORES
ECODE_INVAL = constants.ERRORS_ECODE_INVAL
ECODE_FAULT = constants.ERRORS_ECODE_FAULT
ECODE_ENVIRON = constants.ERRORS_ECODE_ENVIRON


class GenericError(Exception):
  """Base exception for sheeppool.

  """


class ProgrammerError(GenericError):
  """Programming-related error.

  This is raised in cases we determine that the calling conventions
  have been violated, meaning we got some desynchronisation between
  parts of our code. It signifies a real programming bug.

  """


class ConfigurationError(GenericError):
  """Configuration related exception.

  Raised when a pool or volume definition can't be turned into objects,
  e.g. a pool file that doesn't hold a dictionary.

  """


class UnitParseError(GenericError):
  """Unable to parse size unit.

  """


class StorageError(GenericError):
  """Storage backend related exception.

  Base class for everything that can go wrong while driving a storage
  backend. The C{ecode} attribute classifies the cause.

  """
  ecode = ECODE_FAULT


class CommandError(StorageError):
  """The external storage tool could not be run or reported failure.

  """
  ecode = ECODE_ENVIRON


class ParseError(StorageError):
  """The output of the external storage tool didn't have the expected format.

  """
  ecode = ECODE_FAULT


class AllocationError(StorageError):
  """An object holding parsed output could not be constructed.

  """
  ecode = ECODE_NORES


class ConfigurationUnsupportedError(StorageError):
  """The request needs a capability the backend doesn't offer.

  For example encrypted volumes, or operation flags.

  """
  ecode = ECODE_INVAL
