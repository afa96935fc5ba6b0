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


"""Storage backend abstraction - base class and utility functions"""

import logging

from sheeppool import utils
from sheeppool import errors


class StorageBackend(object):
  """Storage pool backend abstract class.

  A backend drives one kind of storage system on behalf of a pool. It
  receives the L{objects.StoragePool} it works on at construction time and
  the L{objects.StorageVolume} to act on with every volume operation. The
  backend keeps no state of its own between calls: everything it learns
  from the storage system is written back into those objects.

  Failures are reported by raising a subclass of L{errors.StorageError}:

    - L{errors.CommandError} if the storage tool can't be run or fails
    - L{errors.ParseError} if its output can't be understood
    - L{errors.AllocationError} if parsed objects can't be built
    - L{errors.ConfigurationUnsupportedError} if the request needs a
      capability the backend doesn't have

  The caller is expected to hold exclusive access to the pool and volume
  objects for the duration of a call.

  """
  def __init__(self, pool, _run_cmd=utils.RunCmd):
    """Initializes the backend.

    @type pool: L{objects.StoragePool}
    @param pool: the pool this backend operates on

    """
    self.pool = pool
    self._run_cmd = _run_cmd

  def RefreshPool(self):
    """Update the pool's capacity, allocation and volume list.

    """
    raise NotImplementedError

  def CreateVol(self, vol):
    """Create a new volume in the pool.

    @type vol: L{objects.StorageVolume}
    @param vol: definition of the volume; name and capacity must be set

    """
    raise NotImplementedError

  def RefreshVol(self, vol):
    """Update the size and usage information of a volume.

    @type vol: L{objects.StorageVolume}

    """
    raise NotImplementedError

  def DeleteVol(self, vol, flags=0):
    """Remove a volume from the pool.

    @type vol: L{objects.StorageVolume}
    @type flags: int
    @param flags: backend specific operation flags

    """
    raise NotImplementedError

  def ResizeVol(self, vol, capacity, flags=0):
    """Change the capacity of a volume.

    @type vol: L{objects.StorageVolume}
    @type capacity: int
    @param capacity: the new capacity in bytes
    @type flags: int
    @param flags: backend specific operation flags

    """
    raise NotImplementedError

  def __repr__(self):
    return "<%s: pool %s>" % (self.__class__.__name__, self.pool.name)


def ThrowError(msg, *args, errcls=errors.StorageError):
  """Log an error and then raise an exception.

  @type msg: string
  @param msg: the text of the exception
  @type errcls: class
  @param errcls: the L{errors.StorageError} subclass to raise
  @raise errors.StorageError

  """
  if args:
    msg = msg % args
  logging.error(msg)
  raise errcls(msg)


def IgnoreError(fn, *args, **kwargs):
  """Executes the given function, ignoring StorageErrors.

  This is used for best-effort steps whose failure must not change the
  outcome of the operation they belong to.

  @rtype: boolean
  @return: True when fn didn't raise an exception, False otherwise

  """
  try:
    fn(*args, **kwargs)
    return True
  except errors.StorageError as err:
    logging.warning("Caught StorageError but ignoring: %s", str(err))
    return False


def CheckFlags(flags, supported=0):
  """Verifies that only supported operation flags are set.

  @type flags: int
  @param flags: the flags passed by the caller
  @type supported: int
  @param supported: mask of the flags the operation understands
  @raise errors.ConfigurationUnsupportedError: if other flags are set

  """
  unknown = flags & ~supported
  if unknown:
    ThrowError("Unsupported flags (0x%x) in call", unknown,
               errcls=errors.ConfigurationUnsupportedError)
