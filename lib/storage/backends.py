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


"""Storage pool entry points.

The functions here look up the backend for a pool's type and run the
requested operation through it.

"""

from sheeppool import errors
from sheeppool import constants
from sheeppool.storage import sheepdog


def GetBackend(pool, **kwargs):
  """Returns the backend for a pool.

  @type pool: L{objects.StoragePool}
  @param pool: the pool to operate on
  @param kwargs: passed on to the backend's constructor
  @rtype: L{base.StorageBackend}

  """
  if pool.type not in POOL_MAP:
    raise errors.ProgrammerError("Unknown storage pool type '%s'" % pool.type)
  return POOL_MAP[pool.type](pool, **kwargs)


def RefreshPool(pool, **kwargs):
  """Update a pool's capacity, allocation and volume list.

  """
  GetBackend(pool, **kwargs).RefreshPool()


def CreateVolume(pool, vol, **kwargs):
  """Create a volume in a pool.

  """
  GetBackend(pool, **kwargs).CreateVol(vol)


def RefreshVolume(pool, vol, **kwargs):
  GetBackend(pool, **kwargs).RefreshVol(vol)


def DeleteVolume(pool, vol, flags=0, **kwargs):
  GetBackend(pool, **kwargs).DeleteVol(vol, flags=flags)


def ResizeVolume(pool, vol, capacity, flags=0, **kwargs):
  """Change the capacity of a volume.

  @type capacity: int
  @param capacity: the new capacity in bytes

  """
  GetBackend(pool, **kwargs).ResizeVol(vol, capacity, flags=flags)


# Please keep this at the bottom of the file for visibility.
POOL_MAP = {
  constants.POOL_TYPE_SHEEPDOG: sheepdog.SheepdogPool,
}
"""Map pool types to backend classes.

@see: L{GetBackend}.""" # pylint: disable=W0105
