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


"""Sheepdog storage pool backend.

The cluster is driven exclusively through the C{collie} tool; its raw
output is parsed by L{sheepdog_info}.

"""

import logging

from sheeppool import constants
from sheeppool import errors
from sheeppool import utils
from sheeppool.storage import base
from sheeppool.storage import sheepdog_cmdgen
from sheeppool.storage import sheepdog_info


class SheepdogPool(base.StorageBackend):
  """A pool of sheepdog VDIs.

  """
  def __init__(self, pool, _run_cmd=utils.RunCmd):
    super(SheepdogPool, self).__init__(pool, _run_cmd=_run_cmd)
    self._cmd_gen = sheepdog_cmdgen.CollieCmdGenerator(pool.hosts)

  def _RunCollie(self, cmd, what):
    """Runs a collie command, raising L{errors.CommandError} on failure.

    @type what: string
    @param what: description of the command for error messages
    @rtype: L{utils.RunResult}

    """
    result = self._run_cmd(cmd)
    if result.failed:
      base.ThrowError("collie %s failed (%s): %s", what, result.fail_reason,
                      result.output, errcls=errors.CommandError)
    return result

  def RefreshPool(self):
    """Update the pool's capacity, allocation and volume list.

    The volume list is empty after any failure. Capacity figures already
    parsed are kept if only the listing of volumes fails.

    """
    pool = self.pool
    pool.allocation = pool.capacity = pool.available = 0
    pool.volumes.Clear()

    result = self._RunCollie(self._cmd_gen.GenNodeInfoCmd(), "node info")
    sheepdog_info.ParseNodeInfo(pool, result.stdout)

    result = self._RunCollie(self._cmd_gen.GenVdiListCmd(), "vdi list")
    sheepdog_info.ParseVdiList(pool, result.stdout)

    logging.debug("Pool %s: capacity %d, allocation %d, %d volumes",
                  pool.name, pool.capacity, pool.allocation,
                  len(pool.volumes))

  def CreateVol(self, vol):
    """Create a new VDI.

    After the create command the volume is refreshed, whether or not the
    command succeeded. The refresh is best effort: its data is copied into
    C{vol} only if it worked, and its failure is never reported.

    """
    if vol.encryption is not None:
      base.ThrowError("Storage pool %s does not support encrypted volumes",
                      self.pool.name,
                      errcls=errors.ConfigurationUnsupportedError)

    result = self._run_cmd(self._cmd_gen.GenVdiCreateCmd(vol.name,
                                                         vol.capacity))

    # TODO: skip the refresh when the create command failed; callers may
    # currently see the details of a pre-existing VDI with the same name
    refreshed = vol.Copy()
    if base.IgnoreError(self.RefreshVol, refreshed):
      for name in ("capacity", "allocation", "type", "key", "target_path"):
        setattr(vol, name, getattr(refreshed, name))

    if result.failed:
      base.ThrowError("Can't create volume %s (%s): %s", vol.name,
                      result.fail_reason, result.output,
                      errcls=errors.CommandError)

  def RefreshVol(self, vol):
    """Update a VDI's capacity and allocation.

    """
    result = self._RunCollie(self._cmd_gen.GenVdiInfoCmd(vol.name),
                             "vdi list %s" % vol.name)
    sheepdog_info.ParseVdi(vol, result.stdout)

    vol.type = constants.VOL_TYPE_NETWORK
    vol.key = sheepdog_info.MakeVolumeKey(self.pool.source_name, vol.name)
    vol.target_path = vol.name

  def DeleteVol(self, vol, flags=0):
    """Remove a VDI.

    """
    base.CheckFlags(flags)
    self._RunCollie(self._cmd_gen.GenVdiDeleteCmd(vol.name),
                    "vdi delete %s" % vol.name)

  def ResizeVol(self, vol, capacity, flags=0):
    """Resize a VDI.

    The volume object itself is not updated; use L{RefreshVol} to read back
    the new size.

    """
    base.CheckFlags(flags)
    self._RunCollie(self._cmd_gen.GenVdiResizeCmd(vol.name, capacity),
                    "vdi resize %s" % vol.name)
