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


"""Sheepdog collie command generating classes"""

from sheeppool import constants
from sheeppool import pathutils


class CollieCmdGenerator(object):
  """Generates collie command lines for a sheepdog pool.

  Every command is addressed to the first host of the pool, or to the
  default sheepdog endpoint if the pool has none. Sizes are passed to
  collie in bytes.

  """
  def __init__(self, hosts):
    """Initializes the generator.

    @type hosts: list of L{objects.PoolHost}
    @param hosts: the hosts of the pool; only the first one is used

    """
    self._hosts = hosts

  def _GetHostArgs(self):
    """Returns the arguments selecting the sheepdog node to talk to.

    A missing host name uses the default address, and a port of zero or
    none at all uses the default port.

    """
    address = constants.SHEEPDOG_DEFAULT_ADDRESS
    port = constants.SHEEPDOG_DEFAULT_PORT

    if self._hosts:
      host = self._hosts[0]
      if host.name is not None:
        address = host.name
      if host.port:
        port = host.port

    return ["-a", address, "-p", "%d" % port]

  def _BuildCmd(self, args):
    return [pathutils.COLLIE_CMD] + args + self._GetHostArgs()

  def GenNodeInfoCmd(self):
    return self._BuildCmd(["node", "info", "-r"])

  def GenVdiListCmd(self):
    return self._BuildCmd(["vdi", "list", "-r"])

  def GenVdiInfoCmd(self, name):
    return self._BuildCmd(["vdi", "list", name, "-r"])

  def GenVdiCreateCmd(self, name, capacity):
    return self._BuildCmd(["vdi", "create", name, "%d" % capacity])

  def GenVdiDeleteCmd(self, name):
    return self._BuildCmd(["vdi", "delete", name])

  def GenVdiResizeCmd(self, name, capacity):
    return self._BuildCmd(["vdi", "resize", name, "%d" % capacity])
