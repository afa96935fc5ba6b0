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


"""Storage pool related commands"""

# pylint: disable=W0401,W0613,W0614,C0103
# W0401: Wildcard import sheeppool.cli
# W0613: Unused argument, since all functions follow the same API
# W0614: Unused import %s from wildcard import (since we need cli)
# C0103: Invalid name sp-pool

from sheeppool.cli import *
from sheeppool import cli_opts
from sheeppool import constants
from sheeppool import errors
from sheeppool import objects
from sheeppool import serializer
from sheeppool import utils
from sheeppool.storage import backends


#: default list of fields for L{ListVolumes}
_LIST_DEF_FIELDS = ["name", "capacity", "allocation", "key"]

_LIST_HEADERS = {
  "name": "Name",
  "capacity": "Capacity",
  "allocation": "Allocation",
  "key": "Key",
  }


def _LoadPool(opts):
  """Builds the pool to operate on from the command line options.

  The pool definition file, if given, is read first; the host, port and
  source name options override what it contains; host and port apply to
  the first host of the file.

  @rtype: L{objects.StoragePool}

  """
  if opts.pool_file:
    try:
      with open(opts.pool_file) as fd:
        data = serializer.LoadJson(fd.read())
    except EnvironmentError as err:
      raise errors.ConfigurationError("Can't read pool file '%s': %s" %
                                      (opts.pool_file, err))
    except ValueError as err:
      raise errors.ConfigurationError("Pool file '%s' is not valid JSON: %s" %
                                      (opts.pool_file, err))
    pool = objects.StoragePool.FromDict(data)
  else:
    pool = objects.StoragePool(type=constants.POOL_TYPE_SHEEPDOG)

  if opts.source_name:
    pool.source_name = opts.source_name
  elif pool.source_name is None:
    pool.source_name = constants.SHEEPDOG_DEFAULT_SOURCE

  if pool.name is None:
    pool.name = pool.source_name

  if opts.host is not None or opts.port is not None:
    if not pool.hosts:
      pool.hosts.append(objects.PoolHost())
    # commands only talk to the first host
    host = pool.hosts[0]
    if opts.host is not None:
      host.name = opts.host
    if opts.port is not None:
      host.port = opts.port

  return pool


def _FormatSize(opts, value):
  return utils.FormatUnit(value, opts.units or "h")


def ShowPoolInfo(opts, args):
  """Show the capacity and usage of a pool.

  @param opts: the command line options selected by the user
  @type args: list
  @param args: should be an empty list
  @rtype: int
  @return: the desired exit code

  """
  pool = _LoadPool(opts)
  backends.RefreshPool(pool)

  ToStdout("Pool: %s", pool.name)
  ToStdout("  Capacity: %s", _FormatSize(opts, pool.capacity))
  ToStdout("  Allocation: %s", _FormatSize(opts, pool.allocation))
  ToStdout("  Available: %s", _FormatSize(opts, pool.available))
  ToStdout("  Volumes: %d", len(pool.volumes))

  return constants.EXIT_SUCCESS


def ListVolumes(opts, args):
  """List the volumes of a pool.

  @param opts: the command line options selected by the user
  @type args: list
  @param args: should be an empty list
  @rtype: int
  @return: the desired exit code

  """
  pool = _LoadPool(opts)
  backends.RefreshPool(pool)

  if opts.output == cli_opts.OUTPUT_JSON:
    data = serializer.DumpJson([vol.ToDict() for vol in pool.volumes])
    ToStdout(data.decode("utf-8").rstrip("\n"))
    return constants.EXIT_SUCCESS

  if opts.no_headers:
    headers = None
  else:
    headers = _LIST_HEADERS.copy()

  data = [[getattr(vol, field) for field in _LIST_DEF_FIELDS]
          for vol in pool.volumes]

  for line in GenerateTable(headers, _LIST_DEF_FIELDS, opts.separator, data,
                            sizefields=["capacity", "allocation"],
                            units=opts.units):
    ToStdout(line)

  return constants.EXIT_SUCCESS


def ShowVolumeInfo(opts, args):
  """Show the details of one volume.

  @param opts: the command line options selected by the user
  @type args: list
  @param args: should contain only one element, the volume name
  @rtype: int
  @return: the desired exit code

  """
  pool = _LoadPool(opts)
  vol = objects.StorageVolume(name=args[0])
  backends.RefreshVolume(pool, vol)

  ToStdout("Volume: %s", vol.name)
  ToStdout("  Type: %s", vol.type)
  ToStdout("  Key: %s", vol.key)
  ToStdout("  Path: %s", vol.target_path)
  ToStdout("  Capacity: %s", _FormatSize(opts, vol.capacity))
  ToStdout("  Allocation: %s", _FormatSize(opts, vol.allocation))

  return constants.EXIT_SUCCESS


def AddVolume(opts, args):
  """Create a volume.

  @param opts: the command line options selected by the user
  @type args: list
  @param args: the volume name and its size
  @rtype: int
  @return: the desired exit code

  """
  (name, size) = args
  pool = _LoadPool(opts)

  vol = objects.StorageVolume(name=name, capacity=utils.ParseUnit(size))
  if opts.encryption:
    vol.encryption = objects.VolumeEncryption(format=opts.encryption)

  backends.CreateVolume(pool, vol)

  ToStdout("Volume %s created, capacity %s", vol.name,
           _FormatSize(opts, vol.capacity))
  return constants.EXIT_SUCCESS


def RemoveVolume(opts, args):
  """Delete a volume.

  @param opts: the command line options selected by the user
  @type args: list
  @param args: should contain only one element, the volume name
  @rtype: int
  @return: the desired exit code

  """
  pool = _LoadPool(opts)
  backends.DeleteVolume(pool, objects.StorageVolume(name=args[0]))
  return constants.EXIT_SUCCESS


def SetVolumeSize(opts, args):
  """Change the capacity of a volume.

  @param opts: the command line options selected by the user
  @type args: list
  @param args: the volume name and its new size
  @rtype: int
  @return: the desired exit code

  """
  (name, size) = args
  pool = _LoadPool(opts)
  backends.ResizeVolume(pool, objects.StorageVolume(name=name),
                        utils.ParseUnit(size))
  return constants.EXIT_SUCCESS


_VOLUME_SIZE_ARGS = [ArgVolume(), ArgSize()]

commands = {
  "info": (
    ShowPoolInfo, ARGS_NONE, POOL_OPTS + [USEUNITS_OPT],
    "", "Show capacity and usage of the pool"),
  "list": (
    ListVolumes, ARGS_NONE,
    POOL_OPTS + [NOHDR_OPT, SEP_OPT, USEUNITS_OPT, OUTPUT_FORMAT_OPT],
    "", "List the volumes of the pool"),
  "vol-info": (
    ShowVolumeInfo, ARGS_ONE_VOLUME, POOL_OPTS + [USEUNITS_OPT],
    "<name>", "Show the details of a volume"),
  "vol-create": (
    AddVolume, _VOLUME_SIZE_ARGS,
    POOL_OPTS + [ENCRYPTION_OPT, USEUNITS_OPT],
    "<name> <size>", "Create a volume"),
  "vol-delete": (
    RemoveVolume, ARGS_ONE_VOLUME, POOL_OPTS,
    "<name>", "Delete a volume"),
  "vol-resize": (
    SetVolumeSize, _VOLUME_SIZE_ARGS, POOL_OPTS,
    "<name> <size>", "Change the capacity of a volume"),
  }


def Main():
  return GenericMain(commands)
