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


"""Parsing of the raw output of the sheepdog collie tool.

All functions here work on the text printed by C{collie ... -r}. The output
is made of newline-terminated records; the records of interest are:

  - C{node info -r}: one record per node plus a summary record::

      0 15245667872 117571104 0%
      Total 15245667872 117571104 0% 20972341

  - C{vdi list -r}: one record per VDI revision::

      s 650f4363-dd7b-4aba-a954-7d6e1ab0ba51 1 2097152000 0 2088763392 ...
      = 650f4363-dd7b-4aba-a954-7d6e1ab0ba51 2 2097152000 381681664 ...

    The fields are the revision marker, name, id, size, used, shared,
    creation time, VDI id and an optional tag. A marker of C{=} denotes the
    current revision, anything else a snapshot. Spaces inside names are
    escaped with a backslash.

"""

import logging
import re

import pyparsing as pyp

from sheeppool import constants
from sheeppool import errors
from sheeppool import objects
from sheeppool.storage import base


#: Marker of the current (non-snapshot) revision of a VDI
VDI_CURRENT_MARKER = "="

#: Prefix of the cluster-wide summary record of C{node info}
NODE_INFO_TOTAL_PREFIX = "Total "

# marker plus the separator following it
_VDI_PREFIX_LEN = 2

_UINT64_MAX = 2 ** 64 - 1
_INT_MIN = -(2 ** 31)
_INT_MAX = 2 ** 31 - 1

_UNESCAPE_RE = re.compile(r"\\(.)", re.S)


class _CollieGrammar(object):
  """pyparsing expressions for the records of collie's raw output.

  The parsers are built on first use and cached on the class.

  """
  _PARSE_TOTAL = None
  _PARSE_VDI = None
  _PARSE_VDI_NONAME = None

  _uint = pyp.Regex(r"[0-9]+")
  _int = pyp.Regex(r"[-+]?[0-9]+")
  # a backslash takes the next character literally, so the name ends at
  # the first unescaped space; no whitespace is skipped in front of it
  _name = pyp.Regex(r"(?:\\.|[^ \\])+").leave_whitespace()

  @classmethod
  def GetTotalParser(cls):
    """Parser for what follows the C{Total } prefix of C{node info}.

    """
    if cls._PARSE_TOTAL is None:
      cls._PARSE_TOTAL = cls._uint("capacity") + cls._uint("allocation")
      cls._PARSE_TOTAL.parse_with_tabs()
    return cls._PARSE_TOTAL

  @classmethod
  def GetVdiParser(cls, with_name):
    """Parser for what follows the marker of a C{vdi list} record.

    @type with_name: bool
    @param with_name: whether the name is returned or only skipped

    """
    if with_name:
      if cls._PARSE_VDI is None:
        cls._PARSE_VDI = cls._BuildVdiParser(cls._name("name"))
      return cls._PARSE_VDI

    if cls._PARSE_VDI_NONAME is None:
      cls._PARSE_VDI_NONAME = cls._BuildVdiParser(pyp.Suppress(cls._name))
    return cls._PARSE_VDI_NONAME

  @classmethod
  def _BuildVdiParser(cls, name):
    # the remaining fields (shared, ctime, vdi id, tag) are not used
    parser = name + cls._int("id") + cls._uint("size") + cls._uint("used")
    # tabs are valid inside names
    return parser.parse_with_tabs()


def SplitRecords(output):
  """Splits collie output into records.

  The output ends at the first NUL character, if any. A record is the text
  up to a newline; a trailing record without newline is returned as
  unterminated.

  @type output: str or bytes
  @param output: the captured standard output
  @rtype: generator
  @return: tuples of (record without newline, terminated flag)

  """
  if isinstance(output, bytes):
    output = output.decode("utf-8", "replace")

  nul = output.find("\0")
  if nul != -1:
    output = output[:nul]

  pos = 0
  while pos < len(output):
    end = output.find("\n", pos)
    if end == -1:
      yield (output[pos:], False)
      return
    yield (output[pos:end], True)
    pos = end + 1


def UnescapeName(name):
  """Removes the backslash escaping from a VDI name.

  """
  return _UNESCAPE_RE.sub(r"\1", name)


def MakeVolumeKey(source_name, vol_name):
  """Builds the globally unique key of a volume.

  """
  return "%s%s%s" % (source_name, constants.VOL_KEY_SEPARATOR, vol_name)


def _ParseFields(parser, text, what):
  """Runs a record parser, turning failures into L{errors.ParseError}.

  """
  try:
    return parser.parse_string(text)
  except pyp.ParseBaseException as err:
    base.ThrowError("Can't parse %s record '%s': %s", what, text, err,
                    errcls=errors.ParseError)


def _ToInteger(text, field, lower, upper):
  value = int(text)
  if not lower <= value <= upper:
    base.ThrowError("Value '%s' of field '%s' is out of range", text, field,
                    errcls=errors.ParseError)
  return value


def _ToUnsigned(text, field):
  return _ToInteger(text, field, 0, _UINT64_MAX)


def ParseNodeInfo(pool, output):
  """Fills in the pool's capacity and usage from C{node info -r} output.

  The capacity, allocation and available fields of the pool are reset to
  zero first and only set once the summary record was parsed completely.

  @type pool: L{objects.StoragePool}
  @type output: str
  @raise errors.ParseError: if no valid summary record is found, or it
      reports more allocated than total space

  """
  pool.allocation = pool.capacity = pool.available = 0

  for (record, terminated) in SplitRecords(output):
    if not terminated:
      base.ThrowError("Unterminated record in node info output: '%s'",
                      record, errcls=errors.ParseError)

    if not record.startswith(NODE_INFO_TOTAL_PREFIX):
      continue

    fields = _ParseFields(_CollieGrammar.GetTotalParser(),
                          record[len(NODE_INFO_TOTAL_PREFIX):], "node info")
    capacity = _ToUnsigned(fields["capacity"], "capacity")
    allocation = _ToUnsigned(fields["allocation"], "allocation")
    if allocation > capacity:
      base.ThrowError("Allocation %d exceeds capacity %d in node info output",
                      allocation, capacity, errcls=errors.ParseError)

    pool.capacity = capacity
    pool.allocation = allocation
    pool.available = capacity - allocation
    return

  base.ThrowError("No '%s' record found in node info output",
                  NODE_INFO_TOTAL_PREFIX.strip(), errcls=errors.ParseError)


def _IterCurrentVdis(output, with_name):
  """Yields the parsed current-revision records of C{vdi list -r} output.

  Snapshot records are skipped without being parsed.

  @type with_name: bool
  @param with_name: whether to extract the name; if not, None is returned
      in its place
  @rtype: generator
  @return: tuples of (name, size, used)

  """
  for (record, terminated) in SplitRecords(output):
    if not record.startswith(VDI_CURRENT_MARKER):
      logging.debug("Skipping snapshot record '%s'", record)
      continue

    if not terminated:
      base.ThrowError("Unterminated record in vdi list output: '%s'",
                      record, errcls=errors.ParseError)

    if len(record) <= _VDI_PREFIX_LEN:
      base.ThrowError("Record '%s' in vdi list output has no name", record,
                      errcls=errors.ParseError)

    fields = _ParseFields(_CollieGrammar.GetVdiParser(with_name),
                          record[_VDI_PREFIX_LEN:], "vdi list")
    _ToInteger(fields["id"], "id", _INT_MIN, _INT_MAX)
    size = _ToUnsigned(fields["size"], "size")
    used = _ToUnsigned(fields["used"], "used")

    if with_name:
      name = UnescapeName(fields["name"])
    else:
      name = None

    yield (name, size, used)


def ParseVdiList(pool, output):
  """Rebuilds the pool's volume list from C{vdi list -r} output.

  Every current-revision record becomes a network volume appended to
  C{pool.volumes}, in output order. If any record can't be parsed, the
  volume list is left empty.

  @type pool: L{objects.StoragePool}
  @type output: str
  @raise errors.ParseError: if a record doesn't have the expected format
  @raise errors.AllocationError: if a volume can't be built

  """
  pool.volumes.Clear()

  try:
    for (name, size, used) in _IterCurrentVdis(output, True):
      try:
        vol = objects.StorageVolume(name=name,
                                    type=constants.VOL_TYPE_NETWORK,
                                    capacity=size,
                                    allocation=used,
                                    target_path=name,
                                    key=MakeVolumeKey(pool.source_name, name))
        pool.volumes.Append(vol)
      except MemoryError:
        base.ThrowError("Out of memory while adding volume '%s'", name,
                        errcls=errors.AllocationError)
  except errors.StorageError:
    pool.volumes.Clear()
    raise


def ParseVdi(vol, output):
  """Fills in a volume's capacity and usage from C{vdi list NAME -r} output.

  Only the first current-revision record is used.

  @type vol: L{objects.StorageVolume}
  @type output: str
  @raise errors.ParseError: if there is no valid current-revision record

  """
  vol.allocation = vol.capacity = 0

  for (_, size, used) in _IterCurrentVdis(output, False):
    vol.capacity = size
    vol.allocation = used
    return

  base.ThrowError("No current revision of volume '%s' in vdi list output",
                  vol.name, errcls=errors.ParseError)
