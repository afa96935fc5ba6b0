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

"""Utility functions for manipulating or working with text.

"""


import re
import numbers

from sheeppool import errors
from sheeppool import constants


#: Unit checker regexp
_PARSEUNIT_REGEX = re.compile(r"^([.\d]+)\s*([a-zA-Z]+)?$")

#: Characters which don't need to be quoted for shell commands
_SHELL_UNQUOTED_RE = re.compile("^[-.,=:/_+@A-Za-z0-9]+$")

#: Suffixes used when formatting, from the largest unit down
_FORMAT_UNITS = ("p", "t", "g", "m", "k")


def FormatUnit(value, units):
  """Formats an incoming number of bytes with the appropriate unit.

  @type value: int
  @param value: integer representing the value in bytes
  @type units: char
  @param units: the type of formatting we should do:
      - 'h' for automatic scaling
      - 'b' for bytes
      - 'k', 'm', 'g', 't', 'p' for KiB up to PiB
  @rtype: str
  @return: the formatted value (with suffix, when scaling automatically)

  """
  if units != "h" and units not in constants.UNIT_MULTIPLIERS:
    raise errors.ProgrammerError("Invalid unit specified '%s'" % str(units))

  if not isinstance(value, numbers.Real):
    raise errors.ProgrammerError("Invalid value specified '%s (%s)'" % (
        value, type(value)))

  if units == "b":
    return "%d" % value

  if units != "h":
    return "%.1f" % (float(value) / constants.UNIT_MULTIPLIERS[units])

  for unit in _FORMAT_UNITS:
    multiplier = constants.UNIT_MULTIPLIERS[unit]
    if value >= multiplier:
      return "%.1f%s" % (float(value) / multiplier, unit.upper())

  return "%dB" % value


def ParseUnit(input_string):
  """Tries to extract number and scale from the given string.

  Input must be in the format C{NUMBER+ [DOT NUMBER+] SPACE*
  [UNIT]}. If no unit is specified, the number is taken as bytes. Return
  value is always an int in bytes, rounded up.

  """
  m = _PARSEUNIT_REGEX.match(str(input_string))
  if not m:
    raise errors.UnitParseError("Invalid format")

  number = m.groups()[0]
  try:
    if "." in number:
      value = float(number)
    else:
      value = int(number)
  except ValueError:
    raise errors.UnitParseError("Invalid number: %s" % number)

  unit = m.groups()[1]
  if unit:
    lcunit = unit.lower()
  else:
    lcunit = "b"

  # accept "g", "gb" and "gib" alike
  if len(lcunit) > 1 and lcunit != "b":
    lcunit = lcunit.rstrip("b").rstrip("i")

  if lcunit not in constants.UNIT_MULTIPLIERS:
    raise errors.UnitParseError("Unknown unit: %s" % unit)

  value *= constants.UNIT_MULTIPLIERS[lcunit]

  # Make sure we round up
  if int(value) < value:
    value += 1

  return int(value)


def ShellQuote(value):
  """Quotes shell argument according to POSIX.

  @type value: str
  @param value: the argument to be quoted
  @rtype: str
  @return: the quoted value

  """
  if _SHELL_UNQUOTED_RE.match(value):
    return value
  else:
    return "'%s'" % value.replace("'", "'\\''")


def ShellQuoteArgs(args):
  """Quotes a list of shell arguments.

  @type args: list
  @param args: list of arguments to be quoted
  @rtype: str
  @return: the quoted arguments concatenated with spaces

  """
  return " ".join([ShellQuote(i) for i in args])


def CommaJoin(names):
  """Nicely join a set of identifiers.

  @param names: set, list or tuple
  @return: a string with the formatted results

  """
  return ", ".join([str(val) for val in names])
