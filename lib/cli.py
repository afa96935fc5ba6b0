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


"""Command line plumbing of the sheeppool tool"""


import sys
import textwrap
import os.path
import logging

from io import StringIO
from optparse import (OptionParser, TitledHelpFormatter)

from sheeppool import utils
from sheeppool import errors
from sheeppool import constants
import sheeppool.cli_opts
# Import constants
from sheeppool.cli_opts import *  # pylint: disable=W0401,W0614


__all__ = [
  # Generic functions for CLI programs
  "GenericMain",
  # Formatting functions
  "ToStderr", "ToStdout",
  "FormatError",
  "GenerateTable",
  # command line options support infrastructure
  "ARGS_NONE",
  "ARGS_ONE_VOLUME",
  "ArgSize",
  "ArgVolume",
  ] + sheeppool.cli_opts.__all__ # Command line options


class _Argument(object):
  """A positional argument taking between C{min} and C{max} values.

  """
  def __init__(self, min=1, max=1): # pylint: disable=W0622
    if max < min:
      raise errors.ProgrammerError("Argument can't take at most %d values"
                                   " but at least %d" % (max, min))
    self.min = min
    self.max = max

  def __repr__(self):
    return ("<%s min=%s max=%s>" %
            (self.__class__.__name__, self.min, self.max))


class ArgVolume(_Argument):
  """Volume name argument.

  """


class ArgSize(_Argument):
  """Size argument, with an optional unit suffix.

  """


ARGS_NONE = []
ARGS_ONE_VOLUME = [ArgVolume()]


class _ShowUsage(Exception):
  """Raised by L{_ParseArgs} when the command list should be printed.

  @ivar exit_error: whether to report failure on exit

  """
  def __init__(self, exit_error):
    Exception.__init__(self)
    self.exit_error = exit_error


class _ShowVersion(Exception):
  """Raised by L{_ParseArgs} when the version should be printed.

  """


def _ParseArgs(binary, argv, commands):
  """Parses the command line of a sheeppool invocation.

  The first argument selects the command; its options and positional
  arguments are parsed with the option list of that command.

  @param binary: script name
  @param argv: the full command line, including the script name
  @param commands: dictionary containing command definitions
  @return: tuple of (function, options, arguments), or (None, None, None)
      if the positional arguments don't match the command
  @raise _ShowUsage: if no or an unknown command was given, or C{--help}
  @raise _ShowVersion: on C{--version}

  """
  cmd = None
  if len(argv) > 1:
    cmd = argv[1]

  if cmd == "--version":
    raise _ShowVersion()

  if cmd not in commands:
    raise _ShowUsage(exit_error=(cmd != "--help"))

  (func, args_def, cmd_opts, usage, description) = commands[cmd]
  parser = OptionParser(option_list=cmd_opts + COMMON_OPTS,
                        description=description,
                        formatter=TitledHelpFormatter(),
                        usage="%s %s %s" % (binary, cmd, usage))
  # everything after the first positional argument is positional too
  parser.disable_interspersed_args()
  (options, args) = parser.parse_args(args=argv[2:])

  if not _CheckArguments(cmd, args_def, args):
    return (None, None, None)

  return (func, options, args)


def _FormatUsage(binary, commands):
  """Generates the lines of the command overview.

  @param binary: script name
  @param commands: dictionary containing command definitions

  """
  width = max(map(len, commands))

  yield "Usage: %s {command} [options...] [argument...]" % binary
  yield "%s <command> --help to see details" % binary
  yield ""
  yield "Commands:"

  for cmd in sorted(commands):
    help_lines = textwrap.wrap(commands[cmd][4], 79 - 3 - width)
    yield " %-*s - %s" % (width, cmd, help_lines[0])
    for line in help_lines[1:]:
      yield " %-*s   %s" % (width, "", line)

  yield ""


def _CheckArguments(cmd, args_def, args):
  """Verifies the number of positional arguments of a command.

  sheeppool commands take a fixed sequence of positional arguments, so
  the definition reduces to a lower and an upper bound on the count.

  @type cmd: str
  @param cmd: command name, for the error message
  @type args_def: list of L{_Argument}
  @type args: list
  @rtype: bool

  """
  min_count = sum(arg.min for arg in args_def)
  max_count = sum(arg.max for arg in args_def)

  if max_count == 0:
    if args:
      ToStderr("Error: Command %s expects no arguments", cmd)
      return False
  elif min_count == max_count:
    if len(args) != min_count:
      ToStderr("Error: Command %s expects %d argument(s)", cmd, min_count)
      return False
  elif not min_count <= len(args) <= max_count:
    ToStderr("Error: Command %s expects between %d and %d arguments",
             cmd, min_count, max_count)
    return False

  return True


def FormatError(err):
  """Return a formatted error message for a given error.

  This function takes an exception instance and returns a tuple
  consisting of two values: first, the recommended exit code, and
  second, a string describing the error message (not
  newline-terminated).

  """
  retcode = constants.EXIT_FAILURE
  obuf = StringIO()
  msg = str(err)
  if isinstance(err, errors.ConfigurationError):
    txt = "Invalid pool definition: %s" % msg
    logging.error(txt)
    obuf.write(txt + "\n")
    obuf.write("Aborting.")
    retcode = constants.EXIT_CONFIGURATION
  elif isinstance(err, errors.UnitParseError):
    obuf.write("Failure: invalid size given: %s" % msg)
  elif isinstance(err, errors.ConfigurationUnsupportedError):
    obuf.write("Failure: operation not supported by this pool:\n%s" % msg)
  elif isinstance(err, errors.CommandError):
    obuf.write("Failure: command execution error:\n%s" % msg)
  elif isinstance(err, errors.ParseError):
    obuf.write("Failure: unexpected output from the storage tool:\n%s" % msg)
  elif isinstance(err, errors.AllocationError):
    obuf.write("Failure: out of resources:\n%s" % msg)
  elif isinstance(err, errors.StorageError):
    obuf.write("Failure: storage error (%s):\n%s" % (err.ecode, msg))
  elif isinstance(err, errors.GenericError):
    obuf.write("Unhandled sheeppool error: %s" % msg)
  else:
    obuf.write("Unhandled exception: %s" % msg)
  return retcode, obuf.getvalue().rstrip("\n")


def GenericMain(commands):
  """Main function of the sheeppool tool.

  Parses the command line, sets up logging according to C{--debug} and
  C{--verbose} and runs the selected command. sheeppool errors raised by
  the command are reported through L{FormatError}.

  @param commands: a dictionary mapping command names to tuples of
                   (function, argument definition, options, usage,
                   description)
  @rtype: int
  @return: the exit code

  """
  if sys.argv:
    binary = os.path.basename(sys.argv[0]) or sys.argv[0]
  else:
    binary = "sheeppool"

  try:
    (func, options, args) = _ParseArgs(binary, sys.argv, commands)
  except _ShowVersion:
    ToStdout("%s (sheeppool) %s", binary, constants.RELEASE_VERSION)
    return constants.EXIT_SUCCESS
  except _ShowUsage as err:
    for line in _FormatUsage(binary, commands):
      ToStdout(line)
    if err.exit_error:
      return constants.EXIT_FAILURE
    return constants.EXIT_SUCCESS

  if func is None:
    return constants.EXIT_FAILURE

  utils.SetupToolLogging(options.debug, options.verbose)

  logging.debug("Command line: %s",
                utils.ShellQuoteArgs([binary] + sys.argv[1:]))

  try:
    result = func(options, args)
  except errors.GenericError as err:
    (result, err_msg) = FormatError(err)
    logging.debug("Error during command processing", exc_info=True)
    ToStderr(err_msg)
  except KeyboardInterrupt:
    result = constants.EXIT_FAILURE
    ToStderr("Aborted.")

  return result


def _FormatCell(value, is_size, units):
  if is_size and isinstance(value, int):
    return utils.FormatUnit(value, units)
  return str(value)


def GenerateTable(headers, fields, separator, data, sizefields=None,
                  units=None):
  """Formats rows of volume data as the lines of a table.

  @type headers: dict or None
  @param headers: column titles keyed by field name; if None, no header
      line is generated
  @type fields: list
  @param fields: the field names, in column order
  @param separator: the string put between columns; if None, columns are
      padded to a common width and separated by one space
  @type data: list
  @param data: one list of values per row, in the order of C{fields}
  @type sizefields: list
  @param sizefields: fields holding byte counts; their values are formatted
      with L{utils.FormatUnit} and right-aligned
  @type units: string or None
  @param units: the unit for the size fields; if None, human-readable
      units are used without separator and bytes with one
  @rtype: list
  @return: the lines of the table

  """
  if units is None:
    if separator:
      units = "b"
    else:
      units = "h"

  sizefields = frozenset(sizefields or [])

  rows = []
  if headers:
    rows.append([headers[field] for field in fields])
  for row in data:
    rows.append([_FormatCell(value, field in sizefields, units)
                 for (field, value) in zip(fields, row)])

  if separator is not None:
    return [separator.join(row) for row in rows]

  if not rows:
    return []

  widths = [max(len(row[idx]) for row in rows) for idx in range(len(fields))]
  # no trailing blanks after a left-aligned last column
  if fields and fields[-1] not in sizefields:
    widths[-1] = 0

  result = []
  for row in rows:
    cells = []
    for (field, width, cell) in zip(fields, widths, row):
      if field in sizefields:
        cells.append(cell.rjust(width))
      else:
        cells.append(cell.ljust(width))
    result.append(" ".join(cells))

  return result


def _ToStream(stream, txt, *args):
  """Writes one line to a stream, bypassing the logging system.

  A closed pipe on the other end, e.g. when the output is piped into
  C{head}, ends the program instead of producing a traceback.

  """
  if args:
    txt = txt % args

  try:
    stream.write(txt + "\n")
    stream.flush()
  except BrokenPipeError:
    sys.exit(constants.EXIT_FAILURE)


def ToStdout(txt, *args):
  """Write a message to stdout only, bypassing the logging system

  @type txt: str
  @param txt: the message, a format string if C{args} are given

  """
  _ToStream(sys.stdout, txt, *args)


def ToStderr(txt, *args):
  """Write a message to stderr only, bypassing the logging system

  @type txt: str
  @param txt: the message, a format string if C{args} are given

  """
  _ToStream(sys.stderr, txt, *args)
