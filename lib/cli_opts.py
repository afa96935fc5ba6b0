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


"""Module containing sheeppool's command line parsing options"""

from optparse import (Option, OptionValueError)

from sheeppool import constants


__all__ = [
  "cli_option",
  "COMMON_OPTS",
  "DEBUG_OPT",
  "ENCRYPTION_OPT",
  "HOST_OPT",
  "NOHDR_OPT",
  "OUTPUT_FORMAT_OPT",
  "POOL_FILE_OPT",
  "POOL_OPTS",
  "PORT_OPT",
  "SEP_OPT",
  "SOURCE_NAME_OPT",
  "USEUNITS_OPT",
  "VERBOSE_OPT",
  ]

#: Output formats of the list command
OUTPUT_TEXT = "text"
OUTPUT_JSON = "json"


def check_port(option, opt, value): # pylint: disable=W0613
  """OptParsers custom converter for TCP ports.

  Zero is accepted and means "use the default port".

  """
  try:
    port = int(value)
  except ValueError:
    raise OptionValueError("option %s: invalid port '%s'" % (opt, value))

  if not 0 <= port <= constants.MAX_PORT:
    raise OptionValueError("option %s: port %d out of range" % (opt, port))

  return port


class CliOption(Option):
  """Custom option class for optparse.

  """
  TYPES = Option.TYPES + (
    "port",
    )
  TYPE_CHECKER = Option.TYPE_CHECKER.copy()
  TYPE_CHECKER["port"] = check_port


# optparse.py sets make_option, so we do it for our own option class, too
cli_option = CliOption # pylint: disable=C0103


DEBUG_OPT = cli_option("-d", "--debug", default=0, action="count",
                       help="Increase debugging level")

VERBOSE_OPT = cli_option("-v", "--verbose", default=False,
                         action="store_true",
                         help="Increase the verbosity of the operation")

NOHDR_OPT = cli_option("--no-headers", default=False,
                       action="store_true", dest="no_headers",
                       help="Don't display column headers")

SEP_OPT = cli_option("--separator", default=None,
                     action="store", dest="separator",
                     help=("Separator between output fields"
                           " (defaults to one space)"))

USEUNITS_OPT = cli_option("--units", default=None,
                          dest="units", choices=("h", "b", "k", "m", "g", "t"),
                          help="Specify units for output (one of h/b/k/m/g/t)")

OUTPUT_FORMAT_OPT = cli_option("-o", "--output", dest="output",
                               default=OUTPUT_TEXT,
                               choices=(OUTPUT_TEXT, OUTPUT_JSON),
                               help="Output format (text or json)")

POOL_FILE_OPT = cli_option("--pool-file", dest="pool_file", default=None,
                           metavar="FILE",
                           help="JSON file holding the pool definition")

HOST_OPT = cli_option("--host", dest="host", default=None, metavar="ADDRESS",
                      help=("Sheepdog node to talk to [%s]" %
                            constants.SHEEPDOG_DEFAULT_ADDRESS))

PORT_OPT = cli_option("--port", dest="port", default=None, type="port",
                      metavar="PORT",
                      help=("Port of the sheepdog node [%s]" %
                            constants.SHEEPDOG_DEFAULT_PORT))

SOURCE_NAME_OPT = cli_option("--source-name", dest="source_name",
                             default=None, metavar="NAME",
                             help=("Cluster name used in volume keys [%s]" %
                                   constants.SHEEPDOG_DEFAULT_SOURCE))

ENCRYPTION_OPT = cli_option("--encryption", dest="encryption", default=None,
                            metavar="FORMAT",
                            help="Request an encrypted volume")

#: Options provided by all commands
COMMON_OPTS = [DEBUG_OPT, VERBOSE_OPT]

#: Options selecting the pool to operate on
POOL_OPTS = [POOL_FILE_OPT, HOST_OPT, PORT_OPT, SOURCE_NAME_OPT]
