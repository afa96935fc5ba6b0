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

"""Utility functions for logging.

"""

import logging


def SetupToolLogging(debug, verbose, _root_logger=None, _stream=None):
  """Sends the log messages of the sheeppool tool to stderr.

  By default only warnings and errors are shown. Verbose mode adds the
  informational messages, such as the collie command lines being run, and
  debug mode shows everything. Both prefix each message with its level.

  @type debug: int
  @param debug: the debug level; any non-zero value disables filtering
  @type verbose: boolean
  @param verbose: Enable verbose log messages
  @rtype: logging.Handler
  @return: the handler that was installed

  """
  if debug:
    level = logging.NOTSET
  elif verbose:
    level = logging.INFO
  else:
    level = logging.WARNING

  if debug or verbose:
    fmt = "%(asctime)s: %(levelname)s %(message)s"
  else:
    fmt = "%(asctime)s: %(message)s"

  handler = logging.StreamHandler(_stream)
  handler.setFormatter(logging.Formatter(fmt))
  handler.setLevel(level)

  if _root_logger is None:
    _root_logger = logging.getLogger("")
  _root_logger.setLevel(logging.NOTSET)
  _root_logger.addHandler(handler)

  return handler
