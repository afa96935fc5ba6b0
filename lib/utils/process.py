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


"""Utility functions for processes.

"""


import os
import errno
import logging
import signal
import subprocess

from sheeppool import errors
from sheeppool import constants

from sheeppool.utils import text as utils_text


(_TIMEOUT_NONE,
 _TIMEOUT_TERM,
 _TIMEOUT_KILL) = range(3)


def _DescribeTermination(exit_code, signal_, timeout_action, timeout):
  """Builds the human-readable reason why a program failed.

  """
  if signal_ is not None:
    msgs = ["terminated by signal %s" % signal_]
  elif exit_code is not None:
    msgs = ["exited with exit code %s" % exit_code]
  else:
    msgs = ["unable to determine termination reason"]

  if timeout_action == _TIMEOUT_TERM:
    msgs.append("terminated after timeout of %.2f seconds" % timeout)
  elif timeout_action == _TIMEOUT_KILL:
    msgs.append("force termination after timeout of %.2f seconds"
                " and linger for another %.2f seconds" %
                (timeout, constants.CHILD_LINGER_TIMEOUT))

  return utils_text.CommaJoin(msgs)


class RunResult(object):
  """Holds the result of running an external program.

  @ivar cmd: the shell-quoted command line
  @ivar exit_code: the exit code, or None if the program was killed
  @ivar signal: the signal that ended the program, or None
  @ivar stdout: the standard output of the program
  @ivar stderr: the standard error of the program
  @ivar failed: whether the program was killed or exited with non-zero code
  @ivar failed_by_timeout: whether the program had to be stopped because it
      ran into the timeout
  @ivar fail_reason: why the program failed, or None if it didn't

  """
  __slots__ = ["exit_code", "signal", "stdout", "stderr",
               "failed", "failed_by_timeout", "fail_reason", "cmd"]

  def __init__(self, exit_code, signal_, stdout, stderr, cmd, timeout_action,
               timeout):
    self.cmd = cmd
    self.exit_code = exit_code
    self.signal = signal_
    self.stdout = stdout
    self.stderr = stderr
    self.failed = (signal_ is not None or exit_code != 0)
    self.failed_by_timeout = (timeout_action != _TIMEOUT_NONE)

    if self.failed:
      self.fail_reason = _DescribeTermination(exit_code, signal_,
                                              timeout_action, timeout)
      logging.debug("Command '%s' failed (%s); output: %s",
                    cmd, self.fail_reason, self.output)
    else:
      self.fail_reason = None

  @property
  def output(self):
    """The standard output followed by the standard error.

    """
    return self.stdout + self.stderr


def _BuildCmdEnvironment(env, reset):
  """Builds the environment for an external program.

  Unless reset, the current environment is used with C{LC_ALL=C}, so that
  collie's output doesn't depend on the caller's locale.

  """
  if reset:
    cmd_env = {}
  else:
    cmd_env = os.environ.copy()
    cmd_env["LC_ALL"] = "C"

  if env is not None:
    cmd_env.update(env)

  return cmd_env


def _WaitForChild(child, strcmd, timeout, linger_timeout):
  """Collects the output of a child, stopping it if it runs too long.

  On timeout the child gets SIGTERM; if it is still running after the
  linger timeout it is killed.

  @return: tuple of (stdout, stderr, timeout action)

  """
  try:
    (out, err) = child.communicate(timeout=timeout)
    return (out, err, _TIMEOUT_NONE)
  except subprocess.TimeoutExpired:
    logging.warning("Command %s (%d) run into execution timeout,"
                    " terminating", strcmd, child.pid)

  child.send_signal(signal.SIGTERM)
  try:
    (out, err) = child.communicate(timeout=linger_timeout)
    return (out, err, _TIMEOUT_TERM)
  except subprocess.TimeoutExpired:
    logging.warning("Command %s (%d) run into linger timeout, killing",
                    strcmd, child.pid)

  child.kill()
  (out, err) = child.communicate()
  return (out, err, _TIMEOUT_KILL)


def RunCmd(cmd, env=None, cwd="/", reset_env=False, timeout=None,
           _linger_timeout=constants.CHILD_LINGER_TIMEOUT):
  """Execute a command and capture its output.

  The command gets no standard input.

  @type cmd: list
  @param cmd: Command to run, as an argument vector
  @type env: dict
  @param env: Additional environment variables
  @type cwd: string
  @param cwd: the working directory of the command
  @type reset_env: boolean
  @param reset_env: whether to start from an empty environment
  @type timeout: int
  @param timeout: If not None, timeout in seconds until child process gets
                  killed
  @rtype: L{RunResult}
  @raise errors.CommandError: if the program can't be executed

  """
  if isinstance(cmd, str):
    raise errors.ProgrammerError("RunCmd expects an argument vector, got"
                                 " the string '%s'" % cmd)

  cmd = [str(val) for val in cmd]
  strcmd = utils_text.ShellQuoteArgs(cmd)

  logging.info("RunCmd %s", strcmd)

  try:
    child = subprocess.Popen(cmd, stdin=subprocess.DEVNULL,
                             stdout=subprocess.PIPE, stderr=subprocess.PIPE,
                             env=_BuildCmdEnvironment(env, reset_env),
                             cwd=cwd, encoding="utf-8", errors="replace")
  except OSError as err:
    if err.errno == errno.ENOENT:
      raise errors.CommandError("Can't execute '%s': not found (%s)" %
                                (strcmd, err))
    raise errors.CommandError("Can't execute '%s': %s" % (strcmd, err))

  (out, err, timeout_action) = _WaitForChild(child, strcmd, timeout,
                                             _linger_timeout)

  # negative return codes are signals
  if child.returncode >= 0:
    (exit_code, signal_) = (child.returncode, None)
  else:
    (exit_code, signal_) = (None, -child.returncode)

  return RunResult(exit_code, signal_, out, err, strcmd, timeout_action,
                   timeout)
