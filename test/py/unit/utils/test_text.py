#!/usr/bin/python3
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


"""Script for testing sheeppool.utils.text"""

import unittest

from sheeppool import errors
from sheeppool import utils

import testutils


class TestFormatUnit(unittest.TestCase):
  """Test case for the FormatUnit function"""

  def testBytes(self):
    self.assertEqual(utils.FormatUnit(0, "b"), "0")
    self.assertEqual(utils.FormatUnit(15245667872, "b"), "15245667872")

  def testFixedUnits(self):
    self.assertEqual(utils.FormatUnit(1024, "k"), "1.0")
    self.assertEqual(utils.FormatUnit(1536 * 1024, "m"), "1.5")
    self.assertEqual(utils.FormatUnit(2097152000, "g"), "2.0")
    self.assertEqual(utils.FormatUnit(1024 ** 4, "t"), "1.0")

  def testHuman(self):
    self.assertEqual(utils.FormatUnit(0, "h"), "0B")
    self.assertEqual(utils.FormatUnit(1023, "h"), "1023B")
    self.assertEqual(utils.FormatUnit(1024, "h"), "1.0K")
    self.assertEqual(utils.FormatUnit(3 * 1024 ** 3 // 2, "h"), "1.5G")
    self.assertEqual(utils.FormatUnit(15245667872, "h"), "14.2G")
    self.assertEqual(utils.FormatUnit(5 * 1024 ** 5, "h"), "5.0P")

  def testErrors(self):
    self.assertRaises(errors.ProgrammerError, utils.FormatUnit, 1, "a")
    self.assertRaises(errors.ProgrammerError, utils.FormatUnit, "1", "h")


class TestParseUnit(unittest.TestCase):
  """Test case for the ParseUnit function"""

  SCALES = (("", 1),
            ("B", 1),
            ("k", 1024), ("K", 1024), ("KB", 1024), ("KiB", 1024),
            ("m", 1024 ** 2), ("M", 1024 ** 2), ("MB", 1024 ** 2),
            ("g", 1024 ** 3), ("G", 1024 ** 3), ("GiB", 1024 ** 3),
            ("t", 1024 ** 4), ("T", 1024 ** 4), ("TB", 1024 ** 4))

  def testRounding(self):
    self.assertEqual(utils.ParseUnit("0"), 0)
    self.assertEqual(utils.ParseUnit("1"), 1)
    self.assertEqual(utils.ParseUnit("1.5"), 2)
    self.assertEqual(utils.ParseUnit("0.5k"), 512)
    self.assertEqual(utils.ParseUnit("1.0001k"), 1025)

  def testUnits(self):
    for sep in ("", " ", "    "):
      for suffix, scale in self.SCALES:
        for func in (lambda x: x, str.lower, str.upper):
          self.assertEqual(utils.ParseUnit("1024" + sep + func(suffix)),
                           1024 * scale)

  def testLargeExact(self):
    self.assertEqual(utils.ParseUnit("18446744073709551615"), 2 ** 64 - 1)

  def testInvalidInput(self):
    for sep in ("-", "_", ",", "a"):
      self.assertRaises(errors.UnitParseError, utils.ParseUnit, "1" + sep + "4")

    for suffix in ("xyzzy", "foo", "x", "gigs"):
      self.assertRaises(errors.UnitParseError, utils.ParseUnit, "1" + suffix)

    for data in ("", "-1", ".", "1.2.3g"):
      self.assertRaises(errors.UnitParseError, utils.ParseUnit, data)


class TestShellQuoting(unittest.TestCase):
  """Test case for shell quoting functions"""

  def testShellQuote(self):
    self.assertEqual(utils.ShellQuote("abc"), "abc")
    self.assertEqual(utils.ShellQuote("ab\"c"), "'ab\"c'")
    self.assertEqual(utils.ShellQuote("a'bc"), "'a'\\''bc'")
    self.assertEqual(utils.ShellQuote("a b c"), "'a b c'")
    self.assertEqual(utils.ShellQuote("a b\\ c"), "'a b\\ c'")

  def testShellQuoteArgs(self):
    self.assertEqual(utils.ShellQuoteArgs(["a", "b", "c"]), "a b c")
    self.assertEqual(utils.ShellQuoteArgs(["collie", "vdi", "delete", "a b"]),
                     "collie vdi delete 'a b'")


class TestCommaJoin(unittest.TestCase):
  def test(self):
    self.assertEqual(utils.CommaJoin([]), "")
    self.assertEqual(utils.CommaJoin([1, 2, 3]), "1, 2, 3")
    self.assertEqual(utils.CommaJoin(["Hello"]), "Hello")


if __name__ == "__main__":
  testutils.SheeppoolTestProgram()
