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


"""Script for unittesting the sheeppool.storage.sheepdog_info module"""

import unittest

from sheeppool import constants
from sheeppool import errors
from sheeppool import objects
from sheeppool.storage import sheepdog_info

import testutils


_VDI_NAME = "650f4363-dd7b-4aba-a954-7d6e1ab0ba51"


def _MakePool():
  return objects.StoragePool(name="pool1", source_name="cluster1",
                             type=constants.POOL_TYPE_SHEEPDOG)


class TestSplitRecords(unittest.TestCase):
  def testEmpty(self):
    self.assertEqual(list(sheepdog_info.SplitRecords("")), [])

  def testTerminated(self):
    self.assertEqual(list(sheepdog_info.SplitRecords("a b\n\nc\n")),
                     [("a b", True), ("", True), ("c", True)])

  def testUnterminated(self):
    self.assertEqual(list(sheepdog_info.SplitRecords("a\nb")),
                     [("a", True), ("b", False)])

  def testNulEndsOutput(self):
    self.assertEqual(list(sheepdog_info.SplitRecords("a\nb\0c\n")),
                     [("a", True), ("b", False)])

  def testBytes(self):
    self.assertEqual(list(sheepdog_info.SplitRecords(b"a\n")),
                     [("a", True)])


class TestParseNodeInfo(testutils.SheeppoolTestCase):
  def testParse(self):
    pool = _MakePool()
    sheepdog_info.ParseNodeInfo(pool,
                                testutils.ReadTestData("sheepdog/node_info.txt"))
    self.assertEqual(pool.capacity, 15245667872)
    self.assertEqual(pool.allocation, 117571104)
    self.assertEqual(pool.available, 15128096768)

  def testTotalOnly(self):
    pool = _MakePool()
    sheepdog_info.ParseNodeInfo(pool, "Total 15245667872 117571104 0%\n")
    self.assertEqual(pool.capacity, 15245667872)
    self.assertEqual(pool.allocation, 117571104)
    self.assertEqual(pool.available, 15128096768)

  def testFirstTotalWins(self):
    pool = _MakePool()
    sheepdog_info.ParseNodeInfo(pool, "Total 100 40 40%\nTotal 1 1 100%\n")
    self.assertEqual((pool.capacity, pool.allocation, pool.available),
                     (100, 40, 60))

  def testNoTotal(self):
    pool = _MakePool()
    pool.capacity = pool.allocation = pool.available = 123
    data = testutils.ReadTestData("sheepdog/node_info_no_total.txt")
    self.assertRaises(errors.ParseError, sheepdog_info.ParseNodeInfo,
                      pool, data)
    self.assertEqual((pool.capacity, pool.allocation, pool.available),
                     (0, 0, 0))

  def testEmpty(self):
    self.assertRaises(errors.ParseError, sheepdog_info.ParseNodeInfo,
                      _MakePool(), "")

  def testUnterminated(self):
    pool = _MakePool()
    self.assertRaises(errors.ParseError, sheepdog_info.ParseNodeInfo,
                      pool, "Total 15245667872 117571104 0%")
    self.assertEqual(pool.capacity, 0)

  def testUnterminatedBeforeTotal(self):
    self.assertRaises(errors.ParseError, sheepdog_info.ParseNodeInfo,
                      _MakePool(), "0 1 2 0%")

  def testBadNumbers(self):
    for data in ["Total abc 117571104 0%\n",
                 "Total 15245667872\n",
                 "Total -1 2 0%\n",
                 "Total %d 0 0%%\n" % 2 ** 64,
                 ]:
      pool = _MakePool()
      self.assertRaises(errors.ParseError, sheepdog_info.ParseNodeInfo,
                        pool, data)
      self.assertEqual((pool.capacity, pool.allocation, pool.available),
                       (0, 0, 0))

  def testMaxValue(self):
    pool = _MakePool()
    sheepdog_info.ParseNodeInfo(pool, "Total %d 0 0%%\n" % (2 ** 64 - 1))
    self.assertEqual(pool.capacity, 2 ** 64 - 1)
    self.assertEqual(pool.available, 2 ** 64 - 1)

  def testAllocationAboveCapacity(self):
    pool = _MakePool()
    self.assertRaises(errors.ParseError, sheepdog_info.ParseNodeInfo,
                      pool, "Total 1 5 0%\n")
    self.assertEqual((pool.capacity, pool.allocation, pool.available),
                     (0, 0, 0))

  def testFullyAllocated(self):
    pool = _MakePool()
    sheepdog_info.ParseNodeInfo(pool, "Total 5 5 100%\n")
    self.assertEqual((pool.capacity, pool.allocation, pool.available),
                     (5, 5, 0))


class TestParseVdiList(testutils.SheeppoolTestCase):
  def testSampleListing(self):
    pool = _MakePool()
    sheepdog_info.ParseVdiList(pool,
                               testutils.ReadTestData("sheepdog/vdi_list.txt"))

    self.assertEqual(len(pool.volumes), 2)
    self.assertEqual([(vol.capacity, vol.allocation) for vol in pool.volumes],
                     [(2097152000, 0), (2097152000, 381681664)])

    for vol in pool.volumes:
      self.assertEqual(vol.name, _VDI_NAME)
      self.assertEqual(vol.key, "cluster1/%s" % _VDI_NAME)
      self.assertEqual(vol.target_path, _VDI_NAME)
      self.assertEqual(vol.type, constants.VOL_TYPE_NETWORK)

  def testEscapedName(self):
    pool = _MakePool()
    sheepdog_info.ParseVdiList(
      pool, testutils.ReadTestData("sheepdog/vdi_list_escaped.txt"))

    self.assertEqual(len(pool.volumes), 1)
    vol = pool.volumes[0]
    self.assertEqual(vol.name, "a b")
    self.assertEqual(vol.key, "cluster1/a b")
    self.assertEqual(vol.capacity, 1073741824)
    self.assertEqual(vol.allocation, 524288)

  def testEscapedBackslash(self):
    pool = _MakePool()
    sheepdog_info.ParseVdiList(pool, "= a\\\\b\\ c 1 10 5 0 0 1\n")
    self.assertEqual(pool.volumes[0].name, "a\\b c")
    self.assertEqual(pool.volumes[0].capacity, 10)

  def testSnapshotsOnly(self):
    pool = _MakePool()
    data = testutils.ReadTestData("sheepdog/vdi_single_snapshots.txt")
    sheepdog_info.ParseVdiList(pool, data)
    self.assertEqual(len(pool.volumes), 0)

  def testUnterminatedSnapshotIgnored(self):
    pool = _MakePool()
    sheepdog_info.ParseVdiList(pool, "= vol1 2 100 10 0 0 1\ns vol1 1 1")
    self.assertEqual([vol.name for vol in pool.volumes], ["vol1"])

  def testEmpty(self):
    pool = _MakePool()
    pool.volumes.Append(objects.StorageVolume(name="stale"))
    sheepdog_info.ParseVdiList(pool, "")
    self.assertEqual(len(pool.volumes), 0)

  def testMarkerOnly(self):
    for data in ["=\n", "= \n", "=", "= vol1 2 100 10 0 0 1\n=\n"]:
      pool = _MakePool()
      self.assertRaises(errors.ParseError, sheepdog_info.ParseVdiList,
                        pool, data)
      self.assertEqual(len(pool.volumes), 0)

  def testFailureClearsVolumes(self):
    for bad in ["= vol2 2 100\n",
                "= vol2 x 100 10 0 0 1\n",
                "= vol2 1 100 -10 0 0 1\n",
                "= vol2 %d 100 10 0 0 1\n" % 2 ** 31,
                "= vol2 1 %d 10 0 0 1\n" % 2 ** 64,
                "= vol2\\\n",
                "= vol2 2 100 10 0 0 1",
                "=  vol2 2 100 10 0 0 1\n",
                ]:
      pool = _MakePool()
      data = "= vol1 2 100 10 0 0 1\n" + bad
      self.assertRaises(errors.ParseError, sheepdog_info.ParseVdiList,
                        pool, data)
      self.assertEqual(len(pool.volumes), 0)

  def testNegativeId(self):
    pool = _MakePool()
    sheepdog_info.ParseVdiList(pool, "= vol1 -5 100 10 0 0 1\n")
    self.assertEqual(pool.volumes[0].capacity, 100)

  def testAllocationFailure(self):
    pool = _MakePool()
    data = testutils.ReadTestData("sheepdog/vdi_list.txt")
    with testutils.patch_object(objects, "StorageVolume",
                                side_effect=MemoryError):
      self.assertRaises(errors.AllocationError, sheepdog_info.ParseVdiList,
                        pool, data)
    self.assertEqual(len(pool.volumes), 0)

  def testIdempotent(self):
    data = testutils.ReadTestData("sheepdog/vdi_list.txt")
    pool = _MakePool()

    sheepdog_info.ParseVdiList(pool, data)
    first = [vol.ToDict() for vol in pool.volumes]

    sheepdog_info.ParseVdiList(pool, data)
    second = [vol.ToDict() for vol in pool.volumes]

    self.assertEqual(first, second)
    self.assertEqual(len(second), 2)


class TestParseVdi(testutils.SheeppoolTestCase):
  def testParse(self):
    vol = objects.StorageVolume(name="vol1")
    sheepdog_info.ParseVdi(vol,
                           testutils.ReadTestData("sheepdog/vdi_single.txt"))
    self.assertEqual(vol.capacity, 1073741824)
    self.assertEqual(vol.allocation, 4194304)

  def testFirstCurrentWins(self):
    vol = objects.StorageVolume(name="vol1")
    sheepdog_info.ParseVdi(vol, "= vol1 2 100 10 0 0 1\n= vol1 3 200 20 0 0 1\n")
    self.assertEqual((vol.capacity, vol.allocation), (100, 10))

  def testRecordsAfterFirstCurrentIgnored(self):
    vol = objects.StorageVolume(name="vol1")
    sheepdog_info.ParseVdi(vol, "= vol1 2 100 10 0 0 1\ngarbage")
    self.assertEqual((vol.capacity, vol.allocation), (100, 10))

  def testNoCurrentRevision(self):
    for data in ["",
                 testutils.ReadTestData("sheepdog/vdi_single_snapshots.txt"),
                 ]:
      vol = objects.StorageVolume(name="vol1", capacity=5, allocation=3)
      self.assertRaises(errors.ParseError, sheepdog_info.ParseVdi, vol, data)
      self.assertEqual((vol.capacity, vol.allocation), (0, 0))

  def testMalformed(self):
    vol = objects.StorageVolume(name="vol1")
    self.assertRaises(errors.ParseError, sheepdog_info.ParseVdi, vol,
                      "= vol1 2 abc 10 0 0 1\n")
    self.assertEqual((vol.capacity, vol.allocation), (0, 0))

  def testNameUntouched(self):
    vol = objects.StorageVolume(name="other")
    sheepdog_info.ParseVdi(vol, "= a\\ b 2 100 10 0 0 1\n")
    self.assertEqual(vol.name, "other")


class TestMakeVolumeKey(unittest.TestCase):
  def test(self):
    self.assertEqual(sheepdog_info.MakeVolumeKey("cluster1", "a b"),
                     "cluster1/a b")


if __name__ == "__main__":
  testutils.SheeppoolTestProgram()
