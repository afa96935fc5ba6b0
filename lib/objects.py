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


"""Storage pool and volume objects.

Pools and volumes are the objects the storage backends operate on. A
backend receives them from its caller, fills in what it learns from the
storage system and never keeps them between calls.

"""

# pylint: disable=E0203,W0201,R0902

# E0203: Access to member %r before its definition, since we use
# objects.py which doesn't explicitly initialise its members

# W0201: Attribute '%s' defined outside __init__

# R0902: Allow instances of these objects to have more than 20 attributes

from sheeppool import errors
from sheeppool import constants


class ValidatedSlots(object):
  """Sets and validates slots.

  """
  __slots__ = []

  def __init__(self, **kwargs):
    """Constructor taking only keyword arguments.

    Every argument must name one of the slots declared along the class
    hierarchy.

    """
    slots = self.GetAllSlots()
    for (key, value) in kwargs.items():
      if key not in slots:
        raise TypeError("Object %s doesn't support the parameter '%s'" %
                        (self.__class__.__name__, key))
      setattr(self, key, value)

  @classmethod
  def GetAllSlots(cls):
    """Compute the list of all declared slots for a class.

    """
    slots = []
    for parent in cls.__mro__:
      slots.extend(getattr(parent, "__slots__", []))
    return slots


class ConfigObject(ValidatedSlots):
  """A generic storage object.

  It has the following properties:

    - unset attributes which are defined in slots are always returned
      as None instead of raising an error
    - it converts to and from a dict holding only standard python types

  Classes derived from this must always declare __slots__.

  """
  __slots__ = []

  def __getattr__(self, name):
    if name not in self.GetAllSlots():
      raise AttributeError("Invalid object attribute %s.%s" %
                           (type(self).__name__, name))
    return None

  def ToDict(self):
    """Convert to a dict holding only standard python types.

    The generic routine just dumps all of this object's attributes in
    a dict. Classes holding other ConfigObjects override it.

    """
    result = {}
    for name in self.GetAllSlots():
      value = getattr(self, name, None)
      if value is not None:
        result[name] = value
    return result

  @classmethod
  def FromDict(cls, val):
    """Create an object from a dictionary.

    """
    if not isinstance(val, dict):
      raise errors.ConfigurationError("Invalid object passed to FromDict:"
                                      " expected dict, got %s" % type(val))
    val_str = dict([(str(k), v) for k, v in val.items()])
    try:
      obj = cls(**val_str)
    except TypeError as err:
      raise errors.ConfigurationError(str(err))
    return obj

  def Copy(self):
    """Makes a deep copy of the current object and its children.

    """
    return self.__class__.FromDict(self.ToDict())

  def __repr__(self):
    return repr(self.ToDict())

  def __eq__(self, other):
    return isinstance(other, self.__class__) and self.ToDict() == other.ToDict()


class PoolHost(ConfigObject):
  """A connection endpoint of a storage pool.

  A missing name or a port of 0 select the sheepdog defaults.

  """
  __slots__ = ["name", "port"]

  @classmethod
  def FromDict(cls, val):
    """Creates a host from a pool definition entry.

    The port may be given as a number or as a string of digits.

    @raise errors.ConfigurationError: if the name isn't a string or the
        port isn't a valid TCP port

    """
    obj = super(PoolHost, cls).FromDict(val)

    if obj.name is not None and not isinstance(obj.name, str):
      raise errors.ConfigurationError("Invalid host name '%s'" % (obj.name, ))

    if obj.port is not None:
      # bool is a subclass of int
      if isinstance(obj.port, bool) or not isinstance(obj.port, (int, str)):
        port = None
      else:
        try:
          port = int(obj.port)
        except ValueError:
          port = None
      if port is None or not 0 <= port <= constants.MAX_PORT:
        raise errors.ConfigurationError("Invalid port '%s' for host '%s'" %
                                        (obj.port, obj.name))
      obj.port = port

    return obj


class VolumeEncryption(ConfigObject):
  """Encryption requested for a volume."""
  __slots__ = ["format", "secret"]


class StorageVolume(ConfigObject):
  """A volume inside a storage pool.

  @ivar name: identifier of the volume inside the pool
  @ivar capacity: size of the volume in bytes
  @ivar allocation: bytes actually used by the volume
  @ivar type: the kind of volume, e.g. L{constants.VOL_TYPE_NETWORK}
  @ivar key: globally unique identifier of the volume
  @ivar target_path: path under which the volume is presented
  @ivar encryption: a L{VolumeEncryption}, or None

  """
  __slots__ = [
    "name",
    "capacity",
    "allocation",
    "type",
    "key",
    "target_path",
    "encryption",
    ]

  def ToDict(self):
    bo = super(StorageVolume, self).ToDict()
    if self.encryption is not None:
      bo["encryption"] = self.encryption.ToDict()
    return bo

  @classmethod
  def FromDict(cls, val):
    obj = super(StorageVolume, cls).FromDict(val)
    if isinstance(obj.encryption, dict):
      obj.encryption = VolumeEncryption.FromDict(obj.encryption)
    return obj


class VolumeList(object):
  """Ordered collection of the volumes of a pool.

  """
  def __init__(self, volumes=None):
    self._volumes = []
    if volumes:
      for vol in volumes:
        self.Append(vol)

  def Append(self, vol):
    """Adds a volume at the end of the collection.

    @type vol: L{StorageVolume}

    """
    self._volumes.append(vol)

  def Clear(self):
    """Removes all volumes.

    """
    del self._volumes[:]

  def __iter__(self):
    return iter(self._volumes)

  def __len__(self):
    return len(self._volumes)

  def __getitem__(self, idx):
    return self._volumes[idx]

  def __eq__(self, other):
    return (isinstance(other, VolumeList) and
            self._volumes == other._volumes) # pylint: disable=W0212

  def __repr__(self):
    return "<%s: %r>" % (self.__class__.__name__, self._volumes)


class StoragePool(ConfigObject):
  """A storage pool and what is known about its volumes.

  Invariant after a successful refresh: C{available == capacity -
  allocation}.

  """
  __slots__ = [
    "name",
    "type",
    "source_name",
    "hosts",
    "capacity",
    "allocation",
    "available",
    "volumes",
    ]

  def __init__(self, **kwargs):
    super(StoragePool, self).__init__(**kwargs)
    if self.hosts is None:
      self.hosts = []
    if self.volumes is None:
      self.volumes = VolumeList()
    elif not isinstance(self.volumes, VolumeList):
      self.volumes = VolumeList(self.volumes)
    for name in ("capacity", "allocation", "available"):
      if getattr(self, name) is None:
        setattr(self, name, 0)

  def ToDict(self):
    bo = super(StoragePool, self).ToDict()
    bo["hosts"] = [host.ToDict() for host in self.hosts]
    bo["volumes"] = [vol.ToDict() for vol in self.volumes]
    return bo

  @classmethod
  def FromDict(cls, val):
    obj = super(StoragePool, cls).FromDict(val)
    for name in ("hosts", "volumes"):
      if not isinstance(getattr(obj, name), (list, VolumeList)):
        raise errors.ConfigurationError("Pool attribute '%s' must be a list" %
                                        name)
    obj.hosts = [PoolHost.FromDict(host) for host in obj.hosts]
    obj.volumes = VolumeList([StorageVolume.FromDict(vol)
                              for vol in obj.volumes])
    if obj.type is None:
      obj.type = constants.POOL_TYPE_SHEEPDOG
    return obj
