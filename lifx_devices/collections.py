"""
Groups and locations.

Devices remember which group and which location they belong to as a 16 byte
id, a label and the time that label was last changed. Every device in the
same group shares the id, so that is what makes two groups the same.

.. code-block:: python

    from lifx_devices.collections import Group

    kitchen = Group(label="kitchen")
    await device.set_group(kitchen)

    renamed = kitchen.update_label("dining")
    assert renamed == kitchen
"""
from lifx_devices.errors import InvalidId

import binascii
import time
import uuid


class Collection:
    """Shared behaviour of ``Group`` and ``Location``"""

    # Name of the id field in the Set/State messages
    id_field = None

    def __init__(self, collection_id=None, label="", updated_at=None):
        if collection_id is None:
            collection_id = uuid.uuid4().bytes

        if not isinstance(collection_id, (bytes, bytearray)) or len(collection_id) != 16:
            raise InvalidId(got=collection_id, kind=self.__class__.__name__)

        self.id = bytes(collection_id)
        self.label = label
        self.updated_at = time.time() if updated_at is None else updated_at

    @classmethod
    def from_packet(kls, pkt):
        # updated_at is nanoseconds on the wire
        return kls(pkt[kls.id_field], pkt.label, pkt.updated_at / 1e9)

    def as_set_kwargs(self):
        return {
            self.id_field: self.id,
            "label": self.label,
            "updated_at": int(self.updated_at * 1e9),
        }

    def update_label(self, label):
        """Return a copy of this with a new label that was changed just now"""
        return self.__class__(self.id, label, time.time())

    @property
    def hex_id(self):
        return binascii.hexlify(self.id).decode()

    def __eq__(self, other):
        return isinstance(other, self.__class__) and self.id == other.id

    def __hash__(self):
        return hash((self.__class__.__name__, self.id))

    def __repr__(self):
        return f"<{self.__class__.__name__} {self.hex_id}: {self.label}>"


class Group(Collection):
    id_field = "group"

    def __init__(self, group_id=None, label="", updated_at=None):
        super().__init__(group_id, label, updated_at)


class Location(Collection):
    id_field = "location"

    def __init__(self, location_id=None, label="", updated_at=None):
        super().__init__(location_id, label, updated_at)
