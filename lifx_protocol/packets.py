"""
A PacketSpec is a dictionary with attribute access that knows the order and
types of its fields so it can be packed into and unpacked from bits.

.. code-block:: python

    from lifx_protocol.packets import PacketSpec
    from lifx_protocol.types import T

    class Thing(PacketSpec):
        fields = [("one", T.Uint8), ("two", T.Bytes(32).default(b""))]

    thing = Thing(one=1)
    assert Thing.unpack(thing.pack()) == thing

A field may also be another PacketSpec class. Its fields are then treated as
a group and flattened into the parent.
"""

from lifx_protocol.packing import PacketPacking
from lifx_protocol.errors import BadConversion, InvalidField
from lifx_protocol.types import Optional

from lifx_app.errors import ProgrammerError

from delfick_project.norms import sb
import logging

log = logging.getLogger("lifx_protocol.packets")


class PacketMeta:
    """Information about the order and types of fields on a packet"""

    def __init__(self, classname, fields):
        self.fields = list(fields)
        self.groups = {}
        self.group_kls = {}
        self.name_to_group = {}
        self.all_field_types = []

        for name, typ in self.fields:
            if isinstance(typ, type) and hasattr(typ, "Meta"):
                self.group_kls[name] = typ
                self.groups[name] = list(typ.Meta.all_names)
                for n, t in typ.Meta.all_field_types:
                    self.name_to_group[n] = name
                    self.all_field_types.append((n, t))
            else:
                self.all_field_types.append((name, typ))

        self.all_names = [name for name, _ in self.all_field_types]
        self.all_types = dict(self.all_field_types)

        if len(self.all_types) != len(self.all_names):
            duplicated = sorted(set(n for n in self.all_names if self.all_names.count(n) > 1))
            raise ProgrammerError(f"Duplicated names in {classname}: {duplicated}")

        overlap = set(self.groups) & set(self.all_names)
        if overlap:
            raise ProgrammerError(f"Groups share names with fields in {classname}: {overlap}")

        self.size_bits = sum(typ.size_bits for _, typ in self.all_field_types)

    @property
    def value_names(self):
        return [name for name, typ in self.all_field_types if not typ.is_reserved]


class PacketSpecMetaKls(type):
    """
    Create a ``Meta`` on the class from ``fields``

    Subclasses without their own ``fields`` share the fields of their parent
    """

    def __new__(metaname, classname, baseclasses, attrs):
        fields = attrs.get("fields")
        if fields is None:
            for base in baseclasses:
                if hasattr(base, "Meta"):
                    fields = base.Meta.fields
                    break
            else:
                fields = []

        attrs["fields"] = fields
        kls = type.__new__(metaname, classname, baseclasses, attrs)
        kls.Meta = PacketMeta(classname, fields)
        return kls


class PacketSpec(dict, metaclass=PacketSpecMetaKls):
    """
    Positional arguments fill the non reserved fields in order and keyword
    arguments may name fields or groups.
    """

    fields = []

    def __init__(self, *args, **kwargs):
        super().__init__()

        names = self.Meta.value_names
        if len(args) > len(names):
            raise ProgrammerError(
                f"Too many positional arguments for {self.__class__.__name__}",
            )

        for name, val in zip(names, args):
            if name in kwargs:
                raise ProgrammerError(f"Got multiple values for {name}")
            self[name] = val

        for name, val in kwargs.items():
            self[name] = val

    @classmethod
    def unpack(kls, value):
        """Create an instance of this class from bytes or a bitarray"""
        return PacketPacking.unpack(kls, value)

    def pack(self):
        """Return a little endian bitarray of this packet"""
        return PacketPacking.pack(self)

    def tobytes(self):
        return self.pack().tobytes()

    def actual(self, key):
        """Return the value that has been set for this key without resolving defaults"""
        return dict.get(self, key, sb.NotSpecified)

    def set_raw(self, key, val):
        dict.__setitem__(self, key, val)

    def __getitem__(self, key):
        meta = self.Meta
        if key in meta.group_kls:
            kls = meta.group_kls[key]
            values = {}
            for name in kls.Meta.all_names:
                val = self[name]
                if val is not sb.NotSpecified:
                    values[name] = val
            return kls(**values)

        if key not in meta.all_types:
            raise KeyError(key)

        val = dict.get(self, key, sb.NotSpecified)
        if val is sb.NotSpecified:
            return meta.all_types[key].default_for(self)
        return val

    def __setitem__(self, key, val):
        meta = self.Meta
        if key in meta.group_kls:
            if isinstance(val, PacketSpec):
                val = dict(dict.items(val))
            if not isinstance(val, dict):
                raise BadConversion("Groups can only be set with a dictionary", group=key, got=val)
            for name, v in val.items():
                if name not in meta.groups[key]:
                    raise InvalidField("No such field in group", group=key, field=name)
                self[name] = v
            return

        if key not in meta.all_types:
            raise InvalidField("No such field", packet=self.__class__.__name__, field=key)

        if val is None and meta.all_types[key]._optional:
            val = Optional

        dict.__setitem__(self, key, val)

    def __getattr__(self, key):
        meta = type(self).Meta
        if key in meta.all_types or key in meta.group_kls:
            return self[key]
        raise AttributeError(f"{self.__class__.__name__} has no attribute {key}")

    def __setattr__(self, key, val):
        if key in self.Meta.all_types or key in self.Meta.group_kls:
            self[key] = val
        else:
            object.__setattr__(self, key, val)

    def get(self, key, dflt=None):
        try:
            val = self[key]
        except KeyError:
            return dflt
        return dflt if val is sb.NotSpecified else val

    def clone(self, **overrides):
        """Return a copy of this packet with the overrides set"""
        clone = self.__class__()
        for key, val in dict.items(self):
            clone.set_raw(key, val)
        for key, val in overrides.items():
            clone[key] = val
        return clone

    def as_dict(self):
        """Return a dictionary of the non reserved fields with defaults resolved"""
        return {name: self[name] for name in self.Meta.value_names}

    def __eq__(self, other):
        if isinstance(other, PacketSpec):
            if type(self) is not type(other):
                return False
            try:
                return self.pack() == other.pack()
            except BadConversion:
                return self.as_dict() == other.as_dict()

        if isinstance(other, dict):
            return self.as_dict() == {k: other.get(k) for k in self.Meta.value_names}

        return False

    def __ne__(self, other):
        return not self.__eq__(other)

    __hash__ = None

    def __repr__(self):
        vals = ", ".join(
            f"{name}={val!r}"
            for name, val in dict.items(self)
            if not self.Meta.all_types[name].is_reserved
        )
        return f"<{self.__class__.__name__}({vals})>"
