from lifx_products.enums import VendorRegistry
from lifx_products.errors import IncompleteProduct


class CapabilityValue:
    def __init__(self, value):
        self._value = value

    def __repr__(self):
        return f"<CapabilityValue ({self._value})>"

    def __eq__(self, other):
        return isinstance(other, CapabilityValue) and self._value == other._value

    def value(self, cap):
        return self._value


class CapabilityDefinition(type):
    """Used to create a definition for capabilities"""

    def __new__(metaname, classname, baseclasses, attrs):
        caps = {}
        for kls in baseclasses:
            if hasattr(kls, "Meta") and hasattr(kls.Meta, "capabilities"):
                caps.update(kls.Meta.capabilities)

        for name in list(attrs):
            value = attrs[name]
            if isinstance(value, CapabilityValue):
                attrs.pop(name)
                caps[name] = value
            elif name in caps:
                attrs.pop(name)
                caps[name] = CapabilityValue(value)

        instance = type.__new__(metaname, classname, baseclasses, attrs)

        with_meta = [kls for kls in baseclasses if hasattr(kls, "Meta")]

        if with_meta:
            Meta = with_meta[-1].Meta
        else:
            Meta = type("Meta", (), {"capabilities": {}})

        instance.Meta = type("Meta", (Meta,), {"capabilities": caps})
        return instance


class Capability(metaclass=CapabilityDefinition):
    def __init__(self, product):
        self.product = product

    def __repr__(self):
        return f"<Capability {self.product.name}>"

    def __eq__(self, other):
        return isinstance(other, Capability) and self.product == other.product

    def items(self):
        for capability in self.Meta.capabilities:
            yield capability, getattr(self, capability)

    def __getattribute__(self, key):
        Meta = object.__getattribute__(self, "Meta")
        if key in Meta.capabilities:
            return Meta.capabilities[key].value(self)
        else:
            return object.__getattribute__(self, key)

    def as_dict(self):
        return dict(self.items())

    class Meta:
        capabilities = {}


class product_metaclass(type):
    def __new__(metaname, classname, baseclasses, attrs):
        if not baseclasses or classname.endswith("Product"):
            return type.__new__(metaname, classname, baseclasses, attrs)

        parent = baseclasses[0]
        kls = type.__new__(metaname, classname, baseclasses, attrs)

        if kls.cap is NotImplemented:
            raise IncompleteProduct("Product doesn't have a capability specified", name=classname)

        kls.name = classname

        kls.cap_kls = kls.cap

        for attr in dir(parent):
            dflt = getattr(parent, attr)
            val = getattr(kls, attr, NotImplemented)

            if dflt is NotImplemented and val is NotImplemented:
                raise IncompleteProduct("Attribute wasn't overridden", attr=attr, name=kls.name)

        instance = kls()
        kls.cap = kls.cap(instance)
        return instance


class Product(metaclass=product_metaclass):
    """
    .. attribute:: name
        The name of the product

    .. attribute:: pid
        The product id of this product

    .. attribute:: cap
        an instance of a Capability object

    .. attribute:: vendor
        A Vendor object

    .. attribute:: friendly
        A friendly name for the product
    """

    name = NotImplemented
    pid = NotImplemented
    cap = NotImplemented
    vendor = NotImplemented
    friendly = NotImplemented

    @property
    def company(self):
        """The name of the self.vendor"""
        return self.vendor.name

    def __eq__(self, other):
        if isinstance(other, tuple):
            return other == (self.vendor, self.pid)
        return isinstance(other, Product) and self.pid == other.pid and self.vendor == other.vendor

    def __hash__(self):
        return hash((self.vendor.vid, self.pid))

    def as_dict(self):
        """Return this product as a dictionary"""
        result = {}
        for attr in dir(Product):
            val = getattr(Product, attr)
            if val is NotImplemented:
                r = result[attr] = getattr(self, attr)
                if hasattr(r, "as_dict"):
                    result[attr] = r.as_dict()
        return result

    def __repr__(self):
        return f"<Product {self.vendor.vid}({self.vendor.name}):{self.pid}({self.name})>"

    def __str__(self):
        return f"{self.friendly} ({self.pid})"


class ProductsHolder:
    """
    Access to a collection of products

    Products that we don't know about resolve to the ``UNKNOWN`` product of
    the collection.
    """

    def __init__(self, products):
        self.products = products

        self.by_pair = {}

        for attr in dir(products):
            if not attr.startswith("_"):
                product = getattr(products, attr)
                if isinstance(product, Product):
                    self.by_pair[(product.vendor, product.pid)] = product

    @property
    def names(self):
        for product in self.by_pair.values():
            yield product.name

    def __getattr__(self, name):
        products = object.__getattribute__(self, "products")

        p = getattr(products, name, None)
        if p:
            return p

        return super().__getattribute__(name)

    def by_pid(self, pid, vid=VendorRegistry.LIFX):
        """Return the product for this pid or ``UNKNOWN``"""
        product = self.by_pair.get((vid, pid))
        if product is None or product.pid == 0:
            return self.products.UNKNOWN
        return product

    def __getitem__(self, key):
        if isinstance(key, (list, tuple)) and len(key) == 2:
            vid, pid = key
            return self.by_pid(pid, vid=vid)
        else:
            p = getattr(self.products, key, None)
            if not p:
                raise KeyError(f"No such product definition: {key}")
            return p
