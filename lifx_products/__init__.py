"""
.. lifx_module:: lifx_products

This module knows about the capabilities of LIFX products.

.. code-block:: python

    from lifx_products import Products

    product = Products.by_pid(55)
    assert product.cap.has_matrix and product.cap.has_chain

Products we don't know about resolve to ``Products.UNKNOWN``, which is
treated as a colour light.
"""
from lifx_products.enums import VendorRegistry, Zones
from lifx_products.registry import Products

__shortdesc__ = "Knowledge about LIFX products"

__all__ = ["Products", "VendorRegistry", "Zones"]
