VERSION = "0.1.0"

__shortdesc__ = """Base module for the lifx lan modules"""

__doc__ = """
LIFX LAN
========

An asyncio library for talking to LIFX devices on the local network.

The modules are split by concern:

lifx_protocol
    Declarative binary field types and packing

lifx_messages
    The LIFX frame and every message we know how to send and receive

lifx_transport
    UDP request/response correlation with retries

lifx_colour
    HSBK colours and the colour functions for strips and tiles

lifx_devices
    Device handles, discovery and the device registry

lifx_animation
    Timed colour sequences driven over the transport
"""
