__shortdesc__ = """Declarative binary field types and packing for LIFX packets"""
