from lifx_transport.connection import Connection
from lifx_devices.device import Device
from lifx_app.options import LanOptions
from lifx_transport.fake import FakeDevice
from lifx_protocol import packing

from textwrap import dedent
import tempfile
import pytest
import shutil
import os


@pytest.fixture(autouse=True)
def clear_packing_caches():
    packing.pack_cache.clear()
    packing.unpack_cache.clear()
    yield


@pytest.fixture(scope="session")
def a_temp_dir():
    class TempDir:
        def __enter__(self):
            self.d = tempfile.mkdtemp()
            return self.d, self.make_file

        def __exit__(self, exc_type, exc, tb):
            if hasattr(self, "d") and os.path.exists(self.d):
                shutil.rmtree(self.d)

        def make_file(self, name, contents):
            location = os.path.join(self.d, name)
            parent = os.path.dirname(location)
            if not os.path.exists(parent):
                os.makedirs(parent)

            with open(location, "w") as fle:
                fle.write(dedent(contents))

            return location

    return TempDir


@pytest.fixture()
def connection_to():
    def connection_to(device, source=1234):
        return Connection(source, target=device.serial, address="127.0.0.1", port=device.port)

    return connection_to


@pytest.fixture()
async def fake_light():
    device = FakeDevice(
        "d073d5000001", 27, label="kitchen", power=65535, color=(0, 65535, 65535, 3500)
    )
    async with device:
        yield device


@pytest.fixture()
def quick_options():
    return LanOptions.FieldSpec().empty_normalise(
        default_timeout=200, default_attempts=1, discovery_timeout=200, filter_timeout=200
    )


@pytest.fixture()
def device_for(quick_options):
    def device_for(fake, source=1234):
        return Device(
            fake.serial, "127.0.0.1", port=fake.port, source=source, options=quick_options
        )

    return device_for
