"""
Send messages to LIFX devices and collect their replies.

A ``Connection`` is a handle to one device, or to the whole network when it
has no address. Every operation opens its own UDP socket, sends the request
and then reads datagrams until it has enough replies or runs out of time.

.. code-block:: python

    from lifx_transport.connection import Connection, RetryPolicy
    from lifx_messages import DiscoveryMessages, DeviceMessages

    network = Connection(source, broadcast_addresses=["192.168.0.255"])
    policy = RetryPolicy.create(timeout=2500, expected=None)
    services = await network.broadcast_with_response(DiscoveryMessages.GetService(), policy)

    device = Connection(source, target="d073d5000001", address="192.168.0.3")
    version = await device.request_with_response(DeviceMessages.GetVersion())

Receiving is done with ``receive(deadline)`` which gives back either a
``Datagram`` or ``NO_DATA`` when the deadline passed without anything arriving.
Running out of time is an ordinary outcome here and never an exception.
"""
from lifx_transport.errors import NoResponse, FailedToSend
from lifx_transport.broadcast import DEFAULT_BROADCAST

from lifx_messages import decode

from lifx_app.helpers import lc, ms_to_seconds, cancel_futures_and_wait

from delfick_project.norms import dictobj, sb, BadSpecValue
import platform
import logging
import asyncio
import random
import socket

log = logging.getLogger("lifx_transport.connection")


class NoData:
    """Returned by receive when nothing arrived before the deadline"""

    def __repr__(self):
        return "<NO_DATA>"

    def __bool__(self):
        return False


NO_DATA = NoData()


class Datagram:
    def __init__(self, data, addr):
        self.data = data
        self.addr = addr

    def __repr__(self):
        return f"<Datagram {self.addr}: {len(self.data)} bytes>"


def make_source():
    return random.randrange(1, 1 << 32)


class attempts_spec(sb.Spec):
    def normalise_filled(self, meta, val):
        val = sb.integer_spec().normalise(meta, val)
        if val < 1:
            raise BadSpecValue("Need at least one attempt", got=val, meta=meta)
        return val


class timeout_spec(sb.Spec):
    """Milliseconds as a number, or a callable taking the attempt number"""

    def normalise_filled(self, meta, val):
        if callable(val):
            return val
        val = sb.float_spec().normalise(meta, val)
        if val < 0:
            raise BadSpecValue("Timeout can't be negative", got=val, meta=meta)
        return val


class expected_spec(sb.Spec):
    def normalise_empty(self, meta):
        return 1

    def normalise_filled(self, meta, val):
        if val is None:
            return None
        val = sb.integer_spec().normalise(meta, val)
        if val < 1:
            raise BadSpecValue("Expected replies must be at least one", got=val, meta=meta)
        return val


class RetryPolicy(dictobj.Spec):
    attempts = dictobj.Field(attempts_spec, default=2, help="How many times to send the request")

    timeout = dictobj.Field(
        timeout_spec,
        default=1000,
        help="""
        Milliseconds to wait for replies in each attempt. This may also be a
        function that takes the attempt number (starting at 0) and returns
        the milliseconds for that attempt
        """,
    )

    expected = dictobj.Field(
        expected_spec,
        help="How many different devices we want replies from. None means as many as we can get",
    )

    @classmethod
    def create(kls, **kwargs):
        return kls.FieldSpec().empty_normalise(**kwargs)

    def clone(self, **overrides):
        options = {"attempts": self.attempts, "timeout": self.timeout, "expected": self.expected}
        options.update(overrides)
        return self.create(**options)

    def timeout_for(self, attempt):
        """Return the seconds we wait for replies on this attempt"""
        timeout = self.timeout
        if callable(timeout):
            timeout = timeout(attempt)
        return ms_to_seconds(timeout)

    def satisfied_by(self, count):
        return self.expected is not None and count >= self.expected


class SocketProtocol(asyncio.DatagramProtocol):
    """Puts received datagrams onto a queue for ``receive``"""

    def __init__(self, lc):
        self.lc = lc
        self.transport = None
        self.received = asyncio.Queue()

    def connection_made(self, transport):
        self.transport = transport

    def datagram_received(self, data, addr):
        self.received.put_nowait(Datagram(data, addr))

    def error_received(self, exc):
        log.error(self.lc("Socket got an error", error=exc))

    def connection_lost(self, exc):
        if exc is not None:
            log.debug(self.lc("Socket lost connection", error=exc))

    async def receive(self, deadline):
        """Return the next ``Datagram`` or ``NO_DATA`` if ``deadline`` passes first"""
        remaining = deadline - asyncio.get_event_loop().time()
        if remaining <= 0:
            if self.received.empty():
                return NO_DATA
            return self.received.get_nowait()

        try:
            return await asyncio.wait_for(self.received.get(), timeout=remaining)
        except asyncio.TimeoutError:
            return NO_DATA


class Connection:
    """
    A handle for talking to one device, or to every device when there is no
    ``address``.

    ``sequence`` starts at a random byte and goes up by one for every request,
    wrapping at 256.
    """

    def __init__(self, source, target=None, address=None, port=56700, broadcast_addresses=()):
        self.port = port
        self.target = target
        self.source = source
        self.address = address
        self.broadcast_addresses = list(broadcast_addresses)

        self.sequence = random.randrange(0, 256)
        self.lc = lc.using(serial=target, address=address)

    def __repr__(self):
        return f"<Connection {self.target}@{self.address}:{self.port}>"

    def next_sequence(self):
        self.sequence = (self.sequence + 1) % 256
        return self.sequence

    @property
    def destinations(self):
        if self.address is not None:
            return [(self.address, self.port)]
        return [(address, self.port) for address in self.broadcast_addresses or [DEFAULT_BROADCAST]]

    def stamp(self, request, **overrides):
        """Return a copy of request with our source, target and the next sequence"""
        options = {"source": self.source, "sequence": self.next_sequence(), "target": self.target}
        options.update(overrides)
        return request.clone(**options)

    def make_socket(self):
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_BROADCAST, 1)
        sock.setblocking(False)
        if platform.system() == "Windows":
            sock.bind(("", 0))
        return sock

    async def open_socket(self):
        sock = self.make_socket()
        try:
            loop = asyncio.get_event_loop()
            return await loop.create_datagram_endpoint(lambda: SocketProtocol(self.lc), sock=sock)
        except OSError:
            sock.close()
            raise

    def write(self, transport, request):
        data = request.tobytes()
        for destination in self.destinations:
            log.debug(self.lc("Sending", pkt=request.__class__.__name__, destination=destination))
            try:
                transport.sendto(data, destination)
            except OSError as error:
                log.error(self.lc("Failed to send", destination=destination, error=error))

    async def broadcast_with_response(self, request, policy=None, accept=None, key=None):
        """
        Send request and return the list of replies, at most one per device.

        We send up to ``policy.attempts`` times, each time waiting
        ``policy.timeout_for(attempt)`` seconds for replies. We stop as soon as
        ``policy.expected`` different devices have replied.

        ``accept`` is an optional async function that takes in a reply and
        says whether to keep it. Replies are looked at in their own tasks so a
        slow ``accept`` doesn't stop us reading other replies. When we run out
        of time we still wait for the replies we are looking at.

        ``key`` is an optional function that takes in a reply and returns what
        makes it different from other replies. By default this is the serial
        of the device that sent it.

        An empty list is returned if nothing replied.
        """
        if policy is None:
            policy = RetryPolicy.create()

        request = self.stamp(request)
        loop = asyncio.get_event_loop()

        found = {}

        for attempt in range(policy.attempts):
            try:
                transport, protocol = await self.open_socket()
            except OSError as error:
                log.error(self.lc("Failed to create socket", attempt=attempt, error=error))
                if attempt == policy.attempts - 1:
                    raise FailedToSend("Couldn't create a socket", serial=self.target, error=error)
                continue

            receiving = None
            processing = set()

            try:
                self.write(transport, request)
                deadline = loop.time() + policy.timeout_for(attempt)

                while not policy.satisfied_by(len(found)):
                    if receiving is None:
                        receiving = asyncio.ensure_future(protocol.receive(deadline))

                    done, _ = await asyncio.wait(
                        [receiving, *processing], return_when=asyncio.FIRST_COMPLETED
                    )

                    for fut in done:
                        if fut is not receiving:
                            processing.discard(fut)
                            fut.result()

                    if receiving in done:
                        received = receiving.result()
                        receiving = None
                        if received is NO_DATA:
                            break

                        processing.add(
                            asyncio.ensure_future(
                                self.process(request, received, found, accept, key)
                            )
                        )

                while processing and not policy.satisfied_by(len(found)):
                    done, processing = await asyncio.wait(
                        processing, return_when=asyncio.FIRST_COMPLETED
                    )
                    for fut in done:
                        fut.result()
            finally:
                transport.close()
                if receiving is not None:
                    processing.add(receiving)
                await cancel_futures_and_wait(*processing)

            if policy.satisfied_by(len(found)):
                break

        return list(found.values())

    async def process(self, request, received, found, accept, key):
        response = decode(received.data)
        if response is None:
            return

        if not request.matches(response):
            log.debug(
                self.lc(
                    "Ignoring reply",
                    got=response.__class__.__name__,
                    sequence=response.sequence,
                    wanted_sequence=request.sequence,
                    remote=received.addr,
                )
            )
            return

        response.remote_addr = received.addr

        if accept is not None and not await accept(response):
            return

        ident = response.serial if key is None else key(response)
        if ident not in found:
            log.debug(self.lc("Got reply", pkt=response.__class__.__name__, remote=received.addr))
            found[ident] = response

    async def request_with_response(self, request, policy=None):
        """
        Send request and return the first reply

        Raises ``NoResponse`` if nothing replied in any of our attempts.
        """
        if policy is None:
            policy = RetryPolicy.create()

        responses = await self.broadcast_with_response(request, policy.clone(expected=1))
        if not responses:
            raise NoResponse(
                "Timed out waiting for a reply",
                serial=self.target,
                pkt=request.__class__.__name__,
                attempts=policy.attempts,
            )
        return responses[0]

    async def send(self, request):
        """Send request without asking for or waiting for any reply"""
        request = self.stamp(request, res_required=False, ack_required=False)

        try:
            transport, _ = await self.open_socket()
        except OSError as error:
            raise FailedToSend("Couldn't create a socket", serial=self.target, error=error)

        try:
            self.write(transport, request)
        finally:
            transport.close()
