"""
Options that control how we talk to devices on the network.

These can be created in code:

.. code-block:: python

    from lifx_app.options import LanOptions

    options = LanOptions.FieldSpec().empty_normalise(default_timeout=3000)

Or loaded from the ``lifx_lan`` section of a yaml file:

.. code-block:: yaml

    ---

    lifx_lan:
      port: 56700
      default_attempts: 3
      broadcast_addresses:
        - 192.168.0.255
"""
from lifx_app.errors import BadOption, BadYaml

from delfick_project.norms import dictobj, sb, Meta, BadSpecValue
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError


class positive_integer_spec(sb.Spec):
    def normalise_filled(self, meta, val):
        val = sb.integer_spec().normalise(meta, val)
        if val < 0:
            raise BadSpecValue("Expected a positive integer", got=val, meta=meta)
        return val


class source_spec(sb.Spec):
    def normalise_empty(self, meta):
        return None

    def normalise_filled(self, meta, val):
        if val is None:
            return None
        val = sb.integer_spec().normalise(meta, val)
        if val <= 0 or val >= 1 << 32:
            raise BadSpecValue("Source must be a non zero 32 bit number", got=val, meta=meta)
        return val


class LanOptions(dictobj.Spec):
    port = dictobj.Field(
        positive_integer_spec,
        default=56700,
        help="The UDP port devices listen on",
    )

    default_timeout = dictobj.Field(
        positive_integer_spec,
        default=1000,
        help="Milliseconds to wait in each attempt of a request that wants one reply",
    )

    default_attempts = dictobj.Field(
        positive_integer_spec,
        default=2,
        help="How many times we send a request before giving up",
    )

    discovery_timeout = dictobj.Field(
        positive_integer_spec,
        default=2500,
        help="Milliseconds each discovery attempt waits for StateService replies",
    )

    filter_timeout = dictobj.Field(
        positive_integer_spec,
        default=5000,
        help="Milliseconds to wait when discovering a specific light by filter",
    )

    echo_timeout = dictobj.Field(
        positive_integer_spec,
        default=100,
        help="Milliseconds to wait for an echo when checking if a device is reachable",
    )

    broadcast_addresses = dictobj.NullableField(
        sb.listof(sb.string_spec()),
        help="""
        Addresses to broadcast discovery to. When not specified we look at the
        network interfaces on this machine
        """,
    )

    source = dictobj.Field(
        source_spec,
        help="A fixed source id for our messages. A random one is chosen if not specified",
    )


def normalise_options(options):
    try:
        return LanOptions.FieldSpec().normalise(Meta.empty(), options)
    except BadSpecValue as error:
        raise BadOption("Invalid lifx_lan options", error=error)


def load_options(location):
    """Read the ``lifx_lan`` section of a yaml file into a ``LanOptions``"""
    try:
        with open(location) as fle:
            data = YAML(typ="safe").load(fle)
    except (OSError, YAMLError) as error:
        raise BadYaml("Failed to read yaml", location=location, error=error)

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise BadOption("Expected configuration to be a dictionary", location=location)

    return normalise_options(data.get("lifx_lan") or {})
