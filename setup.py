from lifx_app import VERSION

from setuptools import setup, find_packages
import os

packages = []

readme_location = os.path.join(os.path.dirname(__file__), "README.rst")

# __file__ can sometimes be "" instead of what we want
# in that case we assume we're already in this directory
this_dir = os.path.dirname(__file__) or "."

for filename in sorted(os.listdir(this_dir)):
    if filename.startswith("lifx_") and not filename.endswith(".egg-info") and os.path.isdir(os.path.join(this_dir, filename)):
        packages.extend(
            [filename] + ["{0}.{1}".format(filename, pkg) for pkg in find_packages(filename)]
        )

# fmt: off

setup(
      name = "lifx-lan-core"
    , version = VERSION
    , packages = packages
    , include_package_data = True

    , python_requires = ">= 3.8"

    , install_requires =
      [ "delfick_project>=0.7.9"
      , "ruamel.yaml>=0.17.0"
      , "rainbow_logging_handler>=2.2.2"

      # lifx-protocol
      , "lru-dict>=1.1.6"
      , "bitarray>=1.6.1"

      # lifx-transport
      , "psutil>=5.7.0"
      ]

    , extras_require =
      { "tests":
        [ "pytest>=6.1.2"
        , "mock>=4.0.2"
        , "alt-pytest-asyncio>=0.5.3"
        ]
      }

    # metadata for upload to PyPI
    , description = "An asyncio library for the LIFX LAN protocol"
    , long_description = open(readme_location).read()
    , license = "MIT"
    , keywords = "lifx lan"
    )

# fmt: on
