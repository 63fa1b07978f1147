"""
The lifx modules make heavy use of
`delfick errors <https://delfick-project.readthedocs.io/en/latest/api/errors.html>`_

Just base your error classes on ``LifxError``:

.. code-block:: python

    from lifx_app.errors import LifxError

    class MyAmazingError(LifxError):
        desc = "Something terrible has happened"

    raise MyAmazingError("The world exploded", info_one=1, info_two=2)
"""
from delfick_project.errors import DelfickError, ProgrammerError
from delfick_project.norms import BadSpecValue


class LifxError(DelfickError):
    pass


# Explicitly make these errors in this context
BadSpecValue = BadSpecValue
ProgrammerError = ProgrammerError


class BadOption(LifxError):
    desc = "Bad Option"


class BadYaml(LifxError):
    desc = "Invalid yaml file"
