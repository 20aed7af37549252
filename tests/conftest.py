import pytest

TYPES_DOCUMENT = r"""
Types
-----

Number Types
~~~~~~~~~~~~

.. math::
   \begin{array}{llll}
   \production{number type} & \numtype &::=&
     \I32 ~|~ \I64 ~|~ \F32 ~|~ \F64 \\
   \end{array}

Result Types
~~~~~~~~~~~~

.. math::
   \begin{array}{llll}
   \production{result type} & \resulttype &::=&
     [\vec(\valtype)] \\
   \end{array}

Limits
~~~~~~

.. math::
   \begin{array}{llll}
   \production{limits} & \limits &::=&
     \{ \LMIN~\u32, \LMAX~\u32^? \} \\
   \end{array}
"""


@pytest.fixture(autouse=True)
def default_marker(monkeypatch):
    # Tests rely on the built-in `.. math::` marker.
    monkeypatch.delenv("SPECIES_MARKER", raising=False)


@pytest.fixture
def types_document():
    return TYPES_DOCUMENT
