import logging

import pytest

from graphvis.graph_build import build_model_from_text

# Companies linked to people and cities. Chains used by the visibility tests:
#   Dave - Initech - Rome - Umbrella   (three hops from Dave)
#   Carol - Acme / Globex - London / Paris
COMPANIES_CSV = """Company,other_node,other_node_type
Acme,Bob,Person
,Carol,Person
,London,City
Globex,Carol,Person
,Paris,City
Initech,Dave,Person
,Rome,City
Umbrella,Rome,City
"""

ACME_ROWS = [
    {"Company": "Acme", "other_node": "Bob", "other_node_type": "Person"},
    {"Company": "", "other_node": "Carol", "other_node_type": "Person"},
]


@pytest.fixture(autouse=True)
def _reset_graphvis_logger():
    # the CLI detaches the package logger from root; undo that for caplog
    yield
    logger = logging.getLogger("graphvis")
    for h in list(logger.handlers):
        logger.removeHandler(h)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def companies_csv():
    return COMPANIES_CSV


@pytest.fixture
def companies_model():
    return build_model_from_text(COMPANIES_CSV)


@pytest.fixture
def acme_rows():
    return [dict(r) for r in ACME_ROWS]
