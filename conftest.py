import os.path

import pytest

collect_ignore = [
    'setup.py',
]


@pytest.fixture
def project_root():
    return os.path.dirname(os.path.abspath(__file__))
