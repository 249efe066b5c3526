import os
import sys
from datetime import date

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from crs_dictionary.config import RunConfig
from crs_dictionary.php_functions.classifiers import WordListClassifier
from crs_dictionary.php_functions.oracle import FrequencyOracle


TODAY = date(2024, 3, 31)


class FakeOracle(FrequencyOracle):
    """Oracle answering from a dict; missing terms fail."""

    def __init__(self, counts=None):
        self.counts = dict(counts or {})
        self.calls = []

    def query(self, term):
        self.calls.append(term)
        return self.counts.get(term)


@pytest.fixture
def fake_oracle():
    return FakeOracle()


@pytest.fixture
def config(tmp_path):
    data_dir = tmp_path / 'rules'
    ra_dir = tmp_path / 'regex-assembly'
    data_dir.mkdir()
    ra_dir.mkdir()
    (ra_dir / '933160.ra').write_text('##! comment\n\nsystem\nexec\n')
    high_risk = tmp_path / 'php-high-risk-functions.txt'
    high_risk.write_text('exec\npassthru\n')
    return RunConfig(
        github_token='token',
        data_dir=data_dir,
        ra_dir=ra_dir,
        high_risk_path=high_risk,
    )


@pytest.fixture
def classifier():
    return WordListClassifier({'count', 'exit', 'range', 'system'})
