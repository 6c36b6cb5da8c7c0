import os

import pytest

os.environ.setdefault("QIITA_API_ACCESS_TOKEN", "test-token")

from tests.helpers import FakeQiita, sample_item  # noqa: E402


@pytest.fixture()
def raw_item():
    return sample_item()


@pytest.fixture()
def fake_qiita(raw_item):
    return FakeQiita(payload=[raw_item])
