import pytest

from repository import MemberRepository
from sample import sample_family


@pytest.fixture
def family():
    return sample_family()


@pytest.fixture
def repo(tmp_path):
    with MemberRepository(tmp_path / "family_tree.db") as repository:
        yield repository
