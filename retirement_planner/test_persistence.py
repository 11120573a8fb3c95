import json

import pytest

from errors import SnapshotError
from persistence import clear_snapshot, load_snapshot, save_snapshot
from store import InvestmentStore


def test_save_and_load(tmp_path, sample_store):
    path = tmp_path / "investments.json"
    save_snapshot(sample_store, str(path))
    document = json.loads(path.read_text())
    assert "last_updated" in document

    snapshot = load_snapshot(str(path))
    restored = InvestmentStore.from_snapshot(snapshot)
    assert restored.total() == sample_store.total()


def test_load_missing_file(tmp_path):
    assert load_snapshot(str(tmp_path / "missing.json")) is None


@pytest.mark.parametrize("content", ["{not json", '{"other": 1}', '{"investments": [1, 2]}'])
def test_load_malformed_file(tmp_path, content):
    path = tmp_path / "investments.json"
    path.write_text(content)
    with pytest.raises(SnapshotError):
        load_snapshot(str(path))


def test_clear_snapshot(tmp_path, sample_store):
    path = tmp_path / "investments.json"
    save_snapshot(sample_store, str(path))
    clear_snapshot(str(path))
    assert not path.exists()
    clear_snapshot(str(path))
