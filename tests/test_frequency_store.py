from datetime import date

import pytest

from crs_dictionary.errors import StoreFormatError
from crs_dictionary.php_functions.cache import FrequencyRecord, FrequencyStore


def test_load_missing_file_gives_empty_store(tmp_path):
    store = FrequencyStore.load(tmp_path / 'frequencies.txt')
    assert len(store) == 0
    assert store.lookup('strlen') is None


def test_load_parses_records_and_skips_blank_lines(tmp_path):
    path = tmp_path / 'frequencies.txt'
    path.write_text('array_walk 1234 2024-01-02\n\nstrlen 99 2023-12-31\n')
    store = FrequencyStore.load(path)
    assert len(store) == 2
    assert store.lookup('array_walk') == FrequencyRecord('array_walk', 1234, date(2024, 1, 2))
    assert 'strlen' in store


@pytest.mark.parametrize('line', [
    'strlen 12\n',
    'strlen many 2024-01-01\n',
    'strlen 12 yesterday\n',
    'strlen -4 2024-01-01\n',
])
def test_malformed_lines_are_fatal(tmp_path, line):
    path = tmp_path / 'frequencies.txt'
    path.write_text(line)
    with pytest.raises(StoreFormatError):
        FrequencyStore.load(path)


def test_upsert_persists_sorted(tmp_path):
    path = tmp_path / 'frequencies.txt'
    store = FrequencyStore.load(path)
    store.upsert('zend_version', 10, date(2024, 1, 1))
    store.upsert('array_map', 20, date(2024, 1, 2))
    assert path.read_text() == 'array_map 20 2024-01-02\nzend_version 10 2024-01-01\n'


def test_upsert_replaces_existing_record_in_place(tmp_path):
    path = tmp_path / 'frequencies.txt'
    path.write_text('bar 50 2024-01-01\nfoo 1 2024-01-01\n')
    store = FrequencyStore.load(path)
    store.upsert('bar', 95000, date(2024, 3, 1))
    assert path.read_text() == 'bar 95000 2024-03-01\nfoo 1 2024-01-01\n'
    assert len(store) == 2


def test_remove_persists_and_reports(tmp_path):
    path = tmp_path / 'frequencies.txt'
    path.write_text('bar 50 2024-01-01\nfoo 1 2024-01-01\n')
    store = FrequencyStore.load(path)
    assert store.remove('bar') is True
    assert store.remove('bar') is False
    assert path.read_text() == 'foo 1 2024-01-01\n'


def test_persist_leaves_no_temp_files(tmp_path):
    path = tmp_path / 'frequencies.txt'
    store = FrequencyStore.load(path)
    store.upsert('foo', 1, date(2024, 1, 1))
    assert [p.name for p in tmp_path.iterdir()] == ['frequencies.txt']


def test_failed_persist_keeps_previous_file(tmp_path, monkeypatch):
    path = tmp_path / 'frequencies.txt'
    path.write_text('foo 1 2024-01-01\n')
    store = FrequencyStore.load(path)

    def broken_replace(src, dst):
        raise OSError('disk full')

    monkeypatch.setattr('crs_dictionary.php_functions.cache.os.replace', broken_replace)
    with pytest.raises(OSError):
        store.upsert('bar', 2, date(2024, 1, 2))
    assert path.read_text() == 'foo 1 2024-01-01\n'
    assert [p.name for p in tmp_path.iterdir()] == ['frequencies.txt']


def test_reload_round_trips(tmp_path):
    path = tmp_path / 'frequencies.txt'
    store = FrequencyStore.load(path)
    store.upsert('foo', 100000, date(2024, 3, 31))
    again = FrequencyStore.load(path)
    assert list(again) == list(store)


def test_record_age_and_staleness():
    record = FrequencyRecord('bar', 50, date(2024, 2, 29))
    assert record.age_in_days(date(2024, 3, 31)) == 31
    assert record.is_stale(date(2024, 3, 31), 30) is True
    assert record.is_stale(date(2024, 3, 30), 30) is False
