from pathlib import Path

from item_groups.storage import SQLiteCodedValueConfig, SQLiteCodedValueStore


def _store(tmp_path) -> SQLiteCodedValueStore:
    store = SQLiteCodedValueStore(SQLiteCodedValueConfig(db_path=Path(tmp_path) / "codes.db"))
    store.initialize()
    return store


def test_coded_values_round_trip_in_order(tmp_path):
    store = _store(tmp_path)

    written = store.add_coded_values("doc-1", ["/1/20^Q2^", "/1/10^Q1^"], name="Intake")
    store.add_coded_values("doc-1", ["/1/10/100^Q1a^"])

    assert written == 2
    assert store.get_coded_values("doc-1") == ["/1/20^Q2^", "/1/10^Q1^", "/1/10/100^Q1a^"]
    assert store.get_coded_values("missing") == []

    (row,) = store.list_documents()
    assert row["document_guid"] == "doc-1"
    assert row["name"] == "Intake"
    assert row["value_count"] == 3

    store.close()


def test_documents_are_isolated_and_deletable(tmp_path):
    store = _store(tmp_path)
    store.add_coded_values("doc-1", ["/1/10^A^"])
    store.add_coded_values("doc-2", ["/2/20^B^"])

    assert store.delete_document("doc-1") is True
    assert store.delete_document("doc-1") is False
    assert store.get_coded_values("doc-1") == []
    assert store.get_coded_values("doc-2") == ["/2/20^B^"]

    store.clear_all()
    assert store.list_documents() == []
    store.close()


def test_null_values_are_kept(tmp_path):
    store = _store(tmp_path)
    store.add_coded_values("doc-1", [None, "/1/10^A^"])

    assert store.get_coded_values("doc-1") == [None, "/1/10^A^"]
    store.close()
