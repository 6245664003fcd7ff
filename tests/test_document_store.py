import threading

from parsers.records import new_document
from services.document_store import DocumentStore


def test_append_replace_and_clear():
    store = DocumentStore()
    store.append(new_document("a.xml"))
    store.append(new_document("b.xml"))

    assert [d["file_name"] for d in store.snapshot()] == ["a.xml", "b.xml"]

    store.replace([new_document("c.xml")])
    assert [d["file_name"] for d in store.snapshot()] == ["c.xml"]

    store.clear()
    assert len(store) == 0
    assert store.snapshot() == []


def test_snapshot_is_detached_from_store():
    store = DocumentStore()
    store.append(new_document("a.xml"))

    snapshot = store.snapshot()
    snapshot[0]["patient"]["name"] = "Changed"
    snapshot.append(new_document("extra.xml"))

    assert store.snapshot() == [new_document("a.xml")]


def test_concurrent_appends_are_all_kept():
    store = DocumentStore()

    def worker(index: int) -> None:
        for offset in range(50):
            store.append(new_document(f"{index}-{offset}.xml"))

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(store) == 200
