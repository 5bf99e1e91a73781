from __future__ import annotations

import json

import pytest

from simpeg.core.config import Settings
from simpeg.services.local_store import LocalStore
from tests.conftest import TEST_STORE_KEY, make_record


@pytest.mark.anyio
async def test_load_returns_none_when_file_missing(store):
    assert await store.load() is None


@pytest.mark.anyio
async def test_persist_then_load(store):
    records = [make_record(id="A", full_name="Ani"), make_record(id="B", full_name="Budi")]

    assert await store.persist(records) is True
    loaded = await store.load()

    assert loaded == records


@pytest.mark.anyio
async def test_persist_writes_camel_case_under_namespaced_key(store):
    await store.persist([make_record(id="A", full_name="Ani")])

    document = json.loads(store.path.read_text(encoding="utf-8"))
    assert list(document) == [TEST_STORE_KEY]
    assert document[TEST_STORE_KEY][0]["fullName"] == "Ani"


@pytest.mark.anyio
async def test_persist_keeps_other_keys(store):
    store.path.write_text(json.dumps({"simpeg.session": {"user": "admin"}}), encoding="utf-8")

    await store.persist([make_record(id="A")])

    document = json.loads(store.path.read_text(encoding="utf-8"))
    assert document["simpeg.session"] == {"user": "admin"}
    assert [row["id"] for row in document[TEST_STORE_KEY]] == ["A"]


@pytest.mark.anyio
async def test_load_corrupt_file_returns_none(store):
    store.path.write_text("{not json", encoding="utf-8")

    assert await store.load() is None


@pytest.mark.anyio
async def test_load_only_invalid_records_returns_empty(store):
    store.path.write_text(json.dumps({TEST_STORE_KEY: [{"id": "X", "status": "Unknown"}]}), encoding="utf-8")

    assert await store.load() == []


@pytest.mark.anyio
async def test_load_skips_invalid_rows_and_keeps_valid_ones(store):
    rows = [
        make_record(id="LOCAL-A").to_wire(),
        {"id": "LOCAL-B", "status": "Pensiun"},
        make_record(id="LOCAL-C", full_name="Citra").to_wire(),
    ]
    store.path.write_text(json.dumps({TEST_STORE_KEY: rows}), encoding="utf-8")

    loaded = await store.load()

    assert [r.id for r in loaded] == ["LOCAL-A", "LOCAL-C"]
    assert loaded[1].full_name == "Citra"


@pytest.mark.anyio
async def test_load_non_list_value_returns_none(store):
    store.path.write_text(json.dumps({TEST_STORE_KEY: {"id": "X"}}), encoding="utf-8")

    assert await store.load() is None


@pytest.mark.anyio
async def test_persist_over_corrupt_file_rewrites_it(store):
    store.path.write_text("[1, 2", encoding="utf-8")

    assert await store.persist([make_record(id="A")]) is True
    assert [r.id for r in await store.load()] == ["A"]


@pytest.mark.anyio
async def test_persist_failure_is_absorbed(tmp_path):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("", encoding="utf-8")
    store = LocalStore(blocker / "store.json", TEST_STORE_KEY)

    assert await store.persist([make_record(id="A")]) is False
    assert await store.load() is None


@pytest.mark.anyio
async def test_disabled_store_is_a_no_op():
    store = LocalStore(None)

    assert store.enabled is False
    assert await store.persist([make_record(id="A")]) is False
    assert await store.load() is None


def test_from_settings_empty_path_disables():
    store = LocalStore.from_settings(Settings(LOCAL_STORE_PATH=""))

    assert store.enabled is False
