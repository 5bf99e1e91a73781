"""Tests for the snapshot export script."""

from __future__ import annotations

import json

import pytest

from scripts.export_snapshot import export_snapshot, parse_args, serialize_snapshot
from simpeg.core.errors import RemoteTimeout
from simpeg.services.fallback import FALLBACK_IDS
from simpeg.services.local_store import LocalStore
from simpeg.services.record_repository import RecordRepository, SnapshotSource
from tests.conftest import make_record, make_remote


def test_parse_args_defaults():
    args = parse_args([])

    assert args.output is None
    assert args.refresh is False
    assert args.verbose is False


def test_parse_args_all_flags():
    args = parse_args(["--output", "out.json", "--refresh", "--verbose"])

    assert args.output == "out.json"
    assert args.refresh is True
    assert args.verbose is True


def test_serialize_snapshot_uses_wire_format():
    text = serialize_snapshot([make_record(id="A", full_name="Ani")])

    rows = json.loads(text)
    assert rows[0]["id"] == "A"
    assert rows[0]["fullName"] == "Ani"


@pytest.mark.anyio
async def test_export_writes_remote_snapshot(tmp_path):
    output = tmp_path / "snapshot.json"
    repository = RecordRepository(
        make_remote(return_value=[{"id": "E-1", "fullName": "Ani"}]),
        LocalStore(tmp_path / "store.json"),
    )

    source = await export_snapshot(parse_args(["--output", str(output)]), repository)

    assert source == SnapshotSource.REMOTE
    assert [row["id"] for row in json.loads(output.read_text(encoding="utf-8"))] == ["E-1"]


@pytest.mark.anyio
async def test_export_offline_reports_fallback(tmp_path, capsys):
    repository = RecordRepository(make_remote(side_effect=RemoteTimeout("t")), LocalStore(None))

    source = await export_snapshot(parse_args([]), repository)

    assert source == SnapshotSource.FALLBACK
    rows = json.loads(capsys.readouterr().out)
    assert {row["id"] for row in rows} == FALLBACK_IDS


@pytest.mark.anyio
async def test_export_refresh_drops_cached_snapshot(tmp_path):
    remote = make_remote(return_value=[{"id": "E-2"}])
    repository = RecordRepository(remote, LocalStore(None))
    repository.cache.set([make_record(id="STALE")])

    source = await export_snapshot(parse_args(["--refresh", "-o", str(tmp_path / "o.json")]), repository)

    assert source == SnapshotSource.REMOTE
    assert remote._request.await_count == 1
