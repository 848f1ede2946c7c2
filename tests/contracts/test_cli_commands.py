"""Tests for kibel-tools commands run through the CLI app."""

from __future__ import annotations

from pathlib import Path

import httpx
import msgspec
import pydantic
import pytest

from cli.app import app, invoke
from cli.commands._connection import ConnectionOptions
from cli.commands.create_note_contract import refresh_snapshot_command
from cli.commands.resource_contract import refresh_endpoint_command
from cli.commands.version import get_version_info
from cli.config_loader import resolve_config
from cli.context import RunContext
from cli.exit_codes import ExitCode
from contracts.artifacts import load_json_artifact
from contracts.errors import StaleArtifactError
from contracts.normalizer import load_endpoint_snapshot
from contracts.workflows import ContractPaths, check_create_note_contract
from kibel_client.errors import ApiError, TransportError
from serde_msgspec import dumps_json
from tests._support.introspection import (
    FULL_CREATE_NOTE_INPUT,
    create_note_payload,
    payload_from_snapshot,
)

ORIGIN = "https://example.kibe.la"


def _context(paths: ContractPaths) -> RunContext:
    return RunContext(log_level="INFO", config=resolve_config(None, cwd=paths.root))


def _mock_client(payload: object, seen: list[httpx.Request] | None = None) -> httpx.Client:
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(200, json=payload)

    return httpx.Client(transport=httpx.MockTransport(handler))


def test_resource_check_succeeds(
    artifact_repo: ContractPaths, capsys: pytest.CaptureFixture[str]
) -> None:
    """``resource-contract check`` exits 0 on fresh artifacts."""
    code = invoke(app, ["resource-contract", "check"], run_context=_context(artifact_repo))
    assert code == ExitCode.SUCCESS
    assert "up to date" in capsys.readouterr().out


def test_resource_check_reports_stale_module(
    artifact_repo: ContractPaths, capsys: pytest.CaptureFixture[str]
) -> None:
    """A stale module maps to the stale-artifact exit code."""
    module = artifact_repo.contract_module
    module.write_text(module.read_text(encoding="utf-8") + "\n", encoding="utf-8")
    code = invoke(app, ["resource-contract", "check"], run_context=_context(artifact_repo))
    assert code == ExitCode.STALE_ARTIFACT
    assert "stale" in capsys.readouterr().err


def test_resource_write_then_check(artifact_repo: ContractPaths) -> None:
    """``write`` repairs a stale module so ``check`` succeeds."""
    artifact_repo.contract_module.write_text("# stale\n", encoding="utf-8")
    context = _context(artifact_repo)
    assert invoke(app, ["resource-contract", "write"], run_context=context) == ExitCode.SUCCESS
    assert invoke(app, ["resource-contract", "check"], run_context=context) == ExitCode.SUCCESS


def test_missing_artifact_maps_to_io_error(artifact_repo: ContractPaths) -> None:
    """A missing snapshot file maps to the artifact IO exit code."""
    artifact_repo.create_note_snapshot.unlink()
    code = invoke(app, ["create-note-contract", "check"], run_context=_context(artifact_repo))
    assert code == ExitCode.ARTIFACT_IO_ERROR


def test_create_note_write(artifact_repo: ContractPaths) -> None:
    """``create-note-contract write`` regenerates the module."""
    artifact_repo.create_note_module.unlink()
    code = invoke(app, ["create-note-contract", "write"], run_context=_context(artifact_repo))
    assert code == ExitCode.SUCCESS
    check_create_note_contract(artifact_repo)


def test_diff_json_reports_breaking_changes(
    artifact_repo: ContractPaths, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """``diff --json`` prints the report and exits with the breaking code."""
    payload = msgspec.json.decode(artifact_repo.contract_snapshot.read_bytes())
    payload["resources"] = [
        item for item in payload["resources"] if item["name"] != "getFeedSections"
    ]
    target = tmp_path / "target.json"
    target.write_bytes(dumps_json(payload, pretty=True))

    tokens = [
        "resource-contract",
        "diff",
        "--base",
        str(artifact_repo.contract_snapshot),
        "--target",
        str(target),
        "--json",
    ]
    code = invoke(app, tokens, run_context=_context(artifact_repo))
    assert code == ExitCode.BREAKING_CHANGES
    report = msgspec.json.decode(capsys.readouterr().out)
    assert report["breaking_count"] == 1
    assert report["breaking"] == ["getFeedSections: resource removed"]
    assert report["notes"] == []


def test_diff_text_without_changes(
    artifact_repo: ContractPaths, capsys: pytest.CaptureFixture[str]
) -> None:
    """Diffing a snapshot against itself exits 0."""
    snapshot = str(artifact_repo.contract_snapshot)
    tokens = ["resource-contract", "diff", "--base", snapshot, "--target", snapshot]
    code = invoke(app, tokens, run_context=_context(artifact_repo))
    assert code == ExitCode.SUCCESS
    assert capsys.readouterr().out.splitlines() == ["breaking changes: 0", "notes: 0"]


def test_unknown_command_is_parse_error(artifact_repo: ContractPaths) -> None:
    """Unknown tokens map to the parse-error exit code."""
    tokens = ["resource-contract", "check", "--bogus-flag"]
    code = invoke(app, tokens, run_context=_context(artifact_repo))
    assert code == ExitCode.PARSE_ERROR


def test_refresh_endpoint_command(artifact_repo: ContractPaths) -> None:
    """``refresh-endpoint`` posts the introspection query with the bearer token."""
    committed = load_endpoint_snapshot(load_json_artifact(artifact_repo.endpoint_snapshot))
    seen: list[httpx.Request] = []
    result = refresh_endpoint_command(
        connection=ConnectionOptions(origin=ORIGIN, token="secret"),
        run_context=_context(artifact_repo),
        http_client=_mock_client(payload_from_snapshot(committed), seen),
    )
    assert result.ok
    assert [str(request.url) for request in seen] == [f"{ORIGIN}/api/v1"]
    assert seen[0].headers["authorization"] == "Bearer secret"
    refreshed = load_endpoint_snapshot(load_json_artifact(artifact_repo.endpoint_snapshot))
    assert refreshed.origin == ORIGIN
    assert refreshed.resources == committed.resources


def test_refresh_requires_token(
    artifact_repo: ContractPaths, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Refreshing without a token fails validation before any request."""
    monkeypatch.delenv("KIBELA_ACCESS_TOKEN", raising=False)
    with pytest.raises(pydantic.ValidationError):
        refresh_endpoint_command(
            connection=ConnectionOptions(origin=ORIGIN),
            run_context=_context(artifact_repo),
            http_client=_mock_client({}),
        )


def test_refresh_snapshot_command(artifact_repo: ContractPaths) -> None:
    """``refresh-snapshot`` rewrites the create-note snapshot, leaving the module stale."""
    reduced = tuple(name for name in FULL_CREATE_NOTE_INPUT if name != "draft")
    result = refresh_snapshot_command(
        connection=ConnectionOptions(origin=ORIGIN, token="secret"),
        run_context=_context(artifact_repo),
        http_client=_mock_client(create_note_payload(reduced)),
    )
    assert result.ok
    with pytest.raises(StaleArtifactError):
        check_create_note_contract(artifact_repo)


def test_version_info_lists_contracts() -> None:
    """Version info reports the compiled-in contract tables."""
    info = get_version_info()
    resource_contract = info["resource_contract"]
    assert isinstance(resource_contract, dict)
    assert resource_contract["resources"] > 0
    assert info["create_note_contract"] == {"input_fields": len(FULL_CREATE_NOTE_INPUT)}


@pytest.mark.parametrize(
    ("exc", "expected"),
    [
        (StaleArtifactError("generated file", "kibel-tools x write"), ExitCode.STALE_ARTIFACT),
        (ApiError("NOT_FOUND", "missing"), ExitCode.API_ERROR),
        (TransportError("timeout"), ExitCode.TRANSPORT_ERROR),
        (ValueError("bad"), ExitCode.VALIDATION_ERROR),
        (RuntimeError("boom"), ExitCode.GENERAL_ERROR),
    ],
)
def test_exit_code_mapping(exc: BaseException, expected: ExitCode) -> None:
    """Exceptions map onto the exit code taxonomy."""
    assert ExitCode.from_exception(exc) == expected
