import json
from unittest.mock import patch

import pytest

from nft_validator.local_validation import main, validate_local, validate_local_partial


@pytest.fixture
def metadata_dir(tmp_path):
    good = {"name": "Token #1", "image": "ipfs://QmTest/1.png", "type": "image/png"}
    bad = {"name": "Token #2", "type": "image/png"}
    (tmp_path / "good.json").write_text(json.dumps(good), encoding="utf-8")
    (tmp_path / "bad.json").write_text(json.dumps(bad), encoding="utf-8")
    (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")
    return tmp_path


def test_validate_local(metadata_dir):
    results = validate_local(str(metadata_dir))

    assert sorted(results) == ["bad.json", "good.json"]
    assert results["good.json"] == {"errors": [], "warnings": []}
    assert results["bad.json"]["errors"] == [
        {"type": "schema", "msg": "requires property 'image'", "path": "instance"}
    ]


def test_validate_local_fails_on_broken_file(metadata_dir):
    (metadata_dir / "broken.json").write_text("{", encoding="utf-8")

    with pytest.raises(json.JSONDecodeError):
        validate_local(str(metadata_dir))


def test_validate_local_partial_reports_broken_file(metadata_dir):
    (metadata_dir / "broken.json").write_text("{", encoding="utf-8")

    results = validate_local_partial(str(metadata_dir))

    assert sorted(results) == ["bad.json", "broken.json", "good.json"]
    assert results["broken.json"]["errors"][0]["type"] == "file"
    assert results["broken.json"]["errors"][0]["path"] == "broken.json"
    assert results["good.json"]["errors"] == []


@patch("nft_validator.local_validation.get_json_files_for_dir")
def test_validate_local_partial_keeps_scan_order(mock_scan, metadata_dir):
    mock_scan.return_value = ["missing.json", "good.json", "bad.json"]

    results = validate_local_partial(str(metadata_dir))
    assert list(results) == ["missing.json", "good.json", "bad.json"]


def test_main_exit_codes(metadata_dir, tmp_path_factory, capsys):
    assert main([str(metadata_dir)]) == 1
    output = json.loads(capsys.readouterr().out)
    assert "bad.json" in output

    clean_dir = tmp_path_factory.mktemp("clean")
    (clean_dir / "ok.json").write_text(
        json.dumps({"name": "Token", "image": "ipfs://QmTest/ok.png", "type": "image/png"}),
        encoding="utf-8",
    )
    assert main([str(clean_dir)]) == 0


def test_main_aborts_on_missing_dir(tmp_path):
    assert main([str(tmp_path / "nope")]) == 2


def test_main_keep_going(metadata_dir, capsys):
    (metadata_dir / "broken.json").write_text("{", encoding="utf-8")

    assert main([str(metadata_dir)]) == 2
    assert main([str(metadata_dir), "--keep-going"]) == 1
    output = json.loads(capsys.readouterr().out)
    assert output["broken.json"]["errors"][0]["type"] == "file"


def test_main_unknown_version(metadata_dir):
    assert main([str(metadata_dir), "--version", "0.0.1"]) == 2


def test_main_log_level(metadata_dir):
    assert main([str(metadata_dir), "--log-level", "debug"]) == 1

    with pytest.raises(SystemExit) as exc:
        main([str(metadata_dir), "--log-level", "LOUD"])
    assert exc.value.code == 2
