import json

import pytest

from conftest import FIXTURE_DIR, code_url
from scripts.decode_build import main as decode_main
from scripts.encode_build import load_build_state, main as encode_main


def test_decode_script_text_output(capsys):
    url = code_url(level=7, stone=2, perk_bytes=(0b10000000, 0))
    assert decode_main([url, "--data", str(FIXTURE_DIR), "--log-level", "ERROR"]) == 0
    out = capsys.readouterr().out
    assert "Race:      Nord" in out
    assert "Stone:     Mage" in out
    assert "Smithing: Craftsmanship" in out


def test_decode_script_json_output(capsys):
    url = code_url(race=9) + "&p=1"
    assert decode_main([url, "--data", str(FIXTURE_DIR), "--json", "--log-level", "ERROR"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["success"] is True
    assert payload["preset"] == "LoreRim v4"
    assert payload["buildState"]["race"] is None
    assert payload["warnings"][0] == "Imported from preset: LoreRim v4"


def test_decode_script_failure_exit_code(capsys):
    assert decode_main(["https://gigaplanner.com", "--data", str(FIXTURE_DIR), "--log-level", "ERROR"]) == 1
    assert "NoBuildCode" in capsys.readouterr().out


def test_scripts_require_data_source(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        decode_main([code_url()])
    assert exc.value.code == 2
    with pytest.raises(SystemExit):
        encode_main([str(tmp_path / "build.json")])
    assert "--data" in capsys.readouterr().err


def test_encode_script_prints_url(tmp_path, capsys):
    build = {
        "race": "Dunmer",
        "stone": "Thief",
        "attributeAssignments": {"level": 5, "health": 0, "magicka": 2, "stamina": 2},
        "skillLevels": {"Sneak": 40},
        "perks": {"selected": {"Sneak": ["Stealth"]}},
        "oghmaChoice": "Magicka",
    }
    path = tmp_path / "build.json"
    path.write_text(json.dumps(build), encoding="utf-8")

    assert encode_main([str(path), "--data", str(FIXTURE_DIR), "--log-level", "ERROR"]) == 0
    url = capsys.readouterr().out.strip().splitlines()[-1]
    assert url.startswith("https://gigaplanner.com?b=")
    assert url.endswith("&p=1")


def test_encode_script_unknown_perk_list(tmp_path, capsys):
    path = tmp_path / "build.json"
    path.write_text("{}", encoding="utf-8")
    code = encode_main(
        [str(path), "--perk-list", "Requiem", "--data", str(FIXTURE_DIR), "--log-level", "ERROR"]
    )
    assert code == 1
    assert "Unknown perk list: Requiem" in capsys.readouterr().out


def test_load_build_state_accepts_decode_envelope(tmp_path):
    path = tmp_path / "decoded.json"
    path.write_text(json.dumps({"success": True, "buildState": {"race": "Breton"}}), encoding="utf-8")
    assert load_build_state(path).race == "Breton"
