import json


def test_settings_show_defaults(invoke, isolated_home):
    res = invoke(["settings", "show"])
    assert res.exit_code == 0
    assert f"Settings file: {isolated_home / 'settings.json'}" in res.output
    assert "JsonQuery.indentationMode: TwoSpaces" in res.output
    assert "jqPath: -" in res.output


def test_settings_show_json(invoke):
    res = invoke(["settings", "show", "--json"])
    assert res.exit_code == 0
    data = json.loads(res.output)
    assert data == {
        "JsonQuery.indentationMode": "TwoSpaces",
        "JsonQuery.sortKeys": False,
        "jqPath": None,
        "timeoutSeconds": None,
        "killGraceSeconds": 2.0,
    }


def test_settings_set_persists(invoke, isolated_home):
    res = invoke(["settings", "set", "sortKeys", "true"])
    assert res.exit_code == 0
    assert res.output.strip() == "sortKeys = true"

    data = json.loads((isolated_home / "settings.json").read_text())
    assert data["JsonQuery.sortKeys"] is True

    shown = json.loads(invoke(["settings", "show", "--json"]).output)
    assert shown["JsonQuery.sortKeys"] is True


def test_settings_set_rejects_bad_value(invoke, isolated_home):
    res = invoke(["settings", "set", "indentationMode", "ThreeSpaces"])
    assert res.exit_code == 1
    assert "Invalid value for indentationMode" in res.output
    assert not (isolated_home / "settings.json").exists()


def test_settings_set_rejects_unknown_key(invoke):
    res = invoke(["settings", "set", "colour", "blue"])
    assert res.exit_code == 2


def test_home_option_overrides_environment(invoke, tmp_path):
    other = tmp_path / "other_home"
    res = invoke(["--home", str(other), "settings", "set", "timeoutSeconds", "5"])
    assert res.exit_code == 0
    assert json.loads((other / "settings.json").read_text())["timeoutSeconds"] == 5
