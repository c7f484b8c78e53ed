from jqlive.ui import JsonQueryApp


def test_ui_seeds_panel_from_file_and_query(invoke, fake_jq_env, tmp_path, monkeypatch):
    data = tmp_path / "data.json"
    data.write_text('{"a": 1}')
    launched = []
    monkeypatch.setattr(JsonQueryApp, "run", lambda self: launched.append(self))

    res = invoke(["ui", str(data), "-q", ".a"])

    assert res.exit_code == 0, res.output
    (app,) = launched
    assert app.pipeline.controller.document == '{"a": 1}'
    assert app.pipeline.controller.query == ".a"
    assert app.pipeline.invoker.command == [str(fake_jq_env)]


def test_ui_opens_without_jq(invoke, tmp_path, monkeypatch):
    monkeypatch.setenv("PATH", str(tmp_path / "empty"))
    launched = []
    monkeypatch.setattr(JsonQueryApp, "run", lambda self: launched.append(self))

    res = invoke(["ui"])

    assert res.exit_code == 0, res.output
    assert launched[0].pipeline.controller.query == "."
