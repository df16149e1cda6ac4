"""Command line tests: each runs main() against files in a temp directory."""

import json

import pytest

from automata_algebra.main import main


@pytest.fixture
def files(tmp_path, odd_zeros_raw, ends_in_one_raw, partial_raw):
    paths = {}
    for key, raw in [("odd", odd_zeros_raw), ("ends", ends_in_one_raw), ("partial", partial_raw)]:
        path = tmp_path / f"{key}.json"
        path.write_text(json.dumps(raw), encoding="utf-8")
        paths[key] = str(path)
    other = dict(odd_zeros_raw, alphabet=["a"], transitions=[])
    path = tmp_path / "other.json"
    path.write_text(json.dumps(other), encoding="utf-8")
    paths["other"] = str(path)
    return paths


def read_json(path):
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def test_complement(files, tmp_path):
    out = tmp_path / "not_odd.json"
    assert main(["complement", files["odd"], "-o", str(out)]) == 0
    data = read_json(out)
    assert data["finalStates"] == ["q0"]
    assert data["name"] == "odd_zeros__NOT"


def test_complete_default_output_path(files, tmp_path):
    assert main(["complete", files["partial"]]) == 0
    data = read_json(tmp_path / "partial_complete.json")
    assert data["states"] == ["q0", "q1", "sink"]


def test_intersect(files, tmp_path):
    out = tmp_path / "both.json"
    assert main(["intersect", files["odd"], files["ends"], "-o", str(out)]) == 0
    assert read_json(out)["initialState"] == "(q0,p0)"


def test_intersect_disjoint_alphabets_fails(files, tmp_path):
    out = tmp_path / "none.json"
    assert main(["intersect", files["odd"], files["other"], "-o", str(out)]) == 1
    assert not out.exists()


def test_union_choice_legacy_schema(files, tmp_path):
    out = tmp_path / "either.json"
    args = ["union", files["odd"], files["ends"], "--strategy", "choice", "--schema", "legacy", "-o", str(out)]
    assert main(args) == 0
    data = read_json(out)
    assert data["initialState"] == "q_union"
    assert data["acceptStates"] == ["A_q1", "B_p1"]
    assert data["transitions"][0]["input"] == "ε"


def test_difference_as_quintuple(files, tmp_path):
    out = tmp_path / "diff.txt"
    assert main(["difference", files["odd"], files["ends"], "-o", str(out)]) == 0
    assert "QUINTUPLA" in out.read_text(encoding="utf-8")


def test_run_words(files, capsys):
    assert main(["run", files["odd"], "-w", "0", "-w", "00"]) == 0
    output = capsys.readouterr().out
    assert "'0': ACEPTADA" in output
    assert "'00': RECHAZADA" in output


def test_quintuple_to_stdout(files, capsys):
    assert main(["quintuple", files["partial"], "--style", "table"]) == 0
    assert "q1\t| q0\t| -" in capsys.readouterr().out


def test_validate(files, capsys):
    assert main(["validate", files["partial"]]) == 0
    output = capsys.readouterr().out
    assert "partial: OK" in output
    assert '"is_complete": false' in output


def test_invalid_input(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"states": ["q0"]}), encoding="utf-8")
    assert main(["validate", str(path)]) == 1


def test_missing_file(tmp_path):
    assert main(["validate", str(tmp_path / "missing.json")]) == 1


def test_wrong_number_of_inputs(files):
    assert main(["intersect", files["odd"]]) == 2


def test_unknown_operation(files):
    with pytest.raises(SystemExit) as exc:
        main(["minimize", files["odd"]])
    assert exc.value.code == 2


def test_png(files, tmp_path):
    out = tmp_path / "u.json"
    png = tmp_path / "u.png"
    assert main(["union", files["odd"], files["ends"], "-o", str(out), "--png", str(png)]) == 0
    assert png.read_bytes()[:4] == b"\x89PNG"


def test_badly_typed_input(tmp_path, odd_zeros_raw):
    path = tmp_path / "typed.json"
    path.write_text(json.dumps(dict(odd_zeros_raw, initialState=["q0"])), encoding="utf-8")
    assert main(["union", str(path), str(path), "--strategy", "choice"]) == 1
