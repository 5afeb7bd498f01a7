# tests/app/test_cli.py
import json

from osm_router.cli import main


def test_places_lists_every_place(osm_file, capsys):
    assert main(["places", str(osm_file)]) == 0
    out = capsys.readouterr().out
    assert "0: Library (0.000000, 0.000000)" in out
    assert "4: Depot (1.000000, 1.001000)" in out


def test_places_on_unnamed_map(tmp_path, capsys):
    p = tmp_path / "plain.osm"
    p.write_text('<osm><node id="1" lat="0" lon="0"/></osm>', encoding="utf-8")
    assert main(["places", str(p)]) == 0
    assert "No named locations found." in capsys.readouterr().out


def test_route_by_name(osm_file, capsys):
    assert main(["route", str(osm_file), "Library", "Cafe"]) == 0
    out = capsys.readouterr().out
    assert "Path found with 3 nodes" in out
    assert "Shortest road path: 222.39 meters" in out


def test_route_json_by_index(osm_file, capsys):
    assert main(["route", str(osm_file), "0", "1", "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["found"] is True
    assert data["path"] == [1, 2, 3]


def test_route_without_path_exits_2(osm_file, capsys):
    assert main(["route", str(osm_file), "Library", "Island"]) == 2
    out = capsys.readouterr().out
    assert "No road path found between 'Library' and 'Island'" in out
    assert "destination is outside it" in out


def test_distance_in_kilometers(osm_file, capsys):
    assert main(["distance", str(osm_file), "Library", "Cafe"]) == 0
    assert "is 0.22 kilometers." in capsys.readouterr().out


def test_errors_go_to_stderr(osm_file, tmp_path, capsys):
    assert main(["route", str(osm_file), "Library", "Museum"]) == 1
    assert "unknown place 'Museum'" in capsys.readouterr().err
    assert main(["places", str(tmp_path / "missing.osm")]) == 1


def test_no_command_prints_help(capsys):
    assert main([]) == 1


def test_numeric_place_name_is_selected_by_name(tmp_path, capsys):
    p = tmp_path / "stops.osm"
    p.write_text(
        "<osm>"
        '<node id="1" lat="0" lon="0"><tag k="name" v="A"/></node>'
        '<node id="2" lat="0" lon="0.001"><tag k="name" v="B"/></node>'
        '<node id="3" lat="0" lon="0.002"><tag k="name" v="1"/></node>'
        "</osm>",
        encoding="utf-8",
    )
    assert main(["distance", str(p), "A", "1"]) == 0
    assert "between 'A' and '1' is 0.22 kilometers." in capsys.readouterr().out
    assert main(["distance", str(p), "A", "0"]) == 0
    assert "between 'A' and 'A' is 0.00 kilometers." in capsys.readouterr().out


def test_malformed_jsonl_line_is_a_clean_error(tmp_path, capsys):
    p = tmp_path / "map.jsonl"
    p.write_text("[1, 2]\n", encoding="utf-8")
    assert main(["--fmt", "jsonl", "places", str(p)]) == 1
    assert "expected an object" in capsys.readouterr().err
