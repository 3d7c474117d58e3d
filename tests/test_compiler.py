"""Tests for the compiler driver, the JSON report and the command line."""

import json
import logging

import pytest

import analog_literals as al
from analog_literals import AnalogCompiler, ErrorKind, RecognizerConfig


class TestCompile:
    def test_rectangle_report(self, rect_2_by_3):
        json_out, analysis, value = AnalogCompiler("rect").compile(rect_2_by_3, verbose=False)
        assert analysis['is_valid']
        assert analysis['shape'] == "rectangle"
        assert analysis['dimensions'] == {'w': 2, 'h': 3}
        assert (value.w, value.h) == (2, 3)

        report = json.loads(json_out)
        assert report['meta'] == {'name': "rect", 'shape': "rectangle", 'steps': analysis['steps']}
        assert report['derived'] == {'area': 6}
        assert report['validation']['is_valid'] is True
        assert report['validation']['checks'] == [{'edge': "width", 'vantage': "bottom", 'value': 2}]

    def test_cuboid_report(self, cube_5_by_2_by_4):
        json_out, _, _ = AnalogCompiler("cube").compile(cube_5_by_2_by_4, verbose=False)
        report = json.loads(json_out)
        assert report['dimensions'] == {'w': 5, 'h': 2, 'l': 4}
        assert report['derived'] == {
            'volume': 40,
            'top': {'w': 5, 'h': 4},
            'side': {'w': 4, 'h': 2},
            'front': {'w': 5, 'h': 2},
        }
        assert len(report['validation']['checks']) == 4

    def test_line_report(self):
        json_out, analysis, value = AnalogCompiler().compile("I----I", verbose=False)
        assert value == al.Line(2)
        report = json.loads(json_out)
        assert report['dimensions'] == {'magnitude': 2}
        assert report['derived'] == {}
        assert analysis['checks'] == []

    def test_degenerate_box_is_noted(self):
        compiler = AnalogCompiler()
        _, analysis, value = compiler.compile("+------+", verbose=False)
        assert value == al.Line(3)
        assert analysis['shape'] == "line"
        assert any("read as a line" in i.text for i in compiler.messages.infos)

    def test_lexical_errors_stop_before_recognition(self):
        compiler = AnalogCompiler()
        json_out, analysis, value = compiler.compile("+-- x --+ y", verbose=False)
        assert json_out is None and value is None
        assert not analysis['is_valid']
        assert len(analysis['errors']) == 2
        assert all(e.kind is ErrorKind.LEXICAL for e in compiler.messages.errors)

    def test_syntax_error_is_reported_not_raised(self):
        compiler = AnalogCompiler()
        json_out, analysis, value = compiler.compile("+----+\n|    |\n+----", verbose=False)
        assert json_out is None and value is None
        assert analysis['errors'] == ["Unexpected end of input while reading the bottom edge of a rectangle"]
        err = compiler.messages.errors[0]
        assert err.kind is ErrorKind.SYNTAX
        assert err.location == al.SourceLocation(3, 6)

    def test_mismatch_is_reported(self):
        compiler = AnalogCompiler()
        _, analysis, value = compiler.compile("+--------+ |        | +------+", verbose=False)
        assert value is None
        assert analysis['errors'] == ["Width mismatch: measured 4, but 3 on the bottom edge"]
        assert compiler.messages.errors[0].kind is ErrorKind.SEMANTIC

    def test_budget_is_reported(self, cube_5_by_2_by_4):
        compiler = AnalogCompiler(config=RecognizerConfig(max_steps=3))
        _, analysis, value = compiler.compile(cube_5_by_2_by_4, verbose=False)
        assert value is None
        assert analysis['steps'] == 4
        assert compiler.messages.errors[0].kind is ErrorKind.RESOURCE

    def test_verbose_prints_phases(self, capsys, rect_2_by_3):
        AnalogCompiler().compile(rect_2_by_3)
        out = capsys.readouterr().out
        for phase in ("LEXICAL ANALYSIS", "SHAPE RECOGNITION", "DIMENSION VALIDATION", "CODE GENERATION"):
            assert phase in out
        assert "Validation PASSED" in out

    def test_verbose_failure_shows_caret(self, capsys):
        AnalogCompiler().compile("I--I--I")
        out = capsys.readouterr().out
        assert "Validation FAILED" in out
        assert "[SYNTAX] line 1, col 4" in out
        assert "        ^" in out
        assert "hint: expected '--' or a closing 'I'" in out


class TestMessages:
    def test_format_without_location(self):
        collector = al.MessageCollector()
        collector.error("Width mismatch", hint="fix it")
        assert collector.format(collector.errors[0]) == "[SEMANTIC] Width mismatch\n    hint: fix it"

    def test_warnings_and_infos_are_separate(self):
        collector = al.MessageCollector()
        collector.warn("w")
        collector.info("i")
        assert not collector.has_errors()
        assert [m.kind for m in collector.warnings + collector.infos] == [ErrorKind.WARNING, ErrorKind.INFO]


class TestLibraryEntry:
    def test_raises_where_driver_reports(self):
        with pytest.raises(al.UnexpectedToken):
            al.analog_literal("+----+\n|    |\n+----")

    def test_lexical_error_raises_malformed(self):
        with pytest.raises(al.MalformedDiagram) as info:
            al.analog_literal("I--?--I")
        assert not isinstance(info.value, al.UnexpectedToken)

    def test_error_hierarchy(self):
        assert issubclass(al.UnexpectedToken, al.MalformedDiagram)
        for cls in (al.MalformedDiagram, al.DimensionMismatch, al.RecognitionDepthExceeded):
            assert issubclass(cls, al.DiagramError)

    def test_transitions_are_logged(self, caplog, cube_5_by_2_by_4):
        with caplog.at_level(logging.DEBUG, logger="analog_literals"):
            al.analog_literal(cube_5_by_2_by_4)
        assert "TOP -> MID" in caplog.text
        assert "BOTTOM_WIDTH -> DONE" in caplog.text


class TestMain:
    def test_code_writes_json(self, tmp_path):
        rc = al.main(["--code", "+----+ |    | +----+", "--output-dir", str(tmp_path), "--quiet"])
        assert rc == 0
        report = json.loads((tmp_path / "literal.json").read_text())
        assert report['dimensions'] == {'w': 2, 'h': 1}

    def test_input_file_names_output(self, tmp_path):
        src = tmp_path / "rig.txt"
        src.write_text(al.MINING_RIG)
        rc = al.main(["--input", str(src), "--output-dir", str(tmp_path), "--quiet"])
        assert rc == 0
        report = json.loads((tmp_path / "rig.json").read_text())
        assert report['dimensions'] == {'w': 21, 'h': 1, 'l': 16}

    def test_default_drawing(self, tmp_path, capsys):
        assert al.main(["--output-dir", str(tmp_path)]) == 0
        assert (tmp_path / "cube_5_by_2_by_4.json").exists()
        assert "Output saved" in capsys.readouterr().out

    def test_failure_exit_status(self, tmp_path):
        rc = al.main(["--code", "+----+ +--+", "--output-dir", str(tmp_path), "--quiet"])
        assert rc == 1
        assert list(tmp_path.iterdir()) == []

    def test_max_steps_flag(self, tmp_path):
        rc = al.main(["--code", "I------I", "--max-steps", "2", "--output-dir", str(tmp_path), "--quiet"])
        assert rc == 1

    def test_bad_max_steps_is_usage_error(self):
        with pytest.raises(SystemExit) as info:
            al.main(["--max-steps", "0"])
        assert info.value.code == 2

    def test_self_test_flag(self, capsys):
        assert al.main(["--test"]) == 0
        assert "TOTAL:" in capsys.readouterr().out


def test_builtin_suite_passes(capsys):
    passed, failed = al.run_tests()
    assert failed == 0
    assert passed > 30
