import pytest

from compile_and_run.core.models.run_result import Verdict
from compile_and_run.test_runner.batch_runner import (
    BatchRunner,
    discover_input_files,
    is_executable_file,
    matches_filters,
    matching_output_file,
)

from conftest import SUM_PY, requires_diff, requires_file, write


def never_executable(path):
    return False


def names(paths):
    return sorted(p.name for p in paths)


@pytest.mark.parametrize("input_name, expected", [
    ("sum.1.in", "sum.1.out"),
    ("basicinput.in", "basicinput.out"),
    ("inwin.in", "inwin.out"),
    ("input1.txt", "output1.txt"),
    ("sample_in", "sample_out"),
])
def test_matching_output_file_replaces_last_in(input_name, expected):
    assert matching_output_file(input_name) == expected


def test_matches_filters_without_filters_matches_everything():
    assert matches_filters("anything.in", ())


def test_matches_filters_searches_anywhere_in_name():
    assert matches_filters("sum.12.in", ["12"])
    assert not matches_filters("sum.12.in", ["^12"])


def test_discovery_requires_in_and_regular_file(tmp_path):
    write(tmp_path / "sum.1.in", "1 2\n")
    write(tmp_path / "readme.txt", "")
    (tmp_path / "inputs").mkdir()

    found = discover_input_files(tmp_path, is_executable=never_executable)
    assert names(found) == ["sum.1.in"]


def test_discovery_excludes_names_containing_out(tmp_path):
    write(tmp_path / "sum.1.in", "1 2\n")
    write(tmp_path / "input.out", "3\n")
    write(tmp_path / "outin", "")

    found = discover_input_files(tmp_path, is_executable=never_executable)
    assert names(found) == ["sum.1.in"]


@pytest.mark.parametrize("artifact", ["Main.java", "Main.class", "main.cpp", "main.go"])
def test_discovery_excludes_sources_and_artifacts(tmp_path, artifact):
    write(tmp_path / "sum.1.in", "1 2\n")
    write(tmp_path / artifact, "")

    found = discover_input_files(tmp_path, is_executable=never_executable)
    assert names(found) == ["sum.1.in"]


def test_discovery_excludes_executables(tmp_path):
    write(tmp_path / "sum.1.in", "1 2\n")
    write(tmp_path / "problem2_offline", "")

    found = discover_input_files(
        tmp_path,
        is_executable=lambda path: path.name == "problem2_offline",
    )
    assert names(found) == ["sum.1.in"]


@requires_file
def test_discovery_excludes_real_executables(tmp_path):
    write(tmp_path / "sum.1.in", "1 2\n")
    script = write(tmp_path / "gen_input", "#!/bin/sh\necho 1 2\n")
    script.chmod(0o755)

    found = discover_input_files(tmp_path)
    assert names(found) == ["sum.1.in"]


@requires_file
def test_file_probe_detects_executable_script(tmp_path):
    script = write(tmp_path / "run_in", "#!/bin/sh\necho 3\n")
    script.chmod(0o755)
    text = write(tmp_path / "plain.in", "1 2\n")

    assert is_executable_file(script)
    assert not is_executable_file(text)


def test_discovery_filters_are_ored(tmp_path):
    for name in ["sample1.in", "sample2.in", "big1.in", "big2.in"]:
        write(tmp_path / name, "")

    only_sample1 = discover_input_files(tmp_path, ["sample1"], is_executable=never_executable)
    only_big = discover_input_files(tmp_path, ["^big"], is_executable=never_executable)
    both = discover_input_files(tmp_path, ["sample1", "^big"], is_executable=never_executable)

    assert names(only_sample1) == ["sample1.in"]
    assert names(only_big) == ["big1.in", "big2.in"]
    assert names(both) == ["big1.in", "big2.in", "sample1.in"]


def test_runner_skips_configured_source_extensions(tmp_path, make_config, console):
    write(tmp_path / "main.py", "")
    write(tmp_path / "sum.1.in", "1 2\n")

    runner = BatchRunner(make_config(), console, is_executable=never_executable)
    assert names(runner.input_files()) == ["sum.1.in"]


def test_no_reference_prints_captured_output(tmp_path, make_config, console):
    write(tmp_path / "sum.py", SUM_PY)
    write(tmp_path / "sum.1.in", "1 2\n")

    config = make_config()
    results = BatchRunner(config, console, is_executable=never_executable).run_all()

    assert [r.verdict for r in results] == [Verdict.NO_REFERENCE]
    assert results[0].captured_output == config.output_dir / "sum.1.in.out"
    assert results[0].captured_output.read_text() == "3\n"
    assert "*** Running with 'sum.1.in'..." in console.text
    assert "*** No errors (" in console.text
    assert console.text.endswith("3\n")


def test_runtime_error_continues_with_next_input(tmp_path, make_config, console):
    write(tmp_path / "sum.py", SUM_PY)
    write(tmp_path / "bad.in", "not numbers\n")
    write(tmp_path / "good.in", "2 2\n")

    results = BatchRunner(make_config(), console, is_executable=never_executable).run_all()
    verdicts = {r.input_file.name: r.verdict for r in results}

    assert verdicts == {"bad.in": Verdict.RUNTIME_ERROR, "good.in": Verdict.NO_REFERENCE}
    assert "*** Runtime error with 'bad.in'" in console.text


@requires_diff
def test_matching_reference(tmp_path, make_config, console):
    write(tmp_path / "sum.py", SUM_PY)
    write(tmp_path / "sum.1.in", "1 2\n")
    write(tmp_path / "sum.1.out", "3\n")

    [result] = BatchRunner(make_config(), console, is_executable=never_executable).run_all()

    assert result.verdict == Verdict.MATCH
    assert result.diff == ""
    assert result.expected_output == tmp_path / "sum.1.out"
    assert "*** Output matches sum.1.out (" in console.text


@requires_diff
def test_mismatching_reference_prints_diff(tmp_path, make_config, console):
    write(tmp_path / "sum.py", SUM_PY)
    write(tmp_path / "sum.1.in", "1 2\n")
    write(tmp_path / "sum.1.out", "4\n")

    [result] = BatchRunner(make_config(), console, is_executable=never_executable).run_all()

    assert result.verdict == Verdict.MISMATCH
    assert "< 3" in result.diff
    assert "> 4" in result.diff
    assert "< 3" in console.text
    assert "*** There are differences with sum.1.out (" in console.text


def test_filters_are_announced(tmp_path, make_config, console):
    write(tmp_path / "sum.py", SUM_PY)

    BatchRunner(make_config(filters=["a", "b"]), console, is_executable=never_executable).run_all()
    assert "*** Filtering files with these regexps: a,b" in console.text


def test_run_result_to_dict(tmp_path, make_config, console):
    write(tmp_path / "sum.py", SUM_PY)
    write(tmp_path / "sum.1.in", "1 2\n")

    [result] = BatchRunner(make_config(), console, is_executable=never_executable).run_all()
    data = result.to_dict()

    assert data["verdict"] == "no_reference"
    assert data["exit_code"] == 0
    assert data["expected_output"] is None
    assert data["execution_time_ms"] >= 0


def test_captured_output_is_printed_verbatim(tmp_path, make_config, console):
    write(tmp_path / "tabs.py", "print('1\\t2')\n")
    write(tmp_path / "sum.1.in", "")

    [result] = BatchRunner(make_config("tabs.py"), console, is_executable=never_executable).run_all()

    assert result.verdict == Verdict.NO_REFERENCE
    assert console.text.endswith("1\t2\n")


@requires_diff
def test_line_ending_difference_is_visible(tmp_path, make_config, console):
    write(tmp_path / "crlf.py", "import sys\nsys.stdout.write('3\\r\\n')\n")
    write(tmp_path / "sum.1.in", "")
    write(tmp_path / "sum.1.out", "3\n")

    [result] = BatchRunner(make_config("crlf.py"), console, is_executable=never_executable).run_all()

    assert result.verdict == Verdict.MISMATCH
    assert "< 3\r\n" in result.diff
    assert "< 3\r\n" in console.text


def test_input_that_cannot_be_run_does_not_stop_the_batch(tmp_path, make_config, console):
    write(tmp_path / "sum.py", SUM_PY)
    write(tmp_path / "a_bad.in", "1 2\n")
    write(tmp_path / "b_good.in", "2 2\n")
    config = make_config()
    # capture path is a directory, so opening it for writing fails
    (config.output_dir / "a_bad.in.out").mkdir(parents=True)

    results = BatchRunner(config, console, is_executable=never_executable).run_all()
    verdicts = {r.input_file.name: r.verdict for r in results}

    assert verdicts == {"a_bad.in": Verdict.RUNTIME_ERROR, "b_good.in": Verdict.NO_REFERENCE}
    assert "*** Runtime error with 'a_bad.in'" in console.text
    assert "*** Running with 'b_good.in'..." in console.text
