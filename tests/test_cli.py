from pathlib import Path

from pulse_refresh.cli import cli
from typer.testing import CliRunner

runner = CliRunner()


def _write(tmp_path: Path, source: str, name: str = "mod.jsx") -> Path:
	file = tmp_path / name
	file.write_text(source, encoding="utf-8")
	return file


def test_transform_to_stdout(tmp_path: Path):
	file = _write(tmp_path, "const Foo = () => null;\n")
	result = runner.invoke(cli, ["transform", str(file)])
	assert result.exit_code == 0, result.output
	assert '__register__(_c, "Foo");' in result.stdout


def test_transform_to_file(tmp_path: Path):
	file = _write(tmp_path, "const Foo = () => null;\n")
	out = tmp_path / "out.js"
	result = runner.invoke(cli, ["transform", str(file), "-o", str(out)])
	assert result.exit_code == 0, result.output
	assert out.read_text(encoding="utf-8") == (
		"const Foo = () => null;\n_c = Foo;\nvar _c;\n" + '__register__(_c, "Foo");\n'
	)


def test_check_reports_changes(tmp_path: Path):
	file = _write(tmp_path, "const Foo = () => null;\n")
	result = runner.invoke(cli, ["transform", str(file), "--check"])
	assert result.exit_code == 1
	assert "would be instrumented" in result.output


def test_check_clean(tmp_path: Path):
	file = _write(tmp_path, "const x = 1;\n")
	result = runner.invoke(cli, ["transform", str(file), "--check"])
	assert result.exit_code == 0
	assert "nothing to instrument" in result.output


def test_parse_error(tmp_path: Path):
	file = _write(tmp_path, "const = ;\n")
	result = runner.invoke(cli, ["transform", str(file)])
	assert result.exit_code == 1
	assert "Invalid JavaScript syntax" in result.output


def test_missing_file(tmp_path: Path):
	result = runner.invoke(cli, ["transform", str(tmp_path / "nope.jsx")])
	assert result.exit_code == 1
	assert "File not found" in result.output


def test_inspect(tmp_path: Path):
	source = "const Foo = memo(() => {\nuseState(0);\nuseThing();\nreturn null;\n});\n"
	file = _write(tmp_path, source)
	result = runner.invoke(cli, ["inspect", str(file)])
	assert result.exit_code == 0, result.output
	assert "Registrations" in result.stdout
	assert "Foo$memo" in result.stdout
	assert "Signatures" in result.stdout
	assert "useThing" in result.stdout


def test_inspect_nothing_found(tmp_path: Path):
	file = _write(tmp_path, "const x = 1;\n")
	result = runner.invoke(cli, ["inspect", str(file)])
	assert result.exit_code == 0
	assert "No components" in result.stdout


def test_invalid_log_level(tmp_path: Path, monkeypatch):
	monkeypatch.setenv("PULSE_REFRESH_LOG_LEVEL", "LOUD")
	file = _write(tmp_path, "const x = 1;\n")
	result = runner.invoke(cli, ["transform", str(file)])
	assert result.exit_code == 1
