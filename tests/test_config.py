"""Tests for TOML config file loading."""

from __future__ import annotations

from pathlib import Path

from pl0check.cli import build_parser, load_config, main, resolve_options


class TestLoadConfig:
    def test_missing_config_returns_empty(self, tmp_path: Path) -> None:
        assert load_config(None, tmp_path) == {}

    def test_explicit_path(self, tmp_path: Path) -> None:
        cfg = tmp_path / "custom.toml"
        cfg.write_text("[output]\nindent = 4\n")
        result = load_config(cfg, tmp_path)
        assert result["output"] == {"indent": 4}

    def test_auto_discover_pl0check_toml(self, tmp_path: Path) -> None:
        cfg = tmp_path / "pl0check.toml"
        cfg.write_text("[diagnostics]\nwarnings = false\n")
        result = load_config(None, tmp_path)
        assert result["diagnostics"] == {"warnings": False}


class TestConfigMerge:
    def _resolve(self, tmp_path: Path, config: str, *argv: str):
        (tmp_path / "pl0check.toml").write_text(config)
        src = tmp_path / "prog.pl0"
        src.write_text("")
        ns = build_parser().parse_args([str(src), *argv])
        return resolve_options(ns)

    def test_defaults(self, tmp_path: Path) -> None:
        opts = self._resolve(tmp_path, "")
        assert opts.output_file is None
        assert opts.indent == 2
        assert opts.show_warnings is True
        assert opts.label == str(tmp_path / "prog.pl0")

    def test_config_output(self, tmp_path: Path) -> None:
        opts = self._resolve(tmp_path, '[output]\nfile = "out/tokens.json"\nindent = 0\n')
        assert opts.output_file == Path("out/tokens.json")
        assert opts.indent == 0

    def test_cli_overrides_config_output(self, tmp_path: Path) -> None:
        opts = self._resolve(
            tmp_path, '[output]\nfile = "a.json"\nindent = 8\n', "-o", "b.json", "--indent", "1"
        )
        assert opts.output_file == Path("b.json")
        assert opts.indent == 1

    def test_config_hides_warnings(self, tmp_path: Path) -> None:
        opts = self._resolve(tmp_path, "[diagnostics]\nwarnings = false\n")
        assert opts.show_warnings is False

    def test_cli_no_warnings(self, tmp_path: Path) -> None:
        opts = self._resolve(tmp_path, "[diagnostics]\nwarnings = true\n", "--no-warnings")
        assert opts.show_warnings is False

    def test_config_label(self, tmp_path: Path) -> None:
        opts = self._resolve(tmp_path, '[diagnostics]\nlabel = "main.pl0"\n')
        assert opts.label == "main.pl0"

    def test_cli_label_overrides_config(self, tmp_path: Path) -> None:
        opts = self._resolve(tmp_path, '[diagnostics]\nlabel = "main.pl0"\n', "--label", "x")
        assert opts.label == "x"

    def test_wrongly_typed_values_ignored(self, tmp_path: Path) -> None:
        opts = self._resolve(tmp_path, '[output]\nindent = "wide"\n[diagnostics]\nwarnings = 1\n')
        assert opts.indent == 2
        assert opts.show_warnings is True

    def test_explicit_config_flag(self, tmp_path: Path) -> None:
        cfg = tmp_path / "alt.toml"
        cfg.write_text('[diagnostics]\nlabel = "alt"\n')
        src = tmp_path / "prog.pl0"
        src.write_text("")
        ns = build_parser().parse_args([str(src), "--config", str(cfg)])
        assert resolve_options(ns).label == "alt"


class TestConfigEndToEnd:
    def test_config_output_file_written(self, tmp_path: Path) -> None:
        (tmp_path / "pl0check.toml").write_text(
            f'[output]\nfile = "{(tmp_path / "tokens.json").as_posix()}"\n'
        )
        src = tmp_path / "prog.pl0"
        src.write_text("begin end")
        assert main([str(src)]) == 0
        assert (tmp_path / "tokens.json").is_file()
