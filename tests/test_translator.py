"""
Translator and CLI Test Suite
=============================

End-to-end tests for the translation driver and the wordyc command.
"""

from pathlib import Path

import pytest

from wordy import __version__, translate, translate_file, Translator, TranslatorOptions
from wordy.errors import WordyError
from wordy.translator import (
    ProgramNode,
    TranslationError,
    UnexpectedTokenError,
    UnterminatedCommentError,
)
from wordy.translator.codegen import PROLOGUE
from wordy.cli.errors import ExitCode


SQUARES = """\
/* Print the squares of 1 through 5 */
to square with (n) return n * n

to main do
    for each i in 1 through 5 display(square(i))
end
"""


# =============================================================================
# Translator Driver
# =============================================================================

class TestTranslator:
    """Tests for the Translator class and convenience functions."""

    def test_translate_source_result(self):
        """A successful run fills every result field."""
        result = Translator().translate_source(SQUARES, "squares.wdy")
        assert result.success
        assert result.filename == "squares.wdy"
        assert isinstance(result.ast, ProgramNode)
        assert [f.name for f in result.ast.functions] == ["square", "main"]
        assert result.token_count == 28
        assert "long square(long n)" in result.output

    def test_translate_default_options(self):
        """By default the runtime prologue is included."""
        assert translate("to main return 0").startswith(PROLOGUE)

    def test_options(self):
        options = TranslatorOptions(indent="  ", emit_runtime=False)
        output = Translator(options).translate_source("to main return 1").output
        assert output.startswith("/* Start compiled program */")
        assert "\n  return 1;\n" in output

    def test_errors_propagate(self):
        """Translation errors are raised, never returned as a partial result."""
        with pytest.raises(UnexpectedTokenError):
            translate("to main do return end")

    def test_error_hierarchy(self):
        with pytest.raises(TranslationError):
            translate("to main /* open")
        with pytest.raises(WordyError):
            translate("to main /* open")

    def test_filename_in_error(self):
        with pytest.raises(UnterminatedCommentError) as exc_info:
            translate("\n/* open", "notes.wdy")
        assert str(exc_info.value).startswith("notes.wdy:2:1: error:")

    def test_translate_file(self, tmp_path):
        source = tmp_path / "squares.wdy"
        source.write_text(SQUARES, encoding="utf-8")
        output = tmp_path / "squares.c"

        c_text = translate_file(source, output)

        assert output.read_text(encoding="utf-8") == c_text
        assert "display(square(i));" in c_text

    def test_translate_file_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            translate_file(tmp_path / "missing.wdy")

    def test_translate_file_error_names_file(self, tmp_path):
        source = tmp_path / "bad.wdy"
        source.write_text("to main return", encoding="utf-8")
        with pytest.raises(TranslationError) as exc_info:
            Translator().translate_file(source)
        assert str(source) in str(exc_info.value)


# =============================================================================
# wordyc Command
# =============================================================================

class TestWordyc:
    """Tests for the wordyc command-line tool."""

    def test_version(self):
        from click.testing import CliRunner
        from wordy.cli.wordyc import main

        result = CliRunner().invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_stdout_output(self):
        """With no -o the C goes to stdout."""
        from click.testing import CliRunner
        from wordy.cli.wordyc import main

        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("squares.wdy").write_text(SQUARES)
            result = runner.invoke(main, ["squares.wdy"])

        assert result.exit_code == ExitCode.SUCCESS, result.output
        assert result.output == translate(SQUARES, "squares.wdy")

    def test_stdin_input(self):
        """Input defaults to stdin."""
        from click.testing import CliRunner
        from wordy.cli.wordyc import main

        result = CliRunner().invoke(main, ["--no-runtime"], input="to main display(7)")
        assert result.exit_code == 0
        assert "    display(7);\n" in result.output
        assert "#include" not in result.output

    def test_output_file(self):
        from click.testing import CliRunner
        from wordy.cli.wordyc import main

        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("squares.wdy").write_text(SQUARES)
            result = runner.invoke(main, ["squares.wdy", "-o", "squares.c"])

            assert result.exit_code == 0, result.output
            assert Path("squares.c").read_text() == translate(SQUARES, "squares.wdy")

    def test_indent_option(self):
        from click.testing import CliRunner
        from wordy.cli.wordyc import main

        result = CliRunner().invoke(
            main, ["--indent", "2", "--no-runtime"], input="to main return 3"
        )
        assert result.exit_code == 0
        assert "\n  return 3;\n" in result.output

    def test_syntax_error(self):
        """Translation errors exit with 1 and write nothing."""
        from click.testing import CliRunner
        from wordy.cli.wordyc import main

        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("bad.wdy").write_text("to main do return end")
            result = runner.invoke(main, ["bad.wdy", "-o", "bad.c"])

            assert result.exit_code == ExitCode.BUILD_ERROR
            assert "bad.wdy:1:19: error: unexpected token 'end'" in result.output
            assert not Path("bad.c").exists()

    def test_lexical_error(self):
        from click.testing import CliRunner
        from wordy.cli.wordyc import main

        result = CliRunner().invoke(main, [], input="to main /* open")
        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "unterminated block comment" in result.output

    def test_missing_input_file(self):
        from click.testing import CliRunner
        from wordy.cli.wordyc import main

        runner = CliRunner()
        with runner.isolated_filesystem():
            result = runner.invoke(main, ["missing.wdy"])
        assert result.exit_code == ExitCode.INVALID_ARGS

    def test_tokens_option(self):
        from click.testing import CliRunner
        from wordy.cli.wordyc import main

        result = CliRunner().invoke(main, ["--tokens"], input="set x to 1")
        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "Token(KEYWORD, 'set', 1:1)",
            "Token(IDENTIFIER, 'x', 1:5)",
            "Token(KEYWORD, 'to', 1:7)",
            "Token(NUMBER, 1, 1:10)",
        ]

    def test_ast_option(self):
        from click.testing import CliRunner
        from wordy.cli.wordyc import main

        result = CliRunner().invoke(main, ["--ast"], input="to main display(1 + 2)")
        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "Program",
            "  Function: main",
            "    Call display((1 + 2))",
        ]

    def test_verbose(self):
        from click.testing import CliRunner
        from wordy.cli.wordyc import main

        result = CliRunner().invoke(main, ["-v", "--no-runtime"], input="to main return 0")
        assert result.exit_code == 0
        assert "return 0;" in result.output
