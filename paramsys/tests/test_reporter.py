"""
Unit tests for params/reporter.py module.

Tests line wrapping, the per-parameter usage lines, the usage message and
the value reports.
"""

import io
import os
import tempfile
import unittest
from unittest import mock

import rich.console

from . import file_load_yaml
from ..printer import ParamPrinter
from ..params.parsers import parse_parameter_text
from ..params.context import ParamContext
from ..params.schema import Parameter, ParamInfo
from ..params.reporter import (
    HELP_ENTRIES,
    break_lines,
    dump_values,
    format_param_usage,
    print_unused,
    print_usage,
    print_values,
)


class UpwindWeight(Parameter):
    value = 1.0


class Verbose(Parameter):
    value = False


class OutputDir(Parameter):
    value = "./output"


def _usage_line(flag: str, text: str) -> str:
    return f"    {flag}".ljust(50) + text


class TestBreakLines(unittest.TestCase):
    """Tests for break_lines."""

    def test_short_line_unchanged(self):
        self.assertEqual(break_lines("short text", 4, 80), "short text")

    def test_break_at_whitespace(self):
        self.assertEqual(break_lines("aaa bbb ccc", 4, 7), "aaa bbb\n    ccc")

    def test_break_inside_word(self):
        """Without whitespace the line is cut at the width limit."""
        self.assertEqual(break_lines("abcdefghij", 2, 4), "abcd\n  ef\n  gh\n  ij")

    def test_hard_newlines_are_kept(self):
        self.assertEqual(break_lines("ab\ncd", 4, 80), "ab\ncd")

    def test_wrapped_lines_fit(self):
        text = break_lines("lorem ipsum dolor sit amet " * 10, 10, 40)
        for line in text.split("\n"):
            self.assertLessEqual(len(line), 40)


class TestParamUsage(unittest.TestCase):
    """Tests for format_param_usage."""

    def test_scalar(self):
        info = ParamInfo.from_parameter(UpwindWeight, "Relative weight of the upwind node.")
        self.assertEqual(
            format_param_usage(info, max_width=10000),
            _usage_line("--upwind-weight=SCALAR", "Relative weight of the upwind node. Default: 1.0"),
        )

    def test_boolean_default(self):
        info = ParamInfo.from_parameter(Verbose, "Print more")
        self.assertEqual(
            format_param_usage(info, max_width=10000),
            _usage_line("--verbose=BOOLEAN", "Print more. Default: false"),
        )

    def test_string_default_is_quoted(self):
        info = ParamInfo.from_parameter(OutputDir, "Where to write results.")
        self.assertEqual(
            format_param_usage(info, max_width=10000),
            _usage_line("--output-dir=STRING", 'Where to write results. Default: "./output"'),
        )

    def test_help_entry_has_no_default(self):
        flag, info = HELP_ENTRIES[0]
        self.assertEqual(
            format_param_usage(info, max_width=10000, flag=flag),
            _usage_line("-h,--help", "Print this help message and exit"),
        )

    def test_wrapped_usage_is_indented(self):
        info = ParamInfo.from_parameter(UpwindWeight, "Relative weight of the upwind node.")
        lines = format_param_usage(info, max_width=80).split("\n")
        self.assertGreater(len(lines), 1)
        for line in lines[1:]:
            self.assertTrue(line.startswith(" " * 52))


@mock.patch("paramsys.params.reporter.get_tty_width", return_value=10000)
class TestPrintUsage(unittest.TestCase):
    """Tests for print_usage."""

    def setUp(self):
        self.ctx = ParamContext()
        self.ctx.register(UpwindWeight, "Relative weight of the upwind node.")
        self.ctx.register(Verbose, "Print more.")
        self.ctx.hide(Verbose)

    def test_usage(self, _):
        out = io.StringIO()
        print_usage(self.ctx, "Usage: sim [OPTIONS]", out=out)

        lines = out.getvalue().split("\n")
        self.assertEqual(lines[0], "Usage: sim [OPTIONS]")
        self.assertEqual(lines[1], "Recognized options:")
        self.assertTrue(lines[2].startswith("    -h,--help"))
        self.assertTrue(lines[3].startswith("    --help-all"))
        self.assertTrue(lines[4].startswith("    --upwind-weight=SCALAR"))
        self.assertNotIn("--verbose", out.getvalue())

    def test_show_all(self, _):
        out = io.StringIO()
        print_usage(self.ctx, "Usage", out=out, show_all=True)
        self.assertIn("    --verbose=BOOLEAN", out.getvalue())

    def test_error_message_comes_first(self, _):
        out = io.StringIO()
        print_usage(self.ctx, "Usage", error_msg="Something failed", out=out)
        self.assertTrue(out.getvalue().startswith("Something failed\n\nUsage\n"))

    def test_no_preamble_skips_help_entries(self, _):
        out = io.StringIO()
        print_usage(self.ctx, "", out=out)
        self.assertNotIn("--help", out.getvalue())


class TestValueReports(unittest.TestCase):
    """Tests for print_values, print_unused and dump_values."""

    def setUp(self):
        self.ctx = ParamContext()
        self.ctx.register(UpwindWeight, "Relative weight of the upwind node.")
        self.ctx.register(Verbose, "Print more.")
        self.ctx.tree.set("UpwindWeight", "0.5")
        self.ctx.tree.set("UpwindWieght", "0.7")
        self.ctx.end_registration()

    def test_print_values(self):
        out = io.StringIO()
        print_values(self.ctx, out)
        self.assertEqual(out.getvalue(), """\
# [known parameters which were specified at run-time]
UpwindWeight="0.5" # default: "1.0"
# [parameters which were specified at compile-time]
Verbose="0"
# [unused run-time specified parameters]
UpwindWieght="0.7"
""")

    def test_print_values_skips_empty_sections(self):
        ctx = ParamContext()
        ctx.register(Verbose, "Print more.")
        ctx.end_registration()

        out = io.StringIO()
        print_values(ctx, out)
        self.assertEqual(out.getvalue(), '# [parameters which were specified at compile-time]\nVerbose="0"\n')

    def test_print_unused(self):
        out = io.StringIO()
        self.assertTrue(print_unused(self.ctx, out))
        self.assertEqual(out.getvalue(), '# [unused run-time specified parameters]\nUpwindWieght="0.7"\n')

    def test_print_unused_nothing(self):
        ctx = ParamContext()
        ctx.end_registration()

        out = io.StringIO()
        self.assertFalse(print_unused(ctx, out))
        self.assertEqual(out.getvalue(), "")

    def test_print_values_keeps_control_characters(self):
        """A real console printer emits values verbatim, tabs included."""
        ctx = ParamContext()
        parse_parameter_text(ctx, 'Foo = "a\\tb"\n')
        ctx.end_registration()

        printer = ParamPrinter()
        printer.raw = rich.console.Console(file=io.StringIO())
        print_values(ctx, printer)

        self.assertEqual(printer.raw.file.getvalue(), '# [unused run-time specified parameters]\nFoo="a\tb"\n')

    def test_dump_values(self):
        with tempfile.TemporaryDirectory() as dirpath:
            filepath = os.path.join(dirpath, "values.yaml")
            dump_values(self.ctx, filepath)

            self.assertEqual(file_load_yaml(filepath), {
                "runtime":      {"UpwindWeight": {"value": "0.5", "default": "1.0"}},
                "compile_time": {"Verbose": "0"},
                "unused":       {"UpwindWieght": "0.7"},
            })


if __name__ == "__main__":
    unittest.main()
