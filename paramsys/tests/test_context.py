"""
Unit tests for params/context.py module.

Tests typed resolution, defaults, run-time overrides and the lifecycle
guards of ParamContext.
"""

import unittest
from ..params.context import ParamContext
from ..params.schema import Parameter, define
from ..params.parsers import parse_command_line_options
from ..params.errors import (
    ConflictingRegistrationError,
    ParameterValueError,
    RegistrationClosedError,
    RegistrationNotClosedError,
    UnknownParameterError,
)
from ..params.registry import RegistrationState


class UpwindWeight(Parameter):
    value = 1.0


class Verbose(Parameter):
    value = False


class MaxIterations(Parameter):
    value = 20


class OutputDir(Parameter):
    value = "./output"


class TestRegistration(unittest.TestCase):
    """Tests for register/hide/end_registration/reset."""

    def setUp(self):
        self.ctx = ParamContext()

    def test_register_twice_is_noop(self):
        self.ctx.register(UpwindWeight, "Relative weight of the upwind node.")
        self.ctx.register(UpwindWeight, "Relative weight of the upwind node.")
        self.assertEqual(len(self.ctx.registry), 1)

    def test_register_different_usage_raises(self):
        self.ctx.register(UpwindWeight, "Relative weight of the upwind node.")
        with self.assertRaises(ConflictingRegistrationError):
            self.ctx.register(UpwindWeight, "Something else.")

    def test_register_non_parameter_raises(self):
        with self.assertRaises(TypeError):
            self.ctx.register("UpwindWeight", "usage")

    def test_register_after_end_raises(self):
        self.ctx.end_registration()
        with self.assertRaises(RegistrationClosedError):
            self.ctx.register(UpwindWeight, "usage")

    def test_end_registration_twice_raises(self):
        self.ctx.end_registration()
        with self.assertRaises(RegistrationClosedError):
            self.ctx.end_registration()

    def test_hide(self):
        self.ctx.register(Verbose, "Print more.")
        self.ctx.hide(Verbose)
        self.assertTrue(self.ctx.registry.all_params["Verbose"].hidden)

    def test_hide_unregistered_raises(self):
        with self.assertRaises(UnknownParameterError):
            self.ctx.hide(Verbose)

    def test_hide_after_end_raises(self):
        self.ctx.register(Verbose, "Print more.")
        self.ctx.end_registration()
        with self.assertRaises(RegistrationClosedError):
            self.ctx.hide(Verbose)

    def test_end_registration_validates_overrides(self):
        """A malformed run-time value should fail when registration closes."""
        self.ctx.register(MaxIterations, "Newton iterations.")
        self.ctx.tree.set("MaxIterations", "many")

        with self.assertRaises(ParameterValueError):
            self.ctx.end_registration()

    def test_end_registration_validates_defaults(self):
        BadDefault = define("BadDefault", "x", value_type=int)
        self.ctx.register(BadDefault, "Cannot be parsed.")

        with self.assertRaises(ParameterValueError):
            self.ctx.end_registration()

    def test_reset(self):
        self.ctx.register(UpwindWeight, "usage")
        self.ctx.tree.set("UpwindWeight", "2.0")
        self.ctx.end_registration()

        self.ctx.reset()

        self.assertEqual(self.ctx.state, RegistrationState.OPEN)
        self.assertEqual(len(self.ctx.registry), 0)
        self.assertFalse(self.ctx.tree.has_key("UpwindWeight"))
        self.ctx.register(UpwindWeight, "a different usage is fine after reset")


class TestResolution(unittest.TestCase):
    """Tests for get/is_set/set_default."""

    def setUp(self):
        self.ctx = ParamContext()
        self.ctx.register(UpwindWeight, "Relative weight of the upwind node.")
        self.ctx.register(Verbose, "Print more.")
        self.ctx.register(MaxIterations, "Newton iterations.")
        self.ctx.register(OutputDir, "Where to write results.")

    def test_get_before_end_raises(self):
        with self.assertRaises(RegistrationNotClosedError):
            self.ctx.get(UpwindWeight)

    def test_is_set_before_end_raises(self):
        with self.assertRaises(RegistrationNotClosedError):
            self.ctx.is_set(UpwindWeight)

    def test_get_unregistered_raises(self):
        Unregistered = define("Unregistered", 1)
        self.ctx.end_registration()
        with self.assertRaises(UnknownParameterError):
            self.ctx.get(Unregistered)

    def test_get_unregistered_without_check(self):
        """With the check disabled the parameter's own default is used."""
        Unregistered = define("Unregistered", 7)
        self.assertEqual(self.ctx.get(Unregistered, error_if_unregistered=False), 7)
        self.ctx.tree.set("Unregistered", "8")
        self.assertEqual(self.ctx.get(Unregistered, error_if_unregistered=False), 8)
        self.assertTrue(self.ctx.is_set(Unregistered, error_if_unregistered=False))

    def test_defaults(self):
        self.ctx.end_registration()
        self.assertEqual(self.ctx.get(UpwindWeight), 1.0)
        self.assertIs(self.ctx.get(Verbose), False)
        self.assertEqual(self.ctx.get(MaxIterations), 20)
        self.assertEqual(self.ctx.get(OutputDir), "./output")

    def test_types(self):
        self.ctx.end_registration()
        self.assertIsInstance(self.ctx.get(UpwindWeight), float)
        self.assertIsInstance(self.ctx.get(MaxIterations), int)
        self.assertIsInstance(self.ctx.get(Verbose), bool)

    def test_get_by_name(self):
        self.ctx.end_registration()
        self.assertEqual(self.ctx.get("MaxIterations"), 20)

    def test_overrides(self):
        for key, value in [("UpwindWeight", "0.25"), ("Verbose", "1"),
                           ("MaxIterations", "5"), ("OutputDir", "/tmp/run 1")]:
            self.ctx.tree.set(key, value)
        self.ctx.end_registration()

        self.assertEqual(self.ctx.get(UpwindWeight), 0.25)
        self.assertIs(self.ctx.get(Verbose), True)
        self.assertEqual(self.ctx.get(MaxIterations), 5)
        self.assertEqual(self.ctx.get(OutputDir), "/tmp/run 1")

    def test_boolean_only_one_is_true(self):
        self.ctx.end_registration()
        for text, expected in [("1", True), ("0", False), ("true", False), ("", False)]:
            with self.subTest(text=text):
                self.ctx.tree.set("Verbose", text)
                self.assertIs(self.ctx.get(Verbose), expected)

    def test_malformed_override_propagates(self):
        self.ctx.end_registration()
        self.ctx.tree.set("UpwindWeight", "heavy")
        with self.assertRaises(ParameterValueError) as ctx:
            self.ctx.get(UpwindWeight)
        self.assertIn("heavy", str(ctx.exception))

    def test_is_set(self):
        self.ctx.tree.set("UpwindWeight", "1.0")
        self.ctx.end_registration()
        self.assertTrue(self.ctx.is_set(UpwindWeight))
        self.assertFalse(self.ctx.is_set(Verbose))

    def test_set_default(self):
        self.ctx.set_default(MaxIterations, 50)
        self.ctx.end_registration()
        self.assertEqual(self.ctx.get(MaxIterations), 50)
        self.assertFalse(self.ctx.is_set(MaxIterations))

    def test_set_default_does_not_change_declaration(self):
        self.ctx.set_default(MaxIterations, 50)
        self.assertEqual(MaxIterations.value, 20)

    def test_set_default_loses_to_override(self):
        self.ctx.set_default(UpwindWeight, 0.75)
        self.ctx.tree.set("UpwindWeight", "0.5")
        self.ctx.end_registration()
        self.assertEqual(self.ctx.get(UpwindWeight), 0.5)

    def test_set_default_boolean(self):
        self.ctx.set_default(Verbose, True)
        self.ctx.end_registration()
        self.assertIs(self.ctx.get(Verbose), True)

    def test_set_default_unregistered_raises(self):
        with self.assertRaises(UnknownParameterError):
            self.ctx.set_default(define("Unregistered", 1), 2)

    def test_set_default_wrong_type_raises(self):
        with self.assertRaises(ParameterValueError):
            self.ctx.set_default(MaxIterations, "lots")


class TestLists(unittest.TestCase):
    """Tests for get_lists, partition and snapshot."""

    def setUp(self):
        self.ctx = ParamContext()
        self.ctx.register(UpwindWeight, "Relative weight of the upwind node.")
        self.ctx.register(Verbose, "Print more.")
        self.ctx.tree.set("UpwindWeight", "0.5")
        self.ctx.tree.set("UpwindWieght", "0.7")

    def test_get_lists_requires_closed(self):
        with self.assertRaises(RegistrationNotClosedError):
            self.ctx.get_lists()

    def test_get_lists(self):
        self.ctx.end_registration()
        used, unused = self.ctx.get_lists()
        self.assertEqual(used, [("UpwindWeight", "0.5")])
        self.assertEqual(unused, [("UpwindWieght", "0.7")])

    def test_partition(self):
        runtime, compile_time, unknown = self.ctx.partition()
        self.assertEqual(runtime, ["UpwindWeight"])
        self.assertEqual(compile_time, ["Verbose"])
        self.assertEqual(unknown, ["UpwindWieght"])

    def test_snapshot(self):
        self.assertEqual(self.ctx.snapshot(), {
            "runtime":      {"UpwindWeight": {"value": "0.5", "default": "1.0"}},
            "compile_time": {"Verbose": "0"},
            "unused":       {"UpwindWieght": "0.7"},
        })


class TestEndToEnd(unittest.TestCase):
    """Register, close, parse the command line, read values."""

    def test_upwind_weight(self):
        ctx = ParamContext()
        ctx.register(UpwindWeight, "Relative weight of the upwind node.")
        ctx.register(Verbose, "Print more.")
        ctx.end_registration()

        self.assertEqual(parse_command_line_options(ctx, ["--upwind-weight=0.5"]), "")

        self.assertEqual(ctx.get(UpwindWeight), 0.5)
        self.assertTrue(ctx.is_set(UpwindWeight))
        self.assertIs(ctx.get(Verbose), False)
        self.assertFalse(ctx.is_set(Verbose))


if __name__ == "__main__":
    unittest.main()
