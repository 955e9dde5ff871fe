import unittest
from typing import Any

from PyWebVTT.Helpers.Tests import log_input_expected_error, log_input_expected_result, log_test_name
from PyWebVTT.VttCue import VttCue

class LoggedTestCase(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        super().setUpClass()
        log_test_name(f"{cls.__name__}")

    def setUp(self) -> None:
        super().setUp()
        log_test_name(self._testMethodName)

    def assertLoggedEqual(self, description : str, expected : Any, result : Any, input_value : Any = None) -> None:
        log_input_expected_result(input_value if input_value is not None else description, expected, result)
        self.assertEqual(expected, result, description)

    def assertLoggedTrue(self, description : str, result : Any, input_value : Any = None) -> None:
        log_input_expected_result(input_value if input_value is not None else description, True, result)
        self.assertTrue(result, description)

    def assertLoggedIsNone(self, description : str, result : Any, input_value : Any = None) -> None:
        log_input_expected_result(input_value if input_value is not None else description, None, result)
        self.assertIsNone(result, description)

    def assertLoggedSequenceEqual(self, description : str, expected : Any, result : Any, input_value : Any = None) -> None:
        log_input_expected_result(input_value if input_value is not None else description, expected, result)
        self.assertSequenceEqual(expected, result, description)

    def assertLoggedRaises(self, description : str, expected_error : type[Exception], func, *args, **kwargs) -> Exception:
        """
        Assert that calling func raises expected_error and return the exception for further checks
        """
        with self.assertRaises(expected_error, msg=description) as context:
            func(*args, **kwargs)
        log_input_expected_error(description, expected_error, context.exception)
        return context.exception


class VttTestCase(LoggedTestCase):
    """
    Test case with helpers for comparing parsed cues
    """
    def assertCueEqual(self, expected : VttCue, actual : VttCue, compare_identifier : bool = True) -> None:
        if compare_identifier:
            self.assertEqual(expected.identifier, actual.identifier)
        self.assertAlmostEqual(expected.start, actual.start, places=3)
        self.assertAlmostEqual(expected.end, actual.end, places=3)
        self.assertEqual(expected.text, actual.text)
        self.assertEqual(expected.styles, actual.styles)
        self.assertEqual(expected.meta, actual.meta)

    def assertCuesEqual(self, expected : list[VttCue], actual : list[VttCue], compare_identifier : bool = True) -> None:
        log_input_expected_result(None, len(expected), len(actual))
        self.assertEqual(len(expected), len(actual))
        for i, (expected_cue, actual_cue) in enumerate(zip(expected, actual)):
            with self.subTest(cue=i):
                self.assertCueEqual(expected_cue, actual_cue, compare_identifier)
