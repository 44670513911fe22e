import unittest
from collections.abc import Container, Sequence
from typing import Any

from PySubfix.Helpers.Tests import log_input_expected_result, log_test_name
from PySubfix.Options import Options
from PySubfix.SubtitleBlock import SubtitleBlock

class LoggedTestCase(unittest.TestCase):
    """
    Test case that logs the name of each test and the input, expected and actual value of each assertion
    """
    @classmethod
    def setUpClass(cls) -> None:
        super().setUpClass()
        log_test_name(f"{cls.__name__}")

    def setUp(self) -> None:
        super().setUp()
        log_test_name(self._testMethodName)

    def assertLoggedEqual(self, description : str, expected : Any, actual : Any, input_value : Any = None) -> None:
        log_input_expected_result(input_value if input_value is not None else description, expected, actual)
        self.assertEqual(expected, actual, description)

    def assertLoggedSequenceEqual(self, description : str, expected : Sequence, actual : Sequence, input_value : Any = None) -> None:
        log_input_expected_result(input_value if input_value is not None else description, expected, actual)
        self.assertSequenceEqual(expected, actual, description)

    def assertLoggedTrue(self, description : str, actual : Any, input_value : Any = None) -> None:
        log_input_expected_result(input_value if input_value is not None else description, True, actual)
        self.assertTrue(actual, description)

    def assertLoggedFalse(self, description : str, actual : Any, input_value : Any = None) -> None:
        log_input_expected_result(input_value if input_value is not None else description, False, actual)
        self.assertFalse(actual, description)

    def assertLoggedIs(self, description : str, expected : Any, actual : Any) -> None:
        log_input_expected_result(description, expected, actual)
        self.assertIs(expected, actual, description)

    def assertLoggedIsInstance(self, description : str, obj : Any, cls : type) -> None:
        log_input_expected_result(description, cls.__name__, type(obj).__name__)
        self.assertIsInstance(obj, cls, description)

    def assertLoggedIsNone(self, description : str, actual : Any) -> None:
        log_input_expected_result(description, None, actual)
        self.assertIsNone(actual, description)

    def assertLoggedIn(self, description : str, member : Any, container : Container) -> None:
        log_input_expected_result(description, member, container)
        self.assertIn(member, container, description)


def BuildBlocks(timings : list[tuple[int, int]], texts : list[str]|None = None) -> list[SubtitleBlock]:
    """
    Create blocks with the given (start, end) timings in milliseconds, numbered from 1
    """
    texts = texts or [ f"Line {i + 1}" for i in range(len(timings)) ]
    return [ SubtitleBlock.Construct(i, start, end, text, source_index=i + 1) for i, ((start, end), text) in enumerate(zip(timings, texts)) ]

def CreateOptions(**settings) -> Options:
    """
    Options with explicit values, so tests are not affected by environment variables
    """
    base = { 'clean': False, 'ignore_existing': False, 'omit_default': True, 'keep_white': False }
    base.update(settings)
    return Options(base)
