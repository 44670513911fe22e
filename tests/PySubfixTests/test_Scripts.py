import io
import os
import tempfile
import unittest
from unittest.mock import patch

from PySubfix.Helpers.TestCases import LoggedTestCase
from scripts import batch_fix, srt_fixer

OVERLAPPING_SRT = (
    "1\n00:00:00,000 --> 00:00:04,000\nHi\n\n"
    "2\n00:00:02,000 --> 00:00:06,000\nBye\n\n"
    "3\n00:00:07,000 --> 00:00:08,000\n\n"
)

ASS_CONTENT = (
    "[Script Info]\nScriptType: v4.00+\n\n"
    "[Events]\n"
    "Format: Layer, Start, End, Style, Name, MarginL, MarginR, MarginV, Effect, Text\n"
    "Dialogue: 0,0:00:01.00,0:00:02.00,Default,,0,0,0,,{\\an8}Sign\n"
)

EXPECTED_OUTPUT = (
    "1\n00:00:00,000 --> 00:00:04,000\nHi\n\n"
    "2\n00:00:02,000 --> 00:00:06,000\n{\\an8}Bye"
)

def WriteFile(path : str, content : str) -> None:
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, 'w', encoding='utf-8', newline='') as f:
        f.write(content)

def ReadFile(path : str) -> str:
    with open(path, 'r', encoding='utf-8', newline='') as f:
        return f.read()

class TestSrtFixerScript(LoggedTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.temp_dir = tempfile.TemporaryDirectory()
        self.input_path = os.path.join(self.temp_dir.name, "movie.srt")
        WriteFile(self.input_path, OVERLAPPING_SRT)

    def tearDown(self) -> None:
        self.temp_dir.cleanup()
        super().tearDown()

    def test_PositionalArguments(self):
        output_path = os.path.join(self.temp_dir.name, "movie.fixed.srt")

        with patch('sys.stderr', new_callable=io.StringIO) as stderr:
            exit_code = srt_fixer.main([self.input_path, output_path, "--omit-default"])

        self.assertLoggedEqual("exit code", 0, exit_code)
        self.assertLoggedEqual("written file", EXPECTED_OUTPUT + "\n", ReadFile(output_path))
        self.assertLoggedIn("skipped report", "Skipped 1 empty or malformed block(s).", stderr.getvalue())

    def test_NamedArgumentsWriteToStdout(self):
        with patch('sys.stdout', new_callable=io.StringIO) as stdout, patch('sys.stderr', new_callable=io.StringIO):
            exit_code = srt_fixer.main(["--in", self.input_path, "--keep-default"])

        self.assertLoggedEqual("exit code", 0, exit_code)
        self.assertLoggedTrue("default tag written", stdout.getvalue().startswith("1\n00:00:00,000 --> 00:00:04,000\n{\\an2}Hi"))

    def test_NoValidBlocks(self):
        empty_path = os.path.join(self.temp_dir.name, "empty.srt")
        WriteFile(empty_path, "nothing to see here\n")

        with patch('sys.stderr', new_callable=io.StringIO) as stderr:
            exit_code = srt_fixer.main([empty_path])

        self.assertLoggedEqual("exit code", 1, exit_code)
        self.assertLoggedIn("error message", "No valid subtitle blocks found.", stderr.getvalue())

    def test_MissingFile(self):
        with patch('sys.stderr', new_callable=io.StringIO):
            exit_code = srt_fixer.main([os.path.join(self.temp_dir.name, "missing.srt")])

        self.assertLoggedEqual("exit code", 1, exit_code)

    def test_InvalidEnvironmentSetting(self):
        with patch.dict(os.environ, {'SUBFIX_CLEAN': 'sometimes'}), patch('sys.stderr', new_callable=io.StringIO) as stderr:
            exit_code = srt_fixer.main([self.input_path])

        self.assertLoggedEqual("exit code", 1, exit_code)
        self.assertLoggedIn("one line message", "Cannot convert setting 'SUBFIX_CLEAN'", stderr.getvalue())
        self.assertLoggedFalse("no traceback", "Traceback" in stderr.getvalue())

    def test_MissingInput(self):
        with patch('sys.stderr', new_callable=io.StringIO):
            with self.assertRaises(SystemExit) as e:
                srt_fixer.main([])

        self.assertLoggedEqual("exit status", 1, e.exception.code)

class TestBatchFixScript(LoggedTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.temp_dir = tempfile.TemporaryDirectory()
        self.source = os.path.join(self.temp_dir.name, "source")
        self.destination = os.path.join(self.temp_dir.name, "fixed")

        WriteFile(os.path.join(self.source, "one.srt"), OVERLAPPING_SRT)
        WriteFile(os.path.join(self.source, "season", "two.srt"), OVERLAPPING_SRT)
        WriteFile(os.path.join(self.source, "broken.srt"), "not a subtitle\n")
        WriteFile(os.path.join(self.source, "notes.txt"), "ignored\n")

    def tearDown(self) -> None:
        self.temp_dir.cleanup()
        super().tearDown()

    def test_BatchProcessor(self):
        args = batch_fix.parse_args([self.source, self.destination, "--workers", "2"])
        config = batch_fix.build_config(args)

        stats = batch_fix.BatchProcessor(config).run()

        self.assertLoggedEqual("discovered", 3, stats.discovered_files)
        self.assertLoggedEqual("fixed", 2, stats.fixed_files)
        self.assertLoggedEqual("failed", 1, stats.failed_files)
        self.assertLoggedEqual("skipped blocks", 2, stats.skipped_blocks)
        self.assertLoggedSequenceEqual("errors", ["broken.srt: No valid subtitle blocks found."], stats.errors)

        self.assertLoggedEqual("top level output", EXPECTED_OUTPUT + "\n", ReadFile(os.path.join(self.destination, "one.fixed.srt")))
        self.assertLoggedTrue("nested output", os.path.exists(os.path.join(self.destination, "season", "two.fixed.srt")))
        self.assertLoggedFalse("no output for failed file", os.path.exists(os.path.join(self.destination, "broken.fixed.srt")))

    def test_BuildConfig(self):
        args = batch_fix.parse_args([self.source, self.destination, "--suffix", "pos", "--clean", "--keep-default"])
        config = batch_fix.build_config(args)

        self.assertLoggedEqual("suffix", "pos", config.suffix)
        self.assertLoggedEqual("workers", 1, config.workers)
        self.assertLoggedTrue("clean", config.options.clean)
        self.assertLoggedFalse("omit_default", config.options.omit_default)

    def test_MainReportsFailures(self):
        with patch.object(batch_fix, 'configure_logging'):
            exit_code = batch_fix.main([self.source, self.destination])

        self.assertLoggedEqual("exit code", 1, exit_code)

        os.remove(os.path.join(self.source, "broken.srt"))
        with patch.object(batch_fix, 'configure_logging'):
            exit_code = batch_fix.main([self.source, self.destination])

        self.assertLoggedEqual("exit code without failures", 0, exit_code)

    def test_SharedDestination(self):
        WriteFile(os.path.join(self.source, "one.ass"), ASS_CONTENT)

        args = batch_fix.parse_args([self.source, self.destination, "--workers", "4"])
        stats = batch_fix.BatchProcessor(batch_fix.build_config(args)).run()

        self.assertLoggedEqual("discovered", 4, stats.discovered_files)
        self.assertLoggedEqual("fixed", 2, stats.fixed_files)
        self.assertLoggedEqual("failed", 2, stats.failed_files)
        self.assertLoggedIn("shared output reported", "one.srt: Output one.fixed.srt is already written by one.ass", stats.errors)
        written = ReadFile(os.path.join(self.destination, "one.fixed.srt"))
        self.assertLoggedIn("first claimant written", "Sign", written)
        self.assertLoggedFalse("second claimant not written", "Bye" in written)

    def test_MainInvalidEnvironmentSetting(self):
        with patch.dict(os.environ, {'SUBFIX_KEEP_WHITE': 'maybe'}), patch('sys.stderr', new_callable=io.StringIO) as stderr:
            with patch.object(batch_fix, 'configure_logging'):
                exit_code = batch_fix.main([self.source, self.destination])

        self.assertLoggedEqual("exit code", 1, exit_code)
        self.assertLoggedIn("one line message", "Invalid settings: Cannot convert setting 'SUBFIX_KEEP_WHITE'", stderr.getvalue())
        self.assertLoggedFalse("nothing written", os.path.exists(os.path.join(self.destination, "one.fixed.srt")))

    def test_MissingSourceDirectory(self):
        with patch.object(batch_fix, 'configure_logging'):
            exit_code = batch_fix.main([os.path.join(self.temp_dir.name, "missing"), self.destination])

        self.assertLoggedEqual("exit code", 1, exit_code)


if __name__ == '__main__':
    unittest.main()
