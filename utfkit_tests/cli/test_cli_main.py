import unittest
from contextlib import redirect_stderr, redirect_stdout
from io import StringIO

from structlog.testing import capture_logs

from utfkit_cli import main
from utfkit_cli.util import ExitCode, LoggingOutput, process_logging_options, process_logging_output


class CliMainTest(unittest.TestCase):
    def test_help(self):
        cli = main.CliManager()

        f = StringIO()
        with capture_logs():
            with redirect_stdout(f):
                exit_code = cli.execute_from_command_line(['help'])
        self.assertEqual(exit_code, ExitCode.OK)

        output = f.getvalue()
        for cmd in ('transcode', 'validate', 'encodings'):
            self.assertIn(cmd, output)
        self.assertIn('[convert]', output)

    def test_no_command_prints_help(self):
        cli = main.CliManager()

        f = StringIO()
        with redirect_stdout(f):
            exit_code = cli.execute_from_command_line([])
        self.assertEqual(exit_code, ExitCode.OK)
        self.assertGreaterEqual(len(f.getvalue().strip().splitlines()), 3)

    def test_unknown_command(self):
        cli = main.CliManager()

        f = StringIO()
        with redirect_stderr(f):
            exit_code = cli.execute_from_command_line(['transmogrify'])
        self.assertEqual(exit_code, ExitCode.INVALID_OPTION)
        self.assertIn('Unknown command: "transmogrify"', f.getvalue())


class LoggingOptionsTest(unittest.TestCase):
    def test_logging_output(self):
        argv = ['-f', 'utf8', '--json-logs', '--repair']
        self.assertEqual(process_logging_output(argv), LoggingOutput.JSON)
        self.assertEqual(argv, ['-f', 'utf8', '--repair'])

        argv = ['--disable-logs']
        self.assertEqual(process_logging_output(argv), LoggingOutput.NULL)
        self.assertEqual(argv, [])

        self.assertEqual(process_logging_output([]), LoggingOutput.PRETTY)

    def test_logging_options(self):
        argv = ['--debug', '-t', 'utf16']
        self.assertTrue(process_logging_options(argv).debug)
        self.assertEqual(argv, ['-t', 'utf16'])
        self.assertFalse(process_logging_options([]).debug)
