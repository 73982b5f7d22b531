"""Tests for the CLI and main modules.

This module runs the whole pipeline against temporary projects, with the remote
service replaced by httpx.MockTransport.
"""

import json
import os
import sys
import unittest
from pathlib import Path
from tempfile import TemporaryDirectory
from unittest.mock import patch

import httpx

# Add the src directory to the Python path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent / 'src'))

from ai import GenerationClient
from pipeline_errors import PathError, UsageError
from unit_test_writer.cli import cli, parse_args
from unit_test_writer.config import Settings
from unit_test_writer.main import generate_tests

ENV = {"OPENAI_API_KEY": "sk-test"}


def reply(request: httpx.Request) -> httpx.Response:
    """Answer with a test named after the source file in the prompt."""
    prompt = json.loads(request.content)["messages"][0]["content"]
    file_line = next(line for line in prompt.splitlines() if line.startswith("File: "))
    name = Path(file_line[len("File: "):]).name
    content = json.dumps({"tests": f"// tests for {name}\n", "testName": name})
    return httpx.Response(200, json={"choices": [{"message": {"content": content}}]})


def make_project(root: Path, files):
    for rel in files:
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"export default '{rel}';\n", encoding='utf-8')


class TestParseArgs(unittest.TestCase):
    """Tests for parse_args."""

    def test_project_path(self):
        args = parse_args(['/path/to/project'])
        self.assertEqual(args.project_path, '/path/to/project')
        self.assertFalse(args.verbose)

    def test_verbose(self):
        self.assertTrue(parse_args(['--verbose', 'proj']).verbose)

    def test_missing_project_path(self):
        with self.assertRaises(UsageError):
            parse_args([])


class TestCli(unittest.TestCase):
    """End-to-end tests for the cli function."""

    def setUp(self):
        self._temp_dir = TemporaryDirectory()
        self.root = Path(self._temp_dir.name)
        self.requests = []
        self.handler = reply

        dotenv_patcher = patch('unit_test_writer.config.load_dotenv')
        dotenv_patcher.start()
        self.addCleanup(dotenv_patcher.stop)

        logging_patcher = patch('unit_test_writer.cli.configure_logging')
        logging_patcher.start()
        self.addCleanup(logging_patcher.stop)

        def make_client(settings):
            def record(request):
                self.requests.append(request)
                return self.handler(request)

            transport = httpx.MockTransport(record)
            return GenerationClient(settings, http_client=httpx.Client(transport=transport))

        client_patcher = patch('unit_test_writer.main.GenerationClient', side_effect=make_client)
        client_patcher.start()
        self.addCleanup(client_patcher.stop)

    def tearDown(self):
        self._temp_dir.cleanup()

    def test_missing_argument_exits_1(self):
        with patch('sys.stderr') as stderr:
            self.assertEqual(cli([]), 1)
        written = "".join(call.args[0] for call in stderr.write.call_args_list)
        self.assertIn("Usage", written)
        self.assertEqual(self.requests, [])

    def test_only_candidate_files_are_sent(self):
        make_project(self.root, ["src/a.ts", "src/vendor/b.ts", "README.md"])

        with patch.dict(os.environ, ENV, clear=True):
            self.assertEqual(cli([str(self.root)]), 0)

        self.assertEqual(len(self.requests), 1)
        self.assertIn(str(self.root / "src" / "a.ts"), self.requests[0].content.decode())
        self.assertEqual(os.listdir(self.root / "tests"), ["a.test.ts"])

    def test_missing_credential_is_fatal(self):
        make_project(self.root, ["src/a.ts"])

        with patch.dict(os.environ, {}, clear=True):
            self.assertEqual(cli([str(self.root)]), 1)

        self.assertFalse((self.root / "tests").exists())
        self.assertEqual(self.requests, [])

    def test_failed_request_is_logged_and_run_completes(self):
        make_project(self.root, ["src/a.ts"])
        self.handler = lambda request: httpx.Response(500, text="server error")

        with patch.dict(os.environ, ENV, clear=True):
            with self.assertLogs("code_processor", level="ERROR") as logs:
                self.assertEqual(cli([str(self.root)]), 0)

        self.assertTrue(any(str(self.root / "src" / "a.ts") in line for line in logs.output))
        self.assertTrue((self.root / "tests").is_dir())
        self.assertEqual(os.listdir(self.root / "tests"), [])

    def test_bad_root_is_fatal(self):
        missing = self.root / "missing"

        with patch.dict(os.environ, ENV, clear=True):
            self.assertEqual(cli([str(missing)]), 1)

        self.assertFalse(missing.exists())
        self.assertEqual(self.requests, [])

    def test_rerun_overwrites_with_same_names(self):
        make_project(self.root, ["src/a.ts", "src/b.jsx", "lib/c.js"])

        with patch.dict(os.environ, ENV, clear=True):
            self.assertEqual(cli([str(self.root)]), 0)
            first = sorted(os.listdir(self.root / "tests"))
            self.assertEqual(cli([str(self.root)]), 0)
            second = sorted(os.listdir(self.root / "tests"))

        self.assertEqual(first, ["a.test.ts", "b.test.js", "c.test.js"])
        self.assertEqual(first, second)
        # The second run must not pick up the generated tests
        self.assertEqual(len(self.requests), 6)


class TestGenerateTests(unittest.TestCase):
    """Tests for generate_tests."""

    def test_colliding_names_last_write_wins(self):
        def same_name(request):
            prompt = json.loads(request.content)["messages"][0]["content"]
            tests = "first" if "one.ts" in prompt else "second"
            content = json.dumps({"tests": tests, "testName": "shared"})
            return httpx.Response(200, json={"choices": [{"message": {"content": content}}]})

        settings = Settings(api_key="sk-test")
        client = GenerationClient(settings, http_client=httpx.Client(transport=httpx.MockTransport(same_name)))

        with TemporaryDirectory() as temp_dir:
            root = Path(temp_dir)
            make_project(root, ["one.ts", "two.ts"])

            report = generate_tests(temp_dir, settings, client=client)

            self.assertEqual(len(report.written), 2)
            self.assertEqual(os.listdir(root / "tests"), ["shared.test.ts"])
            self.assertEqual((root / "tests" / "shared.test.ts").read_text(encoding='utf-8'), "second")

    def test_path_error(self):
        with TemporaryDirectory() as temp_dir:
            with self.assertRaises(PathError):
                generate_tests(os.path.join(temp_dir, "nope"), Settings(api_key="sk-test"))


if __name__ == '__main__':
    unittest.main()
