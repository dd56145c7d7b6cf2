"""
Configuration, Logging and Exception Tests

Run with: python -m pytest studiofs/tests/test_config_logging.py -v

Author: YSNRFD
Version: 1.0.0
"""

import json
import logging
import os
import tempfile
import unittest

from studiofs.core.config_loader import Config, ConfigLoader, get_config
from studiofs.exceptions import (
    ConfigurationError,
    DirectoryLostError,
    FileSystemException,
    HostIOError,
    NodeNotFoundError,
    TooLargeError,
    WorkspaceError,
)
from studiofs.logger import LogBufferHandler, Logger, LogLevel, get_logger
from studiofs.main import Options, parse_args


class TestExceptions(unittest.TestCase):
    """Test the exception hierarchy."""

    def test_workspace_error(self):
        exc = WorkspaceError("Test error", path='root_a', error_code=1234)

        self.assertEqual(exc.message, "Test error")
        self.assertEqual(exc.error_code, 1234)
        self.assertEqual(exc.context['path'], 'root_a')
        self.assertIn("1234", str(exc))

    def test_filesystem_codes(self):
        self.assertEqual(NodeNotFoundError('root_x').error_code, 4001)
        self.assertEqual(DirectoryLostError('root_x').message, "Current directory lost.")
        self.assertIsInstance(NodeNotFoundError('root_x'), FileSystemException)

    def test_host_io_error(self):
        exc = HostIOError('notes.txt', operation='write', reason='denied')

        self.assertEqual(exc.error_code, 4010)
        self.assertEqual(exc.operation, 'write')
        self.assertEqual(exc.reason, 'denied')
        self.assertIn('denied', exc.message)

    def test_too_large(self):
        exc = TooLargeError('big.log', size=10, limit=5)
        self.assertEqual((exc.size, exc.limit), (10, 5))
        self.assertEqual(exc.context['limit'], 5)


class TestLogger(unittest.TestCase):
    """Test the logging system."""

    def test_logger_singleton(self):
        """Same subsystem, same instance."""
        self.assertIs(Logger('tree'), Logger('tree'))
        self.assertIs(get_logger('shell'), Logger('shell'))
        self.assertIsNot(Logger('tree'), Logger('shell'))

    def test_log_levels(self):
        self.assertTrue(LogLevel.ERROR > LogLevel.INFO)
        self.assertEqual(LogLevel.from_name('debug'), LogLevel.DEBUG)
        self.assertEqual(LogLevel.from_name('nonsense'), LogLevel.INFO)

    def test_context_reaches_records(self):
        log = get_logger('host')
        with self.assertLogs('studiofs.host', level='WARNING') as captured:
            log.warning("Skipping entry", context={'name': 'x'})

        self.assertEqual(captured.records[0].context, {'name': 'x'})
        self.assertEqual(captured.records[0].subsystem, 'host')

    def test_buffer_filters(self):
        """The buffer keeps recent records and filters by level and subsystem."""
        buffer = LogBufferHandler(max_entries=3)
        target = logging.getLogger('studiofs.buffer_test')
        target.addHandler(buffer)
        target.setLevel(logging.DEBUG)
        self.addCleanup(target.removeHandler, buffer)

        log = get_logger('buffer_test')
        log.debug("one")
        log.info("two")
        log.warning("three", context={'id': 'root_a'})
        log.error("four")

        self.assertEqual([e['message'] for e in buffer.get_logs()], ['two', 'three', 'four'])
        self.assertEqual([e['message'] for e in buffer.get_logs(level='WARNING')], ['three', 'four'])
        self.assertEqual(buffer.get_logs(subsystem='other'), [])
        self.assertEqual(buffer.get_logs(limit=1)[0]['message'], 'four')
        self.assertEqual(buffer.get_logs(level='WARNING')[0]['context'], {'id': 'root_a'})

        buffer.clear()
        self.assertEqual(buffer.get_logs(), [])


class TestConfig(unittest.TestCase):
    """Test the configuration system."""

    def tearDown(self):
        ConfigLoader().reset()

    def test_default_config(self):
        config = Config()

        self.assertEqual(config.content.max_text_bytes, 5 * 1024 * 1024)
        self.assertEqual(config.content.preview_chars, 500)
        self.assertEqual(config.shell.npm_install_message, 'added 142 packages in 2s')
        self.assertEqual(config.workspace.opened_project_name, 'Opened Project')

    def test_load(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, 'config.json')
            with open(path, 'w', encoding='utf-8') as f:
                json.dump({'content': {'preview_chars': 80}, 'logging': {'level': 'DEBUG'}}, f)

            ConfigLoader().load(path)

        self.assertTrue(ConfigLoader().loaded)
        self.assertEqual(get_config().content.preview_chars, 80)
        self.assertEqual(get_config().content.max_text_bytes, 5 * 1024 * 1024)
        self.assertEqual(ConfigLoader().get('logging.level'), 'DEBUG')

    def test_load_errors(self):
        loader = ConfigLoader()

        with self.assertRaises(ConfigurationError):
            loader.load('/nonexistent/config.json')

        with tempfile.TemporaryDirectory() as tmp:
            bad_json = os.path.join(tmp, 'bad.json')
            with open(bad_json, 'w', encoding='utf-8') as f:
                f.write('{not json')
            with self.assertRaises(ConfigurationError):
                loader.load(bad_json)

            unknown = os.path.join(tmp, 'unknown.json')
            with open(unknown, 'w', encoding='utf-8') as f:
                json.dump({'shell': {'colour': 'blue'}}, f)
            with self.assertRaises(ConfigurationError) as ctx:
                loader.load(unknown)
            self.assertEqual(ctx.exception.key, 'shell')

        self.assertFalse(loader.loaded)

    def test_set_and_get(self):
        loader = ConfigLoader()
        loader.set('content.preview_chars', 10)

        self.assertEqual(loader.get('content.preview_chars'), 10)
        self.assertEqual(loader.get('content.missing', 'fallback'), 'fallback')
        with self.assertRaises(ConfigurationError):
            loader.set('content.missing', 1)

    def test_to_dict(self):
        data = ConfigLoader().to_dict()
        self.assertEqual(data['shell']['prompt_suffix'], '$ ')
        self.assertEqual(set(data), {'content', 'shell', 'logging', 'workspace'})


class TestArguments(unittest.TestCase):
    """Test command-line parsing."""

    def test_parse_args(self):
        self.assertEqual(parse_args([]), Options())
        self.assertEqual(
            parse_args(['proj', '--virtual', '--config', 'cfg.json']),
            Options(directory='proj', virtual=True, config_path='cfg.json')
        )

    def test_parse_args_errors(self):
        for argv in (['--config'], ['--bogus'], ['a', 'b']):
            with self.assertRaises(ValueError):
                parse_args(argv)


if __name__ == '__main__':
    unittest.main()
