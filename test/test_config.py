#!/usr/bin/env python3
import os
import tempfile
import unittest

from ding2wechat.config import (
    ConfigError,
    DuplicateReceiverError,
    Target,
    load,
    load_file,
    loads,
)

VALID_YAML = """
receivers:
  - name: ops
    targets:
      - url: http://wechat.local/a
        mentioned_list: [alice, bob]
        mentioned_mobile_list: ["13800000000"]
      - url: http://wechat.local/b
  - name: dev
    targets: []
"""


class TestConfigLoad(unittest.TestCase):
    def test_valid_config(self):
        config = loads(VALID_YAML)
        self.assertEqual(config.receiver_names, ('ops', 'dev'))

        ops = config.get_receiver('ops')
        self.assertEqual(len(ops.targets), 2)
        self.assertEqual(ops.targets[0], Target(
            url='http://wechat.local/a',
            mentioned_list=('alice', 'bob'),
            mentioned_mobile_list=('13800000000',),
        ))
        # campos ausentes viram listas vazias
        self.assertEqual(ops.targets[1].mentioned_list, ())
        self.assertEqual(ops.targets[1].mentioned_mobile_list, ())
        self.assertEqual(config.get_receiver('dev').targets, ())

    def test_duplicate_receiver_rejected(self):
        data = {'receivers': [
            {'name': 'r1', 'targets': []},
            {'name': 'r2', 'targets': []},
            {'name': 'r1', 'targets': []},
            {'name': 'r2', 'targets': []},
        ]}
        with self.assertRaises(DuplicateReceiverError) as ctx:
            load(data)
        # primeiro nome repetido na ordem de definição
        self.assertEqual(ctx.exception.name, 'r1')
        self.assertIsInstance(ctx.exception, ConfigError)

    def test_unique_receivers_accepted(self):
        config = load({'receivers': [{'name': 'r1'}, {'name': 'r2'}]})
        self.assertIsNotNone(config.get_receiver('r1'))
        self.assertIsNotNone(config.get_receiver('r2'))
        self.assertIsNone(config.get_receiver('r3'))
        self.assertIsNone(config.get_receiver(None))

    def test_unknown_keys_rejected(self):
        cases = [
            {'receivers': [], 'extra': 1},
            {'receivers': [{'name': 'r1', 'url': 'http://x'}]},
            {'receivers': [{'name': 'r1', 'targets': [{'url': 'http://x', 'mentions': ['a']}]}]},
        ]
        for data in cases:
            with self.subTest(data=data):
                with self.assertRaises(ConfigError):
                    load(data)

    def test_wrong_types_rejected(self):
        cases = [
            {'receivers': {'name': 'r1'}},
            {'receivers': [{'name': 'r1', 'targets': 'http://x'}]},
            {'receivers': [{'name': 'r1', 'targets': [{'url': ['http://x']}]}]},
            {'receivers': [{'name': 'r1', 'targets': [{'url': 'http://x', 'mentioned_list': [{'alice': 1}]}]}]},
            ['receivers'],
        ]
        for data in cases:
            with self.subTest(data=data):
                with self.assertRaises(ConfigError):
                    load(data)

    def test_unquoted_numbers_become_strings(self):
        content = (
            "receivers:\n"
            "  - name: 123\n"
            "    targets:\n"
            "      - url: http://wechat.local/a\n"
            "        mentioned_mobile_list:\n"
            "          - 13800000000\n"
        )
        config = loads(content)
        receiver = config.get_receiver('123')
        self.assertIsNotNone(receiver)
        self.assertEqual(receiver.targets[0].mentioned_mobile_list, ('13800000000',))

    def test_null_values_treated_as_missing(self):
        config = loads("receivers:\n  - name: r1\n    targets:\n      - url: http://x\n        mentioned_list:\n")
        self.assertEqual(config.get_receiver('r1').targets[0].mentioned_list, ())

    def test_no_url_validation(self):
        config = load({'receivers': [{'name': 'r1', 'targets': [{'url': 'not a url'}]}]})
        self.assertEqual(config.get_receiver('r1').targets[0].url, 'not a url')

    def test_empty_document(self):
        self.assertEqual(loads('').receivers, ())

    def test_duplicate_yaml_key_rejected(self):
        content = "receivers:\n  - name: a\n    name: b\n"
        with self.assertRaises(ConfigError):
            loads(content)

    def test_invalid_yaml(self):
        with self.assertRaises(ConfigError):
            loads("receivers: [\n")

    def test_load_file(self):
        with tempfile.NamedTemporaryFile(mode='w', suffix='.yml', delete=False) as f:
            f.write(VALID_YAML)
            path = f.name
        try:
            config = load_file(path)
            self.assertEqual(config.receiver_names, ('ops', 'dev'))
        finally:
            os.unlink(path)

    def test_load_missing_file(self):
        with self.assertRaises(ConfigError):
            load_file('/nonexistent/ding2wechat.yml')


if __name__ == '__main__':
    unittest.main()
