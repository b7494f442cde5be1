"""
Tests for the configuration module
"""
import os
import tempfile
import unittest

import yaml

from silence_splitter.config import Config, find_default_config
from silence_splitter.errors import ConfigError


class TestConfig(unittest.TestCase):
    """Tests for the Config class"""

    def _write_yaml(self, content):
        with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
            if isinstance(content, str):
                f.write(content)
            else:
                yaml.dump(content, f)
            path = f.name
        self.addCleanup(os.unlink, path)
        return path

    def test_default_configuration(self):
        config = Config()

        self.assertIsNone(config.get('input'))
        self.assertIsNone(config.get('output_dir'))
        self.assertIsNone(config.get('min_silence'))
        self.assertEqual(config.get('suggested_noise_db'), -40.0)
        self.assertTrue(config.get('continue_numbering'))
        self.assertEqual(config.get('ffmpeg.split_mode'), 'copy')

    def test_get_with_default_value(self):
        config = Config()
        self.assertEqual(config.get('non_existent_key', 'default_value'), 'default_value')
        self.assertIsNone(config.get('non_existent_key'))
        self.assertEqual(config.get('ffmpeg.missing', 5), 5)
        self.assertEqual(config.get('input.nested', 'x'), 'x')

    def test_get_all_is_a_copy(self):
        config = Config()
        all_config = config.get_all()
        all_config['ffmpeg']['split_mode'] = 'reencode'
        self.assertEqual(config.get('ffmpeg.split_mode'), 'copy')

    def test_load_from_valid_yaml_file(self):
        path = self._write_yaml({
            'input': '/music/talk.mp3',
            'output_dir': './splits',
            'min_silence': 1.5,
            'noise_db': -35,
        })
        config = Config(config_file=path)

        self.assertEqual(config.get('input'), '/music/talk.mp3')
        self.assertEqual(config.get('output_dir'), './splits')
        self.assertEqual(config.get('min_silence'), 1.5)
        self.assertEqual(config.get('noise_db'), -35)

    def test_load_from_nonexistent_file(self):
        config = Config(config_file='/path/to/nonexistent/file.yaml')
        self.assertIsNone(config.get('input'))

    def test_load_from_invalid_yaml_file(self):
        path = self._write_yaml("invalid: yaml: content: [")
        with self.assertRaises(ConfigError) as context:
            Config(config_file=path)
        self.assertIn("Error loading configuration file", str(context.exception))

    def test_load_non_mapping_yaml_file(self):
        path = self._write_yaml("- just\n- a list\n")
        with self.assertRaises(ConfigError):
            Config(config_file=path)

    def test_load_from_empty_yaml_file(self):
        path = self._write_yaml("")
        config = Config(config_file=path)
        self.assertEqual(config.get('ffmpeg.split_mode'), 'copy')

    def test_update_from_args(self):
        config = Config()
        config.update_from_args({
            'input': 'talk.mp3',
            'min_silence': '2',
            'ffmpeg.split_mode': 'reencode',
        })
        self.assertEqual(config.get('input'), 'talk.mp3')
        self.assertEqual(config.get('min_silence'), '2')
        self.assertEqual(config.get('ffmpeg.split_mode'), 'reencode')
        # sibling keys of the nested section survive
        self.assertIn('timeout', config.get('ffmpeg'))

    def test_find_default_config(self):
        with tempfile.TemporaryDirectory() as d:
            self.assertIsNone(find_default_config(d))
            path = os.path.join(d, 'config.yaml')
            with open(path, 'w') as f:
                f.write('noise_db: -30\n')
            self.assertEqual(find_default_config(d), path)


if __name__ == "__main__":
    unittest.main()
