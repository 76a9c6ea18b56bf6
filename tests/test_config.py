"""
Unit tests for gitmeta.config module
"""
import unittest
import tempfile
import os
import shutil
import json
from pathlib import Path
from unittest.mock import patch

from gitmeta.config import (
    load_config,
    save_config,
    get_config_path,
    get_default_config,
    merge_configs,
    apply_env_overrides,
)


class TestConfigManagement(unittest.TestCase):
    """Test configuration management functionality"""

    def setUp(self):
        """Set up test environment"""
        self.temp_dir = tempfile.mkdtemp()
        env = {k: v for k, v in os.environ.items() if not k.startswith('GITMETA_')}
        env['HOME'] = self.temp_dir
        self.env_patcher = patch.dict(os.environ, env, clear=True)
        self.env_patcher.start()
        self.config_dir = Path(self.temp_dir) / '.gitmeta'

    def tearDown(self):
        """Clean up test environment"""
        self.env_patcher.stop()
        shutil.rmtree(self.temp_dir)

    def test_get_default_config(self):
        """Test default configuration structure"""
        config = get_default_config()

        self.assertIn('git', config)
        self.assertIn('logging', config)
        self.assertIn('output', config)
        self.assertEqual(config['git']['remote'], 'origin')
        self.assertEqual(config['git']['short_hash_length'], 8)
        self.assertEqual(config['output']['format'], 'jsonl')

    def test_load_config_no_file(self):
        """Test loading config when no file exists"""
        self.assertEqual(load_config(), get_default_config())

    def test_default_config_path(self):
        """Test the save location when no file exists"""
        self.assertEqual(get_config_path(), self.config_dir / 'config.json')

    def test_load_config_json_file(self):
        """Test loading config from JSON file"""
        self.config_dir.mkdir()
        with open(self.config_dir / 'config.json', 'w') as f:
            json.dump({'git': {'remote': 'upstream'}, 'logging': {'level': 'DEBUG'}}, f)

        config = load_config()

        self.assertEqual(config['git']['remote'], 'upstream')
        self.assertEqual(config['logging']['level'], 'DEBUG')
        # Defaults survive the merge
        self.assertEqual(config['git']['timeout_seconds'], 30)

    def test_load_config_yaml_file(self):
        """Test loading config from YAML file"""
        self.config_dir.mkdir()
        (self.config_dir / 'config.yaml').write_text("git:\n  timeout_seconds: 5\n")

        config = load_config()

        self.assertEqual(config['git']['timeout_seconds'], 5)
        self.assertEqual(config['git']['binary'], 'git')

    def test_load_config_toml_file(self):
        """Test loading config from TOML file"""
        self.config_dir.mkdir()
        (self.config_dir / 'config.toml').write_text('[git]\nparallel_queries = 4\n')

        self.assertEqual(load_config()['git']['parallel_queries'], 4)

    def test_config_env_var_path(self):
        """Test GITMETA_CONFIG points at an explicit file"""
        custom = Path(self.temp_dir) / 'custom.json'
        custom.write_text(json.dumps({'git': {'binary': '/opt/git'}}))
        os.environ['GITMETA_CONFIG'] = str(custom)

        self.assertEqual(get_config_path(), custom)
        self.assertEqual(load_config()['git']['binary'], '/opt/git')

    def test_invalid_file_falls_back_to_defaults(self):
        """Test a broken config file is reported and ignored"""
        self.config_dir.mkdir()
        (self.config_dir / 'config.json').write_text('{not json')

        with self.assertLogs('gitmeta', level='ERROR'):
            config = load_config()

        self.assertEqual(config, get_default_config())

    def test_env_overrides(self):
        """Test GITMETA_SECTION_KEY environment overrides"""
        os.environ['GITMETA_GIT_TIMEOUT_SECONDS'] = '10'
        os.environ['GITMETA_GIT_REMOTE'] = 'upstream'
        os.environ['GITMETA_LOGGING_LEVEL'] = 'DEBUG'

        config = load_config()

        self.assertEqual(config['git']['timeout_seconds'], 10)
        self.assertEqual(config['git']['remote'], 'upstream')
        self.assertEqual(config['logging']['level'], 'DEBUG')

    def test_env_override_unknown_key_ignored(self):
        """Test unknown environment keys leave config untouched"""
        config = apply_env_overrides(get_default_config())
        os.environ['GITMETA_NOPE_VALUE'] = 'x'
        self.assertEqual(apply_env_overrides(get_default_config()), config)

    def test_save_config_json(self):
        """Test saving config as JSON"""
        config = get_default_config()
        config['git']['remote'] = 'fork'

        path = save_config(config)

        self.assertEqual(path, self.config_dir / 'config.json')
        with open(path) as f:
            self.assertEqual(json.load(f)['git']['remote'], 'fork')

    def test_save_config_yaml(self):
        """Test saving config as YAML"""
        path = save_config(get_default_config(), self.config_dir / 'config.yml')
        os.environ['GITMETA_CONFIG'] = str(path)
        self.assertEqual(load_config(), get_default_config())

    def test_save_config_toml(self):
        """Test saving config as TOML and loading it back"""
        config = get_default_config()
        config['git']['remote'] = 'upstream'

        path = save_config(config, self.config_dir / 'config.toml')

        self.assertEqual(path, self.config_dir / 'config.toml')
        self.assertFalse((self.config_dir / 'config.json').exists())
        self.assertEqual(get_config_path(), path)
        self.assertEqual(load_config(), config)

    def test_merge_configs(self):
        """Test recursive merging"""
        merged = merge_configs(
            {'git': {'remote': 'origin', 'binary': 'git'}, 'a': 1},
            {'git': {'remote': 'upstream'}, 'b': 2}
        )
        self.assertEqual(merged, {'git': {'remote': 'upstream', 'binary': 'git'}, 'a': 1, 'b': 2})


if __name__ == '__main__':
    unittest.main()
