"""
Unit tests for larkdown configuration management.
"""

import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from larkdown.config import ConfigManager
from larkdown.models import RenderOptions


class TestConfigManager(unittest.TestCase):
    """Test configuration management functionality."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()
        self.config_path = Path(self.temp_dir) / "test_config.yaml"

    def tearDown(self):
        """Clean up test fixtures."""
        if self.config_path.exists():
            self.config_path.unlink()
        os.rmdir(self.temp_dir)

    def test_config_creation_with_defaults(self):
        """Test config manager falls back to defaults when file missing."""
        config = ConfigManager(str(self.config_path))

        self.assertEqual(config.lark_base_url, "https://open.feishu.cn")
        self.assertEqual(config.lark_timeout, 30.0)
        self.assertEqual(config.page_size, 500)
        self.assertEqual(config.output_filename, "dist/README.md")

    def test_config_loading_from_file(self):
        """Test loading configuration from YAML file."""
        test_config = """
lark:
  base_url: "https://open.larksuite.com"
  timeout: 10

render:
  use_admonition_style: true
  media_dir: "dist/static"

paths:
  output_file: "out/doc.md"
"""
        with open(self.config_path, 'w') as f:
            f.write(test_config)

        config = ConfigManager(str(self.config_path))

        self.assertEqual(config.lark_base_url, "https://open.larksuite.com")
        self.assertEqual(config.lark_timeout, 10.0)
        self.assertEqual(config.output_filename, "out/doc.md")
        # Keys missing from the file keep their defaults
        self.assertEqual(config.page_size, 500)
        self.assertEqual(config.get("render.media_url_prefix"), "")

    def test_dot_notation_access(self):
        """Test accessing config values with dot notation."""
        config = ConfigManager(str(self.config_path))

        self.assertEqual(config.get("lark.page_size"), 500)
        self.assertFalse(config.get("render.use_admonition_style"))
        self.assertEqual(config.get("nonexistent.key", "default"), "default")
        self.assertIn("timeout", config.get_section("lark"))

    def test_invalid_yaml_falls_back_to_defaults(self):
        """Test a broken config file does not prevent startup."""
        with open(self.config_path, 'w') as f:
            f.write("lark: [unclosed")

        config = ConfigManager(str(self.config_path))
        self.assertEqual(config.lark_base_url, "https://open.feishu.cn")

    def test_non_mapping_falls_back_to_defaults(self):
        """Test a config file that is not a mapping is rejected."""
        with open(self.config_path, 'w') as f:
            f.write("- just\n- a list\n")

        config = ConfigManager(str(self.config_path))
        self.assertEqual(config.page_size, 500)

    def test_config_reload(self):
        """Test configuration reloading."""
        with open(self.config_path, 'w') as f:
            f.write("lark:\n  page_size: 100")

        config = ConfigManager(str(self.config_path))
        self.assertEqual(config.page_size, 100)

        with open(self.config_path, 'w') as f:
            f.write("lark:\n  page_size: 200")

        config.reload()
        self.assertEqual(config.page_size, 200)

    def test_credentials_from_environment(self):
        """Test environment variables take precedence for credentials."""
        with open(self.config_path, 'w') as f:
            f.write("lark:\n  app_id: 'file-id'\n  app_secret: 'file-secret'")

        config = ConfigManager(str(self.config_path))
        with patch.dict(os.environ, {"LARK_APP_ID": "env-id", "LARK_APP_SECRET": "env-secret"}):
            self.assertEqual(config.lark_app_id, "env-id")
            self.assertEqual(config.lark_app_secret, "env-secret")

        with patch.dict(os.environ, {}, clear=True):
            self.assertEqual(config.lark_app_id, "file-id")
            self.assertEqual(config.lark_app_secret, "file-secret")

    def test_render_options(self):
        """Test building render options from the render section."""
        with open(self.config_path, 'w') as f:
            f.write("render:\n  use_admonition_style: true\n  max_depth: 32\n  unknown_key: 1\n")

        options = ConfigManager(str(self.config_path)).render_options()

        self.assertIsInstance(options, RenderOptions)
        self.assertTrue(options.use_admonition_style)
        self.assertTrue(options.resolve_media_as_remote_url)
        self.assertEqual(options.max_depth, 32)
        self.assertFalse(options.downloads_media)


if __name__ == "__main__":
    unittest.main()
