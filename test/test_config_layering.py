"""Tests for configuration loading, validation and default merging."""

import os
import sys
import tempfile
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from MailSearch.config import load_config, load_config_with_defaults, parse_config_dict
from MailSearch.config.app import parse_yaml


_BASE_YAML = """
log:
  level: INFO
  to_file: false
  dir: log

servers:
  - name: mail
    program: estcmd
    index_dir: /srv/casket
    remove_prefix: /home/john/Mail/
    max_results: 300
    backend: nnml

output:
  base_dir: output
  formats: [console]
"""


class TestDefaultConfigFile(unittest.TestCase):
    def test_shipped_defaults_parse(self) -> None:
        cfg = load_config(REPO_ROOT / "config" / "default.yml")

        self.assertEqual(cfg.runtime.level, "INFO")
        self.assertEqual(len(cfg.servers), 1)
        server = cfg.servers[0]
        self.assertEqual(server.name, "mail")
        self.assertEqual(server.program, "estcmd")
        self.assertEqual(server.backend, "nnml")
        self.assertEqual(server.max_results, 300)
        self.assertEqual(server.env, {"LC_MESSAGES": "C"})
        self.assertEqual(server.index_dir, os.path.expanduser("~/Mail/casket"))
        self.assertTrue(server.remove_prefix.endswith("/Mail/"))
        self.assertFalse(server.remove_prefix.startswith("~"))
        self.assertEqual(cfg.output.formats, ("console",))


class TestConfigOverride(unittest.TestCase):
    def test_override_merges_with_defaults(self) -> None:
        override_yaml = """
log:
  level: debug

output:
  formats: [console, json]
"""
        with tempfile.TemporaryDirectory() as tmp:
            override_path = Path(tmp) / "override.yml"
            override_path.write_text(override_yaml, encoding="utf-8")

            cfg = load_config_with_defaults(override_path, _defaults_text=_BASE_YAML)

        self.assertEqual(cfg.runtime.level, "DEBUG")
        self.assertEqual(cfg.runtime.dir, "log")
        self.assertEqual(cfg.output.formats, ("console", "json"))
        self.assertEqual(cfg.output.base_dir, "output")
        self.assertEqual([s.name for s in cfg.servers], ["mail"])

    def test_servers_list_is_replaced(self) -> None:
        override_yaml = """
servers:
  - name: work
    index_dir: /srv/work-casket
    backend: nnmaildir
  - name: archive
    index_dir: /srv/archive-casket
    max_results: -1
    additional_switches: ["-ord", "@cdate NUMD"]
    env:
      LC_MESSAGES: en_US.UTF-8
      TZ: UTC
"""
        with tempfile.TemporaryDirectory() as tmp:
            override_path = Path(tmp) / "override.yml"
            override_path.write_text(override_yaml, encoding="utf-8")

            cfg = load_config_with_defaults(override_path, _defaults_text=_BASE_YAML)

        self.assertEqual([s.name for s in cfg.servers], ["work", "archive"])
        work, archive = cfg.servers
        self.assertEqual(work.backend, "nnmaildir")
        self.assertEqual(work.program, "estcmd")
        self.assertEqual(work.env, {"LC_MESSAGES": "C"})
        self.assertEqual(archive.max_results, -1)
        self.assertEqual(archive.additional_switches, ("-ord", "@cdate NUMD"))
        self.assertEqual(archive.env, {"LC_MESSAGES": "en_US.UTF-8", "TZ": "UTC"})
        self.assertIs(cfg.server("archive"), archive)

    def test_empty_override_uses_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            override_path = Path(tmp) / "override.yml"
            override_path.write_text("{}", encoding="utf-8")

            cfg = load_config_with_defaults(override_path, _defaults_text=_BASE_YAML)

        self.assertEqual(cfg.runtime.level, "INFO")
        self.assertEqual(cfg.servers[0].index_dir, "/srv/casket")


class TestConfigValidation(unittest.TestCase):
    def _parse(self, text: str):
        return parse_config_dict(parse_yaml(text))

    def test_servers_required(self) -> None:
        with self.assertRaises(ValueError):
            self._parse("log: {level: INFO}\n")

    def test_empty_servers_rejected(self) -> None:
        with self.assertRaises(ValueError):
            self._parse("servers: []\n")

    def test_server_name_required(self) -> None:
        with self.assertRaises(ValueError):
            self._parse("servers:\n  - program: estcmd\n")

    def test_duplicate_server_names(self) -> None:
        with self.assertRaises(ValueError):
            self._parse("servers:\n  - name: a\n  - name: a\n")

    def test_unknown_backend(self) -> None:
        with self.assertRaises(ValueError):
            self._parse("servers:\n  - name: a\n    backend: mbox\n")

    def test_unknown_engine(self) -> None:
        with self.assertRaises(ValueError):
            self._parse("servers:\n  - name: a\n    engine: namazu\n")

    def test_zero_max_results(self) -> None:
        with self.assertRaises(ValueError):
            self._parse("servers:\n  - name: a\n    max_results: 0\n")

    def test_max_results_must_be_int(self) -> None:
        with self.assertRaises(TypeError):
            self._parse("servers:\n  - name: a\n    max_results: lots\n")

    def test_switches_must_be_list(self) -> None:
        with self.assertRaises(TypeError):
            self._parse("servers:\n  - name: a\n    additional_switches: -sf\n")

    def test_bad_log_level(self) -> None:
        with self.assertRaises(ValueError):
            self._parse("log: {level: LOUD}\nservers:\n  - name: a\n")

    def test_unknown_output_format(self) -> None:
        with self.assertRaises(ValueError):
            self._parse("servers:\n  - name: a\noutput: {formats: [html]}\n")

    def test_optional_sections_default(self) -> None:
        cfg = self._parse("servers:\n  - name: a\n")
        self.assertEqual(cfg.runtime.level, "INFO")
        self.assertFalse(cfg.runtime.to_file)
        self.assertEqual(cfg.output.formats, ("console",))

    def test_unknown_server_lookup(self) -> None:
        cfg = self._parse("servers:\n  - name: a\n")
        with self.assertRaises(KeyError):
            cfg.server("b")

    def test_root_must_be_mapping(self) -> None:
        with self.assertRaises(ValueError):
            parse_yaml("- a\n- b\n")


if __name__ == "__main__":
    unittest.main()
