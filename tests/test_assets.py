# SPDX-License-Identifier: BUSL-1.1
"""Tests for embedded asset resolution and digest-based refresh."""

import hashlib
import os
import stat
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from dv.assets import (
    DOCKERFILE, DOCKERFILE_THEME, AssetDescriptor,
    embedded_dockerfile_sha256, embedded_dockerfile_theme_sha256,
    materialize_if_stale, resolve_asset,
    resolve_dockerfile, resolve_dockerfile_theme,
)
from dv.digest import digest, digest_matches
from dv.errors import ConfigurationError, FilesystemError


def _clean_env():
    env = dict(os.environ)
    env.pop("DV_DOCKERFILE", None)
    env.pop("DV_DOCKERFILE_THEME", None)
    return mock.patch.dict(os.environ, env, clear=True)


class TestDigest(unittest.TestCase):
    def test_digest_is_hex_sha256(self):
        self.assertEqual(digest(b"hello"), hashlib.sha256(b"hello").hexdigest())
        self.assertEqual(len(digest(b"")), 64)

    def test_digest_matches_ignores_whitespace(self):
        self.assertTrue(digest_matches(b"  abc123\n", "abc123"))
        self.assertTrue(digest_matches("abc123\r\n", "abc123"))
        self.assertFalse(digest_matches(b"abc124\n", "abc123"))
        self.assertFalse(digest_matches(b"", "abc123"))

    def test_embedded_digest_matches_content(self):
        self.assertEqual(embedded_dockerfile_sha256(), digest(DOCKERFILE.content))
        self.assertEqual(embedded_dockerfile_theme_sha256(), digest(DOCKERFILE_THEME.content))
        self.assertNotEqual(DOCKERFILE.sha256, DOCKERFILE_THEME.sha256)


class TestMaterializeIfStale(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self._tmp.name)
        self.target = self.dir / "Dockerfile"
        self.sidecar = self.dir / "Dockerfile.sha256"

    def tearDown(self):
        self._tmp.cleanup()

    def test_missing_sidecar_writes_both(self):
        wrote = materialize_if_stale(self.target, self.sidecar, b"FROM x\n", "abc123")
        self.assertTrue(wrote)
        self.assertEqual(self.target.read_bytes(), b"FROM x\n")
        self.assertEqual(self.sidecar.read_text(), "abc123\n")

    def test_files_are_world_readable_not_executable(self):
        materialize_if_stale(self.target, self.sidecar, b"FROM x\n", "abc123")
        for path in (self.target, self.sidecar):
            self.assertEqual(stat.S_IMODE(path.stat().st_mode), 0o644)

    def test_matching_sidecar_skips_write(self):
        self.target.write_bytes(b"user edited")
        self.sidecar.write_text("  abc123 \n")
        wrote = materialize_if_stale(self.target, self.sidecar, b"FROM x\n", "abc123")
        self.assertFalse(wrote)
        self.assertEqual(self.target.read_bytes(), b"user edited")

    def test_stale_sidecar_rewrites(self):
        self.target.write_bytes(b"FROM old\n")
        self.sidecar.write_text("old-digest\n")
        wrote = materialize_if_stale(self.target, self.sidecar, b"FROM new\n", "new-digest")
        self.assertTrue(wrote)
        self.assertEqual(self.target.read_bytes(), b"FROM new\n")
        self.assertEqual(self.sidecar.read_text(), "new-digest\n")

    def test_unreadable_sidecar_is_filesystem_error(self):
        self.sidecar.mkdir()
        with self.assertRaises(FilesystemError):
            materialize_if_stale(self.target, self.sidecar, b"FROM x\n", "abc123")
        self.assertFalse(self.target.exists())


class TestResolveAsset(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self.config_dir = self.root / "cfg" / "dv"

    def tearDown(self):
        self._tmp.cleanup()

    def test_first_resolution_materializes_embedded(self):
        with _clean_env():
            res = resolve_dockerfile(self.config_dir)
        self.assertEqual(res.path, self.config_dir / "Dockerfile")
        self.assertEqual(res.context_dir, self.config_dir)
        self.assertFalse(res.used_override)
        self.assertEqual(res.path.read_bytes(), DOCKERFILE.content)
        self.assertEqual(
            (self.config_dir / "Dockerfile.sha256").read_text(),
            DOCKERFILE.sha256 + "\n",
        )

    def test_second_resolution_does_not_write(self):
        with _clean_env():
            resolve_dockerfile(self.config_dir)
            with mock.patch("dv.assets.resolver._write") as mock_write:
                res = resolve_dockerfile(self.config_dir)
        mock_write.assert_not_called()
        self.assertFalse(res.used_override)

    def test_upgrade_rewrites_content_and_sidecar(self):
        old = AssetDescriptor(name="Dockerfile", content=b"FROM old\n", env_var="DV_DOCKERFILE")
        with _clean_env():
            resolve_asset(old, self.config_dir)
            resolve_dockerfile(self.config_dir)
        self.assertEqual((self.config_dir / "Dockerfile").read_bytes(), DOCKERFILE.content)
        self.assertEqual(
            (self.config_dir / "Dockerfile.sha256").read_text().strip(),
            DOCKERFILE.sha256,
        )

    def test_local_override_is_returned_without_writes(self):
        self.config_dir.mkdir(parents=True)
        local = self.config_dir / "Dockerfile.local"
        local.write_text("")
        with _clean_env():
            res = resolve_dockerfile(self.config_dir)
        self.assertEqual(res, (local, self.config_dir, True))
        self.assertFalse((self.config_dir / "Dockerfile").exists())
        self.assertFalse((self.config_dir / "Dockerfile.sha256").exists())

    def test_local_override_directory_is_ignored(self):
        (self.config_dir / "Dockerfile.local").mkdir(parents=True)
        with _clean_env():
            res = resolve_dockerfile(self.config_dir)
        self.assertFalse(res.used_override)
        self.assertEqual(res.path, self.config_dir / "Dockerfile")

    def test_env_override_wins_over_local(self):
        self.config_dir.mkdir(parents=True)
        (self.config_dir / "Dockerfile.local").write_text("FROM local\n")
        custom_dir = self.root / "custom"
        custom_dir.mkdir()
        custom = custom_dir / "Dockerfile.dev"
        custom.write_text("FROM custom\n")
        with _clean_env():
            with mock.patch.dict(os.environ, {"DV_DOCKERFILE": str(custom)}):
                res = resolve_dockerfile(self.config_dir)
        self.assertEqual(res, (custom, custom_dir, True))

    def test_env_override_missing_path_fails_without_mutation(self):
        missing = self.root / "nope" / "Dockerfile"
        with _clean_env():
            with mock.patch.dict(os.environ, {"DV_DOCKERFILE": str(missing)}):
                with self.assertRaises(ConfigurationError) as ctx:
                    resolve_dockerfile(self.config_dir)
        self.assertIn("DV_DOCKERFILE", str(ctx.exception))
        self.assertIn(str(missing), str(ctx.exception))
        self.assertFalse(self.config_dir.exists())

    def test_env_override_directory_fails(self):
        self.config_dir.mkdir(parents=True)
        (self.config_dir / "Dockerfile.local").write_text("FROM local\n")
        with _clean_env():
            with mock.patch.dict(os.environ, {"DV_DOCKERFILE": str(self.root)}):
                with self.assertRaises(ConfigurationError):
                    resolve_dockerfile(self.config_dir)

    def test_empty_env_var_is_ignored(self):
        with _clean_env():
            with mock.patch.dict(os.environ, {"DV_DOCKERFILE": ""}):
                res = resolve_dockerfile(self.config_dir)
        self.assertFalse(res.used_override)

    def test_theme_uses_its_own_variable_and_files(self):
        missing = self.root / "missing.theme"
        with _clean_env():
            with mock.patch.dict(os.environ, {"DV_DOCKERFILE": str(missing)}):
                res = resolve_dockerfile_theme(self.config_dir)
            with mock.patch.dict(os.environ, {"DV_DOCKERFILE_THEME": str(missing)}):
                with self.assertRaises(ConfigurationError) as ctx:
                    resolve_dockerfile_theme(self.config_dir)
        self.assertEqual(res.path, self.config_dir / "Dockerfile.theme")
        self.assertEqual(res.path.read_bytes(), DOCKERFILE_THEME.content)
        self.assertIn("DV_DOCKERFILE_THEME", str(ctx.exception))
        self.assertFalse((self.config_dir / "Dockerfile").exists())


if __name__ == "__main__":
    unittest.main(verbosity=2)
