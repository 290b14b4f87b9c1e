"""
Tests for gitshadow core functionality.
"""

import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

import git

from gitshadow.config import ShadowConfig
from gitshadow.core import (
    HostRepo, MissingPathError, Shadow, ShadowError, ShadowRepo, repo_identity
)
from gitshadow.utils.registry import REGISTRY_FILE


def init_host_repo(path: Path) -> git.Repo:
    """Create a primary repository with one commit on main."""
    path.mkdir(parents=True, exist_ok=True)
    repo = git.Repo.init(path, initial_branch='main')
    (path / 'README.md').write_text('initial\n')
    repo.index.add(['README.md'])
    repo.index.commit('initial')
    return repo


class TestRepoIdentity(unittest.TestCase):
    """Test identity derivation."""

    def test_identity_is_deterministic(self):
        """Test the same origin always yields the same identity."""
        origin = 'git@github.com:example/project.git'
        self.assertEqual(repo_identity(origin), repo_identity(origin))

    def test_identity_format(self):
        """Test identity is a 16 character hex prefix of sha256."""
        identity = repo_identity('https://example.com/repo.git')
        self.assertEqual(len(identity), 16)
        int(identity, 16)

    def test_different_origins_differ(self):
        """Test different origins map to different identities."""
        self.assertNotEqual(
            repo_identity('https://example.com/a.git'),
            repo_identity('https://example.com/b.git')
        )


class TestHostRepo(unittest.TestCase):
    """Test HostRepo class."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, self.temp_dir, ignore_errors=True)
        self.work = Path(self.temp_dir).resolve() / 'repo'
        self.repo = init_host_repo(self.work)

    def test_init_with_invalid_repo(self):
        """Test initialization outside a Git repository."""
        non_git_dir = Path(self.temp_dir) / 'non_git'
        non_git_dir.mkdir()
        with self.assertRaises(ShadowError):
            HostRepo(str(non_git_dir))

    def test_subdirectory_finds_repository(self):
        """Test a subdirectory of the work tree is accepted."""
        sub = self.work / 'sub'
        sub.mkdir()
        host = HostRepo(str(sub))
        self.assertEqual(host.work_dir, sub)

    def test_identity_from_origin(self):
        """Test identity follows the origin URL."""
        url = 'https://example.com/project.git'
        self.repo.create_remote('origin', url)
        host = HostRepo(str(self.work))
        self.assertEqual(host.origin(), url)
        self.assertEqual(host.identity(), repo_identity(url))

    def test_identity_falls_back_to_path(self):
        """Test identity uses the working directory without an origin."""
        host = HostRepo(str(self.work))
        self.assertEqual(host.origin(), str(self.work))
        self.assertEqual(host.identity(), repo_identity(str(self.work)))

    def test_current_branch(self):
        """Test current branch name."""
        host = HostRepo(str(self.work))
        self.assertEqual(host.current_branch(), 'main')

        self.repo.git.checkout('-b', 'feature')
        self.assertEqual(host.current_branch(), 'feature')

    def test_current_branch_detached(self):
        """Test detached HEAD maps to the short commit hash."""
        sha = self.repo.head.commit.hexsha
        self.repo.git.checkout(sha)
        host = HostRepo(str(self.work))
        branch = host.current_branch()
        self.assertTrue(sha.startswith(branch))

    def test_hooks_dir(self):
        """Test hooks directory lives in the git dir."""
        host = HostRepo(str(self.work))
        self.assertEqual(host.hooks_dir, self.work / '.git' / 'hooks')


class TestShadowRepo(unittest.TestCase):
    """Test ShadowRepo class."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, self.temp_dir, ignore_errors=True)
        self.path = Path(self.temp_dir) / 'shadow'
        self.storage = ShadowRepo(self.path)

    def test_uninitialized(self):
        """Test operations fail before init."""
        self.assertFalse(self.storage.exists)
        with self.assertRaises(ShadowError) as context:
            self.storage.list_branches()
        self.assertIn('shadow init', str(context.exception))

    def test_initialize(self):
        """Test init creates repository, registry and first commit."""
        self.storage.initialize(REGISTRY_FILE)

        self.assertTrue((self.path / '.git').is_dir())
        self.assertTrue((self.path / REGISTRY_FILE).is_file())
        self.assertEqual(self.storage.current_branch(), 'main')
        self.assertIn('init shadow', self.storage.log())

    def test_commit_all_without_changes(self):
        """Test committing a clean tree is a no-op."""
        self.storage.initialize(REGISTRY_FILE)
        self.assertFalse(self.storage.commit_all('nothing'))

    def test_commit_all_with_changes(self):
        """Test committing staged changes."""
        self.storage.initialize(REGISTRY_FILE)
        (self.path / '.env').write_text('A=1\n')

        self.assertTrue(self.storage.commit_all('add env'))
        self.assertIn('add env', self.storage.log())
        self.assertFalse(self.storage.commit_all('again'))

    def test_ensure_branch_from_default(self):
        """Test new branches start from the default branch."""
        self.storage.initialize(REGISTRY_FILE)
        (self.path / '.env').write_text('main\n')
        self.storage.commit_all('main env')

        self.assertTrue(self.storage.ensure_branch('feature'))
        self.assertTrue(self.storage.branch_exists('feature'))
        self.assertEqual((self.path / '.env').read_text(), 'main\n')
        self.assertFalse(self.storage.ensure_branch('feature'))

    def test_checkout_default(self):
        """Test falling back to the default branch."""
        self.storage.initialize(REGISTRY_FILE)
        self.storage.ensure_branch('feature')
        self.assertEqual(self.storage.checkout_default(), 'main')
        self.assertEqual(self.storage.current_branch(), 'main')

    def test_show_file_preserves_bytes(self):
        """Test historical content is returned byte for byte."""
        self.storage.initialize(REGISTRY_FILE)
        (self.path / '.env').write_bytes(b'A=1\n\n')
        self.storage.commit_all('env')

        self.assertEqual(self.storage.show_file('HEAD', '.env'), b'A=1\n\n')

    def test_show_file_errors(self):
        """Test unknown refs and paths raise ShadowError."""
        self.storage.initialize(REGISTRY_FILE)
        with self.assertRaises(ShadowError):
            self.storage.show_file('no-such-ref', '.env')
        with self.assertRaises(ShadowError):
            self.storage.show_file('HEAD', 'missing.txt')

    def test_show_file_directory(self):
        """Test a directory path is rejected instead of returning tree bytes."""
        self.storage.initialize(REGISTRY_FILE)
        (self.path / 'config').mkdir()
        (self.path / 'config' / 'a.conf').write_text('a\n')
        self.storage.commit_all('config')

        with self.assertRaises(ShadowError) as context:
            self.storage.show_file('HEAD', 'config')
        self.assertIn('is not a file', str(context.exception))

    def test_checkout_file_missing(self):
        """Test a file missing from the source ref is skipped."""
        self.storage.initialize(REGISTRY_FILE)
        self.assertFalse(self.storage.checkout_file('main', 'missing.txt'))

    def test_git_failure_raises(self):
        """Test git failures surface as ShadowError."""
        self.storage.initialize(REGISTRY_FILE)
        with self.assertRaises(ShadowError) as context:
            self.storage.checkout('does-not-exist')
        self.assertIn('git checkout failed', str(context.exception))

    def test_push_all(self):
        """Test push sends every branch to the remote."""
        self.storage.initialize(REGISTRY_FILE)
        with patch.object(ShadowRepo, '_git') as mock_git:
            self.storage.push_all('backup')
            mock_git.assert_called_once_with('push', 'backup', '--all')

    def test_gc(self):
        """Test aggressive garbage collection arguments."""
        self.storage.initialize(REGISTRY_FILE)
        with patch.object(ShadowRepo, '_git') as mock_git:
            self.storage.gc()
            mock_git.assert_called_once_with('gc', '--aggressive', '--prune=now')


class TestShadow(unittest.TestCase):
    """Test Shadow session wiring."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, self.temp_dir, ignore_errors=True)
        self.work = Path(self.temp_dir).resolve() / 'repo'
        init_host_repo(self.work)
        self.config = ShadowConfig(storage_root=Path(self.temp_dir) / 'store')

    def test_open_resolves_storage_path(self):
        """Test storage is located by identity under the storage root."""
        shadow = Shadow.open(self.config, str(self.work))
        expected = self.config.storage_root / repo_identity(str(self.work))
        self.assertEqual(shadow.storage.path, expected)
        self.assertEqual(shadow.registry.path, expected / REGISTRY_FILE)

    def test_separate_roots_are_isolated(self):
        """Test two storage roots never share a shadow repository."""
        other = ShadowConfig(storage_root=Path(self.temp_dir) / 'other')
        first = Shadow.open(self.config, str(self.work))
        second = Shadow.open(other, str(self.work))
        self.assertNotEqual(first.storage.path, second.storage.path)

    def test_checkout_shadow_branch(self):
        """Test the shadow branch follows the host branch."""
        shadow = Shadow.open(self.config, str(self.work))
        shadow.storage.initialize(REGISTRY_FILE)

        git.Repo(self.work).git.checkout('-b', 'feature')
        self.assertEqual(shadow.checkout_shadow_branch(), 'feature')
        self.assertEqual(shadow.storage.current_branch(), 'feature')


class TestShadowError(unittest.TestCase):
    """Test exception hierarchy."""

    def test_exception_creation(self):
        """Test creating ShadowError."""
        error = ShadowError("Test error message")
        self.assertEqual(str(error), "Test error message")
        self.assertIsInstance(error, Exception)

    def test_missing_path_is_shadow_error(self):
        """Test MissingPathError is handled like any ShadowError."""
        self.assertTrue(issubclass(MissingPathError, ShadowError))


if __name__ == '__main__':
    unittest.main()
