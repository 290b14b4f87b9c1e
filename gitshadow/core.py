"""
Core gitshadow functionality - host repository wrapper and shadow storage repository.
"""

import hashlib
import logging
from pathlib import Path
from typing import Optional

import git
from git import Repo, GitCommandError
from git.exc import BadName

from .config import ShadowConfig


IDENTITY_LENGTH = 16

logger = logging.getLogger('gitshadow.storage')


class ShadowError(Exception):
    """Base exception for gitshadow operations."""
    pass


class MissingPathError(ShadowError):
    """A referenced working-tree file or directory does not exist."""
    pass


def repo_identity(origin: str) -> str:
    """Derive the storage key for a project from its origin URL or path."""
    return hashlib.sha256(origin.encode('utf-8')).hexdigest()[:IDENTITY_LENGTH]


class HostRepo:
    """Wrapper around the primary Git repository whose files are shadowed."""

    def __init__(self, work_dir: Optional[str] = None):
        """Initialize with the working directory (defaults to current directory)."""
        self.work_dir = Path(work_dir).resolve() if work_dir else Path.cwd()
        try:
            self.repo = Repo(self.work_dir, search_parent_directories=True)
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError):
            raise ShadowError(f"Not a Git repository: {self.work_dir}")

    @property
    def hooks_dir(self) -> Path:
        """Directory holding the primary repository's hooks."""
        return Path(self.repo.common_dir) / 'hooks'

    def origin(self) -> str:
        """Origin remote URL, or the working directory when there is no origin."""
        try:
            return self.repo.git.remote('get-url', 'origin')
        except GitCommandError:
            return str(self.work_dir)

    def identity(self) -> str:
        return repo_identity(self.origin())

    def current_branch(self) -> str:
        """Current branch name, or the short commit hash on a detached HEAD."""
        if self.repo.head.is_detached:
            return self.repo.git.rev_parse('--short', 'HEAD')
        return self.repo.active_branch.name


class ShadowRepo:
    """Git operations against the shadow storage repository.

    Every call is scoped to ``path`` explicitly, so it never depends on the
    process working directory.
    """

    def __init__(self, path: Path, default_branch: str = 'main'):
        self.path = Path(path)
        self.default_branch = default_branch
        self._repo = None

    @property
    def exists(self) -> bool:
        return (self.path / '.git').exists()

    def require(self) -> None:
        """Raise ShadowError unless the repository has been initialized."""
        if not self.exists:
            raise ShadowError(
                f"Shadow not initialized at {self.path}. Run 'shadow init' first"
            )

    @property
    def repo(self) -> Repo:
        if self._repo is None:
            self.require()
            self._repo = Repo(self.path)
        return self._repo

    def _git(self, command: str, *args, **kwargs) -> str:
        """Run a git subcommand in the shadow repository."""
        logger.debug("git -C %s %s %s", self.path, command, ' '.join(str(a) for a in args))
        try:
            return getattr(self.repo.git, command.replace('-', '_'))(*args, **kwargs)
        except GitCommandError as e:
            stderr = (e.stderr or '').strip() or str(e)
            raise ShadowError(f"git {command} failed: {stderr}") from e

    def initialize(self, registry_name: str) -> None:
        """Create the repository with an empty registry as its first commit."""
        self.path.mkdir(parents=True, exist_ok=True)
        logger.debug("Initializing shadow repository at %s", self.path)
        try:
            self._repo = Repo.init(self.path, initial_branch=self.default_branch)
        except GitCommandError as e:
            raise ShadowError(f"git init failed: {(e.stderr or '').strip() or e}") from e

        (self.path / registry_name).touch()
        self.repo.index.add([registry_name])
        self.repo.index.commit("init shadow")

    def branch_exists(self, branch: str) -> bool:
        return any(head.name == branch for head in self.repo.heads)

    def current_branch(self) -> Optional[str]:
        """Checked out branch, or None when HEAD is detached."""
        if self.repo.head.is_detached:
            return None
        return self.repo.active_branch.name

    def ensure_branch(self, branch: str) -> bool:
        """Create ``branch`` from the default branch if it is missing.

        Returns True when the branch was created.
        """
        if self.branch_exists(branch):
            return False

        if self.branch_exists(self.default_branch):
            self._git('checkout', '-q', '-b', branch, self.default_branch)
        else:
            self._git('checkout', '-q', '-b', branch)
        logger.info("Created shadow branch %s", branch)
        return True

    def checkout(self, ref: str) -> None:
        self._git('checkout', '-q', ref)

    def checkout_default(self) -> str:
        """Check out the default branch, falling back to master."""
        for branch in (self.default_branch, 'master'):
            if self.branch_exists(branch):
                self.checkout(branch)
                return branch
        raise ShadowError(f"Shadow has no '{self.default_branch}' branch")

    def commit_all(self, message: str) -> bool:
        """Stage everything and commit if the index differs from HEAD.

        Returns False when there was nothing to commit.
        """
        self._git('add', A=True)
        if not self.repo.is_dirty(index=True, working_tree=False, untracked_files=False):
            logger.debug("Nothing to commit in %s", self.path)
            return False

        commit = self.repo.index.commit(message)
        logger.debug("Committed %s: %s", commit.hexsha[:8], message)
        return True

    def list_branches(self) -> str:
        return self._git('branch')

    def log(self, path: Optional[str] = None, count: int = 10) -> str:
        args = ['--oneline', '-n', str(count)]
        if path:
            args.extend(['--', path])
        return self._git('log', *args)

    def diff_refs(self, first: str, second: str) -> str:
        return self._git('diff', first, second)

    def show_file(self, ref: str, path: str) -> bytes:
        """Content of ``path`` as recorded at ``ref``."""
        try:
            blob = self.repo.commit(ref).tree / path
        except (BadName, ValueError):
            raise ShadowError(f"Unknown revision: {ref}")
        except KeyError:
            raise ShadowError(f"{path} does not exist at {ref}")
        if blob.type != 'blob':
            raise ShadowError(f"{path} is not a file at {ref}")
        return blob.data_stream.read()

    def checkout_file(self, ref: str, path: str) -> bool:
        """Check out one file from ``ref``; False if it is missing there."""
        try:
            self.repo.git.checkout(ref, '--', path)
        except GitCommandError:
            logger.debug("%s not found at %s, skipped", path, ref)
            return False
        return True

    def add_remote(self, name: str, url: str) -> None:
        self._git('remote', 'add', name, url)

    def remove_remote(self, name: str) -> None:
        self._git('remote', 'remove', name)

    def list_remotes(self) -> str:
        return self._git('remote', '-v')

    def push_all(self, remote: str) -> None:
        self._git('push', remote, '--all')

    def pull(self, remote: str) -> None:
        branch = self.current_branch()
        if branch:
            self._git('pull', remote, branch)
        else:
            self._git('pull', remote)

    def gc(self) -> None:
        self._git('gc', '--aggressive', '--prune=now')


class Shadow:
    """A host repository paired with its shadow storage and registry."""

    def __init__(self, host: HostRepo, storage: ShadowRepo, config: ShadowConfig):
        from .utils.registry import Registry

        self.host = host
        self.storage = storage
        self.config = config
        self.registry = Registry(storage.path, host.work_dir)

    @classmethod
    def open(cls, config: ShadowConfig, work_dir: Optional[str] = None) -> 'Shadow':
        """Resolve the storage location for the repository at ``work_dir``."""
        host = HostRepo(work_dir)
        identity = host.identity()
        storage = ShadowRepo(config.storage_path(identity), config.default_branch)
        logger.debug("Shadow for %s (%s) at %s", host.work_dir, identity, storage.path)
        return cls(host, storage, config)

    @property
    def work_dir(self) -> Path:
        return self.host.work_dir

    def current_branch(self) -> str:
        return self.host.current_branch()

    def checkout_shadow_branch(self) -> str:
        """Ensure the shadow branch for the current host branch and check it out."""
        branch = self.current_branch()
        self.storage.ensure_branch(branch)
        self.storage.checkout(branch)
        return branch
