"""
Batch git command execution for gitall.

Runs one git command in every tracked repository, in registry order,
after the registry has passed its integrity check.
Used by the `gitall run` command.
"""

import logging
from typing import AbstractSet, Generator, Optional, Sequence

from ..config import GitallConfig
from ..domain.operation import OperationDetail, OperationStatus, OperationSummary
from ..infra.git_client import GitClient, Stream
from ..oplog import OperationLog, format_entry
from ..registry import RegistryStore

logger = logging.getLogger(__name__)


class CommandRunner:
    """
    Service for running a git command across all tracked repositories.

    Repositories are processed one at a time; the child process is wired
    straight to the terminal so its output is never interleaved with the
    next repository's. A failing repository is reported and skipped.

    Example:
        runner = CommandRunner(config)

        for progress in runner.run(["pull", "--ff-only"], exclude=set()):
            print(progress)  # "Running in: /src/project"

        result = runner.last_result
        print(f"Ran in {result.successful} repos")
    """

    def __init__(
        self,
        config: GitallConfig,
        git_client: Optional[GitClient] = None,
        registry: Optional[RegistryStore] = None,
        oplog: Optional[OperationLog] = None,
        stdin: Stream = None,
        stdout: Stream = None,
        stderr: Stream = None,
    ):
        """
        Initialize CommandRunner.

        Args:
            config: Resolved file locations
            git_client: GitClient instance (creates new if None)
            registry: RegistryStore instance (creates new if None)
            oplog: OperationLog instance (creates new if None)
            stdin, stdout, stderr: Handles for the git processes (None inherits)
        """
        self.config = config
        self.git = git_client or GitClient(config.git_binary)
        self.registry = registry or RegistryStore(config)
        self.oplog = oplog or OperationLog(config.log_path)
        self.streams = {'stdin': stdin, 'stdout': stdout, 'stderr': stderr}
        self.last_result: Optional[OperationSummary] = None

    def run(
        self,
        git_args: Sequence[str],
        exclude: AbstractSet[str] = frozenset(),
    ) -> Generator[str, None, OperationSummary]:
        """
        Run git with git_args in each tracked repository.

        Args:
            git_args: Arguments after "git" (e.g. ['fetch', '--all'])
            exclude: Absolute repository paths to leave out

        Yields:
            Progress messages, one before each git invocation

        Returns:
            OperationSummary with results

        Raises:
            GitNotFoundError: If git is not available
            IntegrityError: If the registry digest is missing or stale;
                no repository is touched
            OSError: If the registry cannot be read
        """
        git_args = list(git_args)
        self.git.ensure_available()
        self.registry.guard.verify(self.config.digest_path, self.config.registry_path)
        repos = self.registry.load()

        result = OperationSummary(git_args=git_args)
        self.last_result = result

        for repo in repos:
            if repo in exclude:
                logger.debug(f"Excluded: {repo}")
                result.add_detail(OperationDetail(
                    repo_path=repo,
                    status=OperationStatus.SKIPPED,
                    action="excluded",
                ))
                continue

            if not self.git.is_git_repo(repo):
                logger.warning(f"Skipping: {repo} (not a git repository)")
                result.add_detail(OperationDetail(
                    repo_path=repo,
                    status=OperationStatus.SKIPPED,
                    action="not_a_repo",
                ))
                continue

            yield f"Running in: {repo}"
            result.add_detail(self._run_one(repo, git_args))

        return result

    def _run_one(self, repo: str, git_args: Sequence[str]) -> OperationDetail:
        try:
            returncode = self.git.run_streaming(git_args, cwd=repo, **self.streams)
        except OSError as e:
            logger.error(f"Error in {repo}: {e}")
            return OperationDetail(
                repo_path=repo,
                status=OperationStatus.FAILED,
                action="spawn_failed",
                error=str(e),
            )

        if returncode != 0:
            logger.error(f"Error in {repo}: git exited with status {returncode}")
            return OperationDetail(
                repo_path=repo,
                status=OperationStatus.FAILED,
                action="exit_status",
                returncode=returncode,
                error=f"exit status {returncode}",
            )

        try:
            self.oplog.append(format_entry(repo, git_args))
        except OSError as e:
            logger.error(f"Could not record operation for {repo} in {self.oplog.path}: {e}")

        return OperationDetail(
            repo_path=repo,
            status=OperationStatus.SUCCESS,
            action="ran",
            returncode=returncode,
        )
