"""
Git client infrastructure for repomirror.

Provides a clean abstraction over git command execution.
All git operations go through this client, making them:
- Easy to replace with a fake for testing
- Explicit about exit status (no ambient $? lookups)
- Isolated from the sync logic
"""

import subprocess
from dataclasses import dataclass
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)

TIMEOUT_EXIT_CODE = -1
COMMAND_NOT_FOUND_EXIT_CODE = 127


@dataclass(frozen=True)
class GitResult:
    """Outcome of one git invocation (or a short-circuited chain)."""
    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

    @property
    def output(self) -> str:
        """Combined stdout and stderr, one line per entry, joined by spaces."""
        lines = (self.stdout + "\n" + self.stderr).splitlines()
        return " ".join(line.strip() for line in lines if line.strip())

    @property
    def last_line(self) -> str:
        """Last non-empty stdout line (where rev-parse prints the id)."""
        lines = [line.strip() for line in self.stdout.splitlines() if line.strip()]
        return lines[-1] if lines else ""


class GitClient:
    """
    Abstraction over the git executable.

    Each method returns a GitResult; callers decide what a failure means.

    Example:
        client = GitClient()
        result = client.head_commit("/srv/mirrors/org/repo/main")
        if result.ok:
            print(result.last_line)
    """

    def __init__(self, executable: str = "git", timeout: Optional[float] = None):
        """
        Initialize GitClient.

        Args:
            executable: Name or path of the git binary
            timeout: Seconds before a command is killed. None waits forever,
                so a hung `git remote update` blocks the caller.
        """
        self.executable = executable
        self.timeout = timeout

    def _run(self, args: List[str], cwd: str) -> GitResult:
        """
        Run one git command.

        Args:
            args: Arguments after the executable name
            cwd: Working directory

        Returns:
            GitResult with exit code and captured streams
        """
        cmd = [self.executable] + args
        logger.debug(f"Running in '{cwd}': {' '.join(cmd)}")
        try:
            result = subprocess.run(
                cmd,
                cwd=cwd,
                capture_output=True,
                text=True,
                timeout=self.timeout
            )
        except subprocess.TimeoutExpired:
            logger.warning(f"Git command timed out: {' '.join(cmd)}")
            return GitResult(TIMEOUT_EXIT_CODE, stderr=f"timed out after {self.timeout}s")
        except FileNotFoundError as e:
            # Either the executable or cwd is missing
            logger.error(f"Git command failed: {' '.join(cmd)} - {e}")
            return GitResult(COMMAND_NOT_FOUND_EXIT_CODE, stderr=str(e))

        if result.returncode != 0:
            logger.debug(f"Exit {result.returncode}: {result.stderr.strip()}")
        return GitResult(result.returncode, result.stdout or "", result.stderr or "")

    def _chain(self, commands: List[List[str]], cwd: str) -> GitResult:
        """Run commands in order like `a && b`, merging their output."""
        stdout, stderr = [], []
        result = GitResult(0)
        for args in commands:
            result = self._run(args, cwd)
            stdout.append(result.stdout)
            stderr.append(result.stderr)
            if not result.ok:
                break
        return GitResult(result.exit_code, "".join(stdout), "".join(stderr))

    def head_commit(self, path: str) -> GitResult:
        """`git rev-parse HEAD` in the working copy."""
        return self._run(["rev-parse", "HEAD"], cwd=path)

    def remote_commit(self, path: str, branch: str) -> GitResult:
        """Update remote refs, then resolve origin/<branch>."""
        return self._chain([
            ["remote", "update"],
            ["rev-parse", f"origin/{branch}"],
        ], cwd=path)

    def clone(self, url: str, branch: str, destination: str, cwd: str) -> GitResult:
        """Clone only <branch> of <url> into <destination> (relative to cwd)."""
        return self._run(
            ["clone", url, "--branch", branch, "--single-branch", destination],
            cwd=cwd
        )

    def reset_to_remote(self, path: str, branch: str) -> GitResult:
        """Fetch and hard-reset the working copy onto origin/<branch>."""
        return self._chain([
            ["fetch"],
            ["reset", f"origin/{branch}", "--hard"],
        ], cwd=path)
