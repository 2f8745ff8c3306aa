"""
Git repository information for the Jobs API payload.

Queries the git command line in the project root. Git being unavailable, or
the root not being a repository, simply means no git section is sent.
"""
import subprocess
from typing import List, Optional

from covjobs.upload.models import GitHead, GitInfo, GitRemote


# sha, author name, author email, committer name, committer email, subject
HEAD_FORMAT = "%H%n%aN%n%ae%n%cN%n%ce%n%s"


class GitInfoCollector:
    """Git repository information detection."""

    def __init__(self, working_directory: str):
        self.working_directory = working_directory

    def is_available(self) -> bool:
        """Check if Git is available and we're in a Git repository."""
        return self._run(["git", "rev-parse", "--git-dir"]) is not None

    def collect(self) -> Optional[GitInfo]:
        if not self.is_available():
            return None

        head = self._get_head()
        if head is None:
            return None

        return GitInfo(
            head=head,
            branch=self._get_current_branch(),
            remotes=self._get_remotes(),
        )

    def _get_head(self) -> Optional[GitHead]:
        output = self._run(["git", "log", "-1", f"--pretty=format:{HEAD_FORMAT}"])
        if not output:
            return None

        fields = output.split("\n")
        fields += [""] * (6 - len(fields))
        return GitHead(
            id=fields[0],
            author_name=fields[1] or None,
            author_email=fields[2] or None,
            committer_name=fields[3] or None,
            committer_email=fields[4] or None,
            message=fields[5] or None,
        )

    def _get_current_branch(self) -> Optional[str]:
        branch = self._run(["git", "rev-parse", "--abbrev-ref", "HEAD"])
        if not branch or branch == "HEAD":  # Detached head
            return None
        return branch

    def _get_remotes(self) -> List[GitRemote]:
        output = self._run(["git", "remote", "-v"])
        if not output:
            return []

        remotes = []
        seen = set()
        for line in output.splitlines():
            parts = line.split()
            if len(parts) < 2 or parts[0] in seen:
                continue
            seen.add(parts[0])
            remotes.append(GitRemote(name=parts[0], url=parts[1]))
        return remotes

    def _run(self, cmd: List[str]) -> Optional[str]:
        try:
            result = subprocess.run(
                cmd,
                cwd=self.working_directory,
                capture_output=True,
                text=True,
                timeout=10
            )
        except (subprocess.TimeoutExpired, FileNotFoundError, OSError):
            return None
        if result.returncode != 0:
            return None
        return result.stdout.strip()
