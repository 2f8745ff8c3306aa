"""
Data Models for the Jobs API payload

Dataclasses describing the coverage document sent to the Jobs API, from the
per-file line coverage up to the full json_file.
"""

import hashlib
import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


RUN_AT_FORMAT = "%Y-%m-%d %H:%M:%S +0000"


@dataclass
class SourceFile:
    """Line coverage for one source file"""
    name: str
    source: str
    coverage: List[Optional[int]]
    statements: int = 0
    # md5 of the file bytes as read from disk, when known
    digest: Optional[str] = None

    @property
    def source_digest(self) -> str:
        if self.digest is not None:
            return self.digest
        return hashlib.md5(self.source.encode("utf-8")).hexdigest()

    def add_coverage(self, line_number: int, count: int):
        """Add hits for a 1-based line number."""
        index = line_number - 1
        if index < 0 or index >= len(self.coverage):
            return
        current = self.coverage[index]
        self.coverage[index] = count if current is None else current + count

    def merge(self, other: "SourceFile"):
        """Merge coverage reported for the same file by another clover log"""
        for index, count in enumerate(other.coverage):
            if count is not None:
                self.add_coverage(index + 1, count)
        self.statements = max(self.statements, other.statements)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "source_digest": self.source_digest,
            "coverage": self.coverage,
        }


@dataclass
class GitHead:
    """Commit at HEAD"""
    id: str
    author_name: Optional[str] = None
    author_email: Optional[str] = None
    committer_name: Optional[str] = None
    committer_email: Optional[str] = None
    message: Optional[str] = None


@dataclass
class GitRemote:
    """Git remote"""
    name: str
    url: str


@dataclass
class GitInfo:
    """Git repository information"""
    head: GitHead
    branch: Optional[str] = None
    remotes: List[GitRemote] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "head": {k: v for k, v in vars(self.head).items() if v is not None},
            "branch": self.branch,
            "remotes": [{"name": r.name, "url": r.url} for r in self.remotes],
        }


@dataclass
class JsonFile:
    """Coverage payload submitted to the Jobs API"""
    source_files: List[SourceFile] = field(default_factory=list)
    repo_token: Optional[str] = None
    service_name: Optional[str] = None
    service_job_id: Optional[str] = None
    service_number: Optional[str] = None
    service_pull_request: Optional[str] = None
    service_branch: Optional[str] = None
    parallel: bool = False
    flag_name: Optional[str] = None
    run_at: Optional[datetime] = None
    git: Optional[GitInfo] = None

    def has_source_files(self) -> bool:
        return len(self.source_files) > 0

    def stamp_run_at(self, now: Optional[datetime] = None):
        self.run_at = now or datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization, omitting empty values."""
        data = {
            "repo_token": self.repo_token,
            "service_name": self.service_name,
            "service_job_id": self.service_job_id,
            "service_number": self.service_number,
            "service_pull_request": self.service_pull_request,
            "service_branch": self.service_branch,
            "parallel": self.parallel or None,
            "flag_name": self.flag_name,
            "run_at": self.run_at.strftime(RUN_AT_FORMAT) if self.run_at else None,
            "git": self.git.to_dict() if self.git else None,
            "source_files": [source_file.to_dict() for source_file in self.source_files],
        }
        return {key: value for key, value in data.items() if value not in (None, "")}

    def to_json(self) -> str:
        return json.dumps(self.to_dict())
