"""
Clover XML coverage collection.

Reads PHPUnit-style clover logs and turns them into per-file line coverage.
Files may appear directly under <project> or inside <package> elements.
"""
import hashlib
import logging
import os
import xml.etree.ElementTree as ET
from typing import Dict, Iterable, List, Optional

from rich.markup import escape

from covjobs.core.path_resolver import to_absolute_path
from covjobs.rich_utils.ui_helpers import build_null_logger
from covjobs.upload.models import SourceFile
from covjobs.utils.exceptions import CoverageCollectionError


STATEMENT_LINE_TYPE = "stmt"


def count_lines(source: str) -> int:
    """Number of newline-delimited lines; a trailing newline does not open a new line."""
    lines = source.split("\n")
    if lines[-1] == "":
        lines.pop()
    return len(lines)


class CloverCollector:
    """Collects line coverage from one or more clover files."""

    def __init__(self, root_dir: str, logger: Optional[logging.Logger] = None):
        self.root_dir = root_dir
        self.logger = logger or build_null_logger()

    def collect(self, clover_paths: Iterable[str], exclude_no_statements: bool = False) -> List[SourceFile]:
        """Parse every clover file and merge coverage per source file.

        Source files are returned in first-seen order. Hits reported for the
        same line by several clover files are added together.
        """
        source_files: Dict[str, SourceFile] = {}

        for clover_path in clover_paths:
            for source_file in self.parse_file(clover_path):
                existing = source_files.get(source_file.name)
                if existing is None:
                    source_files[source_file.name] = source_file
                else:
                    existing.merge(source_file)

        collected = list(source_files.values())
        if exclude_no_statements:
            collected = [source_file for source_file in collected if source_file.statements > 0]
        return collected

    def parse_file(self, clover_path: str) -> List[SourceFile]:
        """Parse a single clover file."""
        try:
            tree = ET.parse(clover_path)
        except ET.ParseError as e:
            raise CoverageCollectionError(f"Invalid clover XML in {clover_path}: {e}", path=clover_path)
        except OSError as e:
            raise CoverageCollectionError(f"Cannot read clover file {clover_path}: {e}", path=clover_path)

        root = tree.getroot()
        if root.tag != "coverage":
            raise CoverageCollectionError(
                f"Unexpected root element <{root.tag}> in {clover_path}", path=clover_path
            )

        source_files = []
        for project in root.findall("project"):
            file_elements = project.findall("file") + project.findall("package/file")
            for file_element in file_elements:
                source_file = self._collect_file(file_element)
                if source_file is not None:
                    source_files.append(source_file)
        return source_files

    def _collect_file(self, file_element: ET.Element) -> Optional[SourceFile]:
        path = file_element.get("name") or file_element.get("path")
        if not path:
            return None

        absolute = to_absolute_path(path, self.root_dir)
        try:
            with open(absolute, "rb") as f:
                raw = f.read()
        except OSError:
            self.logger.warning(f"Skipping source file that cannot be read: {escape(absolute)}")
            return None

        source = raw.decode("utf-8", errors="replace")
        source_file = SourceFile(
            name=self._relative_name(absolute),
            source=source,
            coverage=[None] * count_lines(source),
            digest=hashlib.md5(raw).hexdigest(),
        )

        statement_lines = 0
        for line in file_element.findall("line"):
            if line.get("type") != STATEMENT_LINE_TYPE:
                continue
            try:
                number = int(line.get("num", ""))
                count = int(line.get("count", "0"))
            except ValueError:
                continue
            statement_lines += 1
            source_file.add_coverage(number, count)

        metrics = file_element.find("metrics")
        if metrics is not None and metrics.get("statements") is not None:
            try:
                source_file.statements = int(metrics.get("statements"))
            except ValueError:
                source_file.statements = statement_lines
        else:
            source_file.statements = statement_lines

        return source_file

    def _relative_name(self, absolute: str) -> str:
        relative = os.path.relpath(absolute, self.root_dir)
        if relative.startswith(os.pardir):
            return absolute
        return relative.replace(os.sep, "/")
