"""Release notes extraction from CHANGELOG.md.

A version section starts at a line that is exactly ``## `<version>` ``
and ends right before the next line starting with ``##`` (or at the end
of the document). Everything in between is the release notes.

Missing changelog files and missing version headers are not fatal: the
extraction degrades to empty notes and records a warning.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

SECTION_MARKER = "##"


@dataclass
class ChangelogExtraction:
    """Result of extracting release notes for one version.

    Attributes:
        version: Version the notes were looked up for
        notes: Extracted notes, each line followed by a newline
        warnings: Non-fatal problems found while extracting
    """

    version: str
    notes: str = ""
    warnings: list[str] = field(default_factory=list)

    @property
    def found(self) -> bool:
        """True if the version header was present."""
        return not self.warnings


def version_header(version: str) -> str:
    """Build the header line that opens a version section."""
    return f"{SECTION_MARKER} `{version}`"


def split_lines(text: str) -> list[str]:
    """Split a document on LF or CRLF line endings.

    A final line ending does not open another (empty) line.
    """
    return text.splitlines()


def extract_release_notes(lines: Sequence[str], version: str) -> ChangelogExtraction:
    """Extract the notes block for a version from changelog lines.

    Args:
        lines: Changelog document as a sequence of lines
        version: Version whose section should be extracted

    Returns:
        ChangelogExtraction with the notes, or empty notes and one
        warning when the header is not present
    """
    result = ChangelogExtraction(version=version)
    lines = list(lines)

    try:
        start = lines.index(version_header(version))
    except ValueError:
        result.warnings.append(f"Missing changelog header for version {version}")
        return result

    captured = []
    for line in lines[start + 1:]:
        if line.startswith(SECTION_MARKER):
            break
        captured.append(line + "\n")

    result.notes = "".join(captured)
    return result


def extract_release_notes_from_file(path: Path, version: str) -> ChangelogExtraction:
    """Extract release notes for a version from a changelog file.

    Args:
        path: Path to the changelog
        version: Version whose section should be extracted

    Returns:
        ChangelogExtraction; a missing file yields empty notes and a warning
    """
    if not path.is_file():
        return ChangelogExtraction(version=version, warnings=["Missing changelog file"])

    text = path.read_text(encoding="utf-8")
    return extract_release_notes(split_lines(text), version)
