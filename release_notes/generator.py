"""
Release notes generation module.

This module contains the ReleaseNotesGenerator class responsible for rendering
the release notes Markdown document from the categorized changelog, first-time
contributors and highlights, and writing it to disk.
"""

import datetime
import logging
import os
from typing import List, Optional

from jinja2 import Environment, FileSystemLoader, PackageLoader, Template

from .models import HighlightedPR, PRCategory, PullRequestRecord
from .parser import PRCategorizer

logger = logging.getLogger("release-notes.generator")

DEFAULT_TEMPLATE_NAME = "release-notes.md.j2"
FILENAME_TEMPLATE = "{date}-release-{version}.md"


def release_version(milestone: str) -> str:
    """
    Derive the version shown in the notes by dropping the last two characters
    of the milestone, e.g. "1.20.0" -> "1.20".
    """
    return milestone[:-2]


def today() -> str:
    return datetime.datetime.now(datetime.timezone.utc).date().isoformat()


class ReleaseNotesGenerator:
    """
    Render release notes with a Jinja2 template.

    Args:
        milestone: Milestone name the notes are generated for
        username: GitHub username of the person generating the notes
        template_path: Optional path to a custom template; the bundled one is used otherwise
        output_dir: Directory the document is written to
    """

    def __init__(
        self,
        milestone: str,
        username: str,
        template_path: Optional[str] = None,
        output_dir: str = ".",
    ) -> None:
        self.milestone = milestone
        self.username = username
        self.template_path = template_path
        self.output_dir = output_dir

    def _load_template(self) -> Template:
        if self.template_path:
            directory, name = os.path.split(os.path.abspath(self.template_path))
            loader = FileSystemLoader(directory)
        else:
            name = DEFAULT_TEMPLATE_NAME
            loader = PackageLoader("release_notes", "templates")
        env = Environment(loader=loader, trim_blocks=True, lstrip_blocks=True, keep_trailing_newline=True)
        return env.get_template(name)

    def render(
        self,
        changelog: List[PRCategory],
        first_time_contributors: List[PullRequestRecord],
        highlighted: List[HighlightedPR],
    ) -> str:
        return self._load_template().render(
            first_time_contributors=first_time_contributors,
            changelog=PRCategorizer.sort_changelog(changelog),
            highlighted=highlighted,
            version=release_version(self.milestone),
            username=self.username,
        )

    def write(
        self,
        changelog: List[PRCategory],
        first_time_contributors: List[PullRequestRecord],
        highlighted: List[HighlightedPR],
    ) -> str:
        """
        Render the document and write it as <date>-release-<version>.md.

        An existing file with the same name is overwritten.

        Returns:
            Path of the written file
        """
        markdown = self.render(changelog, first_time_contributors, highlighted)
        filename = FILENAME_TEMPLATE.format(date=today(), version=release_version(self.milestone))
        path = os.path.join(self.output_dir, filename)

        logger.info("Writing release notes to %s", path)
        with open(path, "w", encoding="utf-8") as f:
            f.write(markdown)

        print(f"{filename} was created!")
        return path
