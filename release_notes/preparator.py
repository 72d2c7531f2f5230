"""
Release notes pipeline.

Runs every stage in order: fetch milestone pull requests, find first-time
contributors, enrich pull request bodies with the issues they close,
categorize, generate highlights and write the document.
"""

import logging
from typing import Optional

from .config import ReleaseNotesConfig
from .contributors import first_time_contributors
from .fetcher import GitHubFetcher
from .generator import ReleaseNotesGenerator
from .highlights import HighlightGenerator
from .parser import PRCategorizer

logger = logging.getLogger("release-notes.preparator")


class ReleaseNotesPreparator:
    """Coordinates the GitHub fetcher, categorizer, highlight generator and document generator."""

    def __init__(
        self,
        config: ReleaseNotesConfig,
        fetcher: Optional[GitHubFetcher] = None,
        highlighter: Optional[HighlightGenerator] = None,
        generator: Optional[ReleaseNotesGenerator] = None,
    ) -> None:
        self.config = config
        self.fetcher = fetcher or GitHubFetcher(token=config.token)
        self.highlighter = highlighter or HighlightGenerator(config)
        self.generator = generator or ReleaseNotesGenerator(
            milestone=config.milestone,
            username=config.username,
            template_path=config.template_path,
            output_dir=config.output_dir,
        )
        self.categorizer = PRCategorizer()

    def generate(self) -> str:
        """
        Generate the release notes document.

        Returns:
            Path of the written document
        """
        owner, repo = self.config.organization, self.config.repository

        logger.info("Fetching pull requests of milestone %s in %s/%s", self.config.milestone, owner, repo)
        prs = self.fetcher.fetch_milestone_prs(owner, repo, self.config.milestone)

        logger.info("Looking for first-time contributors...")
        contributor_counts = self.fetcher.fetch_contributor_counts(owner, repo)
        newcomers = first_time_contributors(prs, contributor_counts)
        logger.info("Found %d first-time contributors", len(newcomers))

        logger.info("Including data from linked issues...")
        prs = [
            self.fetcher.include_data_from_issue(owner, repo, pr) if self.categorizer.includes(pr) else pr
            for pr in prs
        ]

        changelog = self.categorizer.categorize(prs)

        logger.info("Generating highlights...")
        highlighted = self.highlighter.generate(prs)

        return self.generator.write(changelog, newcomers, highlighted)
