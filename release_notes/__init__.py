"""
Release notes generator - builds release notes for a GitHub milestone with optional AI highlights.
"""

from .models import Author, HighlightedPR, PRCategory, PullRequestRecord
from .config import ConfigurationError, LlmBackend, ReleaseNotesConfig
from .fetcher import GitHubFetcher, MilestoneNotFoundError
from .parser import PRCategorizer, PRTitleParser
from .highlights import HighlightGenerator
from .generator import ReleaseNotesGenerator
from .preparator import ReleaseNotesPreparator
from .main import main

__all__ = [
    'Author',
    'HighlightedPR',
    'PRCategory',
    'PullRequestRecord',
    'ConfigurationError',
    'LlmBackend',
    'ReleaseNotesConfig',
    'GitHubFetcher',
    'MilestoneNotFoundError',
    'PRCategorizer',
    'PRTitleParser',
    'HighlightGenerator',
    'ReleaseNotesGenerator',
    'ReleaseNotesPreparator',
    'main'
]
