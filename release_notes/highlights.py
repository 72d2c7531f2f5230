"""
Highlight generation module for the release notes generator.

Feature and chore pull requests are combined into one text blob that is sent
to a local language model (Ollama or an OpenAI compatible chat completion
service such as AI Lab). The model answers with up to five user facing
highlights. Any failure while talking to the model leaves the release notes
without highlights instead of failing the run.
"""

import dataclasses
import json
import logging
import re
from typing import Any, Dict, List

import requests

from .config import ReleaseNotesConfig
from .models import HighlightedPR, PullRequestRecord

# logging
logger = logging.getLogger("release-notes.highlights")

MAX_HIGHLIGHTS = 5
AI_LAB_MODEL = "AI Lab model"
SCREENSHOT_SECTION_RE = re.compile(r"### Screenshot / video of UI[\s\S]*")
FEATURE_PREFIXES = ("feat", "chore")

HIGHLIGHTS_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "prs": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "title": {"type": "string"},
                    "shortDesc": {"type": "string"},
                    "longDesc": {"type": "string"},
                },
                "required": ["title", "shortDesc", "longDesc"],
            },
        },
    },
    "required": ["prs"],
}

SYSTEM_MESSAGE = (
    'You are a helpful assistant that returns only JSON containing exactly with the provided schema '
    'with property "prs" which is an array of objects described in the prompt. In the response do not '
    'address the content as a "This PR" etc. address it like it is a feature or fix'
)

PROMPT_TEMPLATE = """You are given a changelog or release note text that includes multiple product updates or features.

Your task is to extract and rewrite the most notable individual features from the text. For each of them, generate a new JSON object with the following structure:

{{
  "title": string,             // A short and original title (no colons or prefix like "Title:" or "Feature:")
  "shortDesc": string,         // A short summary of the feature in 1–2 sentences
  "longDesc": string           // A more detailed explanation in 2–4 sentences
}}

Be concise, creative, and do not repeat the same phrases across multiple items. Do not refer to the original PR or changelog directly. Rewrite in a natural user-facing tone, suitable for a changelog or release blog post.

If the input contains bullet points or grouped features, extract each as a separate feature when relevant.

⚠️ Return **a JSON array of at most {max_highlights} objects** — choose the {max_highlights} most interesting, relevant, or user-impacting items.

Here are a few examples of the expected output format:

[
  {{
    "title": "Kubernetes improvements with a new dashboard",
    "shortDesc": "A new landing screen for Kubernetes has been added with UI changes that gives an overview of your entire cluster.",
    "longDesc": "We have updated the Kubernetes dashboard page to provide a quick overview of a user's Kubernetes cluster, alongside with multiple changes to Kubernetes backend."
  }},
  {{
    "title": "Port forwarding for pods",
    "shortDesc": "This new feature allows users to configure port forwarding in their Kubernetes environment.",
    "longDesc": "Podman Desktop now supports port forwarding for pods in Kubernetes environments. Port forwarding can be done from the pod detail page and then visible in the Port forwarding page."
  }},
  {{
    "title": "Experimental Features",
    "shortDesc": "A new 'Experimental' section in the Settings provides the list of current experiments, and links to related discussions.",
    "longDesc": "In Podman Desktop v1.16, experimental features are now grouped into a dedicated section in the Settings, making them easier to discover and manage. Each experiment includes a link to its discussion page for feedback and iteration."
  }},
  {{
    "title": "Providers appear in the Status Bar",
    "shortDesc": "Providers are moved from Dashboard to Status Bar, to increase their visibility (experimental feature).",
    "longDesc": "When this experimental option is enabled, provider status is shown directly in the status bar. This helps users see at a glance whether a provider is active and whether it’s running or stopped."
  }},
  {{
    "title": "Prune only untagged images",
    "shortDesc": "Choose to prune 'All untagged images' or 'All unused images' when pruning images.",
    "longDesc": "Image pruning is now more flexible. Users can decide whether to remove only untagged images or all unused ones, providing more control over cleanup operations."
  }}
]

DATA:
{content}
"""


def strip_screenshots(body: str) -> str:
    """Drop the screenshot / video section and everything after it."""
    return SCREENSHOT_SECTION_RE.sub("", body) if body else ""


def select_features(prs: List[PullRequestRecord]) -> List[PullRequestRecord]:
    return [pr for pr in prs if pr.is_pull_request and pr.title.startswith(FEATURE_PREFIXES)]


def build_content(prs: List[PullRequestRecord]) -> str:
    """Concatenate pull requests into the DATA section of the prompt."""
    return "".join(f"PR{index}: {pr.title} - {pr.body}\n}}" for index, pr in enumerate(prs, start=1))


def build_prompt(content: str) -> str:
    return PROMPT_TEMPLATE.format(content=content, max_highlights=MAX_HIGHLIGHTS)


def parse_highlights(items: Any) -> List[HighlightedPR]:
    """
    Convert the "prs" array of a model answer into HighlightedPR objects.

    Raises:
        ValueError: If the array or one of its entries has the wrong shape
    """
    if not isinstance(items, list):
        raise ValueError(f'"prs" must be an array, got {type(items).__name__}')
    highlights = []
    for item in items[:MAX_HIGHLIGHTS]:
        if not isinstance(item, dict):
            raise ValueError(f"highlight must be an object, got {type(item).__name__}")
        highlights.append(HighlightedPR(
            title=item["title"],
            short_desc=item["shortDesc"],
            long_desc=item["longDesc"],
        ))
    return highlights


class HighlightGenerator:
    """
    Ask a local language model for the highlights of a release.

    Args:
        config: Run configuration; selects the backend, model, port and endpoint.
        session: Optional requests session used for the HTTP call.
    """

    def __init__(self, config: ReleaseNotesConfig, session=None) -> None:
        self.config = config
        self.session = session or requests

    def build_request_body(self, content: str) -> Dict[str, Any]:
        prompt = build_prompt(content)
        if self.config.use_ollama:
            return {
                "model": self.config.model,
                "stream": False,
                "prompt": prompt,
                "format": HIGHLIGHTS_SCHEMA,
            }
        return {
            "model": AI_LAB_MODEL,
            "messages": [
                {"role": "system", "content": SYSTEM_MESSAGE},
                {"role": "user", "content": prompt},
            ],
            "response_format": {
                "type": "json_object",
                "schema": HIGHLIGHTS_SCHEMA,
            },
        }

    def _extract_answer(self, payload: Dict[str, Any]) -> str:
        if self.config.use_ollama:
            return payload["response"]
        return payload["choices"][0]["message"]["content"]

    def fetch_highlights(self, content: str) -> List[HighlightedPR]:
        """
        Send the combined pull request text to the model service.

        Returns:
            Parsed highlights, or an empty list on any HTTP, network or parse error
        """
        url = self.config.service_url
        logger.info("Requesting highlights from %s (%s)", url, self.config.backend.name)
        try:
            response = self.session.post(
                url,
                headers={"Content-Type": "application/json"},
                json=self.build_request_body(content),
            )
        except requests.RequestException as e:
            logger.error(
                "Got error %s.\nThere was a problem when generating highlighted PRs. "
                "Generating release notes without highlights.", e,
            )
            return []

        if not response.ok:
            logger.error("HTTP error! Status: %s", response.status_code)
            return []

        try:
            answer = json.loads(self._extract_answer(response.json()))
            highlights = parse_highlights(answer["prs"])
        except (ValueError, KeyError, IndexError, TypeError) as e:
            # json.JSONDecodeError is a ValueError
            logger.error(
                "Got error %s.\nGenerated data from AI was not valid JSON format, "
                "generating release notes without highlights.", e,
            )
            return []

        logger.info("Received %d highlights", len(highlights))
        return highlights

    def generate(self, prs: List[PullRequestRecord]) -> List[HighlightedPR]:
        """
        Build highlights from the feature and chore pull requests of a milestone.
        """
        cleaned = [dataclasses.replace(pr, body=strip_screenshots(pr.body)) for pr in prs]
        features = select_features(cleaned)
        logger.debug("Selected %d of %d pull requests for highlights", len(features), len(prs))
        return self.fetch_highlights(build_content(features))
