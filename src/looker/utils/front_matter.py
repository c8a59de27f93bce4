"""YAML front matter utilities for markdown documents.

Markdown notes often start with a metadata block fenced by dashes:

    ---
    title: Weekly review
    tags: [planning]
    ---
    # Weekly review

    Notes start here...

Only the body should be indexed, so the block is split off before the text
reaches the analyzer.
"""

import re
from typing import Any

import yaml


# Front matter fences: three or more dashes on their own line
_FRONT_MATTER_PATTERN = re.compile(r"^(-{3,})[ \t]*\r?\n(.*?)\r?\n\1[ \t]*(?:\r?\n|$)", re.DOTALL)


def parse_front_matter(content: str) -> tuple[dict[str, Any], str]:
    """Parse YAML front matter from markdown content.

    Args:
        content: Full markdown content including front matter

    Returns:
        Tuple of (front_matter_dict, markdown_content)
        If no valid front matter is found, returns (empty dict, original content)

    Example:
        >>> metadata, body = parse_front_matter("---\\ntitle: Notes\\n---\\n# Notes")
        >>> metadata["title"]
        'Notes'
        >>> body
        '# Notes'
    """
    match = _FRONT_MATTER_PATTERN.match(content)
    if not match:
        return {}, content

    yaml_text = match.group(2)
    markdown_content = content[match.end() :]

    try:
        metadata = yaml.safe_load(yaml_text) or {}
    except yaml.YAMLError:
        # Invalid YAML - treat the block as ordinary text
        return {}, content

    if not isinstance(metadata, dict):
        return {}, content

    return metadata, markdown_content
