"""Utility helper functions for the server."""

from typing import List, Optional


def parse_tags(tags_str: Optional[str]) -> List[str]:
    """
    Parse comma-separated tags string into list.

    Args:
        tags_str: Comma-separated tags (e.g., "tag1,tag2,tag3"), or None

    Returns:
        List of trimmed tag strings
    """
    if not tags_str:
        return []
    return [tag.strip() for tag in tags_str.split(',') if tag.strip()]
