"""
Hashtag extraction and storage helpers.
"""
import json
import re
from typing import List, Optional

HASHTAG_PATTERN = re.compile(r"#([A-Za-z0-9_]+)")


def extract_hashtags(content: str) -> List[str]:
    """Return the tags in content, lowercased, in order of appearance (duplicates kept)."""
    if not content:
        return []
    return [tag.lower() for tag in HASHTAG_PATTERN.findall(content)]


def serialize_hashtags(hashtags: List[str]) -> str:
    """Serialize a tag list for the posts.hashtags column."""
    return json.dumps(hashtags)


def deserialize_hashtags(hashtags_json: Optional[str]) -> List[str]:
    """Parse a stored tag list; anything malformed reads back as no tags."""
    if not hashtags_json:
        return []
    try:
        hashtags = json.loads(hashtags_json)
    except (TypeError, ValueError):
        return []
    if not isinstance(hashtags, list) or not all(isinstance(tag, str) for tag in hashtags):
        return []
    return hashtags
