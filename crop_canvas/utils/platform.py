"""
Platform quirks that change how decoded images should be oriented.
"""

from __future__ import annotations

import re

# WebKit on Apple platforms applies EXIF orientation while decoding JPEGs
_AUTO_ORIENTING_USER_AGENT = re.compile(r"(Macintosh|iPhone|iPod|iPad).*AppleWebKit", re.IGNORECASE)


def orientation_auto_applied(user_agent: str | None) -> bool:
    """Return True when the user agent belongs to a platform that auto-rotates JPEGs."""
    if not user_agent:
        return False
    return _AUTO_ORIENTING_USER_AGENT.search(user_agent) is not None
