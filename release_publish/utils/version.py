"""Tag name helpers.

Hosted releases are looked up by tag, and tags are the package version
with a prefix (``v1.2.3`` for version ``1.2.3``).
"""


def add_tag_prefix(version: str, prefix: str = "v") -> str:
    """Add a tag prefix to a version string.

    Args:
        version: Version string (e.g., '1.2.3')
        prefix: Prefix to add (default: 'v')

    Returns:
        Version string with prefix (e.g., 'v1.2.3')

    Examples:
        >>> add_tag_prefix('1.2.3')
        'v1.2.3'
        >>> add_tag_prefix('v1.2.3')
        'v1.2.3'
        >>> add_tag_prefix('1.2.3', prefix='release-')
        'release-1.2.3'
    """
    version = version.strip()
    if prefix and version.startswith(prefix):
        return version
    return f"{prefix}{version}"


def remove_tag_prefix(tag: str, prefix: str = "v") -> str:
    """Remove a tag prefix from a tag name.

    Args:
        tag: Tag name (e.g., 'v1.2.3')
        prefix: Prefix to remove (default: 'v')

    Returns:
        Version string without prefix (e.g., '1.2.3')

    Examples:
        >>> remove_tag_prefix('v1.2.3')
        '1.2.3'
        >>> remove_tag_prefix('1.2.3')
        '1.2.3'
    """
    tag = tag.strip()
    if prefix and tag.startswith(prefix):
        return tag[len(prefix):]
    return tag
