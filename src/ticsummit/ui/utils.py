from ticsummit.models import Project

TAG_SEPARATOR = " · "


def format_count(count: int) -> str:
    """Format a like/view counter compactly.

    Args:
        count: The counter value

    Returns:
        Formatted count (e.g., "950", "1.2k", "3.4M")
    """
    if count < 1000:
        return str(count)
    elif count < 1_000_000:
        return f"{count / 1000:.1f}k"
    else:
        return f"{count / 1_000_000:.1f}M"


def format_tags(tags: tuple[str, ...] | list[str], limit: int = 3) -> str:
    """Join the first ``limit`` tags and summarize the rest as "+N".

    Args:
        tags: Tag names
        limit: Maximum number of tags to show by name

    Returns:
        Display text such as "IoT · Arduino · Sensors +2"
    """
    shown = TAG_SEPARATOR.join(tags[:limit])
    hidden = len(tags) - limit
    if hidden > 0:
        return f"{shown} +{hidden}"
    return shown


def format_project_stats(project: Project) -> str:
    stats = f"♥ {format_count(project.likes)}  👁 {format_count(project.views)}"
    if project.year:
        stats += f"  {project.year}"
    return stats


def truncate(text: str, width: int) -> str:
    """Shorten ``text`` to ``width`` characters, ending with an ellipsis when cut."""
    text = " ".join(text.split())
    if len(text) <= width:
        return text
    return text[: max(width - 1, 0)].rstrip() + "…"


def parse_list_input(value: str) -> tuple[str, ...]:
    """Split comma separated input into trimmed, non-empty, de-duplicated entries."""
    entries = []
    for entry in value.split(","):
        entry = entry.strip()
        if entry and entry not in entries:
            entries.append(entry)
    return tuple(entries)


def build_project_url(base_url: str, slug: str) -> str:
    """Build the public Hall of Fame URL of a project."""
    return f"{base_url.rstrip('/')}/hall-of-fame/{slug}"
