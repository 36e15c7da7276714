"""Human-readable rendering for changelogs."""

from __future__ import annotations

from changepack.core.models import ABSENT, Changelog


def render_changelog_summary(changelog: Changelog) -> str:
    summary = changelog.summary()
    return (
        f"changes={len(changelog)} create={summary['create']} "
        f"update={summary['update']} delete={summary['delete']}"
    )


def render_changelog(changelog: Changelog, *, max_changes: int = 8) -> str:
    if changelog.identical:
        return "no changes detected"

    lines = [render_changelog_summary(changelog)]
    for change in changelog.changes[:max_changes]:
        lines.append(
            f"  {change.type} {change.pointer or '/'}: "
            f"{_render_value(change.from_)} -> {_render_value(change.to)}"
        )
    if len(changelog) > max_changes:
        lines.append("  ... additional changes omitted")
    return "\n".join(lines)


def _render_value(value: object) -> str:
    if value is ABSENT:
        return "<absent>"
    return repr(value)
