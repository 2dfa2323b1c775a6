"""Markdown report for a review session."""

from review_toolkit.models.session import Session


def format_report(session: Session) -> str:
    reviewed = session.reviewed_files
    pending = session.pending_files

    lines = [
        "# Code Review Report",
        "",
        f"Session ID: {session.id}",
        f"Project: {session.project_key}",
        f"Created: {session.created_at}",
        f"Last Updated: {session.updated_at}",
        f"Status: {'completed' if session.completed else 'in progress'}",
        "",
        "## Summary",
        "",
        f"- Total Files: {len(session.files)}",
        f"- Reviewed Files: {len(reviewed)}",
        f"- Pending Files: {len(pending)}",
        f"- Current Window Token Count: {session.current_window_token_count}/{session.token_limit}",
        f"- Total Token Count (across all windows): {session.total_token_count}",
        "",
        "## Reviewed Files",
        "",
    ]

    for entry in reviewed:
        lines += [f"### {entry.path}", ""]
        if entry.agent_review:
            lines += ["#### AI Agent Review", "", entry.agent_review, ""]
        lines += ["#### Feedback", "", entry.feedback or "No feedback provided", ""]

    if pending:
        lines += ["## Pending Files", ""]
        lines += [f"- {entry.path}" for entry in pending]
        lines.append("")

    return "\n".join(lines)
