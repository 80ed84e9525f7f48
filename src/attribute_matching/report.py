from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:  # pragma: no cover
    from .components import AttributeScore, CandidateScore, MatchResult


def _format_attribute(entry: "AttributeScore") -> str:
    if entry.score is None:
        return f"{entry.name}: requested '{entry.requested}', not provided"
    offered = f"'{entry.resolved_value}'"
    if entry.used_default:
        offered += " (default)"
    if entry.score == 0:
        verdict = "strict"
    elif entry.score > 0:
        verdict = f"compatible ({entry.score})"
    else:
        verdict = "incompatible"
    return f"{entry.name}: requested '{entry.requested}', found {offered} -> {verdict}"


def _status(entry: "CandidateScore", result: "MatchResult") -> str:
    if entry.disqualified:
        return f"disqualified ({entry.reason} '{entry.failed_attribute}')"
    if any(winner.candidate_id == entry.candidate.candidate_id for winner in result.winners):
        return "tied for best" if result.ambiguous else "selected"
    return f"compatible (strict={entry.strict_count}, penalty={entry.penalty})"


def describe_result(result: "MatchResult", title: Optional[str] = None) -> str:
    """Render a plain-text explanation of a selection."""
    requested = ", ".join(f"{name}='{value}'" for name, value in result.request.items())

    if title is None:
        if not result.winners:
            title = "No candidate matches the requested attributes"
        elif result.ambiguous:
            title = f"Cannot choose between {len(result.winners)} candidates"
        else:
            title = f"Selected candidate '{result.winners[0].candidate_id}'"

    lines: List[str] = [f"{title}.", f"  Requested: {{{requested}}}"]
    if not result.breakdown:
        lines.append("  No candidates were offered.")
        return "\n".join(lines)

    for candidate_id, entry in result.breakdown.items():
        lines.append(f"  - {candidate_id}: {_status(entry, result)}")
        for attribute in entry.scores.values():
            lines.append(f"      {_format_attribute(attribute)}")
    return "\n".join(lines)
