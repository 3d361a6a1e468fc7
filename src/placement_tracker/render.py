from html import escape
from typing import Iterable, List

from .models import ApplicationRecord, Summary

HEADERS = ["Company", "Role", "Stage", "Result", "Applied On", "ID"]

NO_APPLICATIONS_MESSAGE = "No applications yet."

STAGE_CLASSES = {
    "Applied": "stage-applied",
    "Online Assessment (OA)": "stage-oa",
    "Interview": "stage-interview",
    "Offer": "stage-offer",
    "Rejected": "stage-rejected",
}

RESULT_CLASSES = {
    "Pending": "result-pending",
    "Cleared": "result-cleared",
    "Rejected": "result-rejected",
}

SUMMARY_LABELS = [
    ("totalApplications", "Total Applications"),
    ("totalInterviews", "Interviews"),
    ("totalOffers", "Offers"),
    ("totalRejections", "Rejections"),
]


def format_date(d) -> str:
    """Oct 19, 2026"""
    return f"{d.strftime('%b')} {d.day}, {d.year}"


def stage_class(stage) -> str:
    return STAGE_CLASSES.get(getattr(stage, "value", stage), "stage-applied")


def result_class(result) -> str:
    return RESULT_CLASSES.get(getattr(result, "value", result), "result-pending")


def table_rows(records: Iterable[ApplicationRecord]) -> List[List[str]]:
    return [
        [r.company_name, r.role, r.stage.value, r.result.value, format_date(r.applied_date), str(r.id)]
        for r in records
    ]


def render_table(records: Iterable[ApplicationRecord]) -> str:
    rows = table_rows(records)
    if not rows:
        return NO_APPLICATIONS_MESSAGE
    widths = [max(len(row[i]) for row in [HEADERS] + rows) for i in range(len(HEADERS))]
    lines = [
        "  ".join(cell.ljust(w) for cell, w in zip(HEADERS, widths)).rstrip(),
        "  ".join("-" * w for w in widths),
    ]
    for row in rows:
        lines.append("  ".join(cell.ljust(w) for cell, w in zip(row, widths)).rstrip())
    return "\n".join(lines)


def render_summary(summary: Summary) -> str:
    counts = summary.to_dict()
    width = max(len(label) for _, label in SUMMARY_LABELS)
    return "\n".join(f"{label.ljust(width)}  {counts[key]}" for key, label in SUMMARY_LABELS)


def render_html(records: Iterable[ApplicationRecord], summary: Summary) -> str:
    records = list(records)
    counts = summary.to_dict()
    cards = "\n".join(
        f'    <div class="summary-card"><span id="{key}">{counts[key]}</span> {escape(label)}</div>'
        for key, label in SUMMARY_LABELS
    )
    if records:
        body_rows = []
        for r in records:
            body_rows.append(
                "      <tr>"
                f"<td>{escape(r.company_name)}</td>"
                f"<td>{escape(r.role)}</td>"
                f'<td><span class="stage-badge {stage_class(r.stage)}">{escape(r.stage.value)}</span></td>'
                f'<td><span class="result-badge {result_class(r.result)}">{escape(r.result.value)}</span></td>'
                f"<td>{escape(format_date(r.applied_date))}</td>"
                f'<td data-id="{r.id}">{r.id}</td>'
                "</tr>"
            )
        head = "".join(f"<th>{escape(h)}</th>" for h in HEADERS)
        listing = (
            '  <table id="applicationsTable">\n'
            f"    <thead><tr>{head}</tr></thead>\n"
            "    <tbody>\n" + "\n".join(body_rows) + "\n    </tbody>\n"
            "  </table>"
        )
    else:
        listing = f'  <p id="noApplicationsMessage">{escape(NO_APPLICATIONS_MESSAGE)}</p>'

    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n'
        '<head><meta charset="utf-8"><title>Placement Applications</title></head>\n'
        "<body>\n"
        '  <section class="summary">\n'
        f"{cards}\n"
        "  </section>\n"
        f"{listing}\n"
        "</body>\n"
        "</html>\n"
    )
