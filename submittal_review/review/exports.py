"""Derived outputs for a completed review: clipboard text, CSV log, email, report."""

import csv
import io
from datetime import date
from urllib.parse import quote

from submittal_review.config import ReviewerProfile
from submittal_review.review.constants import AI_DISCLAIMER
from submittal_review.review.schemas import EmailDraft, SubmittalRecord

CSV_HEADERS = [
    "Submittal Number",
    "Spec Section",
    "Description",
    "Manufacturer",
    "Status",
    "Review Date",
    "Contract Number",
    "Reviewer Comments",
    "Next Steps",
]

SIGNATURE_BLANK = "_" * 23


def format_review_date(value: date) -> str:
    """Format as M/D/YYYY without zero padding."""
    return f"{value.month}/{value.day}/{value.year}"


def build_clipboard_text(record: SubmittalRecord, response_text: str) -> str:
    return (
        f"Submittal Review: {record.submittal_number}\n"
        f"Status: {record.recommended_status.value}\n"
        "\n"
        "Engineer Comments:\n"
        f"{response_text}\n"
        "\n"
        "Next Steps:\n"
        f"{record.next_steps}"
    )


def build_csv_log(
    record: SubmittalRecord, response_text: str, review_date: date | None = None
) -> str:
    """Build a one-row submittal log CSV.

    Every data field is quoted and embedded double quotes are doubled.
    """
    review_date = review_date or date.today()
    row = [
        record.submittal_number,
        record.spec_section,
        record.description,
        record.manufacturer,
        record.recommended_status.value,
        format_review_date(review_date),
        record.contract_number,
        response_text,
        record.next_steps,
    ]

    buffer = io.StringIO()
    csv.writer(buffer, lineterminator="\n").writerow(CSV_HEADERS)
    csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n").writerow(row)
    return buffer.getvalue().removesuffix("\n")


def csv_log_filename(record: SubmittalRecord) -> str:
    return f"Submittal_Log_{record.submittal_number or 'Entry'}.csv"


def build_signature(profile: ReviewerProfile) -> list[str]:
    """Signature lines; empty when the reviewer has no name."""
    if not profile.name:
        return []
    lines = ["--", profile.name]
    if profile.title:
        lines.append(profile.title)
    if profile.company:
        lines.append(profile.company)
    return lines


def build_email_draft(
    record: SubmittalRecord, response_text: str, profile: ReviewerProfile
) -> EmailDraft:
    """Build the review email addressed to the contractor."""
    subject = (
        f"Submittal Review: {record.submittal_number} - "
        f"{record.recommended_status.value}"
    )
    lines = [
        f"Submittal Number: {record.submittal_number}",
        f"Spec Section: {record.spec_section}",
        f"Description: {record.description}",
        "",
        f"Review Status: {record.recommended_status.value}",
        "",
        "Engineer Comments:",
        response_text,
        "",
        "Next Steps:",
        record.next_steps,
    ]
    signature = build_signature(profile)
    if signature:
        lines.extend(["", *signature])
    body = "\r\n".join(lines)

    mailto_url = f"mailto:?subject={quote(subject, safe='')}&body={quote(body, safe='')}"
    return EmailDraft(subject=subject, body=body, mailto_url=mailto_url)


def _section(title: str, items: list[str], empty: str = "None") -> list[str]:
    lines = [title]
    if items:
        lines.extend(f"  - {item}" for item in items)
    else:
        lines.append(f"  {empty}")
    lines.append("")
    return lines


def build_print_report(
    record: SubmittalRecord,
    file_name: str,
    response_text: str,
    profile: ReviewerProfile,
    review_date: date | None = None,
) -> str:
    """Render a plain-text review report suitable for printing."""
    review_date = review_date or date.today()
    completeness = record.completeness
    compliance = record.compliance

    lines = [
        "SUBMITTAL REVIEW REPORT",
        "=" * 23,
        f"File: {file_name}",
        f"Review Date: {format_review_date(review_date)}",
        f"Status: {record.recommended_status.value}",
        "",
        f"Submittal Number: {record.submittal_number}",
        f"Contract Number: {record.contract_number}",
        f"Spec Section: {record.spec_section}",
        f"Manufacturer: {record.manufacturer}",
        f"Description: {record.description}",
        f"Required Attachments: {record.required_attachments}",
        "",
        f"Completeness: {'Complete' if completeness.is_complete else 'Incomplete'}",
    ]
    lines.extend(_section("Missing Files:", completeness.missing_files))
    lines.extend(_section("Missing Details:", completeness.missing_details))
    lines.append(
        f"Compliance: {'Compliant' if compliance.is_compliant else 'Non-Compliant'}"
    )
    lines.extend(_section("Conflicts:", compliance.conflicts))
    lines.extend(_section("Applicable Clauses:", compliance.applicable_clauses))
    lines.extend(_section("Issues Identified:", record.issues, empty="No issues identified"))
    lines.extend(["Engineer Response:", response_text, ""])
    lines.extend(["Next Steps:", record.next_steps, ""])

    # Blank lines are left for a handwritten signature and date
    lines.append(f"Reviewed By: {profile.name or SIGNATURE_BLANK}")
    if profile.title:
        lines.append(profile.title)
    lines.extend([f"Date: {SIGNATURE_BLANK}", ""])

    lines.append(AI_DISCLAIMER)
    return "\n".join(lines)
