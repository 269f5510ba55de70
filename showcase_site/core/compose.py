from pydantic import BaseModel
from showcase_site.models.contact import ContactSubmission


class OutboundMessage(BaseModel):
    subject: str
    text: str
    sender_name: str
    reply_to: str
    form_label: str
    submission: ContactSubmission


def build_subject(submission: ContactSubmission) -> str:
    if submission.is_partnership:
        return f"New Partnership Request from {submission.name}"
    return f"New Inquiry from {submission.name}"


def form_label(submission: ContactSubmission) -> str:
    return "Partnership Inquiry" if submission.is_partnership else "General Contact"


def build_body(submission: ContactSubmission, site_name: str) -> str:
    """Plain-text email body. Optional fields only appear when they were submitted."""
    lines = [
        f"Name: {submission.name}",
        f"Email: {submission.email}",
    ]
    if submission.company:
        lines.append(f"Company: {submission.company}")
    if submission.phone:
        lines.append(f"Phone: {submission.phone}")
    if submission.partnership_type:
        lines.append(f"Partnership Type: {submission.partnership_type}")

    lines += [
        "",
        "Message:",
        submission.message,
        "",
        "---",
        f"This message was sent from the {site_name} website.",
        f"Form Type: {form_label(submission)}",
    ]
    return "\n".join(lines)


def compose_message(submission: ContactSubmission, site_name: str) -> OutboundMessage:
    return OutboundMessage(
        subject=build_subject(submission),
        text=build_body(submission, site_name),
        sender_name=submission.name,
        reply_to=submission.email,
        form_label=form_label(submission),
        submission=submission,
    )
