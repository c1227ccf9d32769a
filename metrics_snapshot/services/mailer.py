import logging
import smtplib
import time
from email.message import EmailMessage
from pathlib import Path
from typing import Callable, Union

from metrics_snapshot.config import Settings
from metrics_snapshot.services.retry import retry_call

logger = logging.getLogger(__name__)

SUBJECT = "System Metrics"

MAX_ATTEMPTS = 3
RETRY_DELAY_SECONDS = 5.0

# Port reserved for SMTP over implicit TLS (SMTPS).
IMPLICIT_TLS_PORT = 465

Transport = Callable[[Settings, EmailMessage], None]


def build_message(settings: Settings, attachment: Union[str, Path]) -> EmailMessage:
    """
    Build the report email with the CSV file attached.

    Raises OSError if the attachment cannot be read.
    """
    attachment = Path(attachment)
    payload = attachment.read_bytes()

    message = EmailMessage()
    message["Subject"] = SUBJECT
    message["From"] = settings.smtp_from or ""
    message["To"] = ", ".join(settings.smtp_to)
    message.set_content(f"System metrics snapshot attached: {attachment.name}\n")
    message.add_attachment(
        payload,
        maintype="text",
        subtype="csv",
        filename=attachment.name,
    )
    return message


def deliver(settings: Settings, message: EmailMessage) -> None:
    """
    Open one SMTP connection and send ``message`` through it.

    Port 465 uses implicit TLS; on any other port the connection is upgraded
    with STARTTLS when the server offers it. Login happens only when a user is
    configured.
    """
    if settings.smtp_port == IMPLICIT_TLS_PORT:
        smtp_cls = smtplib.SMTP_SSL
    else:
        smtp_cls = smtplib.SMTP

    logger.debug("Connecting to %s:%s", settings.smtp_host, settings.smtp_port)
    with smtp_cls(settings.smtp_host, settings.smtp_port, timeout=settings.smtp_timeout) as smtp:
        if smtp_cls is smtplib.SMTP:
            smtp.ehlo()
            if smtp.has_extn("starttls"):
                smtp.starttls()
                smtp.ehlo()
        if settings.smtp_user:
            smtp.login(settings.smtp_user, settings.smtp_password or "")
        smtp.send_message(message)


def send_report(
    settings: Settings,
    attachment: Union[str, Path],
    transport: Transport = deliver,
    sleep: Callable[[float], None] = time.sleep,
) -> bool:
    """
    Email the report at ``attachment``, retrying failed sends.

    Up to MAX_ATTEMPTS sends are made with a fixed RETRY_DELAY_SECONDS pause
    in between. All failures are logged; the return value tells whether the
    mail went out.
    """
    try:
        message = build_message(settings, attachment)
    except OSError as exc:
        logger.error("Error reading attachment %s: %s", attachment, exc)
        return False

    result = retry_call(
        lambda: transport(settings, message),
        max_attempts=MAX_ATTEMPTS,
        delay_seconds=RETRY_DELAY_SECONDS,
        retry_on=(smtplib.SMTPException, OSError),
        sleep=sleep,
        description="sending email",
    )

    if result.succeeded:
        logger.info("Email sent successfully to %s", ", ".join(settings.smtp_to))
        return True

    logger.error(
        "Giving up sending email after %d attempts: %s",
        result.attempts,
        result.last_error,
    )
    return False
