"""
Booking notification email over SMTP. Sent as a background task after the booking is stored;
failures are logged and never reach the request that triggered them.
"""
import html
import logging
import smtplib
from email.mime.text import MIMEText

from homescape_server.config import MAIL_PASSWORD, MAIL_SMTP_HOST, MAIL_SMTP_PORT, MAIL_USER

logger = logging.getLogger(__name__)

BOOKING_SUBJECT = "Booking successful"


class Mailer:
    def __init__(self, host: str, port: int, username: str, password: str, timeout: float = 30):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.timeout = timeout

    @property
    def configured(self) -> bool:
        return bool(self.username and self.password)

    def send(self, to: str, subject: str, html_body: str) -> None:
        msg = MIMEText(html_body, "html")
        msg["Subject"] = subject
        msg["From"] = self.username
        msg["To"] = to

        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
            server.starttls()
            server.login(self.username, self.password)
            server.sendmail(self.username, [to], msg.as_string())


_mailer: Mailer | None = None


def get_mailer() -> Mailer:
    """Dependency: process-wide mailer built from config."""
    global _mailer
    if _mailer is None:
        _mailer = Mailer(MAIL_SMTP_HOST, MAIL_SMTP_PORT, MAIL_USER, MAIL_PASSWORD)
    return _mailer


def booking_message(booking_id: str, transaction_id) -> str:
    return f"<p>{html.escape(f'Booking id: {booking_id},TransactionId:{transaction_id}')}</p>"


def send_booking_confirmation(mailer: Mailer, booking_id: str, booking: dict) -> None:
    """Email the guest their booking and transaction ids. Never raises for delivery problems."""
    to = booking.get("guestEmail")
    if not isinstance(to, str) or not to:
        logger.warning("Booking %s has no guestEmail; no confirmation sent", booking_id)
        return
    if not mailer.configured:
        logger.info("Mail not configured; skipping confirmation for booking %s", booking_id)
        return
    try:
        mailer.send(to, BOOKING_SUBJECT, booking_message(booking_id, booking.get("transactionId")))
    # ValueError covers UnicodeEncodeError: smtplib only speaks ASCII addresses
    except (smtplib.SMTPException, OSError, ValueError) as e:
        logger.error("Failed to send confirmation for booking %s: %s", booking_id, e)
        return
    logger.info("Confirmation sent for booking %s", booking_id)
