# services/notification.py
import html
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session, sessionmaker
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from lovejourney.core.config import settings, SessionLocal
from lovejourney.core.dates import ensure_utc
from lovejourney.crud.journal_entry import crud_journal_entry
from lovejourney.crud.user import crud_user
from lovejourney.models.journal_entry import JournalEntry

logger = logging.getLogger(__name__)


class MilestoneNotifier:
    """
    Best-effort e-mail sent when a user writes their K-th journal entry.

    Runs as a background task after the response is sent. SMTP errors are
    retried with exponential backoff; the final failure is logged and dropped.
    """

    def __init__(
        self,
        session_factory: sessionmaker = SessionLocal,
        smtp_host: Optional[str] = None,
        smtp_port: Optional[int] = None,
        smtp_user: Optional[str] = None,
        smtp_password: Optional[str] = None,
        from_email: Optional[str] = None,
        notify_email: Optional[str] = None,
        milestone: Optional[int] = None,
        max_attempts: Optional[int] = None,
        retry_wait=None,
    ):
        self.session_factory = session_factory
        self.smtp_host = smtp_host or settings.SMTP_HOST
        self.smtp_port = smtp_port or settings.SMTP_PORT
        self.smtp_user = smtp_user or settings.SMTP_USER
        self.smtp_password = smtp_password or settings.SMTP_PASSWORD
        self.from_email = from_email or settings.SMTP_FROM_EMAIL or self.smtp_user
        self.from_name = settings.SMTP_FROM_NAME
        self.notify_email = notify_email or settings.MILESTONE_NOTIFY_EMAIL
        self.milestone = milestone or settings.MILESTONE_ENTRY_COUNT
        self.max_attempts = max_attempts or settings.NOTIFICATION_MAX_ATTEMPTS
        self.retry_wait = retry_wait or wait_exponential(multiplier=1, min=1, max=10)

    @property
    def enabled(self) -> bool:
        return all([self.smtp_host, self.from_email, self.notify_email])

    # =====================================================================
    # MESSAGE
    # =====================================================================

    def build_message(self, user_email: str, entries: List[JournalEntry]) -> MIMEMultipart:
        """HTML summary of the user's first journal entries."""
        blocks = "".join(
            f"""
            <div style="margin-bottom: 20px;">
              <h4>Entry {index} ({ensure_utc(entry.created_at).strftime("%Y-%m-%d")})</h4>
              <p>{html.escape(entry.content)}</p>
            </div>"""
            for index, entry in enumerate(entries, start=1)
        )
        body = f"""
        <h2>User Milestone Reached</h2>
        <p>User {html.escape(user_email)} has written their first {len(entries)} journal entries!</p>
        <h3>Journal Entries:</h3>
        {blocks}
        """

        msg = MIMEMultipart("alternative")
        msg["Subject"] = (
            f"New Journal Milestone: {user_email} has written {len(entries)} journals!"
        )
        msg["From"] = f"{self.from_name} <{self.from_email}>"
        msg["To"] = self.notify_email
        msg.attach(MIMEText(body, "html"))
        return msg

    # =====================================================================
    # DELIVERY
    # =====================================================================

    def _send(self, msg: MIMEMultipart) -> None:
        with smtplib.SMTP(self.smtp_host, self.smtp_port, timeout=30) as server:
            server.starttls()
            if self.smtp_user and self.smtp_password:
                server.login(self.smtp_user, self.smtp_password)
            server.send_message(msg)

    def send_with_retry(self, msg: MIMEMultipart) -> None:
        for attempt in Retrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=self.retry_wait,
            retry=retry_if_exception_type((smtplib.SMTPException, OSError)),
            reraise=True,
        ):
            with attempt:
                self._send(msg)

    def notify(self, user_id: UUID) -> bool:
        """
        Send the milestone e-mail for `user_id`.

        Returns:
            True if an e-mail was sent, False otherwise (never raises for SMTP errors)
        """
        if not self.enabled:
            logger.warning("Milestone e-mail skipped: SMTP or MILESTONE_NOTIFY_EMAIL not configured")
            return False

        db: Session = self.session_factory()
        try:
            user = crud_user.get(db, id=user_id)
            if user is None:
                logger.warning("Milestone e-mail skipped: user %s not found", user_id)
                return False
            entries = crud_journal_entry.get_first(db, user_id=user_id, limit=self.milestone)
            msg = self.build_message(user.email, entries)
        finally:
            db.close()

        try:
            self.send_with_retry(msg)
        except (smtplib.SMTPException, OSError):
            logger.exception("Milestone e-mail for user %s failed after %d attempts", user_id, self.max_attempts)
            return False

        logger.info("Milestone e-mail sent for user %s", user_id)
        return True


milestone_notifier = MilestoneNotifier()
