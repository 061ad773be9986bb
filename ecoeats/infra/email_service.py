"""Email notifications: welcome mail and the daily expiry digest.

Bodies are rendered from Jinja2 templates under ecoeats/templates/emails.
Without SMTP_HOST configured the message is only logged (simulation mode).
"""
import logging
import smtplib
from datetime import date
from email.message import EmailMessage
from pathlib import Path
from typing import Iterable, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ecoeats.utilities import config

logger = logging.getLogger(__name__)


class EmailService:
    def __init__(self, host: str = config.SMTP_HOST, port: int = config.SMTP_PORT,
                 username: str = config.SMTP_USERNAME, password: str = config.SMTP_PASSWORD,
                 sender: str = config.EMAIL_FROM, templates_dir: Optional[Path] = None):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender = sender
        self._env = Environment(
            loader=FileSystemLoader(str(templates_dir or (config.TEMPLATES_DIR / 'emails'))),
            autoescape=select_autoescape(['html']),
        )

    def render(self, template_name: str, **context) -> str:
        return self._env.get_template(template_name).render(**context)

    def _send(self, subject: str, html: str, to_addr: str) -> bool:
        if not self.host:
            logger.info(f"SIMULATION: email '{subject}' to {to_addr} not sent (SMTP not configured)")
            return True
        msg = EmailMessage()
        msg['Subject'] = subject
        msg['From'] = self.sender
        msg['To'] = to_addr
        msg.set_content("This message requires an HTML capable mail client.")
        msg.add_alternative(html, subtype='html')
        try:
            with smtplib.SMTP(self.host, self.port, timeout=15) as s:
                s.starttls()
                if self.username:
                    s.login(self.username, self.password)
                s.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send '{subject}' to {to_addr}: {e}")
            return False
        logger.info(f"Sent '{subject}' to {to_addr}")
        return True

    def send_welcome_email(self, name: str, email: str) -> bool:
        html = self.render('welcome.html', name=name, email=email, year=date.today().year)
        return self._send('Welcome to EcoEats!', html, email)

    def send_expiry_notification_email(self, name: str, email: str,
                                       expired: Iterable, expiring_soon: Iterable) -> bool:
        html = self.render('expiry_digest.html', name=name,
                           expired=list(expired), expiring_soon=list(expiring_soon))
        return self._send('Your Daily Pantry Reminder', html, email)


__all__ = ['EmailService']
