"""
Transport SMTP pour l'envoi des bulletins.

Une session authentifiée est ouverte une seule fois par lot d'envoi puis
refermée ; chaque message est soumis une seule fois, sans nouvelle tentative.
STARTTLS est utilisé dès que le serveur le propose (port 587 classique).
"""

import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr

from app.schemas.settings import SmtpSettings, SmtpTestResult

logger = logging.getLogger(__name__)


class SmtpSession:
    """Session SMTP authentifiée, utilisable comme gestionnaire de contexte."""

    def __init__(self, settings: SmtpSettings):
        self.settings = settings
        self._server = None

    def open(self) -> "SmtpSession":
        """Connexion, STARTTLS si disponible, puis authentification."""
        server = smtplib.SMTP(self.settings.host, self.settings.port)
        try:
            server.ehlo()
            if server.has_extn("starttls"):
                server.starttls()
                server.ehlo()
            server.login(self.settings.email, self.settings.password)
        except Exception:
            server.close()
            raise
        self._server = server
        logger.info("Session SMTP ouverte sur %s:%s (%s)", self.settings.host, self.settings.port, self.settings.email)
        return self

    def verify(self) -> None:
        """Vérifie que la session répond, sans envoyer de message."""
        code, message = self._require_server().noop()
        if code != 250:
            raise smtplib.SMTPResponseException(code, message)

    def send_mail(self, to: str, subject: str, html_body: str) -> None:
        """
        Soumet un message HTML.
        `to` est une liste d'adresses séparées par des virgules : un seul message
        pour tous les contacts d'un élève.
        """
        msg = MIMEMultipart("alternative")
        msg["From"] = formataddr((self.settings.from_name, self.settings.email))
        msg["To"] = to
        msg["Subject"] = subject
        msg.attach(MIMEText(html_body, "html", "utf-8"))

        self._require_server().send_message(msg)
        logger.info("Email envoyé à %s", to)

    def close(self) -> None:
        if self._server is None:
            return
        server, self._server = self._server, None
        try:
            server.quit()
        except (smtplib.SMTPException, OSError) as exc:
            # Connexion souvent déjà rompue après un échec d'envoi : l'erreur
            # d'origine doit rester celle remontée à l'appelant
            logger.debug("Fermeture SMTP incomplète, connexion déjà rompue : %s", exc)
        finally:
            server.close()

    def _require_server(self) -> smtplib.SMTP:
        if self._server is None:
            raise smtplib.SMTPServerDisconnected("Session SMTP non ouverte.")
        return self._server

    def __enter__(self) -> "SmtpSession":
        if self._server is None:
            self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def open_smtp_session(settings: SmtpSettings) -> SmtpSession:
    """Ouvre une session SMTP authentifiée. Lève une exception si la connexion échoue."""
    return SmtpSession(settings).open()


def check_smtp_connection(settings: SmtpSettings) -> SmtpTestResult:
    """
    Teste une configuration SMTP : connexion, authentification et NOOP,
    sans envoyer de message. Ne lève jamais d'exception.
    """
    try:
        with open_smtp_session(settings) as session:
            session.verify()
    except Exception as exc:
        logger.warning("Test de connexion SMTP échoué (%s:%s) : %s", settings.host, settings.port, exc)
        return SmtpTestResult(success=False, error=describe_smtp_error(exc))

    return SmtpTestResult(success=True)


def describe_smtp_error(exc: Exception) -> str:
    """Message lisible d'une erreur SMTP ou réseau."""
    if isinstance(exc, smtplib.SMTPResponseException):
        detail = exc.smtp_error
        if isinstance(detail, bytes):
            detail = detail.decode("utf-8", errors="replace")
        return f"{exc.smtp_code} {detail}".strip()
    return str(exc) or exc.__class__.__name__
