# freshcart/services/email_client.py
import requests

from freshcart.domain.errors import EmailDispatchError
from freshcart.utils.settings import EMAIL_API_URL, EMAIL_API_KEY, EMAIL_FROM
from freshcart.utils.logging import get_logger

logger = get_logger(__name__)


class EmailClient:
    """
    Klient HTTP do API maili (format Resend).
    Bez retry - ponowienie to decyzja uzytkownika.
    """

    def __init__(
        self,
        api_url: str | None = None,
        api_key: str | None = None,
        sender: str | None = None,
        timeout: int = 5,
        session: requests.Session | None = None,
    ):
        self.api_url = api_url or EMAIL_API_URL
        self.api_key = EMAIL_API_KEY if api_key is None else api_key
        self.sender = sender or EMAIL_FROM
        self.timeout = timeout
        self.session = session or requests.Session()

    def send(self, to: str, subject: str, html: str) -> dict:
        if not self.api_key:
            logger.error("Nie mozna wyslac maila: brak EMAIL_API_KEY")
            raise EmailDispatchError("email service not configured")

        logger.info(f"EmailClient POST {self.api_url} subject={subject!r}")

        try:
            resp = self.session.post(
                self.api_url,
                json={
                    "from": self.sender,
                    "to": [to],
                    "subject": subject,
                    "html": html,
                },
                headers={"Authorization": f"Bearer {self.api_key}"},
                timeout=self.timeout,
            )
            resp.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Wysylka maila nie powiodla sie: {e}")
            raise EmailDispatchError(str(e)) from e

        return resp.json() if resp.content else {}
