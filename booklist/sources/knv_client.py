# booklist/sources/knv_client.py
"""
KNV web service client.

For the (surprisingly well documented) German API, see
http://www.knv.de/fileadmin/user_upload/IT/KNV_Webservice_2018.pdf

A session is a login / query ... / logout sequence of ``WSCall`` SOAP 1.2
messages; the session ID from the login is reused for every query.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional
from xml.sax.saxutils import escape

from bs4 import BeautifulSoup

from ..config import KNV_DATABASES
from ..errors import CatalogError, CatalogLoginError
from ..http_client import HTTPClient

SOAP_NS = "http://www.w3.org/2003/05/soap-envelope"
KNV_NS = "http://ws.pcbis.de/knv-2.0"


def load_credentials(path: Path) -> Dict[str, str]:
    """Read the ``LoginInfo`` block from a JSON login file"""
    try:
        with open(path, encoding="utf-8") as f:
            login = json.load(f)
    except (OSError, ValueError) as e:
        raise CatalogLoginError(f"Could not load KNV credentials from {path}: {e}") from e

    if not isinstance(login, dict) or not login:
        raise CatalogLoginError(f"KNV credentials in {path} must be a non-empty object")

    return login


def _to_xml(name: str, value: Any) -> str:
    if isinstance(value, dict):
        inner = "".join(_to_xml(key, item) for key, item in value.items())
        return f"<{name}>{inner}</{name}>"
    if isinstance(value, list):
        return "".join(_to_xml(name, item) for item in value)
    if isinstance(value, bool):
        value = "true" if value else "false"
    return f"<{name}>{escape(str(value))}</{name}>"


def build_envelope(call: Dict[str, Any]) -> bytes:
    """Wrap a WSCall payload in a SOAP 1.2 envelope"""
    body = "".join(_to_xml(key, value) for key, value in call.items())
    return (
        '<?xml version="1.0" encoding="utf-8"?>'
        f'<soap:Envelope xmlns:soap="{SOAP_NS}">'
        f'<soap:Body><WSCall xmlns="{KNV_NS}">{body}</WSCall></soap:Body>'
        "</soap:Envelope>"
    ).encode("utf-8")


def _element_to_value(element) -> Any:
    children = element.find_all(recursive=False)
    if not children:
        text = element.get_text().strip()
        return text or None

    data: Dict[str, Any] = {}
    for child in children:
        value = _element_to_value(child)
        if child.name in data:
            if not isinstance(data[child.name], list):
                data[child.name] = [data[child.name]]
            data[child.name].append(value)
        else:
            data[child.name] = value
    return data


def parse_article_data(xml_text: str) -> Dict[str, Any]:
    """
    Turn the ``ArtikelDaten`` XML of a query result into a nested dict.

    The payload contains bare ampersands, which are escaped before
    parsing. The last entry below the root holds the article fields.
    """
    soup = BeautifulSoup(xml_text.replace("&", "&amp;"), "xml")
    root = soup.find()
    if root is None:
        raise CatalogError("Empty article data")

    children = root.find_all(recursive=False)
    if children:
        last = _element_to_value(children[-1])
        if isinstance(last, dict):
            return last

    data = _element_to_value(root)
    if not isinstance(data, dict):
        raise CatalogError("Article data has no fields")
    return data


class KNVClient:
    """
    Session-based client for the KNV catalog.

    Credentials are loaded once, on first use. Use as a context manager
    so the session is logged out at the end.
    """

    def __init__(self, http: HTTPClient, url: str, login_path: Path, databases: Optional[List[str]] = None):
        self.http = http
        self.url = url
        self.login_path = Path(login_path)
        self.databases = databases or list(KNV_DATABASES)
        self.session_id: Optional[str] = None
        self._credentials: Optional[Dict[str, str]] = None
        self._login_error: Optional[CatalogLoginError] = None
        self.logger = logging.getLogger(self.__class__.__name__)

    def __enter__(self):
        # A new session may try logging in again
        self._login_error = None
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.logout()

    @property
    def credentials(self) -> Dict[str, str]:
        if self._credentials is None:
            self._credentials = load_credentials(self.login_path)
        return self._credentials

    def login(self) -> str:
        """
        Open a session.

        A failed login is remembered, so later calls fail fast instead of
        asking the service again for every ISBN.

        Raises:
            CatalogLoginError: credentials are missing or were rejected
        """
        if self._login_error is not None:
            raise self._login_error

        try:
            soup = self._call({"LoginInfo": self.credentials})
            session = soup.find("SessionID")
            if session is None or not session.get_text().strip():
                raise CatalogError("KNV login returned no session ID")
        except CatalogLoginError as e:
            self._login_error = e
            raise
        except CatalogError as e:
            self._login_error = CatalogLoginError(f"KNV login failed: {e}")
            raise self._login_error from e

        self.session_id = session.get_text().strip()
        self.logger.info("Logged in to KNV web service")
        return self.session_id

    def fetch(self, isbn: str) -> Dict[str, Any]:
        """
        Return raw article data for an ISBN.

        Only the first record is read, since a given ISBN is unique.
        """
        if self.session_id is None:
            self.login()

        soup = self._call({
            "SessionID": self.session_id,
            "Suchen": {
                "Datenbank": self.databases,
                "Suche": {
                    "SimpleTerm": {
                        "Suchfeld": "ISBN",
                        "Suchwert": isbn,
                        "Schwert2": "",
                        "Suchart": "Genau",
                    },
                },
            },
            "Lesen": {
                "SatzVon": 1,
                "SatzBis": 1,
                "Format": "KNVXMLLangText",
                "AuswahlMultimediaDaten": {
                    # Only the best cover they got
                    "mmDatenLiefern": True,
                    "mmVarianteFilter": "zoom",
                },
            },
        })

        article = soup.find("ArtikelDaten")
        if article is None or not article.get_text().strip():
            raise CatalogError(f"No KNV entry for ISBN {isbn}")

        return parse_article_data(article.get_text())

    def logout(self) -> None:
        if self.session_id is None:
            return

        try:
            self._call({"SessionID": self.session_id, "Logout": True})
            self.logger.info("Logged out of KNV web service")
        except CatalogError as e:
            self.logger.warning(f"KNV logout failed: {e}")
        finally:
            self.session_id = None

    def _call(self, call: Dict[str, Any]) -> BeautifulSoup:
        headers = {"Content-Type": "application/soap+xml; charset=utf-8"}
        success, status_code, response = self.http.post(self.url, build_envelope(call), headers=headers)

        if response is None:
            raise CatalogError(f"KNV web service unreachable (status {status_code})")

        soup = BeautifulSoup(response.content, "xml")

        fault = soup.find("Fault")
        if fault is not None:
            reason = fault.find("Text") or fault
            raise CatalogError(f"KNV fault: {reason.get_text().strip()}")

        if not success:
            raise CatalogError(f"KNV web service returned status {status_code}")

        return soup
