# booklist/config.py
"""
Settings and language resource for the book list pipeline.

Everything a component needs is passed in explicitly through ``Settings``;
nothing is read from global state after startup.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional, Union

from .errors import ConfigError

LANGUAGES_DIR = Path(__file__).parent / "languages"

DNB_COVER_URL = "https://portal.dnb.de/opac/mvb/cover.htm"
KNV_SERVICE_URL = "http://ws.pcbis.de/knv-2.0/services/KNVWebService"
KNV_DATABASES = ["KNV", "KNVBG", "BakerTaylor", "Gardners"]

# The cover endpoint rejects requests without a browser-like agent
USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; WOW64; rv:45.0) Gecko/20100101 Firefox/45.0"

REQUIRED_SECTIONS = ("binding", "information", "age", "messages")
REQUIRED_MESSAGES = ("no_age_rating", "no_description")


@dataclass(frozen=True)
class Translations:
    """
    Read-only lookup tables loaded from a language resource.

    Required keys:
    - binding: binding code -> display string
    - information: free-text token -> replacement phrase
    - age: age abbreviation -> replacement (applied in order)
    - messages: ``no_age_rating`` and ``no_description`` placeholders
    """
    binding: Mapping[str, str]
    information: Mapping[str, str]
    age: Mapping[str, str]
    messages: Mapping[str, str]

    @classmethod
    def from_dict(cls, data: dict) -> "Translations":
        missing = [key for key in REQUIRED_SECTIONS if key not in data]
        if missing:
            raise ConfigError(f"Language resource is missing sections: {', '.join(missing)}")

        missing = [key for key in REQUIRED_MESSAGES if key not in data["messages"]]
        if missing:
            raise ConfigError(f"Language resource is missing messages: {', '.join(missing)}")

        return cls(**{key: MappingProxyType(dict(data[key])) for key in REQUIRED_SECTIONS})

    @classmethod
    def load(cls, path: Optional[Union[str, Path]] = None, language: str = "de") -> "Translations":
        """Load a language resource, defaulting to the bundled one"""
        path = Path(path) if path else LANGUAGES_DIR / f"{language}.json"

        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise ConfigError(f"Could not load language resource {path}: {e}") from e

        return cls.from_dict(data)

    @property
    def no_age_rating(self) -> str:
        return self.messages["no_age_rating"]

    @property
    def no_description(self) -> str:
        return self.messages["no_description"]


@dataclass
class Settings:
    """Runtime configuration shared by all pipeline stages"""
    translations: Translations = field(default_factory=Translations.load)
    image_dir: Path = Path("dist/images")
    cache_dir: Path = Path(".cache")
    login_path: Path = Path("knv.login.json")
    cover_url: str = DNB_COVER_URL
    catalog_url: str = KNV_SERVICE_URL
    timeout: float = 10.0
    rate_limit: float = 2.0
    max_retries: int = 2
