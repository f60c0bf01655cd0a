"""Translation loading interface and implementations.

Defines the contract for fetching one locale's bundle and provides a
file-based loader (JSON or YAML) and an HTTP loader.
"""

import asyncio
import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, List, Optional

import yaml

from cabra_i18n.clients.http import HttpClient, HttpFetchError
from cabra_i18n.errors import TranslationLoadError
from cabra_i18n.i18n.models import TranslationBundle
from cabra_i18n.logging import get_module_logger

logger = get_module_logger()

BUNDLE_SUFFIXES = (".json", ".yml", ".yaml")


def load_bundle_file(path: Path) -> Any:
    """Read and decode one bundle file.

    Args:
        path: File ending in .json, .yml or .yaml.

    Returns:
        Decoded document.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file cannot be parsed.
    """
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        if path.suffix == ".json":
            try:
                return json.load(f)
            except json.JSONDecodeError as e:
                logger.error("json_parse_error", file=str(path), error=str(e))
                raise ValueError(f"Failed to parse {path}: {e}") from e
        try:
            return yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error("yaml_parse_error", file=str(path), error=str(e))
            raise ValueError(f"Failed to parse {path}: {e}") from e


class TranslationLoader(ABC):
    """Abstract base for translation loaders.

    Implementations define where one locale's bundle comes from. Failures of
    any kind are reported as TranslationLoadError.
    """

    @abstractmethod
    async def load(self, locale: str) -> TranslationBundle:
        """Load the bundle for a locale.

        Args:
            locale: Locale code (e.g., "ar").

        Returns:
            TranslationBundle with the locale's messages.

        Raises:
            TranslationLoadError: If the bundle is missing or malformed.
        """
        pass

    def available_locales(self) -> List[str]:
        """Locales this loader can serve, when it can tell."""
        return []


class FileTranslationLoader(TranslationLoader):
    """Loader for bundle files in a directory.

    Looks for ``<locale>.json``, then ``<locale>.yml``, then
    ``<locale>.yaml``. Files are read in a worker thread.

    Attributes:
        translations_dir: Directory containing bundle files.
    """

    def __init__(self, translations_dir: Path):
        self.translations_dir = Path(translations_dir)
        logger.info(
            "initialized_file_loader",
            translations_dir=str(self.translations_dir),
        )

    def find_bundle_file(self, locale: str) -> Optional[Path]:
        for suffix in BUNDLE_SUFFIXES:
            candidate = self.translations_dir / f"{locale}{suffix}"
            if candidate.is_file():
                return candidate
        return None

    def load_sync(self, locale: str) -> TranslationBundle:
        """Blocking variant of load()."""
        path = self.find_bundle_file(locale)
        if path is None:
            raise TranslationLoadError(
                locale, f"no bundle file in {self.translations_dir}"
            )

        try:
            data = load_bundle_file(path)
            bundle = TranslationBundle.from_document(locale, data)
        except (OSError, ValueError) as e:
            raise TranslationLoadError(locale, str(e)) from e

        logger.info(
            "loaded_bundle_file",
            locale=locale,
            file=str(path),
            section_count=len(bundle.translations),
        )
        return bundle

    async def load(self, locale: str) -> TranslationBundle:
        return await asyncio.to_thread(self.load_sync, locale)

    def available_locales(self) -> List[str]:
        if not self.translations_dir.is_dir():
            return []
        found = []
        for path in sorted(self.translations_dir.iterdir()):
            if path.suffix in BUNDLE_SUFFIXES and path.stem not in found:
                found.append(path.stem)
        return found


class HttpTranslationLoader(TranslationLoader):
    """Loader fetching ``<base_url>/<locale>.json`` over HTTP.

    Attributes:
        base_url: URL prefix of the bundle directory.
        client: HttpClient used for the requests.
    """

    def __init__(self, base_url: str, client: Optional[HttpClient] = None, timeout: float = 10):
        self.base_url = base_url.rstrip("/")
        self.client = client or HttpClient(timeout=timeout)
        logger.info("initialized_http_loader", base_url=self.base_url)

    def url_for(self, locale: str) -> str:
        return f"{self.base_url}/{locale}.json"

    async def load(self, locale: str) -> TranslationBundle:
        url = self.url_for(locale)
        try:
            data = await self.client.fetch_json(url)
            bundle = TranslationBundle.from_document(locale, data)
        except (HttpFetchError, ValueError) as e:
            raise TranslationLoadError(locale, str(e)) from e

        logger.info("loaded_bundle_url", locale=locale, url=url)
        return bundle
