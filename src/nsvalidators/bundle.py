"""Read-only views of a built bundle.

Validation only needs exported package names, manifest headers and the
resources packaged in the bundle. BundleView is that seam; InMemoryBundle
and JarBundle are the two implementations shipped with nsvalidators.
"""

import io
import logging
import zipfile
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO

from nsvalidators.constants import EXPORT_PACKAGE, MANIFEST_PATH
from nsvalidators.parser.manifest import parse_header_clauses, parse_manifest

logger = logging.getLogger(__name__)


class Resource(ABC):
    """An entry of the bundle that can be opened for reading."""

    @abstractmethod
    def open(self) -> BinaryIO:
        """Open a fresh binary stream; the caller closes it."""
        pass


class BytesResource(Resource):
    def __init__(self, data: bytes):
        self.data = data

    def open(self) -> BinaryIO:
        return io.BytesIO(self.data)


class ZipResource(Resource):
    def __init__(self, archive: zipfile.ZipFile, name: str):
        self.archive = archive
        self.name = name

    def open(self) -> BinaryIO:
        return self.archive.open(self.name)


class BundleView(ABC):
    """What the validator may ask of a built bundle."""

    @abstractmethod
    def exported_packages(self) -> list[str]:
        """Fully qualified names of all exported packages."""
        pass

    @abstractmethod
    def header(self, name: str) -> str | None:
        """Value of a manifest header, None if absent."""
        pass

    @abstractmethod
    def resources(self) -> Mapping[str, Resource]:
        """Resource path to resource, in a stable order."""
        pass


@dataclass
class InMemoryBundle(BundleView):
    """Bundle assembled from plain Python values."""
    exports: list[str] = field(default_factory=list)
    headers: dict[str, str] = field(default_factory=dict)
    contents: dict[str, bytes] = field(default_factory=dict)

    def exported_packages(self) -> list[str]:
        return list(self.exports)

    def header(self, name: str) -> str | None:
        return self.headers.get(name)

    def resources(self) -> Mapping[str, Resource]:
        return {path: BytesResource(data) for path, data in self.contents.items()}


class JarBundle(BundleView):
    """Bundle backed by a built JAR archive.

    Use as a context manager so the archive is closed after verification.
    """

    def __init__(self, jar_path: Path):
        self.jar_path = Path(jar_path)
        self._archive = zipfile.ZipFile(self.jar_path)
        try:
            # Manifest header names are case-insensitive
            self._headers = {key.lower(): value for key, value in self._read_manifest().items()}
        except Exception:
            self._archive.close()
            raise
        self._resources = {
            info.filename: ZipResource(self._archive, info.filename)
            for info in sorted(self._archive.infolist(), key=lambda i: i.filename)
            if not info.is_dir()
        }
        logger.debug(f"Opened {self.jar_path} with {len(self._resources)} resources")

    def _read_manifest(self) -> dict[str, str]:
        try:
            data = self._archive.read(MANIFEST_PATH)
        except KeyError:
            logger.warning(f"No {MANIFEST_PATH} in {self.jar_path}")
            return {}
        return parse_manifest(data)

    def exported_packages(self) -> list[str]:
        packages = []
        for clause in parse_header_clauses(self.header(EXPORT_PACKAGE)):
            packages.extend(clause.names)
        return packages

    def header(self, name: str) -> str | None:
        return self._headers.get(name.lower())

    def resources(self) -> Mapping[str, Resource]:
        return self._resources

    def close(self) -> None:
        self._archive.close()

    def __enter__(self) -> "JarBundle":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
