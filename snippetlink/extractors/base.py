"""Base classes for extractor plugins."""

from abc import ABC, abstractmethod

from ..filesystem import FileSystem
from ..models import Fragment
from ..options import QueryOptions
from ..result import Outcome


class Extractor(ABC):
    """Contract for extractors that locate a named fragment in a source."""

    name: str
    preferred_renderer: str

    def __init__(self, file_system: FileSystem) -> None:
        self._fs = file_system

    @abstractmethod
    def can_handle(self, source: str, name: str, options: QueryOptions) -> Outcome[None]:
        """Cheap existence probe used to pick an extractor; must not read content."""

    @abstractmethod
    def extract(self, source: str, name: str, options: QueryOptions) -> Outcome[Fragment]:
        """Locate ``name`` inside ``source`` and return the normalised fragment."""
