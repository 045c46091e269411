"""Base classes for renderer plugins."""

from abc import ABC, abstractmethod

from ..models import Fragment
from ..options import QueryOptions


class Renderer(ABC):
    """Contract for renderers that turn a fragment into document text."""

    name: str

    @abstractmethod
    def render(self, fragment: Fragment, options: QueryOptions) -> str:
        """Return the text written between the snippet markers, without a trailing newline."""
