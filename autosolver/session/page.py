"""Abstract page capabilities consumed by the runner and the orchestrator.

A browser driver adapter implements these two classes; the solver core
never talks to a transport directly.
"""

from abc import ABC, abstractmethod
from typing import List, Optional


class PageElement(ABC):
    """One located element of the exercise page."""

    @abstractmethod
    def text(self) -> str:
        """Return the visible text of the element."""
        raise NotImplementedError

    @abstractmethod
    def attribute(self, name: str) -> Optional[str]:
        """Return an attribute value, or None when it is not set."""
        raise NotImplementedError

    @abstractmethod
    def click(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def send_keys(self, keys: str) -> None:
        """Send a sequence of characters to the element."""
        raise NotImplementedError

    @abstractmethod
    def wait_clickable(self, timeout: float) -> None:
        """Block until the element accepts clicks or ``timeout`` seconds pass."""
        raise NotImplementedError


class Page(ABC):
    """The browser tab a lesson runs in."""

    @abstractmethod
    def find(self, selector: str) -> Optional[PageElement]:
        """Return the first element matching a CSS selector, or None."""
        raise NotImplementedError

    @abstractmethod
    def find_all(self, selector: str) -> List[PageElement]:
        raise NotImplementedError

    @abstractmethod
    def current_url(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def goto(self, url: str) -> None:
        raise NotImplementedError
