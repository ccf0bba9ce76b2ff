"""
Result rendering.

Turns a search state (loading, results, empty, error, cleared) into
markup and writes it into a results container. Each container remembers
the highest invocation sequence it has shown; older states arriving
late are discarded so a slow stale search never replaces a fresher one.
"""

import logging
import weakref
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Union

from jinja2 import DictLoader, Environment, select_autoescape

from ..config import settings
from ..domain.entities import RankedResult
from ..metrics import track_stale_render
from .templates import TEMPLATES

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "Error searching destinations. Please try again."
PLACEHOLDER_DESCRIPTION = "No description available"


@dataclass(frozen=True)
class Loading:
    """Search in progress."""


@dataclass(frozen=True)
class Results:
    """Ranked results to display."""

    results: Sequence[RankedResult]


@dataclass(frozen=True)
class Empty:
    """No candidate passed the match threshold."""


@dataclass(frozen=True)
class Error:
    """The search invocation failed."""

    message: str = DEFAULT_ERROR_MESSAGE


@dataclass(frozen=True)
class Cleared:
    """Query too short; nothing to show."""


RenderState = Union[Loading, Results, Empty, Error, Cleared]


class ResultRenderer:
    """
    Render search states into a results container.

    The container is any object with a writable `inner_html` attribute.

    Attributes:
        top_n: Maximum number of result cards
        placeholder_image: Image used when a destination has none
    """

    def __init__(
        self,
        top_n: Optional[int] = None,
        placeholder_image: Optional[str] = None,
    ):
        self.top_n = settings.TOP_N if top_n is None else top_n
        self.placeholder_image = placeholder_image or settings.PLACEHOLDER_IMAGE
        self.env = Environment(
            loader=DictLoader(TEMPLATES),
            autoescape=select_autoescape(["html"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self._last_sequence: "weakref.WeakKeyDictionary[Any, int]" = (
            weakref.WeakKeyDictionary()
        )

    def markup(self, state: RenderState) -> str:
        """
        Build the markup for a state.

        Args:
            state: State to render

        Returns:
            HTML fragment (empty string for Cleared)
        """
        if isinstance(state, Cleared):
            return ""
        if isinstance(state, Loading):
            return self._render("loading.html")
        if isinstance(state, Error):
            return self._render("error.html", message=state.message)
        if isinstance(state, Results) and state.results:
            return self._render(
                "results.html",
                results=list(state.results)[: self.top_n],
                placeholder_image=self.placeholder_image,
                placeholder_description=PLACEHOLDER_DESCRIPTION,
            )
        return self._render("empty.html")

    def render(self, target: Any, state: RenderState, sequence: Optional[int] = None) -> bool:
        """
        Write a state into the target container.

        Args:
            target: Container with an `inner_html` attribute
            state: State to render
            sequence: Invocation sequence number; states older than the
                last one rendered into this target are discarded

        Returns:
            True if the state was written, False if it was stale
        """
        if sequence is not None:
            last = self._last_sequence.get(target)
            if last is not None and sequence < last:
                track_stale_render()
                logger.debug(
                    f"Discarded stale {type(state).__name__} (seq {sequence} < {last})"
                )
                return False
            self._last_sequence[target] = sequence

        target.inner_html = self.markup(state)
        return True

    def last_sequence(self, target: Any) -> Optional[int]:
        return self._last_sequence.get(target)

    def _render(self, name: str, **context: Any) -> str:
        return self.env.get_template(name).render(**context).strip()
