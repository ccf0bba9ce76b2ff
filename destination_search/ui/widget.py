"""
Header search widget.

Wires the header search input to the search pipeline: locates the input
and results container on the page, debounces keystrokes, numbers every
invocation and renders its outcome. Setup is idempotent so the fragment
loader may call it every time it injects the header.
"""

import itertools
import logging
from typing import Optional, Sequence

from ..domain.exceptions import DatasetUnavailableException, MatchFailureException
from ..logging_config import set_invocation
from ..search.debouncer import SearchDebouncer
from ..services.search_service import DestinationSearchService
from .page import Element
from .renderer import Cleared, Empty, Error, Loading, RenderState, ResultRenderer, Results

logger = logging.getLogger(__name__)


class SearchWidget:
    """
    Search-as-you-type widget bound to one page.

    Attributes:
        service: Search pipeline
        renderer: Result renderer
        debouncer: Keystroke debouncer
        initialized: True once setup() has succeeded
        search_input: Bound input element
        container: Results container element
    """

    INPUT_SELECTORS: Sequence[str] = ("#Research", '.nav-right input[type="text"]')
    CONTAINER_SELECTORS: Sequence[str] = ("#results", ".search-results")
    MAIN_SELECTOR = "main"

    def __init__(
        self,
        service: DestinationSearchService,
        renderer: Optional[ResultRenderer] = None,
        delay: Optional[float] = None,
        min_length: Optional[int] = None,
    ):
        """
        Initialize widget.

        Args:
            service: Search service running the pipeline
            renderer: Result renderer (created with defaults when omitted)
            delay: Debounce delay in seconds
            min_length: Minimum normalized query length
        """
        self.service = service
        self.renderer = renderer or ResultRenderer()
        self.debouncer = SearchDebouncer(
            on_search=self.run_search,
            on_clear=self.clear,
            delay=delay,
            min_length=min_length,
        )
        self.initialized = False
        self.search_input: Optional[Element] = None
        self.container: Optional[Element] = None
        self._sequence = itertools.count(1)

    def setup(self, page: Element) -> bool:
        """
        Bind the widget to the page.

        Safe to call repeatedly: only the first successful call binds.

        Args:
            page: Root of the page tree

        Returns:
            True if this call performed the setup
        """
        if self.initialized:
            logger.debug("Search widget already initialized, ignoring setup")
            return False

        search_input = self._find_first(page, self.INPUT_SELECTORS)
        if search_input is None:
            logger.warning("Search input (#Research) not found, setup skipped")
            return False

        self.initialized = True
        self.search_input = search_input
        self.container = self._find_first(page, self.CONTAINER_SELECTORS)
        if self.container is None:
            self.container = self._create_container(page, search_input)

        search_input.add_event_listener("input", self._on_input)
        logger.info("Search widget setup completed")
        return True

    def _on_input(self, element: Element) -> None:
        self.debouncer.submit(element.value)

    def clear(self) -> None:
        """Clear the results view, superseding any in-flight invocation."""
        if self.container is None:
            return
        self.renderer.render(self.container, Cleared(), self._next_sequence())

    async def run_search(self, query: str) -> bool:
        """
        Run one sequence-numbered search invocation.

        Args:
            query: Raw query text

        Returns:
            True if the outcome was rendered, False if it was superseded
        """
        if self.container is None:
            raise RuntimeError("Search widget is not set up")

        sequence = self._next_sequence()
        set_invocation(sequence)
        self.renderer.render(self.container, Loading(), sequence)

        state: RenderState
        try:
            results = await self.service.search_top(query)
        except DatasetUnavailableException as e:
            logger.error(f"Destination dataset unavailable: {e.message}")
            state = Error()
        except MatchFailureException as e:
            logger.error(f"Destination matching failed: {e.message}")
            state = Error()
        except Exception:
            logger.exception(f"Unexpected error searching for '{query}'")
            state = Error()
        else:
            state = Results(results) if results else Empty()

        rendered = self.renderer.render(self.container, state, sequence)
        if not rendered:
            logger.info(f"Search #{sequence} superseded, result discarded")
        return rendered

    async def close(self) -> None:
        """Drop pending input and wait for in-flight searches."""
        self.debouncer.cancel()
        await self.debouncer.drain()

    def _next_sequence(self) -> int:
        return next(self._sequence)

    @staticmethod
    def _find_first(page: Element, selectors: Sequence[str]) -> Optional[Element]:
        for selector in selectors:
            element = page.query_selector(selector)
            if element is not None:
                return element
        return None

    def _create_container(self, page: Element, search_input: Element) -> Element:
        container = Element("div", id="results", classes=["search-results"])
        main = page.query_selector(self.MAIN_SELECTOR)
        if main is not None:
            main.append_child(container)
        elif search_input.parent is not None:
            search_input.parent.append_child(container)
        else:
            page.append_child(container)
        logger.debug(f"Created results container under {container.parent!r}")
        return container
