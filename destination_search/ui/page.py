"""
Minimal page element model.

Stands in for the browser DOM at the seams the search widget touches:
selector lookup, child insertion, input events and inner HTML. Supports
simple selectors (tag, #id, .class, [attr], [attr="value"]) joined by
the descendant combinator, e.g. '.nav-right input[type="text"]'.
"""

import re
from typing import Callable, Dict, Iterator, List, Optional, Sequence, Tuple

_COMPOUND = re.compile(r"^(?P<tag>[a-zA-Z][\w-]*)?(?P<rest>(?:[#.][\w-]+|\[[^\]]+\])*)$")
_PART = re.compile(r"#(?P<id>[\w-]+)|\.(?P<cls>[\w-]+)|\[(?P<attr>[^\]]+)\]")
_ATTR = re.compile(r"^\s*(?P<name>[\w-]+)\s*(?:=\s*(?P<quote>['\"]?)(?P<value>.*?)(?P=quote))?\s*$")

EventListener = Callable[["Element"], None]


class SelectorError(ValueError):
    """Raised for selectors outside the supported subset."""


class _Compound:
    """One compound selector such as input[type="text"]."""

    def __init__(self, text: str):
        match = _COMPOUND.match(text)
        if not match:
            raise SelectorError(f"Unsupported selector: {text!r}")

        self.tag = (match.group("tag") or "").lower() or None
        self.ids: List[str] = []
        self.classes: List[str] = []
        self.attrs: List[Tuple[str, Optional[str]]] = []

        for part in _PART.finditer(match.group("rest")):
            if part.group("id"):
                self.ids.append(part.group("id"))
            elif part.group("cls"):
                self.classes.append(part.group("cls"))
            else:
                attr = _ATTR.match(part.group("attr"))
                if not attr:
                    raise SelectorError(f"Unsupported attribute selector: {text!r}")
                self.attrs.append((attr.group("name"), attr.group("value")))

    def matches(self, element: "Element") -> bool:
        if self.tag and element.tag != self.tag:
            return False
        if any(element.id != ident for ident in self.ids):
            return False
        if any(cls not in element.classes for cls in self.classes):
            return False
        for name, value in self.attrs:
            actual = element.get_attribute(name)
            if actual is None or (value is not None and actual != value):
                return False
        return True


def _parse(selector: str) -> List[_Compound]:
    parts = selector.split()
    if not parts:
        raise SelectorError("Empty selector")
    return [_Compound(part) for part in parts]


class Element:
    """
    A node in the page tree.

    Attributes:
        tag: Lower-case tag name
        id: Element id, if any
        classes: CSS classes
        attributes: Other attributes (type, name, ...)
        children: Child elements in document order
        parent: Parent element, None for the root
        inner_html: Markup content written by renderers
        value: Current value for input elements
    """

    def __init__(
        self,
        tag: str,
        id: Optional[str] = None,
        classes: Sequence[str] = (),
        attributes: Optional[Dict[str, str]] = None,
    ):
        self.tag = tag.lower()
        self.id = id
        self.classes = list(classes)
        self.attributes = dict(attributes or {})
        self.children: List["Element"] = []
        self.parent: Optional["Element"] = None
        self.inner_html = ""
        self.value = ""
        self._listeners: Dict[str, List[EventListener]] = {}

    def __repr__(self) -> str:
        ident = f"#{self.id}" if self.id else ""
        classes = "".join(f".{cls}" for cls in self.classes)
        return f"<Element {self.tag}{ident}{classes}>"

    def get_attribute(self, name: str) -> Optional[str]:
        if name == "id":
            return self.id
        if name == "class":
            return " ".join(self.classes) if self.classes else None
        return self.attributes.get(name)

    def append_child(self, child: "Element") -> "Element":
        if child.parent is not None:
            child.parent.children.remove(child)
        child.parent = self
        self.children.append(child)
        return child

    def iter_descendants(self) -> Iterator["Element"]:
        for child in self.children:
            yield child
            yield from child.iter_descendants()

    def query_selector(self, selector: str) -> Optional["Element"]:
        """
        Find the first descendant matching a selector.

        Args:
            selector: Supported CSS selector

        Returns:
            First matching element in document order, or None
        """
        compounds = _parse(selector)
        for element in self.iter_descendants():
            if self._matches_chain(element, compounds):
                return element
        return None

    def get_element_by_id(self, element_id: str) -> Optional["Element"]:
        for element in self.iter_descendants():
            if element.id == element_id:
                return element
        return None

    def _matches_chain(self, element: "Element", compounds: List[_Compound]) -> bool:
        if not compounds[-1].matches(element):
            return False

        remaining = compounds[:-1]
        ancestor = element.parent
        while remaining and ancestor is not None and ancestor is not self.parent:
            if remaining[-1].matches(ancestor):
                remaining = remaining[:-1]
            ancestor = ancestor.parent
        return not remaining

    def add_event_listener(self, event: str, listener: EventListener) -> None:
        self._listeners.setdefault(event, []).append(listener)

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, []))

    def dispatch(self, event: str) -> None:
        for listener in list(self._listeners.get(event, [])):
            listener(self)

    def type_text(self, value: str) -> None:
        """Set the input value and fire an input event, like a keystroke."""
        self.value = value
        self.dispatch("input")
