# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Element - a node of a markup tree rendered to HTML-like text.

An Element carries a tag, an ordered attribute mapping, free text content
and an ordered list of child Elements. The whole subtree is rendered by a
single depth-first pass that concatenates fragments bottom-up.

Rendering is verbatim: tags, attribute values and content are written as
given. Callers that need escaping pass a hook to render(), for instance
escape_html.

Example:
    Building a list::

        ul = Element('ul').add_class('menu')
        ul.spawn_child('li').set_content('Home')
        ul.spawn_child('li').set_content('About')

        ul.render()
        # '<ul class="menu"><li>Home</li><li>About</li></ul>'

    Content placement::

        div = Element().set_content('A')
        div.spawn_child('span').set_content('B')
        str(div)                        # '<div>A<span>B</span></div>'
        str(div.set_append_content())   # '<div><span>B</span>A</div>'

Note:
    Children are owned by a single parent. Nothing prevents adding an
    element as its own descendant; rendering such a tree raises
    RecursionError. Use check() to find these problems beforehand.
"""

from __future__ import annotations

import html
import logging
from decimal import Decimal
from enum import Enum
from numbers import Real
from typing import Any, Callable, Iterable, Iterator, Mapping, Self

from .exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)

DEFAULT_TAG = "div"

AttributeValue = str | int | float | Decimal
Escape = Callable[[str], str]


class ContentConcat(Enum):
    """Position of an element's own content relative to its children."""

    PREPEND = "prepend"
    APPEND = "append"


def escape_html(value: str) -> str:
    """Escape hook for render(): HTML-escapes text, quotes included."""
    return html.escape(value, quote=True)


def _is_attribute_value(value: Any) -> bool:
    # bool is a Real subclass but not an attribute value
    if isinstance(value, bool):
        return False
    return isinstance(value, (str, Real, Decimal))


def _text(content: Any) -> str:
    # None is empty text
    return '' if content is None else str(content)


class Element:
    """A node in a markup tree.

    Each element has:
    - tag: The label wrapping the rendered output (not validated)
    - attributes: Ordered mapping rendered on the opening tag
    - content: Free text placed before or after the children
    - children: Ordered list of owned child elements
    - content_concat: ContentConcat.PREPEND (default) or APPEND

    Every mutator returns the element itself for chaining, except
    spawn_child() which returns the newly created child.

    Example:
        >>> table = Element('table').add_attribute('border', 1)
        >>> row = table.spawn_child('tr')
        >>> td = row.spawn_child('td').set_content('cell')
        >>> table.render()
        '<table border="1"><tr><td>cell</td></tr></table>'
    """

    __slots__ = ('_tag', '_attributes', '_content', '_content_concat', '_children')

    def __init__(self, tag: str = DEFAULT_TAG) -> None:
        """Initialize an empty Element.

        Args:
            tag: The tag name. Any string is accepted.
        """
        self._tag = tag
        self._attributes: dict[str, AttributeValue] = {}
        self._content = ''
        self._content_concat = ContentConcat.PREPEND
        self._children: list[Element] = []

    def __repr__(self) -> str:
        return (
            f"Element({self._tag!r}, attributes={self._attributes!r}, "
            f"children={len(self._children)})"
        )

    def __str__(self) -> str:
        """Render the element (alias of render())."""
        return self.render()

    # ==================== Properties ====================

    @property
    def tag(self) -> str:
        """The tag name."""
        return self._tag

    @property
    def children(self) -> tuple[Element, ...]:
        """Child elements in order (read-only view)."""
        return tuple(self._children)

    @property
    def content_concat(self) -> ContentConcat:
        """Where content is rendered relative to the children."""
        return self._content_concat

    # ==================== Attributes ====================

    def set_attributes(self, attributes: Mapping[str, AttributeValue]) -> Self:
        """Replace all attributes. The new mapping's order is kept."""
        self._attributes = dict(attributes)
        return self

    def add_attributes(
        self,
        attributes: Mapping[str, AttributeValue] | None = None,
        **kwargs: AttributeValue,
    ) -> Self:
        """Merge attributes into the existing ones.

        Keys already present keep their position and get the new value;
        new keys are appended.

        Args:
            attributes: Mapping of attributes to merge.
            **kwargs: Additional attributes as keyword arguments.
        """
        if attributes:
            self._attributes.update(attributes)
        self._attributes.update(kwargs)
        return self

    def add_attribute(self, key: str, value: AttributeValue) -> Self:
        """Set a single attribute.

        Args:
            key: Attribute name, must be a string.
            value: A string or a number.

        Raises:
            InvalidArgumentError: If key is not a string or value is neither
                a string nor a number. The attributes are left unchanged.
        """
        if not isinstance(key, str) or not _is_attribute_value(value):
            logger.debug("Rejected attribute %r=%r on <%s>", key, value, self._tag)
            raise InvalidArgumentError(
                "Invalid key or value type supplied. Expected string. "
                f"Got key {type(key).__name__} and value {type(value).__name__}"
            )
        self._attributes[key] = value
        return self

    def remove_attribute(self, key: str) -> Self:
        """Remove an attribute. Missing keys are ignored."""
        self._attributes.pop(key, None)
        return self

    def get_attributes(self) -> dict[str, AttributeValue]:
        """Return a copy of the attributes."""
        return dict(self._attributes)

    def add_class(self, value: str) -> Self:
        """Append a class name to the class attribute.

        Example:
            >>> Element().add_class('x').add_class('y').get_attributes()
            {'class': 'x y'}
        """
        current = self._attributes.get('class')
        if current:
            value = f"{current} {value}"
        return self.add_attribute('class', value)

    # ==================== Content ====================

    def set_content(self, content: str | None) -> Self:
        """Replace the content. None is treated as empty text."""
        self._content = _text(content)
        return self

    def append_content(self, content: str | None) -> Self:
        """Add text after the existing content."""
        self._content += _text(content)
        return self

    def prepend_content(self, content: str | None) -> Self:
        """Add text before the existing content."""
        self._content = _text(content) + self._content
        return self

    def remove_content(self) -> Self:
        self._content = ''
        return self

    def get_content(self) -> str:
        return self._content

    def set_append_content(self) -> Self:
        """Render content after the children."""
        self._content_concat = ContentConcat.APPEND
        return self

    def set_prepend_content(self) -> Self:
        """Render content before the children (default)."""
        self._content_concat = ContentConcat.PREPEND
        return self

    # ==================== Children ====================

    def spawn_child(self, tag: str | None = None) -> Element:
        """Create a child element, append it and return it.

        Unlike the other mutators this returns the new child, not self,
        so the caller can keep building it.

        Args:
            tag: Tag of the child. None means DEFAULT_TAG.

        Returns:
            The new child Element.
        """
        child = Element(DEFAULT_TAG if tag is None else tag)
        self._children.append(child)
        return child

    def add_child(self, child: Element) -> Self:
        """Append an existing element as the last child.

        Raises:
            TypeError: If child is not an Element.
        """
        if not isinstance(child, Element):
            raise TypeError(f"child must be Element, not {type(child).__name__}")
        self._children.append(child)
        return self

    def add_children(self, children: Iterable[Element]) -> Self:
        """Append elements in order.

        The iterable is read and checked before anything is appended.

        Raises:
            TypeError: If any item is not an Element. No child is added.
        """
        self._children.extend(_checked_children(children))
        return self

    def remove_children(self) -> Self:
        """Detach all children."""
        self._children = []
        return self

    def set_children(self, children: Iterable[Element]) -> Self:
        """Replace all children with the given elements.

        The iterable is read and checked before the current children are
        detached, so it may be built from them.

        Raises:
            TypeError: If any item is not an Element. Children are unchanged.
        """
        self._children = _checked_children(children)
        return self

    def has_children(self) -> bool:
        return bool(self._children)

    # ==================== Traversal ====================

    def walk(
        self,
        callback: Callable[[Element], Any] | None = None,
        _prefix: str = "",
    ) -> Iterator[tuple[str, Element]] | None:
        """Walk the descendants depth-first.

        Args:
            callback: Optional function called on each descendant.
                      If provided, walk returns None.
            _prefix: Internal use for path building.

        Yields:
            Tuples of (path, element) if no callback provided. Paths are
            positional: '#0' is the first child, '#0.#1' its second child.

        Example:
            >>> for path, el in ul.walk():
            ...     print(path, el.tag)
        """
        if callback is not None:
            for _path, child in self._walk_gen(_prefix):
                callback(child)
            return None

        return self._walk_gen(_prefix)

    def _walk_gen(self, prefix: str) -> Iterator[tuple[str, Element]]:
        stack = [(prefix, iter(enumerate(self._children)))]
        while stack:
            parent_path, pending = stack[-1]
            entry = next(pending, None)
            if entry is None:
                stack.pop()
                continue
            index, child = entry
            path = f"{parent_path}.#{index}" if parent_path else f"#{index}"
            yield path, child
            stack.append((path, iter(enumerate(child._children))))

    def check(self) -> list[str]:
        """Check the tree for shared or cyclic elements.

        An element must have a single parent and must not be its own
        ancestor. Nothing is raised; render() does not call this.

        Returns:
            List of error messages (empty if valid).
        """
        errors: list[str] = []
        seen = {id(self)}
        ancestors = {id(self)}
        stack = [(self, '', iter(enumerate(self._children)))]

        while stack:
            element, path, pending = stack[-1]
            entry = next(pending, None)
            if entry is None:
                stack.pop()
                ancestors.discard(id(element))
                continue

            index, child = entry
            child_path = f"{path}.#{index}" if path else f"#{index}"
            if id(child) in ancestors:
                errors.append(f"<{child.tag}> at '{child_path}' is its own ancestor")
                continue
            if id(child) in seen:
                errors.append(
                    f"<{child.tag}> at '{child_path}' already appears "
                    "elsewhere in the tree"
                )
                continue
            seen.add(id(child))
            ancestors.add(id(child))
            stack.append((child, child_path, iter(enumerate(child._children))))

        for error in errors:
            logger.debug("check <%s>: %s", self._tag, error)
        return errors

    # ==================== Rendering ====================

    def render(self, escape: Escape | None = None) -> str:
        """Render the element and its subtree.

        The tree is walked with an explicit stack, so depth is not bounded
        by the interpreter's recursion limit.

        Args:
            escape: Optional hook applied to content and attribute values
                of every element in the subtree. Tags are never escaped.
                None (default) renders everything verbatim.

        Returns:
            The markup string '<tag attrs>body</tag>'.

        Raises:
            RecursionError: If an element is its own ancestor.
        """
        ancestors = {id(self)}
        # (element, children not yet rendered, rendered children)
        stack: list[tuple[Element, Iterator[Element], list[str]]] = [
            (self, iter(self._children), [])
        ]

        while True:
            element, pending, rendered = stack[-1]
            child = next(pending, None)
            if child is not None:
                if id(child) in ancestors:
                    raise RecursionError(
                        f"<{child.tag}> is its own ancestor, cannot render"
                    )
                ancestors.add(id(child))
                stack.append((child, iter(child._children), []))
                continue

            stack.pop()
            ancestors.discard(id(element))
            output = element._render_node(''.join(rendered), escape)
            if not stack:
                return output
            stack[-1][2].append(output)

    def _render_node(self, child_output: str, escape: Escape | None) -> str:
        content = self._content if escape is None else escape(self._content)
        if self._content_concat is ContentConcat.APPEND:
            body = child_output + content
        else:
            body = content + child_output
        return self._render_tag(body, escape)

    def _render_tag(self, body: str, escape: Escape | None) -> str:
        attributes = self._render_attributes(escape)
        return f"<{self._tag}{attributes}>{body}</{self._tag}>"

    def _render_attributes(self, escape: Escape | None) -> str:
        parts = []
        for key, value in self._attributes.items():
            text = str(value)
            if escape is not None:
                text = escape(text)
            parts.append(f' {key}="{text}"')
        return ''.join(parts)


def _checked_children(children: Iterable[Element]) -> list[Element]:
    items = list(children)
    for item in items:
        if not isinstance(item, Element):
            raise TypeError(f"child must be Element, not {type(item).__name__}")
    return items
