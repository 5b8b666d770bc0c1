"""
Element Readers

ElementReader is the interface decoders implement: a forward-only,
single-pass producer of elements of one type. read_element() returns the
next Element, or None once the stream is exhausted.

BufferedElementReader turns such a source into a multi-pass sequence whose
buffered elements can be addressed by position and mutated in place.
"""

import logging
from abc import ABC, abstractmethod
from typing import Iterator, List, Optional, Sequence

from plykit.element import Element
from plykit.errors import UsageError
from plykit.schema import ElementType, PropertyDescriptor

logger = logging.getLogger(__name__)


class ElementReader(ABC):
    """Abstract base class for element sources

    Readers are forward-only: every element is returned once, after which
    read_element() returns None. Any call may raise the source's I/O error.
    """

    @abstractmethod
    def get_element_type(self) -> ElementType:
        """Return the type shared by every element of this stream"""
        pass

    @abstractmethod
    def read_element(self) -> Optional[Element]:
        """Return the next element, or None at end of stream"""
        pass

    def close(self) -> None:
        """Release the underlying source (default: nothing to release)"""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def __iter__(self) -> Iterator[Element]:
        while True:
            element = self.read_element()
            if element is None:
                return
            yield element


class ListElementReader(ElementReader):
    """ElementReader over elements already held in memory

    Args:
        element_type: Type of the stream
        elements: Elements to produce, in order; each must be of element_type
    """

    def __init__(self, element_type: ElementType, elements: Sequence[Element]):
        for position, element in enumerate(elements):
            if element.element_type != element_type:
                raise UsageError(
                    f"Element {position} has type {element.element_type.name!r}, "
                    f"expected {element_type.name!r}"
                )
        self._type = element_type
        self._elements = list(elements)
        self._position = 0

    def get_element_type(self) -> ElementType:
        return self._type

    def read_element(self) -> Optional[Element]:
        if self._position >= len(self._elements):
            return None
        element = self._elements[self._position]
        self._position += 1
        return element


class BufferedElementReader(ElementReader):
    """
    Multi-pass, positionally mutable view of a forward-only source.

    The source is pulled lazily by read_element() and drained at most once.
    Every element it produces is kept in an ordered store owned by the
    buffer; reset() rewinds the cursor over that store. Elements handed out
    (by read_element() or buffer[i]) are the stored objects themselves, so
    in-place mutation shows up on every later read of that position.

    Example:
        vertices = BufferedElementReader(decoder.reader("vertex"))
        NormalGenerator().generate_normals(vertices, decoder.reader("face"))
        vertices.reset()
        for vertex in vertices:
            encoder.write(vertex)

    Failure:
        An exception raised by the source propagates unchanged. The buffer
        keeps what it had stored so far but refuses to pull from the source
        again (UsageError).
    """

    def __init__(self, source: ElementReader):
        self._source = source
        self._type = source.get_element_type()
        self._store: List[Element] = []
        self._cursor = 0
        self._complete = False
        self._failed = False

    def get_element_type(self) -> ElementType:
        return self._type

    @property
    def is_complete(self) -> bool:
        """True once the source has signalled end of stream"""
        return self._complete

    def _pull(self) -> Optional[Element]:
        if self._failed:
            raise UsageError(
                f"Source of {self._type.name!r} failed after {len(self._store)} elements; "
                "the buffer cannot be drained further"
            )
        try:
            element = self._source.read_element()
        except Exception:
            self._failed = True
            logger.warning(
                f"Source of {self._type.name!r} failed after {len(self._store)} elements"
            )
            raise
        if element is None:
            self._complete = True
            logger.debug(f"Buffered {len(self._store)} {self._type.name!r} elements")
            return None
        self._store.append(element)
        return element

    def read_element(self) -> Optional[Element]:
        if self._cursor < len(self._store):
            element = self._store[self._cursor]
            self._cursor += 1
            return element
        if self._complete:
            return None
        element = self._pull()
        if element is not None:
            self._cursor += 1
        return element

    def drain(self) -> int:
        """Pull the rest of the source into the store; return the total count"""
        while not self._complete:
            self._pull()
        return len(self._store)

    def reset(self) -> None:
        """Rewind to the first element, draining the source first if needed"""
        self.drain()
        self._cursor = 0

    def close(self) -> None:
        self._source.close()

    def __len__(self) -> int:
        """Number of elements buffered so far"""
        return len(self._store)

    def __getitem__(self, position: int) -> Element:
        if position < 0:
            raise UsageError(f"Negative position {position} in {self._type.name!r} buffer")
        if position >= len(self._store):
            if self._complete:
                raise UsageError(
                    f"Position {position} out of range for {len(self._store)} "
                    f"{self._type.name!r} elements"
                )
            raise UsageError(
                f"Position {position} not buffered yet ({len(self._store)} so far); "
                "call drain() first"
            )
        return self._store[position]

    def extend_element_type(self, *properties: PropertyDescriptor) -> ElementType:
        """
        Append properties to the buffered schema.

        The source is drained first. Every buffered element is widened in
        place to the extended type, new scalar properties starting at zero,
        so references already handed out see the new properties too.

        Returns:
            The (possibly unchanged) element type of the buffer
        """
        self.drain()
        extended = self._type.extended(*properties)
        if extended is self._type:
            return self._type
        added = [p for p in properties if not self._type.has_property(p.name)]
        for element in self._store:
            element._extend(extended)
        logger.debug(
            f"Extended {self._type.name!r} with {[p.name for p in added]} "
            f"across {len(self._store)} elements"
        )
        self._type = extended
        return extended
