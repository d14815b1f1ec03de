"""
document.py
-----------

Document construction and serialization capabilities.

The assembler only needs two things from a document environment: build
an element tree and turn it into text. Both are small ABCs so the
pipeline can be exercised headlessly against plain in-memory trees; the
defaults are backed by `xml.etree.ElementTree`.
"""

from __future__ import annotations

__all__ = [
    "SVG_NS",
    "DocumentBuilder",
    "Serializer",
    "ElementTreeBuilder",
    "ElementTreeSerializer",
    "local_name",
    "encode_payload",
]

import base64
import xml.etree.ElementTree as ET
from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

from .errors import EnvironmentUnavailableError

SVG_NS = "http://www.w3.org/2000/svg"

Attrs = Mapping[str, str]


class DocumentBuilder(ABC):
    """Creates document nodes."""

    @abstractmethod
    def create_root(self, tag: str, attrs: Optional[Attrs] = None) -> Any:
        raise NotImplementedError

    @abstractmethod
    def append(self, parent: Any, tag: str, attrs: Optional[Attrs] = None) -> Any:
        """Create a child of `parent` after its existing children and return it."""
        raise NotImplementedError


class Serializer(ABC):
    """Turns a document tree into markup text."""

    @abstractmethod
    def serialize(self, node: Any) -> str:
        raise NotImplementedError


class ElementTreeBuilder(DocumentBuilder):
    """Builds namespaced `xml.etree.ElementTree.Element` trees."""

    def __init__(self, namespace: str = SVG_NS) -> None:
        self.namespace = namespace

    def qname(self, tag: str) -> str:
        return f"{{{self.namespace}}}{tag}" if self.namespace else tag

    def create_root(self, tag: str, attrs: Optional[Attrs] = None) -> ET.Element:
        return ET.Element(self.qname(tag), dict(attrs or {}))

    def append(self, parent: ET.Element, tag: str,
               attrs: Optional[Attrs] = None) -> ET.Element:
        return ET.SubElement(parent, self.qname(tag), dict(attrs or {}))


class ElementTreeSerializer(Serializer):
    """Serializes ElementTree trees with `namespace` as the default xmlns.

    The URI is registered under the empty prefix. `default_namespace=`
    cannot be used: it rejects unqualified attributes.
    """

    def __init__(self, namespace: str = SVG_NS) -> None:
        self.namespace = namespace
        if namespace:
            ET.register_namespace("", namespace)

    def serialize(self, node: ET.Element) -> str:
        if not isinstance(node, ET.Element):
            raise EnvironmentUnavailableError(
                f"{type(self).__name__} cannot serialize {type(node).__name__} nodes"
            )
        return ET.tostring(node, encoding="unicode")


def local_name(tag: str) -> str:
    """Strip a `{namespace}` prefix from an ElementTree tag."""
    return tag.rsplit("}", 1)[-1]


def encode_payload(text: str) -> str:
    """Base64 of the UTF-8 bytes of `text`, as ASCII text."""
    return base64.b64encode(text.encode("utf-8")).decode("ascii")
