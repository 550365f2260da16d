"""Conversion of lxml element trees into nested mappings.

Rules:
- element names lose their namespace
- an element with child elements becomes a dict; repeated names become lists
- an element without child elements becomes its text (None when empty)
- attributes, comments and processing instructions are ignored
"""

from typing import Any

from lxml import etree


class AttributeDict(dict):
    """Dict that also exposes its keys as attributes.

    Keys that collide with dict methods (items, keys, values, get, copy,
    update, pop, ...) resolve to the method; use item access for those.

    Example:
        >>> user = AttributeDict({"name": "Alice"})
        >>> user.name == user["name"]
        True
    """

    def __getattr__(self, name: str) -> Any:
        try:
            return self[name]
        except KeyError:
            raise AttributeError(
                f"'{type(self).__name__}' object has no attribute '{name}'"
            ) from None

    def __setattr__(self, name: str, value: Any) -> None:
        self[name] = value

    def __delattr__(self, name: str) -> None:
        try:
            del self[name]
        except KeyError:
            raise AttributeError(name) from None


def local_name(element: etree._Element) -> str:
    """Return the tag of an element without its namespace."""
    return etree.QName(element).localname


def element_value(element: etree._Element) -> Any:
    """Convert an element's content into a str, None, or nested dict.

    Args:
        element: Element to convert

    Returns:
        Text for leaf elements, dict for elements with child elements
    """
    children = [child for child in element if isinstance(child.tag, str)]
    if not children:
        return element.text if element.text else None

    result: dict[str, Any] = {}
    for child in children:
        key = local_name(child)
        value = element_value(child)
        if key in result:
            if not isinstance(result[key], list):
                result[key] = [result[key]]
            result[key].append(value)
        else:
            result[key] = value
    return result


def document_to_dict(root: etree._Element) -> dict[str, Any]:
    """Convert a whole document into {root_name: value}."""
    return {local_name(root): element_value(root)}


def to_attribute_dict(value: Any) -> Any:
    """Recursively convert dicts (including those inside lists) to AttributeDict."""
    if isinstance(value, dict):
        return AttributeDict((key, to_attribute_dict(item)) for key, item in value.items())
    if isinstance(value, list):
        return [to_attribute_dict(item) for item in value]
    return value
