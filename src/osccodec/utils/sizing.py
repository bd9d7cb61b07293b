"""Wire size calculation utilities.

This module provides the 4-byte alignment rule and helpers to compute the
encoded size of values, messages and bundles without encoding them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..models.bundle import Bundle
    from ..models.message import Message


class _Sized(Protocol):
    def space(self) -> int: ...


def pad4(n: int) -> int:
    """Round ``n`` up to the next multiple of 4.

    Example:
        >>> [pad4(n) for n in range(6)]
        [0, 4, 4, 4, 4, 8]
    """
    return ((n + 3) // 4) * 4


def encoded_size(item: _Sized) -> int:
    """Calculate the encoded size of a value, message, element or bundle in bytes.

    Args:
        item: Anything exposing ``space()``

    Returns:
        Size in bytes of ``item`` on the wire

    Example:
        >>> encoded_size(Message(address="/foo").push(42))
        16  # 8 (address) + 4 (",i") + 4 (int32)
    """
    return item.space()


def value_sizes(message: Message) -> dict[str, int]:
    """Get the size in bytes of each value in a message.

    Keys are ``"<index>:<tag>"`` so repeated tags stay distinct.

    Example:
        >>> value_sizes(Message(address="/a").push(1).push("hello"))
        {'0:i': 4, '1:s': 8}
    """
    return {f"{i}:{value.type_tag()}": value.space() for i, value in enumerate(message.values)}


def element_sizes(bundle: Bundle) -> list[int]:
    """Get the encoded size of each element in a bundle, excluding its size prefix."""
    return [element.space() for element in bundle.elements]
