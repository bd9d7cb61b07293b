"""Packet dump and encode CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Union

from ..codec import decode_packet, encode_packet
from ..models.bundle import Bundle
from ..models.message import Message
from ..models.values import Blob, OscValue, String


def dump_file(file_path: Path) -> None:
    """Decode a raw packet file and print its structure.

    Args:
        file_path: Path to a file holding exactly one OSC packet
    """
    data = file_path.read_bytes()
    content = decode_packet(data)

    print("|" * 7, "osccodec: Open Sound Control Codec", "|" * 7)
    print(f"{len(data)} bytes loaded from {file_path}.")
    print()

    for line in format_content(content):
        print(line)


def format_content(content: Union[Message, Bundle], indent: int = 0) -> list[str]:
    """Render a message or bundle as indented text lines."""
    pad = "    " * indent

    if isinstance(content, Message):
        lines = [f"{pad}{content.address} {content.type_tags()} ({content.space()} bytes)"]
        for i, value in enumerate(content.values, 1):
            lines.append(f"{pad}    {i}. {value.type_tag()} {_format_value(value)}")
        return lines

    lines = [f"{pad}#bundle @ {content.time} ({content.space()} bytes)"]
    for element in content.elements:
        lines.extend(format_content(element.content, indent + 1))
    return lines


def _format_value(value: OscValue) -> str:
    if isinstance(value, Blob):
        return f"<{len(value.value)} bytes> {value.value.hex()}"
    if isinstance(value, String):
        return repr(value.value)
    return str(value.value)


def _parse_argument(text: str) -> Union[int, float, str]:
    for convert in (int, float):
        try:
            return convert(text)
        except ValueError:
            continue
    return text


def encode_arguments(address: str, arguments: list[str]) -> bytes:
    """Build a message from command-line words and encode it.

    Words that parse as int become int32 (int64 if large), words that parse
    as float become float32, everything else is sent as a string.
    """
    message = Message(address=address)
    for argument in arguments:
        message.push(_parse_argument(argument))
    return encode_packet(message)
