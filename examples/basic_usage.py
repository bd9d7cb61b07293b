#!/usr/bin/env python3
"""Basic usage example for osccodec.

This example demonstrates:
1. Building a message with native and explicit OSC values
2. Encoding to the OSC wire format
3. Scheduling messages together in a bundle
4. Decoding a received packet back to a Message or Bundle
"""

from __future__ import annotations

from datetime import timedelta

from osccodec import (
    Bundle,
    Double,
    Message,
    OscTime,
    decode_packet,
    encode_packet,
    encoded_size,
    value_sizes,
)


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("osccodec Basic Usage Example")
    print("=" * 60)
    print()

    # Build a message
    print("1. Building a message...")
    msg = Message(address="/synth/1/note").push(60).push(0.8).push("sine")
    msg.push(Double(value=0.25))

    print(f"   Address: {msg.address}")
    print(f"   Type tags: {msg.type_tags()}")
    print(f"   Arguments: {msg.arguments}")
    print()

    # Analyze sizes
    print("2. Analyzing value sizes...")
    for key, size in value_sizes(msg).items():
        print(f"   {key}: {size} bytes")
    print(f"   Total: {encoded_size(msg)} bytes")
    print()

    # Encode
    print("3. Encoding to the OSC wire format...")
    data = encode_packet(msg)
    print(f"   Encoded: {data.hex()}")
    print()

    # Bundle
    print("4. Scheduling two messages one second from now...")
    when = OscTime.now().when + timedelta(seconds=1)
    bundle = Bundle(time=when).push(msg).push(Message(address="/synth/1/gate").push(True))
    bundle_data = encode_packet(bundle)
    print(f"   Bundle time: {bundle.time}")
    print(f"   Bundle size: {len(bundle_data)} bytes")
    print()

    # Decode
    print("5. Decoding the received packet...")
    decoded = decode_packet(bundle_data)
    assert isinstance(decoded, Bundle)
    for message in decoded.messages():
        print(f"   {message.address} {message.type_tags()} {message.arguments}")
    print(f"   Round trip OK: {decoded == bundle}")
    print()


if __name__ == "__main__":
    main()
