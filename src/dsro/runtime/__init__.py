"""Agent runtime — addresses, messages, containers and transports."""

from dsro.runtime.container import Agent, Container
from dsro.runtime.errors import (
    ConvergenceTimeoutError,
    RuntimeProtocolError,
    UnknownAddressError,
)
from dsro.runtime.messages import (
    Address,
    LocalBestMessage,
    Message,
    ResourceMessage,
    decode_message,
    encode_message,
)
from dsro.runtime.transport import ChaosTransport, InMemoryTransport, Transport

__all__ = [
    "Address",
    "Agent",
    "ChaosTransport",
    "Container",
    "ConvergenceTimeoutError",
    "InMemoryTransport",
    "LocalBestMessage",
    "Message",
    "ResourceMessage",
    "RuntimeProtocolError",
    "Transport",
    "UnknownAddressError",
    "decode_message",
    "encode_message",
]
