"""Agent addresses and the closed set of protocol messages.

Messages are frozen pydantic models tagged by a ``kind`` literal, so the
:data:`Message` union can be dispatched with ``match`` and decoded from
JSON without a type registry.  A received message is never mutated; relays
forward the exact same object.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from dsro.core.model.resource import DiscreteResource


@dataclass(frozen=True, order=True)
class Address:
    """Routable endpoint: the hosting container plus a container-local id."""

    container: str
    aid: str

    def __str__(self) -> str:
        return f"{self.container}/{self.aid}"


class ResourceMessage(BaseModel):
    """Announces that ``source`` owns ``payload``."""

    model_config = ConfigDict(frozen=True, ser_json_inf_nan="constants")

    kind: Literal["resource"] = "resource"
    source: Address
    payload: DiscreteResource


class LocalBestMessage(BaseModel):
    """Announces the best combination of owners ``source`` knows of."""

    model_config = ConfigDict(frozen=True, ser_json_inf_nan="constants")

    kind: Literal["local_best"] = "local_best"
    source: Address
    solution_set: tuple[Address, ...]
    cost: float


Message = Annotated[ResourceMessage | LocalBestMessage, Field(discriminator="kind")]

_MESSAGE_ADAPTER: TypeAdapter[ResourceMessage | LocalBestMessage] = TypeAdapter(Message)


def encode_message(message: ResourceMessage | LocalBestMessage) -> bytes:
    """Serialise a message to JSON bytes."""
    return message.model_dump_json().encode()


def decode_message(data: bytes) -> ResourceMessage | LocalBestMessage:
    """Deserialise bytes produced by :func:`encode_message`."""
    return _MESSAGE_ADAPTER.validate_json(data)
