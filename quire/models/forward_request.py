import msgspec

from quire.models.launch_config import LaunchConfig
from quire.utils.exception import InvalidForwardRequest

# One JSON document per line on the local socket
MESSAGE_TERMINATOR = b"\n"


class ForwardRequest(msgspec.Struct):
    """Request a secondary instance sends to the primary one before exiting."""

    config: LaunchConfig
    working_directory: str = ""
    restore: bool = True


class ForwardReply(msgspec.Struct):
    """Answer of the primary instance. ``in_system_tray`` tells whether it was restored from the tray."""

    accepted: bool = True
    in_system_tray: bool = False


def encode_message(message: ForwardRequest | ForwardReply) -> bytes:
    return msgspec.json.encode(message) + MESSAGE_TERMINATOR


def decode_request(data: bytes) -> ForwardRequest:
    """
    Decode one request line received by the primary instance.

    :raises InvalidForwardRequest: If the bytes are not a valid request
    """
    try:
        return msgspec.json.decode(data.strip(), type=ForwardRequest)
    except msgspec.DecodeError as e:
        raise InvalidForwardRequest(str(e)) from e


def decode_reply(data: bytes) -> ForwardReply | None:
    """Decode the primary's reply; None if it is missing or garbled."""
    try:
        return msgspec.json.decode(data.strip(), type=ForwardReply)
    except msgspec.DecodeError:
        return None
