"""
Frame Structure for the Link-Layer Simulator

This module defines the mock frame exchanged between machines. It is
protocol-agnostic: there are no header fields, control bits or real
error-checking schemes, only an id, a payload and a kind tag.
"""

import dataclasses
from dataclasses import dataclass
from enum import Enum
from functools import reduce


class FrameKind(Enum):
    """Frame kind enumeration."""
    DATA = 0x01
    CONFIRMATION = 0x02


@dataclass(frozen=True)
class Frame:
    """
    Link Layer Frame.

    Frames are never mutated once built. A channel delivers a copy to the
    destination, so the sender may keep using the original.

    Attributes:
        id: Frame identifier, correlates DATA frames with their confirmations
        data: Frame payload (empty for confirmations)
        kind: DATA or CONFIRMATION
    """

    id: int
    data: bytes = b''
    kind: FrameKind = FrameKind.DATA

    def __post_init__(self):
        # Any byte sequence is accepted; store it as immutable bytes.
        if not isinstance(self.data, bytes):
            object.__setattr__(self, 'data', bytes(self.data))

    @property
    def payload_size(self) -> int:
        """Get payload size."""
        return len(self.data)

    @property
    def is_confirmation(self) -> bool:
        """Check if this frame acknowledges a DATA frame."""
        return self.kind is FrameKind.CONFIRMATION

    def decode(self) -> str:
        """
        Decode the payload as UTF-8 text.

        Invalid byte sequences are replaced with U+FFFD, so this never raises.

        Returns:
            Decoded payload
        """
        return self.data.decode('utf-8', errors='replace')

    def checksum(self) -> int:
        """
        Calculate a mock checksum: XOR of the id with every payload byte.

        The kind is not part of the checksum. This is only used for
        demonstration and is not suitable for real error detection.

        Returns:
            Checksum value (a byte when id is a byte)
        """
        return reduce(lambda acc, byte: acc ^ byte, self.data, self.id)

    def copy(self) -> 'Frame':
        """Return an equal, independent frame."""
        return dataclasses.replace(self)

    @classmethod
    def create_data_frame(cls, frame_id: int, payload: bytes) -> 'Frame':
        """
        Create a DATA frame.

        Args:
            frame_id: Frame identifier
            payload: Frame payload

        Returns:
            DATA frame
        """
        return cls(id=frame_id, data=payload, kind=FrameKind.DATA)

    @classmethod
    def create_confirmation_frame(cls, frame_id: int) -> 'Frame':
        """
        Create a CONFIRMATION frame with an empty payload.

        Args:
            frame_id: Id of the DATA frame being acknowledged

        Returns:
            CONFIRMATION frame
        """
        return cls(id=frame_id, data=b'', kind=FrameKind.CONFIRMATION)

    def __repr__(self) -> str:
        return (f"Frame(kind={self.kind.name}, id={self.id}, "
                f"payload_len={len(self.data)}, "
                f"checksum=0x{self.checksum():02x})")


if __name__ == "__main__":
    print("=" * 60)
    print("FRAME STRUCTURE TEST")
    print("=" * 60)

    data_frame = Frame.create_data_frame(7, "Hello World!".encode())
    print(f"\nDATA Frame: {data_frame}")
    print(f"  Decoded: {data_frame.decode()!r}")
    print(f"  Checksum: {data_frame.checksum()}")

    ack_frame = Frame.create_confirmation_frame(7)
    print(f"\nCONFIRMATION Frame: {ack_frame}")

    broken = Frame(1, b"ok \xff\xfe")
    print(f"\nInvalid UTF-8 decodes lossily: {broken.decode()!r}")
