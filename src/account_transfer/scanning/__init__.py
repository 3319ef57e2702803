"""
Scanning Module
===============

Frame model and frame codec for scanned QR strings.

Example:
    from account_transfer.scanning import decode_frame

    frame = decode_frame(scanned_text)
    print(frame.version, frame.page)
"""

from account_transfer.scanning.frame import Frame
from account_transfer.scanning.decoder import decode_frame, encode_frame


__all__ = [
    "Frame",
    "decode_frame",
    "encode_frame",
]
