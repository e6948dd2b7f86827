"""
Bit-Plane Steganography Service

Hides a byte string in one chosen bit (0-7) of the red channel of an RGBA
image, one message bit per pixel, starting at a caller-chosen pixel. The
returned end point is needed to read the message back.
"""

__version__ = "1.0.0"
