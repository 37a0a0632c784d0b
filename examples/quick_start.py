"""
Quick Start Example for pypixbuf.

Builds a couple of buffers, combines them with the clamped operators and
round-trips one through the raw binary format.
"""

import tempfile
from pathlib import Path

from pypixbuf import FormatMismatchError, PixelBuffer, load_buffer


def main():
    """Run quick start example."""
    print("=" * 60)
    print("pypixbuf Quick Start Example")
    print("=" * 60 + "\n")

    print("img0:", PixelBuffer())

    img1 = PixelBuffer.filled(4, 3, 3, "RGB", 10)
    img1.set(0, 0, 0, 100)
    img1[1, 0, 1] = 150
    print("img1:", img1, "img1(0,0,0) =", img1.get(0, 0, 0))

    # Scalar, pixel and unary operators
    print("brighter:", img1 + 50)
    print("moreRed:", img1 + [50, 0, 0])
    print("inverted:", ~img1)
    print("thresh:", img1 > 100)
    print("half:", img1 / 2.0)

    # Buffers of different sizes combine over the union of their extents
    img2 = PixelBuffer.filled(2, 2, 3, "RGB", 200)
    print("sum:", img1 + img2, "sum(3,2) =", (img1 + img2).get_pixel(3, 2))
    print("diff:", img1 - img2)
    print("diffAbs:", img1 ^ img2)

    try:
        img1 + PixelBuffer.filled(4, 3, 1, "GRAY", 100)
    except FormatMismatchError as exc:
        print("Expected error (different formats):", exc)

    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "test.imgbin"
        img1.save(path)
        loaded = load_buffer(path)
        print("imgLoaded:", loaded, "equal:", loaded == img1)


if __name__ == "__main__":
    main()
