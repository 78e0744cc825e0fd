"""
Object images: a big-endian stream of 16-bit words, the first being the
address the rest are loaded at. No header, no length; the stream ends
where the image ends.
"""

import sys
from array import array

from .errors import ImageLoadError
from .words import lc_hex

def _from_big_endian(data):
    words = array('H')
    words.frombytes(data)
    if sys.byteorder == 'little':
        words.byteswap()
    return words

def read_image(stream):
    """
    Read an image from a binary stream, returning (origin, words).
    """
    data = stream.read()
    if len(data) < 2:
        raise ImageLoadError("image has no origin word")
    if len(data) % 2:
        raise ImageLoadError("image ends in the middle of a word")
    words = _from_big_endian(data)
    return words[0], words[1:]

def load_image(memory, stream):
    origin, words = read_image(stream)
    memory.load(origin, words)
    return origin, len(words)

def load_image_file(memory, filename):
    """
    Load the image in filename into memory; returns (origin, count).
    """
    try:
        with open(filename, 'rb') as fp:
            return load_image(memory, fp)
    except ImageLoadError as exc:
        if exc.path is None:
            raise type(exc)(str(exc), filename) from exc
        raise
    except OSError as exc:
        raise ImageLoadError(exc.strerror or str(exc), filename) from exc

def save_image(memory, origin, stop, stream):
    """
    Write memory[origin:stop] to stream as an image loading at origin.
    """
    if stop < origin:
        raise ValueError("image end %s is below its origin %s" %
                         (lc_hex(stop), lc_hex(origin)))
    words = array('H', [origin])
    words.extend(memory.dump(origin, stop))
    if sys.byteorder == 'little':
        words.byteswap()
    words.tofile(stream)
    return stop - origin
