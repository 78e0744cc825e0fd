"""
Helpers for 16-bit LC-3 words: truncation, sign extension and the
xFFFF notation used in listings and diagnostics.
"""

def ascii_str(i):
    if i < 256:
        if i < 32 or i > 127: # integers
            return "(or %s)" % i
        else: # int, or ASCII
            return "(or %s, %s)" % (i, repr(chr(i)))
    else:
        return ""

class HEX(int):
    def __repr__(self):
        return lc_hex(self)

def lc_hex(h):
    """ Format the value in the form xFFFF """
    return 'x%04X' % lc_bin(h)

def lc_bin(v):
    """ Truncate any extra bytes """
    return v & 0xFFFF

def is_composed_of(s, letters):
    return len(s) > 0 and sum([s.count(letter) for letter in letters]) == len(s)

def is_hex(s):
    if len(s) > 1:
        if s[0] in "xX":
            if s[1] == "-":
                return is_composed_of(s[2:].upper(), "0123456789ABCDEF")
            else:
                return is_composed_of(s[1:].upper(), "0123456789ABCDEF")
    return False

def is_bin(s):
    return is_composed_of(s, "01")

def sign_extend(value, bit_count):
    """
    Sign-extend a field of bit_count bits to 16 bits, check the most
    significant bit of the field
    """
    if (value >> (bit_count - 1)) & 1:
        return lc_bin(value | (0xFFFF << bit_count))
    return value

def lc_int(v):
    if v & (1 << 15): # negative
        return -((~(v & 0xFFFF) + 1) & 0xFFFF)
    else:
        return v

def plus(v1, v2):
    """
    Add two words, wrapping around at 16 bits.
    """
    return lc_bin(v1 + v2)

def parse_word(word):
    """
    Parse an LC-3 literal into a word: x3000, x-1, #10, -3, 12 or a
    16-digit binary string.
    """
    if is_hex(word):
        if word[1] == "-":
            return lc_bin(-int(word[2:], 16))
        return lc_bin(int(word[1:], 16))
    elif len(word) == 16 and is_bin(word):
        return int(word, 2)
    elif word.startswith("#"):
        return lc_bin(int(word[1:]))
    try:
        return lc_bin(int(word))
    except ValueError:
        raise ValueError('Invalid word: "%s"' % word)
