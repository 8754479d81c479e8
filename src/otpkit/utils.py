import base64
import binascii
import unicodedata
from hmac import compare_digest


def decode_base32(secret: str) -> bytes:
    """
    Decodes a human-typed Base32 secret into the raw key bytes.

    Spaces are dropped, the secret is upper-cased and any ``=`` padding
    left off by the user is restored before decoding.

    :param secret: the Base32 secret, e.g. ``"JBSW Y3DP EHPK 3PXP"``
    :returns: raw key bytes
    :raises ValueError: if the secret is not valid Base32
    """
    secret = secret.strip().replace(" ", "").upper()
    # Base32 input length must be a multiple of 8
    missing_padding = len(secret) % 8
    if missing_padding != 0:
        secret += "=" * (8 - missing_padding)
    try:
        return base64.b32decode(secret)
    except binascii.Error as exc:
        raise ValueError("Invalid base32 secret") from exc


def strings_equal(s1: str, s2: str) -> bool:
    """
    Timing-attack resistant string comparison.

    Normal comparison using == will short-circuit on the first mismatching
    character. This avoids that by scanning the whole string, though we
    still reveal to a timing attack whether the strings are the same
    length.
    """
    s1 = unicodedata.normalize("NFKC", s1)
    s2 = unicodedata.normalize("NFKC", s2)
    return compare_digest(s1.encode("utf-8"), s2.encode("utf-8"))
