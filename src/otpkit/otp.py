import hashlib
import hmac
import logging

from . import utils

logger = logging.getLogger(__name__)

DEFAULT_DIGITS = 6
MAX_DIGITS = 10
SHA1_DIGEST_SIZE = 20

# Counter is an 8 byte (64 bit) moving factor, see RFC 4226 section 5.2
COUNTER_SIZE = 8


def int_to_bytestring(i: int, padding: int = COUNTER_SIZE) -> bytes:
    """
    Turns an integer to the OATH specified
    bytestring, which is fed to the HMAC
    along with the secret
    """
    if i < 0:
        raise ValueError("counter must be a non-negative integer")
    if i >> (8 * padding):
        raise ValueError("counter does not fit in {} bytes".format(padding))
    result = bytearray()
    while i != 0:
        result.append(i & 0xFF)
        i >>= 8
    # Bytes come out least significant first, HMAC wants network order
    return bytes(bytearray(reversed(result)).rjust(padding, b"\0"))


def check_digits(digits: int) -> int:
    if isinstance(digits, bool) or not isinstance(digits, int):
        raise ValueError("digits must be an integer")
    if digits < 1:
        raise ValueError("digits must be at least 1")
    if digits > MAX_DIGITS:
        raise ValueError("digits must be no greater than {}".format(MAX_DIGITS))
    return digits


def compute_hash(key: bytes, counter: bytes) -> bytes:
    """
    Computes HMAC-SHA1 of the encoded counter under the shared secret.

    :param key: the raw secret bytes
    :param counter: the 8 byte big-endian counter
    :returns: the 20 byte digest
    :raises ValueError: if the key is empty
    :raises RuntimeError: if the runtime does not provide HMAC-SHA1
    """
    if not key:
        raise ValueError("Empty key")
    try:
        hasher = hmac.new(bytes(key), bytes(counter), hashlib.sha1)
    except ValueError as exc:
        # hashlib reports a disabled or missing algorithm as ValueError,
        # that is a broken environment and not bad input
        logger.error("HMAC-SHA1 is not available: %s", exc)
        raise RuntimeError("HMAC-SHA1 is not available") from exc
    return hasher.digest()


def extract_dynamic_binary_code(digest: bytes) -> int:
    """
    Extracts the 31 bit dynamic binary code from an HMAC-SHA1 digest
    (RFC 4226 section 5.3).
    """
    if len(digest) < SHA1_DIGEST_SIZE:
        raise ValueError("digest must be at least {} bytes".format(SHA1_DIGEST_SIZE))
    hmac_hash = bytearray(digest)
    # Low nibble of the last byte picks a 4 byte window, offset 0-15
    offset = hmac_hash[SHA1_DIGEST_SIZE - 1] & 0xF
    # Top bit masked so the result is non-negative
    return (
        (hmac_hash[offset] & 0x7F) << 24
        | (hmac_hash[offset + 1] & 0xFF) << 16
        | (hmac_hash[offset + 2] & 0xFF) << 8
        | (hmac_hash[offset + 3] & 0xFF)
    )


def truncate(digest: bytes, digits: int) -> str:
    """
    Truncates an HMAC-SHA1 digest to a decimal code.

    :param digest: the HMAC-SHA1 output
    :param digits: length of the code
    :returns: the code, left-padded with zeros to exactly ``digits`` characters
    """
    check_digits(digits)
    code = extract_dynamic_binary_code(digest) % 10**digits
    return str(code).rjust(digits, "0")


def generate_hotp(key: bytes, counter: bytes, digits: int = DEFAULT_DIGITS) -> str:
    """
    Generates an HMAC-based one-time password.

    :param key: the raw secret bytes
    :param counter: the 8 byte big-endian counter
    :param digits: length of the code
    :returns: HOTP code
    """
    # HOTP(K, C) = Truncate(HMAC-SHA-1(K, C))
    return truncate(compute_hash(key, counter), digits)


class OTP(object):
    """
    Base class for OTP handlers holding a Base32 secret and a code length.
    """

    def __init__(self, s: str, digits: int = DEFAULT_DIGITS) -> None:
        self.digits = check_digits(digits)
        self.secret = s

    def generate_otp(self, input: int) -> str:
        """
        :param input: the HMAC counter value to use as the OTP input.
            Usually either the counter, or the computed integer based on the Unix timestamp
        """
        return generate_hotp(self.byte_secret(), int_to_bytestring(input), self.digits)

    def byte_secret(self) -> bytes:
        return utils.decode_base32(self.secret)

    def __repr__(self) -> str:
        return "{}(digits={})".format(self.__class__.__name__, self.digits)
