import calendar
import datetime
import logging
import math
import time
from typing import Optional, Union

from . import utils
from .otp import COUNTER_SIZE, DEFAULT_DIGITS, OTP, generate_hotp, int_to_bytestring

logger = logging.getLogger(__name__)

DEFAULT_PERIOD = 30

# Time steps are signed 64 bit values
MIN_STEP = -(2 ** (8 * COUNTER_SIZE - 1))
STEP_MASK = 2 ** (8 * COUNTER_SIZE) - 1


def timecode(for_time: Union[int, float], period: int = DEFAULT_PERIOD) -> int:
    """
    Maps a Unix timestamp onto its time step, T = floor((time - T0) / X) with T0 = 0.

    :param for_time: seconds since the epoch, may be negative
    :param period: length of a time step in seconds
    :returns: the HOTP counter for that time
    """
    if isinstance(period, bool) or not isinstance(period, int):
        raise ValueError("period must be an integer")
    if period <= 0:
        raise ValueError("period must be a positive number of seconds")
    if isinstance(for_time, float) and not math.isfinite(for_time):
        raise ValueError("time must be a finite number of seconds")
    return int(for_time // period)


def step_to_bytestring(step: int) -> bytes:
    """
    Encodes a time step as the 8 byte counter, negative steps in two's complement.
    """
    if step < MIN_STEP:
        raise ValueError("time step does not fit in {} bytes".format(COUNTER_SIZE))
    if step < 0:
        step &= STEP_MASK
    return int_to_bytestring(step)


def generate_totp(
    key: bytes,
    period: int,
    for_time: Union[int, float],
    digits: int = DEFAULT_DIGITS,
) -> str:
    """
    Generates a time-based one-time password.

    :param key: the raw secret bytes
    :param period: length of a time step in seconds (e.g. 30)
    :param for_time: the time in Unix seconds
    :param digits: length of the code
    :returns: TOTP code
    """
    if not key:
        raise ValueError("Empty key")
    step = timecode(for_time, period)
    logger.debug("time step %d for period %ds", step, period)
    # TOTP = HOTP(K, T)
    return generate_hotp(key, step_to_bytestring(step), digits)


def now(key: Union[bytes, str], period: int = DEFAULT_PERIOD) -> str:
    """
    Generates the 6 digit TOTP for the current wall-clock time.

    A ``str`` key is used as its UTF-8 bytes, it is not Base32 decoded.
    """
    if isinstance(key, str):
        key = key.encode("utf-8")
    if not key:
        raise ValueError("Empty key")
    return generate_totp(key, period, int(time.time()), DEFAULT_DIGITS)


class TOTP(OTP):
    """
    Time-based codes for one Base32 secret.
    """

    def __init__(self, s: str, digits: int = DEFAULT_DIGITS, interval: int = DEFAULT_PERIOD) -> None:
        """
        :param s: secret in base32 format
        :param digits: length of the code
        :param interval: the time step in seconds, defaults to 30
        """
        # Rejects a non-positive interval
        timecode(0, interval)
        self.interval = interval
        super().__init__(s=s, digits=digits)

    def at(self, for_time: Union[int, float, datetime.datetime]) -> str:
        """
        Accepts either a Unix timestamp or a datetime object.

        :param for_time: the time to generate an OTP for
        :returns: OTP value
        """
        return generate_hotp(self.byte_secret(), step_to_bytestring(self.timecode(for_time)), self.digits)

    def now(self) -> str:
        """
        Generate the current time OTP

        :returns: OTP value
        """
        return self.at(time.time())

    def verify(self, otp: str, for_time: Optional[Union[int, float, datetime.datetime]] = None) -> bool:
        """
        Verifies the OTP passed in against the OTP for the time step of ``for_time``.

        :param otp: the OTP to check against
        :param for_time: Time to check OTP at (defaults to now)
        :returns: True if verification succeeded, False otherwise
        """
        if for_time is None:
            for_time = time.time()
        return utils.strings_equal(str(otp), self.at(for_time))

    def timecode(self, for_time: Union[int, float, datetime.datetime]) -> int:
        """
        Accepts either a timezone naive (local time) or aware datetime
        object, or a Unix timestamp.
        """
        if isinstance(for_time, datetime.datetime):
            if for_time.tzinfo:
                for_time = calendar.timegm(for_time.utctimetuple())
            else:
                for_time = time.mktime(for_time.timetuple())
        return timecode(for_time, self.interval)
