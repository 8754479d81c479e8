from . import utils
from .otp import DEFAULT_DIGITS, OTP


class HOTP(OTP):
    """
    Counter-based codes for one Base32 secret.

    ``initial_count`` shifts every counter, so ``at(0)`` is the code for
    the moving factor ``initial_count``.
    """

    def __init__(self, s: str, digits: int = DEFAULT_DIGITS, initial_count: int = 0) -> None:
        self.initial_count = initial_count
        super().__init__(s=s, digits=digits)

    def at(self, count: int) -> str:
        """
        :param count: the OTP HMAC counter, relative to ``initial_count``
        :returns: OTP
        """
        return self.generate_otp(self.initial_count + count)

    def verify(self, otp: str, counter: int) -> bool:
        """
        Checks ``otp`` against the code for this counter only, there is no look-ahead.
        """
        return utils.strings_equal(str(otp), self.at(counter))
