from .hotp import HOTP as HOTP
from .otp import OTP as OTP
from .otp import compute_hash as compute_hash
from .otp import extract_dynamic_binary_code as extract_dynamic_binary_code
from .otp import generate_hotp as generate_hotp
from .otp import int_to_bytestring as int_to_bytestring
from .otp import truncate as truncate
from .totp import TOTP as TOTP
from .totp import generate_totp as generate_totp
from .totp import now as now
from .totp import step_to_bytestring as step_to_bytestring
from .totp import timecode as timecode
from .utils import decode_base32 as decode_base32

__version__ = "1.0.0"
