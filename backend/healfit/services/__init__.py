"""Backend services."""
from healfit.services.auth_service import AuthService, auth_service
from healfit.services.field_encryption import FieldEncryption, get_field_encryption
from healfit.services.otp_service import OtpService, otp_service

__all__ = [
    "AuthService",
    "auth_service",
    "FieldEncryption",
    "get_field_encryption",
    "OtpService",
    "otp_service",
]
