from inkwell.services.auth import AuthResolver
from inkwell.services.identity import (
    FirebaseIdentityVerifier,
    IdentityVerifier,
    SupabaseIdentityVerifier,
    create_verifier,
)

__all__ = [
    "AuthResolver",
    "FirebaseIdentityVerifier",
    "IdentityVerifier",
    "SupabaseIdentityVerifier",
    "create_verifier",
]
