from .handoff import CustomerDirectory, StorefrontSso, handoff_url
from .listener import Authenticator, SessionWriter, SsoListener, UserDirectory
from .loginkeys import LoginKey, LoginKeyStore
from .token import HmacSha1Signer, Sha1SuffixSigner, SignedTokenCodec, TokenError, TokenResult

__all__ = [
    "Authenticator",
    "CustomerDirectory",
    "HmacSha1Signer",
    "LoginKey",
    "LoginKeyStore",
    "SessionWriter",
    "Sha1SuffixSigner",
    "SignedTokenCodec",
    "SsoListener",
    "StorefrontSso",
    "TokenError",
    "TokenResult",
    "UserDirectory",
    "handoff_url",
]
