"""Pydantic models for configuration validation."""

import hashlib
import re
from enum import Enum
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

PLACEHOLDER_PATTERN = re.compile(r"^<.*>$")

# RDN separators, ignoring escaped commas
_DN_SPLIT = re.compile(r"(?<!\\),")


def normalize_dn(dn: str) -> str:
    """Normalize a DN for comparison (case and whitespace insensitive)."""
    rdns = []
    for rdn in _DN_SPLIT.split(dn):
        attr, _, value = rdn.partition("=")
        rdns.append(f"{attr.strip().lower()}={value.strip().lower()}")
    return ",".join(rdns)


def _is_valid_dn(dn: str) -> bool:
    for rdn in _DN_SPLIT.split(dn):
        attr, sep, value = rdn.partition("=")
        if not sep or not attr.strip() or not value.strip():
            return False
    return True


class PasswordHash(str, Enum):
    """Password hash schemes supported for new passwords."""

    BLOWFISH = "blowfish"
    CLEAR = "clear"
    CRYPT = "crypt"
    EXT_DES = "ext_des"
    MD5 = "md5"
    MD5CRYPT = "md5crypt"
    SHA = "sha"
    SMD5 = "smd5"
    SSHA = "ssha"
    SHA256 = "sha256"
    SSHA256 = "ssha256"
    SHA384 = "sha384"
    SSHA384 = "ssha384"
    SHA512 = "sha512"
    SSHA512 = "ssha512"


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class RecaptchaConfig(_FrozenModel):
    """reCAPTCHA integration toggles."""

    enable: bool = Field(default=False, description="Present a CAPTCHA on the login form")
    key_site: str = Field(default="<put-here-key-site>", description="Public site key")
    key_server: str = Field(default="<put-here-key-server>", description="Private server key")

    @model_validator(mode="after")
    def validate_keys(self) -> "RecaptchaConfig":
        """Enabled CAPTCHA needs real keys; placeholders are fine when disabled."""
        if not self.enable:
            return self
        for name in ("key_site", "key_server"):
            value = getattr(self, name).strip()
            if not value or PLACEHOLDER_PATTERN.match(value):
                raise ValueError(f"{name} must be set when reCAPTCHA is enabled")
        return self

    def challenge_keys(self) -> Optional[Tuple[str, str]]:
        """Return (site, server) keys, or None when the CAPTCHA is disabled."""
        if not self.enable:
            return None
        return self.key_site, self.key_server


class SessionConfig(_FrozenModel):
    """Session and security settings."""

    blowfish: str = Field(
        ...,
        min_length=1,
        max_length=56,
        description="Symmetric secret protecting session tokens",
    )
    recaptcha: RecaptchaConfig = Field(
        default_factory=RecaptchaConfig, description="reCAPTCHA configuration"
    )

    def signing_key(self) -> bytes:
        """Derive a 32-byte session-signing key from the blowfish secret."""
        return hashlib.sha256(self.blowfish.encode("utf-8")).digest()


class AppearanceConfig(_FrozenModel):
    """Global appearance overrides."""

    friendly_attrs: Dict[str, str] = Field(
        default_factory=dict, description="Attribute name to display label"
    )

    @field_validator("friendly_attrs")
    @classmethod
    def validate_unique_attrs(cls, v: Dict[str, str]) -> Dict[str, str]:
        """Attribute names are case-insensitive, so keys must be unique ignoring case."""
        seen: Dict[str, str] = {}
        for attr in v:
            if not attr.strip():
                raise ValueError("Attribute name must not be empty")
            lowered = attr.lower()
            if lowered in seen:
                raise ValueError(f"Duplicate attribute label: '{seen[lowered]}' and '{attr}'")
            seen[lowered] = attr
        return v

    def label_for(self, attr: str) -> str:
        """Friendly label for an attribute, or the attribute name itself."""
        lowered = attr.lower()
        for name, label in self.friendly_attrs.items():
            if name.lower() == lowered:
                return label
        return attr


class ServerInfo(_FrozenModel):
    """Connection identity of an LDAP server."""

    name: str = Field(..., description="Display name of the server")
    host: str = Field(default="127.0.0.1", description="LDAP host name or address")
    port: int = Field(default=389, ge=1, le=65535, description="LDAP port")
    base: Tuple[str, ...] = Field(default=(), description="Base DNs (empty to auto-detect)")

    @field_validator("name", "host")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v.strip()


class ServerAppearance(_FrozenModel):
    """Per-server appearance settings."""

    pla_password_hash: PasswordHash = Field(
        default=PasswordHash.MD5, description="Hash scheme for new passwords"
    )

    @field_validator("pla_password_hash", mode="before")
    @classmethod
    def validate_hash(cls, v):
        """Accept any case, reject unknown schemes with a readable message."""
        if isinstance(v, PasswordHash):
            return v
        value = str(v).strip().lower()
        supported = [scheme.value for scheme in PasswordHash]
        if value not in supported:
            raise ValueError(
                f"Unsupported password hash: '{v}'. "
                f"Must be one of: {', '.join(supported)}"
            )
        return value


class LoginConfig(_FrozenModel):
    """Authentication policy for administrative logins."""

    attr: str = Field(..., description="Attribute used as the login identifier")
    anon_bind: bool = Field(default=True, description="Allow anonymous bind")
    allowed_dns: Tuple[str, ...] = Field(
        default=(), description="DNs permitted to authenticate"
    )

    @field_validator("attr")
    @classmethod
    def validate_attr(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Login attribute must not be empty")
        return v.strip()

    @field_validator("allowed_dns")
    @classmethod
    def validate_dns(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        for dn in v:
            if not _is_valid_dn(dn):
                raise ValueError(f"Invalid distinguished name: '{dn}'")
        return v


class ServerProfile(_FrozenModel):
    """One LDAP server block."""

    id: str = Field(..., min_length=1, description="Server identifier")
    server: ServerInfo = Field(..., description="Server identity")
    appearance: ServerAppearance = Field(
        default_factory=ServerAppearance, description="Server appearance"
    )
    login: LoginConfig = Field(..., description="Login policy")

    @model_validator(mode="after")
    def validate_login_policy(self) -> "ServerProfile":
        """Without anonymous bind, somebody must be allowed to log in."""
        if not self.login.anon_bind and not self.login.allowed_dns:
            raise ValueError(
                f"Server '{self.id}': allowed_dns must not be empty when anon_bind is false"
            )
        return self

    def permits_login(self, dn: str) -> bool:
        """Check whether a DN may authenticate against this server."""
        if not self.login.allowed_dns:
            return self.login.anon_bind
        target = normalize_dn(dn)
        return any(normalize_dn(allowed) == target for allowed in self.login.allowed_dns)


class AppConfig(_FrozenModel):
    """Main application configuration."""

    session: SessionConfig = Field(..., description="Session configuration")
    appearance: AppearanceConfig = Field(
        default_factory=AppearanceConfig, description="Appearance configuration"
    )
    servers: Tuple[ServerProfile, ...] = Field(..., description="LDAP servers")

    @model_validator(mode="after")
    def validate_server_ids(self) -> "AppConfig":
        if not self.servers:
            raise ValueError("At least one server must be defined")
        ids = [server.id for server in self.servers]
        duplicates = sorted({server_id for server_id in ids if ids.count(server_id) > 1})
        if duplicates:
            raise ValueError(f"Duplicate server id: {', '.join(duplicates)}")
        return self

    @property
    def default_server(self) -> ServerProfile:
        return self.servers[0]

    def get_server(self, server_id: str) -> ServerProfile:
        for server in self.servers:
            if server.id == server_id:
                return server
        raise KeyError(f"Unknown server: {server_id}")
