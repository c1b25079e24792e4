"""Display-safe rendering of a loaded configuration."""

from typing import Any, Dict

from .config_schema import AppConfig

SECRET_MARKERS = ["key", "secret", "password", "blowfish", "token"]

# Settings whose names look secret but whose values are not
_UNMASKED_KEYS = {"friendly_attrs", "pla_password_hash"}


def mask_value(value: Any) -> Any:
    """Keep the first four characters of a secret string."""
    if isinstance(value, str) and len(value) > 4:
        return value[:4] + "*" * (len(value) - 4)
    if value:
        return "***"
    return value


def config_to_display_dict(config: AppConfig) -> Dict[str, Any]:
    """Convert config to a display-safe dictionary (masks secrets)."""

    def mask_secrets(obj: Any) -> Any:
        if isinstance(obj, dict):
            masked = {}
            for key, value in obj.items():
                if key in _UNMASKED_KEYS:
                    masked[key] = value
                elif any(secret in key.lower() for secret in SECRET_MARKERS):
                    masked[key] = mask_value(value)
                else:
                    masked[key] = mask_secrets(value)
            return masked
        elif isinstance(obj, list):
            return [mask_secrets(item) for item in obj]
        return obj

    return mask_secrets(config.model_dump(mode="json"))
