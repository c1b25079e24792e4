"""Command line entry point: load, validate and show an LDAP admin configuration."""

import json
import logging
import sys
from typing import List, Optional

from .config import ConfigurationError, config_to_display_dict, load_config
from .config.config_schema import AppConfig
from .utils.logging import is_verbosity_flag, parse_verbosity, setup_logging

logger = logging.getLogger(__name__)


def log_summary(config: AppConfig) -> None:
    """Log what the host application will do with this configuration."""
    recaptcha = config.session.recaptcha
    logger.info(f"  reCAPTCHA: {'enabled' if recaptcha.enable else 'disabled'}")
    logger.info(f"  Friendly attributes: {len(config.appearance.friendly_attrs)}")

    for server in config.servers:
        logger.info(f"  Server '{server.id}': {server.server.name}")
        logger.info(f"    Address: {server.server.host}:{server.server.port}")
        logger.info(f"    Password hash: {server.appearance.pla_password_hash.value}")
        logger.info(f"    Login attribute: {server.login.attr}")
        logger.info(f"    Anonymous bind: {server.login.anon_bind}")
        for dn in server.login.allowed_dns:
            logger.debug(f"    Allowed DN: {dn}")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Load the configuration named on the command line and print it masked.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Process exit code
    """
    if argv is None:
        argv = sys.argv[1:]

    setup_logging(verbosity=parse_verbosity(argv))

    # Filter out verbosity flags
    args = [arg for arg in argv if not is_verbosity_flag(arg)]
    config_path = args[0] if args else "config.yaml"
    logger.info(f"Loading configuration from: {config_path}")

    try:
        config = load_config(config_path)
    except ConfigurationError as e:
        logger.error(f"✗ Failed to load configuration: {e}")
        return 1

    logger.info("✓ Configuration loaded")
    log_summary(config)

    print(json.dumps(config_to_display_dict(config), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
