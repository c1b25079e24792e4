"""Tests for display-safe configuration rendering."""

import json

from src.config.config_schema import AppConfig
from src.config.display import config_to_display_dict, mask_value


def make_config():
    return AppConfig(
        session={
            "blowfish": "cb4aa1df3df4b15711b55a53f5f78ea9",
            "recaptcha": {"enable": True, "key_site": "site-1234", "key_server": "server-5678"},
        },
        appearance={"friendly_attrs": {"userPassword": "Password", "mail": "Email"}},
        servers=[
            {
                "id": "ldap_pla",
                "server": {"name": "Local LDAP Server"},
                "appearance": {"pla_password_hash": "ssha"},
                "login": {"attr": "dn", "anon_bind": False, "allowed_dns": ["cn=admin,dc=example,dc=com"]},
            }
        ],
    )


def test_secrets_are_masked():
    display = config_to_display_dict(make_config())

    assert display["session"]["blowfish"] == "cb4a" + "*" * 28
    assert display["session"]["recaptcha"]["key_site"] == "site*****"
    assert display["session"]["recaptcha"]["key_server"] == "serv*******"


def test_non_secrets_are_kept():
    display = config_to_display_dict(make_config())

    assert display["appearance"]["friendly_attrs"] == {"userPassword": "Password", "mail": "Email"}
    server = display["servers"][0]
    assert server["appearance"]["pla_password_hash"] == "ssha"
    assert server["login"]["allowed_dns"] == ["cn=admin,dc=example,dc=com"]
    assert server["server"]["name"] == "Local LDAP Server"


def test_display_dict_is_json_serializable():
    display = config_to_display_dict(make_config())

    assert json.loads(json.dumps(display)) == display


def test_mask_value_short_and_empty():
    assert mask_value("abc") == "***"
    assert mask_value("") == ""
    assert mask_value(None) is None
