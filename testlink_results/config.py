"""Configuration for the result seeker, read from a .env file and the environment."""

import os
from pathlib import Path

DEFAULT_INCLUDE_PATTERN = "TEST-*.xml"
DEFAULT_KEY_CUSTOM_FIELD = "testCustomField"
DEFAULT_SEEKER = "testcases"
DEFAULT_PORT = "8979"

SEEKER_KINDS = ("testcases", "classes", "suites")

CONFIG_KEYS = ['TESTLINK_INCLUDE_PATTERN', 'TESTLINK_KEY_CUSTOM_FIELD',
               'TESTLINK_SEEKER', 'FASTMCP_PORT']


def load_config() -> dict:
    """Load config from environment variables and .env file.

    Environment variables take precedence over .env file values.
    """
    paths = [
        os.environ.get('TESTLINK_RESULTS_CONFIG'),
        Path.cwd() / '.env',
        Path(__file__).parent.parent / '.env',
    ]
    config = {}
    for p in paths:
        if p and Path(p).is_file():
            for line in Path(p).read_text().splitlines():
                line = line.strip()
                if line and not line.startswith('#') and '=' in line:
                    key, value = line.split('=', 1)
                    config[key.strip()] = value.strip()
            break

    for key in CONFIG_KEYS:
        env_value = os.environ.get(key)
        if env_value is not None:
            config[key] = env_value

    return config


def get_include_pattern() -> str:
    return load_config().get('TESTLINK_INCLUDE_PATTERN') or DEFAULT_INCLUDE_PATTERN


def get_key_custom_field() -> str:
    return load_config().get('TESTLINK_KEY_CUSTOM_FIELD') or DEFAULT_KEY_CUSTOM_FIELD


def get_seeker_kind() -> str:
    kind = load_config().get('TESTLINK_SEEKER') or DEFAULT_SEEKER
    if kind not in SEEKER_KINDS:
        raise ValueError(f"Unknown seeker '{kind}', expected one of {', '.join(SEEKER_KINDS)}")
    return kind


def get_port() -> int:
    return int(load_config().get('FASTMCP_PORT') or DEFAULT_PORT)
