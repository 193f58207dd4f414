"""Access to the ``[custom]`` section of the domain configuration."""

import os

from protean.utils.globals import current_domain

_ENV_OVERRIDES = {
    "catalog_database_uri": "CATALOG_DATABASE_URI",
}


def custom_setting(name, default=None):
    """Read a custom setting, letting an environment variable win where one is mapped."""
    env_var = _ENV_OVERRIDES.get(name)
    if env_var and os.getenv(env_var):
        return os.getenv(env_var)

    custom = current_domain.config.get("custom") or {}
    return custom.get(name, default)
