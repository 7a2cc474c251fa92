# Configuration settings should be set in app.config
# The JSONAPIUtils class variables hold the defaults, they're overwritten by init_app
# The get_config function resolves the current value: app.config -> class variable -> environment
import os
import logging
from flask import current_app
import jsonapi_utils
from typing import Optional, Union


def get_config(option: str) -> Optional[Union[bool, int, str]]:
    """Retrieve a configuration parameter from the app
    :param option: configuration parameter
    :return: configuration value
    """
    try:
        result = current_app.config[option]
    except (KeyError, RuntimeError):
        # not found or working outside of the application context
        result = getattr(jsonapi_utils.JSONAPIUtils, option, os.environ.get(option, None))
    return result


def get_int_config(option: str) -> int:
    """
    :param option: configuration parameter
    :return: configuration value as an int, eg. when read from the environment
    """
    return int(get_config(option))


def is_debug() -> bool:
    """
    We use the loglevel to check whether we're running in debug mode
    :return: whether the app is in debug mode
    :rtype: Boolean
    """
    return jsonapi_utils.log.getEffectiveLevel() < logging.INFO
