import logging
import os
import sys
from flask import Flask
from .request import JSONAPIRequest
import flask.app


class JSONAPIUtils:
    """This class configures the Flask application to paginate and count jsonapi collections
    :param app: a Flask application.
    :param LOGLEVEL: loglevel configuration variable, values from logging module (0: trace, .. 50: critical)
    """

    # Configuration settings are stored as class variables
    DEFAULT_PAGINATOR = "paged"
    DEFAULT_PAGE_SIZE = 10
    MAX_PAGE_SIZE = None  # no maximum
    TOP_LEVEL_LINKS_INCLUDE_PAGINATION = True
    TOP_LEVEL_META_INCLUDE_RECORD_COUNT = True
    TOP_LEVEL_META_RECORD_COUNT_KEY = "record_count"
    TOP_LEVEL_META_INCLUDE_PAGE_COUNT = False
    TOP_LEVEL_META_PAGE_COUNT_KEY = "page_count"
    LOGLEVEL = logging.WARNING

    def __init__(self, app: flask.app.Flask = None, *args, **kwargs) -> None:
        """
        Constructor
        """
        self.app = app
        if app is not None:
            self.init_app(app, *args, **kwargs)

    def init_app(self, app: flask.app.Flask, request_class: bool = True, **kwargs) -> None:
        """
        Application initialization: install the jsonapi request class and
        copy the configuration onto the class variables
        """
        if not isinstance(app, Flask):  # pragma: no cover
            raise TypeError("'app' should be Flask.")

        if request_class is True:
            app.request_class = JSONAPIRequest

        if app.config.get("DEBUG", False):
            log.setLevel(logging.DEBUG)

        for conf_name, conf_val in kwargs.items():
            setattr(JSONAPIUtils, conf_name, conf_val)

        for conf_name, conf_val in app.config.items():
            if hasattr(JSONAPIUtils, conf_name):
                setattr(JSONAPIUtils, conf_name, conf_val)

        app.extensions["jsonapi_utils"] = self
        log.debug(f"jsonapi_utils initialized for {app.name}")

    @staticmethod
    def init_logging(loglevel: int = logging.WARNING) -> logging.Logger:
        """
        Specify the log format used in the webserver logs
        The webserver will catch stderr so we redirect eveything to sys.stderr
        """
        log = logging.getLogger(__name__.split(".")[0])
        if log.level == logging.NOTSET:
            handler = logging.StreamHandler(sys.stderr)
            formatter = logging.Formatter("[%(asctime)s] %(levelname)s: %(message)s")
            handler.setFormatter(formatter)
            log.setLevel(loglevel)
            log.addHandler(handler)
        return log


#
# logging initialization
#
try:
    DEBUG = os.getenv("DEBUG", JSONAPIUtils.LOGLEVEL)
    LOGLEVEL = int(DEBUG)
except ValueError:  # pragma: no cover
    print(f'Invalid LogLevel in DEBUG Environment Variable! "{DEBUG}"')
    LOGLEVEL = logging.INFO

log = JSONAPIUtils.init_logging(LOGLEVEL)
