# Exception Handlers
#
# The application loglevel determines the level of detail shown to the user.
# If set to debug, too much sensitive info might be shown !
#
# The request layer maps the exceptions to a response, for example using to_dict():
# {
#      "title": "RecordCountError",
#      "detail": "Record Count Error: (debug logging disabled)",
#      "code": "record_count",
#      "status": "500"
# }
#
from http import HTTPStatus
from sqlalchemy.exc import DontWrapMixin
import jsonapi_utils
from .config import is_debug

HIDDEN_LOG = "(debug logging disabled)"


class JsonapiError(Exception, DontWrapMixin):
    """
    Base class for the errors raised while paginating, counting and extracting request params
    """

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR.value
    message = "Error: "
    api_code = None

    def __init__(self, message="", status_code=None, api_code=None):
        """
        :param message: Message to be returned in the (json) body
        :param status_code: HTTP Status code
        :param api_code: API code
        """
        Exception.__init__(self, message)
        if status_code is not None:
            self.status_code = status_code
        if api_code is not None:
            self.api_code = api_code
        jsonapi_utils.log.error("%s: %s", self.__class__.__name__, message)
        if is_debug():
            self.message += str(message)
        else:
            self.message += HIDDEN_LOG

    def to_dict(self):
        """
        :return: jsonapi error object
        """
        result = {"title": self.__class__.__name__, "detail": self.message, "status": str(self.status_code)}
        if self.api_code:
            result["code"] = self.api_code
        return result


class RecordCountError(JsonapiError):
    """
    This exception is raised when the records can't be counted:
    the record source isn't a query nor a list, or the explicit count isn't a number
    """

    message = "Record Count Error: "
    api_code = "record_count"


class QueryRejected(JsonapiError):
    """
    This exception is raised when the database rejected every count strategy
    """

    message = "Query Rejected: "
    api_code = "query_rejected"


class UnsupportedPaginatorName(JsonapiError):
    """
    This exception is raised when a resource declares a paginator that hasn't been registered
    """

    message = "Unsupported Paginator: "
    api_code = "unsupported_paginator"


class RelationshipKeyCollision(JsonapiError):
    """
    This exception is raised when a relationship name occurs in both the to-one
    and the to-many relationships of a request operation
    """

    message = "Relationship Key Collision: "
    api_code = "relationship_key_collision"
