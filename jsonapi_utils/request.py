"""
http://jsonapi.org/format/#content-negotiation-servers

Servers MUST send all JSON API data in response documents with the header
"Content-Type: application/vnd.api+json" without any media type parameters.

JSONAPIRequest parses the jsonapi query arguments used for pagination and counting,
JSONAPIUtils.init_app installs it as the application request class.
"""

import re
from flask import Request
from .page_params import PageParams


# pylint: disable=too-many-ancestors
class JSONAPIRequest(Request):
    """
    Parse the jsonapi-related request arguments:
    - header: Content-Type should be "application/vnd.api+json"
    - query args: page[number], page[size], page[offset], page[limit], filter[]
    """

    jsonapi_content_types = ["application/json", "application/vnd.api+json"]
    is_jsonapi = False  # indicates whether this is a jsonapi request
    filter = ""  # filter is the custom filter, filter= url query argument

    def __init__(self, *args, **kwargs):
        """
        constructor
        """
        super().__init__(*args, **kwargs)
        self.parse_content_type()
        self.parse_jsonapi_args()

    def parse_content_type(self):
        """
        Check if the request content type is jsonapi
        """
        if not isinstance(self.content_type, str):  # pragma: no cover
            return

        content_type = self.content_type.split(";")[0]
        if content_type in self.jsonapi_content_types:
            self.is_jsonapi = True

    def parse_jsonapi_args(self):
        """
        parse the jsonapi request arguments:
        - page[]
        - filter[]
        """
        self.filters = {}
        self.page_params = PageParams.from_args(self.args)

        for arg, val in self.args.items():
            if arg == "filter":
                self.filter = val

            filter_attr = re.search(r"filter\[(\w+)\]", arg)
            if filter_attr:
                attr_name = filter_attr.group(1)
                self.filters[attr_name] = val
