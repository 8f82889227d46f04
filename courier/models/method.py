"""HTTP request methods."""

from enum import Enum


class RequestMethod(str, Enum):
    """Standard HTTP verbs supported by request descriptors."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    CONNECT = "CONNECT"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    PATCH = "PATCH"
    TRACE = "TRACE"
