"""
Standard http data keys, shared by span data and breadcrumb data.

For example:

span.set_data(STATUS, 404)
"""

# data keys
METHOD = "method"
URL = "url"
STATUS = "status"
ERROR = "error"
BODY = "body"

# reserved header carrying the serialized trace context
TRACE_HEADER_NAME = "sentry-trace"

# entry of ``breadcrumbs_logger`` enabling http breadcrumbs
HTTP_LOGGER = "http_logger"
