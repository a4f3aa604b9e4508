from enum import Enum
from enum import unique


class StrEnum(str, Enum):
    pass


@unique
class SpanOps(StrEnum):
    HTTP_CLIENT = "http.client"


@unique
class BreadcrumbCategories(StrEnum):
    HTTP = "http"


@unique
class BreadcrumbLevels(StrEnum):
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
