"""Error taxonomy.

Every member is terminal for the request. Each one knows the HTTP status and the
short public label it maps to, so the response side never has to guess.
"""


class ChatProxyError(Exception):
    status_code = 500
    label = "Internal Server Error"


class ValidationError(ChatProxyError):
    status_code = 400


class MethodNotAllowedError(ValidationError):
    status_code = 405
    label = "Method Not Allowed"


class MissingBodyError(ValidationError):
    label = "Missing request body"


class MalformedBodyError(ValidationError):
    label = "Invalid JSON body"


class MissingQueryError(ValidationError):
    label = "Missing query"


class ConfigError(ChatProxyError):
    pass


class MissingCredentialError(ConfigError):
    pass


class UpstreamError(ChatProxyError):
    pass
