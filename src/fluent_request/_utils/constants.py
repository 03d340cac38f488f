# Headers
HEADER_AUTHORIZATION = "authorization"
HEADER_CONTENT_TYPE = "content-type"
HEADER_USER_AGENT = "user-agent"

# Payload encodings
ENCODING_JSON = "json"
ENCODING_FORM = "form"
ENCODING_BUFFER = "buffer"

CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_FORM = "application/x-www-form-urlencoded"
CONTENT_TYPE_OCTET_STREAM = "application/octet-stream"

# Defaults
DEFAULT_METHOD = "GET"
DEFAULT_TIMEOUT_MS = 30_000
DEFAULT_MAX_REDIRECTS = 21
DEFAULT_AUTH_SCHEME = "Bearer"

MILLISECONDS_PER_SECOND = 1000

# Engine option keys
OPTION_METHOD = "method"
OPTION_HEADERS = "headers"
OPTION_BODY = "body"
OPTION_TIMEOUT_MS = "timeout_ms"
OPTION_MAX_REDIRECTS = "max_redirects"
