# Headers
HEADER_ACCEPT = "Accept"
HEADER_AUTHORIZATION = "Authorization"
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_USER_AGENT = "User-Agent"

# SDK identity
SDK_NAME = "restcore-python-sdk"
SDK_VERSION = "0.1.0"

# Content types
APPLICATION_JSON = "application/json"
APPLICATION_FORM_URLENCODED = "application/x-www-form-urlencoded"
APPLICATION_OCTET_STREAM = "application/octet-stream"

# JSON path navigation
DEFAULT_MAX_JSON_PATH_DEPTH = 5
EXHAUSTED_PATH_SENTINEL = "ExhaustedVariadicParameterEncoding"

# Environment
ENV_SSL_CERT_FILE = "SSL_CERT_FILE"
ENV_REQUESTS_CA_BUNDLE = "REQUESTS_CA_BUNDLE"
ENV_SSL_CERT_DIR = "SSL_CERT_DIR"
