STORE_TYPE = "ELASTICSEARCH"

# Reserved document field holding the record key.
ID_FIELD = "gora_id"
ID_FIELD_TYPE = "keyword"

PARSE_MAPPING_FILE_KEY = "gora.elasticsearch.mapping.file"
DEFAULT_MAPPING_FILE = "gora-elasticsearch-mapping.xml"
XSD_VALIDATION = "gora.xsd_validation"
XSD_FILE = "gora-elasticsearch.xsd"
RESOURCES_PATH = "gora.resources.path"
AUTO_CREATE_SCHEMA = "gora.datastore.autocreateschema"

PROP_PREFIX = "gora.datastore.elasticsearch."
PROP_HOST = PROP_PREFIX + "host"
PROP_PORT = PROP_PREFIX + "port"
PROP_SCHEME = PROP_PREFIX + "scheme"
PROP_AUTHENTICATION_TYPE = PROP_PREFIX + "authenticationType"
PROP_USERNAME = PROP_PREFIX + "username"
PROP_PASSWORD = PROP_PREFIX + "password"
PROP_AUTHORIZATION_TOKEN = PROP_PREFIX + "authorizationToken"
PROP_API_KEY_ID = PROP_PREFIX + "apiKeyId"
PROP_API_KEY_SECRET = PROP_PREFIX + "apiKeySecret"
PROP_SOCKET_TIMEOUT = PROP_PREFIX + "socketTimeout"
PROP_MAX_RETRIES = PROP_PREFIX + "maxRetries"

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 9200
DEFAULT_SCHEME = "http"
DEFAULT_SOCKET_TIMEOUT = 60
DEFAULT_MAX_RETRIES = 3

# Upper bound on documents returned by a query without a limit.
DEFAULT_QUERY_SIZE = 10000
