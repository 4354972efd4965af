"""Constants for the order tracking links service."""

SERVICE_NAME = "Order Tracking Links"

# Shopify Admin API configuration
SHOPIFY_DEFAULT_API_VERSION = "2024-07"
SHOPIFY_GRAPHQL_ENDPOINT = "/admin/api/{api_version}/graphql.json"
SHOPIFY_ACCESS_TOKEN_HEADER = "X-Shopify-Access-Token"

# Order queries
ORDER_NAME_MARKER = "#"
EMAIL_LOOKUP_LIMIT = 20
DEFAULT_REQUEST_TIMEOUT = 15  # seconds

# Config keys
CONF_STORE_DOMAIN = "store_domain"
CONF_ACCESS_TOKEN = "access_token"
CONF_API_VERSION = "api_version"
CONF_REQUEST_TIMEOUT = "request_timeout"
CONF_HOST = "host"
CONF_PORT = "port"
CONF_CORS_ALLOWED_ORIGINS = "cors_allowed_origins"
CONF_LOG_LEVEL = "log_level"

# Environment variables mapped onto config keys
ENV_VARS = {
    CONF_STORE_DOMAIN: "SHOPIFY_STORE_DOMAIN",
    CONF_ACCESS_TOKEN: "SHOPIFY_ADMIN_ACCESS_TOKEN",
    CONF_API_VERSION: "SHOPIFY_API_VERSION",
    CONF_REQUEST_TIMEOUT: "REQUEST_TIMEOUT",
    CONF_HOST: "HOST",
    CONF_PORT: "PORT",
    CONF_CORS_ALLOWED_ORIGINS: "CORS_ALLOWED_ORIGINS",
    CONF_LOG_LEVEL: "LOG_LEVEL",
}

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_CORS_ALLOWED_ORIGINS = ("zendesk.com", "localhost", "github.io")

# HTTP routes
ROUTE_LINKS = "/api/links"
ROUTE_LOOKUP = "/api/lookup"
ROUTE_HEALTH = "/api/health"

# Request/response fields
ATTR_ORDER_NAME = "orderName"
ATTR_EMAIL = "email"
ATTR_ORDER_NUMERIC_ID = "orderNumericId"
ATTR_TRACKING_NUMBER = "trackingNumber"
ATTR_CARRIER_URL = "carrierUrl"
ATTR_UNIVERSAL_URL = "universalUrl"
ATTR_CREATED_AT = "createdAt"
ATTR_ORDERS = "orders"
ATTR_ORDER_COUNT = "orderCount"
ATTR_LATEST_ORDER = "latestOrder"
ATTR_ERROR = "error"

# Fulfillment status reported when the provider omits one
STATUS_UNFULFILLED = "UNFULFILLED"
