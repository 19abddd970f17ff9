"""Static application constants shared by the API, client and CLI."""

APP_NAME = "Jezweb Analysis Tool"
APP_VERSION = "1.0.0"
APP_DESCRIPTION = "Comprehensive website analysis and security tool"

API_BASE_PATH = "/api"

# Default cache durations in seconds, overridable through Settings
CACHE_DURATION = {
    "dns": 3600,
    "whois": 86400,
    "ssl": 3600,
    "security": 1800,
    "performance": 300,
    "headers": 300,
}

# Carried from the dashboard configuration; not enforced by the API
RATE_LIMIT = {
    "max_requests": 100,
    "window_ms": 60000,
}

ERROR_MESSAGES = {
    "invalid_url": "Please enter a valid URL",
    "invalid_domain": "Please enter a valid domain name",
    "network_error": "Network error occurred. Please try again.",
    "rate_limit": "Too many requests. Please try again later.",
    "generic_error": "An error occurred. Please try again.",
}

SUCCESS_MESSAGES = {
    "analysis_complete": "Analysis completed successfully",
    "data_cached": "Results cached for faster future lookups",
}
