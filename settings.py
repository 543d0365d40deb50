from config.loader import get_config_loader

# Get the config loader instance
config = get_config_loader()

LOG_LEVEL = config.get("LOG_LEVEL", "warning")

# Codex CLI credential location (compatibility constants - not user configurable)
# The Codex CLI reads auth.json from $CODEX_HOME, falling back to ~/.codex
CODEX_HOME_ENV = "CODEX_HOME"
CODEX_DIR_NAME = ".codex"
AUTH_FILE_NAME = "auth.json"

# Stored accounts managed by the switcher
ACCOUNTS_FILE = config.get("ACCOUNTS_FILE", "~/.codex-switcher/accounts.json")

# ChatGPT backend (hardcoded - not user configurable)
CHATGPT_BACKEND_API = "https://chatgpt.com/backend-api"
USAGE_ENDPOINT = f"{CHATGPT_BACKEND_API}/wham/usage"

# Timeout configuration
# Connection timeout: Time to establish TCP connection
CONNECT_TIMEOUT = config.get("CONNECT_TIMEOUT", 10.0)
# Request timeout: Total timeout for a single usage request
REQUEST_TIMEOUT = config.get("REQUEST_TIMEOUT", 30.0)

# Maximum in-flight usage requests during a refresh (0 = one per account)
USAGE_MAX_CONCURRENCY = config.get("USAGE_MAX_CONCURRENCY", 0)
