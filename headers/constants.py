"""HTTP Request Headers Constants

These values are used to present usage requests as coming from the official Codex CLI
"""

# User-Agent string for ChatGPT backend requests
USER_AGENT = "codex-cli/1.0.0"

# Routes a request to a specific ChatGPT workspace when a login spans several
CHATGPT_ACCOUNT_ID_HEADER = "chatgpt-account-id"
