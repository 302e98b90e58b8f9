"""Module holding constants used across orgcloner."""

API_BASE = "https://api.github.com"
GITHUB_API_ACCEPT = "application/vnd.github+json"
USER_AGENT = "orgcloner/0.1"
PER_PAGE = 100
DEFAULT_CLONE_PATH = "."
ARCHIVE_SUFFIX = ".tar.gz"
# any non-empty username works, the token is sent as the password
CLONE_USERNAME = "x-access-token"
GIT_TIMEOUT_SEC = 600
HTTP_TIMEOUT_SEC = 30
