"""Constants for GitHub service."""

GITHUB_API_URL = "https://api.github.com"
GITHUB_API_VERSION = "2022-11-28"

GITHUB_AUTHORIZE_URL = "https://github.com/login/oauth/authorize"
GITHUB_ACCESS_TOKEN_URL = "https://github.com/login/oauth/access_token"

# OAuth user-info fetch is the only call that is retried
OAUTH_USER_FETCH_ATTEMPTS = 3
OAUTH_USER_FETCH_DELAY_SECONDS = 1.0

# Repository sync limits
REPOS_PER_PAGE = 100
MAX_SYNC_REPOSITORIES = 15
MAX_REPOSITORY_SIZE_KB = 50_000  # GitHub reports size in KB
SYNC_COMMITS_PER_PAGE = 10

# Single-repository detail limits
DETAIL_COMMITS_PER_PAGE = 30
DETAIL_TIMELINE_LIMIT = 20
DETAIL_CONTRIBUTORS_LIMIT = 10
DETAIL_BRANCHES_LIMIT = 10
DETAIL_RELEASES_LIMIT = 5
DEFAULT_BRANCH = "main"
