"""Application-wide constants."""

APP_TITLE = "Nearzero deploy"

DEFAULT_API_URL = "https://dotcqkmhu1.execute-api.ap-south-1.amazonaws.com/api"
DEFAULT_PER_PAGE = 100
DEFAULT_REQUEST_TIMEOUT = 30.0

# Timeout for gh CLI operations (seconds)
GH_TIMEOUT_SECONDS = 30

MOCK_IDENTITY: dict[str, str] = {
    "login": "octocat",
    "name": "The Octocat",
    "avatar_url": "https://github.com/images/error/octocat_happy.gif",
}
MOCK_ACCESS_TOKEN = "gho_mock_token_0123456789"

# Shaped like the hosting API's /user/repos response, most recently updated first.
MOCK_REPOSITORIES: list[dict[str, object]] = [
    {
        "id": 1296269,
        "name": "portfolio-site",
        "full_name": "octocat/portfolio-site",
        "description": "Personal portfolio built with Next.js",
        "html_url": "https://github.com/octocat/portfolio-site",
        "stargazers_count": 42,
        "updated_at": "2025-03-01T10:15:00Z",
        "language": "TypeScript",
        "private": False,
    },
    {
        "id": 1296270,
        "name": "orders-api",
        "full_name": "octocat/orders-api",
        "description": "REST API for order management",
        "html_url": "https://github.com/octocat/orders-api",
        "stargazers_count": 7,
        "updated_at": "2025-02-21T08:00:00Z",
        "language": "Python",
        "private": True,
    },
    {
        "id": 1296271,
        "name": "docs",
        "full_name": "octocat/docs",
        "description": None,
        "html_url": "https://github.com/octocat/docs",
        "stargazers_count": 0,
        "updated_at": "2024-12-30T17:45:00Z",
        "language": None,
        "private": False,
    },
]

TABLE_COLUMNS = ("#", "Key", "Value")

PASTE_HINT = "Paste variables, e.g. NEXT_PUBLIC_API=https://example.com · ctrl+w to add · Escape to cancel"

HELP_TEXT = """\
 Deployment
 ──────────────────────────────
 c            Choose deployment type
 r            Choose repository
 D            Deploy

 Variables
 ──────────────────────────────
 o            Add variable
 p            Paste variables (.env, KEY: value, KEY value)
 i / Enter    Edit selected variable
 d d          Delete selected variable
 y            Copy variables as .env

 Navigation
 ──────────────────────────────
 j / ↓        Move down
 k / ↑        Move up

 General
 ──────────────────────────────
 ?            Toggle this help
 q            Quit\
"""
