import os

from dotenv import load_dotenv

from utils import parse_bool, parse_options

# Load environment variables
load_dotenv()


# Sentry DSNs; an empty value disables the matching reporting branch
SENTRY_DSN = os.getenv("SENTRY_DSN", "")
SENTRY_JS_DSN = os.getenv("SENTRY_JS_DSN", "")

# SDK options as JSON objects, e.g. {"environment": "staging"}
SENTRY_OPTIONS = parse_options(os.getenv("SENTRY_OPTIONS", ""))
SENTRY_JS_OPTIONS = parse_options(os.getenv("SENTRY_JS_OPTIONS", ""))

SENTRY_PROJECT_URL = os.getenv("SENTRY_PROJECT_URL", "")
SENTRY_ENABLED = parse_bool(os.getenv("SENTRY_ENABLED"), default=True)
SENTRY_JS_SCRIPT_URL = os.getenv(
    "SENTRY_JS_SCRIPT_URL", "https://cdn.ravenjs.com/3.26.2/raven.min.js"
)

LOG_FILE = os.getenv("LOG_FILE", "app.log")
