import os

TEST_HOME_ENV = "CC_RUN_TEST_HOME"

LAUNCHER_CONFIG_DIRNAME = ".runcc"
LAUNCHER_CONFIG_FILENAME = "config.json"

CLAUDE_SETTINGS_DIRNAME = ".claude"
CLAUDE_SETTINGS_FILENAME = "settings.json"

DEFAULT_CLAUDE_BIN = os.getenv("CC_RUN_CLAUDE_BIN") or "claude"

DEFAULT_LOG_LEVEL = os.getenv("CC_RUN_LOG_LEVEL") or "WARNING"

DEFAULT_LOGS_DIR = os.getenv("CC_RUN_LOGS_PATH") or None

DEFAULT_ENCODING = "utf-8"

PASSTHROUGH_SEPARATOR = "--"

PERSIST_FLAG = "--claude"

MANAGEMENT_COMMANDS = ("list", "add", "remove", "token", "proxy")

ANTHROPIC_BASE_URL = "ANTHROPIC_BASE_URL"
ANTHROPIC_AUTH_TOKEN = "ANTHROPIC_AUTH_TOKEN"

MODEL_TIERS = ("haiku", "opus", "sonnet")

MODEL_ENV_KEYS = {tier: f"ANTHROPIC_DEFAULT_{tier.upper()}_MODEL" for tier in MODEL_TIERS}

ANTHROPIC_ENV_KEYS = (
    ANTHROPIC_AUTH_TOKEN,
    ANTHROPIC_BASE_URL,
    MODEL_ENV_KEYS["haiku"],
    MODEL_ENV_KEYS["sonnet"],
    MODEL_ENV_KEYS["opus"],
)

PROXY_ENV_KEYS = ("http_proxy", "https_proxy", "HTTP_PROXY", "HTTPS_PROXY")

# Tenacity constants
RESTORE_MAX_ATTEMPTS = int(os.getenv("CC_RUN_RESTORE_ATTEMPTS") or 3)
RESTORE_WAIT_SECONDS = float(os.getenv("CC_RUN_RESTORE_WAIT") or 0.2)
