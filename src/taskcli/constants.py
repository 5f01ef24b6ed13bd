STATE_DIR_NAME = ".task"
STORE_FILENAME = "tasks.json"
BACKUP_SUFFIX = ".bak"
CONFIG_FILE = "config.yaml"

STATE_DIR_MODE = 0o700
STORE_FILE_MODE = 0o600

TITLE_MAX_LENGTH = 200
SLUG_MAX_LENGTH = 50
SLUG_FALLBACK = "untitled"
BRANCH_PREFIX = "feature/task-"

DEFAULT_LOG_LEVEL = "WARNING"
SKIP_CONFIRM_ENV = "TASKCLI_SKIP_CONFIRM"
