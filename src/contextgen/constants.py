"""Package-wide constants."""

PACKAGE_VERSION = "0.3.0"
CONFIG_SCHEMA_VERSION = 1
DEFAULT_IGNORE_FILE_NAME = ".gitignore"
ELLIPSIS_RELATIVE_PATH = "__ellipsis__"
