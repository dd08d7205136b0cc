"""Project-wide constants for blame-status."""

CONFIG_FILE_NAME = ".blame-status.yaml"

DEFAULT_MESSAGE_FORMAT = "Blame ${author.name} ( ${time.ago} )"
DEFAULT_NO_COMMIT_MESSAGE = "Not Committed Yet"

DEFAULT_HASH_LENGTH = "7"
DEFAULT_SUMMARY_LENGTH = "65536"

BLANK_HASH = "0" * 40

ENV_MESSAGE_FORMAT = "BLAME_STATUS_MESSAGE_FORMAT"
ENV_MESSAGE_NO_COMMIT = "BLAME_STATUS_MESSAGE_NO_COMMIT"

# 9999-12-31T23:59:59Z, the last second a datetime can represent.
MAX_TIMESTAMP = 253402300799
