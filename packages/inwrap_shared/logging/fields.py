"""Canonical logging field names shared by wrapper chain components."""

TIMESTAMP = "timestamp"
LEVEL = "level"
LOGGER = "logger"
MESSAGE = "message"
EXCEPTION = "exception"

# Chain conversion fields.
DIRECTION = "direction"
WRAPPER_CHAIN = "wrapper_chain"

# Common service-level fields.
SERVICE = "service"
ENVIRONMENT = "environment"
