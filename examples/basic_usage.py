#!/usr/bin/env python3
"""Basic usage example"""

from logging_wrapper import Configuration, Level, LogManager

def main():
    # Describe the logger declaratively
    config = Configuration.from_dict("example", {
        "logger_class": "console",
        "logger_name": "example",
        "colored": True,
        "filtered_levels": ["DEBUG"],
        "NamedMessages": {
            "user_login": {
                "text": "User {0} logged in from {1}",
                "parameters": ["user", "host"],
                "default_level": "INFO",
            },
        },
        "ExceptionLogger": {
            "logger_class": "file",
            "logger_name": "example.errors",
            "file": "logs/example_errors.log",
        },
    })

    # Build the backend wrapped in its level filter and exception boundary
    with LogManager().create_logger(config) as logger:
        logger.debug("This is filtered out")
        logger.info("Application started")
        logger.warn("Disk usage at {0}%", 91)
        logger.log(Level.SUCCESSAUDIT, "Audit passed for {0}", "alice")
        logger.log_named_message("user_login", "alice", "10.0.0.7")

        # Never raises: the failure goes to logs/example_errors.log
        logger.error("Missing parameter {0} {1}", "only one")

if __name__ == "__main__":
    main()
