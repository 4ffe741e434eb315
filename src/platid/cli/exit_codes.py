"""Process exit codes of the platid CLI."""

EXIT_SUCCESS = 0
# Unknown input in strict mode, or configuration errors
EXIT_ISSUES_FOUND = 1
EXIT_INVALID_USAGE = 3
