# ABOUTME: Click subcommands of the readershelf CLI.
# ABOUTME: Each module defines one command registered on the root group.
