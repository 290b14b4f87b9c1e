"""
Shadow subcommands, one module per command.
"""
