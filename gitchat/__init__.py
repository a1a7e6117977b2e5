"""Config files, commit parsing and message formatting for a Git-based chat tool."""

__version__ = "0.0.1"

__all__ = [
    "commit",
    "config_data",
    "config_defaults",
    "config_key",
    "fs_utils",
    "node_visitor",
    "oid",
    "parse_config",
]