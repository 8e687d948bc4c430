"""CLI tools for dirtree."""
