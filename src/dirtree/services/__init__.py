"""Services for dirtree."""
