"""Pure domain workflows for playlist merging."""
