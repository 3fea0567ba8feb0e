"""Git MCP Tools.

This package exposes git operations as MCP (Model Context Protocol) tools:

- git_add: Stage files
- git_commit: Commit all pending changes
- git_status: Describe the working tree
- git_branch_create / git_branch_list / git_branch_merge: Branch management
- git_log: Commit history
- git_checkout: Switch branches or restore files
- git_push: Push to a remote

Every tool takes the repository path as a parameter, so a single server
can work on any number of repositories.

Example usage:
    # Start the server on stdio
    $ git-mcp-tools

The tools can be discovered and called by any MCP-compatible client.
"""

__version__ = "0.1.0"
